from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True)
class DateComponents:
    """
    Broken-down calendar fields of an instant.

    No range checks are applied: a record may describe an impossible date
    (e.g. 31 February).  Validity is only decided when the record is turned
    back into an instant by a calendar.

    ``weekday`` counts 1 = Sunday ... 7 = Saturday.
    """

    year: int = 1
    month: int = 1
    day: int = 1
    weekday: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    def replace(self, **changes: int) -> DateComponents:
        return replace(self, **changes)

    def with_time_zeroed(self) -> DateComponents:
        return replace(self, hour=0, minute=0, second=0)

    def same_day(self, other: DateComponents) -> bool:
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)
