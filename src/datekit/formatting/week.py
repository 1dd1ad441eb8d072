from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union

from datekit.calendar import GregorianCalendar, current_calendar
from datekit.calendar.calendar import InstantLike
from .formatter import DateFormatter

logger = logging.getLogger(__name__)


# ── state machine ─────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Uninitialized:
    pass


@dataclass(frozen=True, slots=True)
class Configured:
    weekday: int


WeekFormatterState = Union[Uninitialized, Configured]

UNINITIALIZED = Uninitialized()


def transition(
    state: WeekFormatterState,
    requested: Optional[int],
    default: int,
) -> Configured:
    """
    Next state of the week formatter.

    The first use configures the default weekday.  After that the state
    only changes when a caller asks for a different first weekday;
    requested=None keeps whatever is configured.
    """
    if isinstance(state, Uninitialized):
        state = Configured(default)
    if requested is None or requested == state.weekday:
        return state
    return Configured(requested)


# ── shared week formatter ─────────────────────────────────────────────────────

class WeekNumbering:
    """
    One shared "ww" formatter whose calendar's first weekday is
    reconfigured in place, under the lock, whenever a caller asks for a
    different first weekday than the one currently configured.

    Calls without an explicit weekday use whatever the previous caller
    left configured.
    """

    PATTERN = "ww"

    def __init__(self, calendar_factory: Optional[Callable[[], GregorianCalendar]] = None) -> None:
        self._calendar_factory = calendar_factory or current_calendar
        self._lock = threading.Lock()
        self._state: WeekFormatterState = UNINITIALIZED
        self._formatter: Optional[DateFormatter] = None
        self._reconfigurations = 0

    def _ensure_formatter(self) -> DateFormatter:
        # lock held
        if self._formatter is None:
            calendar = self._calendar_factory()
            self._formatter = DateFormatter(self.PATTERN, calendar=calendar)
            self._state = transition(self._state, None, calendar.first_weekday)
            logger.debug("week formatter built, first weekday %d", calendar.first_weekday)
        return self._formatter

    def _configure(self, formatter: DateFormatter, requested: Optional[int]) -> None:
        # lock held
        target = transition(self._state, requested, formatter.calendar.first_weekday)
        if target == self._state:
            return
        calendar = formatter.calendar
        calendar.first_weekday = target.weekday
        formatter.calendar = calendar
        logger.debug("week formatter first weekday %s -> %d", self._state, target.weekday)
        self._state = target
        self._reconfigurations += 1

    def week_number_of_year(self, instant: InstantLike, first_weekday: Optional[int] = None) -> int:
        with self._lock:
            formatter = self._ensure_formatter()
            self._configure(formatter, first_weekday)
            return int(formatter.format(instant))

    @property
    def first_weekday(self) -> int:
        with self._lock:
            return self._ensure_formatter().calendar.first_weekday

    @property
    def state(self) -> WeekFormatterState:
        with self._lock:
            return self._state

    @property
    def reconfigurations(self) -> int:
        return self._reconfigurations

    def reset(self) -> None:
        """Drop the formatter; the next call rebuilds it with the default weekday."""
        with self._lock:
            self._formatter = None
            self._state = UNINITIALIZED
            self._reconfigurations = 0


week_numbering = WeekNumbering()


def week_number_of_year(instant: InstantLike, first_weekday: Optional[int] = None) -> int:
    return week_numbering.week_number_of_year(instant, first_weekday)


def first_weekday_used_for_week_number_formatter() -> int:
    return week_numbering.first_weekday
