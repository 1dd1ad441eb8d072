from __future__ import annotations

from datekit.calendar import current_calendar, shared_calendar
from datekit.calendar.calendar import InstantLike


def is_before(instant: InstantLike, other: InstantLike) -> bool:
    cal = shared_calendar()
    return cal.localize(instant) < cal.localize(other)


def is_after(instant: InstantLike, other: InstantLike) -> bool:
    cal = shared_calendar()
    return cal.localize(instant) > cal.localize(other)


def is_same_day(instant: InstantLike, other: InstantLike) -> bool:
    cal = current_calendar()
    return cal.components(instant).same_day(cal.components(other))


def is_today(instant: InstantLike) -> bool:
    cal = current_calendar()
    return cal.components(instant).same_day(cal.components(cal.now()))
