"""Single calendar fields of an instant, read through cached formatters."""
from __future__ import annotations

from datekit.calendar.calendar import InstantLike
from .cache import cached_formatter


def formatted(instant: InstantLike, pattern: str) -> str:
    formatter = cached_formatter(pattern)
    with formatter.lock:
        return formatter.format(instant)


def _number(instant: InstantLike, pattern: str) -> int:
    return int(formatted(instant, pattern))


def year_number(instant: InstantLike) -> int:
    return _number(instant, "yyyy")


def month_number(instant: InstantLike) -> int:
    return _number(instant, "MM")


def quarter_number(instant: InstantLike) -> int:
    return _number(instant, "q")


def week_number_of_month(instant: InstantLike) -> int:
    return _number(instant, "W")


def day_number_of_month(instant: InstantLike) -> int:
    return _number(instant, "dd")


def day_number_of_year(instant: InstantLike) -> int:
    return _number(instant, "DDD")


def day_number_of_week_in_month(instant: InstantLike) -> int:
    return _number(instant, "F")


def weekday_number(instant: InstantLike) -> int:
    """Position in the week, 1 for the configured first weekday."""
    return _number(instant, "e")


def hour_number(instant: InstantLike) -> int:
    return _number(instant, "HH")


def minute_number(instant: InstantLike) -> int:
    return _number(instant, "mm")


def second_number(instant: InstantLike) -> int:
    return _number(instant, "ss")


def month_name(instant: InstantLike) -> str:
    return formatted(instant, "MMMM")


def weekday_name(instant: InstantLike) -> str:
    return formatted(instant, "eeee")


def weekday_name_short(instant: InstantLike) -> str:
    return formatted(instant, "eee")
