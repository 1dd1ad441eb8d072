from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

import numpy as np

from datekit.calendar import (
    CalendarError,
    DateComponents,
    calendar_for,
    shared_calendar,
)
from datekit.calendar.calendar import InstantLike, TimezoneLike, check_weekday
from datekit.formatting import cached_formatter, month_number, year_number
from .compare import is_after

InstantArray = Union[InstantLike, "np.ndarray"]
IntArray = Union[int, "np.ndarray"]


# ── components ───────────────────────────────────────────────────────────────

def date_information(instant: InstantLike, timezone: TimezoneLike = None) -> DateComponents:
    """Components on the shared calendar, or on a separate one for an explicit zone."""
    cal = shared_calendar() if timezone is None else calendar_for(timezone)
    return cal.components(instant)


def date_with_information(
    components: DateComponents,
    timezone: TimezoneLike = None,
) -> Optional[datetime]:
    cal = shared_calendar() if timezone is None else calendar_for(timezone)
    return cal.date_from_components(components)


def _rebuild(components: DateComponents) -> datetime:
    result = shared_calendar().date_from_components(components)
    if result is None:
        raise CalendarError(f"No representable date for {components}.")
    return result


def date_with(
    year: int,
    month: int,
    day: int,
    hour: Optional[int] = None,
    minute: Optional[int] = None,
    second: Optional[int] = None,
) -> Optional[datetime]:
    """Midnight (or the given time) of a calendar day; None if there is no such day."""
    if hour is None and minute is None and second is None:
        formatter = cached_formatter("yyyy-MM-dd")
        text = f"{year:04d}-{month:02d}-{day:02d}"
    else:
        formatter = cached_formatter("yyyy-MM-dd HH:mm:ss")
        text = f"{year:04d}-{month:02d}-{day:02d} {hour or 0:02d}:{minute or 0:02d}:{second or 0:02d}"
    with formatter.lock:
        return formatter.parse(text)


# ── month boundaries ─────────────────────────────────────────────────────────

def first_of_month(instant: InstantLike) -> datetime:
    info = date_information(instant)
    return _rebuild(info.replace(day=1).with_time_zeroed())


def last_of_month(instant: InstantLike) -> datetime:
    """
    Midnight of the month's last day.  Days 31 down to 28 are tried in
    turn; the first one the calendar keeps unchanged is the month's end.
    """
    cal = shared_calendar()
    info = cal.components(instant).with_time_zeroed()
    candidate: Optional[datetime] = None
    for day in range(31, 27, -1):
        candidate = cal.date_from_components(info.replace(day=day))
        if candidate is not None and candidate.day == day:
            return candidate
    if candidate is None:
        raise CalendarError(f"No representable date for {info}.")
    return candidate


def _shift_month(instant: InstantLike, step: int) -> datetime:
    info = date_information(instant)
    info.month += step
    if info.month > 12:
        info.month = 1
        info.year += 1
    elif info.month < 1:
        info.month = 12
        info.year -= 1
    target = info.month
    result = _rebuild(info)
    if result.month != target:
        # day overflowed into the following month: clamp to the target's end
        return last_of_month(prev_month(first_of_month(result)))
    return result


def next_month(instant: InstantLike) -> datetime:
    return _shift_month(instant, 1)


def prev_month(instant: InstantLike) -> datetime:
    return _shift_month(instant, -1)


def week_start(instant: InstantLike, first_weekday: int) -> datetime:
    """Same time of day on the most recent first_weekday (1 = Sunday) at or before instant."""
    first_weekday = check_weekday(first_weekday)
    info = date_information(instant)
    return add_days(instant, -((info.weekday - first_weekday + 7) % 7))


# ── offsets ──────────────────────────────────────────────────────────────────

def add_days(instant: InstantArray, days: IntArray) -> Union[datetime, np.ndarray]:
    """
    Shift by whole days.  Scalars return a datetime; array-likes are
    broadcast against each other and return an object array.
    """
    cal = shared_calendar()
    if np.ndim(instant) == 0 and np.ndim(days) == 0:
        return cal.add(instant, days=int(days))

    starts, offsets = np.broadcast_arrays(
        np.asarray(instant, dtype=object), np.asarray(days, dtype=object)
    )
    result = np.empty(starts.shape, dtype=object)
    for idx in np.ndindex(starts.shape):
        result[idx] = cal.add(starts[idx], days=int(offsets[idx]))
    return result


def add_months(instant: InstantLike, months: int) -> datetime:
    return shared_calendar().add(instant, months=months)


def add_years(instant: InstantLike, years: int) -> datetime:
    return shared_calendar().add(instant, years=years)


# ── distances ────────────────────────────────────────────────────────────────

def months_between(instant: InstantLike, other: Optional[InstantLike]) -> int:
    """
    Month count between two instants, independent of argument order.

    Counting is inclusive of both end months when the later month is past
    the earlier one (Jan -> Mar of the same year is 3), wraps through the
    year end otherwise (Nov -> Feb is 4), and a same-month pair in
    different years adds a flat 12.
    """
    if other is None:
        return 0

    first, last = (other, instant) if is_after(instant, other) else (instant, other)
    start_year, end_year = year_number(first), year_number(last)
    start_month, end_month = month_number(first), month_number(last)

    total = 0
    if end_year - start_year > 1:
        total += (end_year - start_year - 1) * 12
    if end_month > start_month:
        total += end_month - start_month + 1
        if end_year > start_year:
            total += 12
    elif end_month < start_month:
        total += 12 - (start_month - end_month - 1)
    elif end_year > start_year:
        total += 12
    return total


def days_between(
    instant: InstantArray,
    other: Optional[InstantArray],
) -> IntArray:
    """
    Signed whole days from instant to other (negative if other is earlier).
    A missing other counts as no distance.  Array-likes broadcast and
    return an int64 array.
    """
    if other is None:
        return 0
    cal = shared_calendar()
    if np.ndim(instant) == 0 and np.ndim(other) == 0:
        return cal.days_between(instant, other)

    starts, ends = np.broadcast_arrays(
        np.asarray(instant, dtype=object), np.asarray(other, dtype=object)
    )
    result = np.zeros(starts.shape, dtype=np.int64)
    for idx in np.ndindex(starts.shape):
        if starts[idx] is not None and ends[idx] is not None:
            result[idx] = cal.days_between(starts[idx], ends[idx])
    return result


# ── replacement ──────────────────────────────────────────────────────────────

def with_year_replaced(instant: InstantLike, year: int) -> Optional[datetime]:
    """None when the day does not exist in that year (29 February)."""
    info = date_information(instant).replace(year=year)
    return shared_calendar().date_from_components(info, strict=True)


def with_seconds_replaced(instant: InstantLike, seconds: int) -> Optional[datetime]:
    """None for seconds outside 0..59."""
    info = date_information(instant).replace(second=seconds)
    return shared_calendar().date_from_components(info, strict=True)


def with_time_zeroed(instant: InstantLike) -> datetime:
    return _rebuild(date_information(instant).with_time_zeroed())


def with_time_replaced(instant: InstantLike, time: InstantLike) -> datetime:
    """Calendar day of instant combined with the time of day of time."""
    clock = date_information(time)
    info = date_information(instant).replace(
        hour=clock.hour, minute=clock.minute, second=clock.second
    )
    return _rebuild(info)
