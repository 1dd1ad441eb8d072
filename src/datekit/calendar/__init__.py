# src/datekit/calendar/__init__.py
"""
datekit.calendar
~~~~~~~~~~~~~~~~

Gregorian calendar rules: instants to broken-down DateComponents and back,
plus week-based field queries.  The minimum number of days in the first
week is pinned to 4 for every calendar created here.

Basic usage::

    from datekit.calendar import shared_calendar, DateComponents

    cal = shared_calendar()
    info = cal.components(some_datetime)
    info.day = 31
    cal.date_from_components(info)                # lenient: may roll over
    cal.date_from_components(info, strict=True)   # None if no such day

Public API
----------
GregorianCalendar  Calendar bound to one timezone.
DateComponents     Mutable record of year/month/day/weekday/hour/minute/second.
CalendarProvider   Lazily built, shared calendar holder.
shared_calendar    The process-wide calendar.
calendar_for       A new, uncached calendar for an explicit timezone.
current_calendar   A new calendar for the current environment.
absolute_weekday   Weekday of a date, 1 = Sunday ... 7 = Saturday.
CalendarError      Base exception for all calendar-related errors.
"""

from __future__ import annotations

from datekit.calendar._exceptions import CalendarError
from datekit.calendar.calendar import GregorianCalendar, absolute_weekday, resolve_timezone
from datekit.calendar.components import DateComponents
from datekit.calendar.provider import (
    CalendarProvider,
    calendar_for,
    current_calendar,
    shared_calendar,
)

__all__ = [
    "GregorianCalendar",
    "DateComponents",
    "CalendarProvider",
    "shared_calendar",
    "calendar_for",
    "current_calendar",
    "resolve_timezone",
    "absolute_weekday",
    "CalendarError",
]
