# src/datekit/__init__.py
"""
datekit
~~~~~~~

Calendar-aware date utilities with shared, lazily built calendars and
formatters.

Subpackages
-----------
datekit.calendar    Gregorian calendar, DateComponents, shared calendar.
datekit.formatting  Pattern formatters, their cache, week numbering.
datekit.dates       Month/day arithmetic and comparisons.
"""

from __future__ import annotations

from datekit.calendar import (
    CalendarError,
    DateComponents,
    GregorianCalendar,
    shared_calendar,
)
from datekit.dates import (
    add_days,
    add_months,
    add_years,
    date_information,
    date_with,
    days_between,
    first_of_month,
    is_after,
    is_before,
    is_same_day,
    is_today,
    last_of_month,
    months_between,
    next_month,
    prev_month,
    week_start,
)
from datekit.formatting import (
    FormatError,
    cached_formatter,
    memory_pressure,
    week_number_of_year,
)

__version__ = "0.1.0"

__all__ = [
    "CalendarError",
    "FormatError",
    "DateComponents",
    "GregorianCalendar",
    "shared_calendar",
    "cached_formatter",
    "memory_pressure",
    "week_number_of_year",
    "date_information",
    "date_with",
    "first_of_month",
    "last_of_month",
    "next_month",
    "prev_month",
    "week_start",
    "add_days",
    "add_months",
    "add_years",
    "months_between",
    "days_between",
    "is_before",
    "is_after",
    "is_today",
    "is_same_day",
]
