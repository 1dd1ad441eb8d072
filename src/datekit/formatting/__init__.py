# src/datekit/formatting/__init__.py
"""
datekit.formatting
~~~~~~~~~~~~~~~~~~

Date formatters for Unicode LDML patterns, a shared cache of them, and
week-of-year numbering with a configurable first weekday.

Basic usage::

    from datekit.formatting import cached_formatter, memory_pressure

    fmt = cached_formatter("yyyy-MM-dd")      # built once per pattern
    fmt.format(some_datetime)                 # -> "2024-02-29"
    fmt.parse("2023-02-30")                   # -> None (no such day)

    memory_pressure.fire()                    # host signal: drop cached formatters

Week numbers::

    from datekit.formatting import week_number_of_year

    week_number_of_year(some_datetime)                   # current first weekday
    week_number_of_year(some_datetime, first_weekday=2)  # Monday-based weeks

Public API
----------
DateFormatter        Formatter/parser for one pattern.
FormatCache          Thread-safe pattern -> formatter map.
cached_formatter     Formatter from the process-wide cache.
MemoryPressureSignal Host notification that clears subscribed caches.
WeekNumbering        Shared, reconfigurable week-of-year formatter.
FormatError          Raised for patterns that cannot be compiled.
"""

from __future__ import annotations

from datekit.formatting._exceptions import FormatError
from datekit.formatting.cache import FormatCache, cached_formatter, default_cache
from datekit.formatting.fields import (
    day_number_of_month,
    day_number_of_week_in_month,
    day_number_of_year,
    formatted,
    hour_number,
    minute_number,
    month_name,
    month_number,
    quarter_number,
    second_number,
    week_number_of_month,
    weekday_name,
    weekday_name_short,
    weekday_number,
    year_number,
)
from datekit.formatting.formatter import DateFormatter
from datekit.formatting.signals import MemoryPressureSignal, memory_pressure
from datekit.formatting.week import (
    WeekNumbering,
    first_weekday_used_for_week_number_formatter,
    week_number_of_year,
    week_numbering,
)

__all__ = [
    "DateFormatter",
    "FormatCache",
    "cached_formatter",
    "default_cache",
    "MemoryPressureSignal",
    "memory_pressure",
    "WeekNumbering",
    "week_numbering",
    "week_number_of_year",
    "first_weekday_used_for_week_number_formatter",
    "formatted",
    "year_number",
    "month_number",
    "quarter_number",
    "week_number_of_month",
    "day_number_of_month",
    "day_number_of_year",
    "day_number_of_week_in_month",
    "weekday_number",
    "hour_number",
    "minute_number",
    "second_number",
    "month_name",
    "weekday_name",
    "weekday_name_short",
    "FormatError",
]
