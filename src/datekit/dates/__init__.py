# src/datekit/dates/__init__.py
"""
datekit.dates
~~~~~~~~~~~~~

Calendar arithmetic and comparison on plain ``datetime`` instants, computed
on the process-wide shared calendar.

Basic usage::

    from datetime import datetime
    from datekit.dates import next_month, last_of_month, days_between

    next_month(datetime(2023, 1, 31))                        # -> 2023-02-28
    last_of_month(datetime(2024, 2, 1))                      # -> 2024-02-29
    days_between(datetime(2024, 1, 1), datetime(2024, 1, 10))  # -> 9

NumPy arrays are accepted by ``days_between`` and ``add_days``::

    import numpy as np
    starts = np.array([datetime(2024, 1, 1), datetime(2024, 3, 1)])
    days_between(starts, datetime(2024, 12, 31))             # -> array([365, 305])

Public API
----------
Boundaries   first_of_month, last_of_month, next_month, prev_month, week_start
Offsets      add_days, add_months, add_years
Distances    months_between, days_between
Components   date_information, date_with_information, date_with
Replacement  with_year_replaced, with_seconds_replaced, with_time_zeroed,
             with_time_replaced
Comparison   is_before, is_after, is_today, is_same_day
"""

from __future__ import annotations

from datekit.dates.arithmetic import (
    add_days,
    add_months,
    add_years,
    date_information,
    date_with,
    date_with_information,
    days_between,
    first_of_month,
    last_of_month,
    months_between,
    next_month,
    prev_month,
    week_start,
    with_seconds_replaced,
    with_time_replaced,
    with_time_zeroed,
    with_year_replaced,
)
from datekit.dates.compare import is_after, is_before, is_same_day, is_today

__all__ = [
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
    "date_information",
    "date_with_information",
    "date_with",
    "with_year_replaced",
    "with_seconds_replaced",
    "with_time_zeroed",
    "with_time_replaced",
    "is_before",
    "is_after",
    "is_today",
    "is_same_day",
]
