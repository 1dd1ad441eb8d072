from __future__ import annotations

import threading
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, tzinfo
from typing import Optional, Union

from dateutil import tz as _tz
from dateutil.relativedelta import relativedelta

from datekit._settings import DEFAULT_FIRST_WEEKDAY, MINIMUM_DAYS_IN_FIRST_WEEK
from ._exceptions import CalendarError
from .components import DateComponents

TimezoneLike = Union[str, tzinfo, None]
InstantLike = Union[datetime, date]

_ONE_DAY = timedelta(days=1)

# Proleptic ordinal of 1 January of year 0 (a leap year), one step before MINYEAR.
_YEAR_ZERO_JAN1 = 1 - 366


def resolve_timezone(timezone: TimezoneLike) -> tzinfo:
    """None -> host local zone, str -> tz database lookup, tzinfo -> as is."""
    if timezone is None:
        return _tz.tzlocal()
    if isinstance(timezone, str):
        zone = _tz.gettz(timezone)
        if zone is None:
            raise CalendarError(f"Unknown timezone {timezone!r}.")
        return zone
    return timezone


def _ordinal_weekday(ordinal: int) -> int:
    # ordinal 1 (0001-01-01) is a Monday
    return ordinal % 7 + 1


def absolute_weekday(day: date) -> int:
    """1 = Sunday ... 7 = Saturday, whatever the first weekday."""
    return _ordinal_weekday(day.toordinal())


def check_weekday(weekday: int) -> int:
    if not 1 <= weekday <= 7:
        raise CalendarError(f"First weekday must be in 1..7; got {weekday}.")
    return int(weekday)


class GregorianCalendar:
    """
    Gregorian calendar bound to one timezone.

    Converts instants to DateComponents and back, and answers the
    week-based field queries the formatters need.  The minimum number of
    days in the first week of a year (or month) is always 4; the first
    weekday is configurable and is the only mutable state, guarded by the
    calendar's lock.  A frozen calendar (the shared one) rejects changes.
    """

    _MINIMUM_DAYS_IN_FIRST_WEEK: int = MINIMUM_DAYS_IN_FIRST_WEEK

    def __init__(
        self,
        timezone: TimezoneLike = None,
        first_weekday: int = DEFAULT_FIRST_WEEKDAY,
    ) -> None:
        self._tz: tzinfo = resolve_timezone(timezone)
        self._first_weekday: int = check_weekday(first_weekday)
        self._lock = threading.RLock()
        self._frozen = False

    # ── configuration ────────────────────────────────────────────────────

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    @property
    def minimum_days_in_first_week(self) -> int:
        return self._MINIMUM_DAYS_IN_FIRST_WEEK

    @property
    def first_weekday(self) -> int:
        with self._lock:
            return self._first_weekday

    @first_weekday.setter
    def first_weekday(self, weekday: int) -> None:
        weekday = check_weekday(weekday)
        if self._frozen:
            raise CalendarError("A frozen calendar cannot be reconfigured.")
        with self._lock:
            self._first_weekday = weekday

    # ── instants <-> components ──────────────────────────────────────────

    def localize(self, instant: InstantLike) -> datetime:
        """Aware datetime in this calendar's zone; naive input is wall time here."""
        if not isinstance(instant, datetime):
            instant = datetime(instant.year, instant.month, instant.day)
        if instant.tzinfo is None:
            return _tz.resolve_imaginary(instant.replace(tzinfo=self._tz))
        return instant.astimezone(self._tz)

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def components(self, instant: InstantLike) -> DateComponents:
        with self._lock:
            local = self.localize(instant)
            return DateComponents(
                year=local.year,
                month=local.month,
                day=local.day,
                weekday=absolute_weekday(local),
                hour=local.hour,
                minute=local.minute,
                second=local.second,
            )

    def date_from_components(
        self,
        components: DateComponents,
        *,
        strict: bool = False,
    ) -> Optional[datetime]:
        """
        Rebuild an instant from components.

        Lenient mode rolls overflowing fields forward (day 31 of April is
        1 May, month 13 is January of the next year).  Strict mode rejects
        any field outside its natural range.  Either way None is returned
        when no instant can be produced.
        """
        c = components
        with self._lock:
            if strict:
                try:
                    naive = datetime(c.year, c.month, c.day, c.hour, c.minute, c.second)
                except (ValueError, OverflowError):
                    return None
            else:
                years, month0 = divmod(c.month - 1, 12)
                try:
                    naive = datetime(c.year + years, month0 + 1, 1) + timedelta(
                        days=c.day - 1, hours=c.hour, minutes=c.minute, seconds=c.second
                    )
                except (ValueError, OverflowError):
                    return None
            try:
                return self.localize(naive)
            except OverflowError:
                return None

    # ── offsets ──────────────────────────────────────────────────────────

    def add(
        self,
        instant: InstantLike,
        *,
        days: int = 0,
        months: int = 0,
        years: int = 0,
    ) -> datetime:
        """Wall-clock offset; month and year steps clamp to the month's end."""
        with self._lock:
            local = self.localize(instant)
            try:
                shifted = local + relativedelta(years=years, months=months, days=days)
            except (ValueError, OverflowError) as exc:
                raise CalendarError(f"Date out of range: {exc}") from exc
            return _tz.resolve_imaginary(shifted)

    def days_between(self, start: InstantLike, end: InstantLike) -> int:
        """Whole days from start to end, truncated toward zero."""
        with self._lock:
            a = self.localize(start).replace(tzinfo=None)
            b = self.localize(end).replace(tzinfo=None)
        days, rest = divmod(b - a, _ONE_DAY)
        if days < 0 and rest:
            days += 1
        return days

    # ── week-based fields ────────────────────────────────────────────────

    def _relative_weekday(self, day: date) -> int:
        # 0 for the first weekday, 6 for the last
        return (absolute_weekday(day) - self._first_weekday) % 7

    def _week_one_start(self, year: int) -> int:
        jan1 = date(year, 1, 1).toordinal() if year >= MINYEAR else _YEAR_ZERO_JAN1
        offset = (_ordinal_weekday(jan1) - self._first_weekday) % 7
        if 7 - offset >= self._MINIMUM_DAYS_IN_FIRST_WEEK:
            return jan1 - offset
        return jan1 + 7 - offset

    def _week_of_year(self, day: date) -> tuple[int, int]:
        ordinal = day.toordinal()
        year = day.year
        start = self._week_one_start(year)
        if ordinal < start:
            year -= 1
            start = self._week_one_start(year)
        elif year < MAXYEAR and ordinal >= self._week_one_start(year + 1):
            year += 1
            start = self._week_one_start(year)
        return year, (ordinal - start) // 7 + 1

    def week_of_year(self, instant: InstantLike) -> int:
        with self._lock:
            return self._week_of_year(self.localize(instant).date())[1]

    def year_for_week_of_year(self, instant: InstantLike) -> int:
        with self._lock:
            return self._week_of_year(self.localize(instant).date())[0]

    def week_of_month(self, instant: InstantLike) -> int:
        """May be 0 when the month opens with a short partial week."""
        with self._lock:
            local = self.localize(instant).date()
            offset = self._relative_weekday(local.replace(day=1))
            week = (local.day - 1 + offset) // 7
            if 7 - offset >= self._MINIMUM_DAYS_IN_FIRST_WEEK:
                week += 1
            return week

    def local_weekday(self, instant: InstantLike) -> int:
        """1 for the configured first weekday, 7 for the last day of the week."""
        with self._lock:
            return self._relative_weekday(self.localize(instant)) + 1

    def day_of_year(self, instant: InstantLike) -> int:
        return self.localize(instant).timetuple().tm_yday

    def day_of_week_in_month(self, instant: InstantLike) -> int:
        return (self.localize(instant).day - 1) // 7 + 1

    def quarter(self, instant: InstantLike) -> int:
        return (self.localize(instant).month - 1) // 3 + 1

    def __repr__(self) -> str:
        return (
            f"GregorianCalendar(timezone={self._tz!r}, "
            f"first_weekday={self._first_weekday}, "
            f"minimum_days_in_first_week={self._MINIMUM_DAYS_IN_FIRST_WEEK})"
        )
