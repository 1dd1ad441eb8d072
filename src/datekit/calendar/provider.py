from __future__ import annotations

import logging
from typing import Callable, Optional

from datekit._once import Once
from datekit._settings import get_settings
from .calendar import GregorianCalendar, TimezoneLike

logger = logging.getLogger(__name__)

CalendarFactory = Callable[[], GregorianCalendar]


def _default_factory() -> GregorianCalendar:
    settings = get_settings()
    return GregorianCalendar(settings.timezone, first_weekday=settings.first_weekday)


class CalendarProvider:
    """
    Owner of one lazily built, shared calendar.

    The calendar is constructed by the first call to get(); every later
    (or concurrent) caller receives the same instance.  It is frozen on
    construction, so its first weekday cannot be changed afterwards.
    """

    def __init__(self, factory: Optional[CalendarFactory] = None) -> None:
        self._factory: CalendarFactory = factory or _default_factory
        self._constructions = 0
        self._cell: Once[GregorianCalendar] = Once(self._build)

    def _build(self) -> GregorianCalendar:
        calendar = self._factory()
        calendar.freeze()
        self._constructions += 1
        logger.debug("shared calendar built: %r", calendar)
        return calendar

    def get(self) -> GregorianCalendar:
        return self._cell.get()

    @property
    def constructions(self) -> int:
        return self._constructions

    @property
    def initialized(self) -> bool:
        return self._cell.initialized


_provider = CalendarProvider()


def shared_calendar() -> GregorianCalendar:
    """Process-wide calendar used by the arithmetic helpers."""
    return _provider.get()


def calendar_for(timezone: TimezoneLike) -> GregorianCalendar:
    """Separate, uncached calendar for work in an explicit timezone."""
    return GregorianCalendar(timezone, first_weekday=get_settings().first_weekday)


def current_calendar() -> GregorianCalendar:
    """Fresh calendar for the current environment, independent of the shared one."""
    return _default_factory()
