from __future__ import annotations

import logging
import threading
from typing import Optional

from datekit._once import Once
from .formatter import DateFormatter, FormatterFactory
from .signals import MemoryPressureSignal, memory_pressure

logger = logging.getLogger(__name__)


class FormatCache:
    """
    Pattern -> DateFormatter map, shared between threads.

    Formatters are expensive to build (pattern compilation, calendar and
    timezone lookup), so each pattern is compiled once and reused.  The
    whole map is dropped when the memory-pressure signal fires; the
    subscription is made once, on first use.
    """

    def __init__(
        self,
        signal: Optional[MemoryPressureSignal] = None,
        factory: Optional[FormatterFactory] = None,
    ) -> None:
        self._signal = signal if signal is not None else memory_pressure
        self._factory: FormatterFactory = factory or DateFormatter
        self._lock = threading.Lock()
        self._formatters: dict[str, DateFormatter] = {}
        self._subscription: Once[bool] = Once(self._subscribe)

    def _subscribe(self) -> bool:
        self._signal.subscribe(self.clear)
        logger.debug("format cache subscribed to %s", self._signal.name)
        return True

    def get(self, pattern: str) -> DateFormatter:
        self._subscription.get()
        with self._lock:
            formatter = self._formatters.get(pattern)
            if formatter is None:
                formatter = self._factory(pattern)
                self._formatters[pattern] = formatter
                logger.debug("formatter built for pattern %r", pattern)
            return formatter

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._formatters)
            self._formatters.clear()
        logger.debug("format cache cleared, %d formatter(s) dropped", dropped)

    @property
    def subscribed(self) -> bool:
        return self._subscription.initialized

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._formatters

    def __len__(self) -> int:
        with self._lock:
            return len(self._formatters)

    def __repr__(self) -> str:
        with self._lock:
            patterns = sorted(self._formatters)
        return f"FormatCache(patterns={patterns}, subscribed={self.subscribed})"


default_cache = FormatCache()


def cached_formatter(pattern: str) -> DateFormatter:
    return default_cache.get(pattern)
