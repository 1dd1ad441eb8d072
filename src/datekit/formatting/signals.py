from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class MemoryPressureSignal:
    """
    Host-raised "low memory" notification.

    The library never fires it; the embedding application calls fire()
    whenever it wants cached formatters dropped.
    """

    def __init__(self, name: str = "memory-pressure") -> None:
        self.name = name
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        with self._lock:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def fire(self) -> int:
        with self._lock:
            listeners = list(self._listeners)
        logger.debug("%s fired, %d listener(s)", self.name, len(listeners))
        for listener in listeners:
            listener()
        return len(listeners)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)


memory_pressure = MemoryPressureSignal()
