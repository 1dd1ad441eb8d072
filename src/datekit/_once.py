from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Once(Generic[T]):
    """
    Lazily built value guarded by a lock.

    The factory runs exactly once, by the first caller.  Concurrent first
    callers block on the lock and then observe the finished value.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._done = False

    def get(self) -> T:
        if self._done:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._done:
                self._value = self._factory()
                self._done = True
        return self._value  # type: ignore[return-value]

    @property
    def initialized(self) -> bool:
        return self._done

    def reset(self) -> None:
        with self._lock:
            self._value = None
            self._done = False
