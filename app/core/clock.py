"""Epoch-millisecond clock used for vendor identity and timestamps."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


def wall_millis() -> int:
    return time.time_ns() // 1_000_000


class MonotonicMillisClock:
    """Epoch-ms clock whose readings strictly increase within the process.

    Vendor ids are derived from the creation timestamp, so two readings in the
    same millisecond must not collide. When the wall clock has not advanced
    (or stepped backwards) the previous reading plus one is returned instead.
    """

    def __init__(self, source: Callable[[], int] = wall_millis):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = self._source()
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current

    __call__ = now


clock = MonotonicMillisClock()
