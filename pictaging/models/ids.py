"""Collision-free identifier generation."""

from __future__ import annotations

import time
from collections.abc import Callable
from threading import Lock


class IdGenerator:
    """Produce millisecond-clock identifiers that never repeat in a process.

    When two ids are requested within the same millisecond (or the clock moves
    backwards) the previous value is bumped by one instead.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = Lock()

    def next_id(self, prefix: str = "") -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
        return f"{prefix}{candidate}"


default_ids = IdGenerator()
