"""Discussion id allocation."""
from __future__ import annotations

import threading
import time
from typing import Callable


class DiscussionIdGenerator:
    """Hands out millisecond timestamps, bumped so ids never repeat in-process.

    Two questions posted within the same clock tick (or after the clock steps
    backwards) get consecutive ids instead of the same one.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
