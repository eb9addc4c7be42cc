"""In-memory request counter with fixed windows anchored at process start.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: sync endpoints run in a thread pool, so all state changes
  happen under one lock.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

from user_admin.adapters.rate_limit.base import AbstractRequestCounter

logger = logging.getLogger(__name__)

DAY_SECONDS = 24 * 60 * 60


class InMemoryRequestCounter(AbstractRequestCounter):
    """Counter whose value drops to zero once per ``reset_interval_seconds``.

    Windows are measured from construction time (process start), not from
    calendar midnight. The window is rolled lazily on every access and by the
    periodic reset task, and a window can only be rolled once, so the count is
    reset exactly once per window whichever of the two gets there first.
    """

    def __init__(
        self,
        *,
        reset_interval_seconds: int = DAY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the counter.

        Args:
            reset_interval_seconds: Window length in seconds (24h by default).
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If reset_interval_seconds is not positive.
        """
        if reset_interval_seconds < 1:
            raise ValueError("reset_interval_seconds must be >= 1")

        self._interval = reset_interval_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._started_at = clock()
        self._window_start = self._started_at
        self._count = 0
        self.resets = 0

    @property
    def reset_interval_seconds(self) -> int:
        return self._interval

    def _roll_locked(self, now: float) -> bool:
        if now < self._window_start + self._interval:
            return False
        elapsed_windows = int((now - self._started_at) // self._interval)
        self._window_start = self._started_at + elapsed_windows * self._interval
        previous = self._count
        self._count = 0
        self.resets += 1
        logger.info(
            "request_counter.reset",
            extra={"previous_count": previous, "resets": self.resets},
        )
        return True

    def increment(self) -> None:
        with self._lock:
            self._roll_locked(self._clock())
            self._count += 1

    def try_acquire(self, limit: int) -> bool:
        with self._lock:
            self._roll_locked(self._clock())
            if self._count >= limit:
                return False
            self._count += 1
            return True

    def get_count(self) -> int:
        with self._lock:
            self._roll_locked(self._clock())
            return self._count

    def rollover(self) -> bool:
        with self._lock:
            return self._roll_locked(self._clock())

    def seconds_until_reset(self) -> float:
        with self._lock:
            now = self._clock()
            self._roll_locked(now)
            return max(0.0, self._window_start + self._interval - now)

    def reset_at(self) -> int:
        with self._lock:
            self._roll_locked(self._clock())
            return int(math.ceil(self._window_start + self._interval))
