"""Request counter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRequestCounter(ABC):
    """A process-wide request count that starts over at every window boundary.

    Callers admit work through ``try_acquire(limit)``, which checks the limit
    and records the request in one atomic step.
    """

    @abstractmethod
    def increment(self) -> None:
        """Atomically add one to the current window's count."""
        raise NotImplementedError

    @abstractmethod
    def try_acquire(self, limit: int) -> bool:
        """Count one request unless the current window already holds ``limit``.

        Returns:
            True if the request was counted, False if the limit is reached.
        """
        raise NotImplementedError

    @abstractmethod
    def get_count(self) -> int:
        """Return the current window's count (0 when nothing was recorded)."""
        raise NotImplementedError

    @abstractmethod
    def rollover(self) -> bool:
        """Start a new window if the current one has elapsed.

        Returns:
            True if the count was reset by this call.
        """
        raise NotImplementedError

    @abstractmethod
    def seconds_until_reset(self) -> float:
        """Seconds left in the current window."""
        raise NotImplementedError

    @abstractmethod
    def reset_at(self) -> int:
        """UNIX epoch seconds at which the current window ends."""
        raise NotImplementedError
