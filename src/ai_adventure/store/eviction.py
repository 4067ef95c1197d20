"""
eviction.py

PURPOSE: Policies deciding when the session store forgets a session.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
The store asks the policy two questions: has this entry been idle too
long, and how many entries over capacity are we. It does the actual
removal itself, oldest first. NoEviction keeps every session for the
process lifetime.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable


class EvictionPolicy(ABC):
    """Decides which sessions the store may drop."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    def now(self) -> float:
        """Current time on the policy's clock."""
        return self._clock()

    @abstractmethod
    def is_expired(self, last_access: float, now: float) -> bool:
        """Whether an entry last touched at last_access should be dropped."""
        ...

    @abstractmethod
    def excess(self, size: int) -> int:
        """How many of the least recently used entries to drop at this size."""
        ...


class NoEviction(EvictionPolicy):
    """Keep every session until the process exits."""

    def is_expired(self, last_access: float, now: float) -> bool:  # noqa: ARG002
        return False

    def excess(self, size: int) -> int:  # noqa: ARG002
        return 0


class LRUEviction(EvictionPolicy):
    """
    Bound the store by session count and/or idle time.

    Either limit may be None to disable it.
    """

    def __init__(
        self,
        max_sessions: int | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the policy.

        Args:
            max_sessions: Keep at most this many sessions.
            ttl_seconds: Drop sessions not read or written for this long.
            clock: Monotonic time source, injectable for tests.
        """
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        super().__init__(clock)
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds

    def is_expired(self, last_access: float, now: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return now - last_access > self.ttl_seconds

    def excess(self, size: int) -> int:
        if self.max_sessions is None:
            return 0
        return max(0, size - self.max_sessions)


def eviction_from_limits(
    max_sessions: int | None,
    ttl_seconds: float | None,
) -> EvictionPolicy:
    """Pick a policy for the configured limits."""
    if max_sessions is None and ttl_seconds is None:
        return NoEviction()
    return LRUEviction(max_sessions=max_sessions, ttl_seconds=ttl_seconds)
