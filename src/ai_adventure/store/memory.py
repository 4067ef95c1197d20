"""
memory.py

PURPOSE: Thread-safe in-memory session store.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
One lock guards an ordered map of session id -> entry. The map is kept
in least-recently-used order (every get and put moves the key to the
end) so capacity eviction pops from the front.

Sessions never coordinate with each other, so a single lock held only
for dictionary work is enough; nothing slow happens while it is held.
Concurrent writes to the same session are last-writer-wins.
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass

from ai_adventure.models.transcript import EMPTY_TRANSCRIPT, Transcript, Turn
from ai_adventure.store.base import ConversationStore
from ai_adventure.store.eviction import EvictionPolicy, NoEviction

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    transcript: Transcript
    last_access: float


class InMemoryConversationStore(ConversationStore):
    """
    Conversation store backed by a dict.

    Contents are lost when the process exits.
    """

    def __init__(self, eviction: EvictionPolicy | None = None):
        """
        Initialize the store.

        Args:
            eviction: Policy for dropping idle or excess sessions.
                Defaults to keeping everything.
        """
        self._eviction = eviction or NoEviction()
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Transcript:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return EMPTY_TRANSCRIPT

            now = self._eviction.now()
            if self._eviction.is_expired(entry.last_access, now):
                del self._entries[session_id]
                logger.debug(f"Session {session_id} expired")
                return EMPTY_TRANSCRIPT

            entry.last_access = now
            self._entries.move_to_end(session_id)
            return entry.transcript

    def put(self, session_id: str, transcript: Sequence[Turn]) -> None:
        frozen = tuple(transcript)
        with self._lock:
            now = self._eviction.now()
            self._entries[session_id] = _Entry(transcript=frozen, last_access=now)
            self._entries.move_to_end(session_id)
            self._evict(now)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._entries.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        """
        Drop every expired session.

        Returns:
            Number of sessions removed.
        """
        with self._lock:
            return self._drop_expired(self._eviction.now())

    def __len__(self) -> int:
        with self._lock:
            self._drop_expired(self._eviction.now())
            return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            entry = self._entries.get(session_id)  # type: ignore[call-overload]
            if entry is None:
                return False
            return not self._eviction.is_expired(entry.last_access, self._eviction.now())

    def _evict(self, now: float) -> None:
        """Apply the eviction policy. Caller holds the lock."""
        self._drop_expired(now)
        for _ in range(self._eviction.excess(len(self._entries))):
            session_id, _entry = self._entries.popitem(last=False)
            logger.debug(f"Evicted least recently used session {session_id}")

    def _drop_expired(self, now: float) -> int:
        """Remove expired entries. Caller holds the lock."""
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if self._eviction.is_expired(entry.last_access, now)
        ]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            logger.debug(f"Dropped {len(expired)} expired sessions")
        return len(expired)
