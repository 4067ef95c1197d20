"""
base.py

PURPOSE: Abstract interface for session transcript storage.
DEPENDENCIES: None (pure Python + typing)

ARCHITECTURE NOTES:
The orchestrator only talks to this interface, so tests can hand it a
fake store and a future backend can replace the in-memory one.
A store is the sole owner of transcripts: callers read a whole
transcript and write a whole transcript back, never a piece of one.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ai_adventure.models.transcript import Transcript, Turn


class ConversationStore(ABC):
    """Keyed storage of story transcripts."""

    @abstractmethod
    def get(self, session_id: str) -> Transcript:
        """
        Return the transcript for a session.

        Unknown sessions are not an error: they read as an empty transcript.
        """
        ...

    @abstractmethod
    def put(self, session_id: str, transcript: Sequence[Turn]) -> None:
        """Replace the transcript for a session in one step."""
        ...

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """
        Forget a session.

        Returns:
            True if the session existed.
        """
        ...

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __contains__(self, session_id: object) -> bool: ...
