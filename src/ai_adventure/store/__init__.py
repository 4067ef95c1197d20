"""Session transcript storage."""

from ai_adventure.store.base import ConversationStore
from ai_adventure.store.eviction import (
    EvictionPolicy,
    LRUEviction,
    NoEviction,
    eviction_from_limits,
)
from ai_adventure.store.memory import InMemoryConversationStore

__all__ = [
    "ConversationStore",
    "EvictionPolicy",
    "InMemoryConversationStore",
    "LRUEviction",
    "NoEviction",
    "eviction_from_limits",
]
