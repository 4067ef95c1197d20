"""Domain models for story conversations."""

from ai_adventure.models.reply import MAX_CHOICES, STORY_REPLY_SCHEMA, StoryReply
from ai_adventure.models.transcript import (
    EMPTY_TRANSCRIPT,
    Role,
    Transcript,
    Turn,
    model_turn,
    user_turn,
)

__all__ = [
    "EMPTY_TRANSCRIPT",
    "MAX_CHOICES",
    "Role",
    "STORY_REPLY_SCHEMA",
    "StoryReply",
    "Transcript",
    "Turn",
    "model_turn",
    "user_turn",
]
