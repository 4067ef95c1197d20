"""
transcript.py

PURPOSE: Turns and transcripts of a story conversation.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
A transcript is the ordered list of turns exchanged with the narrator
for one session. It is stored as an immutable tuple so a transcript
handed out by the store can never be edited in place; the orchestrator
builds a new tuple and puts it back.

The fixed system instruction is not a turn. It is sent alongside the
transcript on every call.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Who produced a turn."""

    USER = "user"
    MODEL = "model"


class Turn(BaseModel):
    """A single message in a story conversation."""

    role: Role
    text: str = Field(..., description="Player choice or narrator story text")

    model_config = {"frozen": True}


Transcript = tuple[Turn, ...]

EMPTY_TRANSCRIPT: Transcript = ()


def user_turn(text: str) -> Turn:
    """Build a turn spoken by the player."""
    return Turn(role=Role.USER, text=text)


def model_turn(text: str) -> Turn:
    """Build a turn spoken by the narrator."""
    return Turn(role=Role.MODEL, text=text)
