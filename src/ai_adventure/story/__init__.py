"""Story protocol: narrator prompts, reply parsing and orchestration."""

from ai_adventure.story.errors import (
    InvalidRequestError,
    MalformedReplyError,
    StoryError,
    UpstreamUnavailableError,
)
from ai_adventure.story.orchestrator import StoryOrchestrator
from ai_adventure.story.parser import parse_story_reply
from ai_adventure.story.prompts import OPENING_PROMPT, SYSTEM_PROMPT_TEMPLATE, build_system_prompt

__all__ = [
    "InvalidRequestError",
    "MalformedReplyError",
    "OPENING_PROMPT",
    "SYSTEM_PROMPT_TEMPLATE",
    "StoryError",
    "StoryOrchestrator",
    "UpstreamUnavailableError",
    "build_system_prompt",
    "parse_story_reply",
]
