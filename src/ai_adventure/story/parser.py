"""
parser.py

PURPOSE: Strict parsing of the narrator's text into a StoryReply.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
The generator's output is untrusted text. The only leniency is removing
one markdown code fence wrapped around the whole reply, which models add
out of habit. Anything else that is not exactly a StoryReply object is
rejected with MalformedReplyError; missing fields are never defaulted.
"""

import json
import logging
import re

from pydantic import ValidationError

from ai_adventure.models.reply import StoryReply
from ai_adventure.story.errors import MalformedReplyError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"\A```[a-zA-Z]*[ \t]*\n(?P<body>.*)\n```\Z", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a single code fence surrounding the whole text, if present."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    if match:
        return match.group("body").strip()
    return stripped


def parse_story_reply(raw: str) -> StoryReply:
    """
    Parse narrator output into a StoryReply.

    Args:
        raw: Text returned by the LLM.

    Returns:
        The validated reply.

    Raises:
        MalformedReplyError: If the text is not a JSON object matching the reply schema.
    """
    text = strip_code_fence(raw)
    if not text:
        raise MalformedReplyError("Narrator returned an empty reply")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Narrator reply is not JSON ({e}): {text[:200]}")
        raise MalformedReplyError(f"Narrator reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedReplyError(
            f"Narrator reply must be a JSON object, got {type(data).__name__}"
        )

    try:
        return StoryReply.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Narrator reply failed validation: {e.error_count()} errors")
        raise MalformedReplyError(f"Narrator reply does not match the story schema: {e}") from e
