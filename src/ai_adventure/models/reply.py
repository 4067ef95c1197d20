"""
reply.py

PURPOSE: The structured reply the narrator returns on every turn.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
StoryReply is both the generator's output contract and the HTTP response
body. Field names on the wire are camelCase (storyText, choices,
isEnding). Validation is strict: unknown keys are rejected and nothing
is coerced, so "false" is not a boolean and a missing field is an error
rather than a default.
"""

from typing import Annotated

from pydantic import BaseModel, Field

MAX_CHOICES = 3


class StoryReply(BaseModel):
    """
    One beat of the story.

    Only story_text is kept in the transcript; choices and is_ending are
    returned to the client and then forgotten.
    """

    story_text: str = Field(
        ...,
        alias="storyText",
        min_length=1,
        description="Narration shown to the player",
    )
    choices: list[Annotated[str, Field(min_length=1)]] = Field(
        ...,
        max_length=MAX_CHOICES,
        description="Options the player can pick from, in display order",
    )
    is_ending: bool = Field(
        ...,
        alias="isEnding",
        description="Whether the story has reached its conclusion",
    )

    model_config = {"strict": True, "extra": "forbid", "frozen": True}

    def to_wire(self) -> dict[str, object]:
        """Serialize with the camelCase wire names."""
        return self.model_dump(by_alias=True)

    def as_ending(self) -> "StoryReply":
        """Return a copy of this reply marked as the end of the story."""
        return self.model_copy(update={"is_ending": True, "choices": []})


# JSON schema of the reply, embedded in the narrator's instructions
STORY_REPLY_SCHEMA = {
    "type": "object",
    "properties": {
        "storyText": {
            "type": "string",
            "description": "The next part of the story, in second person",
        },
        "choices": {
            "type": "array",
            "items": {"type": "string"},
            "maxItems": MAX_CHOICES,
            "description": "Up to three short options for what the player does next",
        },
        "isEnding": {
            "type": "boolean",
            "description": "true when this part concludes the story",
        },
    },
    "required": ["storyText", "choices", "isEnding"],
    "additionalProperties": False,
}
