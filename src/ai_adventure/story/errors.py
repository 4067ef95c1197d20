"""
errors.py

PURPOSE: Failures a story request can end in.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Each error carries a short machine-readable kind. The HTTP layer maps
the class to a status code and echoes the kind in the response body.
An unknown session is deliberately not an error: it reads as an empty
transcript.
"""


class StoryError(Exception):
    """Base error for story requests."""

    kind = "story_error"


class InvalidRequestError(StoryError):
    """Missing session id or prompt; rejected before touching the store or the LLM."""

    kind = "invalid_request"


class UpstreamUnavailableError(StoryError):
    """The story generator could not be reached or failed."""

    kind = "upstream_unavailable"


class MalformedReplyError(StoryError):
    """The story generator answered with something that is not a StoryReply."""

    kind = "malformed_reply"
