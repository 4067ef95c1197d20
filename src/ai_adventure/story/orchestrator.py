"""
orchestrator.py

PURPOSE: Turn start/continue requests into narrator calls and transcript updates.
DEPENDENCIES: LLM client, conversation store

ARCHITECTURE NOTES:
Per session the story moves NotStarted -> InProgress -> Ended, but the
orchestrator keeps no state of its own; the transcript in the store is
the whole session.

- start() always begins a fresh transcript, which is also how a game restarts.
- continue_story() appends to whatever is stored. An ended story is not
  blocked; the client decides when to call start() again.

Each request makes exactly one LLM call and at most one store write.
The user turn and the model turn are committed together after the reply
has parsed, so a failed call leaves the stored transcript as it was and
the player can simply retry the same choice.

There is no local turn limit unless max_exchanges is set; by default the
narrator's instructions are the only thing that ends a story.
Includes OpenTelemetry tracing for observability.
"""

import logging

from ai_adventure.llm.client import LLMClient, LLMMessage, LLMRequest, LLMUnavailableError
from ai_adventure.models.reply import StoryReply
from ai_adventure.models.transcript import (
    EMPTY_TRANSCRIPT,
    Role,
    Transcript,
    Turn,
    model_turn,
    user_turn,
)
from ai_adventure.observability import get_tracer
from ai_adventure.store.base import ConversationStore
from ai_adventure.story.errors import InvalidRequestError, UpstreamUnavailableError
from ai_adventure.story.parser import parse_story_reply
from ai_adventure.story.prompts import OPENING_PROMPT, build_system_prompt

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_STORY_LENGTH = 10


def to_llm_message(turn: Turn) -> LLMMessage:
    """Map a transcript turn onto the provider's message roles."""
    role = "user" if turn.role is Role.USER else "assistant"
    return LLMMessage(role=role, content=turn.text)


def count_exchanges(transcript: Transcript) -> int:
    """Number of player turns in a transcript, the opening request included."""
    return sum(1 for turn in transcript if turn.role is Role.USER)


class StoryOrchestrator:
    """
    Runs the story protocol for every session.

    Stateless apart from its collaborators, so one instance serves all
    sessions concurrently.
    """

    def __init__(
        self,
        client: LLMClient,
        store: ConversationStore,
        *,
        system_prompt: str | None = None,
        opening_prompt: str = OPENING_PROMPT,
        max_tokens: int = 1024,
        temperature: float | None = 0.9,
        max_exchanges: int | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            client: The LLM client that generates the story.
            store: Where session transcripts live.
            system_prompt: Narrator instructions sent with every call.
            opening_prompt: Synthetic first player turn of every story.
            max_tokens: Maximum tokens per narrator reply.
            temperature: Sampling temperature, or None for the provider default.
            max_exchanges: Force the story to end on this exchange. None
                leaves ending the story entirely to the narrator.
        """
        if max_exchanges is not None and max_exchanges < 1:
            raise ValueError("max_exchanges must be at least 1")
        self._client = client
        self._store = store
        self._system_prompt = system_prompt or build_system_prompt(DEFAULT_STORY_LENGTH)
        self._opening_prompt = opening_prompt
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._max_exchanges = max_exchanges

    async def start(self, session_id: str) -> StoryReply:
        """
        Begin a new story for a session, discarding any previous one.

        Args:
            session_id: Client-generated session identifier.

        Returns:
            The opening StoryReply.

        Raises:
            InvalidRequestError: If the session id is blank.
            UpstreamUnavailableError: If the narrator call fails.
            MalformedReplyError: If the narrator reply cannot be parsed.
        """
        session_id = self._require_session_id(session_id)
        with tracer.start_as_current_span("story.start") as span:
            span.set_attribute("story.session_id", session_id)
            logger.info(f"Starting story for session {session_id}")
            reply = await self._exchange(session_id, EMPTY_TRANSCRIPT, self._opening_prompt)
            span.set_attribute("story.is_ending", reply.is_ending)
            return reply

    async def continue_story(self, session_id: str, prompt_text: str) -> StoryReply:
        """
        Send the player's choice and get the next part of the story.

        Args:
            session_id: Client-generated session identifier.
            prompt_text: The chosen option, or the player's own words.

        Returns:
            The next StoryReply.

        Raises:
            InvalidRequestError: If the session id or prompt is blank.
            UpstreamUnavailableError: If the narrator call fails.
            MalformedReplyError: If the narrator reply cannot be parsed.
        """
        session_id = self._require_session_id(session_id)
        if prompt_text is None or not prompt_text.strip():
            raise InvalidRequestError("Prompt text is required")

        with tracer.start_as_current_span("story.continue") as span:
            span.set_attribute("story.session_id", session_id)
            history = self._store.get(session_id)
            if not history:
                logger.info(f"Session {session_id} has no story yet, continuing from scratch")
            reply = await self._exchange(session_id, history, prompt_text)
            span.set_attribute("story.is_ending", reply.is_ending)
            return reply

    def end(self, session_id: str) -> bool:
        """
        Forget a session's story.

        Returns:
            True if there was a story to forget.
        """
        session_id = self._require_session_id(session_id)
        removed = self._store.delete(session_id)
        if removed:
            logger.info(f"Ended session {session_id}")
        return removed

    def transcript(self, session_id: str) -> Transcript:
        """Return the stored transcript for a session (empty if unknown)."""
        return self._store.get(self._require_session_id(session_id))

    async def _exchange(
        self,
        session_id: str,
        history: Transcript,
        prompt_text: str,
    ) -> StoryReply:
        """Run one round trip and commit both turns on success."""
        pending: Transcript = (*history, user_turn(prompt_text))

        request = LLMRequest(
            messages=[to_llm_message(turn) for turn in pending],
            system=self._system_prompt,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )

        try:
            response = await self._client.complete(request)
        except LLMUnavailableError as e:
            logger.error(f"Narrator unavailable for session {session_id}: {e}")
            raise UpstreamUnavailableError(f"Story generator unavailable: {e}") from e

        reply = parse_story_reply(response.content)

        exchanges = count_exchanges(pending)
        if (
            self._max_exchanges is not None
            and exchanges >= self._max_exchanges
            and not reply.is_ending
        ):
            logger.info(f"Session {session_id} reached {exchanges} exchanges, ending story")
            reply = reply.as_ending()

        self._store.put(session_id, (*pending, model_turn(reply.story_text)))

        logger.debug(
            f"Session {session_id}: exchange {exchanges}, "
            f"{len(pending) + 1} turns, ending={reply.is_ending}"
        )
        return reply

    @staticmethod
    def _require_session_id(session_id: str) -> str:
        if session_id is None or not session_id.strip():
            raise InvalidRequestError("Session id is required")
        return session_id
