"""
conftest.py

Shared pytest fixtures for ai_adventure tests.
"""

import asyncio
import json

import pytest

from ai_adventure.llm.client import LLMClient, LLMRequest, LLMResponse
from ai_adventure.store.memory import InMemoryConversationStore
from ai_adventure.story.orchestrator import StoryOrchestrator


def make_story_json(
    story_text: str,
    choices: list[str] | None = None,
    is_ending: bool = False,
) -> str:
    """Serialize a narrator reply the way the LLM is asked to write it."""
    return json.dumps(
        {
            "storyText": story_text,
            "choices": choices if choices is not None else [],
            "isEnding": is_ending,
        }
    )


class ScriptedLLMClient(LLMClient):
    """Fake LLM returning canned replies (or raising canned errors) in order."""

    def __init__(self, replies: list[str | Exception]):
        self.requests: list[LLMRequest] = []
        self._replies = list(replies)

    @property
    def model_name(self) -> str:
        return "scripted"

    async def complete(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError("ScriptedLLMClient ran out of replies")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, model=self.model_name)


class EchoLLMClient(LLMClient):
    """Fake LLM that narrates whatever the player said last."""

    def __init__(self, ending_after: int | None = None):
        self.requests: list[LLMRequest] = []
        self._ending_after = ending_after

    @property
    def model_name(self) -> str:
        return "echo"

    async def complete(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)
        # Yield so concurrent sessions interleave
        await asyncio.sleep(0)
        last = request.messages[-1].content
        user_turns = sum(1 for m in request.messages if m.role == "user")
        is_ending = self._ending_after is not None and user_turns >= self._ending_after
        content = make_story_json(
            f"You said: {last}",
            [] if is_ending else [f"{last} again", "Wait", "Leave"],
            is_ending,
        )
        return LLMResponse(content=content, model=self.model_name)


@pytest.fixture
def story_json():
    """Builder for narrator reply JSON."""
    return make_story_json


@pytest.fixture
def scripted_client():
    """Factory for a ScriptedLLMClient with the given replies."""
    return ScriptedLLMClient


@pytest.fixture
def echo_client() -> EchoLLMClient:
    """Deterministic fake LLM echoing the player's last prompt."""
    return EchoLLMClient()


@pytest.fixture
def ending_echo_client() -> EchoLLMClient:
    """Echoing fake LLM that ends the story on the third exchange."""
    return EchoLLMClient(ending_after=3)


@pytest.fixture
def store() -> InMemoryConversationStore:
    """Empty in-memory store without eviction."""
    return InMemoryConversationStore()


@pytest.fixture
def wake_up_reply() -> dict:
    """The opening reply used throughout the scenario tests."""
    return {
        "storyText": "You wake up...",
        "choices": ["Look around", "Check pockets", "Call out"],
        "isEnding": False,
    }


@pytest.fixture
def echo_orchestrator(echo_client: EchoLLMClient, store: InMemoryConversationStore) -> StoryOrchestrator:
    """Orchestrator over the echo client and a fresh store."""
    return StoryOrchestrator(echo_client, store, system_prompt="Tell a story.")
