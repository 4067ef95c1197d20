"""
factory.py

PURPOSE: Build a StoryOrchestrator from application settings.
DEPENDENCIES: config, llm, store

ARCHITECTURE NOTES:
Shared by the HTTP server and the terminal client so both run the same
story protocol with the same store and narrator configuration.
"""

from ai_adventure.config import Settings
from ai_adventure.llm.anthropic import create_anthropic_client
from ai_adventure.llm.client import LLMClient
from ai_adventure.store.base import ConversationStore
from ai_adventure.store.eviction import eviction_from_limits
from ai_adventure.store.memory import InMemoryConversationStore
from ai_adventure.story.orchestrator import StoryOrchestrator
from ai_adventure.story.prompts import build_system_prompt


def create_store(settings: Settings) -> InMemoryConversationStore:
    """Create the in-memory session store with the configured eviction limits."""
    return InMemoryConversationStore(
        eviction=eviction_from_limits(
            max_sessions=settings.session.max_sessions,
            ttl_seconds=settings.session.ttl_seconds,
        )
    )


def create_orchestrator(
    settings: Settings,
    client: LLMClient | None = None,
    store: ConversationStore | None = None,
) -> StoryOrchestrator:
    """
    Wire up an orchestrator.

    Args:
        settings: Application settings.
        client: LLM client; an Anthropic client is created when omitted.
        store: Session store; an in-memory store is created when omitted.

    Returns:
        Ready-to-use StoryOrchestrator.
    """
    if client is None:
        client = create_anthropic_client(
            api_key=settings.llm.anthropic_api_key or None,
            model=settings.llm.model,
            timeout=settings.llm.timeout_seconds,
            max_retries=settings.llm.max_retries,
        )
    if store is None:
        store = create_store(settings)

    return StoryOrchestrator(
        client,
        store,
        system_prompt=build_system_prompt(settings.story.story_length),
        max_tokens=settings.llm.max_tokens,
        temperature=settings.llm.temperature,
        max_exchanges=settings.story.max_exchanges,
    )
