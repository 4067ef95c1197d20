"""LLM client module."""

from ai_adventure.llm.anthropic import AnthropicClient, create_anthropic_client
from ai_adventure.llm.client import (
    LLMClient,
    LLMError,
    LLMMessage,
    LLMRequest,
    LLMResponse,
    LLMUnavailableError,
)

__all__ = [
    "AnthropicClient",
    "LLMClient",
    "LLMError",
    "LLMMessage",
    "LLMRequest",
    "LLMResponse",
    "LLMUnavailableError",
    "create_anthropic_client",
]
