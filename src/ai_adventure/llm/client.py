"""
client.py

PURPOSE: Abstract LLM client interface.
DEPENDENCIES: None (pure Python + typing)

ARCHITECTURE NOTES:
The story orchestrator depends on this interface rather than on a
provider SDK. Provider clients translate their own transport errors into
LLMUnavailableError so callers have a single failure to handle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal


class LLMError(Exception):
    """Base error for LLM client failures."""

    pass


class LLMUnavailableError(LLMError):
    """The provider could not be reached or answered with an error status."""

    pass


@dataclass
class LLMResponse:
    """Response from an LLM call."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    stop_reason: str | None = None
    raw_response: Any = None


@dataclass
class LLMMessage:
    """A message in a conversation."""

    role: Literal["user", "assistant"]
    content: str


@dataclass
class LLMRequest:
    """Request to an LLM."""

    messages: list[LLMMessage] = field(default_factory=list)
    system: str | None = None
    temperature: float | None = None
    max_tokens: int = 1024


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def complete(self, request: LLMRequest) -> LLMResponse:
        """
        Send a completion request to the LLM.

        Args:
            request: The request containing messages and parameters

        Returns:
            LLMResponse with the generated content

        Raises:
            LLMUnavailableError: If the provider call fails
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the name of the model being used."""
        ...
