"""
anthropic.py

PURPOSE: Anthropic Claude LLM client implementation.
DEPENDENCIES: anthropic SDK

ARCHITECTURE NOTES:
Uses the async Anthropic SDK to send the story transcript to Claude.
SDK retries default to off: a failed call surfaces straight away and the
player's client decides whether to try again. Connection errors,
timeouts and non-2xx answers all become LLMUnavailableError.
"""

import logging
import time
from typing import Any

import anthropic

from ai_adventure.llm.client import LLMClient, LLMRequest, LLMResponse, LLMUnavailableError
from ai_adventure.observability import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class AnthropicClient(LLMClient):
    """LLM client using Anthropic's Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        max_retries: int = 0,
    ):
        """
        Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. If None, uses ANTHROPIC_API_KEY env var.
            model: Model to use for completions.
            timeout: Seconds to wait for a response.
            max_retries: Retries the SDK performs on transient errors.
        """
        self._client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
        )
        self._model = model

    @property
    def model_name(self) -> str:
        return self._model

    def _message_params(self, request: LLMRequest) -> dict[str, Any]:
        """Translate an LLMRequest into messages.create() keyword arguments."""
        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": request.max_tokens,
            "messages": [{"role": m.role, "content": m.content} for m in request.messages],
        }
        if request.temperature is not None:
            params["temperature"] = request.temperature
        if request.system:
            params["system"] = request.system
        return params

    async def complete(self, request: LLMRequest) -> LLMResponse:
        """
        Ask Claude for the next reply.

        Raises:
            LLMUnavailableError: On connection failure, timeout or error status
        """
        params = self._message_params(request)

        with tracer.start_as_current_span("llm.complete") as span:
            span.set_attribute("llm.model", self._model)
            span.set_attribute("llm.message_count", len(request.messages))

            started = time.perf_counter()
            try:
                message = await self._client.messages.create(**params)
            except anthropic.APIStatusError as e:
                span.record_exception(e)
                logger.warning(f"{self._model} answered {e.status_code}")
                raise LLMUnavailableError(
                    f"Anthropic API returned status {e.status_code}"
                ) from e
            except anthropic.APIError as e:
                span.record_exception(e)
                logger.warning(f"{self._model} unreachable: {e}")
                raise LLMUnavailableError(f"Anthropic API call failed: {e}") from e
            latency_ms = (time.perf_counter() - started) * 1000

            text = "".join(block.text for block in message.content if block.type == "text")
            usage = message.usage

            span.set_attribute("llm.input_tokens", usage.input_tokens)
            span.set_attribute("llm.output_tokens", usage.output_tokens)
            span.set_attribute("llm.latency_ms", latency_ms)
            span.set_attribute("llm.stop_reason", message.stop_reason or "unknown")

            logger.debug(
                f"{self._model}: {usage.input_tokens} in, {usage.output_tokens} out, "
                f"{latency_ms:.0f} ms, stop={message.stop_reason}"
            )

            return LLMResponse(
                content=text,
                model=message.model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                stop_reason=message.stop_reason,
                raw_response=message,
            )


def create_anthropic_client(
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    timeout: float = 60.0,
    max_retries: int = 0,
) -> AnthropicClient:
    """Factory function to create an Anthropic client."""
    return AnthropicClient(api_key=api_key, model=model, timeout=timeout, max_retries=max_retries)
