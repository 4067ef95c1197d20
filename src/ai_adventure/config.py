"""
config.py

PURPOSE: Configuration loading and settings management.
DEPENDENCIES: pydantic, pydantic-settings

ARCHITECTURE NOTES:
Configuration comes from multiple sources (in priority order):
1. CLI flags (highest priority)
2. Environment variables
3. Defaults (lowest priority)

The only secret is the Anthropic API key, which is also picked up from
the standard ANTHROPIC_API_KEY variable.
"""

import os
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Settings for the story generator backend."""

    provider: Literal["anthropic"] = Field(
        default="anthropic",
        description="LLM provider to use",
    )
    model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model name/ID",
    )
    temperature: float = Field(
        default=0.9,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=1024,
        gt=0,
        description="Maximum tokens in response",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single generator call",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        description="SDK-level retries toward the generator (clients retry, not the server)",
    )

    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (or set ANTHROPIC_API_KEY env var)",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_LLM_"}


class StorySettings(BaseSettings):
    """Settings for the storytelling protocol."""

    story_length: int = Field(
        default=10,
        gt=0,
        description="Number of exchanges the narrator is asked to finish the story within",
    )
    max_exchanges: int | None = Field(
        default=None,
        gt=0,
        description="Local hard cap on exchanges; unset leaves termination to the model",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_STORY_"}


class SessionSettings(BaseSettings):
    """Settings for the in-memory session store."""

    max_sessions: int | None = Field(
        default=None,
        gt=0,
        description="Evict least recently used sessions beyond this count",
    )
    ttl_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Forget sessions idle for longer than this",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_SESSION_"}


class ServerSettings(BaseSettings):
    """Settings for the HTTP API."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, gt=0, lt=65536, description="Bind port")
    app_env: str = Field(
        default="development",
        description="Deployment environment; CORS is open in development",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_SERVER_"}

    @property
    def is_development(self) -> bool:
        """Whether the server runs in a local/dev environment."""
        return self.app_env.lower() in {"dev", "development", "local"}


class OpenTelemetrySettings(BaseSettings):
    """Settings for optional OpenTelemetry tracing."""

    enabled: bool = Field(default=False, description="Enable tracing")
    service_name: str = Field(
        default="ai-adventure",
        description="Service name reported on spans",
    )
    endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC endpoint; console export only when unset",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_OTEL_"}


class Settings(BaseSettings):
    """Main application settings."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug output",
    )
    llm: LLMSettings = Field(
        default_factory=LLMSettings,
        description="LLM settings",
    )
    story: StorySettings = Field(
        default_factory=StorySettings,
        description="Story settings",
    )
    session: SessionSettings = Field(
        default_factory=SessionSettings,
        description="Session store settings",
    )
    server: ServerSettings = Field(
        default_factory=ServerSettings,
        description="HTTP server settings",
    )
    otel: OpenTelemetrySettings = Field(
        default_factory=OpenTelemetrySettings,
        description="OpenTelemetry settings",
    )

    model_config = {"env_prefix": "AI_ADVENTURE_"}


def get_settings() -> Settings:
    """Get application settings, loading from environment."""
    llm_settings = LLMSettings()
    # Fall back to the standard Anthropic env var
    if not llm_settings.anthropic_api_key:
        llm_settings.anthropic_api_key = os.environ.get("ANTHROPIC_API_KEY", "")

    return Settings(llm=llm_settings)
