"""
observability/__init__.py

PURPOSE: OpenTelemetry tracing for the story service.
DEPENDENCIES: opentelemetry-api (opentelemetry-sdk optional)

ARCHITECTURE NOTES:
Tracing is opt-in:
- Spans are no-ops until init_telemetry() runs with tracing enabled
- Console output by default when enabled
- OTLP export when an endpoint is configured
"""

from ai_adventure.observability.telemetry import (
    get_tracer,
    init_telemetry,
    shutdown_telemetry,
)

__all__ = ["get_tracer", "init_telemetry", "shutdown_telemetry"]
