"""
telemetry.py

PURPOSE: OpenTelemetry initialization and tracer lookup.
DEPENDENCIES: opentelemetry-api; opentelemetry-sdk and
opentelemetry-exporter-otlp for the optional exporters

ARCHITECTURE NOTES:
Modules grab a tracer at import time with get_tracer(). The API's proxy
tracer records nothing until init_telemetry() installs an SDK provider,
so tracing stays a no-op unless it is enabled in settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from ai_adventure.config import OpenTelemetrySettings

logger = logging.getLogger(__name__)

_provider: object | None = None


def init_telemetry(settings: OpenTelemetrySettings) -> None:
    """
    Install an SDK tracer provider when tracing is enabled.

    Safe to call more than once; only the first enabled call has an effect.

    Args:
        settings: OpenTelemetry configuration settings.
    """
    global _provider

    if _provider is not None:
        logger.debug("Telemetry already initialized")
        return

    if not settings.enabled:
        logger.debug("Telemetry disabled")
        return

    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
    except ImportError:
        logger.warning(
            "OpenTelemetry SDK not installed, spans will be dropped. "
            "Install with: pip install ai-adventure[observability]"
        )
        return

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.service_name})
    )

    if settings.endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
        )
        logger.info(f"OTLP exporter configured: {settings.endpoint}")
    else:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _provider = provider

    logger.info(f"Telemetry initialized: service={settings.service_name}")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer for the given module name.

    The returned tracer follows whatever provider is installed later, so
    it is fine to call this at import time.
    """
    return trace.get_tracer(name)


def shutdown_telemetry() -> None:
    """Flush pending spans and shut the provider down, if one was installed."""
    global _provider

    if _provider is not None:
        _provider.shutdown()  # type: ignore[attr-defined]
        logger.debug("Telemetry shutdown complete")
    _provider = None
