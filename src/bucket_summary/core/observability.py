"""Observability setup for bucket-summary.

Logs are structlog events rendered as JSON lines on stdout, or as
human-readable console lines when ``log_json`` is off. Tracing is opt-in via
``otel_enabled``; spans are printed to the console unless another exporter is
passed to :func:`setup_tracing`.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from .config import settings


def build_tracer_provider(
    exporter: Optional[SpanExporter] = None,
    service_name: Optional[str] = None,
) -> TracerProvider:
    """Create a tracer provider exporting spans for this service."""
    resource = Resource.create(
        {"service.name": service_name or settings.otel_service_name}
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    return provider


def setup_tracing(exporter: Optional[SpanExporter] = None) -> Optional[TracerProvider]:
    """Install the global tracer provider when tracing is enabled."""
    if not settings.otel_enabled:
        return None

    provider = build_tracer_provider(exporter)
    trace.set_tracer_provider(provider)
    return provider


def log_renderer(json_output: bool) -> Any:
    """Final structlog processor: JSON lines or aligned console output."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(json_output: Optional[bool] = None) -> None:
    """Set up structured logging with structlog."""
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            log_renderer(json_output),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer bound to the configured provider."""
    return trace.get_tracer(name)


setup_logging()
setup_tracing()
