"""
Tracer provider construction for the supported span exporters.

OTLP endpoints, headers and timeouts are read by the exporters themselves
from the standard OTEL_EXPORTER_OTLP_* environment variables.
"""

from typing import Optional
import logging

from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

logger = logging.getLogger(__name__)

EXPORTERS = ("otlp-http", "otlp-grpc", "stdout")


def create_span_exporter(name: str) -> SpanExporter:
    """
    Create the span exporter selected by name.

    Args:
        name: One of ``otlp-http``, ``otlp-grpc`` or ``stdout``

    Returns:
        A configured SpanExporter

    Raises:
        ValueError: If the exporter name is not recognized
    """
    if name == "otlp-http":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
        return OTLPSpanExporter()
    if name == "otlp-grpc":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        return OTLPSpanExporter()
    if name == "stdout":
        return ConsoleSpanExporter()
    raise ValueError(f"unrecognized trace exporter '{name}', expected one of: {', '.join(EXPORTERS)}")


def create_tracer_provider(service: str, exporter_name: str = "otlp-http",
                           exporter: Optional[SpanExporter] = None) -> TracerProvider:
    """
    Build a TracerProvider that batches spans to the selected exporter.

    Args:
        service: Value of the ``service.name`` resource attribute
        exporter_name: Exporter to create when ``exporter`` is not given
        exporter: Pre-built exporter to use instead

    Returns:
        TracerProvider; call ``shutdown()`` on it to flush pending spans
    """
    if exporter is None:
        exporter = create_span_exporter(exporter_name)

    resource = Resource.create({SERVICE_NAME: service})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    logger.debug(f"Created tracer provider for service '{service}' using {type(exporter).__name__}")
    return provider
