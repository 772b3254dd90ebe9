"""
Shared fixtures for tracegen tests.
"""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter


@pytest.fixture
def memory_exporter():
    """In-memory exporter collecting every finished span."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(memory_exporter):
    """SDK tracer provider that exports synchronously to memory."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(memory_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    return tracer_provider.get_tracer("tracegen-tests")
