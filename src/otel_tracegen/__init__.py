"""
OpenTelemetry Tracegen - A synthetic trace load generator for tracing pipelines.

This package provides tools and utilities for:
- Running a pool of concurrent workers that emit fixed-shape synthetic traces
- Stopping the run after a fixed number of traces or a fixed wall-clock duration
- Exporting the generated spans over OTLP (HTTP or gRPC) or to stdout
"""

__version__ = "0.1.0"

from .models import ScenarioConfig, InvalidConfiguration
from .worker import Worker, WorkerLoggerAdapter, build_attributes
from .runner import run
from .exporters import EXPORTERS, create_span_exporter, create_tracer_provider
from .utils import parse_duration, format_duration

__all__ = [
    "ScenarioConfig",
    "InvalidConfiguration",
    "Worker",
    "WorkerLoggerAdapter",
    "build_attributes",
    "run",
    "EXPORTERS",
    "create_span_exporter",
    "create_tracer_provider",
    "parse_duration",
    "format_duration",
]
