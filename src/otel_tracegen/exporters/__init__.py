# Exporters module
from .factory import EXPORTERS, create_span_exporter, create_tracer_provider

__all__ = [
    "EXPORTERS",
    "create_span_exporter",
    "create_tracer_provider",
]
