"""
Worker that emits synthetic traces in a loop.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, MutableMapping, Tuple
import logging
import threading
import time

from opentelemetry import context as otel_context
from opentelemetry import propagate, trace

ROOT_SPAN_NAME = "lead"
CHILD_SPAN_NAMES = ("sub1", "sub2")

DEBUG_ATTRIBUTE = "jaeger.debug"
FIREHOSE_ATTRIBUTE = "jaeger.firehose"


class WorkerLoggerAdapter(logging.LoggerAdapter):
    """Prefixes log messages with the worker id."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs.setdefault("extra", {}).update(self.extra)
        return f"[worker {self.extra['worker']}] {msg}", kwargs


def build_attributes(debug: bool, firehose: bool) -> Dict[str, bool]:
    """Attributes carried by every span of a synthetic trace."""
    return {
        DEBUG_ATTRIBUTE: debug,
        FIREHOSE_ATTRIBUTE: firehose,
    }


@dataclass
class Worker:
    """
    One concurrent trace producer.

    In count mode (``traces > 0``) the worker emits exactly ``traces``
    traces. In duration mode (``traces == 0``) it keeps going until the
    shared ``running`` event is cleared by the coordinator.
    """
    id: int
    tracer: trace.Tracer
    traces: int
    marshal: bool
    debug: bool
    firehose: bool
    pause: timedelta
    duration: timedelta
    running: threading.Event
    logger: logging.LoggerAdapter
    traces_generated: int = field(default=0, init=False)

    def should_continue(self, iteration: int) -> bool:
        """Loop condition, evaluated before each iteration."""
        if self.traces > 0:
            return iteration < self.traces
        return self.running.is_set()

    def simulate(self) -> None:
        """Run the trace loop to completion on the calling thread."""
        mode = "duration" if self.duration > timedelta(0) else "count"
        self.logger.debug(f"Starting in {mode} mode")

        i = 0
        pause_seconds = self.pause.total_seconds()
        while self.should_continue(i):
            try:
                self.emit_trace()
            except Exception as e:
                self.logger.error(f"Failed to emit trace {i}: {e}")
            i += 1
            self.traces_generated = i
            if pause_seconds > 0:
                time.sleep(pause_seconds)

        self.logger.info(f"Generated {i} traces")

    def emit_trace(self) -> None:
        """Emit one root span with two child spans."""
        attributes = build_attributes(self.debug, self.firehose)
        root_attributes = {
            "peer.service": "tracegen-server",
            "peer.host.ipv4": "1.1.1.1",
            "tracegen.worker": self.id,
            **attributes,
        }

        # Root spans must not pick up whatever span is current on this thread.
        root = self.tracer.start_span(
            ROOT_SPAN_NAME,
            context=otel_context.Context(),
            kind=trace.SpanKind.SERVER,
            attributes=root_attributes,
        )
        try:
            parent_context = self._child_context(root)
            for name in CHILD_SPAN_NAMES:
                child = self.tracer.start_span(
                    name,
                    context=parent_context,
                    kind=trace.SpanKind.CLIENT,
                    attributes=attributes,
                )
                child.end()
        finally:
            root.end()

    def _child_context(self, root: trace.Span) -> otel_context.Context:
        ctx = trace.set_span_in_context(root, otel_context.Context())
        if not self.marshal:
            return ctx

        carrier: Dict[str, str] = {}
        propagate.inject(carrier, context=ctx)
        self.logger.debug(f"Marshalled parent context: {carrier}")
        return propagate.extract(carrier, context=otel_context.Context())
