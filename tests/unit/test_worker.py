"""
Unit tests for the trace-emitting worker.
"""

import logging
import threading
import time
from datetime import timedelta
from unittest import mock

import pytest
from opentelemetry import trace

from otel_tracegen.worker import (
    Worker,
    WorkerLoggerAdapter,
    build_attributes,
    DEBUG_ATTRIBUTE,
    FIREHOSE_ATTRIBUTE,
)


def group_by_trace(spans):
    traces = {}
    for span in spans:
        traces.setdefault(span.context.trace_id, []).append(span)
    return traces


def make_worker(tracer, running=None, **overrides):
    if running is None:
        running = threading.Event()
        running.set()
    params = dict(
        id=0,
        tracer=tracer,
        traces=1,
        marshal=False,
        debug=False,
        firehose=False,
        pause=timedelta(0),
        duration=timedelta(0),
        running=running,
        logger=WorkerLoggerAdapter(logging.getLogger("tracegen-tests"), {"worker": overrides.get("id", 0)}),
    )
    params.update(overrides)
    return Worker(**params)


class TestTraceShape:
    """Test cases for the shape of a single synthetic trace."""

    def test_root_with_two_children(self, tracer, memory_exporter):
        """Test that one iteration produces lead, sub1 and sub2 in one trace."""
        worker = make_worker(tracer)

        worker.emit_trace()

        spans = memory_exporter.get_finished_spans()
        assert len(spans) == 3
        by_name = {span.name: span for span in spans}
        assert set(by_name) == {"lead", "sub1", "sub2"}

        root = by_name["lead"]
        assert root.parent is None
        for name in ("sub1", "sub2"):
            child = by_name[name]
            assert child.context.trace_id == root.context.trace_id
            assert child.parent.span_id == root.context.span_id

    def test_children_close_before_root(self, tracer, memory_exporter):
        worker = make_worker(tracer)

        worker.emit_trace()

        by_name = {span.name: span for span in memory_exporter.get_finished_spans()}
        root = by_name["lead"]
        for name in ("sub1", "sub2"):
            assert root.start_time <= by_name[name].start_time
            assert by_name[name].end_time <= root.end_time
        assert by_name["sub1"].end_time <= by_name["sub2"].start_time

    @pytest.mark.parametrize("debug,firehose", [
        (False, False),
        (True, False),
        (False, True),
        (True, True),
    ])
    def test_flags_on_every_span(self, tracer, memory_exporter, debug, firehose):
        """Test that every span carries the configured debug/firehose values."""
        worker = make_worker(tracer, debug=debug, firehose=firehose)

        worker.emit_trace()

        for span in memory_exporter.get_finished_spans():
            assert span.attributes[DEBUG_ATTRIBUTE] is debug
            assert span.attributes[FIREHOSE_ATTRIBUTE] is firehose

    def test_root_attributes(self, tracer, memory_exporter):
        worker = make_worker(tracer, id=3)

        worker.emit_trace()

        root = next(s for s in memory_exporter.get_finished_spans() if s.name == "lead")
        assert root.attributes["peer.service"] == "tracegen-server"
        assert root.attributes["peer.host.ipv4"] == "1.1.1.1"
        assert root.attributes["tracegen.worker"] == 3
        assert root.kind == trace.SpanKind.SERVER

    def test_marshal_keeps_parent_link(self, tracer, memory_exporter):
        """Test that children still hang off the root when the context is marshalled."""
        worker = make_worker(tracer, marshal=True)

        worker.emit_trace()

        traces = group_by_trace(memory_exporter.get_finished_spans())
        assert len(traces) == 1
        spans = next(iter(traces.values()))
        root = next(s for s in spans if s.name == "lead")
        children = [s for s in spans if s.name != "lead"]
        assert len(children) == 2
        for child in children:
            assert child.parent.span_id == root.context.span_id
            assert child.parent.is_remote is True

    def test_root_ignores_current_span(self, tracer, memory_exporter):
        """Test that a span active on the calling thread does not become the parent."""
        worker = make_worker(tracer)

        with tracer.start_as_current_span("outer"):
            worker.emit_trace()

        root = next(s for s in memory_exporter.get_finished_spans() if s.name == "lead")
        assert root.parent is None

    def test_build_attributes(self):
        assert build_attributes(True, False) == {
            "jaeger.debug": True,
            "jaeger.firehose": False,
        }


class TestCountMode:
    """Test cases for workers with a fixed trace count."""

    def test_emits_planned_traces(self, tracer, memory_exporter):
        worker = make_worker(tracer, traces=4)

        worker.simulate()

        assert worker.traces_generated == 4
        assert len(group_by_trace(memory_exporter.get_finished_spans())) == 4

    def test_ignores_stop_signal(self, tracer, memory_exporter):
        """Test that a cleared stop signal does not cut a count-mode worker short."""
        running = threading.Event()
        worker = make_worker(tracer, running=running, traces=2)

        worker.simulate()

        assert worker.traces_generated == 2
        assert len(memory_exporter.get_finished_spans()) == 6

    def test_emit_failure_does_not_stop_loop(self, caplog):
        """Test that tracer errors are logged and the loop carries on."""
        tracer = mock.Mock()
        tracer.start_span.side_effect = RuntimeError("exporter down")
        worker = make_worker(tracer, traces=3)

        with caplog.at_level(logging.ERROR, logger="tracegen-tests"):
            worker.simulate()

        assert worker.traces_generated == 3
        assert tracer.start_span.call_count == 3
        failures = [r for r in caplog.records if "exporter down" in r.getMessage()]
        assert len(failures) == 3
        assert failures[0].getMessage().startswith("[worker 0]")
        assert failures[0].worker == 0

    def test_reports_generated_count(self, tracer, caplog):
        worker = make_worker(tracer, id=1, traces=2)

        with caplog.at_level(logging.INFO, logger="tracegen-tests"):
            worker.simulate()

        assert "[worker 1] Generated 2 traces" in caplog.messages

    def test_pauses_between_traces(self, tracer):
        worker = make_worker(tracer, traces=3, pause=timedelta(milliseconds=1))

        with mock.patch("otel_tracegen.worker.time.sleep") as sleep:
            worker.simulate()

        assert sleep.call_count == 3
        sleep.assert_called_with(0.001)


class TestDurationMode:
    """Test cases for workers stopped by the shared signal."""

    def test_runs_until_signal_cleared(self, tracer, memory_exporter):
        running = threading.Event()
        running.set()
        worker = make_worker(
            tracer,
            running=running,
            traces=0,
            pause=timedelta(milliseconds=1),
            duration=timedelta(milliseconds=50),
        )
        thread = threading.Thread(target=worker.simulate)

        thread.start()
        time.sleep(0.05)
        running.clear()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert worker.traces_generated > 0
        assert len(memory_exporter.get_finished_spans()) == 3 * worker.traces_generated

    def test_cleared_signal_before_start(self, tracer, memory_exporter):
        running = threading.Event()
        worker = make_worker(tracer, running=running, traces=0, duration=timedelta(seconds=1))

        worker.simulate()

        assert worker.traces_generated == 0
        assert memory_exporter.get_finished_spans() == ()
