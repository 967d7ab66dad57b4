"""Tests for structured logging: context, timing blocks and configuration."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
import structlog
from structlog.testing import capture_logs

from iconspine.framework.logging import (
    LogContext,
    bind_context,
    configure_logging,
    get_context,
    is_configured,
    log_step,
    log_timing,
    push_context,
)
from iconspine.framework.logging.context import add_context_processor
from iconspine.framework.logging.timing import StepTimer


class TestLogContext:
    def test_to_dict_skips_none(self):
        assert LogContext(run_id="r1").to_dict() == {"run_id": "r1"}

    def test_merge_keeps_existing_values(self):
        merged = LogContext(run_id="r1").merge(identifier="add", variant=None)
        assert merged.run_id == "r1"
        assert merged.identifier == "add"
        assert merged.variant is None


class TestContextVar:
    def test_empty_by_default(self):
        assert get_context().to_dict() == {}

    def test_bind_merges(self):
        bind_context(run_id="r1")
        bind_context(identifier="add")
        assert get_context().to_dict() == {"run_id": "r1", "identifier": "add"}

    def test_push_restores(self):
        bind_context(run_id="r1")
        token = push_context(identifier="add")
        assert get_context().identifier == "add"
        token.restore()
        assert get_context().to_dict() == {"run_id": "r1"}

    def test_threads_do_not_share_context(self):
        bind_context(identifier="main")

        def worker():
            bind_context(identifier="worker")
            return get_context().identifier

        with ThreadPoolExecutor(max_workers=1) as pool:
            assert pool.submit(worker).result() == "worker"
        assert get_context().identifier == "main"

    def test_processor_adds_context_without_overriding(self):
        bind_context(run_id="r1", identifier="add")
        event = add_context_processor(None, "info", {"event": "x", "identifier": "explicit"})
        assert event == {"event": "x", "run_id": "r1", "identifier": "explicit"}


class TestTiming:
    def test_step_timer_fields(self):
        timer = StepTimer(step="work", parent_span_id="abcd1234").add_metric("records", 2)
        timer.stop()
        fields = timer.end_fields()
        assert fields["parent_span_id"] == "abcd1234"
        assert fields["records"] == 2
        assert fields["duration_ms"] >= 0
        assert len(timer.span_id) == 8

    def test_log_step_emits_start_and_end(self):
        with capture_logs() as logs:
            with log_step("registry.build", records=3) as timer:
                timer.add_metric("excluded", 1)

        events = [entry["event"] for entry in logs]
        assert events == ["registry.build.start", "registry.build.end"]
        end = logs[-1]
        assert end["records"] == 3
        assert end["excluded"] == 1
        assert end["log_level"] == "info"
        assert "duration_ms" in end

    def test_log_step_sets_step_context(self):
        with log_step("export.run", log_start=False):
            assert get_context().step == "export.run"
        assert get_context().step is None

    def test_nested_steps_link_spans(self):
        with capture_logs() as logs:
            with log_step("outer", log_start=False) as outer:
                with log_step("inner", log_start=False):
                    pass
        inner_end = next(entry for entry in logs if entry["event"] == "inner.end")
        assert inner_end["parent_span_id"] == outer.span_id

    def test_log_step_logs_and_reraises_errors(self):
        with capture_logs() as logs:
            with pytest.raises(ValueError, match="nope"):
                with log_step("pipeline.load", log_start=False):
                    raise ValueError("nope")

        assert [entry["event"] for entry in logs] == ["pipeline.load.error"]
        assert logs[0]["error_type"] == "ValueError"
        assert logs[0]["status"] == "error"

    def test_log_timing_decorator(self):
        @log_timing("sources.scan", level="debug")
        def scan(n):
            return n * 2

        with capture_logs() as logs:
            assert scan(21) == 42
        assert logs[-1]["event"] == "sources.scan.end"
        assert logs[-1]["log_level"] == "debug"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_configures_level(self):
        configure_logging(level="DEBUG", format="json", force=True)
        assert is_configured()
        assert logging.getLogger("iconspine").level == logging.DEBUG

    def test_json_output(self, capsys):
        configure_logging(level="INFO", format="json", force=True)
        bind_context(run_id="r1")
        structlog.get_logger("iconspine.test").info("hello", answer=42)
        err = capsys.readouterr().err
        assert '"event": "hello"' in err
        assert '"answer": 42' in err
        assert '"run_id": "r1"' in err

    def test_second_call_without_force_is_noop(self):
        configure_logging(level="ERROR", force=True)
        configure_logging(level="DEBUG")
        assert logging.getLogger("iconspine").level == logging.ERROR
