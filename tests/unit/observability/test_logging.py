"""Unit tests for observability logging."""

from __future__ import annotations

import io
import json
import logging
from typing import Any, Iterator

import pytest
import structlog

from tabex.observability.correlation import CorrelationContext, RequestContext
from tabex.observability.logging import CorrelationProcessor, JsonLoggerFactory, get_logger


@pytest.fixture()
def log_stream() -> Iterator[io.StringIO]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    stream = io.StringIO()
    JsonLoggerFactory.configure("debug", stream=stream)
    yield stream
    structlog.reset_defaults()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    CorrelationContext.clear()


def _lines(stream: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class TestCorrelationProcessor:
    def setup_method(self) -> None:
        CorrelationContext.clear()

    def test_no_context_leaves_event(self) -> None:
        assert CorrelationProcessor()(None, "info", {"event": "x"}) == {"event": "x"}

    def test_injects_ids(self) -> None:
        CorrelationContext.set(RequestContext(correlation_id="cid", client_id="1.2.3.4"))
        out = CorrelationProcessor()(None, "info", {"event": "x"})
        assert out["correlation_id"] == "cid"
        assert out["client_id"] == "1.2.3.4"
        CorrelationContext.clear()

    def test_explicit_value_wins(self) -> None:
        CorrelationContext.set(RequestContext(correlation_id="cid"))
        out = CorrelationProcessor()(None, "info", {"event": "x", "correlation_id": "mine"})
        assert out["correlation_id"] == "mine"
        assert "client_id" not in out
        CorrelationContext.clear()


class TestJsonLoggerFactory:
    def test_emits_json_lines(self, log_stream: io.StringIO) -> None:
        get_logger("tabex.test").info("export.started", log_id="export-csv-1", records=3)
        [line] = _lines(log_stream)
        assert line["event"] == "export.started"
        assert line["log_id"] == "export-csv-1"
        assert line["records"] == 3
        assert line["level"] == "info"
        assert line["logger"] == "tabex.test"
        assert "timestamp" in line

    def test_includes_correlation(self, log_stream: io.StringIO) -> None:
        CorrelationContext.set(RequestContext(correlation_id="req-9"))
        get_logger("tabex.test").warning("export.reverted")
        assert _lines(log_stream)[0]["correlation_id"] == "req-9"

    def test_bound_values(self, log_stream: io.StringIO) -> None:
        get_logger("tabex.test", component="saga").info("x")
        assert _lines(log_stream)[0]["component"] == "saga"

    def test_level_filtering(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        stream = io.StringIO()
        try:
            JsonLoggerFactory.configure("WARNING", stream=stream)
            log = get_logger("tabex.test")
            log.info("hidden")
            log.warning("shown")
            assert [line["event"] for line in _lines(stream)] == ["shown"]
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_unknown_level_falls_back_to_info(self, log_stream: io.StringIO) -> None:
        JsonLoggerFactory.configure("chatty", stream=log_stream)
        assert logging.getLogger().level == logging.INFO
