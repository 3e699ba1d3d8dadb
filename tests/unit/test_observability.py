"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import sys

import httpx
import pytest

from imgpost.config import UploadConfig
from imgpost.image import admit
from imgpost.models import Fallback, SkipReason
from imgpost.observability import MetricsHook, NoopMetricsHook
from imgpost.observability.logger import StructuredFormatter, get_logger
from imgpost.uploader import Uploader


@pytest.fixture
def captured():
    """Attach a JSON handler to the ``imgpost`` loggers and collect records."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    names = ["imgpost.admission", "imgpost.transport", "imgpost.uploader"]
    for name in names:
        get_logger(name).addHandler(handler)

    def records():
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    yield records
    for name in names:
        get_logger(name).removeHandler(handler)


class TestStructuredFormatter:
    def _get_record(
        self,
        msg,
        level=logging.INFO,
        exc_info=None,
        stack_info=None,
        extra_fields=None,
    ):
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        if stack_info is not None:
            record.stack_info = stack_info
        return record

    def test_basic_format(self):
        fmt = StructuredFormatter()
        record = self._get_record("hello world")
        result = json.loads(fmt.format(record))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        fmt = StructuredFormatter()
        record = self._get_record("msg", extra_fields={"path": "/tmp/a.png", "size_bytes": 5})
        result = json.loads(fmt.format(record))
        assert result["path"] == "/tmp/a.png"
        assert result["size_bytes"] == 5

    def test_non_json_values_stringified(self):
        fmt = StructuredFormatter()
        record = self._get_record("msg", extra_fields={"reason": SkipReason.TOO_LARGE})
        result = json.loads(fmt.format(record))
        assert "too_large" in result["reason"]

    def test_exception_info_included(self):
        fmt = StructuredFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        record = self._get_record("error msg", exc_info=exc_info)
        result = json.loads(fmt.format(record))
        assert "exception" in result
        assert "ValueError" in result["exception"]

    def test_stack_info_included(self):
        fmt = StructuredFormatter()
        record = self._get_record("msg", stack_info="Stack Trace Here")
        result = json.loads(fmt.format(record))
        assert result["stack_info"] == "Stack Trace Here"


class TestGetLogger:
    def test_returns_logger_with_handler(self):
        logger = get_logger("test.observability.unique1")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) > 0

    def test_debug_level_no_propagation(self):
        logger = get_logger("test.observability.unique2")
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_idempotent_no_duplicate_handlers(self):
        name = "test.observability.unique3"
        logger1 = get_logger(name)
        handler_count = len(logger1.handlers)
        logger2 = get_logger(name)
        assert len(logger2.handlers) == handler_count

    def test_writes_json_lines(self):
        stream = io.StringIO()
        logger = get_logger("test.observability.stream_unique")
        logger.handlers[0].setStream(stream)
        logger.info("test message", extra={"extra_fields": {"key": "val"}})
        [line] = stream.getvalue().splitlines()
        assert json.loads(line)["key"] == "val"


class TestPipelineLogging:
    def test_too_large_logged_at_warning(self, make_file, config, captured):
        config.max_size_mib = 1
        path = make_file("big.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * (1024 * 1024))
        assert admit(str(path), config) == Fallback(SkipReason.TOO_LARGE)
        [entry] = captured()
        assert entry["level"] == "WARNING"
        assert entry["reason"] == "too_large"
        assert entry["path"] == str(path)

    def test_disabled_logged_at_info(self, png_file, captured):
        admit(str(png_file), UploadConfig())
        [entry] = captured()
        assert entry["level"] == "INFO"
        assert entry["reason"] == "disabled"

    def test_request_log_redacts_credentials(self, png_file, config, captured):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"data": {"link": "https://x.test/a"}})
        )
        Uploader(config, http_transport=transport).upload(str(png_file))
        text = json.dumps(captured())
        assert "test-client-1234" not in text
        assert "<redacted:...1234>" in text

    def test_failure_logged_with_code(self, png_file, config, captured):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        Uploader(config, http_transport=transport).upload(str(png_file))
        [failure] = [e for e in captured() if e["logger"] == "imgpost.uploader"]
        assert failure["level"] == "ERROR"
        assert failure["code"] == "HTTP_STATUS"
        assert failure["context"]["status_code"] == 500


class TestNoopMetricsHook:
    """NoopMetricsHook discards all data points silently."""

    def test_satisfies_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_gauge_returns_none(self):
        hook = NoopMetricsHook()
        assert hook.gauge("imgpost.request_bytes", 5.0, tags={"format": "json"}) is None

    def test_increment_returns_none(self):
        assert NoopMetricsHook().increment("imgpost.uploads_total") is None

    def test_timing_returns_none(self):
        assert NoopMetricsHook().timing("imgpost.request_duration_ms", 123.4) is None

    def test_custom_hook_satisfies_protocol(self):
        class Hook:
            def increment(self, name, value=1, tags=None): ...
            def timing(self, name, ms, tags=None): ...
            def gauge(self, name, value, tags=None): ...

        assert isinstance(Hook(), MetricsHook)
