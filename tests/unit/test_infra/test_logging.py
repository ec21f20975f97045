"""Unit tests for structured and lazy logging."""
from __future__ import annotations

import json
import logging

import pytest

from photo_catalog.infra.logging import JSONFormatter, get_lazy_logger, lazy


def _record(msg: str = "Title differs, updating", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="photo_catalog.features.photos.updater",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    """JSON Lines output."""

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "photo_catalog.features.photos.updater"
        assert data["message"] == "Title differs, updating"
        assert data["timestamp"].endswith("Z")

    def test_extra_and_static_fields(self):
        formatter = JSONFormatter(static={"service": "photo-catalog"})

        data = json.loads(formatter.format(_record(photo_id=12, file_stem="sunset")))

        assert data["service"] == "photo-catalog"
        assert data["photo_id"] == 12
        assert data["file_stem"] == "sunset"

    def test_no_trace_ids_without_active_span(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert "trace_id" not in data
        assert "span_id" not in data

    def test_exception_stays_on_one_line(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            record = _record()
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]


@pytest.mark.unit
class TestLazyLogger:
    """Deferred message evaluation."""

    def test_callable_not_evaluated_when_disabled(self, caplog: pytest.LogCaptureFixture):
        calls = 0

        def expensive() -> str:
            nonlocal calls
            calls += 1
            return "expensive"

        logger = get_lazy_logger("tests.lazy.disabled")
        with caplog.at_level(logging.INFO, logger="tests.lazy.disabled"):
            logger.debug(expensive)

        assert calls == 0
        assert caplog.records == []

    def test_callable_evaluated_when_enabled(self, caplog: pytest.LogCaptureFixture):
        logger = get_lazy_logger("tests.lazy.enabled", feature="photos")
        with caplog.at_level(logging.DEBUG, logger="tests.lazy.enabled"):
            logger.debug(lambda: f"page has {3} photos")

        assert caplog.records[0].getMessage() == "page has 3 photos"
        assert caplog.records[0].feature == "photos"

    def test_lazy_string(self):
        assert str(lazy(lambda: "rendered")) == "rendered"
