"""Tests for logging utilities."""

from __future__ import annotations

from collections.abc import Iterator
import json
import logging
from pathlib import Path
import sys

import pytest

from revelo.core.utils.logging import (
    InstanceLogger,
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="revelo.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=12,
        msg="Effect '%s' dropped",
        args=("reel",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredJSONFormatter:
    """Tests for StructuredJSONFormatter."""

    def test_basic_fields(self) -> None:
        """Level, message and context are emitted."""
        payload = json.loads(StructuredJSONFormatter().format(_record()))
        assert payload["level"] == "WARNING"
        assert payload["message"] == "Effect 'reel' dropped"
        assert payload["context"]["logger_name"] == "revelo.test"
        assert payload["context"]["line"] == 12
        assert "timestamp" in payload

    def test_extra_fields(self) -> None:
        """Adapter context ends up in the context block."""
        payload = json.loads(StructuredJSONFormatter().format(_record(instance_id=4)))
        assert payload["context"]["instance_id"] == 4

    def test_exception_info(self) -> None:
        """Exceptions are described in the context."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        payload = json.loads(StructuredJSONFormatter().format(record))
        assert payload["context"]["error_type"] == "ValueError"
        assert payload["context"]["error_message"] == "boom"
        assert "Traceback" in payload["context"]["stack_trace"]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_is_case_insensitive(self, restore_root_logger: logging.Logger) -> None:
        """Levels are parsed case-insensitively."""
        configure_logging(level="debug")
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="LOUD")

    def test_structured_file_output(
        self, restore_root_logger: logging.Logger, tmp_path: Path
    ) -> None:
        """Structured logs are written as JSON lines."""
        path = tmp_path / "revelo.jsonl"
        configure_logging(level="INFO", filename=str(path), structured=True)
        logging.getLogger("revelo.file").info("hello")
        for handler in restore_root_logger.handlers:
            handler.flush()
        line = path.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"


class TestGetLogger:
    """Tests for get_logger."""

    def test_plain_logger(self) -> None:
        """Without context a plain Logger is returned."""
        assert isinstance(get_logger("revelo.plain"), logging.Logger)

    def test_adapter_with_context(self) -> None:
        """Context kwargs give an InstanceLogger."""
        log = get_logger("revelo.ctx", instance_id=3)
        assert isinstance(log, InstanceLogger)
        assert log.extra == {"instance_id": 3}

    def test_records_are_tagged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Messages carry the instance prefix and record attribute."""
        log = get_logger("revelo.tagged", instance_id=7)
        with caplog.at_level(logging.INFO, logger="revelo.tagged"):
            log.info("Set up preset=%s", "grandPrize", extra={"preset": "grandPrize"})
        record = caplog.records[-1]
        assert record.getMessage() == "[instance 7] Set up preset=grandPrize"
        assert record.instance_id == 7
        assert record.preset == "grandPrize"
