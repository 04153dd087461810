"""Tests for api.logging."""

import logging

from api.logging import StructuredFormatter, batch_progress_logger, request_id_var


def make_record(message: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("segcodec.codec", logging.INFO, __file__, 1, message, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for the key=value formatter."""

    def test_core_fields(self):
        """Level, logger and message are rendered as key=value pairs."""
        line = StructuredFormatter().format(make_record("Encoded %d segments", 5))

        assert "level=INFO" in line
        assert "logger=segcodec.codec" in line
        assert 'message="Encoded 5 segments"' in line
        assert "request_id=-" in line

    def test_request_id_from_context(self):
        """The current request ID is included."""
        token = request_id_var.set("req-42")
        try:
            line = StructuredFormatter().format(make_record("hello"))
        finally:
            request_id_var.reset(token)

        assert "request_id=req-42" in line

    def test_extra_fields_appended(self):
        """Values passed via extra= are appended after the message."""
        line = StructuredFormatter().format(make_record("done", code="sb3b1f"))

        assert line.endswith('code="sb3b1f"')

    def test_quotes_are_escaped(self):
        """Messages stay on one line with escaped quotes."""
        line = StructuredFormatter().format(make_record('bad "code"\nnext'))

        assert 'message="bad \\"code\\" | next"' in line


class TestBatchProgressLogger:
    """Tests for the on_batch logging hook."""

    def test_logs_progress_at_debug(self, caplog):
        """Each call logs done/total."""
        hook = batch_progress_logger("encode")

        with caplog.at_level(logging.DEBUG, logger="api.progress"):
            hook(50, 120)

        assert caplog.records[-1].getMessage() == "encode progress: 50/120 segments"
        assert caplog.records[-1].levelno == logging.DEBUG
