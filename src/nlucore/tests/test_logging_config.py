"""
Unit tests for nlucore.logging_config.

The package logger is reset after configuration so it keeps propagating
to pytest's capture handler.
"""
import json
import logging

import pytest

from nlucore.config import NluConfig
from nlucore.logging_config import (
    JSONFormatter,
    PrettyJSONFormatter,
    log_function_call,
    setup_logging,
    setup_logging_from_config,
)


def make_record(message="Logistic regression trained", **extra):
    record = logging.LogRecord(
        name="nlucore.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg=message, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the JSON and pretty formatters."""

    def test_json_includes_extra_fields(self):
        """Test extra={} fields become JSON keys."""
        output = JSONFormatter().format(make_record(iterations=739, loss=0.12))
        data = json.loads(output)
        assert data["level"] == "INFO"
        assert data["logger"] == "nlucore.test"
        assert data["message"] == "Logistic regression trained"
        assert data["iterations"] == 739
        assert data["loss"] == 0.12

    def test_pretty_shows_inline_fields(self):
        """Test known context fields are rendered inline."""
        output = PrettyJSONFormatter().format(make_record(locale="en", occurrences_count=2))
        assert "Logistic regression trained" in output
        assert "locale=en" in output
        assert "occurrences_count=2" in output


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_json_handler(self):
        """Test a JSON console handler is installed."""
        logger = setup_logging("nlucore_test_json", "DEBUG", "json")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_pretty_handler(self):
        """Test the pretty format selects the pretty formatter."""
        logger = setup_logging("nlucore_test_pretty", "INFO", "pretty")
        assert isinstance(logger.handlers[0].formatter, PrettyJSONFormatter)

    def test_file_handler(self, tmp_path):
        """Test file logging always writes JSON."""
        log_file = tmp_path / "logs" / "nlu.log"
        logger = setup_logging("nlucore_test_file", "INFO", "pretty", str(log_file))
        logger.info("Entities found", extra={'occurrences_count': 1})
        for handler in logger.handlers:
            handler.flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["occurrences_count"] == 1

    def test_from_config(self, monkeypatch):
        """Test the package logger follows the config values."""
        settings = NluConfig()
        monkeypatch.setattr(settings, "LOG_LEVEL", "WARNING")
        monkeypatch.setattr(settings, "LOG_FORMAT", "pretty")
        monkeypatch.setattr(settings, "DEBUG_NLP", False)
        logger = setup_logging_from_config(settings)
        try:
            assert logger.name == "nlucore"
            assert logger.level == logging.WARNING
            assert isinstance(logger.handlers[0].formatter, PrettyJSONFormatter)
        finally:
            logger.handlers = []
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    def test_debug_nlp_forces_debug_level(self, monkeypatch):
        """Test DEBUG_NLP overrides LOG_LEVEL for the package logger."""
        settings = NluConfig()
        monkeypatch.setattr(settings, "LOG_LEVEL", "WARNING")
        monkeypatch.setattr(settings, "DEBUG_NLP", True)
        logger = setup_logging_from_config(settings)
        try:
            assert logger.level == logging.DEBUG
            assert logger.handlers[0].level == logging.DEBUG
        finally:
            logger.handlers = []
            logger.propagate = True
            logger.setLevel(logging.NOTSET)


class TestLogFunctionCall:
    """Tests for the log_function_call decorator."""

    def test_logs_call_and_result(self, caplog):
        """Test call and completion summaries are logged."""
        @log_function_call()
        def find(utterance, locale):
            return [1, 2]

        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert find("I saw spiderman", "en") == [1, 2]

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.endswith("find() called") for m in messages)
        completed = [r for r in caplog.records if r.getMessage().endswith("find() completed")]
        assert completed[0].result_count == 2
        called = [r for r in caplog.records if r.getMessage().endswith("find() called")]
        assert called[0].arg_locale == "en"

    def test_logs_and_reraises_errors(self, caplog):
        """Test failures are logged with their type and re-raised."""
        @log_function_call()
        def broken():
            raise ValueError("bad input")

        with caplog.at_level(logging.DEBUG, logger=__name__):
            with pytest.raises(ValueError, match="bad input"):
                broken()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].error_type == "ValueError"
