"""Tests for structured logging configuration."""

import json
import logging

import structlog

from cli.logging_config import _redact_sensitive, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_level_filtering(self):
        """Log level filters lower messages."""
        setup_logging(json_mode=False, level="WARNING")
        root = logging.getLogger()
        assert root.level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_json_file_handler(self, tmp_path):
        """Log file receives JSON lines even below the console level."""
        log_file = tmp_path / "logs" / "declutter.log"
        setup_logging(json_mode=False, level="WARNING", log_file=log_file)
        logging.getLogger("test_file").debug("scan_started")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["event"] == "scan_started"

    def test_processor_chain(self):
        setup_logging(json_mode=True, level="DEBUG")
        assert _redact_sensitive in structlog.get_config()["processors"]


class TestRedaction:
    def test_anthropic_key(self):
        out = _redact_sensitive(None, None, {"event": "key sk-ant-REDACTED"})
        assert "1234567890" not in out["event"]
        assert "REDACTED" in out["event"]

    def test_email(self):
        out = _redact_sensitive(None, None, {"event": "invite", "to": "alex@example.com"})
        assert out["to"] == "REDACTED@email"

    def test_non_strings_untouched(self):
        assert _redact_sensitive(None, None, {"n": 5})["n"] == 5
