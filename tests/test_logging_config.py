"""Tests for structured logging configuration."""

import json
import logging

import structlog

from cli.logging_config import MAX_PAYLOAD_CHARS, _scrub, setup_logging


class TestLoggingConfig:
    def test_json_mode_emits_json(self, capsys):
        setup_logging(json_mode=True, level="DEBUG")
        structlog.get_logger("notes_test").info("json test")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "json test"
        assert payload["level"] == "info"
        assert payload["timestamp"].endswith("Z")

    def test_json_mode_caps_envelope(self, capsys):
        setup_logging(json_mode=True, level="DEBUG")
        structlog.get_logger("notes_test").debug("raw", envelope={"data": ["x" * 50] * 200})
        payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert len(payload["envelope"]) < MAX_PAYLOAD_CHARS + 40
        assert payload["envelope"].endswith("chars]")

    def test_console_mode_smoke(self, capsys):
        setup_logging(json_mode=False, level="DEBUG")
        structlog.get_logger().info("console message", key="value")
        assert "console message" in capsys.readouterr().err

    def test_level_filtering(self):
        setup_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_single_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_http_loggers_quiet_unless_debug(self):
        setup_logging(level="INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.DEBUG


class TestScrub:
    def test_bearer_token(self):
        out = _scrub(None, None, {"event": "Authorization: Bearer abcdef123456789"})
        assert "abcdef123456789" not in out["event"]
        assert "Bearer REDACTED" in out["event"]

    def test_api_token_assignment(self):
        out = _scrub(None, None, {"event": "api_token=supersecretvalue"})
        assert out["event"] == "api_token=REDACTED"

    def test_small_payload_kept_whole(self):
        out = _scrub(None, None, {"event": "raw", "record": {"_id": "n-1"}})
        assert out["record"] == "{'_id': 'n-1'}"

    def test_large_payload_truncated(self):
        out = _scrub(None, None, {"event": "raw", "envelope": "y" * (MAX_PAYLOAD_CHARS + 500)})
        assert out["envelope"].startswith("y" * MAX_PAYLOAD_CHARS)
        assert out["envelope"].endswith(f"[{MAX_PAYLOAD_CHARS + 500} chars]")

    def test_token_inside_payload_masked(self):
        out = _scrub(None, None, {"event": "raw", "envelope": {"auth": "Bearer abcdef123456789"}})
        assert "abcdef123456789" not in out["envelope"]

    def test_non_strings_untouched(self):
        out = _scrub(None, None, {"count": 3})
        assert out == {"count": 3}
