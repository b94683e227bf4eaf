"""
Tests for potkit.core.logging.

Tests verify:
- JSON output carries event, level and service
- DEBUG logs are suppressed at INFO level
- Pot field values rendered as state summaries
"""

import json
import logging

import structlog

from potkit.core.logging import configure_from_settings, configure_logging, get_logger
from potkit.core.pot import FailedStale, Pending, Ready
from potkit.core.settings import PotSettings


class TestConfigureLogging:
    def test_json_output(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True, service="profile-view")
        get_logger("potkit.test").info("profile_loaded", user_id=42)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "profile_loaded"
        assert payload["user_id"] == 42
        assert payload["service"] == "profile-view"
        assert payload["level"] == "info"
        assert "timestamp" in payload

    def test_debug_suppressed_at_info(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True)
        get_logger("potkit.test").debug("noise")
        assert not any("noise" in r.getMessage() for r in caplog.records)

    def test_configure_from_settings(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_from_settings(PotSettings(log_level="DEBUG", log_json=True, service="svc"))
        get_logger("potkit.test").debug("visible")
        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "visible"
        assert payload["service"] == "svc"


class TestPotFields:
    def test_pot_rendered_as_summary(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True)
        get_logger("potkit.test").info("profile_shown", profile=Pending(2, 0))

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["profile"] == {"state": "PENDING", "stale": False, "retries_left": 2}

    def test_stale_value_not_logged(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True)
        pot = FailedStale("secret-token", ValueError("boom"), 1)
        get_logger("potkit.test").info("profile_shown", profile=pot, other=Ready(1).to_dict())

        message = caplog.records[-1].getMessage()
        assert "secret-token" not in message
        payload = json.loads(message)
        assert payload["profile"] == {"state": "FAILED", "stale": True, "retries_left": 1}
        assert payload["other"]["state"] == "READY"

    def test_context_vars_merged(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True)
        structlog.contextvars.bind_contextvars(resource="users")
        get_logger("potkit.test").info("fetch_started")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["resource"] == "users"
