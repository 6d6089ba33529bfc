"""
Unit tests for environment-driven configuration and logging setup.
"""

import json
import logging

import pytest

from clinic.core.config import (
    DEFAULT_RECENT_VISITS_LIMIT,
    get_log_settings,
    get_recent_visits_limit,
)
from clinic.core.logging_config import JSONFormatter


@pytest.mark.unit
class TestRecentVisitsLimit:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("RECENT_VISITS_LIMIT", raising=False)

        assert get_recent_visits_limit() == DEFAULT_RECENT_VISITS_LIMIT == 3

    def test_override(self, monkeypatch):
        monkeypatch.setenv("RECENT_VISITS_LIMIT", "5")

        assert get_recent_visits_limit() == 5

    @pytest.mark.parametrize("raw", ["abc", "0", "-2"])
    def test_invalid_values_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("RECENT_VISITS_LIMIT", raw)

        assert get_recent_visits_limit() == 3


@pytest.mark.unit
class TestLogSettings:
    def test_testing_disables_file_logging_by_default(self, monkeypatch):
        monkeypatch.setenv("TESTING", "true")
        monkeypatch.delenv("LOG_TO_FILE", raising=False)

        assert get_log_settings()["log_to_file"] is False

    def test_json_format_in_production(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "production")
        monkeypatch.delenv("LOG_JSON", raising=False)

        assert get_log_settings()["use_json_format"] is True


@pytest.mark.unit
class TestJSONFormatter:
    def test_context_is_emitted(self):
        record = logging.LogRecord(
            "clinic.test", logging.INFO, __file__, 10, "Visit recorded", None, None
        )
        record.context = {"visit_id": 3}

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "Visit recorded"
        assert payload["level"] == "INFO"
        assert payload["context"] == {"visit_id": 3}
