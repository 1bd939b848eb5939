"""Settings validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from prompt_history.core.config import Settings
from prompt_history.core.sentry import _scrub_sensitive_data, init_sentry


def test_defaults():
    s = Settings(_env_file=None)
    assert s.MAX_VERSIONS == 50
    assert s.LOG_FORMAT == "console"


def test_max_versions_from_env(monkeypatch):
    monkeypatch.setenv("MAX_VERSIONS", "7")
    assert Settings(_env_file=None).MAX_VERSIONS == 7


@pytest.mark.parametrize("value", [0, -3])
def test_max_versions_must_be_positive(value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, MAX_VERSIONS=value)


def test_log_format_is_validated():
    assert Settings(_env_file=None, LOG_FORMAT="json").LOG_FORMAT == "json"
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LOG_FORMAT="xml")


def test_sentry_disabled_without_dsn():
    assert init_sentry(None) is False
    assert init_sentry("") is False


def test_sentry_events_drop_prompt_text_and_credentials():
    event = {
        "request": {
            "headers": {"Authorization": "Bearer abc", "Accept": "application/json"},
            "data": {"content": "You are a secret system prompt."},
        }
    }

    scrubbed = _scrub_sensitive_data(event, {})

    assert scrubbed["request"]["data"] == "[REDACTED]"
    assert scrubbed["request"]["headers"]["Authorization"] == "[REDACTED]"
    assert scrubbed["request"]["headers"]["Accept"] == "application/json"


def test_sentry_scrub_tolerates_events_without_request():
    assert _scrub_sensitive_data({"message": "boom"}, {}) == {"message": "boom"}
