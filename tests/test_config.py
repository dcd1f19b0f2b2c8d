"""Tests for environment-driven settings."""

from __future__ import annotations

from dereferrer.config import Settings, settings
from dereferrer.middleware import DereferrerConfig


def test_default_user_agent(monkeypatch):
    monkeypatch.delenv("DEREFERRER_USER_AGENT", raising=False)
    assert Settings().user_agent == "dereferrerBot/1.0.0"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEREFERRER_USER_AGENT", "customBot/9")
    monkeypatch.setenv("DEREFERRER_QUERY_NAME", "from")
    monkeypatch.setenv("DEREFERRER_ERRORS", "false")
    monkeypatch.setenv("DEREFERRER_ALLOWED_SCHEMES", "HTTPS")

    s = Settings()
    assert s.user_agent == "customBot/9"
    assert s.query_name == "from"
    assert s.errors is False
    assert s.allowed_schemes == ("https",)


def test_query_name_false_disables_fallback(monkeypatch):
    monkeypatch.setenv("DEREFERRER_QUERY_NAME", "false")
    assert Settings().query_name is False


def test_middleware_config_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "errors", False)
    monkeypatch.setattr(settings, "query_name", "src")

    config = settings.middleware_config()
    assert isinstance(config, DereferrerConfig)
    assert config.errors is False
    assert config.query_name == "src"
