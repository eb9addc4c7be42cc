"""Tests for settings resolution."""

from user_admin.core.config import AppSettings, DatabaseSettings, settings


def test_testing_environment_loaded() -> None:
    assert settings.app_env == "testing"
    assert settings.database.url == "sqlite://"


def test_defaults_match_daily_budget(monkeypatch) -> None:
    monkeypatch.delenv("APP_DAILY_REQUEST_LIMIT", raising=False)
    monkeypatch.delenv("APP_REQUEST_COUNT_RESET_SECONDS", raising=False)

    app_settings = AppSettings()

    assert app_settings.daily_request_limit == 50
    assert app_settings.request_count_reset_seconds == 24 * 60 * 60


def test_limit_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("APP_DAILY_REQUEST_LIMIT", "5")

    assert AppSettings().daily_request_limit == 5


def test_echo_defaults_to_development_only() -> None:
    db = DatabaseSettings(url="sqlite://", echo=None)

    assert db.resolve_echo("development") is True
    assert db.resolve_echo("production") is False
    assert DatabaseSettings(url="sqlite://", echo=True).resolve_echo("production") is True
