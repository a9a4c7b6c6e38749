"""Tests for environment configuration."""

from itgfetch.config import DEFAULT_EXTRAS_URL, Settings


def test_defaults(monkeypatch):
    for name in ("EXTRAS_API_URL", "EXTRAS_API_KEY", "FETCH_TIMEOUT", "FETCH_USER_AGENT", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.extras_api_url == DEFAULT_EXTRAS_URL
    assert settings.extras_api_key == ""
    assert settings.timeout == 30
    assert settings.user_agent == "itgfetch/1.0"
    assert settings.port == 8000


def test_from_env(monkeypatch):
    monkeypatch.setenv("EXTRAS_API_URL", "https://extras.example:5100")
    monkeypatch.setenv("EXTRAS_API_KEY", "k3y")
    monkeypatch.setenv("FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.extras_api_url == "https://extras.example:5100"
    assert settings.extras_api_key == "k3y"
    assert settings.timeout == 2.5
    assert settings.log_level == "debug"
