"""Tests for configuration loading."""
import pytest
from unittest.mock import patch
from config import DEFAULT_STORAGE_PATH, Settings, load_settings

ENV_VARS = (
    "OPENWEATHER_API_KEY",
    "OPENWEATHER_PUBLIC_API_KEY",
    "WEATHER_LANG",
    "WEATHER_TIMEOUT",
    "DEFAULT_CITY",
    "WEATHER_API_URL",
    "GARDEN_STORAGE_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env file out of the picture
    with patch("config.load_dotenv"):
        yield


def test_defaults():
    assert load_settings() == Settings(storage_path=DEFAULT_STORAGE_PATH)


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "s" * 32)
    monkeypatch.setenv("OPENWEATHER_PUBLIC_API_KEY", "p" * 32)
    monkeypatch.setenv("WEATHER_LANG", "hi")
    monkeypatch.setenv("WEATHER_TIMEOUT", "4")
    monkeypatch.setenv("DEFAULT_CITY", "Pune")
    monkeypatch.setenv("WEATHER_API_URL", "http://weather.local:9000")
    monkeypatch.setenv("GARDEN_STORAGE_PATH", "/tmp/garden.json")

    settings = load_settings()

    assert settings.api_key == "s" * 32
    assert settings.public_api_key == "p" * 32
    assert settings.lang == "hi"
    assert settings.timeout == 4
    assert settings.default_city == "Pune"
    assert settings.api_url == "http://weather.local:9000"
    assert settings.storage_path == "/tmp/garden.json"


def test_empty_key_is_unset(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "")
    assert load_settings().api_key is None


def test_invalid_timeout_exits(monkeypatch):
    monkeypatch.setenv("WEATHER_TIMEOUT", "soon")
    with pytest.raises(SystemExit):
        load_settings()
