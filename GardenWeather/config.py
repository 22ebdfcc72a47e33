"""Environment-driven configuration."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_STORAGE_PATH = os.path.join(os.path.expanduser("~"), ".garden-weather.json")


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None  # server-side secret
    public_api_key: Optional[str] = None  # key exposed to clients
    lang: str = "en"
    timeout: int = 10
    default_city: str = "Delhi"
    api_url: str = "http://127.0.0.1:8000"
    storage_path: str = DEFAULT_STORAGE_PATH


def load_settings() -> Settings:
    load_dotenv()

    timeout = os.getenv("WEATHER_TIMEOUT", "10")
    try:
        timeout_val = int(timeout)
    except ValueError as exc:
        raise SystemExit(f"Invalid WEATHER_TIMEOUT: {exc}") from exc

    settings = Settings(
        api_key=os.getenv("OPENWEATHER_API_KEY") or None,
        public_api_key=os.getenv("OPENWEATHER_PUBLIC_API_KEY") or None,
        lang=os.getenv("WEATHER_LANG", "en"),
        timeout=timeout_val,
        default_city=os.getenv("DEFAULT_CITY", "Delhi"),
        api_url=os.getenv("WEATHER_API_URL", "http://127.0.0.1:8000"),
        storage_path=os.path.expanduser(os.getenv("GARDEN_STORAGE_PATH", DEFAULT_STORAGE_PATH)),
    )
    logging.info(
        "Configuration loaded: server key=%s public key=%s lang=%s timeout=%ss",
        "set" if settings.api_key else "unset",
        "set" if settings.public_api_key else "unset",
        settings.lang,
        settings.timeout,
    )
    return settings
