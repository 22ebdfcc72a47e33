"""Weather resolver: live OpenWeather data with a simulated fallback."""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from config import Settings
from normalize import normalize_alerts, normalize_current, normalize_forecast
from openweather_provider import OpenWeatherProvider, mask_key
from simulated_weather import simulated_weather
from weather_data import ForecastSnapshot, WeatherAlert, WeatherSnapshot
from weather_provider import WeatherProviderBase

# OpenWeather API keys are 32 characters long
CREDENTIAL_LENGTH = 32

Snapshot = Union[WeatherSnapshot, ForecastSnapshot]


class Decision(str, Enum):
    SIMULATED_REQUESTED = "simulated_requested"
    NO_CREDENTIAL = "no_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    LIVE = "live"


def is_valid_credential(credential: Optional[str]) -> bool:
    return isinstance(credential, str) and len(credential) == CREDENTIAL_LENGTH


def resolve_credential(settings: Settings, header_value: Optional[str] = None) -> Optional[str]:
    """
    Pick the API key for a request.

    Server secret, then public config value, then the request header. The
    first one present wins; they are never combined.
    """
    for candidate in (settings.api_key, settings.public_api_key, header_value):
        if candidate:
            return candidate
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherResolver:
    """
    Produces a weather payload for a city, never failing outward.

    Live data is attempted only when a usable credential is available; any
    failure on the way degrades to simulated data of the requested shape.
    Alerts and geocoding are best-effort and never abort the primary fetch.
    """

    def __init__(
        self,
        provider_factory: Optional[Callable[[str], WeatherProviderBase]] = None,
        clock: Callable[[], datetime] = _utcnow,
        lang: str = "en",
        timeout: int = 10,
    ):
        """
        Initialize the resolver.

        Args:
            provider_factory: Builds a provider for a given API key
            clock: Source of "now" for timestamps and season
            lang: Description language passed to the default provider
            timeout: HTTP timeout in seconds for the default provider
        """
        self.provider_factory = provider_factory or (
            lambda key: OpenWeatherProvider(api_key=key, lang=lang, timeout=timeout)
        )
        self.clock = clock

    @staticmethod
    def decide(credential: Optional[str], force_simulated: bool) -> Decision:
        """Apply the fallback rules in priority order; first match wins."""
        if force_simulated:
            return Decision.SIMULATED_REQUESTED
        if not credential:
            return Decision.NO_CREDENTIAL
        if not is_valid_credential(credential):
            return Decision.INVALID_CREDENTIAL
        return Decision.LIVE

    def resolve(
        self,
        city: str,
        forecast: bool = False,
        credential: Optional[str] = None,
        force_simulated: bool = False,
    ) -> Snapshot:
        decision = self.decide(credential, force_simulated)
        if decision is not Decision.LIVE:
            logging.info(f"Using simulated weather for {city!r} ({decision.value})")
            return self._simulated(city, forecast)

        try:
            return self._resolve_live(city, forecast, credential)
        except Exception as exc:
            logging.exception("Unexpected error resolving weather for %r: %s", city, exc)
            return self._simulated(city, forecast)

    def _simulated(self, city: str, forecast: bool) -> Snapshot:
        return simulated_weather(city, forecast=forecast, now=self.clock())

    def _resolve_live(self, city: str, forecast: bool, credential: str) -> Snapshot:
        logging.info(f"Resolving live weather for {city!r} with key {mask_key(credential)}")
        provider = self.provider_factory(credential)

        try:
            alerts = self._fetch_alerts(provider, city)
        except Exception as exc:
            logging.warning(f"Alert lookup raised, continuing without alerts: {exc}")
            alerts = ()

        result = provider.get_forecast(city) if forecast else provider.get_current(city)
        if not result.ok:
            logging.warning(f"Weather fetch failed, using simulated data: {result.error}")
            return self._simulated(city, forecast)

        now = self.clock()
        if forecast:
            snapshot = normalize_forecast(result.value, alerts, now)
        else:
            snapshot = normalize_current(result.value, alerts, now)
        logging.info(f"Live weather resolved for {snapshot.location or city!r}")
        return snapshot

    def _fetch_alerts(self, provider: WeatherProviderBase, city: str) -> Tuple[WeatherAlert, ...]:
        """Geocode the city and fetch its alerts; any miss yields no alerts."""
        geo = provider.geocode(city)
        if not geo.ok:
            logging.info(f"Geocoding failed for {city!r}, continuing without alerts: {geo.error}")
            return ()
        if not geo.value:
            logging.info(f"No geocoding match for {city!r}, continuing without alerts")
            return ()

        match = geo.value[0]
        alerts = provider.get_alerts(match.lat, match.lon)
        if not alerts.ok:
            logging.info(f"Could not fetch alerts, continuing without them: {alerts.error}")
            return ()

        parsed = normalize_alerts(alerts.value)
        logging.debug(f"Fetched {len(parsed)} alert(s) for {city!r}")
        return parsed
