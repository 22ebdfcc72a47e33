"""Client-side controller for the garden weather panel."""
import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import requests

from client_storage import ClientStorage
from weather_data import ForecastSnapshot, WeatherAlert, WeatherSnapshot, now_ms
from weather_service import is_valid_credential

LAST_CITY_KEY = "last-weather-city"
API_KEY_KEY = "openweather-api-key"


class WeatherClientError(Exception):
    """The weather API answered a request with an error."""
    pass


class City(NamedTuple):
    name: str
    state: str


# Quick-select cities; the first one is the default
DEFAULT_CITIES = (
    City("Delhi", "Delhi"),
    City("Mumbai", "Maharashtra"),
    City("Bangalore", "Karnataka"),
    City("Chennai", "Tamil Nadu"),
    City("Kolkata", "West Bengal"),
    City("Hyderabad", "Telangana"),
    City("Pune", "Maharashtra"),
    City("Jaipur", "Rajasthan"),
)

HEAT_TIP = ("High temperatures today. Your plants will need extra water - "
            "consider watering in the evening to reduce evaporation.")
RAIN_TIP = "Rainy conditions today. Skip watering and check for any drainage issues in your garden."
FROST_TIP = "Cold temperatures expected. Consider covering sensitive plants to protect from frost damage."
WARM_TIP = "Warm weather today. Water deeply in the morning to help plants withstand the heat."
IDEAL_TIP = "Ideal growing conditions today. A great day for garden maintenance and planting."


def derive_tip(snapshot: Optional[WeatherSnapshot]) -> str:
    """Gardening advice for the current conditions (first matching rule wins)."""
    if snapshot is None:
        return ""

    temp = snapshot.temperature
    condition = snapshot.condition.lower()

    if temp > 30:
        return HEAT_TIP
    if "rain" in condition:
        return RAIN_TIP
    if temp < 10:
        return FROST_TIP
    if 25 < temp <= 30:
        return WARM_TIP
    return IDEAL_TIP


def relevant_alerts(snapshot, now: Optional[int] = None) -> List[WeatherAlert]:
    """Alerts that have not yet ended, in their original order."""
    if snapshot is None:
        return []
    now = now_ms() if now is None else now
    return [alert for alert in snapshot.alerts if alert.is_relevant(now)]


def active_alerts(snapshot, now: Optional[int] = None) -> List[WeatherAlert]:
    """Alerts in effect right now."""
    if snapshot is None:
        return []
    now = now_ms() if now is None else now
    return [alert for alert in snapshot.alerts if alert.is_active(now)]


def alert_severity(event: str) -> str:
    event_lower = event.lower()
    if any(word in event_lower for word in ("warning", "severe", "extreme")):
        return "high"
    if any(word in event_lower for word in ("watch", "advisory")):
        return "moderate"
    return "info"


def condition_category(condition: str) -> str:
    """Bucket a provider condition into rain / clear / cloud for display."""
    condition_lower = condition.lower()
    if any(word in condition_lower for word in ("rain", "drizzle", "shower")):
        return "rain"
    if "clear" in condition_lower or "sun" in condition_lower:
        return "clear"
    return "cloud"


@dataclass
class WeatherSession:
    """State of one client session; replaced wholesale by each completed fetch."""
    city: str = ""
    credential: Optional[str] = None
    use_simulated: bool = True
    weather: Optional[WeatherSnapshot] = None
    forecast: Optional[ForecastSnapshot] = None
    error: Optional[str] = None
    loading: bool = False

    @property
    def tip(self) -> str:
        return derive_tip(self.weather)

    def relevant_alerts(self, now: Optional[int] = None) -> List[WeatherAlert]:
        return relevant_alerts(self.weather, now)


class WeatherClient:
    """
    Drives the weather API on behalf of a user session.

    Current conditions are fetched before the forecast; only failures of the
    current fetch are surfaced (as ``session.error``). Overlapping fetches are
    not coordinated: whichever completes last wins.
    """

    def __init__(
        self,
        storage: ClientStorage,
        base_url: str,
        env_credential: Optional[str] = None,
        http=None,
        default_city: str = DEFAULT_CITIES[0].name,
        timeout: int = 10,
    ):
        """
        Initialize the client.

        Args:
            storage: Durable store for the last city and a user-supplied key
            base_url: Root URL of the weather API (e.g. "http://127.0.0.1:8000")
            env_credential: API key from deployment config; beats any saved key
            http: Object with a requests-style ``get``; a requests.Session by default
            default_city: City used when none has been saved
            timeout: HTTP timeout in seconds
        """
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.env_credential = env_credential
        self.http = http if http is not None else requests.Session()
        self.default_city = default_city
        self.timeout = timeout
        self.session: Optional[WeatherSession] = None

    def start(self) -> WeatherSession:
        """Restore credential and city, then load weather for that city."""
        self.session = WeatherSession()

        if self.env_credential:
            self.session.credential = self.env_credential
            self.session.use_simulated = False
        else:
            saved_key = self.storage.get(API_KEY_KEY)
            if is_valid_credential(saved_key):
                self.session.credential = saved_key
                self.session.use_simulated = False
            else:
                self.storage.remove(API_KEY_KEY)
                self.session.use_simulated = True

        self.session.city = self.storage.get(LAST_CITY_KEY) or self.default_city
        logging.info(
            "Weather session started: city=%s simulated=%s",
            self.session.city,
            self.session.use_simulated,
        )
        self.fetch_both(self.session.city)
        return self.session

    def close(self) -> None:
        self.session = None
        close = getattr(self.http, "close", None)
        if callable(close):
            close()

    def _require_session(self) -> WeatherSession:
        if self.session is None:
            raise RuntimeError("WeatherClient.start() must be called first")
        return self.session

    def _request(self, city: str, forecast: bool):
        session = self._require_session()
        params = {"city": city}
        if forecast:
            params["forecast"] = "true"
        if session.use_simulated:
            params["mock"] = "true"
        headers = {}
        if session.credential and not session.use_simulated:
            headers["X-API-Key"] = session.credential
        return self.http.get(f"{self.base_url}/weather", params=params, headers=headers, timeout=self.timeout)

    def fetch_current(self, city: str) -> Optional[WeatherSnapshot]:
        session = self._require_session()
        if not city or not city.strip():
            return None

        session.loading = True
        session.error = None
        try:
            logging.info(f"Fetching weather for: {city}")
            response = self._request(city, forecast=False)
            logging.debug(f"Response status: {response.status_code}")

            if not 200 <= response.status_code < 300:
                try:
                    message = response.json().get("error")
                except (ValueError, AttributeError):
                    message = None
                raise WeatherClientError(message or f"Weather API error: {response.status_code}")

            weather = WeatherSnapshot.from_dict(response.json())
            session.weather = weather
            session.city = city
            self.storage.set(LAST_CITY_KEY, city)
            session.error = None

            in_effect = active_alerts(weather)
            if in_effect:
                logging.warning(f"{len(in_effect)} active weather alert(s) for {city}")
            return weather

        except (requests.exceptions.RequestException, WeatherClientError, ValueError, KeyError, TypeError, AttributeError) as e:
            logging.error(f"Error fetching current weather data: {e}")
            session.error = str(e) or "Failed to fetch weather data. Please try again later."
            return None
        finally:
            session.loading = False

    def fetch_forecast(self, city: str) -> Optional[ForecastSnapshot]:
        session = self._require_session()
        if not city or not city.strip():
            return None

        try:
            response = self._request(city, forecast=True)
            if 200 <= response.status_code < 300:
                session.forecast = ForecastSnapshot.from_dict(response.json())
                return session.forecast
            logging.debug(f"Forecast request returned {response.status_code}")
        except Exception as e:
            # Forecast is secondary; never surface its failure
            logging.error(f"Error fetching forecast data: {e}")
        return None

    def fetch_both(self, city: str) -> None:
        self.fetch_current(city)
        self.fetch_forecast(city)

    def submit_credential(self, value: str) -> None:
        session = self._require_session()
        session.credential = value
        self.storage.set(API_KEY_KEY, value)
        session.error = None
        session.use_simulated = False
        logging.info("API key saved, switching to live weather data")
        if session.city:
            self.fetch_both(session.city)

    def toggle_simulated(self, on: bool) -> None:
        session = self._require_session()
        session.use_simulated = on
        if session.city:
            self.fetch_both(session.city)

    def select_city(self, city: str) -> None:
        session = self._require_session()
        if not city or not city.strip():
            session.error = "Please enter a city name"
            return
        session.city = city
        self.fetch_both(city)

    def dismiss_error(self) -> None:
        self._require_session().error = None
