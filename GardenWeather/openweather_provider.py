"""OpenWeather provider implementation (geocoding, One Call alerts, current, forecast)."""
import logging
from typing import Any, Callable, Dict

import requests

from openweather_models import AlertsResponse, CurrentWeatherResponse, ForecastResponse, GeocodeMatch
from weather_provider import ProviderResult, WeatherProviderBase, WeatherProviderError


def mask_key(api_key: str) -> str:
    """Shorten an API key for log output."""
    return f"{api_key[:8]}..." if api_key else "<none>"


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider backed by the OpenWeather APIs.

    Current conditions and the forecast use the free 2.5 endpoints keyed by
    city name; alerts need coordinates and come from One Call 3.0, so they
    are looked up through the geocoding API first.
    """

    GEO_URL = "https://api.openweathermap.org/geo/1.0/direct"
    ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
    CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
    FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
    USER_AGENT = "Smart Garden Planner/1.0"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "hi")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def geocode(self, city: str) -> ProviderResult:
        params = {"q": city, "limit": 1}
        return self._request(self.GEO_URL, params, GeocodeMatch.list_from_json)

    def get_alerts(self, lat: float, lon: float) -> ProviderResult:
        params = {"lat": lat, "lon": lon, "exclude": "minutely,hourly,daily"}
        return self._request(self.ONECALL_URL, params, AlertsResponse.from_json)

    def get_current(self, city: str) -> ProviderResult:
        params = {"q": city, "units": self.units, "lang": self.lang}
        return self._request(self.CURRENT_URL, params, CurrentWeatherResponse.from_json)

    def get_forecast(self, city: str) -> ProviderResult:
        params = {"q": city, "units": self.units, "lang": self.lang}
        return self._request(self.FORECAST_URL, params, ForecastResponse.from_json)

    def _request(
        self,
        url: str,
        params: Dict[str, Any],
        parse: Callable[[Any], Any],
    ) -> ProviderResult:
        """GET ``url`` and parse the JSON body, wrapping every failure in the result."""
        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: {params} (key {mask_key(self.api_key)})")

            response = requests.get(
                url,
                params={**params, "appid": self.api_key},
                headers={"User-Agent": self.USER_AGENT},
                timeout=self.timeout,
            )

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                return ProviderResult.failure(self._error_from_response(response))

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            return ProviderResult.success(parse(data))

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            return ProviderResult.failure(WeatherProviderError(f"Network error: {str(e)}"))
        except WeatherProviderError as e:
            logging.error(f"Unexpected API response shape: {e}")
            return ProviderResult.failure(e)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            return ProviderResult.failure(WeatherProviderError(f"Failed to parse response: {str(e)}"))

    def _error_from_response(self, response: requests.Response) -> WeatherProviderError:
        """Build an error from an OpenWeather error response."""
        try:
            error_data = response.json()
            cod = error_data.get("cod", response.status_code)
            message = error_data.get("message", "Unknown error")
            logging.error(f"OpenWeather API error response: {error_data}")
            return WeatherProviderError(
                f"OpenWeather API error {cod}: {message}",
                status_code=response.status_code,
            )
        except (ValueError, AttributeError):
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            return WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
