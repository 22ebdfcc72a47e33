"""Tests for the weather resolver."""
import pytest
from datetime import datetime, timezone
from config import Settings
from openweather_models import (
    AlertDTO,
    AlertsResponse,
    ConditionDTO,
    CurrentWeatherResponse,
    ForecastEntryDTO,
    ForecastResponse,
    GeocodeMatch,
)
from weather_data import ForecastSnapshot, WeatherSnapshot
from weather_provider import ProviderResult, WeatherProviderBase, WeatherProviderError
from weather_service import Decision, WeatherResolver, is_valid_credential, resolve_credential

API_KEY = "0123456789abcdef0123456789abcdef"
NOW = datetime(2026, 4, 20, 12, 0, tzinfo=timezone.utc)


class MockProvider(WeatherProviderBase):
    """Mock weather provider for testing."""

    def __init__(self, geocode=None, alerts=None, current=None, forecast=None, raise_on_alerts=None):
        self.geocode_result = geocode or ProviderResult.success([GeocodeMatch(lat=19.07, lon=72.88)])
        self.alerts_result = alerts or ProviderResult.success(AlertsResponse(alerts=(
            AlertDTO("IMD", "Heavy Rain Warning", 1776686400, 1776772800, "Very heavy rain"),
        )))
        self.current_result = current or ProviderResult.success(CurrentWeatherResponse(
            name="Mumbai",
            temp=29.0,
            humidity=82,
            wind_speed=5.5,
            condition=ConditionDTO("Rain", "moderate rain", "10d"),
            rain_1h=3.2,
        ))
        self.forecast_result = forecast or ProviderResult.success(ForecastResponse(
            city_name="Mumbai",
            country="IN",
            entries=tuple(
                ForecastEntryDTO(
                    dt=1776686400 + i * 10800,
                    temp=28.0,
                    humidity=80,
                    wind_speed=4.0,
                    condition=ConditionDTO("Clouds", "broken clouds", "04d"),
                )
                for i in range(40)
            ),
        ))
        self.raise_on_alerts = raise_on_alerts
        self.calls = []

    def geocode(self, city):
        self.calls.append(("geocode", city))
        return self.geocode_result

    def get_alerts(self, lat, lon):
        self.calls.append(("alerts", lat, lon))
        if self.raise_on_alerts:
            raise self.raise_on_alerts
        return self.alerts_result

    def get_current(self, city):
        self.calls.append(("current", city))
        return self.current_result

    def get_forecast(self, city):
        self.calls.append(("forecast", city))
        return self.forecast_result


def _failure(message="boom"):
    return ProviderResult.failure(WeatherProviderError(message))


@pytest.fixture
def provider():
    return MockProvider()


@pytest.fixture
def factory_calls():
    return []


@pytest.fixture
def resolver(provider, factory_calls):
    def factory(key):
        factory_calls.append(key)
        return provider
    return WeatherResolver(provider_factory=factory, clock=lambda: NOW)


@pytest.mark.parametrize("credential,force,expected", [
    (API_KEY, True, Decision.SIMULATED_REQUESTED),
    (None, True, Decision.SIMULATED_REQUESTED),
    (None, False, Decision.NO_CREDENTIAL),
    ("", False, Decision.NO_CREDENTIAL),
    ("short", False, Decision.INVALID_CREDENTIAL),
    (API_KEY + "x", False, Decision.INVALID_CREDENTIAL),
    (API_KEY, False, Decision.LIVE),
])
def test_decision_table(credential, force, expected):
    assert WeatherResolver.decide(credential, force) is expected


def test_force_simulated_makes_no_upstream_calls(resolver, provider, factory_calls):
    result = resolver.resolve("Mumbai", forecast=False, credential=API_KEY, force_simulated=True)

    assert isinstance(result, WeatherSnapshot)
    assert result.simulated is True
    assert result.location == "Mumbai"
    assert factory_calls == []
    assert provider.calls == []


@pytest.mark.parametrize("credential", [None, "", "a" * 31, "a" * 33])
def test_unusable_credential_is_simulated(resolver, provider, credential):
    result = resolver.resolve("Delhi", forecast=True, credential=credential)

    assert isinstance(result, ForecastSnapshot)
    assert result.simulated is True
    assert provider.calls == []


def test_live_current(resolver, provider, factory_calls):
    result = resolver.resolve("Mumbai", credential=API_KEY)

    assert isinstance(result, WeatherSnapshot)
    assert result.simulated is False
    assert result.location == "Mumbai"
    assert result.temperature == 29.0
    assert result.rainfall == 3.2
    assert result.season == "spring"
    assert result.alerts[0].event == "Heavy Rain Warning"
    assert result.alerts[0].start == 1776686400 * 1000
    assert factory_calls == [API_KEY]
    assert provider.calls == [
        ("geocode", "Mumbai"),
        ("alerts", 19.07, 72.88),
        ("current", "Mumbai"),
    ]


def test_live_forecast_samples_five_days(resolver, provider):
    result = resolver.resolve("Mumbai", forecast=True, credential=API_KEY)

    assert isinstance(result, ForecastSnapshot)
    assert result.simulated is False
    assert result.country == "IN"
    assert len(result.forecast) == 5
    assert provider.calls[-1] == ("forecast", "Mumbai")


def test_alert_failure_is_not_fatal(provider, resolver):
    provider.alerts_result = _failure("401 One Call not subscribed")

    result = resolver.resolve("Mumbai", credential=API_KEY)

    assert result.simulated is False
    assert result.alerts == ()
    assert result.temperature == 29.0


def test_alert_exception_is_not_fatal(provider, resolver):
    provider.raise_on_alerts = RuntimeError("socket closed")

    result = resolver.resolve("Mumbai", credential=API_KEY)

    assert result.simulated is False
    assert result.alerts == ()


def test_geocode_failure_skips_alerts(provider, resolver):
    provider.geocode_result = _failure()

    result = resolver.resolve("Mumbai", credential=API_KEY)

    assert result.simulated is False
    assert result.alerts == ()
    assert [c[0] for c in provider.calls] == ["geocode", "current"]


def test_geocode_no_match_skips_alerts(provider, resolver):
    provider.geocode_result = ProviderResult.success([])

    result = resolver.resolve("Atlantis", credential=API_KEY)

    assert result.alerts == ()
    assert [c[0] for c in provider.calls] == ["geocode", "current"]


@pytest.mark.parametrize("forecast,expected_type", [
    (False, WeatherSnapshot),
    (True, ForecastSnapshot),
])
def test_primary_failure_falls_back(provider, resolver, forecast, expected_type):
    provider.current_result = _failure("OpenWeather API error 404: city not found")
    provider.forecast_result = _failure("OpenWeather API error 404: city not found")

    result = resolver.resolve("Atlantis", forecast=forecast, credential=API_KEY)

    assert isinstance(result, expected_type)
    assert result.simulated is True
    assert result.location == "Atlantis"


def test_unexpected_exception_falls_back(resolver, provider):
    def broken(city):
        raise ValueError("unexpected")

    provider.get_current = broken

    result = resolver.resolve("Mumbai", credential=API_KEY)

    assert isinstance(result, WeatherSnapshot)
    assert result.simulated is True


def test_resolve_credential_precedence():
    header = "h" * 32
    assert resolve_credential(Settings(api_key="s" * 32, public_api_key="p" * 32), header) == "s" * 32
    assert resolve_credential(Settings(public_api_key="p" * 32), header) == "p" * 32
    assert resolve_credential(Settings(), header) == header
    assert resolve_credential(Settings(), None) is None


def test_resolve_credential_does_not_skip_invalid_higher_source():
    # An invalid server key still wins; the request then runs simulated
    assert resolve_credential(Settings(api_key="bad"), "h" * 32) == "bad"


def test_is_valid_credential():
    assert is_valid_credential(API_KEY) is True
    assert is_valid_credential(API_KEY[:-1]) is False
    assert is_valid_credential(None) is False
