"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from openweather_provider import OpenWeatherProvider
from weather_service import WeatherResolver


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    api_key = os.environ.get("OPENWEATHER_API_KEY")

    provider = OpenWeatherProvider(api_key=api_key, units="metric")

    result = provider.get_current("Delhi")

    assert result.ok, result.error
    assert result.value.name
    assert result.value.condition.main


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_resolver_integration():
    """Integration test for WeatherResolver with the real API."""
    api_key = os.environ.get("OPENWEATHER_API_KEY")

    resolver = WeatherResolver()

    current = resolver.resolve("Mumbai", credential=api_key)
    forecast = resolver.resolve("Mumbai", forecast=True, credential=api_key)

    assert current.simulated is False
    assert current.location
    assert forecast.simulated is False
    assert 1 <= len(forecast.forecast) <= 5
