"""Simulated weather used whenever live data is unavailable or not wanted."""
import random
import zlib
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional, Union

from normalize import MAX_FORECAST_DAYS, isoformat
from seasons import get_season
from weather_data import ForecastDay, ForecastSnapshot, WeatherSnapshot

SIMULATED_COUNTRY = "IN"


class _Condition(NamedTuple):
    main: str
    description: str
    icon: str
    rainy: bool


CONDITIONS = (
    _Condition("Clear", "clear sky", "01d", False),
    _Condition("Clouds", "few clouds", "02d", False),
    _Condition("Clouds", "scattered clouds", "03d", False),
    _Condition("Clouds", "broken clouds", "04d", False),
    _Condition("Haze", "haze", "50d", False),
    _Condition("Rain", "light rain", "10d", True),
    _Condition("Rain", "moderate rain", "10d", True),
    _Condition("Thunderstorm", "thunderstorm with rain", "11d", True),
)


def _rng(city: str, salt: str = "") -> random.Random:
    # Seeded from the city name so a city always simulates the same way
    return random.Random(zlib.crc32(f"{city.strip().lower()}|{salt}".encode("utf-8")))


def _reading(rng: random.Random, rain_scale: float):
    condition = rng.choice(CONDITIONS)
    temperature = round(rng.uniform(5.0, 38.0), 1)
    humidity = rng.randint(20, 95)
    wind_speed = round(rng.uniform(0.5, 9.0), 1)
    rainfall = round(rng.uniform(0.2, rain_scale), 1) if condition.rainy else 0.0
    return condition, temperature, humidity, wind_speed, rainfall


def simulated_current(city: str, now: Optional[datetime] = None) -> WeatherSnapshot:
    now = now or datetime.now(timezone.utc)
    condition, temperature, humidity, wind_speed, rainfall = _reading(_rng(city), 5.0)
    return WeatherSnapshot(
        location=city,
        temperature=temperature,
        condition=condition.main,
        description=condition.description,
        humidity=humidity,
        rainfall=rainfall,
        wind_speed=wind_speed,
        icon=condition.icon,
        timestamp=isoformat(now),
        season=get_season(now).value,
        alerts=(),
        simulated=True,
    )


def simulated_forecast(city: str, now: Optional[datetime] = None) -> ForecastSnapshot:
    now = now or datetime.now(timezone.utc)
    days = []
    for offset in range(MAX_FORECAST_DAYS):
        condition, temperature, humidity, wind_speed, rainfall = _reading(_rng(city, str(offset)), 12.0)
        days.append(ForecastDay(
            date=isoformat(now + timedelta(days=offset)),
            temperature=temperature,
            condition=condition.main,
            description=condition.description,
            humidity=humidity,
            rainfall=rainfall,
            wind_speed=wind_speed,
            icon=condition.icon,
        ))
    return ForecastSnapshot(
        location=city,
        country=SIMULATED_COUNTRY,
        forecast=tuple(days),
        timestamp=isoformat(now),
        season=get_season(now).value,
        alerts=(),
        simulated=True,
    )


def simulated_weather(
    city: str,
    forecast: bool = False,
    now: Optional[datetime] = None,
) -> Union[WeatherSnapshot, ForecastSnapshot]:
    if forecast:
        return simulated_forecast(city, now)
    return simulated_current(city, now)
