"""Map OpenWeather DTOs onto the domain model."""
from datetime import datetime, timezone
from typing import Iterable, Tuple

from openweather_models import AlertDTO, AlertsResponse, CurrentWeatherResponse, ForecastResponse
from seasons import get_season
from weather_data import ForecastDay, ForecastSnapshot, WeatherAlert, WeatherSnapshot

# Forecast API reports in 3-hour buckets: 8 buckets per day.
ENTRIES_PER_DAY = 8
MAX_FORECAST_DAYS = 5


def isoformat(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def normalize_alert(dto: AlertDTO) -> WeatherAlert:
    return WeatherAlert(
        sender=dto.sender_name,
        event=dto.event,
        start=dto.start * 1000,
        end=dto.end * 1000,
        description=dto.description,
        tags=dto.tags,
    )


def normalize_alerts(dto: AlertsResponse) -> Tuple[WeatherAlert, ...]:
    return tuple(normalize_alert(alert) for alert in dto.alerts)


def normalize_current(
    dto: CurrentWeatherResponse,
    alerts: Iterable[WeatherAlert],
    now: datetime,
) -> WeatherSnapshot:
    return WeatherSnapshot(
        location=dto.name,
        temperature=dto.temp,
        condition=dto.condition.main,
        description=dto.condition.description,
        humidity=dto.humidity,
        rainfall=dto.rain_1h,
        wind_speed=dto.wind_speed,
        icon=dto.condition.icon,
        timestamp=isoformat(now),
        season=get_season(now).value,
        alerts=tuple(alerts),
    )


def normalize_forecast(
    dto: ForecastResponse,
    alerts: Iterable[WeatherAlert],
    now: datetime,
) -> ForecastSnapshot:
    """
    Reduce the 3-hourly forecast to one entry per day.

    Every 8th entry is kept (24 hours apart, source order), capped at five days.
    """
    sampled = dto.entries[::ENTRIES_PER_DAY][:MAX_FORECAST_DAYS]
    days = tuple(
        ForecastDay(
            date=isoformat(datetime.fromtimestamp(entry.dt, tz=timezone.utc)),
            temperature=entry.temp,
            condition=entry.condition.main,
            description=entry.condition.description,
            humidity=entry.humidity,
            rainfall=entry.rain_3h,
            wind_speed=entry.wind_speed,
            icon=entry.condition.icon,
        )
        for entry in sampled
    )
    return ForecastSnapshot(
        location=dto.city_name,
        country=dto.country,
        forecast=days,
        timestamp=isoformat(now),
        season=get_season(now).value,
        alerts=tuple(alerts),
    )
