"""Typed views of the OpenWeather JSON responses we consume."""
from dataclasses import dataclass
from typing import List, Tuple

from weather_provider import WeatherProviderError


def _first_condition(item: dict) -> "ConditionDTO":
    weather_array = item.get("weather") or []
    if not weather_array:
        raise WeatherProviderError("Response missing 'weather' array")
    return ConditionDTO.from_json(weather_array[0])


def _main_block(item: dict) -> dict:
    main_data = item.get("main")
    if not main_data:
        raise WeatherProviderError("Response missing 'main' block")
    return main_data


def _wind_speed(item: dict) -> float:
    wind_data = item.get("wind") or {}
    return float(wind_data.get("speed", 0.0))


@dataclass(frozen=True)
class GeocodeMatch:
    lat: float
    lon: float
    name: str = ""
    country: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "GeocodeMatch":
        if "lat" not in data or "lon" not in data:
            raise WeatherProviderError("Geocode match missing coordinates")
        return cls(
            lat=float(data["lat"]),
            lon=float(data["lon"]),
            name=data.get("name", ""),
            country=data.get("country", ""),
        )

    @classmethod
    def list_from_json(cls, data: list) -> List["GeocodeMatch"]:
        if not isinstance(data, list):
            raise WeatherProviderError("Geocoding response is not a list")
        return [cls.from_json(item) for item in data]


@dataclass(frozen=True)
class AlertDTO:
    sender_name: str
    event: str
    start: int  # UNIX seconds
    end: int  # UNIX seconds
    description: str
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "AlertDTO":
        return cls(
            sender_name=data.get("sender_name", ""),
            event=data.get("event", ""),
            start=int(data.get("start", 0)),
            end=int(data.get("end", 0)),
            description=data.get("description", ""),
            tags=tuple(data.get("tags") or ()),
        )


@dataclass(frozen=True)
class AlertsResponse:
    alerts: Tuple[AlertDTO, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "AlertsResponse":
        # One Call omits "alerts" entirely when nothing is in effect
        return cls(alerts=tuple(AlertDTO.from_json(a) for a in data.get("alerts") or []))


@dataclass(frozen=True)
class ConditionDTO:
    main: str
    description: str
    icon: str

    @classmethod
    def from_json(cls, data: dict) -> "ConditionDTO":
        return cls(
            main=data.get("main", "Unknown"),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
        )


@dataclass(frozen=True)
class CurrentWeatherResponse:
    """Current Weather API (/data/2.5/weather) payload."""
    name: str
    temp: float
    humidity: int
    wind_speed: float
    condition: ConditionDTO
    rain_1h: float = 0.0

    @classmethod
    def from_json(cls, data: dict) -> "CurrentWeatherResponse":
        condition = _first_condition(data)
        main_data = _main_block(data)
        rain = data.get("rain") or {}
        return cls(
            name=data.get("name", ""),
            temp=float(main_data.get("temp", 0.0)),
            humidity=int(main_data.get("humidity", 0)),
            wind_speed=_wind_speed(data),
            condition=condition,
            rain_1h=float(rain.get("1h", 0.0)),
        )


@dataclass(frozen=True)
class ForecastEntryDTO:
    dt: int  # UNIX seconds
    temp: float
    humidity: int
    wind_speed: float
    condition: ConditionDTO
    rain_3h: float = 0.0

    @classmethod
    def from_json(cls, data: dict) -> "ForecastEntryDTO":
        condition = _first_condition(data)
        main_data = _main_block(data)
        rain = data.get("rain") or {}
        return cls(
            dt=int(data["dt"]),
            temp=float(main_data.get("temp", 0.0)),
            humidity=int(main_data.get("humidity", 0)),
            wind_speed=_wind_speed(data),
            condition=condition,
            rain_3h=float(rain.get("3h", 0.0)),
        )


@dataclass(frozen=True)
class ForecastResponse:
    """5 day / 3 hour Forecast API (/data/2.5/forecast) payload."""
    city_name: str
    country: str
    entries: Tuple[ForecastEntryDTO, ...]

    @classmethod
    def from_json(cls, data: dict) -> "ForecastResponse":
        city = data.get("city")
        if not city:
            raise WeatherProviderError("Response missing 'city' block")
        if "list" not in data:
            raise WeatherProviderError("Response missing 'list' array")
        return cls(
            city_name=city.get("name", ""),
            country=city.get("country", ""),
            entries=tuple(ForecastEntryDTO.from_json(item) for item in data["list"]),
        )
