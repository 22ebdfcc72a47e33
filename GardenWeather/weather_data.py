"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple


def now_ms() -> int:
    """Current UNIX time in milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


@dataclass(frozen=True)
class WeatherAlert:
    """A weather alert issued for a location."""
    sender: str
    event: str  # e.g., "Heat Wave Warning", "Flood Watch"
    start: int  # UNIX time in milliseconds
    end: int  # UNIX time in milliseconds
    description: str
    tags: Tuple[str, ...] = ()

    def is_active(self, now: Optional[int] = None) -> bool:
        """True while the alert window covers ``now`` (epoch ms)."""
        now = now_ms() if now is None else now
        return self.start <= now <= self.end

    def is_relevant(self, now: Optional[int] = None) -> bool:
        """True for alerts that are active or still upcoming."""
        now = now_ms() if now is None else now
        return self.end >= now

    def to_dict(self) -> dict:
        return {
            "sender": self.sender,
            "event": self.event,
            "start": self.start,
            "end": self.end,
            "description": self.description,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherAlert":
        return cls(
            sender=data.get("sender", ""),
            event=data.get("event", ""),
            start=int(data.get("start", 0)),
            end=int(data.get("end", 0)),
            description=data.get("description", ""),
            tags=tuple(data.get("tags") or ()),
        )


def _alerts_from(data: dict) -> Tuple[WeatherAlert, ...]:
    return tuple(WeatherAlert.from_dict(a) for a in data.get("alerts") or [])


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for a location."""
    location: str
    temperature: float  # °C
    condition: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "broken clouds", "light rain"
    humidity: int  # percentage
    rainfall: float  # mm in the last hour (0 if none)
    wind_speed: float  # m/s
    icon: str  # provider icon code, e.g. "04d"
    timestamp: str  # ISO-8601
    season: str
    alerts: Tuple[WeatherAlert, ...] = ()
    simulated: bool = False

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "temperature": self.temperature,
            "condition": self.condition,
            "description": self.description,
            "humidity": self.humidity,
            "rainfall": self.rainfall,
            "windSpeed": self.wind_speed,
            "icon": self.icon,
            "timestamp": self.timestamp,
            "season": self.season,
            "alerts": [alert.to_dict() for alert in self.alerts],
            "isMockData": self.simulated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherSnapshot":
        return cls(
            location=data["location"],
            temperature=float(data["temperature"]),
            condition=data["condition"],
            description=data.get("description", ""),
            humidity=int(data.get("humidity", 0)),
            rainfall=float(data.get("rainfall", 0.0)),
            wind_speed=float(data.get("windSpeed", 0.0)),
            icon=data.get("icon", ""),
            timestamp=data["timestamp"],
            season=data["season"],
            alerts=_alerts_from(data),
            simulated=bool(data.get("isMockData", False)),
        )


@dataclass(frozen=True)
class ForecastDay:
    """One day of a forecast, sampled from the provider's 3-hour buckets."""
    date: str  # ISO-8601
    temperature: float
    condition: str
    description: str
    humidity: int
    rainfall: float  # mm in the 3-hour bucket (0 if none)
    wind_speed: float
    icon: str

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "temperature": self.temperature,
            "condition": self.condition,
            "description": self.description,
            "humidity": self.humidity,
            "rainfall": self.rainfall,
            "windSpeed": self.wind_speed,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ForecastDay":
        return cls(
            date=data["date"],
            temperature=float(data["temperature"]),
            condition=data["condition"],
            description=data.get("description", ""),
            humidity=int(data.get("humidity", 0)),
            rainfall=float(data.get("rainfall", 0.0)),
            wind_speed=float(data.get("windSpeed", 0.0)),
            icon=data.get("icon", ""),
        )


@dataclass(frozen=True)
class ForecastSnapshot:
    """Five-day forecast for a location."""
    location: str
    country: str
    forecast: Tuple[ForecastDay, ...]
    timestamp: str
    season: str
    alerts: Tuple[WeatherAlert, ...] = field(default=())
    simulated: bool = False

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "country": self.country,
            "forecast": [day.to_dict() for day in self.forecast],
            "timestamp": self.timestamp,
            "season": self.season,
            "alerts": [alert.to_dict() for alert in self.alerts],
            "isMockData": self.simulated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ForecastSnapshot":
        return cls(
            location=data["location"],
            country=data.get("country", ""),
            forecast=tuple(ForecastDay.from_dict(d) for d in data.get("forecast") or []),
            timestamp=data["timestamp"],
            season=data["season"],
            alerts=_alerts_from(data),
            simulated=bool(data.get("isMockData", False)),
        )
