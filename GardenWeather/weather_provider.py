"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Outcome of a single upstream call: either a value or an error."""
    value: Optional[T] = None
    error: Optional[WeatherProviderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ProviderResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: WeatherProviderError) -> "ProviderResult[Any]":
        return cls(error=error)


class WeatherProviderBase(ABC):
    """
    Abstract base class for weather data providers.

    Every operation returns a ProviderResult instead of raising, so callers
    decide explicitly how each failure degrades.
    """

    @abstractmethod
    def geocode(self, city: str) -> ProviderResult:
        """
        Look up coordinates for a free-text city name.

        Returns:
            ProviderResult wrapping a list of GeocodeMatch (possibly empty)
        """
        pass

    @abstractmethod
    def get_alerts(self, lat: float, lon: float) -> ProviderResult:
        """
        Fetch weather alerts for a coordinate pair.

        Returns:
            ProviderResult wrapping an AlertsResponse
        """
        pass

    @abstractmethod
    def get_current(self, city: str) -> ProviderResult:
        """
        Fetch current conditions for a city.

        Returns:
            ProviderResult wrapping a CurrentWeatherResponse
        """
        pass

    @abstractmethod
    def get_forecast(self, city: str) -> ProviderResult:
        """
        Fetch the 5-day / 3-hour forecast for a city.

        Returns:
            ProviderResult wrapping a ForecastResponse
        """
        pass
