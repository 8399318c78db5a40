from abc import ABC, abstractmethod
from typing import List

from features.weather.models.alert_types import WeatherAlert
from features.weather.models.weather_types import (
    CurrentWeather,
    DailyWeather,
    HourlyWeather,
    Precipitation
)

class WeatherSource(ABC):
    """Provider of weather data for a single location.

    Implementations download everything in ``fetch`` and answer the getters
    from the downloaded payloads, so the getters never touch the network.
    """

    lat: float
    lon: float

    @abstractmethod
    async def fetch(self) -> None:
        """Download the latest data for the location."""

    @abstractmethod
    async def close(self) -> None:
        """Release any network resources."""

    @abstractmethod
    def get_current(self) -> CurrentWeather:
        ...

    @abstractmethod
    def get_precipitation(self) -> Precipitation:
        ...

    @abstractmethod
    def get_hourly(self, hours: int) -> List[HourlyWeather]:
        """Up to ``hours`` hourly entries; fewer if the provider has fewer."""

    @abstractmethod
    def get_daily(self, days: int) -> List[DailyWeather]:
        """Up to ``days`` daily entries; fewer if the provider has fewer."""

    @abstractmethod
    def get_alerts(self) -> List[WeatherAlert]:
        ...
