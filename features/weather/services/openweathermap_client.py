import asyncio
import logging
import math
from typing import Any, Dict, List, Optional

import aiohttp

from core.config import settings
from features.common.exceptions.weather_exceptions import (
    WeatherFetchError,
    WeatherParseError,
    WeatherSourceError
)
from features.common.services.cache_config import (
    WEATHER_PAYLOAD_EXPIRE,
    get_cache,
    location_cache_key
)
from features.weather.models.alert_types import WeatherAlert
from features.weather.models.weather_types import (
    CurrentWeather,
    DailyWeather,
    HourlyWeather,
    Precipitation
)
from features.weather.services.classifiers import (
    classify_air_quality,
    classify_uv,
    classify_wind
)
from features.weather.services.weather_source import WeatherSource

logger = logging.getLogger(__name__)

def _field(payload: Any, *path: Any) -> Any:
    """Walk a nested JSON payload, reporting the full path when a step is missing."""
    value = payload
    for step in path:
        try:
            value = value[step]
        except (KeyError, IndexError, TypeError) as e:
            dotted = ".".join(str(p) for p in path)
            raise WeatherParseError(f"Missing field '{dotted}' in OpenWeatherMap response") from e
    return value

def _text(payload: Any, *path: Any) -> str:
    value = _field(payload, *path)
    if not isinstance(value, str):
        dotted = ".".join(str(p) for p in path)
        raise WeatherParseError(f"Field '{dotted}' is not a string: {value!r}")
    return value

def _number(payload: Any, *path: Any) -> float:
    value = _field(payload, *path)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        dotted = ".".join(str(p) for p in path)
        raise WeatherParseError(f"Field '{dotted}' is not numeric: {value!r}") from e

class OpenWeatherMapClient(WeatherSource):
    """Client for the OpenWeatherMap One Call and Air Pollution APIs.

    OpenWeatherMap's air quality index is based on CAQI, so the dominant
    pollutant is worked out from the CAQI concentration scales.
    """

    def __init__(
        self,
        lat: float,
        lon: float,
        api_key: str,
        session: Optional[aiohttp.ClientSession] = None,
        use_cache: bool = True
    ):
        self.lat = lat
        self.lon = lon
        self._api_key = api_key
        self._session = session
        self._owns_session = session is None
        self._use_cache = use_cache
        self._cache = get_cache()
        self._onecall: Optional[Dict[str, Any]] = None
        self._air_pollution: Optional[Dict[str, Any]] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        session = await self._init_session()
        timeout = aiohttp.ClientTimeout(total=settings.request["timeout"])
        try:
            async with session.get(url, params=params, timeout=timeout) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.error(f"OpenWeatherMap returned {e.status} for {url}: {e.message}")
            raise WeatherFetchError(f"OpenWeatherMap returned {e.status}: {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching {url}: {str(e)}")
            raise WeatherFetchError(f"Unable to get weather data: {str(e)}") from e
        except ValueError as e:
            raise WeatherParseError(f"Response from {url} is not valid JSON") from e

    async def fetch(self) -> None:
        """Download the One Call and Air Pollution payloads for the location."""
        cache_key = location_cache_key("weather_payloads", self.lat, self.lon)
        if self._use_cache:
            cached = await self._cache.get(cache_key)
            if cached:
                logger.info(f"Using cached weather data for {self.lat},{self.lon}")
                self.load(**cached)
                return

        location = {"lat": self.lat, "lon": self.lon, "appid": self._api_key}
        onecall_params = {**location, "exclude": settings.exclude, "units": settings.units}

        logger.info(f"Fetching weather data for {self.lat},{self.lon}")
        onecall, air_pollution = await asyncio.gather(
            self._get_json(settings.onecall_url, onecall_params),
            self._get_json(settings.air_pollution_url, location)
        )
        self.load(onecall=onecall, air_pollution=air_pollution)

        if self._use_cache:
            await self._cache.set(
                cache_key,
                {"onecall": onecall, "air_pollution": air_pollution},
                ttl=WEATHER_PAYLOAD_EXPIRE
            )

    def load(self, onecall: Dict[str, Any], air_pollution: Dict[str, Any]) -> None:
        """Use already-downloaded payloads instead of fetching."""
        self._onecall = onecall
        self._air_pollution = air_pollution

    @property
    def onecall(self) -> Dict[str, Any]:
        if self._onecall is None:
            raise WeatherSourceError("No weather data loaded, call fetch() first")
        return self._onecall

    @property
    def air_pollution(self) -> Dict[str, Any]:
        if self._air_pollution is None:
            raise WeatherSourceError("No air quality data loaded, call fetch() first")
        return self._air_pollution

    def get_airquality(self):
        """Classify the air quality reading from the Air Pollution response."""
        reading = _field(self.air_pollution, "list", 0)
        components = _field(reading, "components")
        return classify_air_quality(
            int(_number(reading, "main", "aqi")),
            no2=_number(components, "no2"),
            pm10=_number(components, "pm10"),
            o3=_number(components, "o3"),
            pm25=_number(components, "pm2_5")
        )

    def get_current(self) -> CurrentWeather:
        current = _field(self.onecall, "current")
        return CurrentWeather(
            timestamp=int(_number(current, "dt")),
            temp=_number(current, "temp"),
            feels_like=_number(current, "feels_like"),
            weather=_text(current, "weather", 0, "description"),
            icon=_text(current, "weather", 0, "icon"),
            aqi=self.get_airquality(),
            wind=classify_wind(_number(current, "wind_speed")),
            # The UV scale works on whole numbers; truncate like an int cast
            uvi=classify_uv(int(_number(current, "uvi"))),
            humidity=_number(current, "humidity") / 100
        )

    def get_precipitation(self) -> Precipitation:
        return Precipitation(
            hour=_number(self.onecall, "hourly", 0, "pop"),
            today=_number(self.onecall, "daily", 0, "pop")
        )

    def get_hourly(self, hours: int) -> List[HourlyWeather]:
        entries = self.onecall.get("hourly") or []
        count = min(hours, len(entries))
        if count <= 0:
            return []

        return [
            HourlyWeather(
                timestamp=int(_number(entry, "dt")),
                temp=_number(entry, "temp"),
                pop=_number(entry, "pop"),
                icon=_text(entry, "weather", 0, "icon")
            )
            for entry in entries[:count]
        ]

    def get_daily(self, days: int) -> List[DailyWeather]:
        entries = self.onecall.get("daily") or []
        count = min(days, len(entries))
        if count <= 0:
            return []

        daily = []
        for i in range(count):
            entry = entries[i]
            # The overnight low usually falls early the next day, so use the
            # next day's minimum
            if i + 1 < len(entries):
                lo = _number(entries[i + 1], "temp", "min")
            else:
                lo = math.nan

            daily.append(DailyWeather(
                timestamp=int(_number(entry, "dt")),
                hi=_number(entry, "temp", "max"),
                lo=lo,
                weather=_text(entry, "weather", 0, "description"),
                icon=_text(entry, "weather", 0, "icon")
            ))
        return daily

    def get_alerts(self) -> List[WeatherAlert]:
        return [
            WeatherAlert(
                name=_text(alert, "event"),
                start=int(_number(alert, "start")),
                end=int(_number(alert, "end"))
            )
            for alert in self.onecall.get("alerts") or []
        ]
