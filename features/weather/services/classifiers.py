"""Plain function entry points for the weather classification scales.

The rendering and extraction layers call these rather than the scale classes
directly.
"""
from datetime import tzinfo
from typing import Optional

from features.weather.models.air_quality_categories import AirQualityScale, AirQualityClassification
from features.weather.models.alert_types import WeatherAlert
from features.weather.models.uv_categories import UVIndexScale, UVClassification
from features.weather.models.wind_categories import BeaufortScale, WindClassification

def classify_wind(speed: float) -> WindClassification:
    """Beaufort category for a wind speed in m/s."""
    return BeaufortScale.classify(speed)

def classify_uv(index: int) -> UVClassification:
    """Severity category for a UV index."""
    return UVIndexScale.classify(index)

def classify_air_quality(
    raw_aqi: int,
    no2: float,
    pm10: float,
    o3: float,
    pm25: float
) -> AirQualityClassification:
    """Air quality category and dominant pollutant for a CAQI reading."""
    return AirQualityScale.classify(raw_aqi, no2=no2, pm10=pm10, o3=o3, pm2_5=pm25)

def alert_status(
    name: str,
    start: int,
    end: int,
    now: int,
    tz: Optional[tzinfo] = None
) -> str:
    """Start/end description of an alert as seen at ``now``."""
    return WeatherAlert(name=name, start=start, end=end).status(now, tz)
