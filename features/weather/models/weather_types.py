from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from features.weather.models.air_quality_categories import AirQualityClassification
from features.weather.models.alert_types import WeatherAlert
from features.weather.models.uv_categories import UVClassification
from features.weather.models.wind_categories import WindClassification

class CurrentWeather(BaseModel):
    """Current conditions at the location."""
    timestamp: int = Field(..., description="Unix time of the observation")
    temp: float = Field(..., description="Temperature in degrees Celsius")
    feels_like: float = Field(..., description="Apparent temperature in degrees Celsius")
    weather: str = Field(..., description="English weather description")
    icon: str = Field(..., description="Icon name without extension")
    aqi: AirQualityClassification
    wind: WindClassification
    uvi: UVClassification
    humidity: float = Field(..., description="Relative humidity, 0 (0%) - 1 (100%)")

class Precipitation(BaseModel):
    """Probability of precipitation for the next hour and the rest of today."""
    hour: float = Field(..., description="0 (0%) - 1 (100%)")
    today: float = Field(..., description="0 (0%) - 1 (100%)")

class HourlyWeather(BaseModel):
    timestamp: int = Field(..., description="Unix time")
    temp: float = Field(..., description="Temperature in degrees Celsius")
    pop: float = Field(..., description="Probability of precipitation, 0 - 1")
    icon: str

class DailyWeather(BaseModel):
    timestamp: int = Field(..., description="Unix time")
    hi: float = Field(..., description="Daily high in degrees Celsius")
    lo: float = Field(..., description="Overnight low in degrees Celsius, NaN when unknown")
    weather: str
    icon: str

class WeatherReport(BaseModel):
    """Everything needed to render one display image."""
    lat: float
    lon: float
    current: CurrentWeather
    precipitation: Precipitation
    hourly: List[HourlyWeather]
    daily: List[DailyWeather]
    alerts: List[WeatherAlert]
    fetched_at: datetime

class AlertSummary(BaseModel):
    name: str
    status: str

class CurrentSummary(BaseModel):
    updated: datetime
    temp: float
    feels_like: float
    weather: str
    humidity: float
    air_quality: str
    dominant_pollutant: Optional[str] = None
    wind: str
    wind_speed: float = Field(..., description="Wind speed in m/s")
    uv_index: str

class DisplaySummaryResponse(BaseModel):
    """Human-readable summary of the values written to the display."""
    lat: float
    lon: float
    current: CurrentSummary
    precipitation: Precipitation
    hourly: List[HourlyWeather]
    daily: List[DailyWeather]
    alerts: List[AlertSummary]
    generated_at: Optional[datetime] = None
    next_refresh: Optional[str] = None

    class Config:
        from_attributes = True
