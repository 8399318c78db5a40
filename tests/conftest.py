"""
Pytest configuration for Nook Weather tests.

Provides OpenWeatherMap payloads for a fixed morning in UTC and the
clients/reports built from them.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from core.config import PROJECT_ROOT
from features.weather.models.weather_types import WeatherReport
from features.weather.services.openweathermap_client import OpenWeatherMapClient

UTC = ZoneInfo("UTC")
BASE_TIME = 1792314000  # Sunday 2026-10-18 09:00 UTC
HOUR = 3600
DAY = 86400
LAT = 52.37
LON = 4.89
TEMPLATE_PATH = PROJECT_ROOT / "img" / "template.svg"

HOURLY_TEMPS = [11.2, 12.0, 13.5, 14.1, 15.0, 16.4, 17.0, 16.2, 15.1, 13.8, 12.5, 11.9]

def make_onecall(alerts=None, hours=48, days=8):
    """One Call 3.0 style payload starting at BASE_TIME."""
    hourly = []
    for i in range(hours):
        hourly.append({
            "dt": BASE_TIME + i * HOUR,
            "temp": HOURLY_TEMPS[i % len(HOURLY_TEMPS)],
            "pop": min(1.0, i * 0.1) if i < 12 else 0.2,
            "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}]
        })

    daily = []
    for i in range(days):
        daily.append({
            "dt": BASE_TIME + 3 * HOUR + i * DAY,
            "temp": {"min": 8.0 + i, "max": 18.0 + i},
            "pop": 0.6,
            "weather": [{"id": 800, "main": "Clear", "description": f"day {i} sky", "icon": "01d"}]
        })

    payload = {
        "lat": LAT,
        "lon": LON,
        "timezone": "UTC",
        "current": {
            "dt": BASE_TIME,
            "temp": 11.2,
            "feels_like": 9.6,
            "humidity": 81,
            "uvi": 2.9,
            "wind_speed": 4.6,
            "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}]
        },
        "hourly": hourly,
        "daily": daily
    }
    if alerts is not None:
        payload["alerts"] = alerts
    return payload

def make_air_pollution(aqi=3, no2=30.0, pm10=60.0, o3=100.0, pm2_5=20.0):
    """Air Pollution 2.5 style payload."""
    return {
        "coord": {"lat": LAT, "lon": LON},
        "list": [{
            "dt": BASE_TIME,
            "main": {"aqi": aqi},
            "components": {
                "co": 230.3, "no": 0.5, "no2": no2, "o3": o3,
                "so2": 1.2, "pm2_5": pm2_5, "pm10": pm10, "nh3": 0.9
            }
        }]
    }

def make_alert(event="Wind advisory", start=BASE_TIME + HOUR, end=BASE_TIME + 10 * HOUR):
    return {
        "sender_name": "KNMI",
        "event": event,
        "start": start,
        "end": end,
        "description": f"{event} for the coast",
        "tags": ["Wind"]
    }

@pytest.fixture
def onecall_payload():
    return make_onecall(alerts=[make_alert()])

@pytest.fixture
def air_pollution_payload():
    return make_air_pollution()

@pytest.fixture
def loaded_client(onecall_payload, air_pollution_payload):
    """Client with payloads already loaded, so nothing touches the network."""
    client = OpenWeatherMapClient(lat=LAT, lon=LON, api_key="test-key", use_cache=False)
    client.load(onecall=onecall_payload, air_pollution=air_pollution_payload)
    return client

def build_report(client, hours=12, days=5):
    return WeatherReport(
        lat=client.lat,
        lon=client.lon,
        current=client.get_current(),
        precipitation=client.get_precipitation(),
        hourly=client.get_hourly(hours),
        daily=client.get_daily(days),
        alerts=client.get_alerts(),
        fetched_at=datetime.fromtimestamp(BASE_TIME, timezone.utc)
    )

@pytest.fixture
def weather_report(loaded_client):
    return build_report(loaded_client)
