import asyncio
import logging
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Optional

from fastapi import HTTPException

from features.common.exceptions.weather_exceptions import (
    RenderError,
    WeatherFetchError,
    WeatherSourceError
)
from features.display.services.svg_renderer import SvgRenderer
from features.weather.models.weather_types import (
    AlertSummary,
    CurrentSummary,
    DisplaySummaryResponse,
    WeatherReport
)
from features.weather.services.weather_source import WeatherSource

logger = logging.getLogger(__name__)

class DisplayService:
    """Fetches weather, renders the display image and keeps the latest result."""

    def __init__(
        self,
        source: WeatherSource,
        renderer: SvgRenderer,
        output_path: Path,
        hourly_hours: int = 12,
        daily_days: int = 5,
        tz: Optional[tzinfo] = None
    ):
        self.source = source
        self.renderer = renderer
        self.output_path = Path(output_path)
        self.hourly_hours = hourly_hours
        self.daily_days = daily_days
        self.tz = tz
        self._refresh_lock = asyncio.Lock()
        self.latest_report: Optional[WeatherReport] = None
        self.latest_svg: Optional[bytes] = None
        self.generated_at: Optional[datetime] = None

    async def build_report(self) -> WeatherReport:
        """Fetch fresh data from the source and collect it into a report."""
        await self.source.fetch()
        return WeatherReport(
            lat=self.source.lat,
            lon=self.source.lon,
            current=self.source.get_current(),
            precipitation=self.source.get_precipitation(),
            hourly=self.source.get_hourly(self.hourly_hours),
            daily=self.source.get_daily(self.daily_days),
            alerts=self.source.get_alerts(),
            fetched_at=datetime.now(timezone.utc)
        )

    async def refresh(self) -> WeatherReport:
        """Regenerate the display image from fresh data."""
        async with self._refresh_lock:
            logger.info("🔄 Refreshing display...")
            report = await self.build_report()
            tree = self.renderer.render_to_file(report, self.output_path)

            self.latest_report = report
            self.latest_svg = self.renderer.to_bytes(tree)
            self.generated_at = datetime.now(timezone.utc)
            logger.info(
                f"✅ Display regenerated: {report.current.temp:.1f}°, "
                f"AQI {report.current.aqi.summary}, {len(report.alerts)} alert(s)"
            )
            return report

    async def handle_refresh_request(self) -> DisplaySummaryResponse:
        """Refresh on behalf of an API caller, mapping failures to HTTP errors."""
        try:
            await self.refresh()
            return self.get_summary()
        except WeatherFetchError as e:
            logger.error(f"Error fetching weather data: {str(e)}")
            raise HTTPException(
                status_code=503,
                detail=f"Unable to fetch weather data: {str(e)}"
            )
        except (WeatherSourceError, RenderError) as e:
            logger.error(f"Error regenerating display: {str(e)}")
            raise HTTPException(
                status_code=500,
                detail=f"Error regenerating display: {str(e)}"
            )

    def get_svg(self) -> bytes:
        """Latest generated image."""
        if self.latest_svg is None:
            raise HTTPException(
                status_code=503,
                detail="Display has not been generated yet"
            )
        return self.latest_svg

    def get_summary(self, now: Optional[int] = None) -> DisplaySummaryResponse:
        """Values shown on the latest image, with alert status as of ``now``."""
        report = self.latest_report
        if report is None:
            raise HTTPException(
                status_code=503,
                detail="Display has not been generated yet"
            )
        if now is None:
            now = int(datetime.now(timezone.utc).timestamp())

        current = report.current
        return DisplaySummaryResponse(
            lat=report.lat,
            lon=report.lon,
            current=CurrentSummary(
                updated=datetime.fromtimestamp(current.timestamp, self.tz or timezone.utc),
                temp=current.temp,
                feels_like=current.feels_like,
                weather=current.weather,
                humidity=current.humidity,
                air_quality=current.aqi.summary,
                dominant_pollutant=current.aqi.dominant_pollutant,
                wind=current.wind.summary,
                wind_speed=current.wind.speed,
                uv_index=current.uvi.summary
            ),
            precipitation=report.precipitation,
            hourly=report.hourly,
            daily=report.daily,
            alerts=[
                AlertSummary(name=alert.name, status=alert.status(now, self.tz))
                for alert in report.alerts
            ],
            generated_at=self.generated_at
        )
