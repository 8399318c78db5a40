"""Generate the display SVG once from OpenWeatherMap data.

Post-processing (conversion to the reader's image format) is left to the
calling shell script.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from core.config import settings, ConfigurationError
from core.logging_config import setup_logging
from features.common.exceptions.weather_exceptions import RenderError, WeatherSourceError
from features.display.services.display_service import DisplayService
from features.display.services.svg_renderer import SvgRenderer
from features.weather.services.openweathermap_client import OpenWeatherMapClient

logger = logging.getLogger(__name__)

async def generate(lat: float, lon: float, api_key: str, output_path: Path) -> None:
    client = OpenWeatherMapClient(lat=lat, lon=lon, api_key=api_key, use_cache=False)
    service = DisplayService(
        source=client,
        renderer=SvgRenderer(settings.template_path, tz=settings.display_tz),
        output_path=output_path,
        hourly_hours=settings.hourly_hours,
        daily_days=settings.daily_days,
        tz=settings.display_tz
    )
    try:
        await service.refresh()
    finally:
        await client.close()

def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gathers weather information from OpenWeatherMap and generates an SVG image "
                    "for use on a Nook Simple Touch"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.2")
    parser.add_argument("--lat", type=float, required=True, help="location latitude")
    parser.add_argument("--lon", type=float, required=True, help="location longitude")
    parser.add_argument(
        "--key",
        type=str,
        default="",
        help="api key (default: read from the api key file)"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        default=settings.output_file,
        help="name of the generated svg file inside the image directory"
    )
    args = parser.parse_args()

    setup_logging()

    try:
        api_key = args.key or settings.get_api_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(generate(args.lat, args.lon, api_key, Path(settings.img_dir) / args.output_file))
    except (WeatherSourceError, RenderError) as e:
        logger.error(f"Failed to generate display: {str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    main()
