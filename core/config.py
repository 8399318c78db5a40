from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, Any, Optional
from pathlib import Path
from datetime import tzinfo
from zoneinfo import ZoneInfo

PROJECT_ROOT = Path(__file__).parent.parent

class ConfigurationError(Exception):
    """Raised when required settings are missing or unusable."""
    pass

class Settings(BaseSettings):
    """Application settings."""

    # Location to report on
    lat: float = 0.0
    lon: float = 0.0

    # OpenWeatherMap settings
    api_key: str = ""
    api_key_file: str = str(PROJECT_ROOT / "apikey.txt")
    onecall_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    air_pollution_url: str = "http://api.openweathermap.org/data/2.5/air_pollution"
    units: str = "metric"
    exclude: str = "minutely"

    # Display template and output
    img_dir: str = str(PROJECT_ROOT / "img")
    template_file: str = "template.svg"
    output_file: str = "generated.svg"
    hourly_hours: int = 12
    daily_days: int = 5

    # IANA zone name used for all displayed times (None = system local time)
    timezone: Optional[str] = None

    # Regenerate the display every N minutes
    refresh_minutes: int = 30

    cache: Dict[str, Any] = {
        "enabled": True,
        "backend": "memory",
        "prefix": "nook_weather"
    }

    request: Dict = {
        "timeout": 30
    }

    def get_cache_ttl(self) -> Dict[str, Optional[int]]:
        """Get cache TTL values. Everything expires with the refresh interval."""
        refresh = self.refresh_minutes * 60
        return {
            "display_summary": refresh,
        }

    def get_api_key(self) -> str:
        """Return the configured API key, falling back to the key file."""
        if self.api_key:
            return self.api_key

        key_path = Path(self.api_key_file)
        if not key_path.exists():
            raise ConfigurationError(
                f"No API key configured and key file {key_path} does not exist"
            )

        tokens = key_path.read_text(encoding="utf-8").split()
        if not tokens:
            raise ConfigurationError(f"Key file {key_path} is empty")
        return tokens[0]

    @property
    def display_tz(self) -> Optional[tzinfo]:
        """Zone for displayed times; None means the system local zone."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def template_path(self) -> Path:
        return Path(self.img_dir) / self.template_file

    @property
    def output_path(self) -> Path:
        return Path(self.img_dir) / self.output_file

    model_config = SettingsConfigDict(
        env_prefix="nook_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
