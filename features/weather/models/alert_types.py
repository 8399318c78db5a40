from datetime import datetime, tzinfo
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class AlertPhase(str, Enum):
    BEFORE = "before"
    DURING = "during"
    AFTER = "after"

def _format_alert_time(prefix: str, timestamp: int, today: int, tz: Optional[tzinfo]) -> str:
    moment = datetime.fromtimestamp(timestamp, tz)
    if moment.timetuple().tm_yday == today:
        return moment.strftime(f"{prefix} %H:%M")
    return moment.strftime(f"{prefix} %a %H:%M")

class WeatherAlert(BaseModel):
    """Weather alert issued for the location."""
    model_config = ConfigDict(frozen=True)

    name: str
    start: int = Field(..., description="Unix time the alert takes effect")
    end: int = Field(..., description="Unix time the alert expires")

    def phase(self, now: int) -> AlertPhase:
        if now < self.start:
            return AlertPhase.BEFORE
        if now < self.end:
            return AlertPhase.DURING
        return AlertPhase.AFTER

    def status(self, now: int, tz: Optional[tzinfo] = None) -> str:
        """Describe when the alert starts or ends relative to ``now``.

        Times on the same calendar day as ``now`` (compared by day of year in
        ``tz``, local time when omitted) are shown as ``HH:MM``; anything else
        gets the abbreviated weekday in front. Expired alerts produce an
        empty string.
        """
        today = datetime.fromtimestamp(now, tz).timetuple().tm_yday
        phase = self.phase(now)

        if phase is AlertPhase.BEFORE:
            return _format_alert_time("Starts at", self.start, today, tz)
        if phase is AlertPhase.DURING:
            return _format_alert_time("Ends at", self.end, today, tz)

        # Expired alerts are not labelled on the display
        _format_alert_time("Ended at", self.end, today, tz)
        return ""
