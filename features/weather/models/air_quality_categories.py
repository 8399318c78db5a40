from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

# OpenWeatherMap reports a CAQI-based index from 1 to 5
AQI_CATEGORIES: Tuple[str, ...] = ("Good", "Fair", "Moderate", "Poor", "Low")
AQI_MIN = 1
AQI_MAX = len(AQI_CATEGORIES)

# CAQI concentration scales (ug/m3), checked in this order when picking the
# dominant pollutant
POLLUTANT_CUTOFFS: Dict[str, Tuple[float, float, float, float, float]] = {
    "no2": (0, 50, 100, 200, 400),
    "pm10": (0, 25, 50, 90, 180),
    "o3": (0, 60, 120, 180, 240),
    "pm2.5": (0, 15, 30, 55, 110),
}

class PollutantSeverity(BaseModel):
    """Position of one pollutant concentration on its CAQI scale."""
    model_config = ConfigDict(frozen=True)

    pollutant: str
    concentration: float = Field(..., description="Concentration in ug/m3")
    severity: float = Field(..., description="Fractional band on the pollutant's scale")

class AirQualityClassification(BaseModel):
    """Air quality category with the most severe pollutant, if any."""
    model_config = ConfigDict(frozen=True)

    raw_index: int = Field(..., description="Air quality index clamped to 1-5")
    category_label: str
    dominant_pollutant: Optional[str] = None
    severities: Tuple[PollutantSeverity, ...] = ()

    @property
    def summary(self) -> str:
        """Index, description and primary pollutant as shown on the display."""
        if self.dominant_pollutant is None:
            return f"{self.raw_index} - {self.category_label}"
        return f"{self.raw_index} - {self.category_label} ({self.dominant_pollutant})"

def pollutant_severity(concentration: float, cutoffs: Tuple[float, ...]) -> float:
    """Interpolate a concentration within its band, extrapolating past the top.

    Inside the scale the result is ``idx + (c - cutoffs[idx]) / band_width``,
    which lands exactly on ``idx`` at a cutoff. Above the last cutoff the
    concentration is scaled linearly against it instead.
    """
    severity = 0.0

    for index in range(1, len(cutoffs)):
        if concentration <= cutoffs[index]:
            band_width = cutoffs[index] - cutoffs[index - 1]
            severity = index + (concentration - cutoffs[index]) / band_width
            break

    if concentration > cutoffs[-1]:
        severity = concentration / cutoffs[-1] * 5

    return severity

class AirQualityScale:
    @staticmethod
    def clamp_index(raw_aqi: int) -> int:
        return max(AQI_MIN, min(AQI_MAX, raw_aqi))

    @classmethod
    def classify(
        cls,
        raw_aqi: int,
        no2: float,
        pm10: float,
        o3: float,
        pm2_5: float
    ) -> AirQualityClassification:
        """Classify an air quality reading and find its dominant pollutant."""
        index = cls.clamp_index(raw_aqi)
        label = AQI_CATEGORIES[index - 1]

        # If air quality is good, don't bother with calculating pollutant levels
        if index == AQI_MIN:
            return AirQualityClassification(raw_index=index, category_label=label)

        concentrations = {"no2": no2, "pm10": pm10, "o3": o3, "pm2.5": pm2_5}
        severities = tuple(
            PollutantSeverity(
                pollutant=pollutant,
                concentration=concentrations[pollutant],
                severity=pollutant_severity(concentrations[pollutant], cutoffs)
            )
            for pollutant, cutoffs in POLLUTANT_CUTOFFS.items()
        )

        # Strictly greater wins, so the earlier pollutant keeps a tie
        dominant = severities[0]
        for candidate in severities[1:]:
            if candidate.severity > dominant.severity:
                dominant = candidate

        return AirQualityClassification(
            raw_index=index,
            category_label=label,
            dominant_pollutant=dominant.pollutant,
            severities=severities
        )
