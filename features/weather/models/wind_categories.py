import math
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

# Beaufort scale in m/s: (upper cutoff, description)
BEAUFORT_SCALE: Tuple[Tuple[float, str], ...] = (
    (0.4, "Calm"),
    (1.5, "Light air"),
    (3.3, "Light breeze"),
    (5.5, "Gentle breeze"),
    (7.9, "Moderate breeze"),
    (10.7, "Fresh breeze"),
    (13.8, "Strong breeze"),
    (17.1, "Near gale"),
    (20.7, "Gale"),
    (24.4, "Severe gale"),
    (28.4, "Storm"),
    (32.6, "Violent storm"),
    (math.inf, "Hurricane"),
)

INVALID_CATEGORY = -1
INVALID_DESCRIPTION = "Invalid wind speed"

class WindClassification(BaseModel):
    """Beaufort classification of a single wind speed reading."""
    model_config = ConfigDict(frozen=True)

    speed: float = Field(..., description="Wind speed in m/s")
    category: int = Field(..., description="Beaufort number, -1 when the speed is invalid")
    label: str

    @property
    def summary(self) -> str:
        """Beaufort number and description as shown on the display."""
        return f"{self.category} - {self.label}"

class BeaufortScale:
    @staticmethod
    def classify(speed: float) -> WindClassification:
        """Map a wind speed in m/s to its Beaufort category.

        NaN matches no cutoff and negative speeds are rejected after the scan,
        so both come back as the invalid category rather than raising.
        """
        category = INVALID_CATEGORY
        label = INVALID_DESCRIPTION

        for index, (cutoff, description) in enumerate(BEAUFORT_SCALE):
            if speed <= cutoff:
                category = index
                label = description
                break

        if speed < 0:
            category = INVALID_CATEGORY
            label = INVALID_DESCRIPTION

        return WindClassification(speed=speed, category=category, label=label)
