import math
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

# UV index scale: (upper cutoff, description)
UV_INDEX_SCALE: Tuple[Tuple[float, str], ...] = (
    (2, "Low"),
    (5, "Moderate"),
    (7, "High"),
    (10, "Very high"),
    (math.inf, "Extreme"),
)

INVALID_DESCRIPTION = "Invalid UV index"

class UVClassification(BaseModel):
    """Severity classification of a UV index reading."""
    model_config = ConfigDict(frozen=True)

    value: int = Field(..., description="UV index as reported")
    category: int = Field(..., description="Position on the UV scale (0-4)")
    label: str

    @property
    def summary(self) -> str:
        """UV category and description as shown on the display."""
        return f"{self.category} - {self.label}"

class UVIndexScale:
    @staticmethod
    def classify(value: int) -> UVClassification:
        """Map a UV index to its severity category.

        A negative index only replaces the label; the category keeps whatever
        the scan matched (always 0, since any negative value is below the
        first cutoff).
        """
        category = 0
        label = INVALID_DESCRIPTION

        for index, (cutoff, description) in enumerate(UV_INDEX_SCALE):
            if value <= cutoff:
                category = index
                label = description
                break

        if value < 0:
            label = INVALID_DESCRIPTION

        return UVClassification(value=value, category=category, label=label)
