"""Display units for sugar amounts."""

from enum import Enum

from sugar_meter.domain.rounding import round_half_away

GRAMS_PER_OUNCE = 28.3495


class SugarUnit(Enum):
    """Unit used when presenting sugar amounts."""

    GRAMS = "grams"
    OUNCES = "ounces"

    @property
    def label(self) -> str:
        return "g" if self is SugarUnit.GRAMS else "oz"

    @property
    def title(self) -> str:
        return "Grams" if self is SugarUnit.GRAMS else "Ounces"

    def value_from_grams(self, grams: int) -> float:
        """Convert grams into this unit."""
        if self is SugarUnit.GRAMS:
            return float(grams)
        return grams / GRAMS_PER_OUNCE

    def grams_from_value(self, value: float) -> int:
        """Convert a value in this unit back to whole grams."""
        if self is SugarUnit.GRAMS:
            return round_half_away(value)
        return round_half_away(value * GRAMS_PER_OUNCE)

    def format(self, grams: int) -> str:
        """Format grams in this unit without the unit label."""
        if self is SugarUnit.GRAMS:
            return str(grams)
        return _format_ounces(self.value_from_grams(grams))

    def format_with_label(self, grams: int) -> str:
        return f"{self.format(grams)}{self.label}"


def _format_ounces(value: float) -> str:
    text = f"{value:.2f}"
    if text.endswith("00"):
        return text[:-3]
    if text.endswith("0"):
        return text[:-1]
    return text
