"""Level and threshold calculations for daily sugar intake.

Every function here is pure. The widget snapshot recomputes levels with the
same functions, so gram boundaries always agree between the two.
"""

from sugar_meter.domain.levels import (
    LevelMessage,
    SugarLevel,
    SugarThreshold,
    SugarZone,
    ThresholdMarker,
    ThresholdMultipliers,
)
from sugar_meter.domain.rounding import round_half_away

MINIMUM_VISUAL_CAPACITY_GRAMS = 180
MARKER_TOLERANCE = 0.01

Boundaries = tuple[int, int, int, int]


def boundaries(limit: int, multipliers: ThresholdMultipliers) -> Boundaries:
    """Return the upper gram bound of levels 1 through 4."""
    base = max(limit, 1)
    normalized = multipliers.normalized()
    b1, b2, b3, b4 = (
        round_half_away(base * factor) for factor in normalized.as_tuple()
    )
    return b1, b2, b3, b4


def level_for(grams: int, limit: int, multipliers: ThresholdMultipliers) -> SugarLevel:
    """Classify a gram total into a severity level."""
    b1, b2, b3, b4 = boundaries(limit, multipliers)
    if grams <= b1:
        return SugarLevel.L1
    if grams <= b2:
        return SugarLevel.L2
    if grams <= b3:
        return SugarLevel.L3
    if grams <= b4:
        return SugarLevel.L4
    return SugarLevel.L5


def thresholds(limit: int, multipliers: ThresholdMultipliers) -> list[SugarThreshold]:
    """Return the boundary at which each of levels 2 through 5 begins."""
    b1, b2, b3, b4 = boundaries(limit, multipliers)
    return [
        SugarThreshold(grams=b1, level=SugarLevel.L2, is_dashed=False),
        SugarThreshold(grams=b2, level=SugarLevel.L3, is_dashed=False),
        SugarThreshold(grams=b3, level=SugarLevel.L4, is_dashed=False),
        SugarThreshold(grams=b4, level=SugarLevel.L5, is_dashed=True),
    ]


def max_visual_grams(
    limit: int,
    multipliers: ThresholdMultipliers,
    visual_capacity_multiplier: float,
) -> int:
    """Return the gram amount that fills the gauge completely."""
    factor = max(visual_capacity_multiplier, multipliers.normalized().l5)
    return max(int(max(limit, 1) * factor), MINIMUM_VISUAL_CAPACITY_GRAMS)


def threshold_markers(
    limit: int,
    multipliers: ThresholdMultipliers,
    capacity: int,
    tolerance: float = MARKER_TOLERANCE,
) -> list[ThresholdMarker]:
    """Return gauge markers, dropping those that overlap the daily limit line."""
    if capacity <= 0:
        return []
    recommended = max(limit, 1) / capacity
    markers = [
        ThresholdMarker(
            fraction=min(threshold.grams / capacity, 1.0),
            grams=threshold.grams,
            level=threshold.level,
            is_dashed=threshold.is_dashed,
        )
        for threshold in thresholds(limit, multipliers)
    ]
    return [
        marker
        for marker in markers
        if abs(marker.fraction - recommended) > tolerance
    ]


def level_message(
    level: SugarLevel, limit: int, multipliers: ThresholdMultipliers
) -> LevelMessage | None:
    """Build the level-up message for a level; level 1 has none."""
    b1, b2, b3, b4 = boundaries(limit, multipliers)
    recommended = max(limit, 1)
    if level is SugarLevel.L2:
        return LevelMessage(
            level=level,
            title="Level 2 - Caution",
            body=(
                f"Moderate Zone ({b1}-{b2}g). "
                f"Over the recommended max ({recommended}g/day)."
            ),
        )
    if level is SugarLevel.L3:
        return LevelMessage(
            level=level,
            title="Level 3 - Warning",
            body=f"High Zone ({b2}-{b3}g). Well past your daily limit.",
        )
    if level is SugarLevel.L4:
        return LevelMessage(
            level=level,
            title="Level 4 - High",
            body=f"Excess Zone (>{b3}g). You are above the lenient ceiling.",
        )
    if level is SugarLevel.L5:
        return LevelMessage(
            level=level,
            title="Level 5 - OMG",
            body=f"Over {b4}g/day. Consider a reset tomorrow.",
        )
    return None


def zones(limit: int, multipliers: ThresholdMultipliers) -> list[SugarZone]:
    """Return named gram ranges for the configured boundaries."""
    b1, b2, b3, b4 = boundaries(limit, multipliers)
    return [
        SugarZone("Healthy Zone", f"0-{b1}g", 0, b1, SugarLevel.L1),
        SugarZone("Moderate Zone", f"{b1}-{b2}g", b1, b2, SugarLevel.L2),
        SugarZone("High Zone", f"{b2}-{b3}g", b2, b3, SugarLevel.L3),
        SugarZone("Excess Zone", f"{b3}-{b4}g", b3, b4, SugarLevel.L4),
        SugarZone("Overload", f">{b4}g", b4, None, SugarLevel.L5),
    ]
