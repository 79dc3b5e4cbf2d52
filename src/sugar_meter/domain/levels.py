"""Domain models for sugar severity levels."""

from dataclasses import dataclass
from enum import Enum

RGB = tuple[float, float, float]


class SugarLevel(Enum):
    """Ordered severity levels of daily sugar intake."""

    L1 = 1
    L2 = 2
    L3 = 3
    L4 = 4
    L5 = 5

    @property
    def ordinal(self) -> int:
        return self.value

    @property
    def status_label(self) -> str:
        """Return the short status shown next to the gauge."""
        return _STATUS_LABELS[self]

    @property
    def color(self) -> RGB:
        return _LEVEL_COLORS[self]

    @property
    def liquid_palette(self) -> "LiquidPalette":
        return _PALETTES[self]


@dataclass(frozen=True)
class ThresholdMultipliers:
    """Multipliers of the daily limit that bound levels 2 through 5."""

    l2: float = 1.0
    l3: float = 2.0
    l4: float = 4.0
    l5: float = 5.0

    def normalized(self) -> "ThresholdMultipliers":
        """Return a copy where each multiplier is at least the previous one."""
        l2 = max(self.l2, 1.0)
        l3 = max(self.l3, l2)
        l4 = max(self.l4, l3)
        l5 = max(self.l5, l4)
        return ThresholdMultipliers(l2=l2, l3=l3, l4=l4, l5=l5)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.l2, self.l3, self.l4, self.l5)


DEFAULT_MULTIPLIERS = ThresholdMultipliers()


@dataclass(frozen=True)
class LevelMessage:
    """One-shot message shown when intake crosses into a higher level."""

    level: SugarLevel
    title: str
    body: str


@dataclass(frozen=True)
class SugarThreshold:
    """Gram boundary at which a level begins."""

    grams: int
    level: SugarLevel
    is_dashed: bool


@dataclass(frozen=True)
class ThresholdMarker:
    """Threshold boundary expressed as a fraction of the visual capacity."""

    fraction: float
    grams: int
    level: SugarLevel
    is_dashed: bool


@dataclass(frozen=True)
class SugarZone:
    """Named gram range for a level."""

    name: str
    range_label: str
    lower_bound: int
    upper_bound: int | None
    level: SugarLevel


@dataclass(frozen=True)
class LiquidPalette:
    """RGBA gradient stops for the liquid fill."""

    top: tuple[float, float, float, float]
    mid: tuple[float, float, float, float]
    bottom: tuple[float, float, float, float]
    surface_top: tuple[float, float, float, float]
    surface_bottom: tuple[float, float, float, float]


_STATUS_LABELS = {
    SugarLevel.L1: "In target",
    SugarLevel.L2: "Caution",
    SugarLevel.L3: "Warning",
    SugarLevel.L4: "High",
    SugarLevel.L5: "OMG",
}

_LEVEL_COLORS: dict[SugarLevel, RGB] = {
    SugarLevel.L1: (0.2, 0.7, 0.3),
    SugarLevel.L2: (0.95, 0.8, 0.2),
    SugarLevel.L3: (0.95, 0.55, 0.2),
    SugarLevel.L4: (0.9, 0.2, 0.2),
    SugarLevel.L5: (0.62, 0.28, 0.84),
}

_RED_PALETTE = LiquidPalette(
    top=(0.98, 0.4, 0.32, 0.95),
    mid=(0.9, 0.22, 0.18, 0.96),
    bottom=(0.7, 0.12, 0.12, 0.98),
    surface_top=(1.0, 0.46, 0.36, 0.98),
    surface_bottom=(0.86, 0.2, 0.18, 0.95),
)

_PALETTES = {
    SugarLevel.L1: LiquidPalette(
        top=(1.0, 0.84, 0.6, 0.95),
        mid=(0.98, 0.66, 0.32, 0.96),
        bottom=(0.86, 0.42, 0.2, 0.98),
        surface_top=(1.0, 0.88, 0.64, 0.98),
        surface_bottom=(0.95, 0.62, 0.3, 0.95),
    ),
    SugarLevel.L2: LiquidPalette(
        top=(1.0, 0.76, 0.42, 0.95),
        mid=(0.96, 0.55, 0.22, 0.96),
        bottom=(0.82, 0.38, 0.18, 0.98),
        surface_top=(1.0, 0.8, 0.46, 0.98),
        surface_bottom=(0.94, 0.52, 0.22, 0.95),
    ),
    SugarLevel.L3: LiquidPalette(
        top=(0.98, 0.66, 0.32, 0.95),
        mid=(0.9, 0.44, 0.18, 0.96),
        bottom=(0.72, 0.26, 0.14, 0.98),
        surface_top=(0.98, 0.7, 0.34, 0.98),
        surface_bottom=(0.86, 0.4, 0.18, 0.95),
    ),
    SugarLevel.L4: _RED_PALETTE,
    SugarLevel.L5: _RED_PALETTE,
}
