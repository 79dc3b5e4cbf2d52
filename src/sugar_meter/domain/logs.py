"""Domain models for daily sugar logs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailySugarLog:
    """Grams and log count recorded for one calendar day."""

    grams: int
    count: int

    @classmethod
    def empty(cls) -> "DailySugarLog":
        return cls(grams=0, count=0)
