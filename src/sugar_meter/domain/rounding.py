"""Rounding rule shared by gram computations."""


def round_half_away(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero."""
    magnitude = int(abs(value) + 0.5)
    return magnitude if value >= 0 else -magnitude
