"""Small numeric helpers shared by the scoring engine and the AHP solver."""

from __future__ import annotations

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 always rounding up.

    Python's built-in ``round`` uses banker's rounding, which would shift
    scores like 62.5 down to 62.
    """
    return int(math.floor(value + 0.5))


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 instead of raising on a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    items = list(values)
    return safe_div(sum(items), len(items))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
