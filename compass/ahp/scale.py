"""Saaty scale labels and consistency interpretation for presentation."""

from __future__ import annotations

from dataclasses import dataclass

from compass.engine.numeric import round_half_up
from compass.models.enums import ConsistencyLevel

# Saaty 1-9 intensity scale -> verbal label
SAATY_SCALE: dict[int, str] = {
    1: "Equal",
    2: "Weak",
    3: "Moderate",
    4: "Moderate+",
    5: "Strong",
    6: "Strong+",
    7: "Very Strong",
    8: "Very Strong+",
    9: "Extreme",
}


@dataclass(frozen=True)
class ConsistencyInterpretation:
    level: ConsistencyLevel
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"level": self.level.value, "message": self.message}


def scale_label(value: float) -> str:
    """Verbal label for an intensity, or the number itself if off-scale."""
    label = SAATY_SCALE.get(round_half_up(value))
    return label if label is not None else f"{value:.1f}"


def judgment_value(intensity: float, favors_a: bool = True) -> float:
    """Convert a "which side, how strongly" judgment into a comparison ratio.

    An intensity of 5 favoring B becomes 1/5.
    """
    if not 1 <= intensity <= 9:
        raise ValueError(f"intensity must be 1-9, got {intensity}")
    return intensity if favors_a else 1 / intensity


def interpret_consistency(cr: float) -> ConsistencyInterpretation:
    """Map a consistency ratio to a qualitative level.

    <= 0.05 -> GOOD
    <= 0.10 -> ACCEPTABLE
    >  0.10 -> POOR
    """
    if cr <= 0.05:
        return ConsistencyInterpretation(
            level=ConsistencyLevel.GOOD,
            message="Your comparisons are highly consistent!",
        )
    if cr <= 0.10:
        return ConsistencyInterpretation(
            level=ConsistencyLevel.ACCEPTABLE,
            message="Your comparisons are acceptably consistent.",
        )
    return ConsistencyInterpretation(
        level=ConsistencyLevel.POOR,
        message="Your comparisons may be inconsistent. Consider reviewing your answers.",
    )
