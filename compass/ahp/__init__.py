from .scale import ConsistencyInterpretation, interpret_consistency, judgment_value, scale_label
from .solver import (
    AHPResult,
    ItemPair,
    PairwiseComparison,
    calculate_ahp_weights,
    generate_pairs,
)

__all__ = [
    "AHPResult",
    "ConsistencyInterpretation",
    "ItemPair",
    "PairwiseComparison",
    "calculate_ahp_weights",
    "generate_pairs",
    "interpret_consistency",
    "judgment_value",
    "scale_label",
]
