"""Analytic Hierarchy Process weight solver.

Derives relative importance weights from pairwise judgments using the
classical Saaty procedure: pairwise matrix -> priority vector approximation
-> consistency ratio.

Reference: Saaty, T.L. (1980). The Analytic Hierarchy Process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from compass.engine.numeric import mean, round_half_up, safe_div

logger = logging.getLogger(__name__)

# Saaty's random consistency index, indexed by matrix size
RANDOM_INDEX: dict[int, float] = {
    1: 0.0,
    2: 0.0,
    3: 0.58,
    4: 0.90,
    5: 1.12,
    6: 1.24,
    7: 1.32,
    8: 1.41,
    9: 1.45,
    10: 1.49,
}
MAX_RANDOM_INDEX = RANDOM_INDEX[10]

CONSISTENCY_THRESHOLD = 0.10

Matrix = list[list[float]]


@dataclass(frozen=True)
class PairwiseComparison:
    """How much more important ``item_a`` is than ``item_b``.

    ``value`` is a Saaty ratio: 1 is equal, 9 is extreme preference for A,
    and values below 1 mean B dominates.
    """

    item_a: str
    item_b: str
    value: float


@dataclass(frozen=True)
class ItemPair:
    """One unordered pair presented to the user for comparison."""

    item_a: str
    item_b: str

    @property
    def key(self) -> str:
        """Stable identity used to resume or replay a judgment."""
        return f"{self.item_a}_{self.item_b}"

    def to_dict(self) -> dict[str, str]:
        return {"itemA": self.item_a, "itemB": self.item_b}


@dataclass(frozen=True)
class AHPResult:
    weights: dict[str, int]  # integer percentages summing to exactly 100
    consistency_ratio: float
    is_consistent: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "weights": dict(self.weights),
            "consistencyRatio": self.consistency_ratio,
            "isConsistent": self.is_consistent,
        }


def build_comparison_matrix(
    items: Sequence[str],
    comparisons: Sequence[PairwiseComparison],
) -> Matrix:
    """Build the reciprocal pairwise matrix; uncompared pairs stay at 1."""
    n = len(items)
    index = {name: i for i, name in enumerate(items)}
    matrix = [[1.0] * n for _ in range(n)]

    for comp in comparisons:
        i = index.get(comp.item_a)
        j = index.get(comp.item_b)
        if i is None or j is None or i == j:
            continue
        if comp.value <= 0:
            logger.warning(
                f"Ignoring non-positive comparison {comp.item_a} vs {comp.item_b}: {comp.value}"
            )
            continue
        matrix[i][j] = comp.value
        matrix[j][i] = 1 / comp.value

    return matrix


def priority_vector(matrix: Matrix) -> list[float]:
    """Approximate the principal eigenvector.

    Normalizes each column by its sum, then averages each row. The result
    sums to 1.
    """
    n = len(matrix)
    column_sums = [sum(matrix[i][j] for i in range(n)) for j in range(n)]
    return [
        mean(safe_div(matrix[i][j], column_sums[j]) for j in range(n))
        for i in range(n)
    ]


def lambda_max(matrix: Matrix, weights: Sequence[float]) -> float:
    """Principal eigenvalue approximation: mean of (M.w)[i] / w[i]."""
    n = len(matrix)
    weighted_sum = [sum(matrix[i][j] * weights[j] for j in range(n)) for i in range(n)]
    return mean(safe_div(weighted_sum[i], weights[i]) for i in range(n))


def consistency_ratio(matrix: Matrix, weights: Sequence[float]) -> float:
    """CR = CI / RI, where CI = (lambda_max - n) / (n - 1).

    Always 0 for two items or fewer, which cannot be inconsistent.
    """
    n = len(matrix)
    if n <= 2:
        return 0.0

    # A reciprocal matrix has lambda_max >= n; anything below is float noise
    ci = max(0.0, (lambda_max(matrix, weights) - n) / (n - 1))
    ri = RANDOM_INDEX.get(n, MAX_RANDOM_INDEX)
    return ci / ri


def to_percentages(weights: Sequence[float]) -> list[int]:
    """Round to integer percentages that sum to exactly 100.

    The last item absorbs the rounding remainder. When half-up rounding
    overshoots by more than the last item's share, the excess comes off the
    largest items instead so no percentage drops below 0.
    """
    percentages = [round_half_up(w * 100) for w in weights]
    if not percentages:
        return percentages

    remainder = 100 - sum(percentages)
    if percentages[-1] + remainder >= 0:
        percentages[-1] += remainder
        return percentages

    by_size = sorted(range(len(percentages)), key=lambda i: percentages[i], reverse=True)
    for i in by_size:
        taken = min(-remainder, percentages[i])
        percentages[i] -= taken
        remainder += taken
        if remainder == 0:
            break
    return percentages


def calculate_ahp_weights(
    items: Sequence[str],
    comparisons: Sequence[PairwiseComparison],
) -> AHPResult:
    """Derive normalized weights and a consistency measure from judgments.

    Raises ValueError when ``items`` is empty or names an item twice.
    """
    if not items:
        raise ValueError("items cannot be empty")
    if len(set(items)) != len(items):
        raise ValueError("item names must be unique")

    if len(items) == 1:
        return AHPResult(weights={items[0]: 100}, consistency_ratio=0.0, is_consistent=True)

    matrix = build_comparison_matrix(items, comparisons)
    weights = priority_vector(matrix)
    cr = consistency_ratio(matrix, weights)
    percentages = to_percentages(weights)

    return AHPResult(
        weights=dict(zip(items, percentages)),
        consistency_ratio=cr,
        is_consistent=cr <= CONSISTENCY_THRESHOLD,
    )


def generate_pairs(items: Sequence[str]) -> list[ItemPair]:
    """All n*(n-1)/2 unordered pairs in (0,1), (0,2), ..., (1,2) order."""
    return [
        ItemPair(item_a=items[i], item_b=items[j])
        for i in range(len(items))
        for j in range(i + 1, len(items))
    ]
