"""Cognitive-bias heuristics over a decision's top-level factors.

Each check inspects the weighting pattern only and contributes at most one
``BiasFlag``. They are independent; any subset may fire.
"""

from __future__ import annotations

from typing import Optional, Sequence

from compass.engine.numeric import mean, safe_div
from compass.engine.result import BiasFlag
from compass.models.enums import BiasSeverity, BiasType, TimeHorizon
from compass.models.tree import Factor

SHORT_TERM_HORIZONS = {TimeHorizon.IMMEDIATE, TimeHorizon.SHORT}


def detect_anchoring(factors: Sequence[Factor]) -> Optional[BiasFlag]:
    """Flag a first factor that carries a disproportionate weight.

    > 40 -> MEDIUM
    > 60 -> HIGH
    """
    if not factors:
        return None

    first_weight = factors[0].weight
    if first_weight <= 40:
        return None

    return BiasFlag(
        type=BiasType.ANCHORING,
        severity=BiasSeverity.HIGH if first_weight > 60 else BiasSeverity.MEDIUM,
        description=(
            f"First factor has disproportionate weight ({first_weight:g}%), "
            "suggesting anchoring bias"
        ),
    )


def detect_availability(factors: Sequence[Factor]) -> Optional[BiasFlag]:
    """Flag a tree dominated by immediate or short-term factors.

    share > 60% -> MEDIUM
    share > 75% -> HIGH
    """
    short_term = sum(1 for f in factors if f.time_horizon in SHORT_TERM_HORIZONS)
    percentage = safe_div(short_term, len(factors)) * 100

    if percentage <= 60:
        return None

    return BiasFlag(
        type=BiasType.AVAILABILITY,
        severity=BiasSeverity.HIGH if percentage > 75 else BiasSeverity.MEDIUM,
        description=(
            f"{percentage:.0f}% of factors focus on immediate/short-term, "
            "suggesting availability bias"
        ),
    )


def detect_sunk_cost(factors: Sequence[Factor]) -> Optional[BiasFlag]:
    """Flag high regret potential that is not matched by factor weight.

    Fires when average regret > 60 and average weight < 50. There is no
    HIGH tier for this check.
    """
    if not factors:
        return None

    avg_regret = mean(f.regret_potential or 50 for f in factors)
    avg_weight = mean(f.weight for f in factors)

    if avg_regret > 60 and avg_weight < 50:
        return BiasFlag(
            type=BiasType.SUNK_COST,
            severity=BiasSeverity.MEDIUM,
            description=(
                "High regret potential without corresponding weight "
                "suggests sunk cost fallacy"
            ),
        )
    return None


def detect_biases(factors: Sequence[Factor]) -> list[BiasFlag]:
    """Run every check in a fixed order and collect the flags that fire."""
    checks = (detect_anchoring, detect_availability, detect_sunk_cost)
    flags: list[BiasFlag] = []
    for check in checks:
        flag = check(factors)
        if flag is not None:
            flags.append(flag)
    return flags
