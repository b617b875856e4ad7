"""Algorithmic scoring engine.

Takes a decision's factor tree -> produces an AnalysisResult with a weighted
score, a risk classification, insight metrics and bias flags.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Sequence

from compass.engine.biases import detect_biases
from compass.engine.numeric import clamp, mean, round_half_up, safe_div
from compass.engine.result import AnalysisInsights, AnalysisMetadata, AnalysisResult
from compass.models.enums import Category, RiskLevel, TimeHorizon
from compass.models.tree import Decision, Factor, TreeNode

logger = logging.getLogger(__name__)

TIME_HORIZON_WEIGHTS: dict[TimeHorizon, float] = {
    TimeHorizon.IMMEDIATE: 0.25,
    TimeHorizon.SHORT: 0.5,
    TimeHorizon.MEDIUM: 0.75,
    TimeHorizon.LONG: 1.0,
}

RISK_PENALTIES: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 20,
    RiskLevel.MEDIUM: 10,
    RiskLevel.LOW: 0,
}

# Miller's law: people hold roughly seven items in working memory
MILLER_THRESHOLD = 7
NODE_THRESHOLD = 20

WARNING_COMPLEXITY = (
    "Decision complexity is high - consider consolidating factors to reduce cognitive load"
)
WARNING_RISK = (
    "High uncertainty and regret potential detected - gather more information before deciding"
)
WARNING_STRESS = "High stress level detected - consider taking more time with this decision"
WARNING_CATEGORY = (
    "Decision heavily weighted toward one category - consider adding diverse perspectives"
)


def children_score(children: Sequence[TreeNode]) -> float:
    """Recursive additive roll-up of descendant weights, averaged per level.

    Not normalized against 100: wide or deep subtrees can exceed it, and the
    overall score cap is what bounds the final number.
    """
    if not children:
        return 0.0
    total = sum((child.weight or 50) + children_score(child.children) for child in children)
    return total / len(children)


def count_nodes(children: Sequence[TreeNode]) -> int:
    """Count every node in ``children`` and all of their descendants."""
    return len(children) + sum(count_nodes(child.children) for child in children)


class DecisionAnalyzer:
    """Stateless engine that scores decision trees."""

    def analyze(self, decision: Decision) -> AnalysisResult:
        """Run every heuristic over the decision and assemble the result."""
        started = time.perf_counter()
        factors = decision.factors

        overall_score = self.weighted_score(factors)
        risk_level = self.assess_risk(factors)
        complexity_score = self.complexity(factors)
        category_balance = self.category_distribution(factors)

        insights = AnalysisInsights(
            emotional_alignment=self.emotional_alignment(decision),
            time_value_score=self.time_value_score(factors),
            category_balance=category_balance,
            complexity_score=complexity_score,
            bias_flags=detect_biases(factors),
        )

        result = AnalysisResult(
            overall_score=overall_score,
            confidence=self.confidence(decision, complexity_score, risk_level),
            risk_level=risk_level,
            recommended_factor_ids=self.recommended_factors(factors),
            warnings=self.warnings(decision, complexity_score, risk_level, category_balance),
            insights=insights,
            metadata=AnalysisMetadata(
                analyzed_at=datetime.now(tz=timezone.utc),
                total_factors=len(factors),
                total_nodes=self.total_nodes(factors),
                processing_time=(time.perf_counter() - started) * 1000,
            ),
        )
        logger.debug(
            f"Analyzed decision {decision.id}: score={overall_score:.1f} "
            f"risk={risk_level.value} confidence={result.confidence}"
        )
        return result

    @staticmethod
    def weighted_score(factors: Sequence[Factor]) -> float:
        """Mean factor contribution, capped at 100."""
        contributions = [
            f.weight * (1 + children_score(f.children) / 100) for f in factors
        ]
        return min(100.0, mean(contributions))

    @staticmethod
    def risk_score(factors: Sequence[Factor]) -> float:
        avg_uncertainty = mean(f.uncertainty or 50 for f in factors)
        avg_regret = mean(f.regret_potential or 50 for f in factors)
        return (avg_uncertainty + avg_regret) / 2

    @classmethod
    def assess_risk(cls, factors: Sequence[Factor]) -> RiskLevel:
        """Classify risk from average uncertainty and regret potential.

        < 40 -> LOW
        < 65 -> MEDIUM
        else -> HIGH
        """
        score = cls.risk_score(factors)
        if score < 40:
            return RiskLevel.LOW
        if score < 65:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    @staticmethod
    def emotional_alignment(decision: Decision) -> int:
        """How closely factor emotional weight tracks the reported stress."""
        avg_emotional = mean(f.emotional_weight or 50 for f in decision.factors)
        context = decision.context

        stress_gap = abs(avg_emotional - context.initial_stress_level * 10) / 100
        confidence = context.confidence_level / 10
        return round_half_up((1 - stress_gap + confidence) / 2 * 100)

    @staticmethod
    def time_value_score(factors: Sequence[Factor]) -> int:
        """Weight-weighted share of long-horizon thinking, as a percentage."""
        weighted = sum(f.weight * TIME_HORIZON_WEIGHTS[f.time_horizon] for f in factors)
        total_weight = sum(f.weight for f in factors)
        return round_half_up(safe_div(weighted, total_weight) * 100)

    @staticmethod
    def category_distribution(factors: Sequence[Factor]) -> dict[str, int]:
        """Factor count per category; every known category is present."""
        distribution = {category.value: 0 for category in Category}
        for factor in factors:
            distribution[factor.category.value] += 1
        return distribution

    @staticmethod
    def total_nodes(factors: Sequence[Factor]) -> int:
        return len(factors) + sum(count_nodes(f.children) for f in factors)

    @classmethod
    def complexity(cls, factors: Sequence[Factor]) -> int:
        miller_score = min(100.0, len(factors) / MILLER_THRESHOLD * 100)
        depth_score = min(100.0, cls.total_nodes(factors) / NODE_THRESHOLD * 100)
        return round_half_up((miller_score + depth_score) / 2)

    @staticmethod
    def recommended_factors(factors: Sequence[Factor], limit: int = 3) -> list[str]:
        """Ids of the strongest factors: high weight, low uncertainty and regret."""

        def strength(factor: Factor) -> float:
            return (
                factor.weight
                * (1 - (factor.uncertainty or 50) / 100)
                * (1 - (factor.regret_potential or 50) / 100)
            )

        ranked = sorted(factors, key=strength, reverse=True)
        return [f.id for f in ranked[:limit]]

    @staticmethod
    def warnings(
        decision: Decision,
        complexity_score: int,
        risk_level: RiskLevel,
        category_balance: dict[str, int],
    ) -> list[str]:
        warnings: list[str] = []

        if complexity_score > 70:
            warnings.append(WARNING_COMPLEXITY)

        if risk_level == RiskLevel.HIGH:
            warnings.append(WARNING_RISK)

        if decision.context.initial_stress_level > 7:
            warnings.append(WARNING_STRESS)

        largest = max(category_balance.values(), default=0)
        if safe_div(largest, len(decision.factors)) > 0.8:
            warnings.append(WARNING_CATEGORY)

        return warnings

    @staticmethod
    def confidence(decision: Decision, complexity_score: int, risk_level: RiskLevel) -> int:
        """Reported confidence adjusted for complexity, risk and tree size.

        Clamped to [0, 100].
        """
        base = decision.context.confidence_level * 10
        complexity_penalty = complexity_score / 100 * 20
        factor_bonus = min(20, len(decision.factors) * 3)
        raw = base - complexity_penalty - RISK_PENALTIES[risk_level] + factor_bonus
        return round_half_up(clamp(raw, 0, 100))
