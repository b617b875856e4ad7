from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from compass.models.enums import RecommendationAction


@dataclass
class ClearRecommendation:
    action: RecommendationAction
    statement: str
    top_factor: str


@dataclass
class QuantitativeScore:
    decision_score: float
    confidence: float
    top_option_name: Optional[str] = None
    top_option_score: Optional[float] = None


@dataclass
class Recommendation:
    """Structured advice returned by a recommendation service."""

    clear_recommendation: ClearRecommendation
    quantitative_score: QuantitativeScore
    recommendation: str
    key_insights: str
    reasons: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)
    deal_breakers: list[str] = field(default_factory=list)
    missing_info: list[str] = field(default_factory=list)
    alternatives: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        score: dict[str, Any] = {
            "decisionScore": self.quantitative_score.decision_score,
            "confidence": self.quantitative_score.confidence,
        }
        if self.quantitative_score.top_option_name is not None:
            score["topOptionName"] = self.quantitative_score.top_option_name
        if self.quantitative_score.top_option_score is not None:
            score["topOptionScore"] = self.quantitative_score.top_option_score

        return {
            "clearRecommendation": {
                "action": self.clear_recommendation.action.value,
                "statement": self.clear_recommendation.statement,
                "topFactor": self.clear_recommendation.top_factor,
            },
            "quantitativeScore": score,
            "recommendation": self.recommendation,
            "reasons": list(self.reasons),
            "warnings": list(self.warnings),
            "nextSteps": list(self.next_steps),
            "dealBreakers": list(self.deal_breakers),
            "missingInfo": list(self.missing_info),
            "alternatives": list(self.alternatives),
            "keyInsights": self.key_insights,
        }
