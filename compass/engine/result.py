"""Immutable analysis result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from compass.models.enums import BiasSeverity, BiasType, RiskLevel


@dataclass(frozen=True)
class BiasFlag:
    """A weighting pattern that resembles a known cognitive bias."""

    type: BiasType
    severity: BiasSeverity
    description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class AnalysisInsights:
    """Normalized insight metrics derived from the factor tree."""

    emotional_alignment: int
    time_value_score: int
    category_balance: dict[str, int]
    complexity_score: int
    bias_flags: list[BiasFlag] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisMetadata:
    """When the analysis ran and how large the tree was."""

    analyzed_at: datetime
    total_factors: int
    total_nodes: int
    processing_time: float  # milliseconds


@dataclass(frozen=True)
class AnalysisResult:
    """Top-level result of a single ``DecisionAnalyzer.analyze`` call."""

    overall_score: float
    confidence: int
    risk_level: RiskLevel
    recommended_factor_ids: list[str]
    warnings: list[str]
    insights: AnalysisInsights
    metadata: AnalysisMetadata

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the client expects."""
        return {
            "overallScore": self.overall_score,
            "confidence": self.confidence,
            "riskLevel": self.risk_level.value,
            "recommendedFactorIds": list(self.recommended_factor_ids),
            "warnings": list(self.warnings),
            "insights": {
                "emotionalAlignment": self.insights.emotional_alignment,
                "timeValueScore": self.insights.time_value_score,
                "categoryBalance": dict(self.insights.category_balance),
                "complexityScore": self.insights.complexity_score,
                "biasFlags": [b.to_dict() for b in self.insights.bias_flags],
            },
            "metadata": {
                "analyzedAt": self.metadata.analyzed_at.isoformat(),
                "totalFactors": self.metadata.total_factors,
                "totalNodes": self.metadata.total_nodes,
                "processingTime": self.metadata.processing_time,
            },
        }
