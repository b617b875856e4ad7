"""Turn raw model output into a Recommendation, never raising."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from compass.engine.result import AnalysisResult
from compass.models.enums import RecommendationAction
from compass.models.tree import Decision

from .models import ClearRecommendation, QuantitativeScore, Recommendation

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _object(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _action(value: Any) -> RecommendationAction:
    try:
        return RecommendationAction(value)
    except ValueError:
        return RecommendationAction.NEEDS_MORE_INFO


def strip_fences(text: str) -> str:
    """Remove markdown code fences wrapped around a JSON payload."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_RE.sub("", stripped)
    return stripped.strip()


def parse_response(text: str) -> Recommendation:
    """Parse the model's JSON answer, filling defaults for missing fields."""
    try:
        parsed = json.loads(strip_fences(text))
        if not isinstance(parsed, dict):
            raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    except ValueError as e:
        logger.error(f"Failed to parse recommendation response: {e}")
        logger.debug(f"Raw response: {text}")
        return unparseable_recommendation()

    clear = _object(parsed.get("clearRecommendation"))
    score = _object(parsed.get("quantitativeScore"))

    return Recommendation(
        clear_recommendation=ClearRecommendation(
            action=_action(clear.get("action")),
            statement=clear.get("statement") or "Unable to generate clear recommendation",
            top_factor=clear.get("topFactor") or "Unknown",
        ),
        quantitative_score=QuantitativeScore(
            decision_score=score.get("decisionScore") or 50,
            confidence=score.get("confidence") or 50,
            top_option_name=score.get("topOptionName"),
            top_option_score=score.get("topOptionScore"),
        ),
        recommendation=parsed.get("recommendation") or "Unable to generate recommendation",
        key_insights=parsed.get("keyInsights") or "No key insights available",
        reasons=_string_list(parsed.get("reasons")),
        warnings=_string_list(parsed.get("warnings")),
        next_steps=_string_list(parsed.get("nextSteps")),
        deal_breakers=_string_list(parsed.get("dealBreakers")),
        missing_info=_string_list(parsed.get("missingInfo")),
        alternatives=_string_list(parsed.get("alternatives")),
    )


def unparseable_recommendation() -> Recommendation:
    message = "Unable to parse AI recommendation. Please try again."
    return Recommendation(
        clear_recommendation=ClearRecommendation(
            action=RecommendationAction.NEEDS_MORE_INFO,
            statement=message,
            top_factor="Unknown",
        ),
        quantitative_score=QuantitativeScore(decision_score=50, confidence=0),
        recommendation=message,
        key_insights="Analysis completed but response formatting failed",
    )


def fallback_recommendation(analysis: AnalysisResult, decision: Decision) -> Recommendation:
    """Algorithm-only advice used when the AI service is unavailable."""
    names = {f.id: f.name for f in decision.factors}
    top_ids = analysis.recommended_factor_ids
    message = "AI analysis temporarily unavailable. Showing algorithmic analysis only."
    return Recommendation(
        clear_recommendation=ClearRecommendation(
            action=RecommendationAction.NEEDS_MORE_INFO,
            statement=message,
            top_factor=names.get(top_ids[0], "Unknown") if top_ids else "Unknown",
        ),
        quantitative_score=QuantitativeScore(
            decision_score=analysis.overall_score,
            confidence=analysis.confidence,
        ),
        recommendation=message,
        key_insights=f"Risk level: {analysis.risk_level.value}, Confidence: {analysis.confidence}%",
        reasons=list(analysis.warnings),
    )
