from .base import RecommendationError, RecommendationService
from .claude_service import ClaudeRecommendationService
from .models import ClearRecommendation, QuantitativeScore, Recommendation
from .parser import fallback_recommendation, parse_response
from .prompt import build_prompt

__all__ = [
    "ClaudeRecommendationService",
    "ClearRecommendation",
    "QuantitativeScore",
    "Recommendation",
    "RecommendationError",
    "RecommendationService",
    "build_prompt",
    "fallback_recommendation",
    "parse_response",
]
