from __future__ import annotations

from abc import ABC, abstractmethod

from compass.engine.result import AnalysisResult
from compass.models.tree import Decision

from .models import Recommendation


class RecommendationError(Exception):
    """The recommendation service could not produce advice."""


class RecommendationService(ABC):
    """Abstract base for services that turn an analysis into advice."""

    @abstractmethod
    async def generate(self, analysis: AnalysisResult, decision: Decision) -> Recommendation:
        """Return structured advice, raising RecommendationError on failure."""
        ...
