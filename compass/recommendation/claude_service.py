"""Recommendation service backed by the Claude Agent SDK."""

from __future__ import annotations

import logging
from typing import Optional

from claude_agent_sdk import AssistantMessage, ClaudeAgentOptions, ClaudeSDKClient, TextBlock

from compass.config.settings import Settings
from compass.engine.result import AnalysisResult
from compass.models.tree import Decision

from .base import RecommendationError, RecommendationService
from .models import Recommendation
from .parser import parse_response
from .prompt import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


class ClaudeRecommendationService(RecommendationService):
    """Single-turn, tool-free query that returns the recommendation JSON."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()

    def _options(self) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            system_prompt=SYSTEM_PROMPT,
            allowed_tools=[],
            max_turns=1,
            model=self._settings.recommendation_model or None,
        )

    async def generate(self, analysis: AnalysisResult, decision: Decision) -> Recommendation:
        prompt = build_prompt(analysis, decision)
        chunks: list[str] = []

        try:
            async with ClaudeSDKClient(self._options()) as client:
                await client.query(prompt)

                async for msg in client.receive_response():
                    if isinstance(msg, AssistantMessage):
                        for block in msg.content:
                            if isinstance(block, TextBlock):
                                chunks.append(block.text)
        except Exception as e:
            logger.error(f"Recommendation query failed for decision {decision.id}: {e}")
            if "quota" in str(e).lower():
                raise RecommendationError(
                    "AI analysis quota exceeded. Please try again later."
                ) from e
            raise RecommendationError(
                "Failed to generate AI recommendation. Please try again."
            ) from e

        if not chunks:
            raise RecommendationError("Recommendation service returned no text")

        return parse_response("".join(chunks))
