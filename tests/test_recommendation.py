"""Tests for prompt building, response parsing and the Claude-backed service."""

import json
from types import SimpleNamespace

import pytest

from compass.engine import DecisionAnalyzer
from compass.models.enums import RecommendationAction
from compass.models.tree import Decision
from compass.recommendation import claude_service
from compass.recommendation.base import RecommendationError
from compass.recommendation.claude_service import ClaudeRecommendationService
from compass.recommendation.parser import (
    fallback_recommendation,
    parse_response,
    strip_fences,
)
from compass.recommendation.prompt import build_prompt, format_analysis

VALID_RESPONSE = {
    "clearRecommendation": {
        "action": "proceed",
        "statement": "Take the offer for the growth path",
        "topFactor": "GROWTH",
    },
    "quantitativeScore": {"decisionScore": 72, "confidence": 80, "topOptionName": "title"},
    "recommendation": "Growth outweighs the commute.",
    "reasons": ["Strong title bump"],
    "nextSteps": ["Negotiate equity"],
    "keyInsights": "Growth dominates",
}


@pytest.fixture
def analysis(job_offer):
    return DecisionAnalyzer().analyze(job_offer)


class TestPrompt:
    def test_contains_context_and_tree(self, analysis, job_offer):
        prompt = build_prompt(analysis, job_offer)
        assert 'Title: "Accept the new job offer?"' in prompt
        assert "Stress=6/10, Confidence=7/10, Urgency=4/10" in prompt
        assert '"id": "vesting"' in prompt
        assert '"clearRecommendation"' in prompt

    def test_analysis_summary(self, analysis):
        summary = format_analysis(analysis)
        assert "Overall Score: 49.5/100" in summary
        assert "Risk Assessment: low" in summary
        assert "Detected Biases: availability" in summary

    def test_missing_description(self, analysis, job_offer):
        job_offer.description = ""
        assert "No description provided" in build_prompt(analysis, job_offer)


class TestStripFences:
    def test_json_fence(self):
        assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_fences('  {"a": 1}  ') == '{"a": 1}'


class TestParseResponse:
    def test_valid(self):
        rec = parse_response(json.dumps(VALID_RESPONSE))
        assert rec.clear_recommendation.action == RecommendationAction.PROCEED
        assert rec.clear_recommendation.top_factor == "GROWTH"
        assert rec.quantitative_score.decision_score == 72
        assert rec.quantitative_score.top_option_name == "title"
        assert rec.next_steps == ["Negotiate equity"]
        assert rec.deal_breakers == []

    def test_fenced(self):
        rec = parse_response(f"```json\n{json.dumps(VALID_RESPONSE)}\n```")
        assert rec.recommendation == "Growth outweighs the commute."

    def test_missing_fields_get_defaults(self):
        rec = parse_response("{}")
        assert rec.clear_recommendation.action == RecommendationAction.NEEDS_MORE_INFO
        assert rec.clear_recommendation.top_factor == "Unknown"
        assert rec.quantitative_score.decision_score == 50
        assert rec.quantitative_score.confidence == 50
        assert rec.key_insights == "No key insights available"

    def test_unknown_action(self):
        rec = parse_response(json.dumps({"clearRecommendation": {"action": "maybe"}}))
        assert rec.clear_recommendation.action == RecommendationAction.NEEDS_MORE_INFO

    def test_wrong_shapes_are_tolerated(self):
        rec = parse_response(json.dumps({"clearRecommendation": "go", "reasons": "many"}))
        assert rec.clear_recommendation.top_factor == "Unknown"
        assert rec.reasons == []

    @pytest.mark.parametrize("text", ["not json at all", "[1, 2, 3]", ""])
    def test_unparseable(self, text):
        rec = parse_response(text)
        assert rec.quantitative_score.confidence == 0
        assert rec.key_insights == "Analysis completed but response formatting failed"

    def test_to_dict_keys(self):
        data = parse_response(json.dumps(VALID_RESPONSE)).to_dict()
        assert data["clearRecommendation"]["action"] == "proceed"
        assert data["quantitativeScore"]["topOptionName"] == "title"
        assert "topOptionScore" not in data["quantitativeScore"]


class TestFallback:
    def test_built_from_analysis(self, analysis, job_offer):
        rec = fallback_recommendation(analysis, job_offer)
        assert rec.clear_recommendation.action == RecommendationAction.NEEDS_MORE_INFO
        assert rec.clear_recommendation.top_factor == "SALARY"
        assert rec.quantitative_score.decision_score == analysis.overall_score
        assert rec.key_insights == "Risk level: low, Confidence: 71%"
        assert rec.reasons == analysis.warnings

    def test_no_factors(self):
        decision = Decision(factors=[])
        rec = fallback_recommendation(DecisionAnalyzer().analyze(decision), decision)
        assert rec.clear_recommendation.top_factor == "Unknown"


class FakeAssistantMessage:
    def __init__(self, content):
        self.content = content


class FakeTextBlock:
    def __init__(self, text):
        self.text = text


@pytest.fixture
def fake_sdk(monkeypatch):
    """Replace the SDK client with a scripted one; returns the recorded calls."""
    calls = []

    def install(messages=None, error=None):
        class FakeClient:
            def __init__(self, options):
                self.options = options

            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc):
                return False

            async def query(self, prompt):
                calls.append(SimpleNamespace(prompt=prompt, options=self.options))
                if error is not None:
                    raise error

            async def receive_response(self):
                for msg in messages or []:
                    yield msg

        monkeypatch.setattr(claude_service, "ClaudeSDKClient", FakeClient)
        monkeypatch.setattr(claude_service, "AssistantMessage", FakeAssistantMessage)
        monkeypatch.setattr(claude_service, "TextBlock", FakeTextBlock)
        return calls

    return install


class TestClaudeRecommendationService:
    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, fake_sdk, analysis, job_offer):
        text = json.dumps(VALID_RESPONSE)
        calls = fake_sdk([
            FakeAssistantMessage([FakeTextBlock(text[:20]), FakeTextBlock(text[20:])]),
            SimpleNamespace(content=[FakeTextBlock("ignored")]),
        ])
        rec = await ClaudeRecommendationService().generate(analysis, job_offer)
        assert rec.clear_recommendation.action == RecommendationAction.PROCEED
        assert len(calls) == 1
        assert calls[0].options.max_turns == 1
        assert calls[0].options.allowed_tools == []

    @pytest.mark.asyncio
    async def test_no_text_raises(self, fake_sdk, analysis, job_offer):
        fake_sdk([])
        with pytest.raises(RecommendationError, match="no text"):
            await ClaudeRecommendationService().generate(analysis, job_offer)

    @pytest.mark.asyncio
    async def test_quota_error(self, fake_sdk, analysis, job_offer):
        fake_sdk(error=RuntimeError("Quota exceeded for this key"))
        with pytest.raises(RecommendationError, match="quota exceeded"):
            await ClaudeRecommendationService().generate(analysis, job_offer)

    @pytest.mark.asyncio
    async def test_generic_error(self, fake_sdk, analysis, job_offer):
        fake_sdk(error=ConnectionError("boom"))
        with pytest.raises(RecommendationError, match="Failed to generate"):
            await ClaudeRecommendationService().generate(analysis, job_offer)
