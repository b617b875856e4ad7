"""Prompt construction for AI decision recommendations."""

from __future__ import annotations

import json

from compass.engine.result import AnalysisResult
from compass.models.tree import Decision

SYSTEM_PROMPT = """\
You are an expert decision psychologist analyzing a user's decision tree. \
Your job is to provide CLEAR, DIRECT, ACTIONABLE recommendations. Output \
ONLY valid JSON, no markdown formatting."""

METRICS_GUIDE = """\
IMPORTANT CONTEXT ABOUT METRICS:
- Uncertainty & Regret Potential: LOW values (0-30) = GOOD/CONFIDENT, HIGH values (70-100) = BAD/RISKY
- A factor with 20% uncertainty is BETTER than one with 80% uncertainty
- A factor with 15% regret potential is BETTER than one with 85% regret potential
- Importance & Emotional Weight: HIGH values = more significant to the user"""

INSTRUCTIONS = """\
CRITICAL INSTRUCTIONS:
1. You MUST give a clear, direct recommendation. Do NOT be vague or meta-analytical.
2. Factors have children (outcomes/options). These children are what the user is actually choosing between.
3. If this is a binary decision (yes/no, option A vs B), you MUST pick a side based on the data.
4. If there are multiple paths/options in the tree, identify which specific path/option/child the user should pursue.
5. Reference SPECIFIC factor names AND their children/outcomes by name from the decision tree.
6. Remember: Low uncertainty/regret = good/confident choice. High uncertainty/regret = risky/uncertain choice."""

RESPONSE_CONTRACT = """\
Provide your response in the following JSON format (no markdown, no code blocks):
{
  "clearRecommendation": {
    "action": "proceed | dont_proceed | needs_more_info | reconsider",
    "statement": "A DIRECT statement naming the specific option/path from the tree",
    "topFactor": "The single most important factor (actual factor name from the tree)"
  },
  "quantitativeScore": {
    "decisionScore": 75,
    "topOptionName": "Winning option/path/child node if applicable",
    "topOptionScore": 82,
    "confidence": 85
  },
  "recommendation": "A supportive 2-3 sentence explanation referencing specific factors",
  "reasons": ["Concrete reason 1", "Concrete reason 2", "Concrete reason 3"],
  "nextSteps": ["Specific action 1", "Specific action 2", "Specific action 3"],
  "dealBreakers": ["Critical issue 1", "Critical issue 2", "Critical issue 3"],
  "missingInfo": ["Information gap 1", "Information gap 2"],
  "warnings": ["Important consideration 1", "Important consideration 2"],
  "alternatives": ["Alternative approach 1", "Alternative approach 2"],
  "keyInsights": "The single most important insight in one sentence"
}"""


def format_analysis(analysis: AnalysisResult) -> str:
    """Render the algorithmic results as a bullet list."""
    insights = analysis.insights
    biases = ", ".join(b.type.value for b in insights.bias_flags) or "None"
    return "\n".join([
        "Algorithmic Analysis Results:",
        f"- Overall Score: {analysis.overall_score:.1f}/100",
        f"- Confidence Level: {analysis.confidence}%",
        f"- Risk Assessment: {analysis.risk_level.value}",
        f"- Complexity Score: {insights.complexity_score}/100",
        f"- Emotional Alignment: {insights.emotional_alignment}%",
        f"- Time-Value Score: {insights.time_value_score}%",
        f"- Category Distribution: {json.dumps(insights.category_balance)}",
        f"- Detected Biases: {biases}",
        f"- System Warnings: {'; '.join(analysis.warnings)}",
    ])


def build_prompt(analysis: AnalysisResult, decision: Decision) -> str:
    """Assemble the user prompt: context, full tree, analysis, contract."""
    context = decision.context
    tree = json.dumps([f.to_dict() for f in decision.factors], indent=2)

    sections = [
        METRICS_GUIDE,
        "\n".join([
            "Decision Context:",
            f'- Title: "{decision.title}"',
            f'- Description: "{decision.description or "No description provided"}"',
            f"- Status: {decision.status.value}",
            (
                f"- Emotional State: Stress={context.initial_stress_level}/10, "
                f"Confidence={context.confidence_level}/10, "
                f"Urgency={context.urgency_rating}/10"
            ),
        ]),
        f"FULL DECISION TREE STRUCTURE (with all nested children/outcomes):\n{tree}",
        format_analysis(analysis),
        INSTRUCTIONS,
        RESPONSE_CONTRACT,
    ]
    return "\n\n".join(sections)
