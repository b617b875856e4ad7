"""Shared test fixtures for the Decision Compass test suite."""

import pytest

from compass.models.enums import Category, NodeType, TimeHorizon
from compass.models.tree import Decision, EmotionalContext, Factor, TreeNode


def make_factor(
    factor_id="f1",
    weight=50,
    category=Category.CAREER,
    children=None,
    **kwargs,
):
    """Helper to create a Factor with minimal boilerplate."""
    return Factor(
        id=factor_id,
        name=kwargs.pop("name", factor_id.upper()),
        weight=weight,
        category=category,
        children=children or [],
        **kwargs,
    )


def make_node(node_id, weight=None, children=None, **kwargs):
    return TreeNode(
        id=node_id,
        name=kwargs.pop("name", node_id.upper()),
        type=kwargs.pop("type", NodeType.OUTCOME),
        weight=weight,
        children=children or [],
        **kwargs,
    )


@pytest.fixture
def job_offer() -> Decision:
    """Three-factor career decision with a nested outcome tree."""
    return Decision(
        id="dec-1",
        title="Accept the new job offer?",
        description="Senior role at a smaller company",
        factors=[
            make_factor(
                "salary",
                weight=40,
                category=Category.FINANCIAL,
                uncertainty=20,
                regret_potential=30,
                time_horizon=TimeHorizon.SHORT,
                children=[
                    make_node("raise", weight=60),
                    make_node("equity", weight=40, children=[make_node("vesting", weight=20)]),
                ],
            ),
            make_factor(
                "growth",
                weight=35,
                category=Category.CAREER,
                uncertainty=40,
                regret_potential=60,
                time_horizon=TimeHorizon.LONG,
                children=[make_node("title", weight=70)],
            ),
            make_factor(
                "commute",
                weight=25,
                category=Category.PERSONAL,
                uncertainty=10,
                regret_potential=20,
                time_horizon=TimeHorizon.IMMEDIATE,
            ),
        ],
        emotional_context=EmotionalContext(
            initial_stress_level=6,
            confidence_level=7,
            urgency_rating=4,
        ),
    )


@pytest.fixture
def job_offer_payload() -> dict:
    """The same kind of decision as the decision store would send it."""
    return {
        "title": "Accept the new job offer?",
        "description": "Senior role at a smaller company",
        "status": "active",
        "factors": [
            {
                "id": "salary",
                "name": "Salary",
                "weight": 40,
                "category": "financial",
                "uncertainty": 20,
                "regretPotential": 30,
                "timeHorizon": "short",
                "children": [
                    {"id": "raise", "name": "Raise", "type": "outcome", "weight": 60},
                    {"id": "equity", "name": "Equity", "type": "outcome", "weight": 40},
                ],
            },
            {
                "id": "growth",
                "name": "Growth",
                "weight": 35,
                "category": "career",
                "timeHorizon": "long",
            },
            {
                "id": "commute",
                "name": "Commute",
                "weight": 25,
                "category": "personal",
                "emotionalWeight": 70,
            },
        ],
        "emotionalContext": {
            "initialStressLevel": 6,
            "confidenceLevel": 7,
            "urgencyRating": 4,
        },
    }
