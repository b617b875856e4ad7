from .enums import (
    BiasSeverity,
    BiasType,
    Category,
    ConsistencyLevel,
    DecisionStatus,
    NodeType,
    RecommendationAction,
    RiskLevel,
    TimeHorizon,
)
from .tree import Decision, EmotionalContext, Factor, TreeNode

__all__ = [
    "BiasSeverity",
    "BiasType",
    "Category",
    "ConsistencyLevel",
    "Decision",
    "DecisionStatus",
    "EmotionalContext",
    "Factor",
    "NodeType",
    "RecommendationAction",
    "RiskLevel",
    "TimeHorizon",
    "TreeNode",
]
