from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import Category, DecisionStatus, NodeType, TimeHorizon

# camelCase keys used by the decision store -> dataclass attribute names
_SCORED_FIELDS = {
    "weight": "weight",
    "importance": "importance",
    "emotionalWeight": "emotional_weight",
    "uncertainty": "uncertainty",
    "regretPotential": "regret_potential",
}


def _optional_number(data: dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    return float(value)


def _scored_kwargs(data: dict[str, Any]) -> dict[str, Optional[float]]:
    return {attr: _optional_number(data, key) for key, attr in _SCORED_FIELDS.items()}


def _scored_dict(node: TreeNode | Factor) -> dict[str, float]:
    out: dict[str, float] = {}
    for key, attr in _SCORED_FIELDS.items():
        value = getattr(node, attr)
        if value is not None:
            out[key] = value
    return out


@dataclass
class TreeNode:
    """Any node below a top-level factor. Children nest to arbitrary depth."""

    id: str
    name: str
    type: NodeType = NodeType.CONSIDERATION
    category: Optional[Category] = None
    weight: Optional[float] = None
    importance: Optional[float] = None
    emotional_weight: Optional[float] = None
    uncertainty: Optional[float] = None
    regret_potential: Optional[float] = None
    description: Optional[str] = None
    children: list[TreeNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeNode:
        category = data.get("category")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            type=NodeType(data.get("type") or NodeType.CONSIDERATION.value),
            category=Category(category) if category else None,
            description=data.get("description"),
            children=[cls.from_dict(c) for c in data.get("children") or []],
            **_scored_kwargs(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type.value}
        if self.category is not None:
            out["category"] = self.category.value
        out.update(_scored_dict(self))
        if self.description is not None:
            out["description"] = self.description
        out["children"] = [c.to_dict() for c in self.children]
        return out


@dataclass
class Factor:
    """A top-level weighted consideration in a decision tree.

    Optional percentage fields stay ``None`` when unset; consumers apply
    their documented defaults (50, or ``medium`` for the time horizon).
    """

    id: str
    name: str
    weight: float
    category: Category
    uncertainty: Optional[float] = None
    time_horizon: TimeHorizon = TimeHorizon.MEDIUM
    emotional_weight: Optional[float] = None
    regret_potential: Optional[float] = None
    importance: Optional[float] = None
    type: Optional[NodeType] = None
    description: Optional[str] = None
    children: list[TreeNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Factor:
        kwargs = _scored_kwargs(data)
        kwargs["weight"] = kwargs["weight"] or 0.0
        node_type = data.get("type")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            category=Category(data["category"]),
            time_horizon=TimeHorizon(data.get("timeHorizon") or TimeHorizon.MEDIUM.value),
            type=NodeType(node_type) if node_type else None,
            description=data.get("description"),
            children=[TreeNode.from_dict(c) for c in data.get("children") or []],
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "timeHorizon": self.time_horizon.value,
        }
        if self.type is not None:
            out["type"] = self.type.value
        out.update(_scored_dict(self))
        if self.description is not None:
            out["description"] = self.description
        out["children"] = [c.to_dict() for c in self.children]
        return out


@dataclass
class EmotionalContext:
    """Self-reported state at decision time, each rating on a 1-10 scale."""

    initial_stress_level: int = 5
    confidence_level: int = 5
    urgency_rating: int = 5
    values_alignment: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmotionalContext:
        return cls(
            initial_stress_level=data.get("initialStressLevel") or 5,
            confidence_level=data.get("confidenceLevel") or 5,
            urgency_rating=data.get("urgencyRating") or 5,
            values_alignment=list(data.get("valuesAlignment") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "initialStressLevel": self.initial_stress_level,
            "confidenceLevel": self.confidence_level,
            "urgencyRating": self.urgency_rating,
            "valuesAlignment": list(self.values_alignment),
        }


@dataclass
class Decision:
    """A decision as supplied by the decision store."""

    factors: list[Factor]
    id: Optional[str] = None
    title: str = ""
    description: str = ""
    status: DecisionStatus = DecisionStatus.DRAFT
    emotional_context: Optional[EmotionalContext] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Decision:
        context = data.get("emotionalContext")
        decision_id = data.get("id")
        return cls(
            id=str(decision_id) if decision_id is not None else None,
            title=data.get("title") or "",
            description=data.get("description") or "",
            status=DecisionStatus(data.get("status") or DecisionStatus.DRAFT.value),
            factors=[Factor.from_dict(f) for f in data.get("factors") or []],
            emotional_context=EmotionalContext.from_dict(context) if context else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "factors": [f.to_dict() for f in self.factors],
        }
        if self.id is not None:
            out["id"] = self.id
        if self.emotional_context is not None:
            out["emotionalContext"] = self.emotional_context.to_dict()
        return out

    @property
    def context(self) -> EmotionalContext:
        """The emotional context, or a neutral one when none was recorded."""
        return self.emotional_context or EmotionalContext()
