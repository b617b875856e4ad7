"""Request bodies accepted at the HTTP boundary.

Field-level limits here are the API-side validation; the engine itself
tolerates missing or out-of-range values.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from compass.ahp.scale import judgment_value
from compass.models.enums import Category, DecisionStatus, NodeType, TimeHorizon
from compass.models.tree import Decision, Factor

MAX_FACTORS = 20


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class TreeNodePayload(_CamelModel):
    id: str
    name: str = Field(min_length=1, max_length=100)
    type: NodeType = NodeType.CONSIDERATION
    category: Optional[Category] = None
    weight: Optional[float] = Field(default=None, ge=0, le=100)
    importance: Optional[float] = Field(default=None, ge=0, le=100)
    emotional_weight: Optional[float] = Field(default=None, ge=0, le=100)
    uncertainty: Optional[float] = Field(default=None, ge=0, le=100)
    regret_potential: Optional[float] = Field(default=None, ge=0, le=100)
    description: Optional[str] = Field(default=None, max_length=500)
    children: list[TreeNodePayload] = Field(default_factory=list)


class FactorPayload(_CamelModel):
    id: str
    name: str = Field(min_length=1, max_length=100)
    weight: int = Field(ge=0, le=100)
    category: Category
    uncertainty: Optional[float] = Field(default=None, ge=0, le=100)
    time_horizon: TimeHorizon = TimeHorizon.MEDIUM
    emotional_weight: Optional[float] = Field(default=None, ge=0, le=100)
    regret_potential: Optional[float] = Field(default=None, ge=0, le=100)
    importance: Optional[float] = Field(default=None, ge=0, le=100)
    type: Optional[NodeType] = None
    description: Optional[str] = Field(default=None, max_length=500)
    children: list[TreeNodePayload] = Field(default_factory=list)

    def to_factor(self) -> Factor:
        return Factor.from_dict(_dump(self))


class EmotionalContextPayload(_CamelModel):
    initial_stress_level: int = Field(default=5, ge=1, le=10)
    confidence_level: int = Field(default=5, ge=1, le=10)
    urgency_rating: int = Field(default=5, ge=1, le=10)
    values_alignment: list[str] = Field(default_factory=list)


class DecisionPayload(_CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    status: DecisionStatus = DecisionStatus.DRAFT
    factors: list[FactorPayload] = Field(min_length=1, max_length=MAX_FACTORS)
    emotional_context: Optional[EmotionalContextPayload] = None

    def to_decision(self, decision_id: str) -> Decision:
        data = _dump(self)
        data["id"] = decision_id
        return Decision.from_dict(data)


class ComparisonPayload(_CamelModel):
    """One judgment, either as a raw ratio or as side plus 1-9 intensity."""

    item_a: str
    item_b: str
    value: Optional[float] = Field(default=None, gt=0)
    intensity: Optional[int] = Field(default=None, ge=1, le=9)
    favors_a: bool = True

    @model_validator(mode="after")
    def check_one_form(self) -> ComparisonPayload:
        if (self.value is None) == (self.intensity is None):
            raise ValueError("provide exactly one of value or intensity")
        return self

    def ratio(self) -> float:
        if self.value is not None:
            return self.value
        return judgment_value(self.intensity, self.favors_a)


def _unique(items: list[str]) -> list[str]:
    if len(set(items)) != len(items):
        raise ValueError("item names must be unique")
    return items


class PairsRequest(_CamelModel):
    items: list[str] = Field(min_length=1)

    @field_validator("items")
    @classmethod
    def items_unique(cls, v: list[str]) -> list[str]:
        return _unique(v)


class WeightsRequest(_CamelModel):
    items: list[str] = Field(min_length=1)
    comparisons: list[ComparisonPayload] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def items_unique(cls, v: list[str]) -> list[str]:
        return _unique(v)


class ApplyWeightsRequest(_CamelModel):
    factors: list[FactorPayload] = Field(min_length=1, max_length=MAX_FACTORS)
    weights: dict[str, float] = Field(default_factory=dict)


class FactorTreeRequest(_CamelModel):
    factors: list[FactorPayload] = Field(min_length=1, max_length=MAX_FACTORS)


class ReweightRequest(_CamelModel):
    factors: list[FactorPayload] = Field(min_length=1, max_length=MAX_FACTORS)
    method: Literal["equal", "normalize"]
    parent_id: Optional[str] = None


class TreeAHPRequest(_CamelModel):
    """Pairwise judgments for one sibling group, naming nodes by name."""

    factors: list[FactorPayload] = Field(min_length=1, max_length=MAX_FACTORS)
    comparisons: list[ComparisonPayload] = Field(default_factory=list)
    parent_id: Optional[str] = None


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


TreeNodePayload.model_rebuild()
