from enum import Enum


class Category(str, Enum):
    FINANCIAL = "financial"
    PERSONAL = "personal"
    CAREER = "career"
    HEALTH = "health"


class TimeHorizon(str, Enum):
    IMMEDIATE = "immediate"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class NodeType(str, Enum):
    OUTCOME = "outcome"
    CONSEQUENCE = "consequence"
    OPTION = "option"
    CONSIDERATION = "consideration"


class DecisionStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETE = "complete"
    ARCHIVED = "archived"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BiasType(str, Enum):
    ANCHORING = "anchoring"
    AVAILABILITY = "availability"
    SUNK_COST = "sunk_cost"


class BiasSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConsistencyLevel(str, Enum):
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"


class RecommendationAction(str, Enum):
    PROCEED = "proceed"
    DONT_PROCEED = "dont_proceed"
    NEEDS_MORE_INFO = "needs_more_info"
    RECONSIDER = "reconsider"
