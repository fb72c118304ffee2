from __future__ import annotations

from enum import Enum
from typing import Optional, TypeVar

E = TypeVar("E", bound=Enum)


class CostUnit(str, Enum):
    HOURS = "hours"
    FIXED = "fixed"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ValueUnit(str, Enum):
    HOURS = "hours"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    COUNT = "count"
    OTHER = "other"


class EffectType(str, Enum):
    FINANCIAL = "financial"
    REDISTRIBUTION = "redistribution"


class ReplicationMode(str, Enum):
    HOURS_PER_ORG = "hours_per_org"
    COST_PER_ORG = "cost_per_org"
    ECONOMIES_OF_SCALE = "economies_of_scale"
    COMPLEXITY_INCREASE = "complexity_increase"


class DriverType(str, Enum):
    POPULATION = "population"
    USERS = "users"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def parse_enum(enum_cls: type[E], value: object) -> Optional[E]:
    """Map a stored token onto ``enum_cls``; unknown or missing tokens give None."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        return None
