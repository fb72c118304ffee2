"""Replication-cost models for organizations 2..N.

Each function is a pure calculation of what replicating the intervention in
organization number ``org_number`` (>= 2) costs. Missing parameters count
as 0; the engine applies the configured per-organization floor afterwards.
"""

from impact_engine.models.enums import ReplicationMode
from impact_engine.models.scaling import ReplicationConfig

from .registry import register_replication_model


@register_replication_model(
    mode=ReplicationMode.HOURS_PER_ORG,
    label="Hours per organization",
    description="Fixed implementation effort per organization. Formula: hours_per_org * hourly_rate.",
    required_params=["hours_per_org", "hourly_rate"],
)
def hours_per_org_cost(config: ReplicationConfig, org_number: int) -> float:
    return (config.hours_per_org or 0.0) * (config.hourly_rate or 0.0)


@register_replication_model(
    mode=ReplicationMode.COST_PER_ORG,
    label="Fixed cost per organization",
    description="Flat replication cost. Formula: cost_per_org.",
    required_params=["cost_per_org"],
)
def cost_per_org_cost(config: ReplicationConfig, org_number: int) -> float:
    return config.cost_per_org or 0.0


@register_replication_model(
    mode=ReplicationMode.ECONOMIES_OF_SCALE,
    label="Economies of scale",
    description=(
        "Each further organization is cheaper by a cumulative linear discount, "
        "never below the minimum. Formula: max(min_cost_per_org, "
        "base_cost_per_org * max(0, 1 - scale_discount_pct * (org_number - 2)))."
    ),
    required_params=["base_cost_per_org", "scale_discount_pct", "min_cost_per_org"],
)
def economies_of_scale_cost(config: ReplicationConfig, org_number: int) -> float:
    discount = (config.scale_discount_pct or 0.0) * (org_number - 2)
    discounted = (config.base_cost_per_org or 0.0) * max(0.0, 1 - discount)
    return max(config.min_cost_per_org or 0.0, discounted)


@register_replication_model(
    mode=ReplicationMode.COMPLEXITY_INCREASE,
    label="Complexity increase",
    description=(
        "Each further organization costs more by a cumulative linear surcharge. "
        "Formula: base_cost_per_org * (1 + complexity_increase_pct * (org_number - 2))."
    ),
    required_params=["base_cost_per_org", "complexity_increase_pct"],
)
def complexity_increase_cost(config: ReplicationConfig, org_number: int) -> float:
    surcharge = (config.complexity_increase_pct or 0.0) * (org_number - 2)
    return (config.base_cost_per_org or 0.0) * (1 + surcharge)
