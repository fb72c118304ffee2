"""Pydantic models for the multi-organization scaling configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from impact_engine.config.settings import get_settings

from .enums import ReplicationMode, parse_enum

# Upper bound of the per-adopter decay factor
MAX_SCALABILITY_COEFFICIENT = 1.2


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class ReplicationConfig(_CamelModel):
    """How each additional adopting organization is priced."""

    mode: Optional[ReplicationMode] = None
    # hours_per_org
    hours_per_org: Optional[float] = None
    hourly_rate: Optional[float] = None
    # cost_per_org
    cost_per_org: Optional[float] = None
    # economies_of_scale / complexity_increase
    base_cost_per_org: Optional[float] = None
    scale_discount_pct: Optional[float] = Field(
        default=None, description="Cumulative linear discount per additional org (0.05 = 5%)"
    )
    min_cost_per_org: Optional[float] = None
    complexity_increase_pct: Optional[float] = Field(
        default=None, description="Cumulative linear surcharge per additional org"
    )

    @field_validator("mode", mode="before")
    @classmethod
    def unknown_mode_is_none(cls, v):
        # unknown modes price replication at the per-org floor
        return parse_enum(ReplicationMode, v)


class NormalizationConfig(_CamelModel):
    """Rescales the per-organization benefit by an external driver metric."""

    enabled: bool = False
    base_metric: Optional[float] = Field(
        default=None, description="Driver metric of the reporting organization"
    )
    target_avg_metric: Optional[float] = Field(
        default=None,
        alias="targetAvgMetric",
        validation_alias=AliasChoices("targetAvgMetric", "targetMetric", "target_avg_metric"),
        description="Average driver metric across the target organizations",
    )
    exponent: Optional[float] = Field(default=None, description="Sensitivity, clamped to 0.5-1.5")
    driver_type: Optional[str] = Field(default=None, description="e.g. population, users")


class ValidationConfig(_CamelModel):
    """Output caps. Omitted values fall back to the configured defaults."""

    max_roi: float = Field(default_factory=lambda: get_settings().max_roi, alias="maxROI", ge=0)
    min_cost_per_org: float = Field(default_factory=lambda: get_settings().min_cost_per_org, ge=0)
    max_payback_years: float = Field(
        default_factory=lambda: get_settings().max_payback_years, ge=0
    )


class ScalingInput(_CamelModel):
    """Top-level scaling request for one project."""

    orgs: float = Field(default=1, ge=1, description="Fractions are floored")
    adoption_rate_pct: Optional[float] = Field(default=None, description="0-100, default 100")
    scalability_coefficient: Optional[float] = Field(
        default=None,
        ge=0,
        le=MAX_SCALABILITY_COEFFICIENT,
        description="Per-adopter decay factor, conventionally 0.6-1.0",
    )
    replication: ReplicationConfig = Field(default_factory=ReplicationConfig)
    normalization: Optional[NormalizationConfig] = None
    validation: ValidationConfig = Field(default_factory=ValidationConfig)

    @field_validator("orgs")
    @classmethod
    def orgs_within_limit(cls, v):
        limit = get_settings().max_orgs
        if v > limit:
            raise ValueError(f"at most {limit} organizations can be projected")
        return v

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
