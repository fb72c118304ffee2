"""Immutable result structures returned by the valuation engine.

Sequences are stored as tuples and breakdown maps as read-only mapping
proxies, so a returned result cannot be changed in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from impact_engine.models.enums import ReplicationMode


@dataclass(frozen=True)
class FinancialEffectResult:
    dimension: str
    measurement: str
    annual_value: float
    total_value: float
    roi: float


@dataclass(frozen=True)
class RedistributionEffectResult:
    dimension: str
    resource_type: str
    saved_amount: float
    annual_value: float
    total_value: float
    roi: float


@dataclass(frozen=True)
class QualitativeEffectResult:
    dimension: str
    factor: str
    improvement: float
    improvement_percentage: float
    annual_value: float
    total_value: float
    roi: float


@dataclass(frozen=True)
class DimensionBreakdown:
    """Per value-dimension totals.

    ``qualitative_roi`` and ``economic_roi`` hold the value of the last
    effect seen for the dimension, they are not accumulated.
    """

    total_value: float = 0.0
    qualitative_roi: float = 0.0
    effect_count: int = 0
    economic_roi: float = 0.0
    total_investment: float = 0.0


@dataclass(frozen=True)
class ROISummary:
    total_effects: int = 0
    financial_count: int = 0
    redistribution_count: int = 0
    qualitative_count: int = 0
    dimensions_covered: tuple[str, ...] = ()
    average_economic_roi: float = 0.0
    average_qualitative_roi: float = 0.0
    highest_roi: float = 0.0
    lowest_roi: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "dimensions_covered", tuple(self.dimensions_covered))


@dataclass(frozen=True)
class ROIMetrics:
    """ROI report for a single project."""

    total_investment: float = 0.0
    total_monetary_value: float = 0.0
    total_annual_monetary_value: float = 0.0
    total_financial_effects: float = 0.0
    total_redistribution_effects: float = 0.0
    total_qualitative_effects: float = 0.0
    economic_roi: float = 0.0
    qualitative_roi: float = 0.0
    combined_roi: float = 0.0
    payback_period: float = 0.0
    financial_effects: tuple[FinancialEffectResult, ...] = ()
    redistribution_effects: tuple[RedistributionEffectResult, ...] = ()
    qualitative_effects: tuple[QualitativeEffectResult, ...] = ()
    dimension_breakdown: Mapping[str, DimensionBreakdown] = field(default_factory=dict)
    summary: ROISummary = field(default_factory=ROISummary)

    def __post_init__(self):
        object.__setattr__(self, "financial_effects", tuple(self.financial_effects))
        object.__setattr__(self, "redistribution_effects", tuple(self.redistribution_effects))
        object.__setattr__(self, "qualitative_effects", tuple(self.qualitative_effects))
        object.__setattr__(
            self, "dimension_breakdown", MappingProxyType(dict(self.dimension_breakdown))
        )

    @classmethod
    def empty(cls) -> ROIMetrics:
        return cls()


@dataclass(frozen=True)
class ROIOutcome:
    """Either a computed report or the error that prevented it."""

    metrics: Optional[ROIMetrics] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ResolvedScaling:
    """Scaling parameters after defaults, floors and clamps were applied."""

    orgs: int
    adopted: int
    adoption_rate: float
    s: float
    replication_mode: Optional[ReplicationMode] = None
    normalization_applied: bool = False
    normalization_ratio: float = 1.0
    normalization_exponent: float = 1.0
    normalization_factor: float = 1.0
    implementation_years: int = 0


@dataclass(frozen=True)
class ScaledKPIs:
    total_benefit: float
    total_cost: float
    economic_roi: float
    payback_years: float
    benefit_per_org: float
    replication_cost: float = 0.0


@dataclass(frozen=True)
class ScaledDimension:
    total_value: float
    base_value: float
    effect_count: int


@dataclass(frozen=True)
class ScalingValidation:
    is_realistic: bool
    cost_per_org: float
    benefit_per_org: float
    roi_clamped: bool = False
    warnings: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "warnings", tuple(self.warnings))


@dataclass(frozen=True)
class ScaledImpactResult:
    """Projected impact of replicating a project across many organizations."""

    base: ROIMetrics
    input: ResolvedScaling
    kpis: ScaledKPIs
    dimension_breakdown: Mapping[str, ScaledDimension]
    validation: ScalingValidation

    def __post_init__(self):
        object.__setattr__(
            self, "dimension_breakdown", MappingProxyType(dict(self.dimension_breakdown))
        )


@dataclass(frozen=True)
class SeriesPoint:
    n: int
    roi: float
    benefit: float


@dataclass(frozen=True)
class ConfidenceBand:
    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class TornadoRow:
    name: str
    low: float
    high: float
    impact: float


@dataclass(frozen=True)
class SensitivityReport:
    series: tuple[SeriesPoint, ...]
    confidence: ConfidenceBand
    tornado: tuple[TornadoRow, ...]

    def __post_init__(self):
        object.__setattr__(self, "series", tuple(self.series))
        object.__setattr__(self, "tornado", tuple(self.tornado))
