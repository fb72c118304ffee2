"""Scaling engine: project one organization's ROI report onto many adopters.

A single deterministic pass with no top-level exception handling. Every
division and ratio is guarded individually so that valid-shaped input can
never produce NaN or infinity; wrongly-typed input is rejected earlier by
:class:`ScalingInput` validation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from impact_engine.config.settings import Settings, get_settings
from impact_engine.models.enums import DriverType, parse_enum
from impact_engine.models.scaling import NormalizationConfig, ReplicationConfig, ScalingInput
from impact_engine.replication import get_replication_model

from .investment import compute_total_investment
from .result import (
    ResolvedScaling,
    ROIMetrics,
    ScaledDimension,
    ScaledImpactResult,
    ScaledKPIs,
    ScalingValidation,
)

logger = logging.getLogger(__name__)

RATIO_BOUNDS = (0.1, 10.0)
EXPONENT_BOUNDS = (0.5, 1.5)
POPULATION_DAMPING_RATIO = 5.0
POPULATION_MAX_EXPONENT = 0.8
USERS_DAMPING_RATIO = 3.0
USERS_MIN_EXPONENT = 0.9


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Normalization:
    applied: bool = False
    ratio: float = 1.0
    exponent: float = 1.0

    @property
    def factor(self) -> float:
        return self.ratio**self.exponent if self.applied else 1.0


def resolve_adopted(orgs: int, adoption_rate: float) -> int:
    """Number of adopting organizations; at least one unless adoption is zero."""
    if adoption_rate <= 0:
        return 0
    # round half up
    return min(orgs, max(1, math.floor(orgs * adoption_rate + 0.5)))


def resolve_normalization(config: Optional[NormalizationConfig]) -> Normalization:
    """Driver-metric rescaling of the per-organization benefit.

    Disabled or invalid (``baseMetric <= 0``) configurations leave the
    benefit unchanged.
    """
    if config is None or not config.enabled:
        return Normalization()
    base_metric = config.base_metric or 0.0
    if base_metric <= 0:
        logger.info("Skipping benefit normalization: base metric must be positive")
        return Normalization()

    target_metric = config.target_avg_metric if config.target_avg_metric is not None else base_metric
    ratio = _clamp(target_metric / base_metric, *RATIO_BOUNDS)
    exponent = _clamp(config.exponent if config.exponent is not None else 1.0, *EXPONENT_BOUNDS)

    driver = parse_enum(DriverType, (config.driver_type or "").lower())
    if driver is DriverType.POPULATION and ratio > POPULATION_DAMPING_RATIO:
        exponent = min(exponent, POPULATION_MAX_EXPONENT)
    elif driver is DriverType.USERS and ratio > USERS_DAMPING_RATIO:
        exponent = max(exponent, USERS_MIN_EXPONENT)

    return Normalization(applied=True, ratio=ratio, exponent=exponent)


def geometric_benefit(benefit_per_org: float, s: float, adopted: int) -> float:
    """Sum of benefit_per_org * s**i for i in 0..adopted-1 (diminishing returns)."""
    if adopted <= 0:
        return 0.0
    if s == 1:
        return benefit_per_org * adopted
    return benefit_per_org * ((1 - s**adopted) / (1 - s))


def replication_cost(config: ReplicationConfig, adopted: int, min_cost_per_org: float) -> float:
    """Replication cost for organizations 2..adopted, each floored at the minimum."""
    model = get_replication_model(config.mode)
    total = 0.0
    for org_number in range(2, adopted + 1):
        cost = model.cost_fn(config, org_number) if model is not None else 0.0
        total += max(min_cost_per_org, cost)
    return total


class ScalingEngine:
    """Stateless engine producing a ScaledImpactResult from a base ROI report."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def compute(
        self,
        base: ROIMetrics,
        cost_entries: Optional[Iterable[Any]],
        budget_amount: Any,
        scaling: Union[ScalingInput, dict, None],
    ) -> ScaledImpactResult:
        settings = self._settings
        if not isinstance(scaling, ScalingInput):
            scaling = ScalingInput.model_validate(scaling or {})
        validation = scaling.validation

        # 1. Adoption
        orgs = max(1, math.floor(scaling.orgs))
        adoption_pct = 100.0 if scaling.adoption_rate_pct is None else scaling.adoption_rate_pct
        adoption_rate = _clamp(adoption_pct / 100, 0.0, 1.0)
        adopted = resolve_adopted(orgs, adoption_rate)
        s = 1.0 if scaling.scalability_coefficient is None else scaling.scalability_coefficient

        # 2-3. Benefit
        normalization = resolve_normalization(scaling.normalization)
        benefit_per_org = base.total_monetary_value * normalization.factor
        total_benefit = geometric_benefit(benefit_per_org, s, adopted)

        # 4. Cost -- organization #1 carries the project's real investment
        base_cost = base.total_investment
        if base_cost <= 0:
            base_cost = compute_total_investment(cost_entries, budget_amount)
        extra_cost = replication_cost(scaling.replication, adopted, validation.min_cost_per_org)
        total_cost = base_cost + extra_cost

        warnings: list[str] = []

        # 5. ROI, clamped
        raw_roi = ((total_benefit - total_cost) / total_cost) * 100 if total_cost > 0 else 0.0
        economic_roi = _clamp(raw_roi, -validation.max_roi, validation.max_roi)
        roi_clamped = economic_roi != raw_roi
        if roi_clamped:
            logger.info("Scaled ROI %.1f%% clamped to %.1f%%", raw_roi, economic_roi)
            warnings.append(
                f"Economic ROI of {raw_roi:.0f}% was capped at {economic_roi:.0f}%"
            )

        # 6. Payback
        implementation_years = math.ceil(adopted / settings.orgs_per_year) if adopted > 0 else 0
        payback_years = self._payback_years(
            base, total_benefit, total_cost, implementation_years, validation.max_payback_years
        )

        # 7. Dimension breakdown
        scale = (
            total_benefit / base.total_monetary_value if base.total_monetary_value > 0 else 0.0
        )
        dimensions = {
            name: ScaledDimension(
                total_value=d.total_value * scale,
                base_value=d.total_value,
                effect_count=d.effect_count,
            )
            for name, d in base.dimension_breakdown.items()
        }

        # 8. Validation
        cost_per_org = total_cost / adopted if adopted > 0 else 0.0
        realized_benefit_per_org = total_benefit / adopted if adopted > 0 else 0.0
        is_realistic = (
            economic_roi < validation.max_roi and payback_years < validation.max_payback_years
        )
        if economic_roi > settings.warn_roi_above:
            warnings.append(
                f"Economic ROI above {settings.warn_roi_above:.0f}% - verify the benefit assumptions"
            )
        if payback_years > settings.warn_payback_above:
            warnings.append(
                f"Payback period exceeds {settings.warn_payback_above:.0f} years"
            )
        if normalization.applied and normalization.ratio > settings.warn_ratio_above:
            warnings.append(
                f"Normalization ratio {normalization.ratio:.1f} is above "
                f"{settings.warn_ratio_above:.0f} - benefit per organization may be overstated"
            )
        if adopted > 0 and cost_per_org < validation.min_cost_per_org:
            warnings.append(
                f"Cost per organization ({cost_per_org:,.0f}) is below "
                f"{validation.min_cost_per_org:,.0f} - replication cost may be underestimated"
            )
        if orgs > settings.warn_orgs_above:
            warnings.append(
                f"More than {settings.warn_orgs_above} organizations - the projection is uncertain"
            )

        return ScaledImpactResult(
            base=base,
            input=ResolvedScaling(
                orgs=orgs,
                adopted=adopted,
                adoption_rate=adoption_rate,
                s=s,
                replication_mode=scaling.replication.mode,
                normalization_applied=normalization.applied,
                normalization_ratio=normalization.ratio,
                normalization_exponent=normalization.exponent,
                normalization_factor=normalization.factor,
                implementation_years=implementation_years,
            ),
            kpis=ScaledKPIs(
                total_benefit=total_benefit,
                total_cost=total_cost,
                economic_roi=economic_roi,
                payback_years=payback_years,
                benefit_per_org=benefit_per_org,
                replication_cost=extra_cost,
            ),
            dimension_breakdown=dimensions,
            validation=ScalingValidation(
                is_realistic=is_realistic,
                cost_per_org=cost_per_org,
                benefit_per_org=realized_benefit_per_org,
                roi_clamped=roi_clamped,
                warnings=warnings,
            ),
        )

    def _payback_years(
        self,
        base: ROIMetrics,
        total_benefit: float,
        total_cost: float,
        implementation_years: int,
        max_years: float,
    ) -> float:
        """Years until the scaled benefit repays the scaled cost, capped at ``max_years``.

        With a known base payback the base annual benefit is scaled like the
        total benefit and spread over the implementation timeline (at most
        ``orgs_per_year`` new organizations a year). Otherwise benefits are
        assumed to arrive evenly over ``fallback_benefit_years``.
        """
        payback = 0.0
        if base.payback_period > 0 and base.total_investment > 0:
            base_annual = base.total_investment / base.payback_period
            scale = (
                total_benefit / base.total_monetary_value
                if base.total_monetary_value > 0
                else 0.0
            )
            average_annual = (
                base_annual * scale / implementation_years if implementation_years > 0 else 0.0
            )
            if average_annual > 0:
                payback = total_cost / average_annual
        elif total_benefit > total_cost > 0:
            payback = total_cost / (total_benefit / self._settings.fallback_benefit_years)
        return min(payback, max_years)


def compute_scaled_impact(
    base: ROIMetrics,
    cost_entries: Optional[Iterable[Any]],
    budget_amount: Any,
    scaling: Union[ScalingInput, dict, None],
) -> ScaledImpactResult:
    return ScalingEngine().compute(base, cost_entries, budget_amount, scaling)
