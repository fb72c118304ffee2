"""What-if analyses layered on top of the scaling engine.

All three analyses re-run :class:`ScalingEngine` on perturbed copies of the
scaling input; the input itself is never mutated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Union

from impact_engine.models.enums import ReplicationMode
from impact_engine.models.scaling import MAX_SCALABILITY_COEFFICIENT, ScalingInput

from .result import (
    ConfidenceBand,
    ROIMetrics,
    ScaledImpactResult,
    SensitivityReport,
    SeriesPoint,
    TornadoRow,
)
from .scaling import ScalingEngine

logger = logging.getLogger(__name__)

DEFAULT_BENEFIT_UNCERTAINTY_PCT = 20.0
DEFAULT_COST_UNCERTAINTY_PCT = 15.0
TORNADO_STEP = 0.1

# replication field varied by the tornado for each mode
_COST_DRIVERS: dict[ReplicationMode, str] = {
    ReplicationMode.HOURS_PER_ORG: "hourly_rate",
    ReplicationMode.COST_PER_ORG: "cost_per_org",
    ReplicationMode.ECONOMIES_OF_SCALE: "base_cost_per_org",
    ReplicationMode.COMPLEXITY_INCREASE: "base_cost_per_org",
}


def _as_input(scaling: Union[ScalingInput, dict, None]) -> ScalingInput:
    if isinstance(scaling, ScalingInput):
        return scaling
    return ScalingInput.model_validate(scaling or {})


def _roi(cost: float, benefit: float) -> float:
    return ((benefit - cost) / cost) * 100 if cost > 0 else 0.0


def roi_series(
    base: ROIMetrics,
    cost_entries: Optional[Iterable[Any]],
    budget_amount: Any,
    scaling: Union[ScalingInput, dict, None],
    engine: Optional[ScalingEngine] = None,
) -> list[SeriesPoint]:
    """Economic ROI and total benefit for 1..N organizations."""
    engine = engine or ScalingEngine()
    scaling = _as_input(scaling)
    cost_entries = list(cost_entries or [])
    points = []
    for n in range(1, max(1, int(scaling.orgs)) + 1):
        result = engine.compute(
            base, cost_entries, budget_amount, scaling.model_copy(update={"orgs": n})
        )
        points.append(
            SeriesPoint(n=n, roi=result.kpis.economic_roi, benefit=result.kpis.total_benefit)
        )
    return points


def confidence_band(
    result: ScaledImpactResult,
    benefit_uncertainty_pct: float = DEFAULT_BENEFIT_UNCERTAINTY_PCT,
    cost_uncertainty_pct: float = DEFAULT_COST_UNCERTAINTY_PCT,
) -> ConfidenceBand:
    """P10/P50/P90 economic ROI.

    P10 lowers the benefit and raises the cost by the given uncertainties,
    P90 does the opposite. P50 is the result's own ROI.
    """
    benefit_u = max(0.0, benefit_uncertainty_pct) / 100
    cost_u = max(0.0, cost_uncertainty_pct) / 100
    benefit = result.kpis.total_benefit
    cost = result.kpis.total_cost
    return ConfidenceBand(
        p10=_roi(cost * (1 + cost_u), benefit * (1 - benefit_u)),
        p50=result.kpis.economic_roi,
        p90=_roi(cost * (1 - cost_u), benefit * (1 + benefit_u)),
    )


def _vary_adoption(scaling: ScalingInput, direction: int) -> ScalingInput:
    pct = 100.0 if scaling.adoption_rate_pct is None else scaling.adoption_rate_pct
    varied = max(0.0, min(100.0, pct * (1 + TORNADO_STEP * direction)))
    return scaling.model_copy(update={"adoption_rate_pct": varied})


def _vary_scalability(scaling: ScalingInput, direction: int) -> ScalingInput:
    s = 1.0 if scaling.scalability_coefficient is None else scaling.scalability_coefficient
    varied = max(0.5, min(MAX_SCALABILITY_COEFFICIENT, s * (1 + TORNADO_STEP * direction)))
    return scaling.model_copy(update={"scalability_coefficient": varied})


def _vary_replication_cost(scaling: ScalingInput, direction: int) -> ScalingInput:
    replication = scaling.replication
    field_name = _COST_DRIVERS.get(replication.mode)
    if field_name is None:
        return scaling
    current = getattr(replication, field_name) or 0.0
    varied = current * (1 + TORNADO_STEP * direction)
    if field_name == "hourly_rate":
        varied = max(1.0, varied)
    return scaling.model_copy(
        update={"replication": replication.model_copy(update={field_name: varied})}
    )


_TORNADO_DRIVERS: list[tuple[str, Callable[[ScalingInput, int], ScalingInput]]] = [
    ("Adoption rate", _vary_adoption),
    ("Scalability", _vary_scalability),
    ("Replication cost", _vary_replication_cost),
]


def tornado(
    base: ROIMetrics,
    cost_entries: Optional[Iterable[Any]],
    budget_amount: Any,
    scaling: Union[ScalingInput, dict, None],
    engine: Optional[ScalingEngine] = None,
) -> list[TornadoRow]:
    """One-at-a-time +/-10% variation of the key drivers, largest impact first."""
    engine = engine or ScalingEngine()
    scaling = _as_input(scaling)
    cost_entries = list(cost_entries or [])
    base_roi = engine.compute(base, cost_entries, budget_amount, scaling).kpis.economic_roi

    rows = []
    for name, vary in _TORNADO_DRIVERS:
        low = engine.compute(base, cost_entries, budget_amount, vary(scaling, -1)).kpis.economic_roi
        high = engine.compute(base, cost_entries, budget_amount, vary(scaling, 1)).kpis.economic_roi
        impact = max(abs(low - base_roi), abs(high - base_roi))
        rows.append(TornadoRow(name=name, low=low, high=high, impact=impact))
    rows.sort(key=lambda r: r.impact, reverse=True)
    return rows


def analyze(
    base: ROIMetrics,
    cost_entries: Optional[Iterable[Any]],
    budget_amount: Any,
    scaling: Union[ScalingInput, dict, None],
    benefit_uncertainty_pct: float = DEFAULT_BENEFIT_UNCERTAINTY_PCT,
    cost_uncertainty_pct: float = DEFAULT_COST_UNCERTAINTY_PCT,
    engine: Optional[ScalingEngine] = None,
) -> tuple[ScaledImpactResult, SensitivityReport]:
    """Scaled result plus its ROI series, confidence band and tornado."""
    engine = engine or ScalingEngine()
    scaling = _as_input(scaling)
    cost_entries = list(cost_entries or [])
    result = engine.compute(base, cost_entries, budget_amount, scaling)
    report = SensitivityReport(
        series=roi_series(base, cost_entries, budget_amount, scaling, engine),
        confidence=confidence_band(result, benefit_uncertainty_pct, cost_uncertainty_pct),
        tornado=tornado(base, cost_entries, budget_amount, scaling, engine),
    )
    logger.debug(
        "Sensitivity analysis: %d series points, %d tornado rows",
        len(report.series),
        len(report.tornado),
    )
    return result, report
