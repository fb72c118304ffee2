"""Audit hooks: one structured entry per engine call on a stored project.

Entries carry the headline KPIs of the calculation rather than a dump of the
whole result, so an audit trail stays small and comparable across runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from impact_engine.engine.result import ROIMetrics, ScaledImpactResult, SensitivityReport
from impact_engine.models.parsing import optional_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationAudit:
    project_id: str
    operation: str
    timestamp: str
    kpis: Mapping[str, float] = field(default_factory=dict)
    scaling: Optional[Mapping[str, Any]] = None


def roi_kpis(metrics: ROIMetrics) -> dict[str, float]:
    return {
        "economicROI": metrics.economic_roi,
        "totalMonetaryValue": metrics.total_monetary_value,
        "totalInvestment": metrics.total_investment,
        "paybackPeriod": metrics.payback_period,
    }


def scaled_kpis(result: ScaledImpactResult) -> dict[str, float]:
    return {
        "adopted": float(result.input.adopted),
        "economicROI": result.kpis.economic_roi,
        "totalBenefit": result.kpis.total_benefit,
        "totalCost": result.kpis.total_cost,
        "paybackYears": result.kpis.payback_years,
    }


def sensitivity_kpis(result: ScaledImpactResult, report: SensitivityReport) -> dict[str, float]:
    kpis = scaled_kpis(result)
    kpis["p10"] = report.confidence.p10
    kpis["p90"] = report.confidence.p90
    return kpis


def saved_kpis(result: Mapping[str, Any]) -> dict[str, float]:
    """Numeric KPIs of a client-supplied result; non-numeric values are dropped."""
    stored = result.get("kpis")
    if not isinstance(stored, Mapping):
        return {}
    kpis = {}
    for name, value in stored.items():
        number = optional_number(value)
        if number is not None:
            kpis[str(name)] = number
    return kpis


def log_calculation(
    project_id: str,
    operation: str,
    kpis: Optional[Mapping[str, float]] = None,
    scaling: Optional[Mapping[str, Any]] = None,
) -> CalculationAudit:
    """Record a roi/compute/analyze/save invocation.

    Returns the audit entry for downstream persistence.
    """
    entry = CalculationAudit(
        project_id=project_id,
        operation=operation,
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        kpis=dict(kpis or {}),
        scaling=dict(scaling) if scaling is not None else None,
    )
    logger.info(
        "Calculation audit: %s -> %s %s",
        operation,
        project_id,
        " ".join(f"{name}={value:.2f}" for name, value in entry.kpis.items()),
    )
    return entry
