"""Convert engine results to the camelCase JSON shapes stored with projects.

Key names are part of the stored-data contract and must not change.
"""

from __future__ import annotations

from typing import Any

from .reporting import ROIInsights
from .result import (
    ConfidenceBand,
    ROIMetrics,
    ScaledImpactResult,
    SensitivityReport,
)


def roi_metrics_to_dict(metrics: ROIMetrics) -> dict:
    """Convert ROIMetrics to a serializable dict."""
    summary = metrics.summary
    return {
        "totalInvestment": metrics.total_investment,
        "totalMonetaryValue": metrics.total_monetary_value,
        "totalAnnualMonetaryValue": metrics.total_annual_monetary_value,
        "totalFinancialEffects": metrics.total_financial_effects,
        "totalRedistributionEffects": metrics.total_redistribution_effects,
        "totalQualitativeEffects": metrics.total_qualitative_effects,
        "economicROI": metrics.economic_roi,
        "qualitativeROI": metrics.qualitative_roi,
        "combinedROI": metrics.combined_roi,
        "paybackPeriod": metrics.payback_period,
        "financialEffects": [
            {
                "dimension": r.dimension,
                "measurement": r.measurement,
                "annualValue": r.annual_value,
                "totalValue": r.total_value,
                "roi": r.roi,
            }
            for r in metrics.financial_effects
        ],
        "redistributionEffects": [
            {
                "dimension": r.dimension,
                "resourceType": r.resource_type,
                "savedAmount": r.saved_amount,
                "annualValue": r.annual_value,
                "totalValue": r.total_value,
                "roi": r.roi,
            }
            for r in metrics.redistribution_effects
        ],
        "qualitativeEffects": [
            {
                "dimension": r.dimension,
                "factor": r.factor,
                "improvement": r.improvement,
                "improvementPercentage": r.improvement_percentage,
                "annualValue": r.annual_value,
                "totalValue": r.total_value,
                "roi": r.roi,
            }
            for r in metrics.qualitative_effects
        ],
        "dimensionBreakdown": {
            name: {
                "totalValue": d.total_value,
                "totalInvestment": d.total_investment,
                "economicROI": d.economic_roi,
                "qualitativeROI": d.qualitative_roi,
                "effectCount": d.effect_count,
            }
            for name, d in metrics.dimension_breakdown.items()
        },
        "summary": {
            "totalEffects": summary.total_effects,
            "financialCount": summary.financial_count,
            "redistributionCount": summary.redistribution_count,
            "qualitativeCount": summary.qualitative_count,
            "dimensionsCovered": list(summary.dimensions_covered),
            "averageEconomicROI": summary.average_economic_roi,
            "averageQualitativeROI": summary.average_qualitative_roi,
            "highestROI": summary.highest_roi,
            "lowestROI": summary.lowest_roi,
        },
    }


def scaled_impact_to_dict(result: ScaledImpactResult) -> dict:
    """Convert ScaledImpactResult to a serializable dict."""
    resolved = result.input
    kpis = result.kpis
    validation = result.validation
    return {
        "base": roi_metrics_to_dict(result.base),
        "input": {
            "orgs": resolved.orgs,
            "adopted": resolved.adopted,
            "adoptionRate": resolved.adoption_rate,
            "s": resolved.s,
            "replicationMode": (
                resolved.replication_mode.value if resolved.replication_mode else None
            ),
            "normalization": {
                "applied": resolved.normalization_applied,
                "ratio": resolved.normalization_ratio,
                "exponent": resolved.normalization_exponent,
                "factor": resolved.normalization_factor,
            },
            "implementationYears": resolved.implementation_years,
        },
        "kpis": {
            "totalBenefit": kpis.total_benefit,
            "totalCost": kpis.total_cost,
            "economicROI": kpis.economic_roi,
            "paybackYears": kpis.payback_years,
            "benefitPerOrg": kpis.benefit_per_org,
            "replicationCost": kpis.replication_cost,
        },
        "dimensionBreakdown": {
            name: {
                "totalValue": d.total_value,
                "baseValue": d.base_value,
                "effectCount": d.effect_count,
            }
            for name, d in result.dimension_breakdown.items()
        },
        "validation": {
            "isRealistic": validation.is_realistic,
            "costPerOrg": validation.cost_per_org,
            "benefitPerOrg": validation.benefit_per_org,
            "roiClamped": validation.roi_clamped,
            "warnings": list(validation.warnings),
        },
    }


def _confidence_to_dict(band: ConfidenceBand) -> dict:
    return {"p10": band.p10, "p50": band.p50, "p90": band.p90}


def sensitivity_to_dict(report: SensitivityReport) -> dict:
    return {
        "series": [{"n": p.n, "roi": p.roi, "benefit": p.benefit} for p in report.series],
        "ci": _confidence_to_dict(report.confidence),
        "tornado": [
            {"name": r.name, "low": r.low, "high": r.high, "impact": r.impact}
            for r in report.tornado
        ],
    }


def insights_to_dict(insights: ROIInsights) -> dict[str, Any]:
    return {
        "insights": list(insights.insights),
        "recommendations": list(insights.recommendations),
        "riskLevel": insights.risk_level.value,
    }
