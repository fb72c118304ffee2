"""Human-readable insights and display formatting for ROI reports."""

from __future__ import annotations

from dataclasses import dataclass, field

from impact_engine.models.enums import RiskLevel

from .result import ROIMetrics

CURRENCY = "SEK"


@dataclass(frozen=True)
class ROIInsights:
    insights: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.MEDIUM


def get_roi_insights(metrics: ROIMetrics) -> ROIInsights:
    """Classify a report into insights, recommendations and a risk level.

    Economic ROI drives the risk level: above 50% is low risk, any positive
    figure medium, zero or negative high.
    """
    insights: list[str] = []
    recommendations: list[str] = []

    if metrics.economic_roi > 100:
        insights.append("Excellent economic ROI above 100%")
        risk_level = RiskLevel.LOW
    elif metrics.economic_roi > 50:
        insights.append("Good economic ROI above 50%")
        risk_level = RiskLevel.LOW
    elif metrics.economic_roi > 0:
        insights.append("Positive economic ROI")
        risk_level = RiskLevel.MEDIUM
    else:
        insights.append("Negative economic ROI - requires closer analysis")
        risk_level = RiskLevel.HIGH

    if metrics.qualitative_roi > 50:
        insights.append("High qualitative improvements")
    elif metrics.qualitative_roi > 20:
        insights.append("Moderate qualitative improvements")
    elif metrics.qualitative_roi > 0:
        insights.append("Low qualitative improvements")

    summary = metrics.summary
    if summary.financial_count > 0 and summary.qualitative_count > 0:
        insights.append("Balanced mix of economic and qualitative effects")
    elif summary.financial_count > 0:
        insights.append("Focus on economic effects")
    elif summary.qualitative_count > 0:
        insights.append("Focus on qualitative effects")

    # 0 means no payback could be determined
    if metrics.payback_period > 0:
        if metrics.payback_period < 1:
            insights.append("Fast payback under 1 year")
        elif metrics.payback_period < 3:
            insights.append("Moderate payback of 1-3 years")
        else:
            insights.append("Long payback over 3 years")

    if metrics.economic_roi < 0:
        recommendations.append("Consider adjusting the project's scope or costs")
    if summary.qualitative_count == 0:
        recommendations.append("Consider including qualitative effect measurements")
    if metrics.payback_period > 5:
        recommendations.append("Consider splitting the project into smaller phases")

    return ROIInsights(insights=insights, recommendations=recommendations, risk_level=risk_level)


def format_currency(value: float) -> str:
    magnitude = abs(value)
    if magnitude < 0.5:
        return f"0 {CURRENCY}"
    sign = "-" if value < 0 else ""
    if magnitude >= 1_000_000:
        return f"{sign}{magnitude / 1_000_000:.1f}M {CURRENCY}"
    if magnitude >= 1_000:
        return f"{sign}{magnitude / 1_000:.0f}K {CURRENCY}"
    return f"{sign}{magnitude:.0f} {CURRENCY}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def get_roi_status(roi: float) -> str:
    if roi > 100:
        return "Excellent"
    if roi > 50:
        return "Very good"
    if roi > 20:
        return "Good"
    if roi > 0:
        return "Positive"
    return "Negative"


def format_roi_metrics(metrics: ROIMetrics) -> dict:
    """Display strings for the headline figures of a report."""
    summary = metrics.summary
    return {
        "totalInvestment": format_currency(metrics.total_investment),
        "totalMonetaryValue": format_currency(metrics.total_monetary_value),
        "economicROI": format_percentage(metrics.economic_roi),
        "qualitativeROI": format_percentage(metrics.qualitative_roi),
        "combinedROI": format_percentage(metrics.combined_roi),
        "paybackPeriod": (
            f"{metrics.payback_period:.1f} years" if metrics.payback_period > 0 else "N/A"
        ),
        "status": get_roi_status(metrics.economic_roi),
        "totalEffects": summary.total_effects,
        "financialCount": summary.financial_count,
        "redistributionCount": summary.redistribution_count,
        "qualitativeCount": summary.qualitative_count,
    }
