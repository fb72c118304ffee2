"""ROI aggregator: a project's effect entries -> ROI report.

Callers get the fail-safe behaviour by default: any exception raised while
aggregating (malformed entries, unexpected nesting) is logged and an all-zero
report is returned. ``strict=True`` raises :class:`ROICalculationError`
instead, and :meth:`ROIAggregator.try_calculate` exposes both outcomes.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from impact_engine.models.entries import EffectEntry
from impact_engine.models.enums import EffectType
from impact_engine.models.parsing import to_number

from .investment import compute_total_investment
from .result import (
    DimensionBreakdown,
    FinancialEffectResult,
    QualitativeEffectResult,
    RedistributionEffectResult,
    ROIMetrics,
    ROIOutcome,
    ROISummary,
)
from .valuation import calculate_annual_value, calculate_saved_amount, lifetime_value

logger = logging.getLogger(__name__)


class ROICalculationError(Exception):
    """Raised in strict mode when effect entries cannot be aggregated."""


def _effect_roi(total_value: float, investment: float) -> float:
    return (total_value / investment) * 100 if investment > 0 else 0.0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def combine_roi(economic_roi: float, qualitative_roi: float) -> float:
    """Mean of both figures when both are positive, otherwise the non-zero one.

    When both are non-zero but not both positive, the economic figure wins.
    """
    if economic_roi > 0 and qualitative_roi > 0:
        return (economic_roi + qualitative_roi) / 2
    if economic_roi != 0:
        return economic_roi
    return qualitative_roi


class ROIAggregator:
    """Stateless engine that folds effect entries into an ROIMetrics report."""

    def calculate(
        self,
        effect_entries: Optional[Iterable[Any]],
        total_investment: Any,
        strict: bool = False,
    ) -> ROIMetrics:
        outcome = self.try_calculate(effect_entries, total_investment)
        if outcome.ok:
            return outcome.metrics
        if strict:
            raise ROICalculationError(str(outcome.error)) from outcome.error
        logger.error(
            "ROI aggregation failed, returning zero metrics", exc_info=outcome.error
        )
        return ROIMetrics.empty()

    def try_calculate(
        self,
        effect_entries: Optional[Iterable[Any]],
        total_investment: Any,
    ) -> ROIOutcome:
        try:
            metrics = self._aggregate(effect_entries, total_investment)
        except Exception as e:
            return ROIOutcome(error=e)
        return ROIOutcome(metrics=metrics)

    def _aggregate(
        self,
        effect_entries: Optional[Iterable[Any]],
        total_investment: Any,
    ) -> ROIMetrics:
        entries = [EffectEntry.from_dict(raw) for raw in (effect_entries or [])]
        investment = to_number(total_investment)

        total_monetary = 0.0
        total_annual = 0.0
        total_financial = 0.0
        total_redistribution = 0.0
        total_qualitative = 0.0

        financial_rows: list[FinancialEffectResult] = []
        redistribution_rows: list[RedistributionEffectResult] = []
        qualitative_rows: list[QualitativeEffectResult] = []
        dimensions: dict[str, dict[str, float]] = {}
        counted = 0

        for entry in entries:
            has_qualitative = entry.counts_qualitative
            has_quantitative = entry.counts_quantitative
            if not has_qualitative and not has_quantitative:
                logger.debug("Skipping effect entry without reported effects")
                continue

            counted += 1
            dimension = entry.value_dimension
            dim = dimensions.setdefault(
                dimension,
                {"total_value": 0.0, "qualitative_roi": 0.0, "economic_roi": 0.0, "effect_count": 0},
            )
            dim["effect_count"] += 1

            if has_qualitative:
                qual = entry.qualitative_details
                current = qual.current_rating
                improvement = qual.target_rating - current
                improvement_pct = (improvement / current) * 100 if current > 0 else 0.0
                annual_value = qual.monetary_estimate or 0.0
                total_value = lifetime_value(annual_value, qual.annualization_years)
                if qual.monetary_estimate:
                    total_monetary += total_value
                    total_annual += annual_value
                    total_qualitative += total_value
                qualitative_rows.append(
                    QualitativeEffectResult(
                        dimension=dimension,
                        factor=qual.factor,
                        improvement=improvement,
                        improvement_percentage=improvement_pct,
                        annual_value=annual_value,
                        total_value=total_value,
                        roi=_effect_roi(total_value, investment),
                    )
                )
                dim["total_value"] += total_value
                dim["qualitative_roi"] = improvement_pct

            if has_quantitative:
                quant = entry.quantitative_details
                if quant.effect_type is EffectType.FINANCIAL:
                    fin = quant.financial_details
                    annual_value = calculate_annual_value(fin)
                    total_value = lifetime_value(annual_value, fin.annualization_years)
                    roi = _effect_roi(total_value, investment)
                    total_monetary += total_value
                    total_annual += annual_value
                    total_financial += total_value
                    financial_rows.append(
                        FinancialEffectResult(
                            dimension=dimension,
                            measurement=fin.measurement_name,
                            annual_value=annual_value,
                            total_value=total_value,
                            roi=roi,
                        )
                    )
                    dim["total_value"] += total_value
                    dim["economic_roi"] = roi
                elif quant.effect_type is EffectType.REDISTRIBUTION:
                    redist = quant.redistribution_details
                    saved_amount = calculate_saved_amount(redist)
                    total_value = lifetime_value(saved_amount, redist.annualization_years)
                    roi = _effect_roi(total_value, investment)
                    # an increase keeps its row but never lowers the totals
                    if total_value > 0:
                        total_monetary += total_value
                        total_annual += saved_amount
                        total_redistribution += total_value
                    redistribution_rows.append(
                        RedistributionEffectResult(
                            dimension=dimension,
                            resource_type=redist.resource_type,
                            saved_amount=saved_amount,
                            annual_value=saved_amount,
                            total_value=total_value,
                            roi=roi,
                        )
                    )
                    dim["total_value"] += total_value
                    dim["economic_roi"] = roi

        if counted == 0:
            logger.info("No effect entries with reported effects, returning zero metrics")
            return ROIMetrics.empty()

        economic_roi = (
            ((total_monetary - investment) / investment) * 100 if investment > 0 else 0.0
        )
        qualitative_roi = _mean(
            [d["qualitative_roi"] for d in dimensions.values() if d["qualitative_roi"] > 0]
        )
        combined_roi = combine_roi(economic_roi, qualitative_roi)
        payback_period = (
            investment / total_annual if total_annual > 0 and investment > 0 else 0.0
        )

        headline = [economic_roi, qualitative_roi, combined_roi]
        summary = ROISummary(
            total_effects=counted,
            financial_count=len(financial_rows),
            redistribution_count=len(redistribution_rows),
            qualitative_count=len(qualitative_rows),
            dimensions_covered=list(dimensions),
            average_economic_roi=_mean(
                [r.roi for r in financial_rows] + [r.roi for r in redistribution_rows]
            ),
            average_qualitative_roi=qualitative_roi,
            highest_roi=max(headline),
            lowest_roi=min(headline),
        )

        return ROIMetrics(
            total_investment=investment,
            total_monetary_value=total_monetary,
            total_annual_monetary_value=total_annual,
            total_financial_effects=total_financial,
            total_redistribution_effects=total_redistribution,
            total_qualitative_effects=total_qualitative,
            economic_roi=economic_roi,
            qualitative_roi=qualitative_roi,
            combined_roi=combined_roi,
            payback_period=payback_period,
            financial_effects=financial_rows,
            redistribution_effects=redistribution_rows,
            qualitative_effects=qualitative_rows,
            dimension_breakdown={
                name: DimensionBreakdown(
                    total_value=d["total_value"],
                    qualitative_roi=d["qualitative_roi"],
                    effect_count=int(d["effect_count"]),
                    economic_roi=d["economic_roi"],
                )
                for name, d in dimensions.items()
            },
            summary=summary,
        )


_aggregator = ROIAggregator()


def calculate_roi(
    effect_entries: Optional[Iterable[Any]],
    total_investment: Any,
    strict: bool = False,
) -> ROIMetrics:
    """Aggregate effect entries against a known total investment."""
    return _aggregator.calculate(effect_entries, total_investment, strict=strict)


def compute_roi_metrics(
    effect_entries: Optional[Iterable[Any]],
    cost_entries: Optional[Iterable[Any]] = None,
    budget_amount: Any = None,
    strict: bool = False,
) -> ROIMetrics:
    """Resolve the investment from costs/budget, then aggregate the effects."""
    total = compute_total_investment(cost_entries, budget_amount)
    return calculate_roi(effect_entries, total, strict=strict)
