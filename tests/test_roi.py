"""Tests for the ROI aggregator."""

import math

import pytest

from impact_engine.engine.result import DimensionBreakdown, ROIMetrics
from impact_engine.engine.roi import (
    ROIAggregator,
    ROICalculationError,
    calculate_roi,
    combine_roi,
    compute_roi_metrics,
)
from tests.conftest import make_cost, make_financial, make_qualitative, make_redistribution


class TestCombineROI:
    def test_mean_when_both_positive(self):
        assert combine_roi(100, 50) == 75

    def test_economic_only(self):
        assert combine_roi(120, 0) == 120

    def test_qualitative_only(self):
        assert combine_roi(0, 40) == 40

    def test_both_zero(self):
        assert combine_roi(0, 0) == 0

    def test_negative_economic_wins_over_positive_qualitative(self):
        assert combine_roi(-100, 33) == -100


class TestFinancialAggregation:
    def test_single_hours_effect(self, hours_effect):
        m = calculate_roi([hours_effect], 50_000)
        assert m.total_monetary_value == 600_000
        assert m.total_financial_effects == 600_000
        assert m.total_annual_monetary_value == 600_000
        assert m.economic_roi == pytest.approx(1100)
        assert m.combined_roi == pytest.approx(1100)
        assert m.payback_period == pytest.approx(50_000 / 600_000)

    def test_effect_row(self, hours_effect):
        m = calculate_roi([hours_effect], 50_000)
        row = m.financial_effects[0]
        assert row.dimension == "Ekonomi"
        assert row.measurement == "Tidsbesparing"
        assert row.annual_value == 600_000
        assert row.total_value == 600_000
        assert row.roi == pytest.approx(1200)

    def test_annualization_years_multiply_total_not_annual(self):
        effect = make_financial("currency", years=3, amount=10_000, timescale="per_year")
        m = calculate_roi([effect], 10_000)
        assert m.total_monetary_value == 30_000
        assert m.total_annual_monetary_value == 10_000
        assert m.payback_period == pytest.approx(1.0)

    def test_no_investment_gives_zero_ratios(self, hours_effect):
        m = calculate_roi([hours_effect], 0)
        assert m.total_monetary_value == 600_000
        assert m.economic_roi == 0
        assert m.payback_period == 0
        assert m.financial_effects[0].roi == 0


class TestRedistributionAggregation:
    def test_saved_amount_counted(self, staff_time_effect):
        m = calculate_roi([staff_time_effect], 100_000)
        assert m.total_redistribution_effects == 705_000
        row = m.redistribution_effects[0]
        assert row.saved_amount == 705_000
        assert row.annual_value == 705_000
        assert row.resource_type == "Personaltid"

    def test_cost_increase_keeps_row_but_not_totals(self, hours_effect):
        costlier = make_redistribution("currency", currentAmount=10_000, newAmount=30_000)
        m = calculate_roi([hours_effect, costlier], 50_000)
        assert m.redistribution_effects[0].total_value == -20_000
        assert m.total_redistribution_effects == 0
        assert m.total_monetary_value == 600_000
        assert m.total_annual_monetary_value == 600_000
        assert m.dimension_breakdown["Kvalitet"].total_value == -20_000


class TestQualitativeAggregation:
    def test_improvement_percentage(self):
        m = calculate_roi([make_qualitative(current=2, target=3)], 0)
        row = m.qualitative_effects[0]
        assert row.improvement == 1
        assert row.improvement_percentage == pytest.approx(50)
        assert m.qualitative_roi == pytest.approx(50)

    def test_zero_current_rating_gives_zero_percentage(self):
        m = calculate_roi([make_qualitative(current=0, target=3)], 0)
        assert m.qualitative_effects[0].improvement_percentage == 0
        assert m.qualitative_roi == 0

    def test_without_estimate_adds_no_money(self):
        m = calculate_roi([make_qualitative()], 50_000)
        assert m.total_monetary_value == 0
        assert m.total_qualitative_effects == 0

    def test_monetary_estimate_is_counted(self):
        m = calculate_roi([make_qualitative(estimate=20_000, years=2)], 50_000)
        assert m.total_qualitative_effects == 40_000
        assert m.total_monetary_value == 40_000
        assert m.total_annual_monetary_value == 20_000

    def test_qualitative_roi_is_mean_over_dimensions(self):
        entries = [
            make_qualitative(dimension="A", current=2, target=3),
            make_qualitative(dimension="B", current=4, target=5),
        ]
        m = calculate_roi(entries, 0)
        assert m.qualitative_roi == pytest.approx(37.5)

    def test_dimension_qualitative_roi_is_last_write(self):
        entries = [
            make_qualitative(dimension="A", current=2, target=3),
            make_qualitative(dimension="A", current=4, target=5),
        ]
        m = calculate_roi(entries, 0)
        assert m.dimension_breakdown["A"].qualitative_roi == pytest.approx(25)
        assert m.dimension_breakdown["A"].effect_count == 2


class TestEntryEligibility:
    def test_string_flags_accepted(self, hours_effect):
        hours_effect["hasQuantitative"] = "true"
        m = calculate_roi([hours_effect], 50_000)
        assert m.summary.total_effects == 1

    def test_false_string_flag_skips_entry(self, hours_effect):
        hours_effect["hasQuantitative"] = "false"
        assert calculate_roi([hours_effect], 50_000) == ROIMetrics.empty()

    def test_incomplete_qualitative_skipped(self):
        entry = make_qualitative()
        del entry["qualitativeDetails"]["currentRating"]
        assert calculate_roi([entry], 0).summary.total_effects == 0

    def test_details_must_match_effect_type(self, hours_effect):
        quant = hours_effect["quantitativeDetails"]
        quant["effectType"] = "redistribution"
        assert calculate_roi([hours_effect], 50_000) == ROIMetrics.empty()

    def test_no_entries_gives_zero_report(self):
        assert calculate_roi([], 50_000) == ROIMetrics.empty()
        assert calculate_roi(None, 50_000) == ROIMetrics.empty()

    def test_entry_with_both_kinds_counts_once(self, hours_effect):
        hours_effect["hasQualitative"] = True
        hours_effect["qualitativeDetails"] = {
            "factor": "Nöjdhet",
            "currentRating": 3,
            "targetRating": 4,
        }
        m = calculate_roi([hours_effect], 50_000)
        assert m.summary.total_effects == 1
        assert m.summary.financial_count == 1
        assert m.summary.qualitative_count == 1
        assert m.dimension_breakdown["Ekonomi"].effect_count == 1


class TestSummaryAndBreakdown:
    def test_summary(self, hours_effect, staff_time_effect):
        entries = [hours_effect, staff_time_effect, make_qualitative(current=2, target=3)]
        m = calculate_roi(entries, 100_000)
        s = m.summary
        assert s.total_effects == 3
        assert s.financial_count == 1
        assert s.redistribution_count == 1
        assert s.qualitative_count == 1
        assert s.dimensions_covered == ("Ekonomi", "Kvalitet")
        assert s.average_economic_roi == pytest.approx((600 + 705) / 2)
        assert s.highest_roi == pytest.approx(m.economic_roi)
        assert s.lowest_roi == pytest.approx(m.qualitative_roi)

    def test_dimension_breakdown(self, hours_effect):
        m = calculate_roi([hours_effect], 50_000)
        dim = m.dimension_breakdown["Ekonomi"]
        assert dim.total_value == 600_000
        assert dim.economic_roi == pytest.approx(1200)
        assert dim.total_investment == 0
        assert dim.effect_count == 1

    def test_no_nan_in_results(self, hours_effect, staff_time_effect):
        m = calculate_roi([hours_effect, staff_time_effect, make_qualitative(current=0)], 0)
        for value in (m.economic_roi, m.qualitative_roi, m.combined_roi, m.payback_period):
            assert not math.isnan(value)
            assert not math.isinf(value)

    def test_report_cannot_be_changed_in_place(self, hours_effect):
        m = calculate_roi([hours_effect], 50_000)
        with pytest.raises(TypeError):
            m.dimension_breakdown["Ekonomi"] = DimensionBreakdown()
        with pytest.raises(AttributeError):
            m.financial_effects.append(m.financial_effects[0])
        assert isinstance(m.summary.dimensions_covered, tuple)


class TestFailurePolicy:
    def test_malformed_entry_returns_zero_metrics(self, hours_effect):
        assert calculate_roi([hours_effect, "garbage"], 50_000) == ROIMetrics.empty()

    def test_strict_mode_raises(self, hours_effect):
        with pytest.raises(ROICalculationError):
            calculate_roi([hours_effect, 42], 50_000, strict=True)

    def test_try_calculate_exposes_error(self):
        outcome = ROIAggregator().try_calculate([None], 10)
        assert not outcome.ok
        assert isinstance(outcome.error, TypeError)
        assert outcome.metrics is None

    def test_try_calculate_success(self, hours_effect):
        outcome = ROIAggregator().try_calculate([hours_effect], 50_000)
        assert outcome.ok
        assert outcome.metrics.economic_roi == pytest.approx(1100)


class TestComputeROIMetrics:
    def test_investment_from_cost_entries(self, hours_effect, fixed_cost_50k):
        m = compute_roi_metrics([hours_effect], [fixed_cost_50k], "999999")
        assert m.total_investment == 50_000
        assert m.economic_roi == pytest.approx(1100)

    def test_investment_from_budget(self, hours_effect):
        m = compute_roi_metrics([hours_effect], [], "50000 SEK")
        assert m.total_investment == 50_000

    def test_monthly_cost(self, hours_effect):
        costs = [make_cost("monthly", monthlyAmount=5_000, monthlyDuration=10)]
        assert compute_roi_metrics([hours_effect], costs).total_investment == 50_000
