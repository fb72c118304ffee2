"""Tests for error resilience -- malformed stored data never crashes a calculation."""

import math

import pytest

from impact_engine.engine.result import ROIMetrics
from impact_engine.engine.roi import compute_roi_metrics
from impact_engine.engine.scaling import ScalingEngine
from impact_engine.orchestrator import ImpactOrchestrator
from impact_engine.storage import InMemoryProjectStore


class TestErrorResilience:
    """Verify the engine degrades to zero instead of raising."""

    @pytest.mark.parametrize(
        "entries",
        [
            ["not an entry"],
            [None],
            [{"valueDimension": "X", "hasQuantitative": True}, 17],
        ],
    )
    def test_malformed_effects_give_zero_metrics(self, entries):
        assert compute_roi_metrics(entries, [], 100_000) == ROIMetrics.empty()

    def test_sparse_entries_do_not_raise(self):
        entries = [
            {"hasQuantitative": True, "quantitativeDetails": {"effectType": "financial",
                                                             "financialDetails": {"valueUnit": "hours"}}},
            {"hasQualitative": "true", "qualitativeDetails": {"factor": "", "currentRating": 1}},
            {},
        ]
        metrics = compute_roi_metrics(entries, [{"costUnit": "monthly"}], None)
        assert metrics.total_monetary_value == 0
        assert metrics.summary.total_effects == 1

    def test_garbage_numbers_count_as_zero(self):
        entry = {
            "valueDimension": "Ekonomi",
            "hasQuantitative": True,
            "quantitativeDetails": {
                "effectType": "financial",
                "financialDetails": {
                    "valueUnit": "count",
                    "countDetails": {"count": "många", "valuePerUnit": 100},
                },
            },
        }
        metrics = compute_roi_metrics([entry], [], "n/a")
        assert metrics.total_monetary_value == 0
        assert metrics.economic_roi == 0

    def test_scaling_zero_base_has_no_nan(self):
        result = ScalingEngine().compute(ROIMetrics.empty(), [], None, {"orgs": 20})
        for value in (
            result.kpis.total_benefit,
            result.kpis.economic_roi,
            result.kpis.payback_years,
            result.validation.cost_per_org,
            result.validation.benefit_per_org,
        ):
            assert not math.isnan(value)
            assert not math.isinf(value)

    @pytest.mark.asyncio
    async def test_corrupt_project_record_computes_zero(self):
        store = InMemoryProjectStore(
            [{"id": "p", "effects_data": "corrupt", "cost_data": ["also corrupt"]}]
        )
        result = await ImpactOrchestrator(store).compute("p", {"orgs": 3})
        assert result.base == ROIMetrics.empty()
        assert result.kpis.total_benefit == 0
