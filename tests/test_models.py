"""Tests for stored-record parsing, scaling input and project snapshot models."""

import pytest

from impact_engine.models.entries import CostEntry, EffectEntry, QualitativeDetails
from impact_engine.models.enums import CostUnit, EffectType, ReplicationMode, ValueUnit, parse_enum
from impact_engine.models.parsing import optional_number, parse_leading_float, to_flag
from impact_engine.models.project import SCALED_IMPACT_KEY, ProjectSnapshot, merge_scaled_impact
from impact_engine.models.scaling import ScalingInput, ValidationConfig


class TestParsing:
    @pytest.mark.parametrize(
        "raw,expected",
        [(5, 5.0), ("12.5", 12.5), (" 7 ", 7.0), ("", None), (None, None), ("abc", None), (True, None)],
    )
    def test_optional_number(self, raw, expected):
        assert optional_number(raw) == expected

    def test_nan_is_absent(self):
        assert optional_number(float("nan")) is None

    def test_leading_float(self):
        assert parse_leading_float("150000 kr") == 150_000
        assert parse_leading_float("1.5e3") == 1_500
        assert parse_leading_float("kr 150000") == 0
        assert parse_leading_float(99) == 99

    def test_flags(self):
        assert to_flag(True)
        assert to_flag("true")
        assert not to_flag("false")
        assert not to_flag(None)


class TestEnums:
    def test_known_token(self):
        assert parse_enum(CostUnit, "monthly") is CostUnit.MONTHLY

    def test_unknown_token(self):
        assert parse_enum(ValueUnit, "kilograms") is None

    def test_non_string(self):
        assert parse_enum(EffectType, 3) is None


class TestEntries:
    def test_cost_entry_from_dict(self):
        entry = CostEntry.from_dict(
            {"costUnit": "hours", "costLabel": "Konsult", "hoursDetails": {"hours": "40", "hourlyRate": 900}}
        )
        assert entry.cost_unit is CostUnit.HOURS
        assert entry.hours_details.hours == 40
        assert entry.hours_details.hourly_rate == 900
        assert entry.cost_label == "Konsult"

    def test_effect_entry_from_dict(self, hours_effect):
        entry = EffectEntry.from_dict(hours_effect)
        assert entry.value_dimension == "Ekonomi"
        assert entry.counts_quantitative
        assert not entry.counts_qualitative
        fin = entry.quantitative_details.financial_details
        assert fin.value_unit is ValueUnit.HOURS
        assert fin.hours_details.timescale == "per_month"

    def test_effect_entry_requires_mapping(self):
        with pytest.raises(TypeError):
            EffectEntry.from_dict(["not", "a", "dict"])

    def test_empty_detail_record_is_absent(self):
        entry = EffectEntry.from_dict(
            {
                "hasQuantitative": True,
                "quantitativeDetails": {"effectType": "financial", "financialDetails": {}},
            }
        )
        assert entry.quantitative_details.financial_details is None
        assert not entry.counts_quantitative

    def test_qualitative_completeness(self):
        assert QualitativeDetails.from_dict(
            {"factor": "Trygghet", "currentRating": 0, "targetRating": 2}
        ).is_complete
        assert not QualitativeDetails.from_dict({"factor": "Trygghet", "currentRating": 1}).is_complete
        assert not QualitativeDetails.from_dict({"currentRating": 1, "targetRating": 2}).is_complete


class TestScalingInput:
    def test_defaults(self):
        scaling = ScalingInput()
        assert scaling.orgs == 1
        assert scaling.adoption_rate_pct is None
        assert scaling.replication.mode is None
        assert scaling.normalization is None
        assert scaling.validation.max_roi == 1000
        assert scaling.validation.min_cost_per_org == 50_000
        assert scaling.validation.max_payback_years == 20

    def test_camel_case_payload(self):
        scaling = ScalingInput.model_validate(
            {
                "orgs": 12,
                "adoptionRatePct": 75,
                "scalabilityCoefficient": 0.8,
                "replication": {"mode": "hours_per_org", "hoursPerOrg": 80, "hourlyRate": 700},
                "validation": {"maxROI": 400},
            }
        )
        assert scaling.adoption_rate_pct == 75
        assert scaling.replication.mode is ReplicationMode.HOURS_PER_ORG
        assert scaling.replication.hours_per_org == 80
        assert scaling.validation.max_roi == 400
        assert scaling.validation.min_cost_per_org == 50_000

    def test_to_wire_uses_aliases(self):
        wire = ScalingInput(orgs=3, validation=ValidationConfig(max_roi=200)).to_wire()
        assert wire["orgs"] == 3
        assert wire["validation"]["maxROI"] == 200
        assert "adoptionRatePct" not in wire


class TestProjectSnapshot:
    def test_from_record(self, project_record):
        snapshot = ProjectSnapshot.from_record(project_record)
        assert snapshot.project_id == "proj-1"
        assert len(snapshot.effect_entries) == 2
        assert len(snapshot.cost_entries) == 1
        assert snapshot.budget_amount == "75000"

    def test_missing_columns(self):
        snapshot = ProjectSnapshot.from_record({"id": 7, "cost_data": None})
        assert snapshot.project_id == "7"
        assert snapshot.effect_entries == []
        assert snapshot.cost_entries == []
        assert snapshot.budget_amount is None


class TestMergeScaledImpact:
    def test_other_keys_untouched(self, project_record):
        effects = project_record["effects_data"]
        merged = merge_scaled_impact(effects, {"orgs": 3}, {"kpis": {}}, "2026-01-01T00:00:00Z")
        assert merged["effectDetails"] is effects["effectDetails"]
        assert merged["notes"] == "keep me"
        assert merged[SCALED_IMPACT_KEY] == {
            "input": {"orgs": 3},
            "result": {"kpis": {}},
            "savedAt": "2026-01-01T00:00:00Z",
        }
        assert SCALED_IMPACT_KEY not in effects

    def test_replaces_previous_result(self):
        first = merge_scaled_impact({}, None, {"v": 1}, "a")
        second = merge_scaled_impact(first, None, {"v": 2}, "b")
        assert second[SCALED_IMPACT_KEY]["result"] == {"v": 2}

    def test_missing_effects_data(self):
        merged = merge_scaled_impact(None, None, {"v": 1}, "a")
        assert list(merged) == [SCALED_IMPACT_KEY]
