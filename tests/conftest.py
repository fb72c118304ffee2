"""Shared test fixtures for the impact engine test suite."""

import pytest

from impact_engine.engine.roi import calculate_roi


def make_cost(unit, **details):
    """Helper to build a stored cost entry with minimal boilerplate."""
    key = {
        "hours": "hoursDetails",
        "fixed": "fixedDetails",
        "monthly": "monthlyDetails",
        "yearly": "yearlyDetails",
    }.get(unit, "fixedDetails")
    return {"costUnit": unit, key: details}


def make_financial(unit, dimension="Ekonomi", years=1, measurement="Tidsbesparing", **details):
    """Helper to build a financial effect entry for a single value unit."""
    return {
        "valueDimension": dimension,
        "hasQualitative": False,
        "hasQuantitative": True,
        "quantitativeDetails": {
            "effectType": "financial",
            "financialDetails": {
                "valueUnit": unit,
                "measurementName": measurement,
                f"{unit}Details": details,
                "annualizationYears": years,
            },
        },
    }


def make_redistribution(unit, dimension="Kvalitet", years=1, resource="Personaltid", **details):
    """Helper to build a redistribution effect entry for a single value unit."""
    return {
        "valueDimension": dimension,
        "hasQualitative": False,
        "hasQuantitative": True,
        "quantitativeDetails": {
            "effectType": "redistribution",
            "redistributionDetails": {
                "valueUnit": unit,
                "resourceType": resource,
                f"{unit}Details": details,
                "annualizationYears": years,
            },
        },
    }


def make_qualitative(
    dimension="Kvalitet", factor="Nöjdhet", current=3, target=4, estimate=None, years=1
):
    details = {
        "factor": factor,
        "currentRating": current,
        "targetRating": target,
        "annualizationYears": years,
    }
    if estimate is not None:
        details["monetaryEstimate"] = estimate
    return {
        "valueDimension": dimension,
        "hasQualitative": True,
        "hasQuantitative": False,
        "qualitativeDetails": details,
    }


@pytest.fixture
def hours_effect() -> dict:
    """100 h/month at 500 SEK/h: 600 000 SEK a year."""
    return make_financial(
        "hours", hours=100, hourlyRate=500, timescale="per_month"
    )


@pytest.fixture
def staff_time_effect() -> dict:
    """30 people saving one hour a week each at 500 SEK/h."""
    return make_redistribution(
        "hours",
        currentTimePerPerson=40,
        newTimePerPerson=39,
        affectedPeople=30,
        hourlyRate=500,
        timescale="per_week",
    )


@pytest.fixture
def fixed_cost_50k() -> dict:
    return make_cost("fixed", fixedAmount=50_000)


@pytest.fixture
def base_roi(hours_effect):
    """ROI report for the 600 000 SEK effect against a 50 000 SEK investment."""
    return calculate_roi([hours_effect], 50_000)


@pytest.fixture
def project_record(hours_effect, fixed_cost_50k) -> dict:
    """A project row as stored by the portal."""
    return {
        "id": "proj-1",
        "title": "Digital hemtjänstplanering",
        "effects_data": {
            "effectDetails": [hours_effect, make_qualitative(estimate=None)],
            "notes": "keep me",
        },
        "cost_data": {
            "actualCostDetails": {"costEntries": [fixed_cost_50k]},
            "budgetDetails": {"budgetAmount": "75000"},
        },
    }
