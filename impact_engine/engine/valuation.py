"""Value calculator: one effect's detail record -> annual and lifetime value.

Financial effects carry an absolute quantity per period; redistribution
effects carry a current/new pair and the delta is the effect. Both are
annualized through :func:`timescale_multiplier`.

The two ``hours`` formulas resolve their inputs in opposite order: financial
hours prefer the explicit ``hours`` total over ``timePerPerson x
affectedPeople``, redistribution hours prefer the per-person figures over the
explicit ``currentHours``/``newHours`` totals, side by side, and a given
zero (a task that disappears) counts as a figure. Both orders are relied on by
stored records and are kept as they are.
"""

from __future__ import annotations

from typing import Callable, Optional

from impact_engine.models.entries import FinancialDetails, RedistributionDetails
from impact_engine.models.enums import ValueUnit

from .units import is_one_time, timescale_multiplier

# Timescale assumed when a record leaves the token empty.
FINANCIAL_DEFAULT_TIMESCALE = "per_year"
REDISTRIBUTION_HOURS_DEFAULT_TIMESCALE = "week"
REDISTRIBUTION_DEFAULT_TIMESCALE = "year"


def _n(value: Optional[float]) -> float:
    return value or 0.0


# ---------------------------------------------------------------------------
# Financial (absolute) effects
# ---------------------------------------------------------------------------


def _financial_hours(details: FinancialDetails) -> float:
    d = details.hours_details
    if d.hours is not None:
        hours = d.hours
    else:
        hours = _n(d.time_per_person) * _n(d.affected_people)
    multiplier = timescale_multiplier(d.timescale or FINANCIAL_DEFAULT_TIMESCALE)
    return hours * _n(d.hourly_rate) * multiplier


def _financial_currency(details: FinancialDetails) -> float:
    d = details.currency_details
    amount = _n(d.amount)
    timescale = d.timescale or FINANCIAL_DEFAULT_TIMESCALE
    if is_one_time(timescale):
        return amount
    return amount * timescale_multiplier(timescale)


def _financial_percentage(details: FinancialDetails) -> float:
    d = details.percentage_details
    multiplier = timescale_multiplier(d.timescale or FINANCIAL_DEFAULT_TIMESCALE)
    return (_n(d.percentage) / 100) * _n(d.base_value) * multiplier


def _financial_count(details: FinancialDetails) -> float:
    d = details.count_details
    multiplier = timescale_multiplier(d.timescale or FINANCIAL_DEFAULT_TIMESCALE)
    return _n(d.count) * _n(d.value_per_unit) * multiplier


def _financial_other(details: FinancialDetails) -> float:
    d = details.other_details
    multiplier = timescale_multiplier(d.timescale or FINANCIAL_DEFAULT_TIMESCALE)
    return _n(d.amount) * _n(d.value_per_unit) * multiplier


_ANNUAL_VALUE_FORMULAS: dict[ValueUnit, Callable[[FinancialDetails], float]] = {
    ValueUnit.HOURS: _financial_hours,
    ValueUnit.CURRENCY: _financial_currency,
    ValueUnit.PERCENTAGE: _financial_percentage,
    ValueUnit.COUNT: _financial_count,
    ValueUnit.OTHER: _financial_other,
}


def calculate_annual_value(
    details: FinancialDetails, value_unit: Optional[ValueUnit] = None
) -> float:
    """Annualized value of a financial effect.

    ``value_unit`` defaults to the record's own unit; an unknown unit is worth 0.
    """
    unit = value_unit if value_unit is not None else details.value_unit
    formula = _ANNUAL_VALUE_FORMULAS.get(unit)
    if formula is None:
        return 0.0
    return formula(details)


# ---------------------------------------------------------------------------
# Redistribution (before/after) effects
# ---------------------------------------------------------------------------


def _side_hours(
    per_person: Optional[float], people: Optional[float], total: Optional[float]
) -> float:
    if per_person is not None and people is not None:
        return per_person * people
    return _n(total)


def _saved_hours(details: RedistributionDetails) -> float:
    d = details.hours_details
    current_hours = _side_hours(d.current_time_per_person, d.affected_people, d.current_hours)
    new_hours = _side_hours(d.new_time_per_person, d.affected_people, d.new_hours)
    multiplier = timescale_multiplier(d.timescale or REDISTRIBUTION_HOURS_DEFAULT_TIMESCALE)
    return (current_hours - new_hours) * _n(d.hourly_rate) * multiplier


def _saved_currency(details: RedistributionDetails) -> float:
    d = details.currency_details
    multiplier = timescale_multiplier(d.timescale or REDISTRIBUTION_DEFAULT_TIMESCALE)
    return (_n(d.current_amount) - _n(d.new_amount)) * multiplier


def _saved_percentage(details: RedistributionDetails) -> float:
    d = details.percentage_details
    return ((_n(d.current_percentage) - _n(d.new_percentage)) / 100) * _n(d.base_value)


def _saved_count(details: RedistributionDetails) -> float:
    d = details.count_details
    multiplier = timescale_multiplier(d.timescale or REDISTRIBUTION_DEFAULT_TIMESCALE)
    return (_n(d.current_count) - _n(d.new_count)) * _n(d.value_per_unit) * multiplier


def _saved_other(details: RedistributionDetails) -> float:
    d = details.other_details
    multiplier = timescale_multiplier(d.timescale or REDISTRIBUTION_DEFAULT_TIMESCALE)
    return (_n(d.current_amount) - _n(d.new_amount)) * _n(d.value_per_unit) * multiplier


_SAVED_AMOUNT_FORMULAS: dict[ValueUnit, Callable[[RedistributionDetails], float]] = {
    ValueUnit.HOURS: _saved_hours,
    ValueUnit.CURRENCY: _saved_currency,
    ValueUnit.PERCENTAGE: _saved_percentage,
    ValueUnit.COUNT: _saved_count,
    ValueUnit.OTHER: _saved_other,
}


def calculate_saved_amount(
    details: RedistributionDetails, value_unit: Optional[ValueUnit] = None
) -> float:
    """Annual monetary saving of a redistribution effect ((current - new) x rate x multiplier)."""
    unit = value_unit if value_unit is not None else details.value_unit
    formula = _SAVED_AMOUNT_FORMULAS.get(unit)
    if formula is None:
        return 0.0
    return formula(details)


# ---------------------------------------------------------------------------
# Lifetime
# ---------------------------------------------------------------------------


def annualization_years(years: Optional[float]) -> float:
    """Years an annual value recurs; missing or zero means 1."""
    return years or 1.0


def lifetime_value(annual_value: float, years: Optional[float]) -> float:
    return annual_value * annualization_years(years)
