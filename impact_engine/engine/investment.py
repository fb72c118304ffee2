"""Total investment from itemized cost entries, with a budget fallback."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from impact_engine.models.entries import CostEntry
from impact_engine.models.enums import CostUnit
from impact_engine.models.parsing import parse_leading_float

logger = logging.getLogger(__name__)


def _hours_cost(entry: CostEntry) -> float:
    d = entry.hours_details
    return (d.hours or 0.0) * (d.hourly_rate or 0.0)


def _fixed_cost(entry: CostEntry) -> float:
    return entry.fixed_details.fixed_amount or 0.0


def _monthly_cost(entry: CostEntry) -> float:
    d = entry.monthly_details
    return (d.monthly_amount or 0.0) * (d.monthly_duration or 1.0)


def _yearly_cost(entry: CostEntry) -> float:
    d = entry.yearly_details
    return (d.yearly_amount or 0.0) * (d.yearly_duration or 1.0)


_COST_FORMULAS: dict[CostUnit, Callable[[CostEntry], float]] = {
    CostUnit.HOURS: _hours_cost,
    CostUnit.FIXED: _fixed_cost,
    CostUnit.MONTHLY: _monthly_cost,
    CostUnit.YEARLY: _yearly_cost,
}


def cost_entry_amount(entry: Any) -> float:
    """Monetary amount of one cost entry; unrecognized units contribute 0."""
    parsed = CostEntry.from_dict(entry)
    formula = _COST_FORMULAS.get(parsed.cost_unit)
    if formula is None:
        return 0.0
    return formula(parsed)


def compute_total_investment(
    cost_entries: Optional[Iterable[Any]],
    budget_amount: Optional[Any] = None,
) -> float:
    """Sum itemized costs, falling back to the budget figure when there are none.

    Itemized entries always win over the budget, even when their sum is smaller.
    """
    entries = list(cost_entries or [])
    if entries:
        return sum((cost_entry_amount(e) for e in entries), 0.0)
    if budget_amount is None or budget_amount == "":
        return 0.0
    total = parse_leading_float(budget_amount)
    logger.debug("No itemized costs, using budget fallback %s", total)
    return total
