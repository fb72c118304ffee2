"""Project snapshot resolution and the scaled-impact save merge."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .parsing import as_mapping

SCALED_IMPACT_KEY = "scaledImpactLatest"


@dataclass(frozen=True)
class ProjectSnapshot:
    """The stored fields of a project that feed the valuation engine."""

    project_id: str
    effect_entries: list[Any] = field(default_factory=list)
    cost_entries: list[Any] = field(default_factory=list)
    budget_amount: Optional[Any] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ProjectSnapshot:
        effects_data = as_mapping(record.get("effects_data"))
        cost_data = as_mapping(record.get("cost_data"))
        effects = effects_data.get("effectDetails")
        costs = as_mapping(cost_data.get("actualCostDetails")).get("costEntries")
        budget = as_mapping(cost_data.get("budgetDetails")).get("budgetAmount")
        return cls(
            project_id=str(record.get("id", "")),
            effect_entries=list(effects) if isinstance(effects, list) else [],
            cost_entries=list(costs) if isinstance(costs, list) else [],
            budget_amount=budget,
        )


def merge_scaled_impact(
    effects_data: Optional[dict[str, Any]],
    scaling_input: Optional[dict[str, Any]],
    result: dict[str, Any],
    saved_at: str,
) -> dict[str, Any]:
    """Return a copy of ``effects_data`` with the latest scaled result attached.

    Every other key of the stored effects metadata is carried over unchanged.
    """
    return {
        **(effects_data or {}),
        SCALED_IMPACT_KEY: {
            "input": scaling_input,
            "result": result,
            "savedAt": saved_at,
        },
    }
