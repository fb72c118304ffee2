from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from impact_engine.models.enums import ReplicationMode
from impact_engine.models.scaling import ReplicationConfig

# (config, org_number) -> replication cost for that organization
CostFn = Callable[[ReplicationConfig, int], float]

# Global registry -- maps replication mode -> ReplicationModel
_REGISTRY: dict[ReplicationMode, ReplicationModel] = {}


@dataclass(frozen=True)
class ReplicationModel:
    """A pricing strategy for each additional adopting organization."""

    mode: ReplicationMode
    label: str
    description: str
    required_params: list[str]  # ReplicationConfig field names
    cost_fn: CostFn


def register_replication_model(
    mode: ReplicationMode,
    label: str,
    description: str,
    required_params: list[str],
) -> Callable[[CostFn], CostFn]:
    """Decorator to register a per-organization cost function for a mode."""

    def decorator(fn: CostFn) -> CostFn:
        _REGISTRY[mode] = ReplicationModel(
            mode=mode,
            label=label,
            description=description,
            required_params=required_params,
            cost_fn=fn,
        )
        return fn

    return decorator


def get_replication_model(mode: Optional[ReplicationMode]) -> Optional[ReplicationModel]:
    """Look up the model for a mode; None for a missing or unregistered mode."""
    if mode is None:
        return None
    return _REGISTRY.get(mode)


def get_all_replication_models() -> dict[ReplicationMode, ReplicationModel]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)
