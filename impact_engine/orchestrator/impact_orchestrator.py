"""Impact orchestrator -- resolves stored projects and runs the engine on them."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Optional, Union

from impact_engine.config.settings import Settings, get_settings
from impact_engine.engine.reporting import ROIInsights, get_roi_insights
from impact_engine.engine.result import ROIMetrics, ScaledImpactResult, SensitivityReport
from impact_engine.engine.roi import compute_roi_metrics
from impact_engine.engine.scaling import ScalingEngine
from impact_engine.engine.sensitivity import (
    DEFAULT_BENEFIT_UNCERTAINTY_PCT,
    DEFAULT_COST_UNCERTAINTY_PCT,
    analyze,
)
from impact_engine.hooks.audit_hooks import (
    CalculationAudit,
    log_calculation,
    roi_kpis,
    saved_kpis,
    scaled_kpis,
    sensitivity_kpis,
)
from impact_engine.models.project import ProjectSnapshot, merge_scaled_impact
from impact_engine.models.scaling import ScalingInput
from impact_engine.storage.base import ProjectStore

logger = logging.getLogger(__name__)


class ImpactOrchestrator:
    """Coordinates project lookup, ROI aggregation and scaling.

    The engine itself is pure; every read and write of stored project data
    goes through the injected ProjectStore.
    """

    def __init__(self, store: ProjectStore, settings: Optional[Settings] = None):
        self._store = store
        self._settings = settings or get_settings()
        self._engine = ScalingEngine(self._settings)
        # most recent entries only; older ones live in the log output
        self.audit_log: deque[CalculationAudit] = deque(maxlen=self._settings.audit_log_size)

    async def _snapshot(self, project_id: str) -> tuple[ProjectSnapshot, ROIMetrics]:
        record = await self._store.get_project(project_id)
        snapshot = ProjectSnapshot.from_record(record)
        base = compute_roi_metrics(
            snapshot.effect_entries, snapshot.cost_entries, snapshot.budget_amount
        )
        return snapshot, base

    async def roi(self, project_id: str) -> tuple[ROIMetrics, ROIInsights]:
        """Base ROI report of a single project plus its insights."""
        _, base = await self._snapshot(project_id)
        self.audit_log.append(log_calculation(project_id, "roi", roi_kpis(base)))
        return base, get_roi_insights(base)

    async def compute(
        self, project_id: str, scaling: Union[ScalingInput, dict, None]
    ) -> ScaledImpactResult:
        """Project the stored project onto many organizations."""
        if not isinstance(scaling, ScalingInput):
            scaling = ScalingInput.model_validate(scaling or {})
        snapshot, base = await self._snapshot(project_id)
        result = await asyncio.to_thread(
            self._engine.compute, base, snapshot.cost_entries, snapshot.budget_amount, scaling
        )
        self.audit_log.append(
            log_calculation(project_id, "compute", scaled_kpis(result), scaling.to_wire())
        )
        return result

    async def analyze(
        self,
        project_id: str,
        scaling: Union[ScalingInput, dict, None],
        benefit_uncertainty_pct: float = DEFAULT_BENEFIT_UNCERTAINTY_PCT,
        cost_uncertainty_pct: float = DEFAULT_COST_UNCERTAINTY_PCT,
    ) -> tuple[ScaledImpactResult, SensitivityReport]:
        """Scaled result plus ROI series, P10-P90 band and tornado."""
        if not isinstance(scaling, ScalingInput):
            scaling = ScalingInput.model_validate(scaling or {})
        snapshot, base = await self._snapshot(project_id)
        result, report = await asyncio.to_thread(
            analyze,
            base,
            snapshot.cost_entries,
            snapshot.budget_amount,
            scaling,
            benefit_uncertainty_pct=benefit_uncertainty_pct,
            cost_uncertainty_pct=cost_uncertainty_pct,
            engine=self._engine,
        )
        self.audit_log.append(
            log_calculation(
                project_id, "analyze", sensitivity_kpis(result, report), scaling.to_wire()
            )
        )
        return result, report

    async def save(
        self,
        project_id: str,
        scaling_input: Optional[dict[str, Any]],
        result: dict[str, Any],
    ) -> str:
        """Attach a computed result to the project's effects metadata.

        Returns the ISO timestamp stored as ``savedAt``.
        """
        record = await self._store.get_project(project_id)
        saved_at = datetime.now(tz=timezone.utc).isoformat()
        effects_data = record.get("effects_data")
        updated = merge_scaled_impact(
            effects_data if isinstance(effects_data, dict) else None,
            scaling_input,
            result,
            saved_at,
        )
        await self._store.update_effects_data(project_id, updated)
        self.audit_log.append(log_calculation(project_id, "save", saved_kpis(result)))
        logger.info("Saved scaled impact for project %s", project_id)
        return saved_at
