"""FastAPI application for the impact valuation engine."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from impact_engine import __version__
from impact_engine.config.settings import get_settings
from impact_engine.engine.reporting import format_roi_metrics
from impact_engine.engine.sensitivity import (
    DEFAULT_BENEFIT_UNCERTAINTY_PCT,
    DEFAULT_COST_UNCERTAINTY_PCT,
)
from impact_engine.engine.serialization import (
    insights_to_dict,
    roi_metrics_to_dict,
    scaled_impact_to_dict,
    sensitivity_to_dict,
)
from impact_engine.models.scaling import ScalingInput
from impact_engine.orchestrator import ImpactOrchestrator
from impact_engine.storage import (
    InMemoryProjectStore,
    ProjectNotFoundError,
    ProjectStore,
    SupabaseProjectStore,
)

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Impact Valuation API", version=__version__)

# CORS -- allow the portal frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Supabase when configured, otherwise an in-memory store (tests, local dev)
project_store: ProjectStore
if settings.supabase_url and settings.supabase_key:
    project_store = SupabaseProjectStore(settings=settings)
else:
    project_store = InMemoryProjectStore()
orchestrator = ImpactOrchestrator(project_store, settings=settings)


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    project_id: Optional[str] = Field(default=None, alias="projectId")


class ComputeRequest(_Request):
    scaling: ScalingInput = Field(default_factory=ScalingInput)


class AnalysisRequest(ComputeRequest):
    benefit_uncertainty_pct: float = Field(
        default=DEFAULT_BENEFIT_UNCERTAINTY_PCT, alias="benefitUncertaintyPct"
    )
    cost_uncertainty_pct: float = Field(
        default=DEFAULT_COST_UNCERTAINTY_PCT, alias="costUncertaintyPct"
    )


class SaveRequest(_Request):
    scaling_input: Optional[dict[str, Any]] = Field(default=None, alias="scalingInput")
    result: Optional[dict[str, Any]] = None


class SaveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    saved: bool
    saved_at: str = Field(serialization_alias="savedAt")


def _project_not_found(project_id: str) -> HTTPException:
    logger.warning("Project not found: %s", project_id)
    return HTTPException(status_code=404, detail="Project not found")


@app.post("/api/impact/compute")
async def compute_impact(body: ComputeRequest):
    """Scaled impact of a stored project across many organizations."""
    if not body.project_id:
        raise HTTPException(status_code=400, detail="projectId required")
    try:
        result = await orchestrator.compute(body.project_id, body.scaling)
    except ProjectNotFoundError:
        raise _project_not_found(body.project_id)
    return scaled_impact_to_dict(result)


@app.post("/api/impact/analysis")
async def analyze_impact(body: AnalysisRequest):
    """Scaled impact plus ROI series, P10-P90 band and tornado."""
    if not body.project_id:
        raise HTTPException(status_code=400, detail="projectId required")
    try:
        result, report = await orchestrator.analyze(
            body.project_id,
            body.scaling,
            benefit_uncertainty_pct=body.benefit_uncertainty_pct,
            cost_uncertainty_pct=body.cost_uncertainty_pct,
        )
    except ProjectNotFoundError:
        raise _project_not_found(body.project_id)
    return {"result": scaled_impact_to_dict(result), **sensitivity_to_dict(report)}


@app.post("/api/impact/save", response_model=SaveResponse, response_model_by_alias=True)
async def save_impact(body: SaveRequest):
    """Store a computed result under the project's effects metadata."""
    if not body.project_id or not body.result:
        raise HTTPException(status_code=400, detail="projectId and result required")
    try:
        saved_at = await orchestrator.save(body.project_id, body.scaling_input, body.result)
    except ProjectNotFoundError:
        raise _project_not_found(body.project_id)
    return SaveResponse(saved=True, saved_at=saved_at)


@app.get("/api/projects/{project_id}/roi")
async def get_project_roi(project_id: str):
    """Base ROI report of a single project with insights and display strings."""
    try:
        metrics, insights = await orchestrator.roi(project_id)
    except ProjectNotFoundError:
        raise _project_not_found(project_id)
    return {
        "projectId": project_id,
        "metrics": roi_metrics_to_dict(metrics),
        "formatted": format_roi_metrics(metrics),
        **insights_to_dict(insights),
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
