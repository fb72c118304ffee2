"""Project store backed by the portal's Supabase ``projects`` table."""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from impact_engine.config.settings import Settings, get_settings

from .base import ProjectNotFoundError, ProjectStore

logger = logging.getLogger(__name__)


class SupabaseProjectStore(ProjectStore):
    def __init__(self, client: Optional[Client] = None, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._client = client or create_client(
            self._settings.supabase_url, self._settings.supabase_key
        )
        self._table = self._settings.projects_table

    async def get_project(self, project_id: str) -> dict[str, Any]:
        res = (
            self._client.table(self._table)
            .select("*")
            .eq("id", project_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        if not rows:
            raise ProjectNotFoundError(project_id)
        return rows[0]

    async def update_effects_data(self, project_id: str, effects_data: dict[str, Any]) -> None:
        res = (
            self._client.table(self._table)
            .update({"effects_data": effects_data})
            .eq("id", project_id)
            .execute()
        )
        if not res.data:
            raise ProjectNotFoundError(project_id)
        logger.info("Updated effects_data for project %s in Supabase", project_id)
