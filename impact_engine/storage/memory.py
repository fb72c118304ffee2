"""Dict-backed project store for tests and local development."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Optional

from .base import ProjectNotFoundError, ProjectStore

logger = logging.getLogger(__name__)


class InMemoryProjectStore(ProjectStore):
    def __init__(self, projects: Optional[Iterable[dict[str, Any]]] = None) -> None:
        self._projects: dict[str, dict[str, Any]] = {}
        for record in projects or []:
            self.add(record)

    def add(self, record: dict[str, Any]) -> None:
        self._projects[str(record["id"])] = copy.deepcopy(record)

    async def get_project(self, project_id: str) -> dict[str, Any]:
        try:
            # callers get a snapshot, never the stored record itself
            return copy.deepcopy(self._projects[project_id])
        except KeyError:
            raise ProjectNotFoundError(project_id) from None

    async def update_effects_data(self, project_id: str, effects_data: dict[str, Any]) -> None:
        if project_id not in self._projects:
            raise ProjectNotFoundError(project_id)
        self._projects[project_id]["effects_data"] = copy.deepcopy(effects_data)
        logger.debug("Updated effects_data for project %s", project_id)
