from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ProjectNotFoundError(KeyError):
    """No project is stored under the requested id."""


class ProjectStore(ABC):
    """Abstract base for project persistence backends."""

    @abstractmethod
    async def get_project(self, project_id: str) -> dict[str, Any]:
        """Return the stored project record (``id``, ``effects_data``, ``cost_data``, ...).

        Raises ProjectNotFoundError for an unknown id.
        """
        ...

    @abstractmethod
    async def update_effects_data(self, project_id: str, effects_data: dict[str, Any]) -> None:
        """Replace the project's ``effects_data`` column, leaving other fields untouched."""
        ...
