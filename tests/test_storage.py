"""Tests for project stores."""

from unittest.mock import MagicMock

import pytest

from impact_engine.config.settings import Settings
from impact_engine.storage import InMemoryProjectStore, ProjectNotFoundError, SupabaseProjectStore


class TestInMemoryProjectStore:
    @pytest.mark.asyncio
    async def test_get_project(self, project_record):
        store = InMemoryProjectStore([project_record])
        record = await store.get_project("proj-1")
        assert record["title"] == "Digital hemtjänstplanering"

    @pytest.mark.asyncio
    async def test_returns_snapshot(self, project_record):
        store = InMemoryProjectStore([project_record])
        record = await store.get_project("proj-1")
        record["effects_data"]["notes"] = "changed"
        again = await store.get_project("proj-1")
        assert again["effects_data"]["notes"] == "keep me"

    @pytest.mark.asyncio
    async def test_unknown_project(self):
        with pytest.raises(ProjectNotFoundError):
            await InMemoryProjectStore().get_project("missing")

    @pytest.mark.asyncio
    async def test_update_effects_data_only(self, project_record):
        store = InMemoryProjectStore([project_record])
        await store.update_effects_data("proj-1", {"effectDetails": []})
        record = await store.get_project("proj-1")
        assert record["effects_data"] == {"effectDetails": []}
        assert record["cost_data"] == project_record["cost_data"]

    @pytest.mark.asyncio
    async def test_update_unknown_project(self):
        with pytest.raises(ProjectNotFoundError):
            await InMemoryProjectStore().update_effects_data("missing", {})

    def test_not_found_is_key_error(self):
        assert issubclass(ProjectNotFoundError, KeyError)


def _client_returning(rows):
    client = MagicMock()
    query = client.table.return_value
    for method in ("select", "update", "eq", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=rows)
    return client


class TestSupabaseProjectStore:
    @pytest.mark.asyncio
    async def test_get_project(self, project_record):
        client = _client_returning([project_record])
        store = SupabaseProjectStore(client=client, settings=Settings())
        record = await store.get_project("proj-1")
        assert record["id"] == "proj-1"
        client.table.assert_called_with("projects")
        client.table.return_value.eq.assert_called_with("id", "proj-1")

    @pytest.mark.asyncio
    async def test_get_unknown_project(self):
        store = SupabaseProjectStore(client=_client_returning([]), settings=Settings())
        with pytest.raises(ProjectNotFoundError):
            await store.get_project("missing")

    @pytest.mark.asyncio
    async def test_update_effects_data(self, project_record):
        client = _client_returning([project_record])
        store = SupabaseProjectStore(client=client, settings=Settings())
        await store.update_effects_data("proj-1", {"a": 1})
        client.table.return_value.update.assert_called_with({"effects_data": {"a": 1}})

    @pytest.mark.asyncio
    async def test_update_unknown_project(self):
        store = SupabaseProjectStore(client=_client_returning([]), settings=Settings())
        with pytest.raises(ProjectNotFoundError):
            await store.update_effects_data("missing", {})
