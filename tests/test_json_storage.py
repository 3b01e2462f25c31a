"""Tests for JSONTaskStorage."""

import json

import pytest

from smart_tasks.core.store import TaskStoreClient
from smart_tasks.storage.json_storage import JSONTaskStorage


class TestJSONTaskStorage:
    """Tests for JSONTaskStorage."""

    def test_creates_file(self, tmp_path) -> None:
        path = tmp_path / "nested" / "todos.json"

        JSONTaskStorage(path)

        assert json.loads(path.read_text()) == {}

    @pytest.mark.asyncio
    async def test_missing_user_is_none(self, tmp_path) -> None:
        storage = JSONTaskStorage(tmp_path / "todos.json")

        assert await storage.fetch_all("user-1") is None

    @pytest.mark.asyncio
    async def test_replace_and_fetch(self, tmp_path) -> None:
        path = tmp_path / "todos.json"
        storage = JSONTaskStorage(path)
        todos = [{"id": "1", "description": "A", "completed": False, "createdAt": "2024-01-01T00:00:00+00:00"}]

        await storage.replace_all("user-1", todos)

        assert await storage.fetch_all("user-1") == todos
        assert json.loads(path.read_text()) == {"user-1": {"todos": todos}}

    @pytest.mark.asyncio
    async def test_users_are_isolated(self, tmp_path) -> None:
        storage = JSONTaskStorage(tmp_path / "todos.json")

        await storage.replace_all("a", [{"id": "1", "description": "A"}])
        await storage.append("b", {"id": "2", "description": "B"})

        assert [t["id"] for t in await storage.fetch_all("a")] == ["1"]
        assert [t["id"] for t in await storage.fetch_all("b")] == ["2"]

    @pytest.mark.asyncio
    async def test_corrupt_file_reads_as_empty(self, tmp_path) -> None:
        path = tmp_path / "todos.json"
        path.write_text("{not json")

        assert await JSONTaskStorage(path).fetch_all("user-1") is None

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path) -> None:
        path = tmp_path / "todos.json"
        store = TaskStoreClient(JSONTaskStorage(path), retry_delay=0)
        task = await store.add_task("user-1", "Buy milk")

        reloaded = await TaskStoreClient(JSONTaskStorage(path)).get_tasks("user-1")

        assert reloaded == [task]
