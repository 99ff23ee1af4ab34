"""Unit tests for PreferenceRepository on in-memory SQLite."""

import pytest

from holyspots_admin.core.database.repositories import PreferenceRepository


@pytest.fixture
def repository(db_session) -> PreferenceRepository:
    return PreferenceRepository(db_session)


class TestPreferenceRepository:
    @pytest.mark.asyncio
    async def test_missing_key(self, repository):
        assert await repository.get_value("absent") is None
        assert await repository.get_by_id("absent") is None

    @pytest.mark.asyncio
    async def test_upsert_inserts_then_overwrites(self, repository):
        first = await repository.upsert("k", '"a"')
        second = await repository.upsert("k", '"b"')
        assert second.key == first.key
        assert await repository.get_value("k") == '"b"'
        assert second.updated_at >= first.updated_at

    @pytest.mark.asyncio
    async def test_delete(self, repository):
        await repository.upsert("k", "1")
        assert await repository.delete("k") is True
        assert await repository.delete("k") is False
        assert await repository.get_value("k") is None

    @pytest.mark.asyncio
    async def test_list_by_prefix(self, repository):
        for key in ("ns:b:x", "ns:a:y", "ns:a:x", "other:a:x"):
            await repository.upsert(key, "1")
        entries = await repository.list_by_prefix("ns:a:")
        assert [entry.key for entry in entries] == ["ns:a:x", "ns:a:y"]

    @pytest.mark.asyncio
    async def test_list_by_prefix_matches_wildcards_literally(self, repository):
        for key in ("ns:a_b:x", "ns:axb:x", "ns:50%:x", "ns:500:x"):
            await repository.upsert(key, "1")
        assert [entry.key for entry in await repository.list_by_prefix("ns:a_b:")] == ["ns:a_b:x"]
        assert [entry.key for entry in await repository.list_by_prefix("ns:50%")] == ["ns:50%:x"]
        assert await repository.list_by_prefix("%") == []
