"""
Per-client UI preference store.

The dashboard remembers, per client, the selected language, the column
filters, the column visibility and the sort configuration of every table.
Entries live under ``holyspots_admin:<client_id>:<name>`` in the local
key-value table. A missing entry, or one that no longer parses, reads as the
default value.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from holyspots_admin.core.catalog import DEFAULT_LANGUAGE, TABLE_COLUMNS, Language
from holyspots_admin.core.database.repositories.preferences import PreferenceRepository
from holyspots_admin.core.models.io.preferences import (
    TableColumnVisibility,
    TableFilters,
    TableSort,
    UIPreferences,
    UIPreferencesUpdate,
)
from holyspots_admin.core.models.io.records import SortSpec

logger = logging.getLogger(__name__)

NAMESPACE = "holyspots_admin"
# Keys are "<namespace>:<client_id>:<name>"; client ids never contain the separator.
CLIENT_ID_PATTERN = r"^[A-Za-z0-9._-]{1,128}$"
_CLIENT_ID = re.compile(CLIENT_ID_PATTERN)

T = TypeVar("T")

_LANGUAGE = TypeAdapter(Language)
_FILTERS = TypeAdapter(TableFilters)
_VISIBILITY = TypeAdapter(TableColumnVisibility)
_SORT = TypeAdapter(TableSort)


class InvalidClientIdError(ValueError):
    """Raised when a client id cannot be used as a preference key segment."""

    def __init__(self, client_id: str) -> None:
        self.client_id = client_id
        super().__init__(f"Invalid client id {client_id!r}: expected 1-128 letters, digits, '.', '_' or '-'")


def preference_key(client_id: str, name: str) -> str:
    if not _CLIENT_ID.fullmatch(client_id):
        raise InvalidClientIdError(client_id)
    return f"{NAMESPACE}:{client_id}:{name}"


def default_column_visibility() -> TableColumnVisibility:
    """Every column of every table visible."""
    return {table: {column.key: True for column in columns} for table, columns in TABLE_COLUMNS.items()}


class PreferencesStore:
    """Typed accessors over the preference repository."""

    def __init__(self, repository: PreferenceRepository):
        self.repository = repository

    async def _read(self, client_id: str, name: str, adapter: TypeAdapter[T], default: T) -> T:
        key = preference_key(client_id, name)
        raw = await self.repository.get_value(key)
        if raw is None:
            return default
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed preference {key}: {e.error_count()} validation error(s)")
            return default

    async def _write(self, client_id: str, name: str, adapter: TypeAdapter[T], value: T) -> None:
        validated = adapter.validate_python(value)
        await self.repository.upsert(preference_key(client_id, name), adapter.dump_json(validated).decode("utf-8"))

    async def get_language(self, client_id: str) -> Language:
        return await self._read(client_id, "language", _LANGUAGE, DEFAULT_LANGUAGE)

    async def set_language(self, client_id: str, language: Language | str) -> Language:
        await self._write(client_id, "language", _LANGUAGE, language)
        return Language(language)

    async def get_filters(self, client_id: str) -> TableFilters:
        return await self._read(client_id, "filters", _FILTERS, {})

    async def set_filters(self, client_id: str, table: str, filters: Dict[str, str]) -> TableFilters:
        """Replace the saved filters of one table; empty values are dropped."""
        current = await self.get_filters(client_id)
        cleaned = {key: value for key, value in filters.items() if value is not None and str(value).strip()}
        if cleaned:
            current[table] = cleaned
        else:
            current.pop(table, None)
        await self._write(client_id, "filters", _FILTERS, current)
        return current

    async def get_column_visibility(self, client_id: str) -> TableColumnVisibility:
        """Stored visibility merged over the all-visible default."""
        stored = await self._read(client_id, "column_visibility", _VISIBILITY, {})
        merged = default_column_visibility()
        for table, columns in stored.items():
            merged.setdefault(table, {}).update(columns)
        return merged

    async def set_column_visibility(self, client_id: str, table: str, visibility: Dict[str, bool]) -> TableColumnVisibility:
        stored = await self._read(client_id, "column_visibility", _VISIBILITY, {})
        stored.setdefault(table, {}).update(visibility)
        await self._write(client_id, "column_visibility", _VISIBILITY, stored)
        return await self.get_column_visibility(client_id)

    async def get_sort(self, client_id: str) -> TableSort:
        return await self._read(client_id, "sort", _SORT, {})

    async def set_sort(self, client_id: str, table: str, sort: Optional[SortSpec]) -> TableSort:
        """Save the sort of one table; ``None`` restores the default order."""
        current = await self.get_sort(client_id)
        if sort is None:
            current.pop(table, None)
        else:
            current[table] = sort
        await self._write(client_id, "sort", _SORT, current)
        return current

    async def load(self, client_id: str) -> UIPreferences:
        """Read the complete preference document of a client."""
        return UIPreferences(
            language=await self.get_language(client_id),
            filters=await self.get_filters(client_id),
            column_visibility=await self.get_column_visibility(client_id),
            sort=await self.get_sort(client_id),
        )

    async def save(self, client_id: str, update: UIPreferencesUpdate) -> UIPreferences:
        """Apply a partial update table by table and return the resulting document."""
        changes: Dict[str, Any] = update.model_dump(exclude_unset=True)
        if update.language is not None:
            await self.set_language(client_id, update.language)
        for table, filters in (update.filters or {}).items():
            await self.set_filters(client_id, table, filters)
        for table, visibility in (update.column_visibility or {}).items():
            await self.set_column_visibility(client_id, table, visibility)
        for table, sort in (update.sort or {}).items():
            await self.set_sort(client_id, table, sort)
        logger.debug(f"Saved preferences for client {client_id}: {sorted(changes)}")
        return await self.load(client_id)

    async def reset(self, client_id: str) -> int:
        """Forget every saved preference of a client.

        Returns:
            Number of entries removed
        """
        entries = await self.repository.list_by_prefix(preference_key(client_id, ""))
        for entry in entries:
            await self.repository.delete(entry.key)
        logger.info(f"Reset {len(entries)} preference entries for client {client_id}")
        return len(entries)
