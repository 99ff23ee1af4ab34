"""
Record CRUD service.

Single-record reads and writes against the backend table API, plus the
candidate lists shown by the relation pickers of the edit panel.
"""

from __future__ import annotations

import logging
from numbers import Number
from typing import Any, Dict, List, Mapping

from holyspots_admin.backend import BackendClient, BackendError, RecordNotFoundError, TableQuery
from holyspots_admin.core.catalog import (
    DEFAULT_LANGUAGE,
    ColumnKind,
    Language,
    get_column,
    get_relation_specs,
    resolve_table,
)
from holyspots_admin.core.models.io.records import RelatedOption

from .formatting import localized_value

logger = logging.getLogger(__name__)

RELATED_OPTIONS_LIMIT = 100


class InvalidRecordError(ValueError):
    """Raised when submitted values do not match the column kinds of a table."""

    def __init__(self, table: str, errors: Dict[str, str]) -> None:
        summary = "; ".join(f"{key}: {message}" for key, message in errors.items())
        super().__init__(f"Invalid values for {table}: {summary}")
        self.table = table
        self.errors = errors


def validate_record_values(table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    """Check submitted values against the column kinds of ``table``.

    Columns the registry does not describe are passed through untouched; the
    backend stays the authority on its own schema.
    """
    errors: Dict[str, str] = {}
    for key, value in values.items():
        column = get_column(table, key)
        if column is None or value is None:
            continue
        if column.kind == ColumnKind.language_map:
            if not isinstance(value, Mapping) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                errors[key] = "expected a mapping of language code to text"
        elif column.kind == ColumnKind.string_array:
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                errors[key] = "expected a list of strings"
        elif column.kind == ColumnKind.number:
            if isinstance(value, bool) or not isinstance(value, Number):
                errors[key] = "expected a number"
        elif column.kind == ColumnKind.boolean:
            if not isinstance(value, bool):
                errors[key] = "expected true or false"
    if errors:
        raise InvalidRecordError(table, errors)
    return dict(values)


class RecordService:
    """Service for single-record operations on the managed tables."""

    def __init__(self, backend: BackendClient):
        """Initialize record service with a backend client."""
        self.backend = backend

    async def fetch_record_by_id(self, table: str, record_id: str) -> Dict[str, Any]:
        """
        Get one record by id.

        Raises:
            RecordNotFoundError: If no row has this id
            BackendError: If the lookup fails
        """
        table = resolve_table(table)
        result = await self.backend.select(TableQuery(table).select("*").eq("id", record_id))
        if not result.rows:
            raise RecordNotFoundError(table, record_id)
        return result.rows[0]

    async def create_record(self, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a record and return the stored representation.

        Args:
            table: Managed table name
            values: Column values; language-map columns take ``{lang: text}``

        Returns:
            The created row as returned by the backend
        """
        table = resolve_table(table)
        payload = validate_record_values(table, values)
        try:
            created = await self.backend.insert(table, [payload])
        except BackendError as e:
            logger.error(f"Error creating {table} record: {e}", exc_info=True)
            raise
        if not created:
            raise BackendError(f"Backend returned no representation for the new {table} record")
        logger.info(f"Created {table} record {created[0].get('id')}")
        return created[0]

    async def update_record(self, table: str, record_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Update a record and return the stored representation.

        Raises:
            RecordNotFoundError: If no row has this id
        """
        table = resolve_table(table)
        payload = validate_record_values(table, values)
        payload.pop("id", None)
        try:
            updated = await self.backend.update(TableQuery(table).eq("id", record_id), payload)
        except BackendError as e:
            logger.error(f"Error updating {table} record {record_id}: {e}", exc_info=True)
            raise
        if not updated:
            raise RecordNotFoundError(table, record_id)
        logger.info(f"Updated {table} record {record_id}")
        return updated[0]

    async def delete_record(self, table: str, record_id: str) -> bool:
        """
        Delete a record.

        Returns:
            True once the row is gone

        Raises:
            RecordNotFoundError: If no row has this id
        """
        table = resolve_table(table)
        try:
            deleted = await self.backend.delete(TableQuery(table).eq("id", record_id))
        except BackendError as e:
            logger.error(f"Error deleting {table} record {record_id}: {e}", exc_info=True)
            raise
        if not deleted:
            raise RecordNotFoundError(table, record_id)
        logger.info(f"Deleted {table} record {record_id}")
        return True

    async def fetch_related_options(
        self,
        table: str,
        language: Language = DEFAULT_LANGUAGE,
        limit: int = RELATED_OPTIONS_LIMIT,
    ) -> Dict[str, List[RelatedOption]]:
        """
        List candidate records for each relation picker of ``table``.

        Tables without many-to-many relations return an empty mapping.
        """
        options: Dict[str, List[RelatedOption]] = {}
        for relation_key, spec in get_relation_specs(table).items():
            query = TableQuery(spec.target_table).select("id", "name").order_by("id").range(0, limit)
            try:
                result = await self.backend.select(query)
            except BackendError as e:
                logger.error(f"Error fetching related {relation_key} for {table}: {e}", exc_info=True)
                raise
            options[relation_key] = [
                RelatedOption(
                    id=str(row["id"]),
                    name=row.get("name"),
                    label=localized_value(row.get("name"), language),
                )
                for row in result.rows
            ]
        return options
