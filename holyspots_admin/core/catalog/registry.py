"""
Column metadata registry.

Static, read-only mapping from managed table name to its ordered column
descriptors. The list view, the filters, the sort control and the edit form
all read from here.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .columns import ColumnDescriptor, ColumnKind
from .errors import UnknownTableError
from .relations import RELATIONS, JoinTableSpec


class TableName(str, Enum):
    """Tables managed by the dashboard."""

    countries = "countries"
    cities = "cities"
    spots = "spots"
    routes = "routes"
    events = "events"
    users = "users"


def _col(key: str, label: str, kind: ColumnKind = ColumnKind.text, **kwargs) -> ColumnDescriptor:
    if kind in (ColumnKind.string_array, ColumnKind.json, ColumnKind.geometry):
        kwargs.setdefault("sortable", False)
    return ColumnDescriptor(key=key, label=label, kind=kind, **kwargs)


_ID = _col("id", "ID", ColumnKind.identifier)

TABLE_COLUMNS: dict[str, tuple[ColumnDescriptor, ...]] = {
    TableName.countries.value: (
        _ID,
        _col("name", "Name", ColumnKind.language_map),
        _col("info", "Information", ColumnKind.language_map, truncate=True),
        _col("cities_count", "Cities", ColumnKind.number),
        _col("code", "Country code"),
        _col("images", "Images", ColumnKind.string_array),
    ),
    TableName.cities.value: (
        _ID,
        _col("name", "Name"),
        _col("info", "Information", ColumnKind.language_map, truncate=True),
        _col("spots_count", "Spots", ColumnKind.number),
        _col("routes_count", "Routes", ColumnKind.number),
        _col("events_count", "Events", ColumnKind.number),
        _col("country", "Country", ColumnKind.foreign_key, target_table="countries"),
        _col("images", "Images", ColumnKind.json),
    ),
    TableName.spots.value: (
        _ID,
        _col("name", "Name", ColumnKind.language_map),
        _col("info", "Information", ColumnKind.language_map, truncate=True),
        _col("city", "City", ColumnKind.foreign_key, target_table="cities"),
        _col("type", "Type", ColumnKind.number),
        _col("point", "Coordinates", ColumnKind.geometry),
        _col("images", "Images", ColumnKind.json),
        _col("created_at", "Created", ColumnKind.timestamp),
    ),
    TableName.routes.value: (
        _ID,
        _col("name", "Name", ColumnKind.language_map),
        _col("info", "Information", ColumnKind.language_map, truncate=True),
        _col("images", "Images", ColumnKind.json),
    ),
    TableName.events.value: (
        _ID,
        _col("name", "Name", ColumnKind.language_map),
        _col("info", "Information", ColumnKind.language_map, truncate=True),
        _col("type", "Type", ColumnKind.boolean),
        _col("time", "Time"),
        _col("images", "Images", ColumnKind.json),
    ),
    TableName.users.value: (
        _col("id", "ID", ColumnKind.number),
        _col("name", "Name"),
        _col("email", "Email"),
        _col("phone", "Phone", ColumnKind.number),
        _col("language", "Language"),
        _col("role", "Role"),
        _col("tarif", "Plan"),
        _col("points", "Points", ColumnKind.number),
        _col("created_at", "Created", ColumnKind.timestamp),
    ),
}


def resolve_table(table: str | TableName) -> str:
    """Normalize a table name, raising ``UnknownTableError`` for unmanaged tables."""
    name = table.value if isinstance(table, TableName) else table
    if name not in TABLE_COLUMNS:
        raise UnknownTableError(name)
    return name


def get_table_columns(table: str | TableName) -> list[ColumnDescriptor]:
    """Return the ordered column descriptors of a table."""
    return list(TABLE_COLUMNS[resolve_table(table)])


def get_column(table: str | TableName, key: str) -> Optional[ColumnDescriptor]:
    """Return the descriptor for ``key`` or ``None`` if the table has no such column."""
    for column in TABLE_COLUMNS[resolve_table(table)]:
        if column.key == key:
            return column
    return None


def creation_timestamp_column(table: str | TableName) -> Optional[str]:
    """Return the creation timestamp column of a table, if it has one."""
    column = get_column(table, "created_at")
    if column is not None and column.kind == ColumnKind.timestamp:
        return column.key
    return None


def get_relation_specs(table: str | TableName) -> dict[str, JoinTableSpec]:
    """Return the many-to-many relations owned by a table, keyed by relation key."""
    return dict(RELATIONS.get(resolve_table(table), {}))
