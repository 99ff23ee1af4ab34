"""Error types raised by the column metadata catalog.

Usage:
- Catch ``UnknownTableError`` when a table name is not one of the managed tables.
- Catch ``UnknownRelationError`` when a relation key is not defined for a table.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base error for catalog lookups."""


class UnknownTableError(CatalogError):
    """Raised when a table name is not managed by the dashboard.

    Args:
        table: The table name that was requested.
    """

    def __init__(self, table: str) -> None:
        super().__init__(f"Unknown table: {table}")
        self.table = table


class UnknownRelationError(CatalogError):
    """Raised when a relation key is not defined for a table.

    Args:
        table: The owning table name.
        relation_key: The relation key that was requested.
    """

    def __init__(self, table: str, relation_key: str) -> None:
        super().__init__(f"Table '{table}' has no relation '{relation_key}'")
        self.table = table
        self.relation_key = relation_key
