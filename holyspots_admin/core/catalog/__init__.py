"""Static table metadata: column descriptors and relation descriptors."""

from .columns import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    ColumnDescriptor,
    ColumnKind,
    Language,
)
from .errors import CatalogError, UnknownRelationError, UnknownTableError
from .registry import (
    TABLE_COLUMNS,
    TableName,
    creation_timestamp_column,
    get_column,
    get_relation_specs,
    get_table_columns,
    resolve_table,
)
from .relations import RELATIONS, JoinTableSpec

__all__ = [
    "DEFAULT_LANGUAGE",
    "RELATIONS",
    "SUPPORTED_LANGUAGES",
    "TABLE_COLUMNS",
    "CatalogError",
    "ColumnDescriptor",
    "ColumnKind",
    "JoinTableSpec",
    "Language",
    "TableName",
    "UnknownRelationError",
    "UnknownTableError",
    "creation_timestamp_column",
    "get_column",
    "get_relation_specs",
    "get_table_columns",
    "resolve_table",
]
