"""
Table Metadata Endpoints.

Exposes the column registry: which tables the dashboard manages and how each
column is rendered, searched, filtered and sorted.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from holyspots_admin.core.catalog import ColumnDescriptor, Language, TableName, get_table_columns
from holyspots_admin.core.models.io import ColumnRead
from holyspots_admin.server.core.config import settings

router = APIRouter()


def to_column_read(column: ColumnDescriptor, language: Language) -> ColumnRead:
    return ColumnRead(
        key=column.key,
        label=column.label,
        kind=column.kind,
        sortable=column.sortable,
        searchable=column.searchable,
        filterable=column.filterable,
        truncate=column.truncate,
        target_table=column.target_table,
        language=language if column.is_localized else None,
    )


@router.get(
    "/",
    response_model=List[str],
    summary="List Managed Tables",
    description="Retrieve the names of all tables the dashboard can browse and edit.",
)
async def list_tables() -> List[str]:
    return [table.value for table in TableName]


@router.get(
    "/{table}/columns",
    response_model=List[ColumnRead],
    summary="List Table Columns",
    description="Retrieve the ordered column descriptors of a table.",
    responses={
        200: {"description": "Column descriptors retrieved successfully"},
        404: {"description": "Table is not managed by the dashboard"},
    },
)
async def list_columns(
    table: str,
    language: Optional[Language] = Query(default=None, description="Language used for language-map columns"),
) -> List[ColumnRead]:
    """
    List the columns of a table in display order.

    Language-map columns report the language their values are read in, so
    the client knows which translation a sort or search applies to.
    """
    selected = language or Language(settings.default_language)
    return [to_column_read(column, selected) for column in get_table_columns(table)]
