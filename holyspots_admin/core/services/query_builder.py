"""
Page queries for the record list.

Translates a ``PageRequest`` (table, page, search, per-column filters, sort,
language) into a ``TableQuery``, runs it against the backend and resolves
foreign key display names with one batched lookup per foreign key column.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from holyspots_admin.backend import BackendClient, ColumnFilter, FilterOperator, TableQuery
from holyspots_admin.core.catalog import (
    ColumnDescriptor,
    ColumnKind,
    Language,
    creation_timestamp_column,
    get_column,
    get_table_columns,
)
from holyspots_admin.core.models.io.records import PageRequest, RecordPage, SortDirection, SortSpec

from .formatting import format_row, localized_value, page_window

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"true", "1", "yes"})
_FALSE_WORDS = frozenset({"false", "0", "no"})
_LIKE_ESCAPES = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_", "*": "_"})


def parse_number(text: str) -> Optional[str]:
    """Normalize a numeric filter string, or return ``None`` if it is not a finite number."""
    candidate = text.strip()
    try:
        return str(int(candidate))
    except ValueError:
        pass
    try:
        number = float(candidate)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return str(int(number)) if number.is_integer() else repr(number)


def parse_boolean(text: str) -> Optional[bool]:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def contains_pattern(text: str) -> str:
    """Case-insensitive substring pattern for the ``ilike`` operator.

    ``%``, ``_`` and backslashes in the user text match literally. The backend
    turns every ``*`` into ``%`` and has no escape for it, so a literal ``*``
    is sent as ``_`` and matches any single character.
    """
    return f"*{text.translate(_LIKE_ESCAPES)}*"


def apply_search(query: TableQuery, columns: List[ColumnDescriptor], search: Optional[str], language: Language) -> TableQuery:
    """OR a substring match over every searchable column."""
    text = (search or "").strip()
    if not text:
        return query
    terms = [
        ColumnFilter(column.query_path(language), FilterOperator.ilike, contains_pattern(text))
        for column in columns
        if column.searchable
    ]
    if not terms:
        logger.debug(f"Table {query.table} has no searchable columns; ignoring search {text!r}")
        return query
    return query.or_(terms)


def apply_filters(
    query: TableQuery, table: str, filters: Mapping[str, str], language: Language
) -> TableQuery:
    """Apply per-column filters; unusable filters are logged and dropped."""
    for key, raw in filters.items():
        if raw is None or not str(raw).strip():
            continue
        value = str(raw).strip()
        column = get_column(table, key)
        if column is None:
            logger.warning(f"Ignoring filter on unknown column {table}.{key}")
            continue
        if not column.filterable:
            logger.info(f"Filtering is not supported for {column.kind.value} column {table}.{key}; ignored")
            continue

        if column.kind == ColumnKind.number:
            number = parse_number(value)
            if number is None:
                logger.warning(f"Filter value {value!r} for numeric column {table}.{key} is not a number; ignored")
                continue
            query.eq(column.key, number)
        elif column.kind == ColumnKind.boolean:
            flag = parse_boolean(value)
            if flag is None:
                logger.warning(f"Filter value {value!r} for boolean column {table}.{key} is not a boolean; ignored")
                continue
            query.eq(column.key, flag)
        elif column.kind in (ColumnKind.identifier, ColumnKind.foreign_key):
            query.eq(column.key, value)
        else:
            query.ilike(column.query_path(language), contains_pattern(value))
    return query


def apply_sort(query: TableQuery, table: str, sort: Optional[SortSpec], language: Language) -> TableQuery:
    """Order by the requested sortable column, otherwise newest first."""
    if sort is not None:
        column = get_column(table, sort.key)
        if column is not None and column.sortable:
            return query.order_by(
                column.query_path(language),
                ascending=sort.direction == SortDirection.asc,
                nulls_first=True,
            )
        logger.warning(f"Column {table}.{sort.key} is unknown or not sortable; using default order")
    default_key = creation_timestamp_column(table) or "id"
    return query.order_by(default_key, ascending=False, nulls_first=True)


def build_page_query(request: PageRequest) -> TableQuery:
    """Compose the backend query for one list page."""
    table = request.table.value
    columns = get_table_columns(table)
    query = TableQuery(table).select("*").range(request.offset, request.page_size).with_count()
    apply_search(query, columns, request.search, request.language)
    apply_filters(query, table, request.filters, request.language)
    apply_sort(query, table, request.sort, request.language)
    return query


class RecordQueryService:
    """Runs list page queries and enriches the rows for display."""

    def __init__(self, backend: BackendClient):
        """Initialize the query service with a backend client."""
        self.backend = backend

    async def fetch_table_data(self, request: PageRequest) -> RecordPage:
        """
        Fetch one page of a table.

        Args:
            request: Table, pagination, search, filters, sort and language

        Returns:
            RecordPage with the rows, totals and pagination window

        Raises:
            BackendError: If the page query or an enrichment lookup fails
        """
        table = request.table.value
        query = build_page_query(request)
        try:
            result = await self.backend.select(query)
            rows = await self.enrich_foreign_keys(table, result.rows, request.language)
        except Exception as e:
            logger.error(f"Error fetching {table}: {e}", exc_info=True)
            raise

        total_count = result.count if result.count is not None else len(rows)
        total_pages = math.ceil(total_count / request.page_size) if total_count else 0
        page = RecordPage(
            data=rows,
            total_count=total_count,
            total_pages=total_pages,
            page=request.page,
            page_size=request.page_size,
            pages=page_window(request.page, total_pages),
        )
        if request.formatted:
            columns = get_table_columns(table)
            page.display = [format_row(row, columns, request.language) for row in rows]
        logger.debug(f"Fetched {len(rows)} of {total_count} rows from {table} (page {request.page}/{total_pages})")
        return page

    async def enrich_foreign_keys(
        self, table: str, rows: List[Dict[str, Any]], language: Language
    ) -> List[Dict[str, Any]]:
        """Attach ``<key>_name`` for every foreign key column.

        All referenced ids of one column are resolved in a single lookup.
        """
        for column in get_table_columns(table):
            if column.kind != ColumnKind.foreign_key or not rows:
                continue
            ids = list(dict.fromkeys(str(row[column.key]) for row in rows if row.get(column.key) is not None))
            names: Dict[str, Optional[str]] = {}
            if ids:
                lookup = TableQuery(column.target_table).select("id", column.target_label_key).in_("id", ids)
                result = await self.backend.select(lookup)
                names = {
                    str(ref["id"]): localized_value(ref.get(column.target_label_key), language)
                    for ref in result.rows
                }
            for row in rows:
                ref_id = row.get(column.key)
                row[f"{column.key}_name"] = names.get(str(ref_id)) if ref_id is not None else None
        return rows
