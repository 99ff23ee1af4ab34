"""
Record Endpoints.

This module provides the list view, single-record CRUD and the candidate
lists of the relation pickers for every managed table.

List requests carry per-column filters as ``filter.<column>=<value>`` query
parameters, e.g. ``/tables/spots/records?filter.type=2&filter.name=temple``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, Request, Response, status

from holyspots_admin.core.catalog import Language, TableName, resolve_table
from holyspots_admin.core.models.io import MAX_PAGE_SIZE, PageRequest, RecordPage, RelatedOption, SortDirection, SortSpec
from holyspots_admin.server.core.config import settings
from holyspots_admin.server.services.deps import QueryServiceDep, RecordServiceDep

router = APIRouter()

FILTER_PREFIX = "filter."


def collect_filters(request: Request) -> Dict[str, str]:
    """Gather ``filter.<column>`` query parameters; the last value of a repeated key wins."""
    filters: Dict[str, str] = {}
    for name, value in request.query_params.multi_items():
        if name.startswith(FILTER_PREFIX) and len(name) > len(FILTER_PREFIX):
            filters[name[len(FILTER_PREFIX) :]] = value
    return filters


def selected_language(language: Optional[Language]) -> Language:
    return language or Language(settings.default_language)


@router.get(
    "/{table}/records",
    response_model=RecordPage,
    summary="List Records",
    description="Retrieve one page of a table with search, per-column filters and sorting.",
    responses={
        200: {"description": "Page retrieved successfully"},
        404: {"description": "Table is not managed by the dashboard"},
        502: {"description": "Backend request failed"},
    },
)
async def list_records(
    table: str,
    request: Request,
    service: QueryServiceDep,
    page: int = Query(default=1, ge=1, description="1-based page number"),
    page_size: Optional[int] = Query(default=None, ge=1, le=MAX_PAGE_SIZE, description="Rows per page"),
    search: Optional[str] = Query(default=None, description="Substring searched in the searchable columns"),
    sort_key: Optional[str] = Query(default=None, description="Column to order by"),
    sort_direction: SortDirection = Query(default=SortDirection.asc, description="Ordering direction"),
    language: Optional[Language] = Query(default=None, description="Language used for language-map columns"),
    formatted: bool = Query(default=False, description="Attach display strings for every column"),
) -> RecordPage:
    """
    List records of a table.

    Without ``sort_key`` the newest records come first. Filters on columns
    that cannot be filtered, and numeric filters that are not numbers, are
    ignored rather than rejected. Foreign key columns gain a ``<column>_name``
    field holding the referenced record's name.
    """
    page_request = PageRequest(
        table=TableName(resolve_table(table)),
        page=page,
        page_size=page_size or settings.default_page_size,
        search=search,
        filters=collect_filters(request),
        sort=SortSpec(key=sort_key, direction=sort_direction) if sort_key else None,
        language=selected_language(language),
        formatted=formatted,
    )
    return await service.fetch_table_data(page_request)


@router.get(
    "/{table}/records/{record_id}",
    response_model=Dict[str, Any],
    summary="Get Record",
    responses={404: {"description": "Table or record not found"}},
)
async def get_record(table: str, record_id: str, service: RecordServiceDep) -> Dict[str, Any]:
    return await service.fetch_record_by_id(table, record_id)


@router.post(
    "/{table}/records",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    summary="Create Record",
    description="Create a record. Language-map columns take an object of language code to text.",
    responses={
        201: {"description": "Record created"},
        422: {"description": "Values do not match the column kinds"},
    },
)
async def create_record(
    table: str,
    service: RecordServiceDep,
    values: Dict[str, Any] = Body(..., description="Column values of the new record"),
) -> Dict[str, Any]:
    return await service.create_record(table, values)


@router.patch(
    "/{table}/records/{record_id}",
    response_model=Dict[str, Any],
    summary="Update Record",
    description="Update the given columns of a record; other columns keep their values.",
    responses={
        404: {"description": "Table or record not found"},
        422: {"description": "Values do not match the column kinds"},
    },
)
async def update_record(
    table: str,
    record_id: str,
    service: RecordServiceDep,
    values: Dict[str, Any] = Body(..., description="Column values to change"),
) -> Dict[str, Any]:
    return await service.update_record(table, record_id, values)


@router.delete(
    "/{table}/records/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Record",
    responses={404: {"description": "Table or record not found"}},
)
async def delete_record(table: str, record_id: str, service: RecordServiceDep) -> Response:
    await service.delete_record(table, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{table}/related-options",
    response_model=Dict[str, List[RelatedOption]],
    summary="List Relation Candidates",
    description="Retrieve the candidate records of every relation picker of a table.",
)
async def list_related_options(
    table: str,
    service: RecordServiceDep,
    language: Optional[Language] = Query(default=None, description="Language of the option labels"),
) -> Dict[str, List[RelatedOption]]:
    """
    List relation candidates.

    Spots, routes and events list the first records of each related table;
    other tables have no relation pickers and return an empty object.
    """
    return await service.fetch_related_options(table, selected_language(language))
