"""
Record I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the record list, the
relation editor and the column metadata endpoints.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from holyspots_admin.core.catalog import DEFAULT_LANGUAGE, ColumnKind, Language, TableName

MAX_PAGE_SIZE = 100


class SortDirection(str, Enum):
    """Ordering direction of the list view."""

    asc = "asc"
    desc = "desc"


class SortSpec(BaseModel):
    """Sort key and direction chosen in the list view."""

    key: str = Field(description="Column key to order by")
    direction: SortDirection = Field(default=SortDirection.asc, description="Ordering direction")


class PageRequest(BaseModel):
    """One list view request: pagination, search, per-column filters and sort."""

    table: TableName
    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE, description="Rows per page")
    search: Optional[str] = Field(default=None, description="Free-text search over searchable columns")
    filters: Dict[str, str] = Field(default_factory=dict, description="Column key to filter string")
    sort: Optional[SortSpec] = Field(default=None, description="Explicit ordering")
    language: Language = Field(default=DEFAULT_LANGUAGE, description="Language used for language-map columns")
    formatted: bool = Field(default=False, description="Attach display strings for every column")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class RecordPage(BaseModel):
    """A page of rows plus pagination totals."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    total_count: int = Field(default=0, description="Rows matching the search and filters")
    total_pages: int = Field(default=0, description="Pages at the requested page size")
    page: int
    page_size: int
    pages: List[Optional[int]] = Field(
        default_factory=list, description="Page links to render; null marks an ellipsis"
    )
    display: Optional[List[Dict[str, str]]] = Field(
        default=None, description="Per-row display strings keyed by column, when requested"
    )


class ColumnRead(BaseModel):
    """Schema for reading a column descriptor from the API."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    kind: ColumnKind
    sortable: bool
    searchable: bool
    filterable: bool
    truncate: bool
    target_table: Optional[str] = None
    language: Optional[Language] = Field(default=None, description="Selected language for language-map columns")


class RelatedOption(BaseModel):
    """A candidate record for a relation picker."""

    id: str
    name: Any = Field(default=None, description="Raw name value of the candidate")
    label: Optional[str] = Field(default=None, description="Name resolved to the selected language")


class RelationSyncResult(BaseModel):
    """Outcome of synchronizing one relation key."""

    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    kept: List[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)
