"""
UI preference I/O models.

Preferences are stored per client and per name; every field has a default
so a missing or unreadable entry never blocks the dashboard.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

from holyspots_admin.core.catalog import DEFAULT_LANGUAGE, Language

from .records import SortSpec

TableFilters = Dict[str, Dict[str, str]]
TableColumnVisibility = Dict[str, Dict[str, bool]]
TableSort = Dict[str, SortSpec]


class UIPreferences(BaseModel):
    """Complete preference document of one client."""

    language: Language = Field(default=DEFAULT_LANGUAGE, description="Selected content language")
    filters: TableFilters = Field(default_factory=dict, description="Per-table column filters")
    column_visibility: TableColumnVisibility = Field(
        default_factory=dict, description="Per-table column visibility, every column listed"
    )
    sort: TableSort = Field(default_factory=dict, description="Per-table sort configuration")


class UIPreferencesUpdate(BaseModel):
    """Partial preference update; omitted fields are left unchanged.

    Per-table mappings are merged table by table, so sending filters for
    ``spots`` does not clear the filters saved for ``routes``.
    """

    language: Optional[Language] = None
    filters: Optional[TableFilters] = None
    column_visibility: Optional[TableColumnVisibility] = None
    sort: Optional[Dict[str, Optional[SortSpec]]] = Field(
        default=None, description="Per-table sort; null for a table restores its default order"
    )
