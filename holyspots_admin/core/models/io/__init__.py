"""
I/O models for API requests and responses.

Modules:
- records: list view, column metadata and relation models
- preferences: per-client UI preference models
"""

from .preferences import UIPreferences, UIPreferencesUpdate
from .records import (
    MAX_PAGE_SIZE,
    ColumnRead,
    PageRequest,
    RecordPage,
    RelatedOption,
    RelationSyncResult,
    SortDirection,
    SortSpec,
)

__all__ = [
    "MAX_PAGE_SIZE",
    "ColumnRead",
    "PageRequest",
    "RecordPage",
    "RelatedOption",
    "RelationSyncResult",
    "SortDirection",
    "SortSpec",
    "UIPreferences",
    "UIPreferencesUpdate",
]
