"""
Service layer for the dashboard operations.

Modules:
- query_builder: list page queries and foreign key enrichment
- records: single-record CRUD and relation picker options
- relation_sync: many-to-many relation reads and diff-based updates
- preferences: per-client UI preference store
- formatting: list cell display strings and pagination window
"""

from .preferences import InvalidClientIdError, PreferencesStore
from .query_builder import RecordQueryService, build_page_query
from .records import InvalidRecordError, RecordService
from .relation_sync import RelationSynchronizer

__all__ = [
    "InvalidClientIdError",
    "InvalidRecordError",
    "PreferencesStore",
    "RecordQueryService",
    "RecordService",
    "RelationSynchronizer",
    "build_page_query",
]
