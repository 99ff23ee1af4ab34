"""Error types specific to the backend table API layer.

Purpose:
- Provide typed exceptions thrown by ``BackendClient`` and the services built
  on top of it.
- Expose HTTP-oriented context (status code, error body) for diagnosis.

Usage:
- Catch ``BackendError`` for any failed round trip and inspect ``status_code``
  or ``details``.
- Catch ``RecordNotFoundError`` when a lookup, update or delete by id matched
  no row.
"""

from __future__ import annotations

from typing import Any, Optional


class BackendError(Exception):
    """Base error for backend table API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the server (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class RecordNotFoundError(BackendError):
    """Raised when no row of ``table`` has the requested identifier.

    Args:
        table: Table that was queried.
        record_id: The identifier that was not found.
    """

    def __init__(self, table: str, record_id: Any) -> None:
        super().__init__(f"Record {record_id} not found in {table}", status_code=404)
        self.table = table
        self.record_id = record_id
