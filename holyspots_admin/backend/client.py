from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from .errors import BackendError
from .query import TableQuery

_CONTENT_RANGE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")


@dataclass(frozen=True)
class SelectResult:
    """Rows returned by a select plus the exact total when it was requested."""

    rows: List[Dict[str, Any]]
    count: Optional[int] = None


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """Extract the total from a ``Content-Range`` header such as ``0-9/57`` or ``*/0``."""
    if not header:
        return None
    match = _CONTENT_RANGE.match(header.strip())
    if not match or match.group(1) == "*":
        return None
    return int(match.group(1))


class BackendClient:
    """
    Thin async HTTP client for the backend table API.

    Responsibilities:
    - select (filter/order/range/select with optional exact count)
    - insert (batch)
    - update (by filter)
    - delete (by filter)

    Note: the client does not know about column kinds or languages. Query
    composition lives in the services; this class only ships a ``TableQuery``
    and maps transport failures to ``BackendError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        rest_path: str = "/rest/v1",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.rest_path = "/" + rest_path.strip("/") if rest_path.strip("/") else ""
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self, *prefer: str) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        return headers

    def _url(self, table: str) -> str:
        return f"{self.base_url}{self.rest_path}/{table}"

    async def _send(
        self,
        operation: str,
        method: str,
        table: str,
        *,
        params: Optional[Sequence[tuple[str, str]]] = None,
        json: Any = None,
        prefer: Sequence[str] = (),
    ) -> httpx.Response:
        try:
            self._logger.debug("BackendClient.%s: %s %s params=%s", operation, method, self._url(table), params)
            r = await self._client.request(
                method,
                self._url(table),
                headers=self._headers(*prefer),
                params=list(params) if params else None,
                json=json,
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"Backend {operation} on '{table}' failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=_error_body(e.response),
            ) from e
        except httpx.RequestError as e:
            raise BackendError(f"Backend {operation} on '{table}' failed: {e}") from e
        return r

    async def select(self, query: TableQuery) -> SelectResult:
        prefer = ("count=exact",) if query.count else ()
        r = await self._send("select", "GET", query.table, params=query.to_params(), prefer=prefer)
        rows = _rows(r, query.table)
        count = parse_content_range(r.headers.get("content-range")) if query.count else None
        if query.count and count is None:
            count = len(rows) if query.offset in (None, 0) else None
        self._logger.debug("BackendClient.select: %s returned %d rows (count=%s)", query.table, len(rows), count)
        return SelectResult(rows=rows, count=count)

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        if not rows:
            return []
        r = await self._send(
            "insert",
            "POST",
            table,
            json=[dict(row) for row in rows],
            prefer=("return=representation",),
        )
        created = _rows(r, table)
        self._logger.debug("BackendClient.insert: %s created %d rows", table, len(created))
        return created

    async def update(self, query: TableQuery, values: Mapping[str, Any]) -> List[Dict[str, Any]]:
        _require_filters(query, "update")
        r = await self._send(
            "update",
            "PATCH",
            query.table,
            params=query.to_params(),
            json=dict(values),
            prefer=("return=representation",),
        )
        updated = _rows(r, query.table)
        self._logger.debug("BackendClient.update: %s updated %d rows", query.table, len(updated))
        return updated

    async def delete(self, query: TableQuery) -> List[Dict[str, Any]]:
        _require_filters(query, "delete")
        r = await self._send(
            "delete",
            "DELETE",
            query.table,
            params=query.to_params(),
            prefer=("return=representation",),
        )
        deleted = _rows(r, query.table)
        self._logger.debug("BackendClient.delete: %s deleted %d rows", query.table, len(deleted))
        return deleted

    async def aclose(self) -> None:
        await self._client.aclose()


def _require_filters(query: TableQuery, operation: str) -> None:
    # An unfiltered PATCH/DELETE would touch every row of the table.
    if not query.has_filters:
        raise BackendError(f"Refusing unfiltered {operation} on '{query.table}'")


def _rows(r: httpx.Response, table: str) -> List[Dict[str, Any]]:
    if not r.content:
        return []
    data = r.json()
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise BackendError(f"Unexpected response shape from '{table}'", status_code=r.status_code, details=data)
    return [row for row in data if isinstance(row, dict)]


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
