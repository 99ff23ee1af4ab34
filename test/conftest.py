from __future__ import annotations

import json
import os
import re
from itertools import count
from typing import Any, AsyncGenerator, Dict, Iterable, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

# Keep the preference store in memory for every test module
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from holyspots_admin.backend import BackendClient  # noqa: E402
from holyspots_admin.core.database.utils import create_all, create_sessionmaker  # noqa: E402

BACKEND_URL = "http://mock.backend"


def _split_top_level(text: str) -> List[str]:
    """Split on commas that are outside quotes and parentheses."""
    parts: List[str] = []
    buf: List[str] = []
    depth = 0
    quoted = False
    escaped = False
    for ch in text:
        if escaped:
            buf.append(ch)
            escaped = False
            continue
        if ch == "\\" and quoted:
            buf.append(ch)
            escaped = True
            continue
        if ch == '"':
            quoted = not quoted
        elif not quoted and ch == "(":
            depth += 1
        elif not quoted and ch == ")":
            depth -= 1
        elif not quoted and depth == 0 and ch == ",":
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    if buf:
        parts.append("".join(buf))
    return parts


def _unquote(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return re.sub(r"\\(.)", r"\1", text[1:-1])
    return text


def _encode(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _column_value(row: Dict[str, Any], column: str) -> Any:
    if "->>" in column:
        key, lang = column.split("->>", 1)
        container = row.get(key)
        if not isinstance(container, dict):
            return None
        value = container.get(lang)
        return None if value is None else str(value)
    return row.get(column)


def _like_regex(pattern: str) -> str:
    """Translate an ``ilike`` operand (``*``/``%`` any run, ``_`` one char, ``\\`` escape)."""
    out: List[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            out.append(re.escape(next(chars, "\\")))
        elif ch in "*%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def _matches(row: Dict[str, Any], column: str, operator: str, operand: str) -> bool:
    value = _column_value(row, column)
    if operator == "eq":
        return value is not None and _encode(value) == _unquote(operand)
    if operator == "ilike":
        if value is None:
            return False
        return re.fullmatch(_like_regex(_unquote(operand)), str(value), flags=re.IGNORECASE | re.DOTALL) is not None
    if operator == "in":
        items = [_unquote(item) for item in _split_top_level(operand.strip()[1:-1])]
        return value is not None and _encode(value) in items
    if operator == "is":
        return value is None if operand == "null" else _encode(value) == operand
    raise AssertionError(f"fake backend does not understand operator {operator!r}")


class FakeTableApi:
    """In-memory stand-in for the backend table API, served through ``httpx.MockTransport``.

    Understands the query-string vocabulary the client sends (select, column
    filters, ``or=(...)``, ``order``, ``limit``/``offset``, ``Prefer: count=exact``)
    and records every request so tests can assert on round trips.
    """

    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.requests: List[Tuple[str, str, List[Tuple[str, str]]]] = []
        self.failures: Dict[Tuple[str, str], int] = {}
        self._ids = count(1000)

    def seed(self, table: str, rows: Iterable[Dict[str, Any]]) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)

    def fail(self, method: str, table: str, status_code: int = 500) -> None:
        self.failures[(method, table)] = status_code

    def calls(self, method: Optional[str] = None, table: Optional[str] = None) -> List[Tuple[str, str, List[Tuple[str, str]]]]:
        return [
            call
            for call in self.requests
            if (method is None or call[0] == method) and (table is None or call[1] == table)
        ]

    def _filtered(self, table: str, params: List[Tuple[str, str]]) -> List[Dict[str, Any]]:
        rows = self.tables.get(table, [])
        for key, raw in params:
            if key in ("select", "order", "limit", "offset"):
                continue
            if key == "or":
                terms = _split_top_level(raw.strip()[1:-1])
                parsed = []
                for term in terms:
                    column, operator, operand = term.split(".", 2)
                    parsed.append((column, operator, operand))
                rows = [r for r in rows if any(_matches(r, c, o, v) for c, o, v in parsed)]
            else:
                operator, operand = raw.split(".", 1)
                rows = [r for r in rows if _matches(r, key, operator, operand)]
        return rows

    @staticmethod
    def _ordered(rows: List[Dict[str, Any]], order: Optional[str]) -> List[Dict[str, Any]]:
        if not order:
            return rows
        for clause in reversed(order.split(",")):
            column, direction, nulls = clause.split(".")
            present = [r for r in rows if _column_value(r, column) is not None]
            missing = [r for r in rows if _column_value(r, column) is None]
            present.sort(key=lambda r: _column_value(r, column), reverse=direction == "desc")
            rows = missing + present if nulls == "nullsfirst" else present + missing
        return rows

    def __call__(self, request: httpx.Request) -> httpx.Response:
        table = request.url.path.rsplit("/", 1)[-1]
        params = list(request.url.params.multi_items())
        self.requests.append((request.method, table, params))

        status_code = self.failures.get((request.method, table))
        if status_code is not None:
            return httpx.Response(status_code, json={"message": f"injected failure on {table}"})

        lookup = dict(params)
        if request.method == "GET":
            rows = self._ordered(list(self._filtered(table, params)), lookup.get("order"))
            total = len(rows)
            offset = int(lookup.get("offset", 0))
            limit = int(lookup["limit"]) if "limit" in lookup else total
            page = rows[offset : offset + limit]
            selected = lookup.get("select", "*")
            if selected != "*":
                keys = selected.split(",")
                page = [{k: r.get(k) for k in keys} for r in page]
            headers = {}
            if "count=exact" in request.headers.get("prefer", ""):
                span = f"{offset}-{offset + len(page) - 1}" if page else "*"
                headers["Content-Range"] = f"{span}/{total}"
            return httpx.Response(200, json=page, headers=headers)

        if request.method == "POST":
            created = []
            for row in json.loads(request.content):
                row = dict(row)
                if "id" not in row and "_" not in table:
                    row["id"] = next(self._ids)
                self.tables.setdefault(table, []).append(row)
                created.append(dict(row))
            return httpx.Response(201, json=created)

        matched = self._filtered(table, params)
        if request.method == "PATCH":
            values = json.loads(request.content)
            for row in matched:
                row.update(values)
            return httpx.Response(200, json=[dict(r) for r in matched])
        if request.method == "DELETE":
            ids = {id(r) for r in matched}
            self.tables[table] = [r for r in self.tables.get(table, []) if id(r) not in ids]
            return httpx.Response(200, json=[dict(r) for r in matched])
        return httpx.Response(405)


@pytest.fixture
def fake_api() -> FakeTableApi:
    return FakeTableApi()


@pytest.fixture
def backend(fake_api: FakeTableApi) -> BackendClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
    return BackendClient(BACKEND_URL, api_key="test-key", client=client)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the preference table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(db_engine)() as session:
        yield session


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)
