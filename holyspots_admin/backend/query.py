"""
Declarative table query.

``TableQuery`` collects the select list, filters, OR-groups, ordering and
range of one request against the backend table API and renders them as the
query-string vocabulary the API understands::

    select=id,name
    name->>ru=ilike.*lake*
    or=(name->>ru.ilike.*lake*,code.ilike.*lake*)
    id=in.(a,b,c)
    order=created_at.desc.nullsfirst
    limit=10&offset=20

Builder methods mutate and return the query so calls can be chained.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

_RESERVED = re.compile(r'[,().:"\\\s]')


class FilterOperator(str, Enum):
    """Comparison operators understood by the table API."""

    eq = "eq"
    ilike = "ilike"
    in_ = "in"
    is_ = "is"


@dataclass(frozen=True)
class ColumnFilter:
    """A single ``column operator value`` predicate."""

    column: str
    operator: FilterOperator
    value: Any

    def render_value(self, *, nested: bool = False) -> str:
        """Render the operand; ``nested`` quotes values placed inside ``or=(...)``."""
        if self.operator == FilterOperator.in_:
            items = ",".join(quote_value(encode_scalar(v)) for v in self.value)
            return f"({items})"
        text = encode_scalar(self.value)
        return quote_value(text) if nested else text

    def as_param(self) -> Tuple[str, str]:
        return self.column, f"{self.operator.value}.{self.render_value()}"

    def as_term(self) -> str:
        return f"{self.column}.{self.operator.value}.{self.render_value(nested=True)}"


@dataclass(frozen=True)
class OrderClause:
    """One ordering term."""

    column: str
    ascending: bool = True
    nulls_first: bool = True

    def render(self) -> str:
        direction = "asc" if self.ascending else "desc"
        nulls = "nullsfirst" if self.nulls_first else "nullslast"
        return f"{self.column}.{direction}.{nulls}"


def encode_scalar(value: Any) -> str:
    """Render a Python scalar the way the table API expects it in a query string."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def quote_value(text: str) -> str:
    """Double-quote a value that contains reserved characters of the list syntax."""
    if not _RESERVED.search(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class TableQuery:
    """Filter/order/range/select description of one table API request."""

    table: str
    columns: List[str] = field(default_factory=list)
    filters: List[ColumnFilter] = field(default_factory=list)
    any_of: List[List[ColumnFilter]] = field(default_factory=list)
    order: List[OrderClause] = field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None
    count: bool = False

    def select(self, *columns: str) -> "TableQuery":
        self.columns = list(columns)
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.filters.append(ColumnFilter(column, FilterOperator.eq, value))
        return self

    def ilike(self, column: str, pattern: str) -> "TableQuery":
        self.filters.append(ColumnFilter(column, FilterOperator.ilike, pattern))
        return self

    def in_(self, column: str, values: Iterable[Any]) -> "TableQuery":
        self.filters.append(ColumnFilter(column, FilterOperator.in_, list(values)))
        return self

    def or_(self, terms: Iterable[ColumnFilter]) -> "TableQuery":
        group = list(terms)
        if group:
            self.any_of.append(group)
        return self

    def order_by(self, column: str, *, ascending: bool = True, nulls_first: bool = True) -> "TableQuery":
        self.order.append(OrderClause(column, ascending, nulls_first))
        return self

    def range(self, offset: int, limit: int) -> "TableQuery":
        self.offset = offset
        self.limit = limit
        return self

    def with_count(self) -> "TableQuery":
        self.count = True
        return self

    @property
    def has_filters(self) -> bool:
        return bool(self.filters or self.any_of)

    def to_params(self) -> List[Tuple[str, str]]:
        """Render the query as ordered query-string pairs."""
        params: List[Tuple[str, str]] = []
        if self.columns:
            params.append(("select", ",".join(self.columns)))
        params.extend(f.as_param() for f in self.filters)
        for group in self.any_of:
            params.append(("or", "(" + ",".join(f.as_term() for f in group) + ")"))
        if self.order:
            params.append(("order", ",".join(o.render() for o in self.order)))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        return params
