from .client import BackendClient, SelectResult, parse_content_range
from .errors import BackendError, RecordNotFoundError
from .query import ColumnFilter, FilterOperator, OrderClause, TableQuery

__all__ = [
    "BackendClient",
    "BackendError",
    "ColumnFilter",
    "FilterOperator",
    "OrderClause",
    "RecordNotFoundError",
    "SelectResult",
    "TableQuery",
    "parse_content_range",
]
