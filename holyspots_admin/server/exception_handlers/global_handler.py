"""
Exception Handlers for the FastAPI Application.

Domain errors raised by the service layer are mapped to HTTP responses here:
catalog lookups and not-found records become 404, invalid record values 422,
backend failures 502. Anything else reaches the global handler, which logs
the full context and returns an error id clients can quote.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from holyspots_admin.backend import BackendError, RecordNotFoundError
from holyspots_admin.core.catalog import UnknownRelationError, UnknownTableError
from holyspots_admin.core.logging_config import get_logger
from holyspots_admin.core.monitoring import log_error
from holyspots_admin.core.services.records import InvalidRecordError

logger = get_logger(__name__)


async def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "table": exc.table, "record_id": str(exc.record_id)},
    )


async def unknown_table_handler(request: Request, exc: UnknownTableError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def unknown_relation_handler(request: Request, exc: UnknownRelationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "relation": exc.relation_key},
    )


async def invalid_record_handler(request: Request, exc: InvalidRecordError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "errors": exc.errors},
    )


async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    """
    Report a failed backend round trip.

    The upstream status code and body are passed along so the dashboard can
    show them in its error notification.
    """
    logger.error(
        f"Backend failure in {request.method} {request.url.path}: {exc}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    log_error(type(exc).__name__, str(exc), {"path": request.url.path, "status_code": exc.status_code})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "status_code": exc.status_code, "details": exc.details},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    # Generate unique error ID for tracking
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    # RecordNotFoundError subclasses BackendError; Starlette picks the most specific handler.
    app.add_exception_handler(RecordNotFoundError, record_not_found_handler)
    app.add_exception_handler(BackendError, backend_error_handler)
    app.add_exception_handler(UnknownTableError, unknown_table_handler)
    app.add_exception_handler(UnknownRelationError, unknown_relation_handler)
    app.add_exception_handler(InvalidRecordError, invalid_record_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
