"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from holyspots_admin.backend import BackendClient
from holyspots_admin.core.database import init_db
from holyspots_admin.core.logging_config import get_logger, setup_logging
from holyspots_admin.core.monitoring import initialize_logfire

from .api.v1 import health, preferences, records, relations, tables
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Opens the shared backend client and prepares the preference store on
    startup; closes the client on shutdown.
    """
    # Startup
    logger.info("Starting up HolySpots Admin Server...")
    backend_config = settings.backend
    app.state.backend = BackendClient(
        backend_config.url,
        api_key=backend_config.api_key,
        rest_path=backend_config.rest_path,
        timeout=backend_config.timeout,
    )
    logger.info(f"Backend client configured for {backend_config.url}")
    try:
        await init_db()
        logger.info("Preference store initialized successfully")
    except Exception as e:
        logger.error(f"Preference store initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down HolySpots Admin Server...")
    await app.state.backend.aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    HolySpots Admin Server API

    This API backs the HolySpots content dashboard: browsing, searching and
    editing countries, cities, spots, routes, events and users in every
    content language, linking spots, routes and events, and remembering
    each client's view preferences.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(tables.router, prefix=f"{constant.API_V1_STR}/tables", tags=["tables"])
app.include_router(records.router, prefix=f"{constant.API_V1_STR}/tables", tags=["records"])
app.include_router(relations.router, prefix=f"{constant.API_V1_STR}/tables", tags=["relations"])
app.include_router(preferences.router, prefix=f"{constant.API_V1_STR}/preferences", tags=["preferences"])
