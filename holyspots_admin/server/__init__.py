"""
HolySpots Admin Server Package.

This package contains the web server for the dashboard: the API definition,
configuration, dependencies and error handling.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request tracing.
    services: Dependency providers for the service layer.
"""
