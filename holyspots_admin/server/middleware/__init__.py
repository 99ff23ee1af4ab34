"""Middleware of the HolySpots Admin server."""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
