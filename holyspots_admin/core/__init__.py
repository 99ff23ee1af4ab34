"""
Core utilities and configuration for HolySpots Admin.

This package provides core functionality including logging configuration,
the table catalog, the service layer and the local preference store.
"""

from holyspots_admin.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
