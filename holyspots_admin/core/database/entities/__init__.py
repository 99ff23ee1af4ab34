"""Database entities of the local store."""

from .preferences import UIPreference

__all__ = ["UIPreference"]
