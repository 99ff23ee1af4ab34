"""Repositories of the local store."""

from .base import AsyncBaseRepository
from .preferences import PreferenceRepository

__all__ = ["AsyncBaseRepository", "PreferenceRepository"]
