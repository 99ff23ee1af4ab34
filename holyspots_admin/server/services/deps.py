"""
Service Dependencies.

Provides the backend client and the service objects for API endpoints. The
backend client is created once in the application lifespan and shared
through ``app.state``; services are cheap wrappers built per request.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from holyspots_admin.backend import BackendClient
from holyspots_admin.core.database import get_session
from holyspots_admin.core.database.repositories import PreferenceRepository
from holyspots_admin.core.services import (
    PreferencesStore,
    RecordQueryService,
    RecordService,
    RelationSynchronizer,
)


def get_backend_client(request: Request) -> BackendClient:
    return request.app.state.backend


BackendDep = Annotated[BackendClient, Depends(get_backend_client)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_query_service(backend: BackendDep) -> RecordQueryService:
    return RecordQueryService(backend)


def get_record_service(backend: BackendDep) -> RecordService:
    return RecordService(backend)


def get_relation_synchronizer(backend: BackendDep) -> RelationSynchronizer:
    return RelationSynchronizer(backend)


def get_preferences_store(session: SessionDep) -> PreferencesStore:
    return PreferencesStore(PreferenceRepository(session))


QueryServiceDep = Annotated[RecordQueryService, Depends(get_query_service)]
RecordServiceDep = Annotated[RecordService, Depends(get_record_service)]
RelationSyncDep = Annotated[RelationSynchronizer, Depends(get_relation_synchronizer)]
PreferencesDep = Annotated[PreferencesStore, Depends(get_preferences_store)]
