"""
Preference Endpoints.

Each dashboard client stores its selected language, column filters, column
visibility and sort order under its own client id.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from holyspots_admin.core.models.io import UIPreferences, UIPreferencesUpdate
from holyspots_admin.core.services.preferences import CLIENT_ID_PATTERN
from holyspots_admin.server.services.deps import PreferencesDep

router = APIRouter()

ClientId = Annotated[str, Path(pattern=CLIENT_ID_PATTERN, description="Opaque dashboard client id")]


@router.get(
    "/{client_id}",
    response_model=UIPreferences,
    summary="Get Preferences",
    description="Retrieve the preference document of a client; unknown clients get the defaults.",
)
async def get_preferences(client_id: ClientId, store: PreferencesDep) -> UIPreferences:
    return await store.load(client_id)


@router.put(
    "/{client_id}",
    response_model=UIPreferences,
    summary="Save Preferences",
    description="Merge a partial preference update table by table and return the resulting document.",
)
async def put_preferences(client_id: ClientId, update: UIPreferencesUpdate, store: PreferencesDep) -> UIPreferences:
    return await store.save(client_id, update)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset Preferences",
)
async def reset_preferences(client_id: ClientId, store: PreferencesDep) -> Response:
    await store.reset(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
