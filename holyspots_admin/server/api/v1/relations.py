"""
Relation Endpoints.

Read and replace the many-to-many links of spots, routes and events.
"""

from typing import Dict, List

from fastapi import APIRouter, Body

from holyspots_admin.core.models.io import RelationSyncResult
from holyspots_admin.server.services.deps import RelationSyncDep

router = APIRouter()


@router.get(
    "/{table}/records/{record_id}/relations",
    response_model=Dict[str, List[str]],
    summary="Get Record Relations",
    description="Retrieve the related ids of a record for every relation of its table.",
)
async def get_relations(table: str, record_id: str, synchronizer: RelationSyncDep) -> Dict[str, List[str]]:
    return await synchronizer.fetch_record_relations(table, record_id)


@router.put(
    "/{table}/records/{record_id}/relations",
    response_model=Dict[str, RelationSyncResult],
    summary="Replace Record Relations",
    description="Make each submitted relation set exactly the given ids; omitted relations are left unchanged.",
    responses={
        200: {"description": "Relations synchronized"},
        422: {"description": "A relation key does not belong to the table"},
        502: {"description": "Backend request failed; unchanged edges are intact"},
    },
)
async def put_relations(
    table: str,
    record_id: str,
    synchronizer: RelationSyncDep,
    relations: Dict[str, List[str]] = Body(..., description="Relation key to the complete list of related ids"),
) -> Dict[str, RelationSyncResult]:
    """
    Replace relation sets.

    Only the difference is written: links that are no longer wanted are
    deleted and missing links are inserted. Example body for a spot:
    ``{"routes": ["3", "7"], "events": []}``.
    """
    return await synchronizer.update_record_relations(table, record_id, relations)
