"""
Many-to-many relation synchronization.

A spot, route or event can be linked to records of the other two tables
through the ``spot_route``, ``spot_event`` and ``route_event`` join tables.
The edit panel submits the complete desired id list per relation key; this
service reads the current edges and applies only the difference:

- edges no longer wanted are deleted with one ``in (...)`` delete,
- missing edges are inserted with one batch insert,
- relation keys absent from the submission are left untouched.

The delete and the insert are separate round trips. If the insert fails the
removed edges stay removed and the added ones are missing; edges that were
kept are never touched.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

from holyspots_admin.backend import BackendClient, TableQuery
from holyspots_admin.core.catalog import JoinTableSpec, UnknownRelationError, get_relation_specs, resolve_table
from holyspots_admin.core.models.io.records import RelationSyncResult

logger = logging.getLogger(__name__)


class RelationSynchronizer:
    """Reads and replaces the relation sets of spots, routes and events."""

    def __init__(self, backend: BackendClient):
        """Initialize the synchronizer with a backend client."""
        self.backend = backend

    async def _current_targets(self, spec: JoinTableSpec, record_id: str) -> List[str]:
        query = TableQuery(spec.join_table).select(spec.target_column).eq(spec.own_column, record_id)
        result = await self.backend.select(query)
        return [str(row[spec.target_column]) for row in result.rows if row.get(spec.target_column) is not None]

    async def fetch_record_relations(self, table: str, record_id: str) -> Dict[str, List[str]]:
        """
        Read the related ids of a record for every relation key of its table.

        Returns:
            Mapping of relation key to related ids; empty for tables without relations
        """
        relations: Dict[str, List[str]] = {}
        for relation_key, spec in get_relation_specs(table).items():
            try:
                relations[relation_key] = await self._current_targets(spec, record_id)
            except Exception as e:
                logger.error(f"Error fetching {relation_key} relations for {table} record {record_id}: {e}", exc_info=True)
                raise
        return relations

    async def update_record_relations(
        self, table: str, record_id: str, relations: Mapping[str, Sequence[str]]
    ) -> Dict[str, RelationSyncResult]:
        """
        Make the relation set of each supplied key exactly the given ids.

        Args:
            table: Owning table (spots, routes or events)
            record_id: Owning record id
            relations: Relation key to the complete list of related ids

        Returns:
            Per relation key, the ids that were added, removed and kept

        Raises:
            UnknownRelationError: If a key is not a relation of ``table``; raised before any write
            BackendError: If a read, delete or insert fails
        """
        table = resolve_table(table)
        specs = get_relation_specs(table)
        for relation_key in relations:
            if relation_key not in specs:
                raise UnknownRelationError(table, relation_key)

        results: Dict[str, RelationSyncResult] = {}
        for relation_key, target_ids in relations.items():
            spec = specs[relation_key]
            desired = list(dict.fromkeys(str(target_id) for target_id in target_ids))
            try:
                results[relation_key] = await self._sync_one(spec, record_id, desired)
            except Exception as e:
                logger.error(f"Error updating {relation_key} relations for {table} record {record_id}: {e}", exc_info=True)
                raise
        return results

    async def _sync_one(self, spec: JoinTableSpec, record_id: str, desired: List[str]) -> RelationSyncResult:
        current = await self._current_targets(spec, record_id)
        current_set = set(current)
        desired_set = set(desired)

        removed = [target for target in current if target not in desired_set]
        added = [target for target in desired if target not in current_set]
        kept = [target for target in current if target in desired_set]

        if removed:
            await self.backend.delete(
                TableQuery(spec.join_table).eq(spec.own_column, record_id).in_(spec.target_column, removed)
            )
        if added:
            await self.backend.insert(
                spec.join_table,
                [{spec.own_column: record_id, spec.target_column: target} for target in added],
            )

        logger.debug(
            f"Synced {spec.join_table} for {spec.own_column}={record_id}: "
            f"+{len(added)} -{len(removed)} ={len(kept)}"
        )
        return RelationSyncResult(added=added, removed=removed, kept=kept)
