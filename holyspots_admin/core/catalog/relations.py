"""
Join-table descriptors for many-to-many relations.

Spots, routes and events are linked pairwise through ``spot_route``,
``spot_event`` and ``route_event``. Each descriptor is written from the point
of view of the owning table: ``own_column`` holds the owning record id and
``target_column`` the related record id.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class JoinTableSpec:
    """One side of a many-to-many relation."""

    join_table: str
    own_column: str
    target_column: str
    target_table: str


RELATIONS: dict[str, dict[str, JoinTableSpec]] = {
    "spots": {
        "routes": JoinTableSpec("spot_route", "spot_id", "route_id", "routes"),
        "events": JoinTableSpec("spot_event", "spot_id", "event_id", "events"),
    },
    "routes": {
        "spots": JoinTableSpec("spot_route", "route_id", "spot_id", "spots"),
        "events": JoinTableSpec("route_event", "route_id", "event_id", "events"),
    },
    "events": {
        "spots": JoinTableSpec("spot_event", "event_id", "spot_id", "spots"),
        "routes": JoinTableSpec("route_event", "event_id", "route_id", "routes"),
    },
}
