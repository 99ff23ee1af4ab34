"""
Unit tests for the column metadata registry.

Covers:
- Column lists of every managed table
- Kind-derived flags (searchable, filterable, sortable)
- Descriptor validation
- Relation descriptors and lookup errors
"""

import pytest
from pydantic import ValidationError

from holyspots_admin.core.catalog import (
    RELATIONS,
    TABLE_COLUMNS,
    ColumnDescriptor,
    ColumnKind,
    Language,
    TableName,
    UnknownTableError,
    creation_timestamp_column,
    get_column,
    get_relation_specs,
    get_table_columns,
    resolve_table,
)


class TestTableColumns:
    def test_every_managed_table_has_columns(self):
        for table in TableName:
            assert get_table_columns(table), table

    def test_spots_columns_in_display_order(self):
        keys = [column.key for column in get_table_columns("spots")]
        assert keys == ["id", "name", "info", "city", "type", "point", "images", "created_at"]

    def test_city_is_foreign_key_to_cities(self):
        city = get_column("spots", "city")
        assert city is not None
        assert city.kind == ColumnKind.foreign_key
        assert city.target_table == "cities"

    def test_unknown_column_returns_none(self):
        assert get_column("spots", "nope") is None

    def test_unknown_table_raises(self):
        with pytest.raises(UnknownTableError) as exc_info:
            get_table_columns("unknown")
        assert exc_info.value.table == "unknown"

    def test_resolve_table_accepts_enum(self):
        assert resolve_table(TableName.events) == "events"

    def test_foreign_key_targets_are_managed_tables(self):
        for columns in TABLE_COLUMNS.values():
            for column in columns:
                if column.kind == ColumnKind.foreign_key:
                    assert column.target_table in TABLE_COLUMNS

    def test_column_keys_are_unique_per_table(self):
        for table, columns in TABLE_COLUMNS.items():
            keys = [column.key for column in columns]
            assert len(keys) == len(set(keys)), table


class TestKindFlags:
    @pytest.mark.parametrize("kind", [ColumnKind.string_array, ColumnKind.json, ColumnKind.geometry])
    def test_structured_kinds_are_never_sortable(self, kind):
        for columns in TABLE_COLUMNS.values():
            for column in columns:
                if column.kind == kind:
                    assert not column.sortable

    def test_language_map_is_searchable_and_localized(self):
        name = get_column("spots", "name")
        assert name.searchable
        assert name.is_localized
        assert name.query_path(Language.hi) == "name->>hi"

    def test_plain_column_query_path_is_key(self):
        assert get_column("users", "email").query_path("ru") == "email"

    def test_number_is_filterable_not_searchable(self):
        points = get_column("users", "points")
        assert points.filterable
        assert not points.searchable

    @pytest.mark.parametrize("table", ["countries", "cities", "spots", "routes", "events"])
    def test_content_id_is_filterable_identifier_not_searchable(self, table):
        record_id = get_column(table, "id")
        assert record_id.kind == ColumnKind.identifier
        assert record_id.filterable
        assert record_id.sortable
        assert not record_id.searchable

    def test_timestamp_is_sortable_but_not_filterable(self):
        created = get_column("spots", "created_at")
        assert created.sortable
        assert not created.filterable

    def test_creation_timestamp_column(self):
        assert creation_timestamp_column("spots") == "created_at"
        assert creation_timestamp_column("routes") is None


class TestDescriptorValidation:
    def test_foreign_key_requires_target(self):
        with pytest.raises(ValidationError):
            ColumnDescriptor(key="city", label="City", kind=ColumnKind.foreign_key)

    def test_non_foreign_key_cannot_have_target(self):
        with pytest.raises(ValidationError):
            ColumnDescriptor(key="name", label="Name", target_table="cities")

    def test_geometry_cannot_be_sortable(self):
        with pytest.raises(ValidationError):
            ColumnDescriptor(key="point", label="Point", kind=ColumnKind.geometry, sortable=True)

    def test_descriptor_is_frozen(self):
        column = ColumnDescriptor(key="name", label="Name")
        with pytest.raises(ValidationError):
            column.label = "Other"


class TestRelations:
    def test_only_spots_routes_events_have_relations(self):
        assert set(RELATIONS) == {"spots", "routes", "events"}
        assert get_relation_specs("countries") == {}

    def test_spot_relations(self):
        specs = get_relation_specs("spots")
        assert set(specs) == {"routes", "events"}
        assert specs["routes"].join_table == "spot_route"
        assert specs["routes"].own_column == "spot_id"
        assert specs["routes"].target_column == "route_id"

    def test_relations_are_symmetric(self):
        for owner, specs in RELATIONS.items():
            for spec in specs.values():
                back = RELATIONS[spec.target_table][owner]
                assert back.join_table == spec.join_table
                assert back.own_column == spec.target_column
                assert back.target_column == spec.own_column

    def test_unknown_table_relations_raise(self):
        with pytest.raises(UnknownTableError):
            get_relation_specs("spot_route")
