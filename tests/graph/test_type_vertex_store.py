"""Tests for GraphTypeVertexStore."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from typegraph.graph import property_keys as keys
from typegraph.graph.type_vertex_store import GraphTypeVertexStore
from typegraph.graph.vertex import PropertyKey
from typegraph.typedef.errors import DefinitionLoadError, TypeAlreadyExistsError
from typegraph.typedef.models import BaseTypeDef, EnumDef, TypeCategory


class TestCreateVertex:
    def test_writes_header(self, vertex_store):
        vertex = vertex_store.create_vertex(EnumDef(name="Color", description="colors"))

        assert vertex.get(keys.VERTEX_TYPE) == keys.TYPE_VERTEX_LABEL
        assert vertex.get(keys.TYPE_NAME) == "Color"
        assert vertex.get(keys.TYPE_CATEGORY) == "ENUM"
        assert vertex.get(keys.TYPE_DESCRIPTION) == "colors"
        assert vertex.get(keys.TYPE_VERSION) == "1.0"
        assert vertex.get(keys.VERSION) == 1
        assert vertex.get(keys.CREATED_BY) == "tester"
        assert vertex.get(keys.MODIFIED_BY) == "tester"
        assert vertex.get(keys.CREATE_TIME) is not None
        assert vertex.get(keys.GUID)

    def test_keeps_given_guid(self, vertex_store):
        vertex = vertex_store.create_vertex(EnumDef(name="Color", guid="g-1"))

        assert vertex.get(keys.GUID) == "g-1"
        assert vertex.id != "type:g-1"

    def test_generated_guids_differ(self, vertex_store):
        a = vertex_store.create_vertex(EnumDef(name="A"))
        b = vertex_store.create_vertex(EnumDef(name="B"))

        assert a.get(keys.GUID) != b.get(keys.GUID)

    def test_duplicate_name_rejected(self, vertex_store):
        vertex_store.create_vertex(EnumDef(name="Color"))

        with pytest.raises(TypeAlreadyExistsError):
            vertex_store.create_vertex(
                BaseTypeDef(name="Color", category=TypeCategory.STRUCT)
            )
        assert vertex_store.graph.number_of_nodes() == 1

    def test_duplicate_guid_rejected(self, vertex_store):
        first = vertex_store.create_vertex(EnumDef(name="A", guid="g-1"))

        with pytest.raises(TypeAlreadyExistsError) as exc_info:
            vertex_store.create_vertex(EnumDef(name="B", guid="g-1"))

        assert exc_info.value.guid == "g-1"
        assert "guid g-1" in str(exc_info.value)
        assert vertex_store.graph.number_of_nodes() == 1
        assert first.get(keys.TYPE_NAME) == "A"
        assert vertex_store.find_vertex_by_name("B") is None


class TestLookups:
    @pytest.fixture
    def populated(self, vertex_store):
        vertex_store.create_vertex(EnumDef(name="Color", guid="g-color"))
        vertex_store.create_vertex(
            BaseTypeDef(name="Address", guid="g-address", category=TypeCategory.STRUCT)
        )
        return vertex_store

    def test_find_by_name_any_category(self, populated):
        assert populated.find_vertex_by_name("Address") is not None
        assert populated.find_vertex_by_name("Missing") is None

    def test_find_by_name_and_category(self, populated):
        assert populated.find_vertex_by_name_and_category("Color", TypeCategory.ENUM)
        assert (
            populated.find_vertex_by_name_and_category("Address", TypeCategory.ENUM)
            is None
        )

    def test_find_by_guid_and_category(self, populated):
        vertex = populated.find_vertex_by_guid_and_category("g-color", TypeCategory.ENUM)
        assert vertex.get(keys.TYPE_NAME) == "Color"
        assert (
            populated.find_vertex_by_guid_and_category("g-address", TypeCategory.ENUM)
            is None
        )

    def test_find_by_category(self, populated):
        names = [
            v.get(keys.TYPE_NAME)
            for v in populated.find_vertices_by_category(TypeCategory.ENUM)
        ]
        assert names == ["Color"]

    def test_non_type_nodes_ignored(self, populated):
        populated.graph.add_node("other", **{keys.TYPE_NAME.name: "Color2"})

        assert populated.find_vertex_by_name("Color2") is None

    def test_is_type_vertex(self, populated):
        vertex = populated.find_vertex_by_name("Address")

        assert populated.is_type_vertex(vertex, TypeCategory.STRUCT)
        assert not populated.is_type_vertex(vertex, TypeCategory.ENUM)


class TestDeleteVertex:
    def test_delete(self, vertex_store):
        vertex = vertex_store.create_vertex(EnumDef(name="Color"))
        vertex_store.delete_vertex(vertex)

        assert vertex_store.find_vertex_by_name("Color") is None
        assert vertex_store.graph.number_of_nodes() == 0

    def test_delete_while_iterating(self, vertex_store):
        for name in ("A", "B", "C"):
            vertex_store.create_vertex(EnumDef(name=name))

        for vertex in vertex_store.find_vertices_by_category(TypeCategory.ENUM):
            vertex_store.delete_vertex(vertex)

        assert vertex_store.graph.number_of_nodes() == 0


class TestPopulateHeaderFields:
    def test_round_trip(self, vertex_store):
        created = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        vertex = vertex_store.create_vertex(
            EnumDef(
                name="Color",
                guid="g-1",
                description="colors",
                type_version="2.0",
                created_by="alice",
                create_time=created,
            )
        )

        enum_def = EnumDef(name="")
        vertex_store.populate_header_fields(vertex, enum_def)

        assert enum_def.name == "Color"
        assert enum_def.guid == "g-1"
        assert enum_def.category == TypeCategory.ENUM
        assert enum_def.description == "colors"
        assert enum_def.type_version == "2.0"
        assert enum_def.version == 1
        assert enum_def.created_by == "alice"
        assert enum_def.updated_by == "alice"
        assert enum_def.create_time == created


class TestPersistence:
    def test_save_and_load(self, vertex_store, tmp_path):
        vertex = vertex_store.create_vertex(EnumDef(name="Color", guid="g-1"))
        vertex.set(PropertyKey("__type.Color", list), ["RED"])

        path = tmp_path / "graph.json"
        vertex_store.save(path)
        loaded = GraphTypeVertexStore.load(path)

        found = loaded.find_vertex_by_guid_and_category("g-1", TypeCategory.ENUM)
        assert found.properties == vertex.properties

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DefinitionLoadError):
            GraphTypeVertexStore.load(tmp_path / "missing.json")

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text('{"nodes": []}')

        with pytest.raises(DefinitionLoadError):
            GraphTypeVertexStore.load(path)


class TestConcurrency:
    def test_lookups_during_creates(self, vertex_store):
        def create(index):
            vertex_store.create_vertex(EnumDef(name=f"E{index}"))

        def scan(_):
            return len(list(vertex_store.find_vertices_by_category(TypeCategory.ENUM)))

        with ThreadPoolExecutor(max_workers=8) as pool:
            creates = [pool.submit(create, i) for i in range(200)]
            scans = [pool.submit(scan, i) for i in range(200)]
            for future in creates + scans:
                future.result()

        assert vertex_store.graph.number_of_nodes() == 200

    def test_same_name_created_once(self, vertex_store):
        def create(_):
            try:
                vertex_store.create_vertex(EnumDef(name="Color"))
                return True
            except TypeAlreadyExistsError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(create, range(20)))

        assert results.count(True) == 1
        assert vertex_store.graph.number_of_nodes() == 1
