"""Vertex storage for type definitions."""

import json
import threading
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Protocol

import networkx as nx

from ..typedef.errors import DefinitionLoadError, TypeAlreadyExistsError
from ..typedef.models import BaseTypeDef, TypeCategory
from . import property_keys as keys
from .vertex import Vertex


class TypeVertexStore(Protocol):
    """Operations a type-definition store needs from the vertex storage."""

    def find_vertex_by_name(self, name: str) -> Vertex | None: ...

    def find_vertex_by_name_and_category(
        self, name: str, category: TypeCategory
    ) -> Vertex | None: ...

    def find_vertex_by_guid_and_category(
        self, guid: str, category: TypeCategory
    ) -> Vertex | None: ...

    def find_vertices_by_category(self, category: TypeCategory) -> Iterator[Vertex]: ...

    def create_vertex(self, type_def: BaseTypeDef) -> Vertex: ...

    def delete_vertex(self, vertex: Vertex) -> None: ...

    def is_type_vertex(self, vertex: Vertex, category: TypeCategory) -> bool: ...

    def populate_header_fields(self, vertex: Vertex, type_def: BaseTypeDef) -> None: ...

    def property_key(
        self, type_name: str, member: str | None = None, suffix: str | None = None
    ) -> str: ...


def _now_millis() -> int:
    return int(time.time() * 1000)


def _from_millis(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _to_millis(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


class GraphTypeVertexStore:
    """Type vertex storage backed by a networkx DiGraph.

    Each type definition is one node whose attributes are the vertex
    properties. Vertex creation and deletion are serialized so that the
    name check and the insert happen atomically.
    """

    def __init__(self, graph: nx.DiGraph | None = None, created_by: str = "typegraph"):
        """Initialize the store.

        Args:
            graph: Existing graph to use; a new empty one by default.
            created_by: User recorded on vertices whose definition names none.
        """
        self._graph = graph if graph is not None else nx.DiGraph()
        self._created_by = created_by
        self._lock = threading.RLock()

    @property
    def graph(self) -> nx.DiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _type_vertices(self) -> list[Vertex]:
        # Snapshot so callers may delete while iterating
        with self._lock:
            return [
                Vertex(self._graph, node_id)
                for node_id, data in self._graph.nodes(data=True)
                if data.get(keys.VERTEX_TYPE.name) == keys.TYPE_VERTEX_LABEL
            ]

    def find_vertex_by_name(self, name: str) -> Vertex | None:
        """Find a type vertex by name, whatever its category."""
        for vertex in self._type_vertices():
            if vertex.get(keys.TYPE_NAME) == name:
                return vertex
        return None

    def find_vertex_by_name_and_category(
        self, name: str, category: TypeCategory
    ) -> Vertex | None:
        """Find a type vertex by name within one category."""
        vertex = self.find_vertex_by_name(name)
        if vertex is not None and self.is_type_vertex(vertex, category):
            return vertex
        return None

    def find_vertex_by_guid_and_category(
        self, guid: str, category: TypeCategory
    ) -> Vertex | None:
        """Find a type vertex by guid within one category."""
        vertex = self._find_vertex_by_guid(guid)
        if vertex is not None and self.is_type_vertex(vertex, category):
            return vertex
        return None

    def _find_vertex_by_guid(self, guid: str) -> Vertex | None:
        for vertex in self._type_vertices():
            if vertex.get(keys.GUID) == guid:
                return vertex
        return None

    def find_vertices_by_category(self, category: TypeCategory) -> Iterator[Vertex]:
        """Iterate over all type vertices of a category.

        Yields:
            Vertices in insertion order.
        """
        for vertex in self._type_vertices():
            if vertex.get(keys.TYPE_CATEGORY) == category.value:
                yield vertex

    def is_type_vertex(self, vertex: Vertex, category: TypeCategory) -> bool:
        """Check that a vertex is a type vertex of the given category."""
        return (
            vertex.get(keys.VERTEX_TYPE) == keys.TYPE_VERTEX_LABEL
            and vertex.get(keys.TYPE_CATEGORY) == category.value
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def create_vertex(self, type_def: BaseTypeDef) -> Vertex:
        """Allocate a vertex and write the type-definition header onto it.

        Args:
            type_def: The type definition being registered.

        Returns:
            The new vertex.

        Raises:
            TypeAlreadyExistsError: If a type with the same name or guid exists.
        """
        with self._lock:
            if self.find_vertex_by_name(type_def.name) is not None:
                raise TypeAlreadyExistsError(type_def.name)

            if type_def.guid and self._find_vertex_by_guid(type_def.guid) is not None:
                raise TypeAlreadyExistsError(type_def.name, type_def.guid)

            guid = type_def.guid or str(uuid.uuid4())
            now = _now_millis()
            created_by = type_def.created_by or self._created_by

            # Node ids are never derived from caller input
            vertex_id = f"type:{uuid.uuid4()}"
            self._graph.add_node(vertex_id)
            vertex = Vertex(self._graph, vertex_id)

            vertex.set(keys.VERTEX_TYPE, keys.TYPE_VERTEX_LABEL)
            vertex.set(keys.TYPE_CATEGORY, type_def.category.value)
            vertex.set(keys.TYPE_NAME, type_def.name)
            vertex.set(keys.TYPE_DESCRIPTION, type_def.description)
            vertex.set(keys.TYPE_VERSION, type_def.type_version or "1.0")
            vertex.set(keys.GUID, guid)
            vertex.set(keys.VERSION, type_def.version or 1)
            vertex.set(keys.CREATED_BY, created_by)
            vertex.set(keys.MODIFIED_BY, type_def.updated_by or created_by)
            vertex.set(keys.CREATE_TIME, _to_millis(type_def.create_time) or now)
            vertex.set(keys.UPDATE_TIME, _to_millis(type_def.update_time) or now)

            return vertex

    def delete_vertex(self, vertex: Vertex) -> None:
        """Remove a vertex with all of its properties and edges."""
        with self._lock:
            if self._graph.has_node(vertex.id):
                self._graph.remove_node(vertex.id)

    # -------------------------------------------------------------------------
    # Header mapping and keys
    # -------------------------------------------------------------------------

    def populate_header_fields(self, vertex: Vertex, type_def: BaseTypeDef) -> None:
        """Copy the header properties of a vertex onto a type definition."""
        type_def.category = TypeCategory(vertex.get(keys.TYPE_CATEGORY))
        type_def.name = vertex.get(keys.TYPE_NAME)
        type_def.guid = vertex.get(keys.GUID)
        type_def.description = vertex.get(keys.TYPE_DESCRIPTION)
        type_def.type_version = vertex.get(keys.TYPE_VERSION)
        type_def.version = vertex.get(keys.VERSION)
        type_def.created_by = vertex.get(keys.CREATED_BY)
        type_def.updated_by = vertex.get(keys.MODIFIED_BY)
        type_def.create_time = _from_millis(vertex.get(keys.CREATE_TIME))
        type_def.update_time = _from_millis(vertex.get(keys.UPDATE_TIME))

    def property_key(
        self, type_name: str, member: str | None = None, suffix: str | None = None
    ) -> str:
        """Derive a property key within a type's namespace."""
        return keys.derive_property_key(type_name, member, suffix)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, path: str | Path) -> None:
        """Write all vertices and their properties to a JSON file."""
        with self._lock:
            data = {
                "vertices": [
                    {"id": node_id, "properties": dict(attrs)}
                    for node_id, attrs in self._graph.nodes(data=True)
                ]
            }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, path: str | Path, created_by: str = "typegraph") -> "GraphTypeVertexStore":
        """Load a store previously written by save().

        Raises:
            DefinitionLoadError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DefinitionLoadError(f"Invalid graph file: {e}", str(path)) from e
        except OSError as e:
            raise DefinitionLoadError(f"Cannot read file: {e}", str(path)) from e

        if not isinstance(data, dict) or not isinstance(data.get("vertices"), list):
            raise DefinitionLoadError("Graph file has no vertex list", str(path))

        graph = nx.DiGraph()
        for entry in data["vertices"]:
            graph.add_node(entry["id"], **entry.get("properties", {}))

        return cls(graph, created_by=created_by)
