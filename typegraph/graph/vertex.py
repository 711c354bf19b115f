"""Typed accessors over a vertex's property bag."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import networkx as nx

from ..typedef.errors import PropertyTypeError

T = TypeVar("T")


@dataclass(frozen=True)
class PropertyKey(Generic[T]):
    """A property name paired with the type of value stored under it."""

    name: str
    value_type: type[T]

    def __str__(self) -> str:
        return self.name


class Vertex:
    """A node of the type graph.

    Wraps a networkx node and exposes its attributes as typed properties.
    A vertex is addressed by its id; the property bag lives in the graph.
    """

    def __init__(self, graph: nx.DiGraph, vertex_id: str):
        self._graph = graph
        self._id = vertex_id

    @property
    def id(self) -> str:
        """Get the vertex id."""
        return self._id

    @property
    def properties(self) -> dict[str, Any]:
        """Get a copy of all properties on the vertex."""
        return dict(self._graph.nodes[self._id])

    def get(self, key: PropertyKey[T]) -> T | None:
        """Read a property.

        Args:
            key: The typed property key.

        Returns:
            The stored value, or None if the property is absent.

        Raises:
            PropertyTypeError: If the stored value has another type.
        """
        value = self._graph.nodes[self._id].get(key.name)
        if value is None:
            return None
        if not isinstance(value, key.value_type):
            raise PropertyTypeError(key.name, key.value_type, value)
        return value

    def set(self, key: PropertyKey[T], value: T | None) -> None:
        """Write a property. Writing None removes it."""
        attrs = self._graph.nodes[self._id]
        if value is None:
            attrs.pop(key.name, None)
            return
        if not isinstance(value, key.value_type):
            raise PropertyTypeError(key.name, key.value_type, value)
        attrs[key.name] = value

    def has(self, key: PropertyKey[Any]) -> bool:
        """Check whether a property is present."""
        return key.name in self._graph.nodes[self._id]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self._graph is other._graph and self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Vertex({self._id!r})"
