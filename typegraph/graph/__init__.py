"""Graph layer storing type definitions as networkx vertices."""

from .vertex import PropertyKey, Vertex
from .property_keys import derive_property_key
from .type_vertex_store import GraphTypeVertexStore, TypeVertexStore

__all__ = [
    "PropertyKey",
    "Vertex",
    "derive_property_key",
    "GraphTypeVertexStore",
    "TypeVertexStore",
]
