"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from typegraph.graph.type_vertex_store import GraphTypeVertexStore
from typegraph.store.enum_def_store import EnumDefStore
from typegraph.typedef.loader import parse_type_defs_from_string
from typegraph.typedef.models import ElementDef, EnumDef


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def order_status() -> EnumDef:
    """Return the OrderStatus enum with one blank description."""
    return EnumDef(
        name="OrderStatus",
        description="Lifecycle of a customer order",
        element_defs=[
            ElementDef(value="NEW", ordinal=0, description="just placed"),
            ElementDef(value="SHIPPED", ordinal=1, description=""),
            ElementDef(value="DELIVERED", ordinal=2, description="final"),
        ],
    )


@pytest.fixture
def enums_yaml() -> str:
    """Return a YAML document with two enums."""
    return """
enumDefs:
  - name: Color
    elementDefs:
      - value: RED
        ordinal: 3
        description: warm
      - value: GREEN
        ordinal: 1
        description: natural
      - value: BLUE
        ordinal: 2
        description: cool

  - name: Size
    elementDefs:
      - SMALL
      - MEDIUM
      - LARGE
"""


@pytest.fixture
def enum_defs(enums_yaml) -> list[EnumDef]:
    """Return the parsed enums."""
    return parse_type_defs_from_string(enums_yaml)


@pytest.fixture
def vertex_store() -> GraphTypeVertexStore:
    """Return an empty graph-backed vertex store."""
    return GraphTypeVertexStore(created_by="tester")


@pytest.fixture
def store(vertex_store) -> EnumDefStore:
    """Return an enum store over the empty vertex store."""
    return EnumDefStore(vertex_store)
