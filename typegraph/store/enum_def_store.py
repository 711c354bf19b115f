"""Store for enum type definitions kept on graph vertices.

An enum is one type vertex. Its members are written as vertex properties:

- ``__type.<enum>.<value>`` holds the ordinal of each element,
- ``__type.<enum>.<value>.description`` holds its description, when non-blank,
- ``__type.<enum>`` holds the list of element values in their given order.

The value list is the only record of which elements exist and of their
order; reading never re-sorts by ordinal.
"""

import logging
from typing import Callable, Iterable

from ..graph.type_vertex_store import TypeVertexStore
from ..graph.vertex import PropertyKey, Vertex
from ..typedef.errors import TypeAlreadyExistsError, TypeDefStoreError, TypeNotFoundError
from ..typedef.models import ElementDef, EnumDef, EnumDefs, TypeCategory
from .batch import BatchPolicy, BatchResult, ItemT, ResultT
from .filters import SearchFilter, predicate_from_filter

logger = logging.getLogger(__name__)

DESCRIPTION_SUFFIX = "description"

_KIND = "enumdef"


class EnumDefStore:
    """CRUD and search for enum definitions.

    Holds no state besides the vertex store it was given; every call reads
    from and writes to that store directly.
    """

    def __init__(self, vertex_store: TypeVertexStore):
        """Initialize the store.

        Args:
            vertex_store: Storage for type vertices and their headers.
        """
        self._vertex_store = vertex_store

    @property
    def vertex_store(self) -> TypeVertexStore:
        return self._vertex_store

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create(self, enum_def: EnumDef) -> EnumDef:
        """Register a new enum definition.

        Args:
            enum_def: The definition to persist.

        Returns:
            The definition as read back from its vertex.

        Raises:
            TypeAlreadyExistsError: If any type already uses the name.
        """
        logger.debug("==> EnumDefStore.create(%s)", enum_def.name)

        if self._vertex_store.find_vertex_by_name(enum_def.name) is not None:
            raise TypeAlreadyExistsError(enum_def.name)

        vertex = self._vertex_store.create_vertex(enum_def)

        self._to_vertex(enum_def, vertex, enum_def.name)

        ret = self._to_enum_def(vertex)

        logger.debug("<== EnumDefStore.create(%s): %s", enum_def.name, ret)
        return ret

    def create_many(
        self,
        enum_defs: Iterable[EnumDef],
        policy: BatchPolicy = BatchPolicy.CONTINUE,
    ) -> BatchResult[EnumDef, EnumDef]:
        """Create each definition independently.

        Failing items are logged and reported in ``failed``; the others are
        created regardless.
        """
        return self._run_batch("create", enum_defs, self.create, policy)

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_all(self) -> list[EnumDef]:
        """Get every enum definition in the store."""
        logger.debug("==> EnumDefStore.get_all()")

        enum_defs = []
        for vertex in self._vertex_store.find_vertices_by_category(TypeCategory.ENUM):
            enum_def = self._to_enum_def(vertex)
            if enum_def is not None:
                enum_defs.append(enum_def)

        logger.debug("<== EnumDefStore.get_all(): %d enum(s)", len(enum_defs))
        return enum_defs

    def get_by_name(self, name: str) -> EnumDef:
        """Get an enum definition by name.

        Raises:
            TypeNotFoundError: If no enum has this name.
        """
        logger.debug("==> EnumDefStore.get_by_name(%s)", name)

        vertex = self._find_by_name(name)
        ret = self._to_enum_def(vertex)

        logger.debug("<== EnumDefStore.get_by_name(%s): %s", name, ret)
        return ret

    def get_by_guid(self, guid: str) -> EnumDef:
        """Get an enum definition by guid.

        Raises:
            TypeNotFoundError: If no enum has this guid.
        """
        logger.debug("==> EnumDefStore.get_by_guid(%s)", guid)

        vertex = self._find_by_guid(guid)
        ret = self._to_enum_def(vertex)

        logger.debug("<== EnumDefStore.get_by_guid(%s): %s", guid, ret)
        return ret

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_by_name(self, name: str, enum_def: EnumDef) -> EnumDef:
        """Rewrite the elements of the enum with the given name.

        Only element properties change; the vertex keeps its name and guid.

        Raises:
            TypeNotFoundError: If no enum has this name.
        """
        logger.debug("==> EnumDefStore.update_by_name(%s, %s)", name, enum_def)

        vertex = self._find_by_name(name)
        ret = self._update_vertex(vertex, enum_def)

        logger.debug("<== EnumDefStore.update_by_name(%s): %s", name, ret)
        return ret

    def update_by_guid(self, guid: str, enum_def: EnumDef) -> EnumDef:
        """Rewrite the elements of the enum with the given guid.

        Raises:
            TypeNotFoundError: If no enum has this guid.
        """
        logger.debug("==> EnumDefStore.update_by_guid(%s, %s)", guid, enum_def)

        vertex = self._find_by_guid(guid)
        ret = self._update_vertex(vertex, enum_def)

        logger.debug("<== EnumDefStore.update_by_guid(%s): %s", guid, ret)
        return ret

    def update_many(
        self,
        enum_defs: Iterable[EnumDef],
        policy: BatchPolicy = BatchPolicy.CONTINUE,
    ) -> BatchResult[EnumDef, EnumDef]:
        """Update each definition by its own name."""
        return self._run_batch(
            "update",
            enum_defs,
            lambda enum_def: self.update_by_name(enum_def.name, enum_def),
            policy,
        )

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_by_name(self, name: str) -> None:
        """Delete the enum with the given name.

        Raises:
            TypeNotFoundError: If no enum has this name.
        """
        logger.debug("==> EnumDefStore.delete_by_name(%s)", name)

        vertex = self._find_by_name(name)
        self._vertex_store.delete_vertex(vertex)

        logger.debug("<== EnumDefStore.delete_by_name(%s)", name)

    def delete_by_guid(self, guid: str) -> None:
        """Delete the enum with the given guid.

        Raises:
            TypeNotFoundError: If no enum has this guid.
        """
        logger.debug("==> EnumDefStore.delete_by_guid(%s)", guid)

        vertex = self._find_by_guid(guid)
        self._vertex_store.delete_vertex(vertex)

        logger.debug("<== EnumDefStore.delete_by_guid(%s)", guid)

    def delete_by_names(
        self,
        names: Iterable[str],
        policy: BatchPolicy = BatchPolicy.CONTINUE,
    ) -> BatchResult[str, str]:
        """Delete enums by name; ``succeeded`` lists the deleted names."""
        return self._run_batch("delete", names, self._deleting(self.delete_by_name), policy)

    def delete_by_guids(
        self,
        guids: Iterable[str],
        policy: BatchPolicy = BatchPolicy.CONTINUE,
    ) -> BatchResult[str, str]:
        """Delete enums by guid; ``succeeded`` lists the deleted guids."""
        return self._run_batch("delete", guids, self._deleting(self.delete_by_guid), policy)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self, search_filter: SearchFilter | Callable[[EnumDef], bool] | None = None
    ) -> EnumDefs:
        """Find the enums matching a filter.

        Every enum is read and the filter is applied in memory.

        Args:
            search_filter: A predicate over EnumDef, or a SearchFilter to
                build one from. None matches everything.

        Returns:
            The matching enums; empty when nothing matches.
        """
        logger.debug("==> EnumDefStore.search(%s)", search_filter)

        if callable(search_filter):
            predicate = search_filter
        else:
            predicate = predicate_from_filter(search_filter)

        enum_defs = [enum_def for enum_def in self.get_all() if predicate(enum_def)]
        ret = EnumDefs(enum_defs=enum_defs)

        logger.debug("<== EnumDefStore.search(%s): %d match(es)", search_filter, len(ret))
        return ret

    # -------------------------------------------------------------------------
    # Vertex lookup
    # -------------------------------------------------------------------------

    def _find_by_name(self, name: str) -> Vertex:
        vertex = self._vertex_store.find_vertex_by_name_and_category(name, TypeCategory.ENUM)
        if vertex is None:
            raise TypeNotFoundError(_KIND, name, "name")
        return vertex

    def _find_by_guid(self, guid: str) -> Vertex:
        vertex = self._vertex_store.find_vertex_by_guid_and_category(guid, TypeCategory.ENUM)
        if vertex is None:
            raise TypeNotFoundError(_KIND, guid, "guid")
        return vertex

    def _update_vertex(self, vertex: Vertex, enum_def: EnumDef) -> EnumDef:
        current = self._to_enum_def(vertex)
        # Keys stay in the namespace of the stored name so reads find them
        self._to_vertex(enum_def, vertex, current.name)
        return self._to_enum_def(vertex)

    # -------------------------------------------------------------------------
    # Mapping between EnumDef and vertex properties
    # -------------------------------------------------------------------------

    def _values_key(self, type_name: str) -> PropertyKey[list]:
        return PropertyKey(self._vertex_store.property_key(type_name), list)

    def _ordinal_key(self, type_name: str, value: str) -> PropertyKey[int]:
        return PropertyKey(self._vertex_store.property_key(type_name, value), int)

    def _description_key(self, type_name: str, value: str) -> PropertyKey[str]:
        return PropertyKey(
            self._vertex_store.property_key(type_name, value, DESCRIPTION_SUFFIX), str
        )

    def _to_vertex(self, enum_def: EnumDef, vertex: Vertex, type_name: str) -> None:
        values = []

        for element in enum_def.element_defs:
            vertex.set(self._ordinal_key(type_name, element.value), element.ordinal)

            # A blank description leaves any earlier one in place
            if element.description and element.description.strip():
                vertex.set(
                    self._description_key(type_name, element.value), element.description
                )

            values.append(element.value)

        vertex.set(self._values_key(type_name), values)

    def _to_enum_def(self, vertex: Vertex | None) -> EnumDef | None:
        if vertex is None or not self._vertex_store.is_type_vertex(vertex, TypeCategory.ENUM):
            return None

        enum_def = EnumDef(name="")
        self._vertex_store.populate_header_fields(vertex, enum_def)

        elements = []
        for value in vertex.get(self._values_key(enum_def.name)) or []:
            elements.append(
                ElementDef(
                    value=value,
                    ordinal=vertex.get(self._ordinal_key(enum_def.name, value)),
                    description=vertex.get(self._description_key(enum_def.name, value)),
                )
            )
        enum_def.element_defs = elements

        return enum_def

    # -------------------------------------------------------------------------
    # Batch helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _deleting(delete: Callable[[str], None]) -> Callable[[str], str]:
        def _delete(identifier: str) -> str:
            delete(identifier)
            return identifier

        return _delete

    def _run_batch(
        self,
        action: str,
        items: Iterable[ItemT],
        operation: Callable[[ItemT], ResultT],
        policy: BatchPolicy,
    ) -> BatchResult[ItemT, ResultT]:
        result: BatchResult[ItemT, ResultT] = BatchResult()

        for item in items:
            try:
                result.add_success(operation(item))
            except TypeDefStoreError as e:
                if policy == BatchPolicy.FAIL_FAST:
                    raise
                logger.error("Failed to %s %s: %s", action, _describe(item), e)
                result.add_failure(item, e)

        logger.debug(
            "<== EnumDefStore.%s batch: %d succeeded, %d failed",
            action,
            len(result.succeeded),
            len(result.failed),
        )
        return result


def _describe(item: object) -> str:
    if isinstance(item, EnumDef):
        return item.name
    return str(item)
