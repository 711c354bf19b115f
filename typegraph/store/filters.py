"""Search filters for type definitions."""

from typing import Callable

from pydantic import BaseModel, Field

from ..typedef.models import BaseTypeDef

PARAM_NAME = "name"
PARAM_GUID = "guid"
PARAM_TYPE = "type"
PARAM_NOT_NAME = "notName"

TypeDefPredicate = Callable[[BaseTypeDef], bool]


class SearchFilter(BaseModel):
    """Search criteria given as request-style parameters.

    Each parameter maps to one value or a list of values.
    """

    params: dict[str, str | list[str]] = Field(default_factory=dict)

    def get_values(self, name: str) -> list[str]:
        """Get all values of a parameter."""
        value = self.params.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    def get_value(self, name: str) -> str | None:
        """Get the first value of a parameter."""
        values = self.get_values(name)
        return values[0] if values else None


def predicate_from_filter(search_filter: SearchFilter | None) -> TypeDefPredicate:
    """Build a predicate matching type definitions against a filter.

    All given parameters must match. An empty or missing filter matches
    everything.
    """
    predicates: list[TypeDefPredicate] = []

    if search_filter is not None:
        name = search_filter.get_value(PARAM_NAME)
        if name:
            predicates.append(lambda td: td.name == name)

        guid = search_filter.get_value(PARAM_GUID)
        if guid:
            predicates.append(lambda td: td.guid == guid)

        type_name = search_filter.get_value(PARAM_TYPE)
        if type_name:
            category = type_name.upper()
            predicates.append(lambda td: td.category.value == category)

        excluded = set(search_filter.get_values(PARAM_NOT_NAME))
        if excluded:
            predicates.append(lambda td: td.name not in excluded)

    def _matches(type_def: BaseTypeDef) -> bool:
        return all(predicate(type_def) for predicate in predicates)

    return _matches
