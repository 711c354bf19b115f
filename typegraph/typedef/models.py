"""Pydantic models for type definitions."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class TypeCategory(str, Enum):
    """Kinds of type definitions sharing the vertex storage."""

    PRIMITIVE = "PRIMITIVE"
    OBJECT_ID_TYPE = "OBJECT_ID_TYPE"
    ENUM = "ENUM"
    STRUCT = "STRUCT"
    CLASSIFICATION = "CLASSIFICATION"
    ENTITY = "ENTITY"
    ARRAY = "ARRAY"
    MAP = "MAP"
    RELATIONSHIP = "RELATIONSHIP"


class BaseTypeDef(BaseModel):
    """Header fields common to every type definition."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: TypeCategory
    name: str
    guid: str | None = None
    description: str | None = None
    type_version: str | None = None
    version: int | None = None
    created_by: str | None = None
    updated_by: str | None = None
    create_time: datetime | None = None
    update_time: datetime | None = None


class ElementDef(BaseModel):
    """One member of an enumeration."""

    value: str
    ordinal: int | None = None
    description: str | None = None


class EnumDef(BaseTypeDef):
    """An enumeration type definition.

    Element order is the storage and display order. It is kept as given and
    never re-sorted by ordinal.
    """

    category: TypeCategory = TypeCategory.ENUM
    element_defs: list[ElementDef] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_elements(cls, data: dict) -> dict:
        """Expand bare-string elements into value/ordinal pairs."""
        if not isinstance(data, dict):
            return data

        key = "elementDefs" if "elementDefs" in data else "element_defs"
        elements = data.get(key)
        if not elements:
            return data

        normalized = []
        for index, element in enumerate(elements):
            if isinstance(element, str):
                normalized.append({"value": element, "ordinal": index})
            else:
                normalized.append(element)

        return {**data, key: normalized}

    @field_validator("category")
    @classmethod
    def check_category(cls, category: TypeCategory) -> TypeCategory:
        """Reject any category other than ENUM."""
        if category != TypeCategory.ENUM:
            raise ValueError(f"enum definitions must have category ENUM, got {category.value}")
        return category

    def get_element(self, value: str) -> ElementDef | None:
        """Get the first element with the given value."""
        for element in self.element_defs:
            if element.value == value:
                return element
        return None

    def has_element(self, value: str) -> bool:
        """Check whether an element with the given value exists."""
        return self.get_element(value) is not None


class EnumDefs(BaseModel):
    """Result list returned by enum searches."""

    enum_defs: list[EnumDef] = Field(default_factory=list, alias="enumDefs")

    model_config = ConfigDict(populate_by_name=True)

    def __len__(self) -> int:
        return len(self.enum_defs)
