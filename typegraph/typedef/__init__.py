"""Type-definition models, errors and definition loading."""

from .errors import (
    BatchOperationError,
    DefinitionLoadError,
    DefinitionValidationError,
    ErrorCode,
    PropertyTypeError,
    TypeAlreadyExistsError,
    TypeDefStoreError,
    TypeNotFoundError,
)
from .models import BaseTypeDef, ElementDef, EnumDef, EnumDefs, TypeCategory
from .loader import (
    enum_defs_from_json,
    load_yaml,
    parse_type_defs,
    parse_type_defs_from_string,
)

__all__ = [
    "BatchOperationError",
    "DefinitionLoadError",
    "DefinitionValidationError",
    "ErrorCode",
    "PropertyTypeError",
    "TypeAlreadyExistsError",
    "TypeDefStoreError",
    "TypeNotFoundError",
    "BaseTypeDef",
    "ElementDef",
    "EnumDef",
    "EnumDefs",
    "TypeCategory",
    "enum_defs_from_json",
    "load_yaml",
    "parse_type_defs",
    "parse_type_defs_from_string",
]
