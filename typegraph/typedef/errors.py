"""Type-definition exceptions."""

from enum import Enum


class ErrorCode(str, Enum):
    """Reason attached to a TypeDefStoreError."""

    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    INVALID_PROPERTY = "invalid_property"
    BATCH_FAILED = "batch_failed"


class TypeDefStoreError(Exception):
    """Raised when a type-definition store operation cannot be completed."""

    def __init__(self, message: str, error_code: ErrorCode | None = None):
        self.error_code = error_code
        super().__init__(message)


class TypeAlreadyExistsError(TypeDefStoreError):
    """Raised when a type with the same name or guid is already registered."""

    def __init__(self, name: str, guid: str | None = None):
        self.name = name
        self.guid = guid
        if guid is None:
            message = f"{name}: type already exists"
        else:
            message = f"{name}: guid {guid} is already in use"
        super().__init__(message, ErrorCode.ALREADY_EXISTS)


class TypeNotFoundError(TypeDefStoreError):
    """Raised when no type vertex matches a name or guid."""

    def __init__(self, kind: str, identifier: str, lookup: str = "name"):
        self.identifier = identifier
        self.lookup = lookup
        super().__init__(
            f"no {kind} exists with {lookup} {identifier}", ErrorCode.NOT_FOUND
        )


class PropertyTypeError(TypeDefStoreError):
    """Raised when a vertex property holds a value of an unexpected type."""

    def __init__(self, key: str, expected: type, actual: object):
        self.key = key
        super().__init__(
            f"property {key}: expected {expected.__name__}, "
            f"got {type(actual).__name__}",
            ErrorCode.INVALID_PROPERTY,
        )


class BatchOperationError(TypeDefStoreError):
    """Raised by BatchResult.raise_for_failures when any item failed."""

    def __init__(self, message: str, failures: list | None = None):
        self.failures = failures or []
        super().__init__(message, ErrorCode.BATCH_FAILED)


class DefinitionLoadError(Exception):
    """Raised when a definition file or payload cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class DefinitionValidationError(Exception):
    """Raised when type definitions fail validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
