"""Loading and parsing of enum definitions from YAML files and JSON payloads."""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import DefinitionLoadError, DefinitionValidationError
from .models import EnumDef


class TypeDefsDocument(BaseModel):
    """Root of a definition file or notification payload."""

    enum_defs: list[EnumDef] = Field(default_factory=list, alias="enumDefs")


def load_yaml(path: str | Path) -> dict:
    """Read a YAML file whose top level is a mapping.

    Definition files and settings files share this reader. An empty file
    reads as an empty mapping.

    Raises:
        DefinitionLoadError: If the file is missing, unreadable, not YAML,
            or holds something other than a mapping.
    """
    path = Path(path)

    if not path.is_file():
        reason = "is not a file" if path.exists() else "not found"
        raise DefinitionLoadError(f"{path}: {reason}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DefinitionLoadError(f"{path}: cannot be read: {e}", str(path)) from e

    return _yaml_mapping(text, str(path))


def parse_type_defs(path: str | Path) -> list[EnumDef]:
    """Load and parse a YAML definition file.

    Raises:
        DefinitionLoadError: If the file cannot be read or parsed.
        DefinitionValidationError: If the data fails validation.
    """
    data = load_yaml(path)
    return _parse_document(data)


def parse_type_defs_from_string(yaml_string: str) -> list[EnumDef]:
    """Parse a YAML string into enum definitions.

    Raises:
        DefinitionLoadError: If the YAML cannot be parsed.
        DefinitionValidationError: If the data fails validation.
    """
    return _parse_document(_yaml_mapping(yaml_string))


def _yaml_mapping(text: str, source: str | None = None) -> dict:
    label = source or "<string>"
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionLoadError(f"{label}: not valid YAML: {e}", source) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise DefinitionLoadError(
            f"{label}: top level must be a mapping, found {type(data).__name__}", source
        )

    return data


def enum_defs_from_json(raw: str) -> list[EnumDef]:
    """Deserialize a JSON type-definition notification.

    Args:
        raw: JSON text shaped like ``{"enumDefs": [...]}``.

    Returns:
        The enum definitions carried by the payload.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionLoadError(f"Expected JSON object at root, got {type(data).__name__}")

    return _parse_document(data)


def _parse_document(data: dict) -> list[EnumDef]:
    """Validate raw data and return its enum definitions.

    Raises:
        DefinitionValidationError: If the data fails validation.
    """
    try:
        return TypeDefsDocument.model_validate(data).enum_defs
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise DefinitionValidationError(
            f"Definition validation failed with {len(errors)} error(s)", errors
        ) from e
