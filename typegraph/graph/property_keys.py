"""Property keys used on type vertices."""

from .vertex import PropertyKey

# Value of the __type property on every type-definition vertex
TYPE_VERTEX_LABEL = "typeSystem"

PROPERTY_PREFIX = "__type."

VERTEX_TYPE = PropertyKey("__type", str)
TYPE_NAME = PropertyKey("__type_name", str)
GUID = PropertyKey("__guid", str)
TYPE_CATEGORY = PropertyKey("__type_category", str)
TYPE_DESCRIPTION = PropertyKey("__type_description", str)
TYPE_VERSION = PropertyKey("__type_version", str)
VERSION = PropertyKey("__version", int)
CREATED_BY = PropertyKey("__created_by", str)
MODIFIED_BY = PropertyKey("__modified_by", str)
CREATE_TIME = PropertyKey("__timestamp", int)  # epoch millis
UPDATE_TIME = PropertyKey("__modificationTimestamp", int)  # epoch millis


def derive_property_key(
    type_name: str, member: str | None = None, suffix: str | None = None
) -> str:
    """Derive the property key for a type, one of its members, or a qualifier.

    Args:
        type_name: The owning type name.
        member: Optional member name (e.g. an enum value).
        suffix: Optional qualifier appended to the key (e.g. "description").

    Returns:
        ``__type.<type_name>[.<member>][.<suffix>]``
    """
    key = PROPERTY_PREFIX + type_name
    if member is not None:
        key = f"{key}.{member}"
    if suffix is not None:
        key = f"{key}.{suffix}"
    return key
