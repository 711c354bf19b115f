"""Output formatting for enum definitions and batch results."""

import json
from typing import Literal

from ..store.batch import BatchResult
from ..typedef.models import EnumDef


def format_enum_defs(
    enum_defs: list[EnumDef],
    format: Literal["text", "json"] = "text",
) -> str:
    """Format enum definitions for output.

    Args:
        enum_defs: The definitions to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return json.dumps(
            {"enumDefs": [_enum_def_data(enum_def) for enum_def in enum_defs]},
            indent=2,
        )
    if not enum_defs:
        return "(no enums)"
    return "\n\n".join(_format_enum_def_text(enum_def) for enum_def in enum_defs)


def format_batch_result(
    result: BatchResult,
    action: str,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the outcome of a batch operation.

    Args:
        result: The batch result.
        action: Past-tense verb for the summary ("created", "deleted", ...).
        format: Output format ("text" or "json").
    """
    if format == "json":
        data = {
            action: [_item_data(item) for item in result.succeeded],
            "failed": [
                {"item": _item_label(failure.item), "error": str(failure.error)}
                for failure in result.failed
            ],
        }
        return json.dumps(data, indent=2)

    lines: list[str] = []
    for item in result.succeeded:
        lines.append(f"  ✔ {_item_label(item)}")
    for failure in result.failed:
        lines.append(f"  ✘ {_item_label(failure.item)}: {failure.error}")

    lines.append("")
    if result.has_failures:
        lines.append(
            f"{len(result.succeeded)} {action}, {len(result.failed)} failed"
        )
    else:
        lines.append(f"{len(result.succeeded)} {action}")

    return "\n".join(lines)


def _format_enum_def_text(enum_def: EnumDef) -> str:
    """Format one enum as human-readable text."""
    lines = [f"{enum_def.name} ({enum_def.guid})"]
    if enum_def.description:
        lines.append(f"  {enum_def.description}")
    for element in enum_def.element_defs:
        line = f"  {element.ordinal}: {element.value}"
        if element.description:
            line += f" - {element.description}"
        lines.append(line)
    return "\n".join(lines)


def _enum_def_data(enum_def: EnumDef) -> dict:
    return enum_def.model_dump(mode="json", by_alias=True, exclude_none=True)


def _item_data(item: object) -> object:
    if isinstance(item, EnumDef):
        return _enum_def_data(item)
    return item


def _item_label(item: object) -> str:
    if isinstance(item, EnumDef):
        return item.name
    return str(item)
