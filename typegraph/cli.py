"""Command-line interface for typegraph."""

import logging
import sys
from pathlib import Path

import click

from .config import Settings, load_settings
from .graph.type_vertex_store import GraphTypeVertexStore
from .output.formatter import format_batch_result, format_enum_defs
from .store.enum_def_store import EnumDefStore
from .store.filters import PARAM_GUID, PARAM_NAME, PARAM_NOT_NAME, SearchFilter
from .typedef.errors import (
    DefinitionLoadError,
    DefinitionValidationError,
    TypeNotFoundError,
)
from .typedef.loader import parse_type_defs

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)


def _exit_on_definition_error(e: Exception) -> None:
    """Report a definition or settings error and exit with code 2."""
    if isinstance(e, DefinitionValidationError):
        click.echo(f"Definition validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
    else:
        click.echo(f"Error loading file: {e}", err=True)
    sys.exit(2)


def _open_store(settings: Settings) -> tuple[GraphTypeVertexStore, EnumDefStore]:
    """Open the graph file, or start an empty graph if it does not exist."""
    path = Path(settings.store.graph_path)
    try:
        if path.exists():
            vertex_store = GraphTypeVertexStore.load(path, created_by=settings.store.created_by)
        else:
            vertex_store = GraphTypeVertexStore(created_by=settings.store.created_by)
    except DefinitionLoadError as e:
        _exit_on_definition_error(e)
    return vertex_store, EnumDefStore(vertex_store)


@click.group()
@click.version_option()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    envvar="TYPEGRAPH_CONFIG",
    help="Settings file (defaults to TYPEGRAPH_CONFIG env var)",
)
@click.option(
    "--graph",
    "graph_file",
    type=click.Path(dir_okay=False),
    envvar="TYPEGRAPH_GRAPH",
    help="Type graph file (overrides store.graph_path)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (overrides log_level)",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None, graph_file: str | None, log_level: str | None):
    """typegraph: enum type definitions stored on a property graph."""
    try:
        settings = load_settings(config_file)
    except (DefinitionLoadError, DefinitionValidationError) as e:
        _exit_on_definition_error(e)

    if graph_file:
        settings.store.graph_path = graph_file

    logging.basicConfig(level=(log_level or settings.log_level).upper(), format=LOG_FORMAT)

    ctx.obj = settings


@main.command()
@click.argument("defs_file", type=click.Path(exists=True))
@format_option
@click.pass_obj
def create(settings: Settings, defs_file: str, output_format: str):
    """Create the enums defined in DEFS_FILE.

    Exit codes:
      0 - All enums created
      1 - Some enums could not be created
      2 - File or definition error
    """
    try:
        enum_defs = parse_type_defs(defs_file)
    except (DefinitionLoadError, DefinitionValidationError) as e:
        _exit_on_definition_error(e)

    vertex_store, store = _open_store(settings)
    result = store.create_many(enum_defs)
    vertex_store.save(settings.store.graph_path)

    click.echo(format_batch_result(result, "created", output_format))  # type: ignore
    sys.exit(1 if result.has_failures else 0)


@main.command()
@click.argument("defs_file", type=click.Path(exists=True))
@format_option
@click.pass_obj
def update(settings: Settings, defs_file: str, output_format: str):
    """Update the enums defined in DEFS_FILE, matched by name.

    Exit codes:
      0 - All enums updated
      1 - Some enums could not be updated
      2 - File or definition error
    """
    try:
        enum_defs = parse_type_defs(defs_file)
    except (DefinitionLoadError, DefinitionValidationError) as e:
        _exit_on_definition_error(e)

    vertex_store, store = _open_store(settings)
    result = store.update_many(enum_defs)
    vertex_store.save(settings.store.graph_path)

    click.echo(format_batch_result(result, "updated", output_format))  # type: ignore
    sys.exit(1 if result.has_failures else 0)


@main.command()
@click.argument("identifier")
@click.option("--guid", "by_guid", is_flag=True, default=False, help="Look up by guid")
@format_option
@click.pass_obj
def get(settings: Settings, identifier: str, by_guid: bool, output_format: str):
    """Show the enum named IDENTIFIER (or with guid IDENTIFIER)."""
    _, store = _open_store(settings)
    try:
        enum_def = store.get_by_guid(identifier) if by_guid else store.get_by_name(identifier)
    except TypeNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(format_enum_defs([enum_def], output_format))  # type: ignore


@main.command("list")
@format_option
@click.pass_obj
def list_cmd(settings: Settings, output_format: str):
    """List all enums."""
    _, store = _open_store(settings)
    click.echo(format_enum_defs(store.get_all(), output_format))  # type: ignore


@main.command()
@click.argument("identifiers", nargs=-1, required=True)
@click.option("--guid", "by_guid", is_flag=True, default=False, help="Identifiers are guids")
@format_option
@click.pass_obj
def delete(settings: Settings, identifiers: tuple[str, ...], by_guid: bool, output_format: str):
    """Delete the enums named by IDENTIFIERS.

    Exit codes:
      0 - All enums deleted
      1 - Some enums could not be deleted
    """
    vertex_store, store = _open_store(settings)
    if by_guid:
        result = store.delete_by_guids(identifiers)
    else:
        result = store.delete_by_names(identifiers)
    vertex_store.save(settings.store.graph_path)

    click.echo(format_batch_result(result, "deleted", output_format))  # type: ignore
    sys.exit(1 if result.has_failures else 0)


@main.command()
@click.option("--name", default=None, help="Exact enum name")
@click.option("--guid", default=None, help="Exact enum guid")
@click.option("--not-name", multiple=True, help="Enum name to exclude (repeatable)")
@format_option
@click.pass_obj
def search(
    settings: Settings,
    name: str | None,
    guid: str | None,
    not_name: tuple[str, ...],
    output_format: str,
):
    """Search enums. With no options every enum matches."""
    params: dict[str, str | list[str]] = {}
    if name:
        params[PARAM_NAME] = name
    if guid:
        params[PARAM_GUID] = guid
    if not_name:
        params[PARAM_NOT_NAME] = list(not_name)

    _, store = _open_store(settings)
    result = store.search(SearchFilter(params=params))
    click.echo(format_enum_defs(result.enum_defs, output_format))  # type: ignore


if __name__ == "__main__":
    main()
