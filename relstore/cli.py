"""Command-line interface for relstore."""

import logging
import sys

import click

from .actions.errors import ActionValidationError
from .actions.models import parse_actions
from .engine import Engine
from .output.formatter import format_state, format_tree, format_validation_result
from .schema.errors import SchemaLoadError, SchemaValidationError
from .schema.loader import load_yaml, parse_schema
from .state.models import State
from .state.shapes import RemovalShape, ShapeError
from .validators.runner import validate_schema_file


def _fail(prefix: str, e: Exception) -> None:
    """Report a load or validation error and exit with code 2."""
    click.echo(f"{prefix}: {e}", err=True)
    for err in getattr(e, "errors", []):
        click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
    sys.exit(2)


def _load_engine(schema_file: str) -> Engine:
    try:
        return Engine(parse_schema(schema_file))
    except SchemaLoadError as e:
        _fail("Error loading file", e)
    except SchemaValidationError as e:
        _fail("Schema validation error", e)


def _load_state(state_file: str | None) -> State:
    if state_file is None:
        return State()
    try:
        return State.from_dict(load_yaml(state_file, "state"))
    except SchemaLoadError as e:
        _fail("Error loading file", e)


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """relstore: an in-memory normalized relational store."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(schema_file: str, output_format: str, strict: bool):
    """Validate a schema file.

    SCHEMA_FILE is the path to a YAML schema file.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or schema error
    """
    try:
        result = validate_schema_file(schema_file)
    except SchemaLoadError as e:
        _fail("Error loading file", e)
    except SchemaValidationError as e:
        _fail("Schema validation error", e)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.argument("state_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def check(schema_file: str, state_file: str, output_format: str):
    """Check a state file against the store invariants.

    Exit codes:
      0 - The state is consistent
      1 - Invariant violations found
      2 - File or schema error
    """
    engine = _load_engine(schema_file)
    state = _load_state(state_file)

    result = engine.check(state)
    click.echo(format_validation_result(result, output_format))  # type: ignore
    sys.exit(1 if result.has_errors else 0)


@main.command("apply")
@click.argument("schema_file", type=click.Path(exists=True))
@click.argument("actions_file", type=click.Path(exists=True))
@click.option(
    "--state",
    "state_file",
    type=click.Path(exists=True),
    default=None,
    help="Initial state file (defaults to the empty state)",
)
@click.option("--ops", "show_ops", is_flag=True, default=False, help="Also print the op log")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format",
)
def apply_cmd(
    schema_file: str,
    actions_file: str,
    state_file: str | None,
    show_ops: bool,
    output_format: str,
):
    """Apply the actions in ACTIONS_FILE and print the resulting state.

    ACTIONS_FILE is a YAML or JSON mapping with an ``actions`` list.

    Exit codes:
      0 - Success
      2 - File, schema or action error
    """
    engine = _load_engine(schema_file)
    state = _load_state(state_file)

    try:
        actions = parse_actions(load_yaml(actions_file, "actions").get("actions") or [])
    except SchemaLoadError as e:
        _fail("Error loading file", e)
    except ActionValidationError as e:
        _fail("Action validation error", e)

    ops = []
    for action in actions:
        derivation = engine.derive(state, action)
        state = derivation.state
        ops.extend(derivation.ops)

    click.echo(format_state(state, ops if show_ops else None, output_format))  # type: ignore
    sys.exit(0)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.argument("state_file", type=click.Path(exists=True))
@click.argument("entity")
@click.argument("resource_id")
@click.option(
    "--shape",
    "shape_file",
    type=click.Path(exists=True),
    default=None,
    help="Removal shape file; without it only the root is listed",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def tree(
    schema_file: str,
    state_file: str,
    entity: str,
    resource_id: str,
    shape_file: str | None,
    output_format: str,
):
    """List the resources a cascading removal would take, in order."""
    engine = _load_engine(schema_file)
    state = _load_state(state_file)

    shape = None
    if shape_file is not None:
        try:
            shape = RemovalShape.from_dict(load_yaml(shape_file, "shape"))
        except SchemaLoadError as e:
            _fail("Error loading file", e)
        except ShapeError as e:
            _fail("Invalid removal shape", e)

    nodes = engine.get_resource_tree(state, entity, resource_id, shape)
    click.echo(format_tree(nodes, output_format))  # type: ignore
    sys.exit(0)


if __name__ == "__main__":
    main()
