"""Document loading and schema parsing."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import ModelSchema


def load_yaml(path: str | Path, kind: str = "schema") -> dict:
    """Read a schema, state, action or shape document.

    JSON is a subset of YAML, so both formats go through the YAML parser.
    ``kind`` only names the document in error messages.

    Raises:
        SchemaLoadError: If the file is missing, unreadable, malformed, or
            its root is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        reason = "not found" if not path.exists() else "is not a regular file"
        raise SchemaLoadError(f"{kind.capitalize()} file {reason}: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML/JSON in {kind} file: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read {kind} file: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected a mapping at the root of the {kind} file, got {type(data).__name__}",
            str(path),
        )
    return data


def parse_schema(path: str | Path) -> ModelSchema:
    """Load and parse a YAML file into a ModelSchema.

    The file's root mapping is the schema itself:
    ``entity -> relation key -> {entity, cardinality, reciprocal}``.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    data = load_yaml(path)
    return parse_schema_data(data)


def parse_schema_from_string(yaml_string: str) -> ModelSchema:
    """Parse a YAML string into a ModelSchema.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a mapping at the schema root, got {type(data).__name__}")

    return parse_schema_data(data)


def parse_schema_data(data: dict) -> ModelSchema:
    """Parse a raw ``entity -> rel -> {...}`` mapping into a ModelSchema.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return ModelSchema.from_mapping(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"][1:]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e
