"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..graph.builder import build_graph
from ..graph.schema_graph import SchemaGraph
from ..schema.loader import parse_schema
from ..schema.models import ModelSchema
from .base import ValidationResult
from .orphan_detector import check_isolated_entities
from .reciprocity import check_reciprocal_integrity


def run_schema_validators(schema: ModelSchema, graph: SchemaGraph) -> ValidationResult:
    """Run all schema validators.

    Args:
        schema: The parsed schema.
        graph: The schema graph.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    # Reciprocal integrity first (the engine refuses schemas that fail it)
    result.merge(check_reciprocal_integrity(schema, graph))

    result.merge(check_isolated_entities(graph))

    return result


def validate_schema_file(path: str | Path) -> ValidationResult:
    """Load and validate a schema file.

    Args:
        path: Path to the YAML schema file.

    Returns:
        ValidationResult from all validators.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the data fails schema validation.
    """
    schema = parse_schema(path)
    graph = build_graph(schema)
    return run_schema_validators(schema, graph)
