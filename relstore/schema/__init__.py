"""Schema layer for parsing, validating and reading relation schemas."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import Cardinality, ModelSchema, RelSchema
from .loader import load_yaml, parse_schema, parse_schema_data, parse_schema_from_string
from .reader import ModelSchemaReader, Resolution, ResolutionStatus

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "Cardinality",
    "ModelSchema",
    "RelSchema",
    "load_yaml",
    "parse_schema",
    "parse_schema_data",
    "parse_schema_from_string",
    "ModelSchemaReader",
    "Resolution",
    "ResolutionStatus",
]
