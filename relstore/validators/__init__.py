"""Validators for schemas and states."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_isolated_entities
from .reciprocity import check_reciprocal_integrity
from .state_integrity import check_state_integrity
from .runner import run_schema_validators, validate_schema_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_isolated_entities",
    "check_reciprocal_integrity",
    "check_state_integrity",
    "run_schema_validators",
    "validate_schema_file",
]
