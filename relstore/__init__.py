"""relstore: an in-memory normalized relational store."""

from .actions import (
    ActionValidationError,
    AddAction,
    Attachable,
    AttachAction,
    BatchAction,
    DetachAction,
    EditAction,
    MoveAction,
    MoveAttachedAction,
    RemoveAction,
    parse_action,
    parse_actions,
)
from .engine import Derivation, Engine, apply
from .options import Options
from .schema import ModelSchema, ModelSchemaReader, SchemaLoadError, SchemaValidationError
from .state import RemovalShape, State, empty_state

__all__ = [
    "ActionValidationError",
    "AddAction",
    "Attachable",
    "AttachAction",
    "BatchAction",
    "DetachAction",
    "EditAction",
    "MoveAction",
    "MoveAttachedAction",
    "RemoveAction",
    "parse_action",
    "parse_actions",
    "Derivation",
    "Engine",
    "apply",
    "Options",
    "ModelSchema",
    "ModelSchemaReader",
    "SchemaLoadError",
    "SchemaValidationError",
    "RemovalShape",
    "State",
    "empty_state",
]
