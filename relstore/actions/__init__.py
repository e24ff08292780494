"""Actions: caller-facing requests and their translation into ops."""

from .errors import ActionValidationError
from .models import (
    Action,
    ActionType,
    AddAction,
    Attachable,
    AttachAction,
    BatchAction,
    ConcreteAction,
    DetachAction,
    EditAction,
    MoveAction,
    MoveAttachedAction,
    RemoveAction,
    parse_action,
    parse_actions,
)
from .translator import OpTranslator

__all__ = [
    "ActionValidationError",
    "Action",
    "ActionType",
    "AddAction",
    "Attachable",
    "AttachAction",
    "BatchAction",
    "ConcreteAction",
    "DetachAction",
    "EditAction",
    "MoveAction",
    "MoveAttachedAction",
    "RemoveAction",
    "parse_action",
    "parse_actions",
    "OpTranslator",
]
