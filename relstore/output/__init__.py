"""Output formatting."""

from .formatter import format_state, format_tree, format_validation_result

__all__ = [
    "format_state",
    "format_tree",
    "format_validation_result",
]
