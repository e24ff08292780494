"""Output formatting for validation results, states and op logs."""

import json
from typing import Any, Literal

import yaml

from ..state.models import State
from ..state.ops import Op
from ..state.tree import ResourceNode
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def _format_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    # Errors section
    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    # Warnings section
    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = f"[{issue.location}] " if issue.location else ""

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "entity": issue.entity,
                "resource": issue.resource,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def format_state(
    state: State,
    ops: list[Op] | None = None,
    format: Literal["json", "yaml"] = "json",
) -> str:
    """Format a state, and optionally the op log that produced it."""
    if ops is None:
        return _dump(state.to_dict(), format)
    return _dump(
        {"state": state.to_dict(), "ops": [op.to_dict() for op in ops]}, format
    )


def format_tree(
    nodes: list[ResourceNode],
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the output of the cascade walker."""
    if format == "json":
        return json.dumps(
            [{"entity": n.entity, "id": n.id, "resource": n.resource} for n in nodes],
            indent=2,
        )
    if not nodes:
        return "(no resources)"
    return "\n".join(f"{i + 1}. {n.entity} {n.id}" for i, n in enumerate(nodes))


def _dump(data: Any, format: Literal["json", "yaml"]) -> str:
    if format == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=2)
