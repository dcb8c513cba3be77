"""Output formatting for validation results and automaton summaries."""

import json
from typing import Any, Literal

from ..graph.node_types import EntityKind
from ..graph.snapshot import Snapshot
from ..validators.base import Severity, ValidationIssue, ValidationResult

_MARKS = {Severity.ERROR: "✘", Severity.WARNING: "⚠", Severity.INFO: "ℹ"}

# Heading for issues that concern the document as a whole
AUTOMATON_HEADING = "automaton"


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


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _headline(result: ValidationResult) -> str:
    errors, warnings = len(result.errors), len(result.warnings)
    if errors:
        return f"Validation failed: {_plural(errors, 'error')}, {_plural(warnings, 'warning')}"
    if warnings:
        return f"Validation passed with {_plural(warnings, 'warning')}"
    return "Validation passed"


def group_by_entity(result: ValidationResult) -> dict[str, list[ValidationIssue]]:
    """Group issues under the state or transition they concern.

    Errors come before warnings inside each group; groups keep the order in
    which their first issue was found.
    """
    groups: dict[str, list[ValidationIssue]] = {}
    for issue in result.errors + result.warnings:
        groups.setdefault(issue.location or AUTOMATON_HEADING, []).append(issue)
    return groups


def _format_text(result: ValidationResult) -> str:
    lines = [_headline(result)]

    for heading, issues in group_by_entity(result).items():
        lines.append("")
        lines.append(heading)
        for issue in issues:
            lines.append(f"  {_MARKS[issue.severity]} {issue.code}: {issue.message}")

    return "\n".join(lines)


def _flagged(result: ValidationResult, kind: EntityKind) -> list[str]:
    return list(
        dict.fromkeys(i.entity_id for i in result.issues if i.kind == kind and i.entity_id)
    )


def _issue_record(issue: ValidationIssue) -> dict[str, Any]:
    return {
        "code": issue.code,
        "severity": issue.severity.value,
        "kind": issue.kind.value if issue.kind else None,
        "entity_id": issue.entity_id,
        "message": issue.message,
        "details": issue.details,
    }


def _format_json(result: ValidationResult) -> str:
    report = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "flagged_states": _flagged(result, EntityKind.STATE),
        "flagged_transitions": _flagged(result, EntityKind.TRANSITION),
        "issues": [_issue_record(issue) for issue in result.issues],
    }
    return json.dumps(report, indent=2, ensure_ascii=False)


def format_summary(snapshot: Snapshot, unreachable: list[str] | None = None) -> str:
    """Describe an automaton in a few human-readable lines."""
    names = {s.id: s.label or s.id for s in snapshot.states}
    accepting = [names[s.id] for s in snapshot.states if s.is_accepting]
    start = names.get(snapshot.start_state_id) if snapshot.start_state_id else None

    lines = [
        f"States: {len(snapshot.states)}",
        f"Transitions: {len(snapshot.transitions)}",
        f"Start state: {start or '(none)'}",
        f"Accepting states: {', '.join(accepting) if accepting else '(none)'}",
        f"Alphabet: {', '.join(snapshot.alphabet) if snapshot.alphabet else '(empty)'}",
    ]
    if unreachable:
        lines.append(f"Unreachable states: {', '.join(names[i] for i in unreachable)}")
    return "\n".join(lines)
