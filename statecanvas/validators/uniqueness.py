"""Duplicate id and symbol detection."""

from collections import Counter

from ..graph.node_types import EntityKind
from ..schema.models import AutomatonDocument
from .base import ValidationResult


def _duplicates(values: list[str]) -> list[str]:
    """Values occurring more than once, in first-seen order."""
    counts = Counter(values)
    return [v for v in dict.fromkeys(values) if counts[v] > 1]


def check_unique_ids(document: AutomatonDocument) -> ValidationResult:
    """Check that state ids, then transition ids, are unique."""
    result = ValidationResult()

    for state_id in _duplicates(document.get_state_ids()):
        result.add_error(
            code="DUPLICATE_STATE_ID",
            message=f"State id '{state_id}' is used more than once",
            kind=EntityKind.STATE,
            entity_id=state_id,
        )

    for transition_id in _duplicates(document.get_transition_ids()):
        result.add_error(
            code="DUPLICATE_TRANSITION_ID",
            message=f"Transition id '{transition_id}' is used more than once",
            kind=EntityKind.TRANSITION,
            entity_id=transition_id,
        )

    return result


def check_unique_symbols(document: AutomatonDocument) -> ValidationResult:
    """Check that no alphabet symbol is listed twice."""
    result = ValidationResult()

    for symbol in _duplicates(document.alphabet):
        result.add_error(
            code="DUPLICATE_SYMBOL",
            message=f"Alphabet symbol '{symbol}' is listed more than once",
            symbol=symbol,
        )

    return result
