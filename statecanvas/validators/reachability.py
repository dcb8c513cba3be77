"""Advisory checks on a structurally sound document."""

from ..graph.builder import build_store
from ..graph.node_types import EntityKind
from ..schema.models import AutomatonDocument
from .base import ValidationResult


def check_start_state_present(document: AutomatonDocument) -> ValidationResult:
    """Warn when a non-empty automaton has no start state."""
    result = ValidationResult()

    if document.states and document.start_state_id is None:
        result.add_warning(
            code="NO_START_STATE",
            message="The automaton has states but no start state",
        )

    return result


def check_unreachable_states(document: AutomatonDocument) -> ValidationResult:
    """Warn about states that cannot be reached from the start state.

    Only meaningful once references are known to be consistent; callers run
    this after the structural checks pass.

    Args:
        document: The parsed automaton document.

    Returns:
        ValidationResult with one warning per unreachable state.
    """
    result = ValidationResult()
    if document.start_state_id is None:
        return result

    store = build_store(document)
    reachable = store.reachable_state_ids()

    for state in store.states():
        if state.id not in reachable:
            name = state.label or state.id
            result.add_warning(
                code="UNREACHABLE_STATE",
                message=f"State '{name}' cannot be reached from the start state",
                kind=EntityKind.STATE,
                entity_id=state.id,
            )

    return result


def check_undeclared_symbols(document: AutomatonDocument) -> ValidationResult:
    """Warn about transition symbols missing from the alphabet."""
    result = ValidationResult()
    alphabet = set(document.alphabet)

    for transition in document.transitions:
        for symbol in sorted(set(transition.symbols) - alphabet):
            result.add_warning(
                code="UNDECLARED_SYMBOL",
                message=f"Transition '{transition.id}' uses symbol '{symbol}' which is not in the alphabet",
                kind=EntityKind.TRANSITION,
                entity_id=transition.id,
                symbol=symbol,
            )

    return result
