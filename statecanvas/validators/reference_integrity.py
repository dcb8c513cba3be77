"""Reference integrity validator."""

from ..graph.node_types import EntityKind
from ..schema.models import AutomatonDocument
from .base import ValidationResult


def check_transition_endpoints(document: AutomatonDocument) -> ValidationResult:
    """Check that every transition's source and target name a listed state.

    Args:
        document: The parsed automaton document.

    Returns:
        ValidationResult with one error per dangling endpoint.
    """
    result = ValidationResult()
    state_ids = set(document.get_state_ids())

    for transition in document.transitions:
        if transition.source_id not in state_ids:
            result.add_error(
                code="UNDEFINED_SOURCE_STATE",
                message=(
                    f"Transition '{transition.id}' references undefined source "
                    f"state '{transition.source_id}'"
                ),
                kind=EntityKind.TRANSITION,
                entity_id=transition.id,
                referenced_state=transition.source_id,
            )
        if transition.target_id not in state_ids:
            result.add_error(
                code="UNDEFINED_TARGET_STATE",
                message=(
                    f"Transition '{transition.id}' references undefined target "
                    f"state '{transition.target_id}'"
                ),
                kind=EntityKind.TRANSITION,
                entity_id=transition.id,
                referenced_state=transition.target_id,
            )

    return result


def check_start_state(document: AutomatonDocument) -> ValidationResult:
    """Check that the start state, if any, names a listed state."""
    result = ValidationResult()
    start = document.start_state_id

    if start is not None and start not in set(document.get_state_ids()):
        result.add_error(
            code="UNDEFINED_START_STATE",
            message=f"Start state '{start}' is not one of the listed states",
            kind=EntityKind.STATE,
            entity_id=start,
        )

    return result


def check_reference_integrity(document: AutomatonDocument) -> ValidationResult:
    """Run the transition-endpoint check, then the start-state check."""
    result = ValidationResult()
    result.merge(check_transition_endpoints(document))
    result.merge(check_start_state(document))
    return result
