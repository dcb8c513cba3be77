"""Validators for structural validation of automaton documents."""

from .base import Severity, ValidationIssue, ValidationResult
from .reachability import (
    check_start_state_present,
    check_undeclared_symbols,
    check_unreachable_states,
)
from .reference_integrity import (
    check_reference_integrity,
    check_start_state,
    check_transition_endpoints,
)
from .runner import (
    require_valid,
    run_document_checks,
    run_validators,
    validate_document,
    validate_document_file,
)
from .uniqueness import check_unique_ids, check_unique_symbols

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_start_state_present",
    "check_undeclared_symbols",
    "check_unreachable_states",
    "check_reference_integrity",
    "check_start_state",
    "check_transition_endpoints",
    "require_valid",
    "run_document_checks",
    "run_validators",
    "validate_document",
    "validate_document_file",
    "check_unique_ids",
    "check_unique_symbols",
]
