"""Validation runner that orchestrates all validators."""

import logging
from pathlib import Path
from typing import Any

from ..schema.errors import SchemaViolation
from ..schema.loader import load_document, parse_automaton
from ..schema.models import AutomatonDocument
from .base import ValidationResult
from .reachability import (
    check_start_state_present,
    check_undeclared_symbols,
    check_unreachable_states,
)
from .reference_integrity import check_reference_integrity
from .uniqueness import check_unique_ids, check_unique_symbols

logger = logging.getLogger(__name__)


def run_document_checks(document: AutomatonDocument) -> ValidationResult:
    """Run every check on a document that already has the right shape.

    Structural errors come first, in rule order: transition endpoints, start
    state, duplicate ids, duplicate symbols. Advisory warnings are only
    computed when no structural error was found.
    """
    result = ValidationResult()

    result.merge(check_reference_integrity(document))
    result.merge(check_unique_ids(document))
    result.merge(check_unique_symbols(document))

    if result.is_valid:
        result.merge(check_start_state_present(document))
        result.merge(check_unreachable_states(document))
        result.merge(check_undeclared_symbols(document))

    return result


def run_validators(data: Any) -> ValidationResult:
    """Validate decoded JSON data.

    Args:
        data: Decoded JSON value.

    Returns:
        Combined ValidationResult. A shape error is reported alone.
    """
    try:
        document = parse_automaton(data)
    except SchemaViolation as e:
        result = ValidationResult()
        result.add_error(code=e.code or "SCHEMA_SHAPE", message=str(e), errors=e.errors)
        return result

    return run_document_checks(document)


def validate_document(data: Any) -> tuple[bool, str | None]:
    """Check whether decoded JSON is a structurally sound automaton.

    Args:
        data: Decoded JSON value.

    Returns:
        ``(True, None)`` for a sound document, otherwise ``(False, message)``
        describing the first violated rule.
    """
    first = run_validators(data).first_error
    if first is None:
        return True, None
    logger.warning("document rejected: %s", first.message)
    return False, first.message


def require_valid(data: Any) -> AutomatonDocument:
    """Parse and validate decoded JSON, raising on the first violation.

    Raises:
        SchemaViolation: Naming the first violated rule.
    """
    document = parse_automaton(data)
    first = run_document_checks(document).first_error
    if first is not None:
        logger.warning("document rejected: %s", first.message)
        raise SchemaViolation(first.message, code=first.code)
    return document


def validate_document_file(path: str | Path) -> ValidationResult:
    """Load and validate a document file.

    Raises:
        MalformedInput: If the file cannot be read or is not JSON.
    """
    return run_validators(load_document(path))
