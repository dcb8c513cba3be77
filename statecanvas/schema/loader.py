"""JSON loading and parsing for automaton documents."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import MalformedInput, SchemaViolation
from .models import AutomatonDocument

logger = logging.getLogger(__name__)

NOT_JSON_MESSAGE = "The file does not contain valid JSON."


def parse_document(raw: str | bytes) -> Any:
    """Parse a raw upload into JSON data.

    Args:
        raw: The uploaded text or bytes.

    Returns:
        The decoded JSON value (not yet checked against the schema).

    Raises:
        MalformedInput: If the upload is not JSON.
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("rejected upload: %s", e)
        raise MalformedInput(NOT_JSON_MESSAGE) from e


def load_document(path: str | Path) -> Any:
    """Read and decode a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The decoded JSON value.

    Raises:
        MalformedInput: If the file cannot be read or is not JSON.
    """
    path = Path(path)

    if not path.exists():
        raise MalformedInput(f"File not found: {path}", str(path))

    if not path.is_file():
        raise MalformedInput(f"Not a file: {path}", str(path))

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise MalformedInput(f"Cannot read file: {e}", str(path)) from e

    try:
        return parse_document(raw)
    except MalformedInput as e:
        e.path = str(path)
        raise


def parse_automaton(data: Any) -> AutomatonDocument:
    """Check decoded JSON against the document schema.

    Args:
        data: Decoded JSON value.

    Returns:
        The parsed AutomatonDocument.

    Raises:
        SchemaViolation: If the data does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise SchemaViolation(
            f"Expected a JSON object at the root, got {type(data).__name__}",
            code="SCHEMA_SHAPE",
        )

    try:
        return AutomatonDocument.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        first = errors[0]
        raise SchemaViolation(
            f"Document does not match the automaton schema: {first['loc']}: {first['msg']}",
            errors,
            code="SCHEMA_SHAPE",
        ) from e
