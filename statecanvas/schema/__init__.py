"""Schema layer for exchanging automata as JSON documents."""

from .errors import MalformedInput, SchemaViolation
from .models import AutomatonDocument, StateRecord, TransitionRecord
from .loader import load_document, parse_automaton, parse_document
from .serializer import deserialize, serialize, serialize_json, to_document

__all__ = [
    "MalformedInput",
    "SchemaViolation",
    "AutomatonDocument",
    "StateRecord",
    "TransitionRecord",
    "load_document",
    "parse_automaton",
    "parse_document",
    "deserialize",
    "serialize",
    "serialize_json",
    "to_document",
]
