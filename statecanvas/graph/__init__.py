"""Graph layer: states, transitions and alphabet of the automaton."""

from .entities import Position, RemovalResult, StateNode, Token, Transition
from .errors import DuplicateSymbol, InvalidReference
from .events import EditorEvent, EventBus, EventRecorder
from .node_types import EntityKind, EventKind
from .snapshot import Snapshot
from .store import GraphStore
from .tokens import TokenRegistry

__all__ = [
    "Position",
    "RemovalResult",
    "StateNode",
    "Token",
    "Transition",
    "DuplicateSymbol",
    "InvalidReference",
    "EditorEvent",
    "EventBus",
    "EventRecorder",
    "EntityKind",
    "EventKind",
    "Snapshot",
    "GraphStore",
    "TokenRegistry",
]
