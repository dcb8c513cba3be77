"""Editing layer: selection, tentative transitions, history and the session."""

from .errors import BuilderStateError
from .history import HistoryManager
from .selection import CAPABILITIES, Capability, SelectableRef, SelectionManager
from .session import EditorSession
from .tentative import BuilderPhase, TentativeTransitionBuilder, arrow_endpoint
from .tools import Tool

__all__ = [
    "BuilderStateError",
    "HistoryManager",
    "CAPABILITIES",
    "Capability",
    "SelectableRef",
    "SelectionManager",
    "EditorSession",
    "BuilderPhase",
    "TentativeTransitionBuilder",
    "arrow_endpoint",
    "Tool",
]
