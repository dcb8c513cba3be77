"""statecanvas: editing engine for drawing finite automata on a canvas."""

from .editing import EditorSession, SelectableRef, Tool
from .errors import EditorError
from .graph import Position

__version__ = "0.1.0"

__all__ = [
    "EditorSession",
    "SelectableRef",
    "Tool",
    "EditorError",
    "Position",
]
