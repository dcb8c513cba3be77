"""Editor tools and their keyboard shortcuts."""

from enum import Enum


class Tool(str, Enum):
    """The active canvas tool."""

    SELECT = "select"
    STATES = "states"
    TRANSITIONS = "transitions"


TOOL_SHORTCUTS: dict[str, Tool] = {
    "KeyS": Tool.SELECT,
    "KeyA": Tool.STATES,
    "KeyT": Tool.TRANSITIONS,
}

DELETE_KEYS = frozenset({"Delete", "Backspace"})
