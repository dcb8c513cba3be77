"""Entity and event type definitions for the automaton graph."""

from enum import Enum


class EntityKind(str, Enum):
    """Kinds of entities that live in the graph store."""

    STATE = "state"
    TRANSITION = "transition"


class EventKind(str, Enum):
    """Notifications emitted to the presentation layer."""

    # Graph structure
    NODE_ADDED = "node_added"
    NODE_UPDATED = "node_updated"
    NODE_REMOVED = "node_removed"
    TRANSITION_ADDED = "transition_added"
    TRANSITION_UPDATED = "transition_updated"
    TRANSITION_REMOVED = "transition_removed"
    START_STATE_CHANGED = "start_state_changed"
    ALPHABET_CHANGED = "alphabet_changed"

    # Interaction feedback
    TENTATIVE_ARROW_UPDATED = "tentative_arrow_updated"
    SELECTION_CHANGED = "selection_changed"
    HIGHLIGHT_CHANGED = "highlight_changed"  # Selected entity shadow on/off
    HOVER_CLEARED = "hover_cleared"  # Drag source/target shadow removed
