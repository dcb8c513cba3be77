"""Drag-to-connect protocol for creating transitions."""

import logging
import math
from enum import Enum

from ..graph.entities import Position
from ..graph.events import EditorEvent
from ..graph.node_types import EventKind
from ..graph.store import GraphStore
from .errors import BuilderStateError

logger = logging.getLogger(__name__)


class BuilderPhase(str, Enum):
    """Phases of the tentative transition gesture."""

    IDLE = "idle"
    SOURCING = "sourcing"  # Dragging from a source, no drop target
    TARGETING = "targeting"  # Hovering a legal drop target


def arrow_endpoint(
    source: Position, target: Position, node_radius: float, arrow_padding: float
) -> Position:
    """Compute where an arrow from source toward target should stop.

    The endpoint is relative to the source and lies on the segment toward the
    target, exactly ``node_radius + arrow_padding`` short of the target centre.
    Coincident positions are treated as if they were that distance apart.

    Args:
        source: Source node centre.
        target: Target node centre.
        node_radius: Radius of a drawn node.
        arrow_padding: Gap between arrow head and node outline.

    Returns:
        Endpoint relative to the source.
    """
    delta = target - source
    stop_short = node_radius + arrow_padding
    magnitude = math.hypot(delta.x, delta.y)
    if magnitude == 0:
        magnitude = stop_short
    back_x = delta.x / magnitude * stop_short
    back_y = delta.y / magnitude * stop_short
    return Position(delta.x - back_x, delta.y - back_y)


class TentativeTransitionBuilder:
    """Short-lived state machine for the drag-to-connect gesture.

    Idle -> Sourcing -> Targeting -> (commit | cancel) -> Idle. Only ``commit``
    touches the graph store. Removing the source state ends the gesture;
    removing the candidate drops it back to sourcing.
    """

    def __init__(
        self, store: GraphStore, node_radius: float = 30, arrow_padding: float = 5
    ):
        self._store = store
        self._bus = store.bus
        self.node_radius = node_radius
        self.arrow_padding = arrow_padding
        self._source_id: str | None = None
        self._candidate_id: str | None = None
        self._anchor: Position | None = None
        self._pointer: Position | None = None
        self._endpoint: Position | None = None
        self._bus.subscribe(self._on_event)

    @property
    def phase(self) -> BuilderPhase:
        if self._source_id is None:
            return BuilderPhase.IDLE
        if self._candidate_id is None:
            return BuilderPhase.SOURCING
        return BuilderPhase.TARGETING

    @property
    def in_progress(self) -> bool:
        return self._source_id is not None

    @property
    def source_id(self) -> str | None:
        return self._source_id

    @property
    def candidate_id(self) -> str | None:
        return self._candidate_id

    @property
    def pointer(self) -> Position | None:
        """Last pointer position passed to ``update_head``."""
        return self._pointer

    @property
    def endpoint(self) -> Position | None:
        """Current arrow endpoint, relative to the anchor."""
        return self._endpoint

    def begin(self, source_id: str) -> None:
        """Start a gesture from a source node.

        Raises:
            BuilderStateError: If a gesture is already in progress.
            InvalidReference: If the source does not exist.
        """
        if self.in_progress:
            raise BuilderStateError(
                "A tentative transition is already in progress", self.phase.value
            )
        source = self._store.get_state(source_id)
        self._source_id = source_id
        self._anchor = source.position
        self._endpoint = Position(0, 0)
        logger.debug("tentative transition from %s", source_id)
        self._emit_arrow()

    def set_candidate_target(self, state_id: str | None) -> None:
        """Record the hovered drop target, or clear it with None.

        Ignored when no gesture is in progress.

        Raises:
            InvalidReference: If a non-null target does not exist.
        """
        if not self.in_progress:
            return
        if state_id is not None:
            self._store.get_state(state_id)
        self._candidate_id = state_id

    def update_head(self, pointer: Position) -> Position | None:
        """Move the provisional arrow head.

        Without a candidate the head follows the pointer. With one, the head
        snaps toward the candidate and stops short of its outline.

        Returns:
            The endpoint relative to the source, or None when idle.
        """
        if not self.in_progress:
            return None
        self._pointer = pointer
        source = self._store.get_state(self._source_id)
        if self._candidate_id is None:
            self._endpoint = pointer - source.position
        else:
            target = self._store.get_state(self._candidate_id)
            self._endpoint = arrow_endpoint(
                source.position, target.position, self.node_radius, self.arrow_padding
            )
        self._anchor = source.position
        self._emit_arrow()
        return self._endpoint

    def commit(self) -> str | None:
        """Create the transition for the current gesture.

        Committing without a candidate target behaves like ``cancel``.

        Returns:
            The new transition id, or None if nothing was created.
        """
        if not self.in_progress:
            return None
        if self._candidate_id is None:
            self.cancel()
            return None

        source_id, target_id = self._source_id, self._candidate_id
        try:
            transition_id = self._store.add_transition(source_id, target_id, ())
        finally:
            self._reset()
        logger.debug("committed tentative transition %s", transition_id)
        return transition_id

    def cancel(self) -> bool:
        """Abandon the gesture without touching the store.

        Returns:
            False if there was nothing to cancel.
        """
        if not self.in_progress:
            return False
        self._reset()
        return True

    def _on_event(self, event: EditorEvent) -> None:
        if event.kind != EventKind.NODE_REMOVED or not self.in_progress:
            return
        state_id = event.payload["state_id"]
        if state_id == self._source_id:
            logger.debug("source %s removed, cancelling tentative transition", state_id)
            self._reset()
        elif state_id == self._candidate_id:
            self._candidate_id = None
            self._bus.emit(EventKind.HOVER_CLEARED, state_ids=(state_id,))

    def _reset(self) -> None:
        hovered = [i for i in (self._source_id, self._candidate_id) if i is not None]
        self._source_id = None
        self._candidate_id = None
        self._anchor = None
        self._pointer = None
        self._endpoint = None
        self._bus.emit(EventKind.HOVER_CLEARED, state_ids=tuple(dict.fromkeys(hovered)))
        self._emit_arrow()

    def _emit_arrow(self) -> None:
        self._bus.emit(
            EventKind.TENTATIVE_ARROW_UPDATED,
            visible=self.in_progress,
            anchor=self._anchor,
            endpoint=self._endpoint,
        )
