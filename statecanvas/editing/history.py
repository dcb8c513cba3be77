"""Undo/redo stacks of graph snapshots."""

import logging

from ..graph.snapshot import Snapshot

logger = logging.getLogger(__name__)


class HistoryManager:
    """Two stacks of snapshots.

    The manager never touches live state itself; callers hand it the current
    snapshot and restore whatever it returns.
    """

    def __init__(self, limit: int | None = 100):
        """Initialize empty history.

        Args:
            limit: Maximum undo depth, or None for unbounded history.
        """
        self.limit = limit
        self._undo: list[Snapshot] = []
        self._redo: list[Snapshot] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record(self, prior: Snapshot) -> None:
        """Record the state that existed before a committed mutation.

        A new action invalidates everything on the redo stack.
        """
        self._undo.append(prior)
        if self.limit is not None and len(self._undo) > self.limit:
            del self._undo[: len(self._undo) - self.limit]
        self._redo.clear()
        logger.debug("recorded snapshot, undo depth %d", len(self._undo))

    def undo(self, current: Snapshot) -> Snapshot | None:
        """Step back.

        Args:
            current: The live state, kept for redo.

        Returns:
            The snapshot to restore, or None if there is nothing to undo.
        """
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: Snapshot) -> Snapshot | None:
        """Step forward again after an undo.

        Returns:
            The snapshot to restore, or None if there is nothing to redo.
        """
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
