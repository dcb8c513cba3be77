"""Selection set and cascading deletion."""

import logging
from dataclasses import dataclass
from typing import Callable

from ..graph.entities import RemovalResult
from ..graph.errors import InvalidReference
from ..graph.events import EditorEvent, EventBus
from ..graph.node_types import EntityKind, EventKind
from ..graph.store import GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectableRef:
    """Tagged reference to a selectable entity."""

    kind: EntityKind
    id: str

    @classmethod
    def state(cls, state_id: str) -> "SelectableRef":
        return cls(EntityKind.STATE, state_id)

    @classmethod
    def transition(cls, transition_id: str) -> "SelectableRef":
        return cls(EntityKind.TRANSITION, transition_id)


Footprint = tuple[set[str], set[str]]


@dataclass(frozen=True)
class Capability:
    """What a selectable kind can do.

    ``removal_footprint`` answers which (state ids, transition ids) must leave
    the scene when the entity is removed.
    """

    exists: Callable[[GraphStore, str], bool]
    select: Callable[[EventBus, str], None]
    deselect: Callable[[EventBus, str], None]
    removal_footprint: Callable[[GraphStore, str], Footprint]


def _highlighter(kind: EntityKind, highlighted: bool) -> Callable[[EventBus, str], None]:
    def apply(bus: EventBus, entity_id: str) -> None:
        bus.emit(
            EventKind.HIGHLIGHT_CHANGED,
            entity_kind=kind,
            entity_id=entity_id,
            highlighted=highlighted,
        )

    return apply


def _state_footprint(store: GraphStore, state_id: str) -> Footprint:
    return {state_id}, {t.id for t in store.transitions_involving(state_id)}


def _transition_footprint(store: GraphStore, transition_id: str) -> Footprint:
    return set(), {transition_id}


CAPABILITIES: dict[EntityKind, Capability] = {
    EntityKind.STATE: Capability(
        exists=GraphStore.has_state,
        select=_highlighter(EntityKind.STATE, True),
        deselect=_highlighter(EntityKind.STATE, False),
        removal_footprint=_state_footprint,
    ),
    EntityKind.TRANSITION: Capability(
        exists=GraphStore.has_transition,
        select=_highlighter(EntityKind.TRANSITION, True),
        deselect=_highlighter(EntityKind.TRANSITION, False),
        removal_footprint=_transition_footprint,
    ),
}


class SelectionManager:
    """Owns the selection set.

    Entities removed from the store by any route drop out of the selection
    automatically, so the set never references a missing entity.
    """

    def __init__(self, store: GraphStore):
        self._store = store
        self._bus = store.bus
        self._selected: dict[SelectableRef, None] = {}
        self._bus.subscribe(self._on_event)

    @property
    def selected(self) -> list[SelectableRef]:
        """Get a copy of the selection in selection order."""
        return list(self._selected)

    def __contains__(self, ref: SelectableRef) -> bool:
        return ref in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def select(self, ref: SelectableRef) -> bool:
        """Add an entity to the selection.

        Returns:
            False if it was already selected, True otherwise.

        Raises:
            InvalidReference: If the entity is not in the store.
        """
        capability = CAPABILITIES[ref.kind]
        if not capability.exists(self._store, ref.id):
            raise InvalidReference(f"Unknown {ref.kind.value} '{ref.id}'", ref.id)
        if ref in self._selected:
            return False

        self._selected[ref] = None
        capability.select(self._bus, ref.id)
        self._emit_selection()
        return True

    def deselect_all(self) -> None:
        """Deselect every entity and empty the selection."""
        if not self._selected:
            return
        for ref in list(self._selected):
            CAPABILITIES[ref.kind].deselect(self._bus, ref.id)
        self._selected.clear()
        self._emit_selection()

    def deletion_plan(self) -> Footprint:
        """Compute what deleting the selection removes.

        Selected states, selected transitions, and every transition incident
        to a selected state. Nothing unselected and unattached is touched.
        """
        state_ids: set[str] = set()
        transition_ids: set[str] = set()
        for ref in self._selected:
            states, transitions = CAPABILITIES[ref.kind].removal_footprint(
                self._store, ref.id
            )
            state_ids |= states
            transition_ids |= transitions
        return state_ids, transition_ids

    def delete_selected(self) -> RemovalResult:
        """Remove the selection and its cascade from the store in one step."""
        if not self._selected:
            return RemovalResult()

        state_ids, transition_ids = self.deletion_plan()
        result = self._store.remove(state_ids=state_ids, transition_ids=transition_ids)
        logger.debug(
            "deleted selection: %d state(s), %d transition(s)",
            len(result.state_ids),
            len(result.transition_ids),
        )
        # Removal events already pruned the set; clear whatever is left.
        self._selected.clear()
        self._emit_selection()
        return result

    def _on_event(self, event: EditorEvent) -> None:
        if event.kind == EventKind.NODE_REMOVED:
            ref = SelectableRef.state(event.payload["state_id"])
        elif event.kind == EventKind.TRANSITION_REMOVED:
            ref = SelectableRef.transition(event.payload["transition_id"])
        else:
            return
        if ref in self._selected:
            del self._selected[ref]
            self._emit_selection()

    def _emit_selection(self) -> None:
        self._bus.emit(EventKind.SELECTION_CHANGED, selection=tuple(self._selected))
