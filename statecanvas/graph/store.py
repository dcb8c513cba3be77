"""GraphStore: arena-style storage of state-nodes and transitions on networkx."""

import logging
import uuid
from typing import Iterable

import networkx as nx

from .entities import Position, RemovalResult, StateNode, Transition
from .errors import InvalidReference
from .events import EventBus
from .node_types import EventKind

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate a fresh entity id."""
    return uuid.uuid4().hex


class GraphStore:
    """The automaton graph.

    Wraps a networkx MultiDiGraph: nodes are state ids, edges are keyed by
    transition id so parallel transitions and self-loops coexist. Every
    cross-reference (transition endpoints, start-state) is an id resolved
    through this store.
    """

    def __init__(self, bus: EventBus | None = None):
        """Initialize an empty store.

        Args:
            bus: Event bus receiving structural notifications.
        """
        self._graph = nx.MultiDiGraph()
        self._ends: dict[str, tuple[str, str]] = {}
        self._start_state_id: str | None = None
        self._bus = bus or EventBus()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    @property
    def bus(self) -> EventBus:
        return self._bus

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_state(self, state_id: str | None) -> bool:
        return state_id is not None and self._graph.has_node(state_id)

    def has_transition(self, transition_id: str | None) -> bool:
        return transition_id in self._ends

    def get_state(self, state_id: str) -> StateNode:
        """Get a state-node by id.

        Raises:
            InvalidReference: If the state does not exist.
        """
        self._require_state(state_id)
        data = self._graph.nodes[state_id]
        return StateNode(
            id=state_id,
            position=data["position"],
            is_accepting=data["is_accepting"],
            label=data["label"],
        )

    def get_transition(self, transition_id: str) -> Transition:
        """Get a transition by id.

        Raises:
            InvalidReference: If the transition does not exist.
        """
        self._require_transition(transition_id)
        source_id, target_id = self._ends[transition_id]
        data = self._graph.edges[source_id, target_id, transition_id]
        return Transition(
            id=transition_id,
            source_id=source_id,
            target_id=target_id,
            symbols=data["symbols"],
        )

    def states(self) -> list[StateNode]:
        """Get all state-nodes in insertion order."""
        return [self.get_state(state_id) for state_id in self._graph.nodes]

    def transitions(self) -> list[Transition]:
        """Get all transitions in insertion order."""
        return [self.get_transition(tid) for tid in self._ends]

    def transitions_involving(self, state_id: str) -> list[Transition]:
        """Get every transition whose source or target is the given state."""
        return [t for t in self.transitions() if t.involves(state_id)]

    @property
    def start_state_id(self) -> str | None:
        return self._start_state_id

    def reachable_state_ids(self) -> set[str]:
        """Get the ids of states reachable from the start state."""
        if self._start_state_id is None:
            return set()
        return {self._start_state_id} | nx.descendants(
            self._graph, self._start_state_id
        )

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_state(
        self,
        position: Position,
        *,
        state_id: str | None = None,
        is_accepting: bool = False,
        label: str | None = None,
    ) -> str:
        """Add a state-node.

        The first state added to a store without a start-state becomes the
        start-state.

        Args:
            position: Scene position of the node.
            state_id: Explicit id, generated when omitted.
            is_accepting: Whether the state is accepting.
            label: Optional display label.

        Returns:
            The state id.
        """
        state_id = self._insert_state(
            position, state_id or new_id(), is_accepting, label
        )
        if self._start_state_id is None:
            self.set_start_state(state_id)
        return state_id

    def add_transition(
        self,
        source_id: str,
        target_id: str,
        symbols: Iterable[str] = (),
        *,
        transition_id: str | None = None,
    ) -> str:
        """Add a transition between two existing states.

        Args:
            source_id: The source state id.
            target_id: The target state id (may equal source_id).
            symbols: Symbols labelling the transition.
            transition_id: Explicit id, generated when omitted.

        Returns:
            The transition id.

        Raises:
            InvalidReference: If either endpoint is missing.
        """
        self._require_state(source_id)
        self._require_state(target_id)
        transition_id = transition_id or new_id()
        if transition_id in self._ends:
            raise InvalidReference(
                f"Transition '{transition_id}' already exists", transition_id
            )

        self._graph.add_edge(
            source_id, target_id, key=transition_id, symbols=frozenset(symbols)
        )
        self._ends[transition_id] = (source_id, target_id)
        logger.debug("added transition %s: %s -> %s", transition_id, source_id, target_id)
        self._bus.emit(
            EventKind.TRANSITION_ADDED, transition=self.get_transition(transition_id)
        )
        return transition_id

    def set_start_state(self, state_id: str | None) -> None:
        """Replace the start-state.

        Raises:
            InvalidReference: If a non-null state does not exist.
        """
        if state_id is not None:
            self._require_state(state_id)
        self._start_state_id = state_id
        self._emit_start_state()

    def move_state(self, state_id: str, position: Position) -> StateNode:
        """Move a state-node to a new position."""
        return self._update_state(state_id, position=position)

    def set_accepting(self, state_id: str, is_accepting: bool) -> StateNode:
        return self._update_state(state_id, is_accepting=is_accepting)

    def set_label(self, state_id: str, label: str | None) -> StateNode:
        return self._update_state(state_id, label=label)

    def set_transition_symbols(
        self, transition_id: str, symbols: Iterable[str]
    ) -> Transition:
        """Replace the symbol set of a transition."""
        self._require_transition(transition_id)
        source_id, target_id = self._ends[transition_id]
        self._graph.edges[source_id, target_id, transition_id]["symbols"] = frozenset(
            symbols
        )
        transition = self.get_transition(transition_id)
        self._bus.emit(EventKind.TRANSITION_UPDATED, transition=transition)
        return transition

    def detach_symbol(self, symbol: str) -> list[str]:
        """Remove a symbol from every transition carrying it.

        Returns:
            Ids of the transitions that were updated.
        """
        updated = []
        for transition in self.transitions():
            if symbol in transition.symbols:
                self.set_transition_symbols(
                    transition.id, transition.symbols - {symbol}
                )
                updated.append(transition.id)
        return updated

    def rename_symbol(self, old: str, new: str) -> list[str]:
        """Rename a symbol on every transition carrying it.

        Returns:
            Ids of the transitions that were updated.
        """
        updated = []
        for transition in self.transitions():
            if old in transition.symbols:
                self.set_transition_symbols(
                    transition.id, (transition.symbols - {old}) | {new}
                )
                updated.append(transition.id)
        return updated

    def remove(
        self,
        state_ids: Iterable[str] = (),
        transition_ids: Iterable[str] = (),
    ) -> RemovalResult:
        """Remove states and transitions in one atomic step.

        Removing a state also removes every transition incident to it. If the
        start-state is removed the start-state reference becomes null. One
        removal event is emitted per deleted entity, transitions first.

        Args:
            state_ids: States to remove.
            transition_ids: Transitions to remove.

        Returns:
            RemovalResult describing everything that was deleted.

        Raises:
            InvalidReference: If any id is unknown. Nothing is removed then.
        """
        state_ids = list(dict.fromkeys(state_ids))
        transition_ids = set(transition_ids)
        for state_id in state_ids:
            self._require_state(state_id)
        for transition_id in transition_ids:
            self._require_transition(transition_id)

        doomed_states = set(state_ids)
        doomed_transitions = [
            tid
            for tid, (source_id, target_id) in self._ends.items()
            if tid in transition_ids
            or source_id in doomed_states
            or target_id in doomed_states
        ]

        for tid in doomed_transitions:
            source_id, target_id = self._ends.pop(tid)
            self._graph.remove_edge(source_id, target_id, key=tid)
        self._graph.remove_nodes_from(state_ids)

        start_cleared = self._start_state_id in doomed_states
        if start_cleared:
            self._start_state_id = None

        logger.debug(
            "removed %d state(s) and %d transition(s)",
            len(state_ids),
            len(doomed_transitions),
        )
        for tid in doomed_transitions:
            self._bus.emit(EventKind.TRANSITION_REMOVED, transition_id=tid)
        for state_id in state_ids:
            self._bus.emit(EventKind.NODE_REMOVED, state_id=state_id)
        if start_cleared:
            self._emit_start_state()

        return RemovalResult(
            state_ids=tuple(state_ids),
            transition_ids=tuple(doomed_transitions),
            start_state_cleared=start_cleared,
        )

    def remove_states(self, state_ids: Iterable[str]) -> RemovalResult:
        """Remove states, cascading to their incident transitions."""
        return self.remove(state_ids=state_ids)

    def remove_transitions(self, transition_ids: Iterable[str]) -> RemovalResult:
        return self.remove(transition_ids=transition_ids)

    def clear(self) -> RemovalResult:
        """Remove everything."""
        return self.remove(state_ids=list(self._graph.nodes))

    def load(
        self,
        states: Iterable[StateNode],
        transitions: Iterable[Transition],
        start_state_id: str | None,
    ) -> None:
        """Replace the whole content of the store.

        The replacement is checked before anything is touched, so a rejected
        load leaves the current graph intact.

        Raises:
            InvalidReference: If a transition or the start-state references a
                state that is not part of ``states``, or ids repeat.
        """
        states = list(states)
        transitions = list(transitions)

        state_ids = [s.id for s in states]
        if len(set(state_ids)) != len(state_ids):
            raise InvalidReference("Duplicate state ids in replacement graph")
        known = set(state_ids)
        transition_ids = [t.id for t in transitions]
        if len(set(transition_ids)) != len(transition_ids):
            raise InvalidReference("Duplicate transition ids in replacement graph")
        for transition in transitions:
            for endpoint in (transition.source_id, transition.target_id):
                if endpoint not in known:
                    raise InvalidReference(
                        f"Transition '{transition.id}' references unknown state '{endpoint}'",
                        endpoint,
                    )
        if start_state_id is not None and start_state_id not in known:
            raise InvalidReference(
                f"Start state '{start_state_id}' is not part of the graph",
                start_state_id,
            )

        self.clear()
        for state in states:
            self._insert_state(
                state.position, state.id, state.is_accepting, state.label
            )
        for transition in transitions:
            self.add_transition(
                transition.source_id,
                transition.target_id,
                transition.symbols,
                transition_id=transition.id,
            )
        self.set_start_state(start_state_id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _insert_state(
        self,
        position: Position,
        state_id: str,
        is_accepting: bool,
        label: str | None,
    ) -> str:
        if self._graph.has_node(state_id):
            raise InvalidReference(f"State '{state_id}' already exists", state_id)

        self._graph.add_node(
            state_id, position=position, is_accepting=is_accepting, label=label
        )
        logger.debug("added state %s at (%s, %s)", state_id, position.x, position.y)
        self._bus.emit(EventKind.NODE_ADDED, state=self.get_state(state_id))
        return state_id

    def _update_state(self, state_id: str, **changes) -> StateNode:
        self._require_state(state_id)
        self._graph.nodes[state_id].update(changes)
        state = self.get_state(state_id)
        self._bus.emit(EventKind.NODE_UPDATED, state=state)
        if "position" in changes and state_id == self._start_state_id:
            self._emit_start_state()
        return state

    def _emit_start_state(self) -> None:
        position = None
        if self._start_state_id is not None:
            position = self.get_state(self._start_state_id).position
        self._bus.emit(
            EventKind.START_STATE_CHANGED,
            state_id=self._start_state_id,
            position=position,
        )

    def _require_state(self, state_id: str | None) -> None:
        if not self.has_state(state_id):
            raise InvalidReference(f"Unknown state '{state_id}'", state_id)

    def _require_transition(self, transition_id: str) -> None:
        if transition_id not in self._ends:
            raise InvalidReference(f"Unknown transition '{transition_id}'", transition_id)
