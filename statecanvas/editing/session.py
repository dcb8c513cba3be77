"""EditorSession: one explicit owner for everything a canvas editor mutates."""

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from ..config import EditorSettings
from ..graph.entities import Position, RemovalResult, StateNode, Token, Transition
from ..graph.errors import InvalidReference
from ..graph.events import EventBus, Listener
from ..graph.snapshot import Snapshot
from ..graph.store import GraphStore
from ..graph.tokens import TokenRegistry
from ..schema.loader import parse_document
from ..schema.serializer import deserialize, serialize, serialize_json
from ..validators.runner import require_valid
from .history import HistoryManager
from .selection import SelectableRef, SelectionManager
from .tentative import TentativeTransitionBuilder
from .tools import DELETE_KEYS, TOOL_SHORTCUTS, Tool

logger = logging.getLogger(__name__)


class EditorSession:
    """The editing engine for one automaton.

    Owns the graph store, token registry, selection, tentative transition
    builder and history. Every public mutation runs to completion, and each
    one that changes the automaton becomes exactly one undoable step.
    """

    def __init__(self, settings: EditorSettings | None = None):
        """Initialize an empty session.

        Args:
            settings: Session tunables; defaults are used when omitted.
        """
        self.settings = settings or EditorSettings()
        self.bus = EventBus()
        self.store = GraphStore(self.bus)
        self.tokens = TokenRegistry(self.bus, self.settings.epsilon_symbol)
        self.selection = SelectionManager(self.store)
        self.builder = TentativeTransitionBuilder(
            self.store, self.settings.node_radius, self.settings.arrow_padding
        )
        self.history = HistoryManager(self.settings.history_limit)
        self.current_tool = Tool.STATES
        self.snap_to_grid = self.settings.snap_to_grid
        self._baseline = self.snapshot()

    def subscribe(self, listener: Listener):
        """Register a presentation listener. Returns an unsubscribe callable."""
        return self.bus.subscribe(listener)

    # -------------------------------------------------------------------------
    # State capture
    # -------------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Capture the current automaton."""
        return Snapshot.capture(self.store, self.tokens)

    @property
    def is_clean(self) -> bool:
        """Whether the automaton equals the last exported, imported or new one."""
        return self.snapshot() == self._baseline

    def mark_clean(self) -> None:
        self._baseline = self.snapshot()

    @contextmanager
    def _mutation(self, action: str) -> Iterator[None]:
        """Wrap one user action so it is recorded as a single undo step.

        Nothing is recorded if the body raises or leaves the automaton as it
        was.
        """
        before = self.snapshot()
        yield
        if self.snapshot() != before:
            self.history.record(before)
            logger.debug("%s recorded", action)

    def _restore(self, snapshot: Snapshot) -> None:
        self.builder.cancel()
        self.selection.deselect_all()
        snapshot.restore_into(self.store, self.tokens)

    # -------------------------------------------------------------------------
    # Graph editing
    # -------------------------------------------------------------------------

    def add_state(self, position: Position) -> str:
        """Add a state; the first state of an empty automaton becomes start."""
        with self._mutation("add state"):
            return self.store.add_state(self._snap(position))

    def add_transition(
        self, source_id: str, target_id: str, symbols: Iterable[str] = ()
    ) -> str:
        """Add a transition labelled with registered symbols.

        Raises:
            InvalidReference: If an endpoint or symbol is unknown.
        """
        symbols = self._require_symbols(symbols)
        with self._mutation("add transition"):
            return self.store.add_transition(source_id, target_id, symbols)

    def remove_states(self, state_ids: Iterable[str]) -> RemovalResult:
        with self._mutation("remove states"):
            return self.store.remove_states(state_ids)

    def remove_transitions(self, transition_ids: Iterable[str]) -> RemovalResult:
        with self._mutation("remove transitions"):
            return self.store.remove_transitions(transition_ids)

    def set_start_state(self, state_id: str | None) -> None:
        with self._mutation("set start state"):
            self.store.set_start_state(state_id)

    def move_state(self, state_id: str, position: Position) -> StateNode:
        """Move a state, snapping to the grid when enabled."""
        with self._mutation("move state"):
            return self.store.move_state(state_id, self._snap(position))

    def set_accepting(self, state_id: str, is_accepting: bool) -> StateNode:
        with self._mutation("set accepting"):
            return self.store.set_accepting(state_id, is_accepting)

    def toggle_accepting(self, state_id: str) -> StateNode:
        return self.set_accepting(state_id, not self.store.get_state(state_id).is_accepting)

    def set_label(self, state_id: str, label: str | None) -> StateNode:
        with self._mutation("set label"):
            return self.store.set_label(state_id, label or None)

    def set_transition_symbols(
        self, transition_id: str, symbols: Iterable[str]
    ) -> Transition:
        """Replace the symbols of a transition with registered symbols."""
        symbols = self._require_symbols(symbols)
        with self._mutation("set transition symbols"):
            return self.store.set_transition_symbols(transition_id, symbols)

    def clear(self) -> None:
        """Start a new, empty automaton. Undoable."""
        with self._mutation("clear"):
            self._restore(Snapshot())
        self.mark_clean()

    # -------------------------------------------------------------------------
    # Alphabet
    # -------------------------------------------------------------------------

    def add_token(self, symbol: str | None = None) -> str:
        """Add a token with an explicit or placeholder symbol."""
        with self._mutation("add token"):
            return self.tokens.add_token(symbol)

    def remove_token(self, token_id: str) -> Token:
        """Remove a token, detaching its symbol from every transition."""
        token = self.tokens.get_token(token_id)
        with self._mutation("remove token"):
            detached = self.store.detach_symbol(token.symbol)
            self.tokens.remove_token(token_id)
        if detached:
            logger.debug("detached %r from %d transition(s)", token.symbol, len(detached))
        return token

    def rename_token(self, token_id: str, symbol: str) -> Token:
        """Change a token's symbol and relabel the transitions using it."""
        token = self.tokens.get_token(token_id)
        with self._mutation("rename token"):
            renamed = self.tokens.rename_token(token_id, symbol)
            if renamed.symbol != token.symbol:
                self.store.rename_symbol(token.symbol, renamed.symbol)
        return renamed

    def list_alphabet(self) -> list[str]:
        return self.tokens.list_alphabet()

    # -------------------------------------------------------------------------
    # Tentative transitions
    # -------------------------------------------------------------------------

    def begin_tentative_transition(self, state_id: str) -> None:
        self.builder.begin(state_id)

    def update_tentative_head(self, pointer: Position) -> Position | None:
        return self.builder.update_head(pointer)

    def set_tentative_candidate(self, state_id: str | None) -> None:
        self.builder.set_candidate_target(state_id)

    def commit_tentative_transition(self) -> str | None:
        with self._mutation("commit tentative transition"):
            return self.builder.commit()

    def cancel_tentative_transition(self) -> bool:
        return self.builder.cancel()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, ref: SelectableRef) -> bool:
        return self.selection.select(ref)

    def deselect_all(self) -> None:
        self.selection.deselect_all()

    def delete_selected(self) -> RemovalResult:
        """Delete the selection and every transition attached to it."""
        with self._mutation("delete selection"):
            return self.selection.delete_selected()

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def undo(self) -> bool:
        """Undo the most recent action. Returns False if there was none."""
        snapshot = self.history.undo(self.snapshot())
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def redo(self) -> bool:
        """Redo the most recently undone action. Returns False if there was none."""
        snapshot = self.history.redo(self.snapshot())
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    # -------------------------------------------------------------------------
    # Export / import
    # -------------------------------------------------------------------------

    def export_document(self) -> dict[str, Any]:
        """Serialize the automaton and mark the session clean."""
        document = serialize(self.snapshot())
        self.mark_clean()
        return document

    def export_json(self, indent: int | None = 2) -> str:
        text = serialize_json(self.snapshot(), indent=indent)
        self.mark_clean()
        return text

    def import_document(self, raw: str | bytes | Any) -> None:
        """Replace the automaton with an uploaded document.

        The upload is fully parsed and validated before the live automaton is
        touched. The import itself is one undoable step.

        Args:
            raw: Uploaded JSON text or bytes, or an already-decoded mapping.

        Raises:
            MalformedInput: If the upload is not JSON.
            SchemaViolation: If it breaks a structural rule.
        """
        data = parse_document(raw) if isinstance(raw, (str, bytes)) else raw
        snapshot = deserialize(require_valid(data))
        with self._mutation("import"):
            self._restore(snapshot)
        self.mark_clean()
        logger.info(
            "imported automaton with %d state(s) and %d transition(s)",
            len(snapshot.states),
            len(snapshot.transitions),
        )

    # -------------------------------------------------------------------------
    # Canvas input
    # -------------------------------------------------------------------------

    def set_tool(self, tool: Tool) -> None:
        if tool != self.current_tool:
            self.builder.cancel()
        self.current_tool = tool

    def toggle_snap_to_grid(self) -> bool:
        self.snap_to_grid = not self.snap_to_grid
        return self.snap_to_grid

    def handle_double_click(self, position: Position) -> str | None:
        """Add a state at the clicked position when the states tool is active."""
        if self.current_tool != Tool.STATES:
            return None
        return self.add_state(position)

    def handle_background_click(self) -> None:
        """A click on empty canvas clears the selection."""
        self.deselect_all()

    def handle_key_down(self, code: str, ctrl: bool = False) -> bool:
        """React to a key press.

        Ctrl+Delete or Ctrl+Backspace deletes the selection; S, A and T switch
        tools.

        Returns:
            True if the key was handled.
        """
        if ctrl and code in DELETE_KEYS:
            self.delete_selected()
            return True
        if not ctrl and code in TOOL_SHORTCUTS:
            self.set_tool(TOOL_SHORTCUTS[code])
            return True
        return False

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _snap(self, position: Position) -> Position:
        if not self.snap_to_grid:
            return position
        size = self.settings.grid_size
        return Position(round(position.x / size) * size, round(position.y / size) * size)

    def _require_symbols(self, symbols: Iterable[str]) -> frozenset[str]:
        symbols = frozenset(symbols)
        for symbol in symbols:
            if not self.tokens.has_symbol(symbol):
                raise InvalidReference(f"Symbol '{symbol}' is not in the alphabet", symbol)
        return symbols
