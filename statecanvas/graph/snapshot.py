"""Immutable point-in-time copies of the editable automaton."""

from dataclasses import dataclass

from .entities import StateNode, Token, Transition
from .errors import DuplicateSymbol
from .store import GraphStore
from .tokens import TokenRegistry


@dataclass(frozen=True)
class Snapshot:
    """Deep, immutable copy of states, transitions, alphabet and start-state.

    Every member is a frozen value, so sharing a snapshot between the undo
    and redo stacks never aliases mutable state.
    """

    states: tuple[StateNode, ...] = ()
    transitions: tuple[Transition, ...] = ()
    tokens: tuple[Token, ...] = ()
    start_state_id: str | None = None

    @classmethod
    def capture(cls, store: GraphStore, registry: TokenRegistry) -> "Snapshot":
        """Copy the live content of a store and registry."""
        return cls(
            states=tuple(store.states()),
            transitions=tuple(store.transitions()),
            tokens=tuple(registry.tokens()),
            start_state_id=store.start_state_id,
        )

    @property
    def alphabet(self) -> tuple[str, ...]:
        return tuple(token.symbol for token in self.tokens)

    def restore_into(self, store: GraphStore, registry: TokenRegistry) -> None:
        """Make a store and registry hold exactly this snapshot.

        Raises:
            InvalidReference: If the snapshot graph is inconsistent.
            DuplicateSymbol: If the snapshot alphabet repeats a symbol.
        """
        symbols = self.alphabet
        if len(set(symbols)) != len(symbols):
            duplicate = next(s for s in symbols if symbols.count(s) > 1)
            raise DuplicateSymbol(duplicate)

        store.load(self.states, self.transitions, self.start_state_id)
        registry.load(self.tokens)
