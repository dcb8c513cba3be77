"""Immutable value types for the entities held by the graph store."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    """A point in scene coordinates."""

    x: float
    y: float

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class StateNode:
    """A vertex of the automaton."""

    id: str
    position: Position
    is_accepting: bool = False
    label: str | None = None


@dataclass(frozen=True)
class Transition:
    """A directed edge between two state-nodes.

    Endpoints are state ids resolved through the store, never node objects.
    """

    id: str
    source_id: str
    target_id: str
    symbols: frozenset[str] = field(default_factory=frozenset)

    def involves(self, state_id: str) -> bool:
        """Check whether a state is either endpoint of this transition."""
        return state_id in (self.source_id, self.target_id)

    @property
    def is_self_loop(self) -> bool:
        return self.source_id == self.target_id


@dataclass(frozen=True)
class Token:
    """An alphabet symbol owned by the token registry."""

    id: str
    symbol: str


@dataclass(frozen=True)
class RemovalResult:
    """What a (possibly cascading) removal actually deleted."""

    state_ids: tuple[str, ...] = ()
    transition_ids: tuple[str, ...] = ()
    start_state_cleared: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.state_ids and not self.transition_ids
