"""Pydantic models for the exchanged automaton document."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_id(value):
    """Accept integer ids and store them as strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class _Record(BaseModel):
    # Unknown fields are tolerated on load and never written back.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StateRecord(_Record):
    """A state-node as written in the document."""

    id: str
    x: float
    y: float
    is_accepting: bool = Field(default=False, alias="isAccepting")
    label: str | None = None

    normalize_id = field_validator("id", mode="before")(_coerce_id)


class TransitionRecord(_Record):
    """A transition as written in the document."""

    id: str
    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")
    symbols: list[str] = Field(default_factory=list)

    normalize_ids = field_validator("id", "source_id", "target_id", mode="before")(
        _coerce_id
    )


class AutomatonDocument(_Record):
    """Root of an exported automaton."""

    states: list[StateRecord]
    transitions: list[TransitionRecord]
    alphabet: list[str]
    start_state_id: str | None = Field(default=None, alias="startStateId")

    normalize_start = field_validator("start_state_id", mode="before")(_coerce_id)

    def get_state_ids(self) -> list[str]:
        """Get all state ids, duplicates included."""
        return [s.id for s in self.states]

    def get_transition_ids(self) -> list[str]:
        return [t.id for t in self.transitions]
