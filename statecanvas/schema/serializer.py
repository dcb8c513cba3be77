"""Conversion between snapshots and exchanged documents."""

import json
from typing import Any

from ..graph.entities import Position, StateNode, Token, Transition
from ..graph.snapshot import Snapshot
from ..graph.store import new_id
from .models import AutomatonDocument, StateRecord, TransitionRecord


def to_document(snapshot: Snapshot) -> AutomatonDocument:
    """Build the document model for a snapshot."""
    return AutomatonDocument(
        states=[
            StateRecord(
                id=state.id,
                x=state.position.x,
                y=state.position.y,
                is_accepting=state.is_accepting,
                label=state.label,
            )
            for state in snapshot.states
        ],
        transitions=[
            TransitionRecord(
                id=transition.id,
                source_id=transition.source_id,
                target_id=transition.target_id,
                symbols=sorted(transition.symbols),
            )
            for transition in snapshot.transitions
        ],
        alphabet=list(snapshot.alphabet),
        start_state_id=snapshot.start_state_id,
    )


def serialize(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to a JSON-ready document.

    Transition symbols are written sorted; their order carries no meaning.
    """
    return to_document(snapshot).model_dump(by_alias=True)


def serialize_json(snapshot: Snapshot, indent: int | None = 2) -> str:
    return json.dumps(serialize(snapshot), indent=indent, ensure_ascii=False)


def deserialize(document: AutomatonDocument) -> Snapshot:
    """Rebuild a snapshot from a validated document.

    Ids, positions, flags, labels and symbol sets are carried over as-is.
    Tokens get fresh ids since the document only stores symbols.

    Args:
        document: A document that already passed validation.

    Returns:
        The reconstructed Snapshot.
    """
    return Snapshot(
        states=tuple(
            StateNode(
                id=record.id,
                position=Position(record.x, record.y),
                is_accepting=record.is_accepting,
                label=record.label,
            )
            for record in document.states
        ),
        transitions=tuple(
            Transition(
                id=record.id,
                source_id=record.source_id,
                target_id=record.target_id,
                symbols=frozenset(record.symbols),
            )
            for record in document.transitions
        ),
        tokens=tuple(Token(id=new_id(), symbol=s) for s in document.alphabet),
        start_state_id=document.start_state_id,
    )
