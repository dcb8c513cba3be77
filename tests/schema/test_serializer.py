"""Tests for serialization and deserialization."""

import json

from statecanvas.graph.entities import Position, StateNode, Token, Transition
from statecanvas.graph.snapshot import Snapshot
from statecanvas.schema.loader import parse_automaton
from statecanvas.schema.serializer import deserialize, serialize, serialize_json


def _sample() -> Snapshot:
    return Snapshot(
        states=(
            StateNode("q0", Position(0.0, 0.0)),
            StateNode("q1", Position(12.5, -3.0), is_accepting=True, label="done"),
        ),
        transitions=(
            Transition("t0", "q0", "q1", frozenset({"b", "a"})),
            Transition("t1", "q1", "q1", frozenset()),
        ),
        tokens=(Token("k0", "a"), Token("k1", "b")),
        start_state_id="q0",
    )


class TestSerialize:
    def test_document_fields(self):
        document = serialize(_sample())

        assert document["startStateId"] == "q0"
        assert document["alphabet"] == ["a", "b"]
        assert document["states"][1] == {
            "id": "q1",
            "x": 12.5,
            "y": -3.0,
            "isAccepting": True,
            "label": "done",
        }
        assert document["transitions"][0] == {
            "id": "t0",
            "sourceId": "q0",
            "targetId": "q1",
            "symbols": ["a", "b"],
        }

    def test_json_text(self):
        text = serialize_json(Snapshot(tokens=(Token("e", "ε"),)))

        assert "ε" in text
        assert json.loads(text)["alphabet"] == ["ε"]


class TestDeserialize:
    def test_round_trip_is_lossless(self):
        original = _sample()

        restored = deserialize(parse_automaton(serialize(original)))

        assert restored.states == original.states
        assert restored.transitions == original.transitions
        assert restored.alphabet == original.alphabet
        assert restored.start_state_id == original.start_state_id

    def test_document_round_trip(self, examples_dir):
        data = json.loads((examples_dir / "even_zeros.json").read_text(encoding="utf-8"))

        assert serialize(deserialize(parse_automaton(data))) == data

    def test_duplicate_symbols_within_transition_collapse(self, minimal_document):
        minimal_document["transitions"][0]["symbols"] = ["a", "a"]

        snapshot = deserialize(parse_automaton(minimal_document))

        assert snapshot.transitions[0].symbols == frozenset({"a"})
