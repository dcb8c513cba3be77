"""Tests for the document models."""

import pytest
from pydantic import ValidationError

from statecanvas.schema.models import AutomatonDocument, StateRecord, TransitionRecord


class TestStateRecord:
    def test_aliases(self):
        record = StateRecord.model_validate(
            {"id": "q0", "x": 1, "y": 2.5, "isAccepting": True, "label": "start"}
        )

        assert record.is_accepting is True
        assert record.x == 1.0
        assert record.label == "start"

    def test_defaults(self):
        record = StateRecord.model_validate({"id": "q0", "x": 0, "y": 0})

        assert record.is_accepting is False
        assert record.label is None

    def test_integer_id_becomes_string(self):
        record = StateRecord.model_validate({"id": 7, "x": 0, "y": 0})

        assert record.id == "7"

    def test_missing_position(self):
        with pytest.raises(ValidationError):
            StateRecord.model_validate({"id": "q0"})


class TestTransitionRecord:
    def test_aliases(self):
        record = TransitionRecord.model_validate(
            {"id": "t", "sourceId": 1, "targetId": "q2", "symbols": ["a"]}
        )

        assert record.source_id == "1"
        assert record.target_id == "q2"
        assert record.symbols == ["a"]

    def test_symbols_default_empty(self):
        record = TransitionRecord.model_validate(
            {"id": "t", "sourceId": "a", "targetId": "b"}
        )

        assert record.symbols == []


class TestAutomatonDocument:
    def test_unknown_fields_are_dropped(self, minimal_document):
        minimal_document["editorVersion"] = "9.9"
        minimal_document["states"][0]["color"] = "blue"

        document = AutomatonDocument.model_validate(minimal_document)
        dumped = document.model_dump(by_alias=True)

        assert "editorVersion" not in dumped
        assert "color" not in dumped["states"][0]

    def test_start_state_optional(self, minimal_document):
        del minimal_document["startStateId"]

        document = AutomatonDocument.model_validate(minimal_document)

        assert document.start_state_id is None

    def test_alphabet_required(self, minimal_document):
        del minimal_document["alphabet"]

        with pytest.raises(ValidationError):
            AutomatonDocument.model_validate(minimal_document)

    def test_dump_uses_exchange_names(self, minimal_document):
        dumped = AutomatonDocument.model_validate(minimal_document).model_dump(by_alias=True)

        assert set(dumped) == {"states", "transitions", "alphabet", "startStateId"}
        assert set(dumped["states"][0]) == {"id", "x", "y", "isAccepting", "label"}
        assert set(dumped["transitions"][0]) == {"id", "sourceId", "targetId", "symbols"}
