"""Tests for document loading."""

import pytest

from statecanvas.schema.errors import MalformedInput, SchemaViolation
from statecanvas.schema.loader import load_document, parse_automaton, parse_document


class TestParseDocument:
    def test_parse_text_and_bytes(self):
        assert parse_document('{"a": 1}') == {"a": 1}
        assert parse_document(b'{"a": 1}') == {"a": 1}

    def test_not_json(self):
        with pytest.raises(MalformedInput) as exc_info:
            parse_document("states: []")
        assert str(exc_info.value) == "The file does not contain valid JSON."

    def test_undecodable_bytes(self):
        with pytest.raises(MalformedInput):
            parse_document(b"\xff\xfe\x00garbage")


class TestLoadDocument:
    def test_load_example(self, examples_dir):
        data = load_document(examples_dir / "even_zeros.json")

        assert data["startStateId"] == "q0"

    def test_file_not_found(self):
        with pytest.raises(MalformedInput) as exc_info:
            load_document("/nonexistent/automaton.json")
        assert "not found" in str(exc_info.value).lower()

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(MalformedInput):
            load_document(tmp_path)

    def test_invalid_json_file_keeps_path(self, examples_dir):
        path = examples_dir / "invalid" / "not_json.json"

        with pytest.raises(MalformedInput) as exc_info:
            load_document(path)
        assert exc_info.value.path == str(path)


class TestParseAutomaton:
    def test_valid(self, minimal_document):
        document = parse_automaton(minimal_document)

        assert document.get_state_ids() == ["q0", "q1"]

    def test_non_object_root(self):
        with pytest.raises(SchemaViolation) as exc_info:
            parse_automaton([1, 2, 3])
        assert "list" in str(exc_info.value)

    def test_shape_errors_are_flattened(self, minimal_document):
        minimal_document["states"][1]["x"] = "far away"

        with pytest.raises(SchemaViolation) as exc_info:
            parse_automaton(minimal_document)

        errors = exc_info.value.errors
        assert errors[0]["loc"] == "states.1.x"
        assert exc_info.value.code == "SCHEMA_SHAPE"
