"""Tests for the validation runner and advisory checks."""

import pytest

from statecanvas.schema.errors import SchemaViolation
from statecanvas.validators.base import Severity
from statecanvas.validators.runner import (
    require_valid,
    run_validators,
    validate_document,
    validate_document_file,
)


class TestValidateDocument:
    def test_sound_document(self, minimal_document):
        assert validate_document(minimal_document) == (True, None)

    def test_shape_error_comes_first(self, minimal_document):
        del minimal_document["states"][0]["x"]
        minimal_document["alphabet"] = ["a", "a"]

        ok, message = validate_document(minimal_document)

        assert not ok
        assert "schema" in message
        assert "states.0.x" in message

    def test_rule_order(self, minimal_document):
        # Break every rule at once; the endpoint rule is reported first.
        minimal_document["transitions"][0]["sourceId"] = "ghost"
        minimal_document["startStateId"] = "nobody"
        minimal_document["states"].append(dict(minimal_document["states"][0]))
        minimal_document["alphabet"] = ["a", "a"]

        result = run_validators(minimal_document)

        assert [e.code for e in result.errors] == [
            "UNDEFINED_SOURCE_STATE",
            "UNDEFINED_START_STATE",
            "DUPLICATE_STATE_ID",
            "DUPLICATE_SYMBOL",
        ]
        ok, message = validate_document(minimal_document)
        assert not ok
        assert message == result.errors[0].message

    def test_non_object_is_schema_error(self):
        ok, message = validate_document("just a string")

        assert not ok
        assert "str" in message

    def test_semantic_gaps_do_not_fail(self, minimal_document):
        # No transition on some symbol from q1: incomplete, but sound.
        minimal_document["alphabet"].append("b")

        assert validate_document(minimal_document) == (True, None)


class TestRequireValid:
    def test_returns_document(self, minimal_document):
        document = require_valid(minimal_document)

        assert document.start_state_id == "q0"

    def test_raises_with_rule_code(self, minimal_document):
        minimal_document["alphabet"] = ["a", "a"]

        with pytest.raises(SchemaViolation) as exc_info:
            require_valid(minimal_document)
        assert exc_info.value.code == "DUPLICATE_SYMBOL"


class TestAdvisoryWarnings:
    def test_unreachable_state_warning(self, minimal_document):
        minimal_document["states"].append(
            {"id": "lost", "x": 5, "y": 5, "isAccepting": False, "label": None}
        )

        result = run_validators(minimal_document)

        assert result.is_valid
        assert [w.code for w in result.warnings] == ["UNREACHABLE_STATE"]
        assert result.warnings[0].entity_id == "lost"

    def test_no_start_state_warning(self, minimal_document):
        minimal_document["startStateId"] = None

        result = run_validators(minimal_document)

        assert [w.code for w in result.warnings] == ["NO_START_STATE"]

    def test_undeclared_symbol_warning(self, minimal_document):
        minimal_document["transitions"][0]["symbols"] = ["a", "z"]

        result = run_validators(minimal_document)

        assert result.is_valid
        warning = result.warnings[0]
        assert warning.code == "UNDECLARED_SYMBOL"
        assert warning.severity == Severity.WARNING
        assert warning.details["symbol"] == "z"

    def test_warnings_skipped_when_errors_exist(self, minimal_document):
        minimal_document["transitions"][0]["sourceId"] = "ghost"
        minimal_document["states"].append(
            {"id": "lost", "x": 5, "y": 5, "isAccepting": False, "label": None}
        )

        result = run_validators(minimal_document)

        assert result.warnings == []


class TestValidateFile:
    def test_example_files(self, examples_dir):
        assert validate_document_file(examples_dir / "even_zeros.json").is_valid
        assert not validate_document_file(
            examples_dir / "invalid" / "dangling_source.json"
        ).is_valid
        assert not validate_document_file(
            examples_dir / "invalid" / "duplicate_symbol.json"
        ).is_valid
