"""Tests for TokenRegistry."""

import pytest

from statecanvas.graph.entities import Token
from statecanvas.graph.errors import DuplicateSymbol, InvalidReference
from statecanvas.graph.node_types import EventKind


class TestAddToken:
    def test_placeholders_are_sequential_and_unique(self, registry):
        for _ in range(3):
            registry.add_token()

        assert registry.list_alphabet() == ["a", "b", "c"]

    def test_placeholder_skips_taken_symbols(self, registry):
        registry.add_token("a")
        registry.add_token("c")
        registry.add_token()

        assert registry.list_alphabet() == ["a", "c", "b"]

    def test_placeholders_continue_past_z(self, registry):
        for _ in range(27):
            registry.add_token()

        assert registry.list_alphabet()[-1] == "a1"
        assert len(set(registry.list_alphabet())) == 27

    def test_explicit_duplicate_rejected(self, registry):
        registry.add_token("0")

        with pytest.raises(DuplicateSymbol):
            registry.add_token("0")
        assert len(registry) == 1

    def test_epsilon_marker(self, registry):
        registry.add_epsilon()

        assert registry.list_alphabet() == ["ε"]

    def test_emits_alphabet_changed(self, registry, recorder):
        registry.add_token("x")

        event = recorder.of_kind(EventKind.ALPHABET_CHANGED)[0]
        assert event.payload["alphabet"] == ["x"]


class TestRemoveAndRename:
    def test_remove_token(self, registry):
        tid = registry.add_token("x")
        registry.add_token("y")

        removed = registry.remove_token(tid)

        assert removed.symbol == "x"
        assert registry.list_alphabet() == ["y"]

    def test_remove_unknown(self, registry):
        with pytest.raises(InvalidReference):
            registry.remove_token("nope")

    def test_rename_token(self, registry):
        tid = registry.add_token("x")

        registry.rename_token(tid, "z")

        assert registry.get_token(tid).symbol == "z"

    def test_rename_to_taken_symbol(self, registry):
        tid = registry.add_token("x")
        registry.add_token("y")

        with pytest.raises(DuplicateSymbol):
            registry.rename_token(tid, "y")
        assert registry.list_alphabet() == ["x", "y"]

    def test_list_alphabet_is_a_copy(self, registry):
        registry.add_token("x")

        alphabet = registry.list_alphabet()
        alphabet.append("hacked")

        assert registry.list_alphabet() == ["x"]


class TestLoad:
    def test_load_rejects_duplicates_without_change(self, registry):
        registry.add_token("keep")

        with pytest.raises(DuplicateSymbol):
            registry.load([Token("1", "a"), Token("2", "a")])
        assert registry.list_alphabet() == ["keep"]
