"""Tests for SelectionManager and cascading delete."""

import pytest

from statecanvas.editing.selection import CAPABILITIES, SelectableRef, SelectionManager
from statecanvas.graph.entities import Position
from statecanvas.graph.errors import InvalidReference
from statecanvas.graph.node_types import EntityKind, EventKind


@pytest.fixture
def selection(store) -> SelectionManager:
    return SelectionManager(store)


class TestSelect:
    def test_select_is_idempotent(self, store, selection):
        a = store.add_state(Position(0, 0))

        assert selection.select(SelectableRef.state(a)) is True
        assert selection.select(SelectableRef.state(a)) is False
        assert len(selection) == 1

    def test_select_highlights_once(self, store, selection, recorder):
        a = store.add_state(Position(0, 0))
        recorder.clear()

        selection.select(SelectableRef.state(a))
        selection.select(SelectableRef.state(a))

        highlights = recorder.of_kind(EventKind.HIGHLIGHT_CHANGED)
        assert len(highlights) == 1
        assert highlights[0].payload == {
            "entity_kind": EntityKind.STATE,
            "entity_id": a,
            "highlighted": True,
        }

    def test_select_unknown_entity(self, selection):
        with pytest.raises(InvalidReference):
            selection.select(SelectableRef.transition("ghost"))
        assert len(selection) == 0

    def test_deselect_all(self, store, selection, recorder):
        a = store.add_state(Position(0, 0))
        tid = store.add_transition(a, a)
        selection.select(SelectableRef.state(a))
        selection.select(SelectableRef.transition(tid))
        recorder.clear()

        selection.deselect_all()

        assert len(selection) == 0
        off = [e for e in recorder.of_kind(EventKind.HIGHLIGHT_CHANGED)]
        assert {e.payload["entity_id"] for e in off} == {a, tid}
        assert all(e.payload["highlighted"] is False for e in off)
        assert recorder.of_kind(EventKind.SELECTION_CHANGED)[-1].payload["selection"] == ()

    def test_removed_entities_leave_selection(self, store, selection):
        a = store.add_state(Position(0, 0))
        b = store.add_state(Position(1, 0))
        tid = store.add_transition(a, b)
        selection.select(SelectableRef.transition(tid))
        selection.select(SelectableRef.state(b))

        store.remove_states([a])

        assert selection.selected == [SelectableRef.state(b)]


class TestCapabilities:
    def test_every_kind_has_a_capability(self):
        assert set(CAPABILITIES) == set(EntityKind)

    def test_state_footprint_includes_incident_transitions(self, store):
        a = store.add_state(Position(0, 0))
        b = store.add_state(Position(1, 0))
        tid = store.add_transition(a, b)

        states, transitions = CAPABILITIES[EntityKind.STATE].removal_footprint(store, b)

        assert states == {b}
        assert transitions == {tid}


class TestDeleteSelected:
    def test_cascade_restricted_to_selection(self, store, selection):
        a = store.add_state(Position(0, 0))
        b = store.add_state(Position(1, 0))
        c = store.add_state(Position(2, 0))
        ab = store.add_transition(a, b)
        bc = store.add_transition(b, c)
        ca = store.add_transition(c, a)
        cc = store.add_transition(c, c)
        selection.select(SelectableRef.state(b))
        selection.select(SelectableRef.transition(cc))

        result = selection.delete_selected()

        assert set(result.state_ids) == {b}
        assert set(result.transition_ids) == {ab, bc, cc}
        assert [t.id for t in store.transitions()] == [ca]
        assert {s.id for s in store.states()} == {a, c}
        assert len(selection) == 0

    def test_unselected_transitions_between_kept_states_survive(self, store, selection):
        # Regression: only selected transitions and those touching selected
        # states go; everything else stays.
        a = store.add_state(Position(0, 0))
        b = store.add_state(Position(1, 0))
        keep = store.add_transition(a, b)
        doomed = store.add_transition(b, a)
        selection.select(SelectableRef.transition(doomed))

        selection.delete_selected()

        assert [t.id for t in store.transitions()] == [keep]
        assert len(store) == 2

    def test_deleting_start_state_clears_it(self, store, selection):
        a = store.add_state(Position(0, 0))
        store.add_state(Position(1, 0))
        selection.select(SelectableRef.state(a))

        result = selection.delete_selected()

        assert result.start_state_cleared
        assert store.start_state_id is None

    def test_transition_and_its_state_both_selected(self, store, selection):
        a = store.add_state(Position(0, 0))
        tid = store.add_transition(a, a)
        selection.select(SelectableRef.transition(tid))
        selection.select(SelectableRef.state(a))

        result = selection.delete_selected()

        assert result.transition_ids == (tid,)
        assert len(store) == 0

    def test_empty_selection_is_noop(self, store, selection):
        store.add_state(Position(0, 0))

        result = selection.delete_selected()

        assert result.is_empty
        assert len(store) == 1
