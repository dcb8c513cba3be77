"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from statecanvas.config import EditorSettings
from statecanvas.editing.session import EditorSession
from statecanvas.graph.entities import Position
from statecanvas.graph.events import EventBus, EventRecorder
from statecanvas.graph.store import GraphStore
from statecanvas.graph.tokens import TokenRegistry


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def minimal_document() -> dict:
    """Return a small valid document: q0 --a--> q1, q1 accepting."""
    return {
        "states": [
            {"id": "q0", "x": 0, "y": 0, "isAccepting": False, "label": None},
            {"id": "q1", "x": 100, "y": 0, "isAccepting": True, "label": "end"},
        ],
        "transitions": [
            {"id": "t0", "sourceId": "q0", "targetId": "q1", "symbols": ["a"]},
        ],
        "alphabet": ["a"],
        "startStateId": "q0",
    }


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus) -> EventRecorder:
    """Return a recorder subscribed to the shared bus."""
    recorder = EventRecorder()
    bus.subscribe(recorder)
    return recorder


@pytest.fixture
def store(bus) -> GraphStore:
    return GraphStore(bus)


@pytest.fixture
def registry(bus) -> TokenRegistry:
    return TokenRegistry(bus)


@pytest.fixture
def settings() -> EditorSettings:
    return EditorSettings(node_radius=2, arrow_padding=1)


@pytest.fixture
def session(settings) -> EditorSession:
    return EditorSession(settings)


@pytest.fixture
def triangle(session):
    """Return a session holding a -> b -> c -> a plus a self-loop on b.

    Returns:
        Tuple of (session, state ids dict, transition ids dict).
    """
    states = {
        "a": session.add_state(Position(0, 0)),
        "b": session.add_state(Position(100, 0)),
        "c": session.add_state(Position(50, 80)),
    }
    transitions = {
        "ab": session.add_transition(states["a"], states["b"]),
        "bc": session.add_transition(states["b"], states["c"]),
        "ca": session.add_transition(states["c"], states["a"]),
        "bb": session.add_transition(states["b"], states["b"]),
    }
    return session, states, transitions
