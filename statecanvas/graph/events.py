"""Notification plumbing between the editing engine and the presentation layer."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .node_types import EventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorEvent:
    """A single notification for the rendering collaborator."""

    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[EditorEvent], None]


class EventBus:
    """Synchronous fan-out of editor events to subscribed listeners.

    Listeners run in subscription order, inside the call that triggered the
    event. Data mutations are always complete before an event is emitted.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable receiving every emitted event.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: EventKind, /, **payload: Any) -> None:
        """Build an event and deliver it to every listener."""
        event = EditorEvent(kind=kind, payload=payload)
        logger.debug("emit %s %s", kind.value, payload)
        for listener in list(self._listeners):
            listener(event)


class EventRecorder:
    """Listener that keeps every event it receives, in order."""

    def __init__(self):
        self.events: list[EditorEvent] = []

    def __call__(self, event: EditorEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[EventKind]:
        """Get the kinds of all recorded events."""
        return [e.kind for e in self.events]

    def of_kind(self, kind: EventKind) -> list[EditorEvent]:
        """Get recorded events of one kind."""
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()
