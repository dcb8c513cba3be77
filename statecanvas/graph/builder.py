"""Builder for converting an AutomatonDocument into a GraphStore."""

from ..schema.models import AutomatonDocument
from ..schema.serializer import deserialize
from .events import EventBus
from .store import GraphStore


def build_store(document: AutomatonDocument, bus: EventBus | None = None) -> GraphStore:
    """Build a GraphStore holding the states and transitions of a document.

    Args:
        document: A document with consistent references.
        bus: Optional event bus for the new store.

    Returns:
        A populated GraphStore.

    Raises:
        InvalidReference: If the document has dangling or duplicate ids.
    """
    snapshot = deserialize(document)
    store = GraphStore(bus)
    store.load(snapshot.states, snapshot.transitions, snapshot.start_state_id)
    return store
