"""Editing-layer exceptions."""

from ..errors import EditorError


class BuilderStateError(EditorError):
    """Raised when the tentative transition builder is driven out of order."""

    def __init__(self, message: str, phase: str | None = None):
        self.phase = phase
        super().__init__(message)
