"""Base exception for the editing engine."""


class EditorError(Exception):
    """Base class for every error raised by statecanvas."""

    pass
