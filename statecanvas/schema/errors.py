"""Document loading exceptions."""

from ..errors import EditorError


class MalformedInput(EditorError):
    """Raised when an upload cannot be parsed as JSON at all."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaViolation(EditorError):
    """Raised when a parsed document breaks a structural rule."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        code: str | None = None,
    ):
        self.errors = errors or []
        self.code = code
        super().__init__(message)
