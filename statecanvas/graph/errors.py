"""Graph store exceptions."""

from ..errors import EditorError


class InvalidReference(EditorError):
    """Raised when an operation names an entity that is not in the store."""

    def __init__(self, message: str, ref: str | None = None):
        self.ref = ref
        super().__init__(message)


class DuplicateSymbol(EditorError):
    """Raised when a token symbol is already part of the alphabet."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Symbol '{symbol}' is already in the alphabet")
