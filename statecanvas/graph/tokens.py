"""TokenRegistry: the alphabet of the automaton."""

import logging
import string
from itertools import count
from typing import Iterable, Iterator

from .entities import Token
from .errors import DuplicateSymbol, InvalidReference
from .events import EventBus
from .node_types import EventKind
from .store import new_id

logger = logging.getLogger(__name__)


def _placeholder_symbols() -> Iterator[str]:
    """Yield a, b, ..., z, a1, b1, ..., z1, a2, ..."""
    yield from string.ascii_lowercase
    for n in count(1):
        for letter in string.ascii_lowercase:
            yield f"{letter}{n}"


class TokenRegistry:
    """Owns the alphabet: an insertion-ordered set of unique symbols."""

    def __init__(self, bus: EventBus | None = None, epsilon_symbol: str = "ε"):
        self._tokens: dict[str, Token] = {}
        self._bus = bus or EventBus()
        self.epsilon_symbol = epsilon_symbol

    def add_token(self, symbol: str | None = None) -> str:
        """Add a token to the alphabet.

        Args:
            symbol: The symbol text. When omitted, the first unused placeholder
                (a, b, ... z, a1, ...) is chosen.

        Returns:
            The token id.

        Raises:
            DuplicateSymbol: If the explicit symbol is already registered.
        """
        if symbol is None:
            symbol = self._next_placeholder()
        elif self.has_symbol(symbol):
            raise DuplicateSymbol(symbol)

        token = Token(id=new_id(), symbol=symbol)
        self._tokens[token.id] = token
        logger.debug("added token %s = %r", token.id, symbol)
        self._emit()
        return token.id

    def add_epsilon(self) -> str:
        """Add the empty-string marker to the alphabet."""
        return self.add_token(self.epsilon_symbol)

    def remove_token(self, token_id: str) -> Token:
        """Remove a token.

        Detaching the symbol from transitions is the caller's job; the registry
        only knows the alphabet.

        Raises:
            InvalidReference: If the token does not exist.
        """
        token = self.get_token(token_id)
        del self._tokens[token_id]
        logger.debug("removed token %s = %r", token_id, token.symbol)
        self._emit()
        return token

    def rename_token(self, token_id: str, symbol: str) -> Token:
        """Change the symbol of a token.

        Raises:
            InvalidReference: If the token does not exist.
            DuplicateSymbol: If another token already uses the symbol.
        """
        token = self.get_token(token_id)
        if symbol == token.symbol:
            return token
        if self.has_symbol(symbol):
            raise DuplicateSymbol(symbol)
        renamed = Token(id=token_id, symbol=symbol)
        self._tokens[token_id] = renamed
        self._emit()
        return renamed

    def get_token(self, token_id: str) -> Token:
        try:
            return self._tokens[token_id]
        except KeyError:
            raise InvalidReference(f"Unknown token '{token_id}'", token_id) from None

    def find(self, symbol: str) -> Token | None:
        """Get the token carrying a symbol, if any."""
        for token in self._tokens.values():
            if token.symbol == symbol:
                return token
        return None

    def has_symbol(self, symbol: str) -> bool:
        return self.find(symbol) is not None

    def tokens(self) -> list[Token]:
        """Get all tokens in insertion order."""
        return list(self._tokens.values())

    def list_alphabet(self) -> list[str]:
        """Get a copy of the alphabet in insertion order."""
        return [token.symbol for token in self._tokens.values()]

    def load(self, tokens: Iterable[Token]) -> None:
        """Replace the whole alphabet.

        Raises:
            DuplicateSymbol: If two tokens share a symbol. Nothing changes then.
        """
        tokens = list(tokens)
        seen: set[str] = set()
        for token in tokens:
            if token.symbol in seen:
                raise DuplicateSymbol(token.symbol)
            seen.add(token.symbol)
        self._tokens = {token.id: token for token in tokens}
        self._emit()

    def __len__(self) -> int:
        return len(self._tokens)

    def _next_placeholder(self) -> str:
        taken = set(self.list_alphabet())
        for candidate in _placeholder_symbols():
            if candidate not in taken:
                return candidate
        raise AssertionError("unreachable")  # pragma: no cover

    def _emit(self) -> None:
        self._bus.emit(EventKind.ALPHABET_CHANGED, alphabet=self.list_alphabet())
