"""Token navigation utilities for the UBB parser.

Provides mixin for token stream navigation. Running off the end of the
token list behaves exactly like reading an EOF token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ubbparse.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence

# Returned for any read past the end of the token list (position -1).
EOF_SENTINEL = Token(TokenType.EOF)


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int

    def _at_end(self) -> bool:
        """Check if at end of token stream (an EOF token or past the list)."""
        return self._peek().type is TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos]
        return EOF_SENTINEL

    def _peek_type(self, offset: int = 0) -> TokenType:
        return self._peek(offset).type

    def _consume(self) -> Token:
        """Return the current token and advance past it.

        At the end of the list this returns the EOF sentinel without moving.
        """
        token = self._peek()
        if self._pos < self._tokens_len:
            self._pos += 1
        return token
