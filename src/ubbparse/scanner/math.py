"""LaTeX delimiter scanning mixin.

Every ``$`` is a delimiter, and ``$$`` is preferred over ``$``. When the
matching closer appears later in the input, the expression body between
them is raw text (no tag recognition). Without a closer only the opening
delimiter is emitted and scanning carries on as usual; the parser decides
what an unclosed expression holds. Use ``math_enabled=False`` to keep
prices like ``$5`` as plain text.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from ubbparse.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Callable


class MathScannerMixin:
    """Mixin for scanning ``$inline$`` and ``$$block$$`` expressions.

    Required Host Attributes:
        - _source: str
        - _pos: int

    Required Host Methods:
        - _flush_text() -> Iterator[Token]
        - _emit(token_type, length, value="") -> Token

    """

    __slots__ = ()

    _source: str
    _pos: int

    _flush_text: Callable[[], Iterator[Token]]
    _emit: Callable[..., Token]

    def _scan_dollar(self) -> Iterator[Token]:
        """Handle a ``$`` in text mode."""
        if self._source.startswith("$$", self._pos):
            delimiter, marker = TokenType.DOUBLE_DOLLAR, "$$"
        else:
            delimiter, marker = TokenType.DOLLAR, "$"

        yield from self._flush_text()
        yield self._emit(delimiter, len(marker))

        close = self._source.find(marker, self._pos)
        if close == -1:
            return
        body = self._source[self._pos : close]
        if body:
            yield self._emit(TokenType.TEXT, len(body), body)
        yield self._emit(delimiter, len(marker))
