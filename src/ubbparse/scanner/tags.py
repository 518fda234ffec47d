"""Tag header scanning mixin.

Recognizes ``[name]``, ``[/name]`` and ``[name=value,value]`` headers and
the raw bodies of verbatim tags. A ``[`` that does not start a header is
left to the text run.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ubbparse.scanner.modes import (
    ATTR_STOP_CHARS,
    LIST_ITEM_NAME,
    TAG_NAME_CHARS,
    TAG_NAME_START,
    ScannerMode,
)
from ubbparse.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Callable


class TagScannerMixin:
    """Mixin for scanning tag headers and verbatim bodies.

    Required Host Attributes:
        - _source: str
        - _source_len: int
        - _pos: int
        - _mode: ScannerMode
        - _pending_verbatim: str | None
        - _verbatim_name: str
        - _verbatim_tags: frozenset[str]

    Required Host Methods:
        - _extend_text(end) -> None
        - _flush_text() -> Iterator[Token]
        - _emit(token_type, length, value="") -> Token

    """

    __slots__ = ()

    _source: str
    _source_len: int
    _pos: int
    _mode: ScannerMode
    _pending_verbatim: str | None
    _verbatim_name: str
    _verbatim_tags: frozenset[str]

    _extend_text: Callable[[int], None]
    _flush_text: Callable[[], Iterator[Token]]
    _emit: Callable[..., Token]

    def _match_tag_header(self, pos: int) -> tuple[bool, int, int] | None:
        """Check whether a tag header starts at ``pos`` (a ``[``).

        Pure lookahead: does not move the position.

        Returns:
            (is_closing, name_start, name_end) or None if the bracket is literal.
        """
        source = self._source
        source_len = self._source_len
        i = pos + 1
        is_closing = i < source_len and source[i] == "/"
        if is_closing:
            i += 1
        if i >= source_len:
            return None

        first = source[i]
        if first == LIST_ITEM_NAME:
            end = i + 1
        elif first in TAG_NAME_START:
            end = i + 1
            while end < source_len and source[end] in TAG_NAME_CHARS:
                end += 1
        else:
            return None

        after = source[end] if end < source_len else ""
        if after == "]" or after == "":
            return is_closing, i, end
        if after == "=" and not is_closing:
            return is_closing, i, end
        return None

    def _scan_bracket(self) -> Iterator[Token]:
        """Handle a ``[`` in text mode."""
        header = self._match_tag_header(self._pos)
        if header is None:
            # Not a tag: the bracket is ordinary text
            self._extend_text(self._pos + 1)
            return

        is_closing, name_start, name_end = header
        name = self._source[name_start:name_end]

        yield from self._flush_text()
        yield self._emit(TokenType.LEFT_BRACKET, 1)
        if is_closing:
            yield self._emit(TokenType.SLASH, 1)
        yield self._emit(TokenType.TAG_NAME, len(name), name)

        if self._pos >= self._source_len:
            return

        lowered = name.lower()
        verbatim = None if is_closing or lowered not in self._verbatim_tags else lowered
        if self._source[self._pos] == "]":
            yield self._emit(TokenType.RIGHT_BRACKET, 1)
            self._enter_body(verbatim)
        else:
            yield self._emit(TokenType.EQUAL, 1)
            self._pending_verbatim = verbatim
            self._mode = ScannerMode.TAG

    def _scan_attribute_list(self) -> Iterator[Token]:
        """Scan one unit of an attribute list (after ``[name=``)."""
        char = self._source[self._pos]
        if char == ",":
            yield self._emit(TokenType.COMMA, 1)
        elif char == "]":
            yield self._emit(TokenType.RIGHT_BRACKET, 1)
            self._enter_body(self._pending_verbatim)
            self._pending_verbatim = None
        else:
            source = self._source
            end = self._pos
            while end < self._source_len and source[end] not in ATTR_STOP_CHARS:
                end += 1
            yield self._emit(
                TokenType.ATTR_VALUE, end - self._pos, source[self._pos : end]
            )

    def _enter_body(self, verbatim: str | None) -> None:
        """Switch mode after a header's closing bracket."""
        if verbatim is None:
            self._mode = ScannerMode.TEXT
        else:
            self._verbatim_name = verbatim
            self._mode = ScannerMode.VERBATIM

    def _scan_verbatim_body(self) -> None:
        """Consume a verbatim body up to its closing tag as literal text.

        Without a closer the body runs to end of input.
        """
        closer = re.compile(re.escape(f"[/{self._verbatim_name}]"), re.IGNORECASE | re.ASCII)
        match = closer.search(self._source, self._pos)
        end = match.start() if match is not None else self._source_len
        self._extend_text(end)
        self._mode = ScannerMode.TEXT
