"""State-machine scanner with O(n) guaranteed performance.

Text is consumed in maximal runs between delimiters (``[`` and ``$``).
At a ``[`` the scanner checks whether a real tag header starts there; if
not, the bracket simply joins the surrounding text run. With math enabled
every ``$`` is a LaTeX delimiter.
Position only moves forward.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from ubbparse.config import get_parse_config
from ubbparse.errors import ParseError
from ubbparse.scanner.math import MathScannerMixin
from ubbparse.scanner.modes import ScannerMode
from ubbparse.scanner.tags import TagScannerMixin
from ubbparse.tokens import Token, TokenType


class Scanner(TagScannerMixin, MathScannerMixin):
    """Converts UBB markup into a token sequence.

    Usage:
            >>> tokens = list(Scanner("Math: $x^2$").tokenize())
            >>> [t.type.name for t in tokens]
            ['TEXT', 'DOLLAR', 'TEXT', 'DOLLAR', 'EOF']

    Configuration (read from the active ParseConfig at construction):
        - math_enabled: recognize ``$`` / ``$$`` delimiters
        - verbatim_tags: tags whose body is emitted as one raw TEXT token

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_source_file",
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        # Pending text run
        "_text_start",
        "_text_lineno",
        "_text_col",
        # Cached delimiter search results
        "_next_bracket",
        "_next_dollar",
        # Tag state
        "_pending_verbatim",  # Verbatim tag whose header is still open
        "_verbatim_name",
        # Configuration snapshot
        "_math_enabled",
        "_verbatim_tags",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize scanner with source text.

        Args:
            source: UBB markup text
            source_file: Optional source file path for token locations

        Raises:
            ParseError: If ``source`` is not a ``str``.
        """
        if not isinstance(source, str):
            msg = f"UBB source must be str, got {type(source).__name__}"
            raise ParseError(msg, source_file=source_file)

        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = ScannerMode.TEXT

        self._text_start: int | None = None
        self._text_lineno = 1
        self._text_col = 1

        self._next_bracket = -1
        self._next_dollar = -1

        self._pending_verbatim: str | None = None
        self._verbatim_name: str = ""

        config = get_parse_config()
        self._math_enabled = config.math_enabled
        self._verbatim_tags = config.verbatim_tags

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects one at a time, always ending with exactly one EOF.

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        yield from self._flush_text()
        yield self._make_token(TokenType.EOF, "", 0)

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to the scanner for the current mode."""
        if self._mode == ScannerMode.TEXT:
            yield from self._scan_text()
        elif self._mode == ScannerMode.TAG:
            yield from self._scan_attribute_list()
        elif self._mode == ScannerMode.VERBATIM:
            self._scan_verbatim_body()

    def _scan_text(self) -> Iterator[Token]:
        """Extend the text run up to the next delimiter, then handle it."""
        stop = self._next_delimiter()
        self._extend_text(stop)
        if stop >= self._source_len:
            return

        if self._source[stop] == "[":
            yield from self._scan_bracket()
        else:
            yield from self._scan_dollar()

    def _next_delimiter(self) -> int:
        """Position of the next ``[`` (or ``$`` when math is on) at or after pos.

        Search results are cached until the position passes them, so long
        stretches of literal brackets stay linear.
        """
        pos = self._pos
        if self._next_bracket < pos:
            found = self._source.find("[", pos)
            self._next_bracket = found if found != -1 else self._source_len
        if not self._math_enabled:
            return self._next_bracket
        if self._next_dollar < pos:
            found = self._source.find("$", pos)
            self._next_dollar = found if found != -1 else self._source_len
        return min(self._next_bracket, self._next_dollar)

    # =========================================================================
    # Text runs
    # =========================================================================

    def _extend_text(self, end: int) -> None:
        """Add source[pos:end] to the pending text run."""
        if end <= self._pos:
            return
        if self._text_start is None:
            self._text_start = self._pos
            self._text_lineno = self._lineno
            self._text_col = self._col
        self._advance(end - self._pos)

    def _flush_text(self) -> Iterator[Token]:
        """Emit the pending text run as one TEXT token, if any."""
        start = self._text_start
        if start is None:
            return
        self._text_start = None
        yield Token(
            type=TokenType.TEXT,
            value=self._source[start : self._pos],
            _start_offset=start,
            _end_offset=self._pos,
            _lineno=self._text_lineno,
            _col=self._text_col,
            _source_file=self._source_file,
        )

    # =========================================================================
    # Position tracking
    # =========================================================================

    def _advance(self, count: int) -> None:
        """Move forward ``count`` characters, updating line and column."""
        end = min(self._pos + count, self._source_len)
        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")
        if newline_count:
            self._lineno += newline_count
            self._col = len(segment) - segment.rfind("\n")
        else:
            self._col += len(segment)
        self._pos = end

    def _make_token(self, token_type: TokenType, value: str, length: int) -> Token:
        """Create a token at the current position spanning ``length`` chars."""
        return Token(
            type=token_type,
            value=value,
            _start_offset=self._pos,
            _end_offset=self._pos + length,
            _lineno=self._lineno,
            _col=self._col,
            _source_file=self._source_file,
        )

    def _emit(self, token_type: TokenType, length: int, value: str = "") -> Token:
        """Create a token at the current position and advance past it."""
        token = self._make_token(token_type, value, length)
        self._advance(length)
        return token
