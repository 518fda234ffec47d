"""Token and TokenType definitions for the UBB scanner.

The scanner produces a flat sequence of Token objects that the parser
consumes. Each Token has a type, a literal value and a source position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Most tokens never have their location read.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ubbparse.location import SourceLocation


class TokenType(Enum):
    """Closed set of token kinds produced by the scanner.

    Punctuation tokens carry an empty value; their source spelling is
    available through :attr:`literal`.

    """

    # Tag punctuation
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]
    SLASH = auto()  # / directly after [
    EQUAL = auto()  # = after a tag name
    COMMA = auto()  # , between attribute values

    # Tag content
    TAG_NAME = auto()  # b, quote, ac01, *
    ATTR_VALUE = auto()  # red, http://example.com

    # Literal text
    TEXT = auto()

    # LaTeX delimiters
    DOLLAR = auto()  # $
    DOUBLE_DOLLAR = auto()  # $$

    # Sentinel
    EOF = auto()

    @property
    def literal(self) -> str:
        """Source spelling of a punctuation token ("" for valued tokens)."""
        return _LITERALS.get(self, "")


_LITERALS: dict[TokenType, str] = {
    TokenType.LEFT_BRACKET: "[",
    TokenType.RIGHT_BRACKET: "]",
    TokenType.SLASH: "/",
    TokenType.EQUAL: "=",
    TokenType.COMMA: ",",
    TokenType.DOLLAR: "$",
    TokenType.DOUBLE_DOLLAR: "$$",
}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Only ``type`` and ``value`` are needed to build a token by hand, which
    is how the parser is unit-tested without the scanner:

        >>> Token(TokenType.TEXT, "hello")
        Token(TEXT, 'hello', @-1)

    Attributes:
        type: The token type (from TokenType enum)
        value: Literal text for TAG_NAME, ATTR_VALUE and TEXT; empty otherwise
        _start_offset: Absolute start position in source (-1 if unknown)
        _end_offset: Absolute end position in source (-1 if unknown)
        _lineno: Start line number (1-indexed, 0 if unknown)
        _col: Start column (1-indexed, 0 if unknown)
        _source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    type: TokenType
    value: str = ""
    _start_offset: int = -1
    _end_offset: int = -1
    _lineno: int = 0
    _col: int = 0
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def position(self) -> int:
        """Start offset in the source; -1 for sentinels and hand-built tokens."""
        return self._start_offset

    @property
    def text(self) -> str:
        """Source spelling: the value, or the punctuation literal."""
        return self.value or self.type.literal

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from ubbparse.location import SourceLocation

        if self._start_offset < 0:
            loc = SourceLocation.unknown()
        else:
            loc = SourceLocation(
                lineno=self._lineno,
                col_offset=self._col,
                offset=self._start_offset,
                end_offset=self._end_offset,
                source_file=self._source_file,
            )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, @{self._start_offset})"
