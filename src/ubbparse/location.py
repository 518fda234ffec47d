"""Source positions for tokens and tree nodes.

Positions are diagnostic only: nothing in scanning or parsing branches on
them. Lines and columns are 1-indexed, offsets are 0-indexed.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a token or node came from in the markup source.

    Attributes:
        lineno: Starting line number (1-indexed, 0 when unknown)
        col_offset: Starting column (1-indexed, 0 when unknown)
        offset: Absolute start offset in the source string
        end_offset: Absolute end offset (exclusive)
        source_file: Optional path of the post or file being parsed

    Examples:
            >>> loc = SourceLocation(lineno=2, col_offset=5, offset=12, end_offset=15)
            >>> str(loc)
            '2:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format as ``file:line:col`` or ``line:col``."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def is_known(self) -> bool:
        """False for placeholder locations of hand-built tokens and sentinels."""
        return self.lineno > 0

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Return a location starting here and ending where ``end`` ends."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=max(end.end_offset, end.offset),
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic nodes and tokens built without a source."""
        return cls(lineno=0, col_offset=0, offset=-1, end_offset=-1)
