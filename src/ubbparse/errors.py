"""Exception classes for ubbparse.

Malformed markup never raises: unclosed, mismatched and unknown tags all
degrade into a best-effort tree. These exceptions cover caller mistakes.
"""

from __future__ import annotations


class UbbError(Exception):
    """Base exception for all ubbparse errors."""

    pass


class ParseError(UbbError):
    """A parse was requested with input that is not markup text.

    Raised for contract violations such as passing ``bytes`` or ``None``
    where a ``str`` source is expected.
    """

    def __init__(self, message: str, source_file: str | None = None) -> None:
        """Initialize parse error.

        Args:
            message: Error description
            source_file: Path of the source the caller named (optional)
        """
        self.message = message
        self.source_file = source_file
        prefix = f"{source_file} " if source_file else ""
        super().__init__(f"{prefix}{message}")


class TreeFrozenError(UbbError):
    """A finished document tree was modified.

    Trees are append-only while the parser builds them and frozen once
    the UbbDocument is created.
    """

    def __init__(self, kind_name: str) -> None:
        self.kind_name = kind_name
        super().__init__(f"Cannot append to {kind_name} node: tree is frozen")


class SerializationError(UbbError, ValueError):
    """Serialized tree data is malformed or of an unknown node type."""

    pass
