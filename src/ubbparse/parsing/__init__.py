"""Parsing subsystem for the UBB parser.

Provides the pieces the Parser is composed from:
- `TokenNavigationMixin`: Token stream traversal with an EOF sentinel
- `FrameStack`: Explicit stack of open content regions

"""

from ubbparse.parsing.frames import ContentFrame, FrameStack
from ubbparse.parsing.token_nav import EOF_SENTINEL, TokenNavigationMixin

__all__ = [
    "ContentFrame",
    "EOF_SENTINEL",
    "FrameStack",
    "TokenNavigationMixin",
]
