"""Scanner operating modes and character sets."""

from __future__ import annotations

import string
from enum import Enum, auto


class ScannerMode(Enum):
    """Scanner operating modes.

    The scanner switches between modes based on context:
    - TEXT: Between tags, accumulating literal text
    - TAG: Inside an attribute list, after ``[name=``
    - VERBATIM: Inside the body of a verbatim tag such as ``[code]``

    """

    TEXT = auto()
    TAG = auto()
    VERBATIM = auto()


# A tag name is "*" or an ASCII letter followed by letters, digits and "_-*".
TAG_NAME_START = frozenset(string.ascii_letters)
TAG_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_-*")
LIST_ITEM_NAME = "*"

# Characters that end an attribute value chunk.
ATTR_STOP_CHARS = frozenset(",]")
