"""State-machine scanner for UBB markup.

This package turns markup text into a flat token sequence with a single
forward pass. The scanner never raises: anything it cannot recognize as
tag or LaTeX syntax stays literal text.

Architecture:
scanner/
├── __init__.py    # Re-exports Scanner, ScannerMode
├── core.py        # Scanner class (mode dispatch, text runs, positions)
├── modes.py       # ScannerMode enum, character sets
├── tags.py        # Tag headers, attribute lists, verbatim bodies
└── math.py        # $inline$ and $$block$$ delimiters

Usage:
    >>> from ubbparse.scanner import Scanner
    >>> for token in Scanner("[b]Hi[/b]").tokenize():
    ...     print(token)
Token(LEFT_BRACKET, '', @0)
Token(TAG_NAME, 'b', @1)
Token(RIGHT_BRACKET, '', @2)
Token(TEXT, 'Hi', @3)
Token(LEFT_BRACKET, '', @5)
Token(SLASH, '', @6)
Token(TAG_NAME, 'b', @7)
Token(RIGHT_BRACKET, '', @8)
Token(EOF, '', @9)

"""

from ubbparse.scanner.core import Scanner
from ubbparse.scanner.modes import ScannerMode

__all__ = ["Scanner", "ScannerMode"]
