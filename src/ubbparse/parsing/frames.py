"""Frame stack for open content regions.

Each frame is one open tag waiting for its closer. The parser walks this
stack instead of recursing, so the depth of nesting in a post is bounded
by memory rather than the interpreter's recursion limit.

Usage:
    stack = FrameStack(root)          # Initializes with the DOCUMENT frame
    stack.push(bold_node)             # [b] opened a region
    stack.current().expected          # NodeKind.BOLD
    frame = stack.pop()               # [/b] closed it
"""

from __future__ import annotations

from dataclasses import dataclass

from ubbparse.nodes import NodeKind, TagNode


@dataclass(slots=True)
class ContentFrame:
    """An open content region.

    Attributes:
        node: The tag whose children are being collected
        expected: Kind of the closing tag that ends this region; None for the
            document frame, which only ends with the input

    """

    node: TagNode
    expected: NodeKind | None


class FrameStack:
    """Stack of open content regions, document frame at the bottom."""

    __slots__ = ("_stack",)

    def __init__(self, root: TagNode) -> None:
        self._stack: list[ContentFrame] = [ContentFrame(node=root, expected=None)]

    def push(self, node: TagNode) -> None:
        """Open a region collecting children for ``node``."""
        self._stack.append(ContentFrame(node=node, expected=node.kind))

    def pop(self) -> ContentFrame:
        """Close the innermost region.

        Raises:
            ValueError: If attempting to pop the document frame
        """
        if len(self._stack) <= 1:
            raise ValueError("Cannot pop document frame")
        return self._stack.pop()

    def current(self) -> ContentFrame:
        """Get the innermost open region."""
        return self._stack[-1]

    def depth(self) -> int:
        """Number of open regions above the document (document = 0)."""
        return len(self._stack) - 1

    def open_frames(self) -> list[ContentFrame]:
        """Regions still open above the document, innermost first."""
        return self._stack[:0:-1]
