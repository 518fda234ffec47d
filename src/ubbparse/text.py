"""Plain-text and markup rendering of ubbparse trees.

Provides a public API for flattening a subtree to its text content (what
renderers show inside code blocks and math tags) and for writing a tree
back out as UBB markup.

Example:
    >>> from ubbparse import parse, extract_text, to_ubb
    >>> doc = parse("[b]Hello [i]World[/i][/b]")
    >>> extract_text(doc.children[0])
    'Hello World'
    >>> to_ubb(doc.root)
    '[b]Hello [i]World[/i][/b]'
"""

from __future__ import annotations

from ubbparse.nodes import LatexNode, NodeKind, TagNode, TextNode, UbbDocument, UbbNode

_LATEX_DELIMITERS = {False: "$", True: "$$"}


def extract_text(node: UbbNode | UbbDocument) -> str:
    """Concatenate the content of every TextNode in a subtree.

    Tag headers, closers and LaTeX expressions contribute nothing; unknown
    tags contribute their children only.

    Args:
        node: Any node, or a whole document.

    Returns:
        Text content in document order.
    """
    if isinstance(node, UbbDocument):
        node = node.root
    return "".join(n.content for n in node.walk() if isinstance(n, TextNode))


def to_ubb(node: UbbNode | UbbDocument) -> str:
    """Write a subtree back out as UBB markup.

    Tags are written from their recorded source text, so a parsed document
    round-trips exactly: ``to_ubb(parse(s).root) == s``. The document root
    itself has no markup and contributes only its children.

    Args:
        node: Any node, or a whole document.

    Returns:
        UBB markup for the subtree.
    """
    if isinstance(node, UbbDocument):
        node = node.root

    parts: list[str] = []
    # Explicit stack of pending nodes and closers
    stack: list[UbbNode | str] = [node]
    while stack:
        item = stack.pop()
        match item:
            case str():
                parts.append(item)
            case TextNode():
                parts.append(item.content)
            case LatexNode():
                delimiter = _LATEX_DELIMITERS[item.is_block]
                parts.append(delimiter + item.expression)
                if item.is_closed:
                    parts.append(delimiter)
            case TagNode():
                if item.kind is not NodeKind.DOCUMENT:
                    parts.append(item.raw)
                if item.closing_raw is not None:
                    stack.append(item.closing_raw)
                stack.extend(reversed(item.children))
    return "".join(parts)


__all__ = ["extract_text", "to_ubb"]
