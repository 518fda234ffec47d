"""Tag-name classification.

Pure, total functions mapping tag names to node kinds. Matching is
case-insensitive. Emoji prefixes are checked before the exact-match table,
so ``[em10]`` is an emoji even though it shares a prefix with nothing else.

Example:
    >>> map_to_node_type("QUOTE")
    <NodeKind.QUOTE: 15>
    >>> map_to_node_type("ac01")
    <NodeKind.EMOJI: 25>
    >>> map_to_node_type("upload")
    <NodeKind.TEXT: 2>

"""

from __future__ import annotations

from ubbparse.config import DEFAULT_EMOJI_PREFIXES
from ubbparse.nodes import SELF_CLOSING_KINDS, NodeKind

TAG_KINDS: dict[str, NodeKind] = {
    "b": NodeKind.BOLD,
    "i": NodeKind.ITALIC,
    "u": NodeKind.UNDERLINE,
    "del": NodeKind.STRIKETHROUGH,
    "size": NodeKind.SIZE,
    "font": NodeKind.FONT,
    "color": NodeKind.COLOR,
    "url": NodeKind.URL,
    "img": NodeKind.IMAGE,
    "audio": NodeKind.AUDIO,
    "video": NodeKind.VIDEO,
    "code": NodeKind.CODE,
    "quote": NodeKind.QUOTE,
    "align": NodeKind.ALIGN,
    "left": NodeKind.LEFT,
    "right": NodeKind.RIGHT,
    "list": NodeKind.LIST,
    "*": NodeKind.LIST_ITEM,
    "hr": NodeKind.DIVIDER,
    "br": NodeKind.LINE_BREAK,
    "math": NodeKind.LATEX,
    "bili": NodeKind.BILIBILI,
}


def map_to_node_type(
    tag_name: str,
    *,
    emoji_prefixes: tuple[str, ...] = DEFAULT_EMOJI_PREFIXES,
) -> NodeKind:
    """Classify a tag name.

    Args:
        tag_name: Tag name as written, any case
        emoji_prefixes: Lower-case prefixes that mark emoji codes

    Returns:
        The node kind; ``NodeKind.TEXT`` for unrecognized names.
    """
    name = tag_name.lower()
    if name.startswith(emoji_prefixes):
        return NodeKind.EMOJI
    return TAG_KINDS.get(name, NodeKind.TEXT)


def is_known_tag_name(
    tag_name: str,
    *,
    emoji_prefixes: tuple[str, ...] = DEFAULT_EMOJI_PREFIXES,
) -> bool:
    """True unless the name falls back to the plain-text classification."""
    return map_to_node_type(tag_name, emoji_prefixes=emoji_prefixes) is not NodeKind.TEXT


def is_self_closing(kind: NodeKind) -> bool:
    """True for kinds that never open a content region ([hr], [br], emoji)."""
    return kind in SELF_CLOSING_KINDS


__all__ = [
    "TAG_KINDS",
    "is_known_tag_name",
    "is_self_closing",
    "map_to_node_type",
]
