"""Document tree for parsed UBB markup.

Node Hierarchy:
UbbNode (base: kind, parent, children, location)
├── TagNode    bracketed tag ([b], [quote=x], [ac01]); also the document root
├── TextNode   literal text (leaf)
└── LatexNode  $inline$ or $$block$$ expression (leaf)

Ownership flows from the root down: a node holds its children strongly and
its parent only through a weak reference, so trees never form reference
cycles. Keep the UbbDocument alive while traversing; nodes detached from a
collected document report ``parent is None``.

Lifecycle:
Nodes are created by the parser and attached to their parent at creation
time (append-only). Wrapping the root in a UbbDocument freezes the whole
tree: any later ``append_child`` raises TreeFrozenError.

Thread Safety:
Frozen trees are never mutated and are safe to read from many threads.

"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TypeAlias

from ubbparse.errors import TreeFrozenError
from ubbparse.location import SourceLocation


class NodeKind(Enum):
    """Closed set of semantic node kinds.

    ``TEXT`` doubles as the fallback classification for tag names that are
    not recognized; such tags still become a TagNode of kind ``TEXT``.

    """

    DOCUMENT = auto()
    TEXT = auto()
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()
    SIZE = auto()
    FONT = auto()
    COLOR = auto()
    URL = auto()
    IMAGE = auto()
    AUDIO = auto()
    VIDEO = auto()
    CODE = auto()
    QUOTE = auto()
    ALIGN = auto()
    LEFT = auto()
    RIGHT = auto()
    LIST = auto()
    LIST_ITEM = auto()
    DIVIDER = auto()
    LINE_BREAK = auto()
    LATEX = auto()
    BILIBILI = auto()
    EMOJI = auto()


# Kinds that never open a content region and never get children.
SELF_CLOSING_KINDS: frozenset[NodeKind] = frozenset(
    {NodeKind.DIVIDER, NodeKind.LINE_BREAK, NodeKind.EMOJI}
)

# Named keys renderers use for a tag's first attribute value.
_ATTRIBUTE_ALIASES: dict[NodeKind, str] = {
    NodeKind.SIZE: "size",
    NodeKind.FONT: "font",
    NodeKind.COLOR: "color",
    NodeKind.URL: "href",
    NodeKind.IMAGE: "src",
    NodeKind.AUDIO: "src",
    NodeKind.VIDEO: "src",
    NodeKind.CODE: "language",
    NodeKind.QUOTE: "author",
    NodeKind.ALIGN: "value",
}


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True, weakref_slot=True, eq=False)
class UbbNode:
    """Base class for all tree nodes.

    Nodes compare by identity. ``kind`` is fixed at construction; the
    parent link and child list are filled in by the parser and frozen
    afterwards.

    """

    kind: NodeKind
    location: SourceLocation = field(
        default_factory=SourceLocation.unknown, kw_only=True, repr=False
    )
    _parent: weakref.ReferenceType[UbbNode] | None = field(
        default=None, init=False, repr=False
    )
    _children: list[UbbNode] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    @property
    def parent(self) -> UbbNode | None:
        """The owning node, or None for the root (or a detached node)."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> tuple[UbbNode, ...]:
        """Children in source order (a snapshot; empty for leaves)."""
        return tuple(self._children)

    @property
    def is_leaf(self) -> bool:
        """True for nodes that can never have children."""
        return self.kind in SELF_CLOSING_KINDS

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def append_child(self, child: UbbNode) -> None:
        """Attach ``child`` as the last child of this node.

        Raises:
            TreeFrozenError: The tree has been finished.
            ValueError: This node is a leaf, or ``child`` already has a parent.
        """
        if self._frozen:
            raise TreeFrozenError(self.kind.name)
        if self.is_leaf:
            msg = f"{type(self).__name__} of kind {self.kind.name} cannot have children"
            raise ValueError(msg)
        if child._parent is not None:
            msg = "Node is already attached to a parent"
            raise ValueError(msg)
        object.__setattr__(child, "_parent", weakref.ref(self))
        self._children.append(child)

    # -- Navigation ------------------------------------------------------------

    @property
    def index_in_parent(self) -> int:
        """Position among the parent's children, -1 for the root."""
        parent = self.parent
        if parent is None:
            return -1
        for i, sibling in enumerate(parent._children):
            if sibling is self:
                return i
        return -1

    @property
    def previous_sibling(self) -> UbbNode | None:
        index = self.index_in_parent
        if index <= 0:
            return None
        return self.parent._children[index - 1]  # type: ignore[union-attr]

    @property
    def next_sibling(self) -> UbbNode | None:
        index = self.index_in_parent
        if index < 0:
            return None
        siblings = self.parent._children  # type: ignore[union-attr]
        return siblings[index + 1] if index + 1 < len(siblings) else None

    def ancestors(self) -> Iterator[UbbNode]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def depth(self) -> int:
        """Number of ancestors (0 for the root)."""
        return sum(1 for _ in self.ancestors())

    def walk(self) -> Iterator[UbbNode]:
        """Depth-first pre-order traversal, this node first.

        Iterative, so deeply nested posts cannot hit the recursion limit.
        """
        stack: list[UbbNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def find_all(self, kind: NodeKind) -> list[UbbNode]:
        """All nodes of ``kind`` in this subtree, in document order."""
        return [node for node in self.walk() if node.kind is kind]

    def _freeze(self) -> None:
        for node in self.walk():
            object.__setattr__(node, "_frozen", True)


# =============================================================================
# Concrete Nodes
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class TextNode(UbbNode):
    """Literal text, whitespace and line breaks preserved as written."""

    kind: NodeKind = field(default=NodeKind.TEXT, init=False)
    content: str = ""

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, eq=False)
class LatexNode(UbbNode):
    """LaTeX expression from ``$...$`` (inline) or ``$$...$$`` (block).

    ``is_closed`` is False when no closing delimiter followed the
    expression, as in ``Price: $x``.
    """

    kind: NodeKind = field(default=NodeKind.LATEX, init=False)
    expression: str = ""
    is_block: bool = False
    is_closed: bool = True

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, eq=False)
class TagNode(UbbNode):
    """A bracketed tag and the content region it opened.

    Attribute values are stored in order; :meth:`get_attribute` exposes
    them under the keys ``"default"``, ``"1"``, ``"2"``, ... and under the
    kind's named alias (``href`` for url, ``author`` for quote, ...).

    Attributes:
        name: Tag name as written (``B``, ``quote``, ``ac01``)
        values: Attribute values in header order
        raw: Header source text, e.g. ``[size=3]``
        closing_raw: The closing tag that ended the region (``[/size]``),
            or None if the region ran to end of input or was self-closing

    """

    name: str = ""
    values: tuple[str, ...] = ()
    raw: str = ""
    closing_raw: str | None = None

    @property
    def attributes(self) -> dict[str, str]:
        """Positional attribute mapping: ``{"default": v0, "1": v1, ...}``."""
        return {_positional_key(i): value for i, value in enumerate(self.values)}

    @property
    def is_closed(self) -> bool:
        return self.closing_raw is not None

    def get_attribute(self, key: str, default: str = "") -> str:
        """Look up an attribute value by positional key or named alias.

        Args:
            key: ``"default"``, a positional index ``"1"``, ``"2"``, ..., or
                the kind's alias (``"href"`` on a url tag, ``"code"`` on an
                emoji)
            default: Returned when the attribute is absent

        Example:
            >>> tag = TagNode(NodeKind.QUOTE, name="quote", values=("Ann",))
            >>> tag.get_attribute("author")
            'Ann'
        """
        if self.kind is NodeKind.EMOJI and key == "code":
            return self.name.lower()
        if key == "default" or key == _ATTRIBUTE_ALIASES.get(self.kind):
            index = 0
        elif key.isascii() and key.isdigit() and str(int(key)) == key and key != "0":
            index = int(key)
        else:
            return default
        if index < len(self.values):
            return self.values[index]
        return default

    def _close(self, closing_raw: str) -> None:
        if self._frozen:
            raise TreeFrozenError(self.kind.name)
        object.__setattr__(self, "closing_raw", closing_raw)


def _positional_key(index: int) -> str:
    return "default" if index == 0 else str(index)


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class UbbDocument:
    """Owner of a finished tree.

    The root is a TagNode of kind DOCUMENT. Creating the document freezes
    every node beneath it.

    """

    root: TagNode = field(default_factory=lambda: TagNode(NodeKind.DOCUMENT))
    source_file: str | None = None

    def __post_init__(self) -> None:
        if self.root.kind is not NodeKind.DOCUMENT:
            msg = f"Document root must be of kind DOCUMENT, got {self.root.kind.name}"
            raise ValueError(msg)
        self.root._freeze()

    @property
    def children(self) -> tuple[UbbNode, ...]:
        """Top-level nodes (the root's children)."""
        return self.root.children

    def __iter__(self) -> Iterator[UbbNode]:
        return iter(self.root.children)

    def __len__(self) -> int:
        return len(self.root._children)

    def walk(self) -> Iterator[UbbNode]:
        """Depth-first pre-order traversal starting at the root."""
        return self.root.walk()

    def find_all(self, kind: NodeKind) -> list[UbbNode]:
        return self.root.find_all(kind)


# Closed union of content node shapes
ContentNode: TypeAlias = TextNode | TagNode | LatexNode
