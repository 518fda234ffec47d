"""
ubbparse: UBB Forum Markup Parser

Turns bracket-tag forum markup (``[b]``, ``[quote=Ann]``, ``[ac01]``,
``$x^2$``) into a typed, navigable document tree. Malformed markup never
raises: unclosed tags run to end of input and stray closers stay as text.

Quick Start:
    >>> from ubbparse import parse, NodeKind
    >>> doc = parse("[b]Hello [i]World[/i][/b]")
    >>> bold = doc.children[0]
    >>> bold.kind
    <NodeKind.BOLD: 3>
    >>> bold.children[1].kind
    <NodeKind.ITALIC: 4>

    >>> # Or keep a configured parser around
    >>> from ubbparse import UbbParser, ParseConfig
    >>> parser = UbbParser(config=ParseConfig(math_enabled=False))
    >>> doc = parser.parse("costs $5 and $6")

Installation:
    pip install ubbparse             # Zero runtime dependencies
    pip install ubbparse[test]       # + pytest and hypothesis
"""

from __future__ import annotations

from collections.abc import Iterable

from ubbparse.classify import is_known_tag_name, is_self_closing, map_to_node_type
from ubbparse.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from ubbparse.errors import ParseError, SerializationError, TreeFrozenError, UbbError
from ubbparse.location import SourceLocation
from ubbparse.nodes import (
    ContentNode,
    LatexNode,
    NodeKind,
    TagNode,
    TextNode,
    UbbDocument,
    UbbNode,
)
from ubbparse.parser import Parser
from ubbparse.scanner import Scanner
from ubbparse.serialization import from_dict, from_json, to_dict, to_json
from ubbparse.text import extract_text, to_ubb
from ubbparse.tokens import Token, TokenType
from ubbparse.visitor import BaseVisitor

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> UbbDocument:
    """Parse UBB markup into a document tree.

    Args:
        source: UBB markup text
        source_file: Optional source file path recorded on locations
        config: Parse configuration for this call; when omitted, the active
            context configuration is used

    Returns:
        A frozen UbbDocument

    Raises:
        ParseError: If ``source`` is not a ``str``

    Example:
        >>> doc = parse("[quote=Ann]Hi[/quote]")
        >>> doc.children[0].get_attribute("author")
        'Ann'
    """
    if config is None:
        return _parse(source, source_file)
    with parse_config_context(config):
        return _parse(source, source_file)


def _parse(source: str, source_file: str | None) -> UbbDocument:
    tokens = Scanner(source, source_file=source_file).tokenize()
    return Parser(tokens, source_file=source_file).parse()


class UbbParser:
    """Reusable parser holding one configuration.

    Usage:
        >>> parser = UbbParser()
        >>> doc = parser.parse("[hr]Next Text")
        >>> [child.kind for child in doc]
        [<NodeKind.DIVIDER: 21>, <NodeKind.TEXT: 2>]

        >>> # Several posts at once
        >>> docs = parser.parse_many(["[b]a[/b]", "[i]b[/i]"])

    Thread Safety:
        The configuration is immutable and applied through a ContextVar for
        each call. Safe to use one instance from several threads.

    """

    __slots__ = ("_config",)

    def __init__(self, *, config: ParseConfig | None = None) -> None:
        """Initialize parser.

        Args:
            config: Configuration applied to every parse (defaults if None)
        """
        self._config = config if config is not None else ParseConfig()

    @property
    def config(self) -> ParseConfig:
        return self._config

    def parse(self, source: str, *, source_file: str | None = None) -> UbbDocument:
        """Parse one post with this parser's configuration."""
        with parse_config_context(self._config):
            return _parse(source, source_file)

    def parse_many(self, sources: Iterable[str]) -> list[UbbDocument]:
        """Parse several posts, in order, with this parser's configuration."""
        with parse_config_context(self._config):
            return [_parse(source, None) for source in sources]


__all__ = [
    # Entry points
    "parse",
    "UbbParser",
    "Scanner",
    "Parser",
    # Classification
    "map_to_node_type",
    "is_self_closing",
    "is_known_tag_name",
    # Tokens
    "Token",
    "TokenType",
    "SourceLocation",
    # Nodes
    "NodeKind",
    "UbbNode",
    "TextNode",
    "TagNode",
    "LatexNode",
    "UbbDocument",
    "ContentNode",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "UbbError",
    "ParseError",
    "TreeFrozenError",
    "SerializationError",
    # Tree utilities
    "BaseVisitor",
    "extract_text",
    "to_ubb",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "__version__",
]
