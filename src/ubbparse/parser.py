"""Tree builder for UBB token streams.

Consumes the token sequence from Scanner and builds a UbbDocument.

Architecture:
Content parsing runs on an explicit FrameStack, one frame per open tag.
A closing tag is checked against the innermost frame before anything
else is parsed:

- Same kind as the frame: the closer is consumed and the frame closes.
- A different recognized kind: the frame closes *without* consuming the
  closer, so an enclosing frame can claim it.
- Otherwise the closer is parsed like any other element and ends up as
  literal text.

Opening tags that are not self-closing push a new frame. This mirrors the
classic recursive descent (one recursion per open tag) without touching the
interpreter's recursion limit.

Error Recovery:
Malformed markup never raises. Unclosed tags run to end of input, stray
closers become text, and a header missing its ``]`` runs to end of input.
Recovery events are logged at DEBUG level.

Thread Safety:
Parser instances are single-use. The resulting document is frozen and safe
to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable

from ubbparse.classify import is_self_closing, map_to_node_type
from ubbparse.config import get_parse_config
from ubbparse.nodes import LatexNode, NodeKind, TagNode, TextNode, UbbDocument, UbbNode
from ubbparse.parsing import FrameStack, TokenNavigationMixin
from ubbparse.tokens import Token, TokenType
from ubbparse.utils.logger import get_logger

logger = get_logger(__name__)

# A separator binds the attribute value that directly follows it
_SEPARATORS = frozenset({TokenType.EQUAL, TokenType.COMMA})
_HEADER_END = frozenset({TokenType.RIGHT_BRACKET, TokenType.EOF})


class Parser(TokenNavigationMixin):
    """Builds a document tree from scanner tokens.

    Usage:
            >>> tokens = Scanner("[b]Hi[/b]").tokenize()
            >>> doc = Parser(tokens).parse()
            >>> doc.children[0].kind
        <NodeKind.BOLD: 3>

    Configuration:
        ``emoji_prefixes`` is read from the active ParseConfig when the
        parser is created.

    """

    __slots__ = (
        "_tokens",
        "_tokens_len",
        "_pos",
        "_source_file",
        "_emoji_prefixes",
    )

    def __init__(self, tokens: Iterable[Token], source_file: str | None = None) -> None:
        """Initialize parser with a token sequence.

        Args:
            tokens: Tokens from Scanner.tokenize(); the trailing EOF is optional
            source_file: Optional source file path recorded on the document
        """
        self._tokens: list[Token] = list(tokens)
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._source_file = source_file
        self._emoji_prefixes = get_parse_config().emoji_prefixes

    def parse(self) -> UbbDocument:
        """Parse the whole token sequence.

        Returns:
            A frozen UbbDocument whose root has kind DOCUMENT.
        """
        self._pos = 0
        root = TagNode(NodeKind.DOCUMENT)
        self._parse_content(root)
        return UbbDocument(root=root, source_file=self._source_file)

    # =========================================================================
    # Content regions
    # =========================================================================

    def _parse_content(self, root: TagNode) -> None:
        frames = FrameStack(root)

        while not self._at_end():
            frame = frames.current()

            if frame.expected is not None and self._at_closing_tag():
                closer_kind = self._classify(self._peek(2).value)
                if closer_kind is frame.expected:
                    frame.node._close(self._consume_closing_tag())
                    frames.pop()
                    continue
                if closer_kind is not NodeKind.TEXT:
                    # Leave the closer for an enclosing region
                    logger.debug(
                        "Closing %s region at %s for mismatched closer [/%s]",
                        frame.expected.name,
                        self._peek().location,
                        self._peek(2).value,
                    )
                    frames.pop()
                    continue

            node = self._parse_element()
            if node is None:
                continue
            frame.node.append_child(node)
            if isinstance(node, TagNode) and not is_self_closing(node.kind):
                frames.push(node)

        for open_frame in frames.open_frames():
            logger.debug(
                "Unclosed %s region from %s runs to end of input",
                open_frame.node.name,
                open_frame.node.location,
            )

    def _at_closing_tag(self) -> bool:
        return (
            self._peek_type() is TokenType.LEFT_BRACKET
            and self._peek_type(1) is TokenType.SLASH
            and self._peek_type(2) is TokenType.TAG_NAME
        )

    def _consume_closing_tag(self) -> str:
        """Consume ``[/name]`` and return its source text.

        The closing bracket is optional (a closer cut off by end of input).
        """
        parts = [self._consume().text, self._consume().text, self._consume().text]
        if self._peek_type() is TokenType.RIGHT_BRACKET:
            parts.append(self._consume().text)
        return "".join(parts)

    def _classify(self, name: str) -> NodeKind:
        return map_to_node_type(name, emoji_prefixes=self._emoji_prefixes)

    # =========================================================================
    # Elements
    # =========================================================================

    def _parse_element(self) -> UbbNode | None:
        """Parse one element starting at the current token.

        Always consumes at least one token.
        """
        token = self._consume()

        match token.type:
            case TokenType.TEXT:
                return TextNode(content=token.value, location=token.location)

            case TokenType.DOLLAR | TokenType.DOUBLE_DOLLAR:
                return self._parse_latex(token)

            case TokenType.LEFT_BRACKET:
                return self._parse_tag_header(token)

            case _:
                logger.debug("Skipping unexpected %s token at %s", token.type.name, token.location)
                return None

    def _parse_latex(self, opener: Token) -> LatexNode:
        expression = ""
        last = opener
        if self._peek_type() is TokenType.TEXT:
            last = self._consume()
            expression = last.value
        is_closed = self._peek_type() is opener.type
        if is_closed:
            last = self._consume()
        else:
            logger.debug("LaTeX expression at %s has no closing delimiter", opener.location)
        return LatexNode(
            expression=expression,
            is_block=opener.type is TokenType.DOUBLE_DOLLAR,
            is_closed=is_closed,
            location=opener.location.span_to(last.location),
        )

    def _parse_tag_header(self, bracket: Token) -> UbbNode:
        """Parse ``name[=v1,v2,...]]`` after the opening bracket."""
        if self._peek_type() is not TokenType.TAG_NAME:
            return self._literal_bracket(bracket)

        name_token = self._consume()
        parts = [bracket.text, name_token.text]
        values: list[str] = []
        last = name_token

        while self._peek_type() not in _HEADER_END:
            token = self._consume()
            parts.append(token.text)
            last = token
            if token.type in _SEPARATORS and self._peek_type() is TokenType.ATTR_VALUE:
                last = self._consume()
                parts.append(last.text)
                values.append(last.value)

        if self._peek_type() is TokenType.RIGHT_BRACKET:
            last = self._consume()
            parts.append(last.text)
        else:
            logger.debug("Tag header [%s at %s has no closing bracket", name_token.value, bracket.location)

        return TagNode(
            self._classify(name_token.value),
            name=name_token.value,
            values=tuple(values),
            raw="".join(parts),
            location=bracket.location.span_to(last.location),
        )

    def _literal_bracket(self, bracket: Token) -> TextNode:
        """Re-emit a bracket that did not start a tag as text.

        A closer no open region claimed (``[/i]``) is kept whole.
        """
        parts = [bracket.text]
        last = bracket
        if self._peek_type() is TokenType.SLASH:
            last = self._consume()
            parts.append(last.text)
            if self._peek_type() is TokenType.TAG_NAME:
                last = self._consume()
                parts.append(last.text)
                if self._peek_type() is TokenType.RIGHT_BRACKET:
                    last = self._consume()
                    parts.append(last.text)
        return TextNode(content="".join(parts), location=bracket.location.span_to(last.location))
