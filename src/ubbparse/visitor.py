"""Tree visitor for ubbparse documents.

Provides a base visitor class with per-kind dispatch.

Example: collect every image source.

    class ImageCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.sources: list[str] = []

        def visit_image(self, node: TagNode) -> None:
            self.sources.append(node.get_attribute("src") or extract_text(node))

    collector = ImageCollector()
    collector.visit(doc)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from ubbparse.nodes import LatexNode, NodeKind, TagNode, TextNode, UbbDocument, UbbNode

T = TypeVar("T")

# NodeKind -> visit method name ("visit_list_item" for LIST_ITEM)
_VISIT_METHODS: dict[NodeKind, str] = {kind: f"visit_{kind.name.lower()}" for kind in NodeKind}


class BaseVisitor(Generic[T]):
    """Base tree visitor with kind-based dispatch.

    Subclass and override ``visit_*`` methods for the kinds you care about.
    Unhandled kinds fall through to ``visit_default``. The subtree is walked
    automatically in document order after the ``visit_*`` call, without
    recursion, so very deep posts are safe to visit.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    Unknown tags (TagNode of kind TEXT) and plain text share ``visit_text``;
    tell them apart with ``isinstance``.

    """

    def visit(self, node: UbbNode | UbbDocument) -> T:
        """Dispatch ``node`` and then every node beneath it.

        Returns:
            The result of the visit method for ``node`` itself.
        """
        if isinstance(node, UbbDocument):
            node = node.root
        walker = node.walk()
        result = self._dispatch(next(walker))
        for descendant in walker:
            self._dispatch(descendant)
        return result

    def visit_default(self, node: UbbNode) -> T:
        """Called for kinds without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Structure ---------------------------------------------------------------

    def visit_document(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_text(self, node: TextNode | TagNode) -> T:
        return self.visit_default(node)

    def visit_latex(self, node: LatexNode | TagNode) -> T:
        return self.visit_default(node)

    # -- Character formatting ----------------------------------------------------

    def visit_bold(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_italic(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_underline(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_size(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_font(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_color(self, node: TagNode) -> T:
        return self.visit_default(node)

    # -- Links and media ---------------------------------------------------------

    def visit_url(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_image(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_audio(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_video(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_bilibili(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_emoji(self, node: TagNode) -> T:
        return self.visit_default(node)

    # -- Blocks ------------------------------------------------------------------

    def visit_code(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_quote(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_align(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_left(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_right(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_list(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_divider(self, node: TagNode) -> T:
        return self.visit_default(node)

    def visit_line_break(self, node: TagNode) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -------------------------------------------------------

    def _dispatch(self, node: UbbNode) -> T:
        method = getattr(self, _VISIT_METHODS[node.kind])
        return method(node)


__all__ = ["BaseVisitor"]
