"""Tests for the tree visitor."""

from ubbparse import (
    BaseVisitor,
    LatexNode,
    NodeKind,
    TagNode,
    TextNode,
    UbbNode,
    extract_text,
    parse,
)


class KindCollector(BaseVisitor[None]):
    """Collects the kind name of every visited node."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def visit_default(self, node: UbbNode) -> None:
        self.visited.append(node.kind.name)


class ImageCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.sources: list[str] = []

    def visit_image(self, node: TagNode) -> None:
        self.sources.append(node.get_attribute("src") or extract_text(node))


class TestVisitorDispatch:
    """Every kind reaches its visit_* method."""

    def test_default_sees_all_nodes_in_order(self) -> None:
        doc = parse("a[b]x[hr][/b]$y$")
        collector = KindCollector()
        collector.visit(doc)
        assert collector.visited == ["DOCUMENT", "TEXT", "BOLD", "TEXT", "DIVIDER", "LATEX"]

    def test_every_kind_has_a_visit_method(self) -> None:
        visitor = KindCollector()
        for kind in NodeKind:
            assert callable(getattr(visitor, f"visit_{kind.name.lower()}"))

    def test_specific_method_overrides_default(self) -> None:
        doc = parse("[img]a.png[/img][img=b.png][/img][b]x[/b]")
        collector = ImageCollector()
        collector.visit(doc)
        assert collector.sources == ["a.png", "b.png"]

    def test_children_are_walked_automatically(self) -> None:
        doc = parse("[quote][quote][img]deep.png[/img][/quote][/quote]")
        collector = ImageCollector()
        collector.visit(doc)
        assert collector.sources == ["deep.png"]

    def test_visit_subtree(self) -> None:
        doc = parse("a[i]b[/i]")
        collector = KindCollector()
        collector.visit(doc.children[1])
        assert collector.visited == ["ITALIC", "TEXT"]

    def test_unknown_tags_reach_visit_text(self) -> None:
        seen: list[type] = []

        class TextVisitor(BaseVisitor[None]):
            def visit_text(self, node: TextNode | TagNode) -> None:
                seen.append(type(node))

        TextVisitor().visit(parse("[foo]x[/foo]"))
        assert seen == [TagNode, TextNode]

    def test_visit_returns_result_for_node(self) -> None:
        class Counter(BaseVisitor[int]):
            def visit_latex(self, node: LatexNode | TagNode) -> int:
                return 1

            def visit_default(self, node: UbbNode) -> int:
                return 0

        doc = parse("$x$")
        assert Counter().visit(doc.children[0]) == 1
        assert Counter().visit(doc) == 0

    def test_deep_tree(self) -> None:
        doc = parse("[b]" * 5000)
        collector = KindCollector()
        collector.visit(doc)
        assert len(collector.visited) == 5001
