"""Tests for JSON serialization of documents."""

import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ubbparse import (
    LatexNode,
    NodeKind,
    SerializationError,
    TagNode,
    TextNode,
    TreeFrozenError,
    UbbDocument,
    from_dict,
    from_json,
    parse,
    to_dict,
    to_json,
    to_ubb,
)

markup_text = st.text(alphabet="[]/=,$*\n abiBcodehr1", max_size=200)


class TestToDict:
    def test_text_node(self) -> None:
        data = to_dict(TextNode(content="hi"))
        assert data["_type"] == "TextNode"
        assert data["content"] == "hi"
        assert data["location"]["_type"] == "SourceLocation"

    def test_tag_node(self) -> None:
        doc = parse("[quote=Ann,2]x[/quote]")
        data = to_dict(doc.children[0])
        assert data["kind"] == "QUOTE"
        assert data["values"] == ["Ann", "2"]
        assert data["raw"] == "[quote=Ann,2]"
        assert data["closing_raw"] == "[/quote]"
        assert [c["_type"] for c in data["children"]] == ["TextNode"]

    def test_document(self) -> None:
        data = to_dict(parse("x", source_file="p.ubb"))
        assert data["_type"] == "UbbDocument"
        assert data["source_file"] == "p.ubb"
        assert data["root"]["kind"] == "DOCUMENT"


class TestRoundTrip:
    def test_json_round_trip(self) -> None:
        doc = parse("a[quote=Ann][b]x[/b] $y$[/quote][hr]")
        restored = from_json(to_json(doc))
        assert isinstance(restored, UbbDocument)
        assert to_json(restored) == to_json(doc)
        assert to_ubb(restored) == to_ubb(doc)

    def test_restored_tree_has_parents_and_is_frozen(self) -> None:
        restored = from_json(to_json(parse("[b][i]x[/i][/b]")))
        italic = restored.children[0].children[0]
        assert italic.parent is restored.children[0]
        assert restored.children[0].parent is restored.root
        with pytest.raises(TreeFrozenError):
            italic.append_child(TextNode(content="y"))

    def test_locations_survive(self) -> None:
        doc = parse("ab\n[b]x[/b]", source_file="p.ubb")
        restored = from_json(to_json(doc))
        original = doc.children[1].location
        assert restored.children[1].location == original

    def test_latex_round_trip(self) -> None:
        restored = from_dict(to_dict(LatexNode(expression="x", is_block=True)))
        assert isinstance(restored, LatexNode)
        assert restored.is_block
        assert restored.is_closed

    def test_unclosed_latex_round_trip(self) -> None:
        doc = parse("Price: $x")
        restored = from_json(to_json(doc))
        latex = restored.children[1]
        assert isinstance(latex, LatexNode)
        assert not latex.is_closed
        assert to_ubb(restored) == "Price: $x"

    def test_latex_without_closed_field_defaults_to_closed(self) -> None:
        restored = from_dict({"_type": "LatexNode", "expression": "x"})
        assert isinstance(restored, LatexNode)
        assert restored.is_closed

    def test_from_dict_node_is_not_frozen(self) -> None:
        restored = from_dict(to_dict(parse("[b]x[/b]").children[0]))
        assert isinstance(restored, TagNode)
        assert not restored.is_frozen
        assert restored.parent is None

    def test_deterministic_output(self) -> None:
        source = "[size=3]x[/size]"
        assert to_json(parse(source)) == to_json(parse(source))
        assert list(json.loads(to_json(parse(source)))) == ["_type", "root", "source_file"]

    def test_unicode_is_not_escaped(self) -> None:
        assert "正常" in to_json(parse("正常"))

    @given(markup_text)
    @settings(max_examples=100)
    def test_any_parse_round_trips(self, source: str) -> None:
        doc = parse(source)
        restored = from_json(to_json(doc))
        assert to_json(restored) == to_json(doc)
        assert to_ubb(restored) == source


class TestMalformedData:
    def test_missing_type(self) -> None:
        with pytest.raises(SerializationError, match="Missing '_type'"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(SerializationError, match="Unknown node type"):
            from_dict({"_type": "Paragraph"})

    def test_unknown_kind(self) -> None:
        with pytest.raises(SerializationError, match="Unknown node kind"):
            from_dict({"_type": "TagNode", "kind": "TABLE"})

    def test_missing_kind(self) -> None:
        with pytest.raises(SerializationError, match="Malformed TagNode"):
            from_dict({"_type": "TagNode"})

    def test_wrong_field_type(self) -> None:
        with pytest.raises(SerializationError, match="Expected string"):
            from_dict({"_type": "TextNode", "content": 3})

    def test_children_on_leaf_tag(self) -> None:
        data = {
            "_type": "TagNode",
            "kind": "DIVIDER",
            "children": [{"_type": "TextNode", "content": "x"}],
        }
        with pytest.raises(SerializationError, match="cannot have children"):
            from_dict(data)

    def test_document_root_must_be_document(self) -> None:
        data = {"_type": "UbbDocument", "root": {"_type": "TagNode", "kind": "BOLD"}}
        with pytest.raises(SerializationError, match="DOCUMENT"):
            from_dict(data)

    def test_invalid_json(self) -> None:
        with pytest.raises(SerializationError, match="Invalid JSON"):
            from_json("{not json")

    def test_json_must_be_document(self) -> None:
        with pytest.raises(SerializationError, match="Expected UbbDocument"):
            from_json(json.dumps(to_dict(TextNode(content="x"))))

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            from_json("[]")

    def test_default_kind_of_restored_root(self) -> None:
        doc = from_dict({"_type": "UbbDocument", "root": {"_type": "TagNode", "kind": "DOCUMENT"}})
        assert isinstance(doc, UbbDocument)
        assert doc.root.kind is NodeKind.DOCUMENT

class TestDeepNesting:
    """Trees deeper than the recursion limit fail with SerializationError."""

    def test_moderate_nesting_round_trips(self) -> None:
        source = "[b]" * 100 + "x"
        assert to_ubb(from_json(to_json(parse(source)))) == source

    def test_deep_tree_to_dict(self) -> None:
        doc = parse("[b]" * 5000 + "x")
        with pytest.raises(SerializationError, match="nested too deeply"):
            to_dict(doc)

    def test_deep_tree_to_json(self) -> None:
        doc = parse("[b]" * 5000 + "x")
        with pytest.raises(SerializationError, match="nested too deeply"):
            to_json(doc)

    def test_deep_data_from_dict(self) -> None:
        data: dict[str, object] = {"_type": "TextNode", "content": "x"}
        for _ in range(5000):
            data = {"_type": "TagNode", "kind": "BOLD", "children": [data]}
        with pytest.raises(SerializationError, match="nested too deeply"):
            from_dict(data)

    def test_deep_json_from_json(self) -> None:
        depth = 100_000
        data = '{"_type": "TagNode", "kind": "BOLD", "children": [' * depth + "]}" * depth
        with pytest.raises(SerializationError):
            from_json(data)
