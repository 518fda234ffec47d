"""Tree serialization: JSON round-trip for ubbparse documents.

Converts documents and nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed posts (parse once, render many times)
- Handing a tree to a renderer in another process
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from ubbparse import parse
    from ubbparse.serialization import to_json, from_json

    doc = parse("[quote=Ann]Hi[/quote]")
    restored = from_json(to_json(doc))
    assert to_json(restored) == to_json(doc)

Restored trees have their parent links rebuilt and, for documents, are
frozen exactly like freshly parsed ones.

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

from __future__ import annotations

import json
from typing import Any

from ubbparse.errors import SerializationError
from ubbparse.location import SourceLocation
from ubbparse.nodes import LatexNode, NodeKind, TagNode, TextNode, UbbDocument, UbbNode

_TOO_DEEP = "Tree is nested too deeply to serialize"


def to_dict(node: UbbNode | UbbDocument) -> dict[str, Any]:
    """Convert a node or document to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes children and SourceLocation objects.

    Args:
        node: Any ubbparse node, or a UbbDocument.

    Returns:
        Dict with ``_type`` and the node's fields.

    Raises:
        SerializationError: If the node type is unknown or the tree is
            nested deeper than the interpreter's recursion limit.

    """
    try:
        return _node_to_dict(node)
    except RecursionError as e:
        raise SerializationError(_TOO_DEEP) from e


def _node_to_dict(node: UbbNode | UbbDocument) -> dict[str, Any]:
    match node:
        case UbbDocument():
            return {
                "_type": "UbbDocument",
                "root": _node_to_dict(node.root),
                "source_file": node.source_file,
            }
        case TextNode():
            result: dict[str, Any] = {"_type": "TextNode", "content": node.content}
        case LatexNode():
            result = {
                "_type": "LatexNode",
                "expression": node.expression,
                "is_block": node.is_block,
                "is_closed": node.is_closed,
            }
        case TagNode():
            result = {
                "_type": "TagNode",
                "kind": node.kind.name,
                "name": node.name,
                "values": list(node.values),
                "raw": node.raw,
                "closing_raw": node.closing_raw,
                "children": [_node_to_dict(child) for child in node.children],
            }
        case _:
            msg = f"Cannot serialize {type(node).__name__}"
            raise SerializationError(msg)

    result["location"] = _location_to_dict(node.location)
    return result


def _location_to_dict(location: SourceLocation) -> dict[str, Any]:
    return {
        "_type": "SourceLocation",
        "lineno": location.lineno,
        "col_offset": location.col_offset,
        "offset": location.offset,
        "end_offset": location.end_offset,
        "source_file": location.source_file,
    }


def from_dict(data: dict[str, Any]) -> UbbNode | UbbDocument:
    """Reconstruct a node or document from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Recursively deserializes children, reattaching each to its parent.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        A node, or a frozen UbbDocument.

    Raises:
        SerializationError: If ``_type`` is missing or unknown, a field
            is malformed, or the data is nested too deeply.

    """
    try:
        return _node_from_dict(data)
    except RecursionError as e:
        raise SerializationError(_TOO_DEEP) from e


def _node_from_dict(data: dict[str, Any]) -> UbbNode | UbbDocument:
    if not isinstance(data, dict):
        msg = f"Expected a serialized node object, got {type(data).__name__}"
        raise SerializationError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise SerializationError(msg)

    try:
        match type_name:
            case "UbbDocument":
                root = _node_from_dict(data["root"])
                if not isinstance(root, TagNode) or root.kind is not NodeKind.DOCUMENT:
                    msg = "Document root must be a TagNode of kind DOCUMENT"
                    raise SerializationError(msg)
                return UbbDocument(root=root, source_file=data.get("source_file"))
            case "TextNode":
                return TextNode(
                    content=_expect_str(data.get("content", "")),
                    location=_location_from_dict(data.get("location")),
                )
            case "LatexNode":
                return LatexNode(
                    expression=_expect_str(data.get("expression", "")),
                    is_block=bool(data.get("is_block", False)),
                    is_closed=bool(data.get("is_closed", True)),
                    location=_location_from_dict(data.get("location")),
                )
            case "TagNode":
                return _tag_from_dict(data)
            case _:
                msg = f"Unknown node type: {type_name!r}"
                raise SerializationError(msg)
    except (KeyError, TypeError) as e:
        msg = f"Malformed {type_name} data: {e}"
        raise SerializationError(msg) from e


def _tag_from_dict(data: dict[str, Any]) -> TagNode:
    kind_name = data["kind"]
    try:
        kind = NodeKind[kind_name]
    except KeyError:
        msg = f"Unknown node kind: {kind_name!r}"
        raise SerializationError(msg) from None

    node = TagNode(
        kind,
        name=_expect_str(data.get("name", "")),
        values=tuple(_expect_str(v) for v in data.get("values", ())),
        raw=_expect_str(data.get("raw", "")),
        location=_location_from_dict(data.get("location")),
    )
    for child_data in data.get("children", ()):
        child = _node_from_dict(child_data)
        if isinstance(child, UbbDocument):
            msg = "A document cannot be nested inside a node"
            raise SerializationError(msg)
        try:
            node.append_child(child)
        except ValueError as e:
            raise SerializationError(str(e)) from e

    closing_raw = data.get("closing_raw")
    if closing_raw is not None:
        node._close(_expect_str(closing_raw))
    return node


def _location_from_dict(value: Any) -> SourceLocation:
    if value is None:
        return SourceLocation.unknown()
    return SourceLocation(
        lineno=value["lineno"],
        col_offset=value["col_offset"],
        offset=value.get("offset", 0),
        end_offset=value.get("end_offset", 0),
        source_file=value.get("source_file"),
    )


def _expect_str(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"Expected string, got {type(value).__name__}"
        raise SerializationError(msg)
    return value


def to_json(doc: UbbDocument, *, indent: int | None = None) -> str:
    """Serialize a UbbDocument to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    data = to_dict(doc)
    try:
        return json.dumps(data, sort_keys=True, indent=indent, ensure_ascii=False)
    except RecursionError as e:
        raise SerializationError(_TOO_DEEP) from e


def from_json(data: str) -> UbbDocument:
    """Deserialize a UbbDocument from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        A frozen UbbDocument.

    Raises:
        SerializationError: If the JSON is invalid or doesn't represent a
            UbbDocument.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e
    except RecursionError as e:
        raise SerializationError(_TOO_DEEP) from e
    doc = from_dict(raw)
    if not isinstance(doc, UbbDocument):
        msg = f"Expected UbbDocument, got {type(doc).__name__}"
        raise SerializationError(msg)
    return doc


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
