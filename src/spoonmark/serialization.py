"""AST serialization: JSON round-trip for Spoonmark AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts, for caching parsed
documents and handing them to code generators written in other languages.

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from spoonmark import parse
    from spoonmark.serialization import to_json, from_json

    ast = parse("# Hello **World**")
    assert from_json(to_json(ast)) == ast

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from dataclasses import fields
from typing import Any

from spoonmark.nodes import (
    Block,
    Code,
    CodeSpan,
    Comment,
    Emphasis,
    Heading,
    Http,
    HttpMethod,
    HttpParam,
    Link,
    List,
    ListItem,
    Node,
    Note,
    Paragraph,
    Quote,
    Ruler,
    Strong,
    Table,
    Text,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Comment,
        Heading,
        Paragraph,
        Note,
        Quote,
        List,
        ListItem,
        Http,
        Code,
        Table,
        Ruler,
        Text,
        Strong,
        Emphasis,
        CodeSpan,
        Link,
        HttpMethod,
        HttpParam,
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, tuple):
        # Table cells are tuples of tuples; recurse at every level
        return [_serialize_value(item) for item in value]
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs = {f.name: _deserialize_value(data[f.name]) for f in fields(node_cls) if f.name in data}
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(ast: Iterable[Block], *, indent: int | None = None) -> str:
    """Serialize a parsed document to a JSON array."""
    return json.dumps([to_dict(block) for block in ast], sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[Block, ...]:
    """Deserialize a document produced by ``to_json``.

    Raises:
        ValueError: If the JSON is not an array of nodes.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of nodes, got {type(raw).__name__}"
        raise ValueError(msg)
    return tuple(from_dict(item) for item in raw)  # type: ignore[misc]
