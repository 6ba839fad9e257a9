"""Conversion between node objects and pug-parser JSON.

pug-parser and pug-load emit plain objects tagged by ``type`` with
camelCase keys (``selfClosing``, ``attributeBlocks``, ``mustEscape``).
These helpers map them onto the dataclasses in :mod:`pugtail.nodes` and
back, so an AST parsed by the JavaScript toolchain can be expanded here
and handed back to pug-code-gen.

Example:
    >>> ast = from_json('{"type": "Block", "nodes": [{"type": "Text", "val": "hi"}]}')
    >>> ast.nodes[0].val
    'hi'
    >>> to_dict(ast)["nodes"][0]["type"]
    'Text'
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from pugtail._types import NodeLocation
from pugtail.exceptions import UnexpectedNodeTypeError
from pugtail.nodes.base import Attribute, AttributeBlock, Node
from pugtail.nodes.control_flow import Case, Conditional, Each, When, While
from pugtail.nodes.elements import InterpolatedTag, Mixin, MixinBlock, Tag, YieldBlock
from pugtail.nodes.output import BlockComment, Code, Comment, Doctype, Filter, Text
from pugtail.nodes.structure import (
    Block,
    Extends,
    FileReference,
    Include,
    NamedBlock,
    RawInclude,
)

# Node kind (the pug ``type`` string) -> class
NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Block,
        NamedBlock,
        Tag,
        InterpolatedTag,
        Mixin,
        MixinBlock,
        YieldBlock,
        Text,
        Comment,
        BlockComment,
        Code,
        Doctype,
        Filter,
        Conditional,
        Each,
        While,
        Case,
        When,
        Include,
        Extends,
        RawInclude,
        FileReference,
    )
}

# Fields holding a single child node
_NODE_FIELDS = frozenset({"block", "consequent", "alternate", "ast", "file"})


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _location(data: Mapping[str, Any]) -> NodeLocation:
    return NodeLocation(
        line=data.get("line") or 0,
        column=data.get("column"),
        filename=data.get("filename"),
    )


def _attribute_from_dict(data: Mapping[str, Any]) -> Attribute:
    return Attribute(
        name=data["name"],
        val=data.get("val", True),
        must_escape=data.get("mustEscape", True),
        line=data.get("line") or 0,
        column=data.get("column"),
        filename=data.get("filename"),
    )


def _attribute_block_from_dict(data: Mapping[str, Any] | str) -> AttributeBlock:
    # Older pug-parser releases emit bare expression strings
    if isinstance(data, str):
        return AttributeBlock(val=data)
    return AttributeBlock(
        val=data["val"],
        line=data.get("line") or 0,
        column=data.get("column"),
        filename=data.get("filename"),
    )


def from_dict(data: Mapping[str, Any]) -> Node:
    """Build a node tree from pug-parser JSON.

    Args:
        data: A decoded pug AST object (must carry ``type``)

    Returns:
        The corresponding node, with children converted recursively

    Raises:
        UnexpectedNodeTypeError: If ``type`` is missing or unknown
    """
    if not isinstance(data, Mapping):
        raise UnexpectedNodeTypeError("Pug AST", type(data).__name__)

    kind = data.get("type")
    cls = NODE_TYPES.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise UnexpectedNodeTypeError("Pug AST", str(kind), _location(data))

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        key = _camel(f.name)
        if key not in data:
            continue
        value = data[key]
        if f.name == "nodes":
            value = [from_dict(child) for child in value if child is not None]
        elif f.name in _NODE_FIELDS:
            value = from_dict(value) if value is not None else None
        elif f.name == "attrs":
            value = [_attribute_from_dict(attr) for attr in value]
        elif f.name == "attribute_blocks":
            value = [_attribute_block_from_dict(attr) for attr in value]
        elif f.name == "line" and value is None:
            value = 0
        kwargs[f.name] = value
    return cls(**kwargs)


def _encode(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Attribute):
        return {
            "name": value.name,
            "val": value.val,
            "mustEscape": value.must_escape,
            "line": value.line,
            "column": value.column,
            "filename": value.filename,
        }
    if isinstance(value, AttributeBlock):
        return {
            "type": "AttributeBlock",
            "val": value.val,
            "line": value.line,
            "column": value.column,
            "filename": value.filename,
        }
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node tree back into pug-parser JSON."""
    data: dict[str, Any] = {"type": type(node).__name__}
    for f in fields(node):
        data[_camel(f.name)] = _encode(getattr(node, f.name))
    return data


def from_json(text: str) -> Node:
    """Parse a JSON document produced by pug-parser / pug-load."""
    return from_dict(json.loads(text))


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node tree to pug-compatible JSON."""
    return json.dumps(to_dict(node), indent=indent)
