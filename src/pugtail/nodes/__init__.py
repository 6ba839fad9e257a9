"""Pug AST node types.

The node classes mirror the JSON that pug-parser and pug-load produce,
with snake_case field names. ``from_dict`` / ``to_dict`` convert between
the two representations.
"""

from __future__ import annotations

from pugtail.nodes.base import Attribute, AttributeBlock, Node
from pugtail.nodes.control_flow import Case, Conditional, Each, When, While
from pugtail.nodes.elements import InterpolatedTag, Mixin, MixinBlock, Tag, YieldBlock
from pugtail.nodes.output import BlockComment, Code, Comment, Doctype, Filter, Text
from pugtail.nodes.serialization import NODE_TYPES, from_dict, from_json, to_dict, to_json
from pugtail.nodes.structure import (
    Block,
    Extends,
    FileReference,
    Include,
    NamedBlock,
    RawInclude,
)

__all__ = [
    "NODE_TYPES",
    "Attribute",
    "AttributeBlock",
    "Block",
    "BlockComment",
    "Case",
    "Code",
    "Comment",
    "Conditional",
    "Doctype",
    "Each",
    "Extends",
    "FileReference",
    "Filter",
    "Include",
    "InterpolatedTag",
    "Mixin",
    "MixinBlock",
    "NamedBlock",
    "Node",
    "RawInclude",
    "Tag",
    "Text",
    "When",
    "While",
    "YieldBlock",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
