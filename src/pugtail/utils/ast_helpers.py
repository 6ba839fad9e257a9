"""Predicates and small helpers over Pug AST nodes."""

from __future__ import annotations

from pugtail.nodes import Attribute, Block, BlockComment, Comment, Node, Tag
from pugtail.utils.constants import COMPONENT_TAG, SLOT_TAG


def is_component_call(node: Node) -> bool:
    """A Tag whose name starts with an uppercase letter (``Card(...)``)."""
    return isinstance(node, Tag) and node.name[:1].isupper()


def is_component_definition(node: Node) -> bool:
    return isinstance(node, Tag) and node.name == COMPONENT_TAG


def is_slot(node: Node) -> bool:
    return isinstance(node, Tag) and node.name == SLOT_TAG


def is_comment(node: Node) -> bool:
    return isinstance(node, (Comment, BlockComment))


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return value[1:-1]
    return value


def find_attribute(tag: Tag, name: str) -> Attribute | None:
    for attr in tag.attrs:
        if attr.name == name:
            return attr
    return None


def empty_block(at: Node | None = None) -> Block:
    """A Block with no children, positioned at ``at`` when given."""
    if at is None:
        return Block()
    return Block(line=at.line, column=at.column, filename=at.filename)
