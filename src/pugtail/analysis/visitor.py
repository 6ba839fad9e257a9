"""Shared child-traversal rules for the Pug AST.

Provides CHILD_ATTRS and iter_children / walk for generic traversal.
Used by the Traverser, the scope and usage analyzers, and slot handling.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pugtail.nodes import Node

# Node kind -> child-bearing attributes, in visiting order.
# ``file.ast`` is the resolved root of an included or extended file.
CHILD_ATTRS: dict[str, tuple[str, ...]] = {
    "Block": ("nodes",),
    "NamedBlock": ("nodes",),
    "Tag": ("block",),
    "InterpolatedTag": ("block",),
    "Mixin": ("block",),
    "BlockComment": ("block",),
    "Filter": ("block",),
    "Code": ("block",),
    "Conditional": ("consequent", "alternate"),
    "Each": ("block", "alternate"),
    "Case": ("block",),
    "When": ("block",),
    "While": ("block",),
    "Include": ("file.ast",),
    "Extends": ("file.ast",),
}


def get_child(node: Node, attr: str) -> Node | None:
    """Read a single-child attribute, following ``file.ast``."""
    if attr == "file.ast":
        file = getattr(node, "file", None)
        return file.ast if file is not None else None
    return getattr(node, attr)


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in visiting order."""
    for attr in CHILD_ATTRS.get(type(node).__name__, ()):
        if attr == "nodes":
            yield from node.nodes  # type: ignore[attr-defined]
        else:
            child = get_child(node, attr)
            if child is not None:
                yield child


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth-first, pre-order.

    Iterative, so arbitrarily deep trees do not hit the recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))
