"""Depth-first AST traversal with node replacement and removal.

Visiting order for each node:

1. ``enter(node, parent)``: may replace the node or remove it
2. children of the (possibly replaced) node, per CHILD_ATTRS
3. ``exit(node, parent)``: may replace or remove the node again

Child rules: Block → nodes; Tag / InterpolatedTag → block;
Conditional → consequent then alternate (an ``else if`` Conditional is
recursed into); Each → block then alternate; Case / When / While → block;
Include / Extends → ``file.ast`` once the loader has resolved it.

A visitor is a mapping from node kind (``"Tag"``, ``"Block"``...) to
VisitorMethods. Each callback receives ``(node, parent)`` and returns
``None`` to keep the node, a replacement node, or ``REMOVE`` to drop it
from its parent Block.

Nodes are never mutated: a node whose children changed is rebuilt with
``dataclasses.replace``, so the input tree stays intact.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final, TypeAlias

from pugtail.analysis.visitor import CHILD_ATTRS
from pugtail.exceptions import TraversalError
from pugtail.utils.ast_helpers import empty_block

if TYPE_CHECKING:
    from pugtail.nodes import Node


class _Remove:
    """Sentinel type for node removal."""

    _instance: _Remove | None = None

    def __new__(cls) -> _Remove:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMOVE"


REMOVE: Final = _Remove()

Hook: TypeAlias = "Callable[[Node, Node | None], Node | _Remove | None]"


@dataclass(frozen=True, slots=True)
class VisitorMethods:
    """Enter/exit callbacks for one node kind."""

    enter: Hook | None = None
    exit: Hook | None = None


Visitor: TypeAlias = Mapping[str, VisitorMethods]

# Children that must stay a Block when a visitor removes them
_REQUIRED_BLOCKS = frozenset(
    {
        ("Conditional", "consequent"),
        ("Each", "block"),
        ("While", "block"),
        ("Case", "block"),
    }
)


class Traverser:
    """Walks an AST and applies a visitor.

    Stateless; one instance can run any number of traversals, from any
    number of threads.

    Example:
        >>> strip_comments = {"Comment": VisitorMethods(enter=lambda n, p: REMOVE)}
        >>> clean = Traverser().traverse(ast, strip_comments)
    """

    __slots__ = ()

    def traverse(self, root: Node, visitor: Visitor) -> Node:
        """Traverse ``root`` and return the transformed tree.

        Raises:
            TraversalError: If the visitor removes the root node
        """
        result = self._visit(root, None, visitor)
        if isinstance(result, _Remove):
            raise TraversalError("The root node cannot be removed")
        return result

    def _visit(self, node: Node, parent: Node | None, visitor: Visitor) -> Node | _Remove:
        methods = visitor.get(type(node).__name__)
        if methods is not None and methods.enter is not None:
            result = methods.enter(node, parent)
            if isinstance(result, _Remove):
                return REMOVE
            if result is not None:
                node = result

        node = self._visit_children(node, visitor)

        methods = visitor.get(type(node).__name__)
        if methods is not None and methods.exit is not None:
            result = methods.exit(node, parent)
            if isinstance(result, _Remove):
                return REMOVE
            if result is not None:
                node = result
        return node

    def _visit_children(self, node: Node, visitor: Visitor) -> Node:
        kind = type(node).__name__
        attrs = CHILD_ATTRS.get(kind)
        if not attrs:
            return node

        updates: dict[str, object] = {}
        for attr in attrs:
            if attr == "nodes":
                children: list[Node] = []
                for child in node.nodes:  # type: ignore[attr-defined]
                    result = self._visit(child, node, visitor)
                    if not isinstance(result, _Remove):
                        children.append(result)
                updates["nodes"] = children
            elif attr == "file.ast":
                file = node.file  # type: ignore[attr-defined]
                if file is None or file.ast is None:
                    continue
                result = self._visit(file.ast, node, visitor)
                ast = None if isinstance(result, _Remove) else result
                updates["file"] = replace(file, ast=ast)
            else:
                child = getattr(node, attr)
                if child is None:
                    continue
                result = self._visit(child, node, visitor)
                if isinstance(result, _Remove):
                    result = empty_block(node) if (kind, attr) in _REQUIRED_BLOCKS else None
                updates[attr] = result

        return replace(node, **updates) if updates else node
