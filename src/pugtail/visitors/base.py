"""Method-based visitors for the Traverser.

:class:`NodeVisitor` builds the kind -> callbacks mapping the Traverser
expects from ``enter_<kind>`` / ``exit_<kind>`` methods, with the node kind
lowercased (``enter_tag``, ``exit_namedblock``). Each callback receives
``(node, parent)`` and returns ``None`` to keep the node, a replacement
node, or ``REMOVE``.

Example:
    >>> class CommentStripper(NodeVisitor):
    ...     def enter_comment(self, node, parent):
    ...         return REMOVE
    >>> clean = Traverser().traverse(ast, CommentStripper())
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from pugtail.compiler.traverser import REMOVE, Visitor, VisitorMethods, _Remove
from pugtail.nodes import NODE_TYPES

__all__ = ["REMOVE", "NodeVisitor", "Visitor", "VisitorMethods", "_Remove"]


class NodeVisitor(Mapping[str, VisitorMethods]):
    """Visitor built from ``enter_<kind>`` / ``exit_<kind>`` methods.

    The dispatch table is built once per instance, so lookups during
    traversal are O(1) dict hits.
    """

    def __init__(self) -> None:
        self._methods: dict[str, VisitorMethods] = {}
        for kind in NODE_TYPES:
            key = kind.lower()
            enter = getattr(self, f"enter_{key}", None)
            exit_ = getattr(self, f"exit_{key}", None)
            if enter is not None or exit_ is not None:
                self._methods[kind] = VisitorMethods(enter=enter, exit=exit_)

    def __getitem__(self, kind: str) -> VisitorMethods:
        return self._methods[kind]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)
