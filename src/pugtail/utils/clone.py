"""Deep copies of AST sub-trees."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import TypeVar

from pugtail.nodes import Node

N = TypeVar("N", bound=Node)


def deep_clone(node: N) -> N:
    """Return a fully independent copy of ``node`` and its descendants.

    Mutating the copy (including attribute lists and nested blocks) never
    affects the original, which is what keeps canonical component bodies
    intact across expansions.
    """
    return copy.deepcopy(node)


def clone_nodes(nodes: Iterable[N]) -> list[N]:
    """Deep-clone each node of a sequence."""
    return [copy.deepcopy(node) for node in nodes]
