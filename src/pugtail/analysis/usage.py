"""Detection of declared ``$props`` / ``$attrs`` keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pugtail.analysis.script import analyze_fragment
from pugtail.analysis.visitor import walk
from pugtail.definitions import ComponentUsage
from pugtail.nodes import Code
from pugtail.utils.constants import PROPS_OBJECT

if TYPE_CHECKING:
    from pugtail.nodes import Block


def detect_usage(body: Block) -> ComponentUsage | None:
    """Find the keys a component body destructures from ``$props`` / ``$attrs``.

    Scans every ``Code`` fragment in the body for
    ``const { ... } = $props`` and ``const { ... } = $attrs``. Keys are the
    original property names; ``key: local`` and ``key = default`` both
    yield ``key``, and rest elements contribute nothing.

    Returns:
        ComponentUsage, or None when no key is declared (legacy
        ``attributes`` mode)

    Example:
        >>> usage = detect_usage(body)  # - const { title } = $props
        >>> usage.from_props
        ('title',)
    """
    props: list[str] = []
    attrs: list[str] = []
    for node in walk(body):
        if not isinstance(node, Code):
            continue
        for destructuring in analyze_fragment(node.val).destructurings:
            target = props if destructuring.source == PROPS_OBJECT else attrs
            for key in destructuring.keys:
                if key not in target:
                    target.append(key)

    if not props and not attrs:
        return None
    return ComponentUsage(from_props=tuple(props), from_attrs=tuple(attrs))
