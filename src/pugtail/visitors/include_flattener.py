"""Inlining of resolved include/extends files."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from pugtail.nodes import Block
from pugtail.visitors.base import NodeVisitor

if TYPE_CHECKING:
    from pugtail.nodes import Extends, Include, NamedBlock, Node


class IncludeFlattener(NodeVisitor):
    """Replaces Include/Extends nodes with the file AST they reference.

    The included root Block is then spliced into its parent Block, so no
    wrapper is left behind. References the loader did not resolve are
    kept as they are.
    """

    def enter_include(self, node: Include, parent: Node | None) -> Block | None:
        return node.file.ast

    def enter_extends(self, node: Extends, parent: Node | None) -> Block | None:
        return node.file.ast

    def exit_block(self, node: Block, parent: Node | None) -> Block | None:
        return _splice_nested_blocks(node)

    def exit_namedblock(self, node: NamedBlock, parent: Node | None) -> Block | None:
        return _splice_nested_blocks(node)


def _splice_nested_blocks(block: Block) -> Block | None:
    # Exact type check: NamedBlocks are meaningful and stay
    if not any(type(child) is Block for child in block.nodes):
        return None
    nodes: list[Node] = []
    for child in block.nodes:
        if type(child) is Block:
            nodes.extend(child.nodes)  # type: ignore[attr-defined]
        else:
            nodes.append(child)
    return replace(block, nodes=nodes)
