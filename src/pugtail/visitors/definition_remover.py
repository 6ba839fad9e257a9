"""Removal of ``component`` definitions after expansion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pugtail.utils.ast_helpers import is_component_definition
from pugtail.visitors.base import REMOVE, NodeVisitor, _Remove

if TYPE_CHECKING:
    from pugtail.nodes import Node, Tag


class DefinitionRemover(NodeVisitor):
    """Drops every ``component`` tag; definitions render nothing."""

    def enter_tag(self, node: Tag, parent: Node | None) -> _Remove | None:
        return REMOVE if is_component_definition(node) else None
