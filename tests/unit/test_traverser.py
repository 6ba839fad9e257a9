"""Tests for the Traverser and NodeVisitor dispatch."""

import pytest

from pugtail.compiler import REMOVE, Traverser, VisitorMethods
from pugtail.exceptions import TraversalError
from pugtail.nodes import Block, Conditional, Text
from pugtail.visitors.base import NodeVisitor

from ..builders import block, conditional, each, include, tag, text


def _recorder(events):
    def hook(phase):
        return lambda node, parent: events.append((phase, type(node).__name__))

    methods = VisitorMethods(enter=hook("enter"), exit=hook("exit"))
    return {kind: methods for kind in ("Block", "Tag", "Text", "Conditional")}


class TestTraversalOrder:
    """Enter/children/exit ordering."""

    def test_depth_first_enter_then_exit(self) -> None:
        """Children are visited between a node's enter and exit."""
        events = []
        Traverser().traverse(block(tag("p", text("hi"))), _recorder(events))
        assert events == [
            ("enter", "Block"),
            ("enter", "Tag"),
            ("enter", "Block"),
            ("enter", "Text"),
            ("exit", "Text"),
            ("exit", "Block"),
            ("exit", "Tag"),
            ("exit", "Block"),
        ]

    def test_conditional_visits_consequent_then_alternate(self) -> None:
        """Conditional branches are visited in order."""
        seen = []
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: seen.append(node.val))}
        ast = block(conditional("a", block(text("yes")), block(text("no"))))
        Traverser().traverse(ast, visitor)
        assert seen == ["yes", "no"]

    def test_each_alternate_is_visited(self) -> None:
        """``each ... else`` content is traversed too."""
        seen = []
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: seen.append(node.val))}
        ast = block(each("item", "items", text("row"), alternate=block(text("empty"))))
        Traverser().traverse(ast, visitor)
        assert seen == ["row", "empty"]

    def test_resolved_include_is_visited(self) -> None:
        """The AST of a resolved include file is part of the traversal."""
        seen = []
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: seen.append(node.val))}
        Traverser().traverse(block(include("a.pug", block(text("inner")))), visitor)
        assert seen == ["inner"]

    def test_unresolved_include_is_skipped(self) -> None:
        """An include the loader never resolved has no children."""
        ast = block(include("a.pug", None))
        assert Traverser().traverse(ast, {}) == ast


class TestReplacement:
    """Replacing and removing nodes."""

    def test_empty_visitor_preserves_tree(self) -> None:
        """Traversing without callbacks yields an equal tree."""
        ast = block(tag("div", tag("p", text("x")), attrs={"class": "'a'"}))
        assert Traverser().traverse(ast, {}) == ast

    def test_enter_replacement(self) -> None:
        """A node returned from enter replaces the original."""
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: Text(val=node.val.upper()))}
        result = Traverser().traverse(block(text("a"), text("b")), visitor)
        assert [node.val for node in result.nodes] == ["A", "B"]

    def test_exit_hook_uses_kind_of_replacement(self) -> None:
        """Exit callbacks are looked up by the kind of the replaced node."""
        exited = []
        visitor = {
            "Tag": VisitorMethods(enter=lambda node, parent: Text(val="swapped")),
            "Text": VisitorMethods(exit=lambda node, parent: exited.append(node.val)),
        }
        Traverser().traverse(block(tag("p")), visitor)
        assert exited == ["swapped"]

    def test_remove_drops_from_block(self) -> None:
        """REMOVE deletes the node from its parent Block."""
        visitor = {"Tag": VisitorMethods(enter=lambda node, parent: REMOVE)}
        result = Traverser().traverse(block(text("keep"), tag("p"), text("also")), visitor)
        assert [node.val for node in result.nodes] == ["keep", "also"]

    def test_remove_from_exit(self) -> None:
        """REMOVE returned from exit also deletes the node."""
        visitor = {"Tag": VisitorMethods(exit=lambda node, parent: REMOVE)}
        result = Traverser().traverse(block(tag("p", text("x"))), visitor)
        assert result.nodes == []

    def test_removed_consequent_becomes_empty_block(self) -> None:
        """A Conditional always keeps a consequent Block."""

        def drop_branches(node, parent):
            return REMOVE if isinstance(parent, Conditional) else None

        visitor = {"Block": VisitorMethods(enter=drop_branches)}
        ast = block(conditional("a", block(text("yes")), block(text("no"))))
        result = Traverser().traverse(ast, visitor)
        cond = result.nodes[0]
        assert isinstance(cond.consequent, Block)
        assert cond.consequent.nodes == []
        assert cond.alternate is None

    def test_removing_root_raises(self) -> None:
        """The root cannot be removed."""
        visitor = {"Block": VisitorMethods(enter=lambda node, parent: REMOVE)}
        with pytest.raises(TraversalError, match="root node cannot be removed"):
            Traverser().traverse(block(text("x")), visitor)

    def test_input_tree_is_not_mutated(self) -> None:
        """Replacement rebuilds nodes instead of editing them."""
        original = block(tag("p", text("a")))
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: Text(val="b"))}
        result = Traverser().traverse(original, visitor)
        assert original.nodes[0].block.nodes[0].val == "a"
        assert result.nodes[0].block.nodes[0].val == "b"

    def test_parent_is_passed(self) -> None:
        """Callbacks receive the containing node."""
        parents = []
        visitor = {"Text": VisitorMethods(enter=lambda node, parent: parents.append(parent))}
        inner = block(text("x"))
        Traverser().traverse(block(tag("p", text("x"))), visitor)
        assert parents == [inner]


class TestNodeVisitor:
    """Method-name dispatch."""

    def test_methods_map_to_node_kinds(self) -> None:
        """enter_/exit_ methods are exposed under their node kind."""

        class Visitor(NodeVisitor):
            def enter_text(self, node, parent):
                return None

            def exit_namedblock(self, node, parent):
                return None

        visitor = Visitor()
        assert set(visitor) == {"Text", "NamedBlock"}
        assert visitor["Text"].enter is not None
        assert visitor["Text"].exit is None
        assert visitor["NamedBlock"].exit is not None
        assert len(visitor) == 2

    def test_visitor_drives_traversal(self) -> None:
        """A NodeVisitor subclass works with the Traverser."""

        class CommentlessText(NodeVisitor):
            def enter_text(self, node, parent):
                return REMOVE if node.val.startswith("#") else None

        result = Traverser().traverse(block(text("#x"), text("y")), CommentlessText())
        assert [node.val for node in result.nodes] == ["y"]

    def test_remove_is_singleton(self) -> None:
        """REMOVE compares by identity."""
        from pugtail.compiler.traverser import _Remove

        assert _Remove() is REMOVE
        assert repr(REMOVE) == "REMOVE"
