"""Slot extraction and resolution.

A call site fills slots through direct ``slot`` children; everything else
it contains (comments aside) is ``default`` content::

    Card(title="Hi")
      slot(header)
        h2 Custom header
      p This paragraph is default content

Inside the expanded body every ``slot`` placeholder is then replaced by
the provided content, or by the placeholder's own children (its default),
or by nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from pugtail._types import NodeLocation
from pugtail.analysis.visitor import iter_children
from pugtail.exceptions import ErrorReporter
from pugtail.nodes import Block
from pugtail.utils.ast_helpers import (
    find_attribute,
    is_comment,
    is_component_call,
    is_slot,
    strip_quotes,
)
from pugtail.utils.clone import deep_clone
from pugtail.utils.constants import DEFAULT_SLOT

if TYPE_CHECKING:
    from pugtail.definitions import ComponentDefinition
    from pugtail.nodes import Node, Tag


def get_slot_name(slot: Tag, reporter: ErrorReporter | None = None) -> str:
    """Name of a ``slot`` tag.

    ``slot(name="header")`` and ``slot(header)`` both name ``header``; a
    slot without either is ``default``.

    Raises:
        InvalidComponentDefinitionError: For ``slot(name)``, which has no value
    """
    name_attr = find_attribute(slot, "name")
    if name_attr is not None:
        if not isinstance(name_attr.val, str):
            raise (reporter or ErrorReporter()).invalid_definition(
                "Invalid slot name attribute value",
                NodeLocation.of(slot),
                'Use slot(name="header") or the bare form slot(header).',
            )
        return strip_quotes(name_attr.val.strip())
    for attr in slot.attrs:
        if attr.val is True:
            return attr.name
    return DEFAULT_SLOT


class SlotResolver:
    """Extracts provided slot content and fills slot placeholders.

    Stateless apart from the error reporter; one instance serves a whole
    expansion run.
    """

    __slots__ = ("_reporter",)

    def __init__(self, reporter: ErrorReporter | None = None) -> None:
        self._reporter = reporter or ErrorReporter()

    def extract_provided_slots(self, call: Tag) -> dict[str, Block]:
        """Collect the content a call site provides, by slot name.

        Raises:
            DuplicateSlotProvidedError: If a name is provided twice, or bare
                content accompanies an explicit ``slot(default)``
        """
        provided: dict[str, Block] = {}
        if call.block is None:
            return provided

        bare: list[Node] = []
        for child in call.block.nodes:
            if is_slot(child):
                name = get_slot_name(child, self._reporter)  # type: ignore[arg-type]
                if name in provided:
                    raise self._reporter.duplicate_slot_provided(name, NodeLocation.of(child))
                provided[name] = child.block or Block(  # type: ignore[attr-defined]
                    line=child.line, column=child.column, filename=child.filename
                )
            elif not is_comment(child):
                bare.append(child)

        if bare:
            if DEFAULT_SLOT in provided:
                raise self._reporter.duplicate_slot_provided(DEFAULT_SLOT, NodeLocation.of(call))
            provided[DEFAULT_SLOT] = Block(
                nodes=bare, line=call.line, column=call.column, filename=call.filename
            )
        return provided

    def resolve_slot(
        self,
        name: str,
        provided: Mapping[str, Block],
        default: Block | None = None,
    ) -> Block:
        """Content for one placeholder: provided, else default, else empty.

        Always returns a fresh copy, so content used by several
        placeholders is never shared between them.
        """
        if name in provided:
            return deep_clone(provided[name])
        if default is not None:
            return deep_clone(default)
        return Block()

    def resolve_slots(
        self,
        body: Block,
        provided: Mapping[str, Block],
        definition: ComponentDefinition,
        call_location: NodeLocation | None = None,
    ) -> Block:
        """Replace every slot placeholder in a cloned body.

        Placeholders inside nested component calls belong to the callee and
        are left for its own expansion.

        Raises:
            SlotNotDefinedError: If a named slot is provided that the
                component does not declare (``default`` is always accepted)
        """
        for name in provided:
            if name != DEFAULT_SLOT and name not in definition.slots:
                raise self._reporter.slot_not_defined(
                    name, call_location, definition.slot_names
                )
        self._fill_block(body, provided)
        return body

    def _fill_block(self, block: Block, provided: Mapping[str, Block]) -> None:
        resolved: list[Node] = []
        for node in block.nodes:
            if is_slot(node):
                name = get_slot_name(node, self._reporter)  # type: ignore[arg-type]
                content = self.resolve_slot(name, provided, node.block)  # type: ignore[attr-defined]
                self._fill_block(content, provided)
                resolved.extend(content.nodes)
                continue
            if isinstance(node, Block):
                self._fill_block(node, provided)
            elif not is_component_call(node):
                self._fill_children(node, provided)
            resolved.append(node)
        block.nodes = resolved

    def _fill_children(self, node: Node, provided: Mapping[str, Block]) -> None:
        for child in iter_children(node):
            if isinstance(child, Block):
                self._fill_block(child, provided)
            elif not is_component_call(child):
                self._fill_children(child, provided)
