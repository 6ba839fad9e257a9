"""Expansion of component call sites.

Every Tag whose name starts with an uppercase letter is a call site.
Calls are expanded when the Traverser leaves their parent Block, so the
content a call site provides has already been expanded in the caller's
context by then. Each call becomes:

1. a private clone of the component body,
2. with ``$props``/``$attrs`` (or legacy ``attributes``) bindings
   injected and pass-through attributes forwarded to the root element,
3. with every slot placeholder replaced by provided or default content,
4. with the calls inside it expanded by a nested expander whose call
   stack includes this component, which is what detects cycles,

and the result is spliced into the parent Block in place of the call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, cast

from pugtail._types import NodeLocation
from pugtail.attributes import extract_attributes, inject_attributes
from pugtail.compiler.traverser import Traverser
from pugtail.config import DEFAULT_CONFIG
from pugtail.exceptions import ErrorReporter
from pugtail.nodes import Block, NamedBlock, Tag
from pugtail.slots import SlotResolver
from pugtail.utils.ast_helpers import is_component_call
from pugtail.visitors.base import NodeVisitor

if TYPE_CHECKING:
    from pugtail.config import ExpansionConfig
    from pugtail.nodes import Node
    from pugtail.registry import ComponentRegistry

logger = logging.getLogger(__name__)


class ComponentExpander(NodeVisitor):
    """Replaces component calls with expanded component bodies.

    Attributes:
        call_stack: Names of the components being expanded around this
            expander, outermost first. Empty for the top-level template.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        reporter: ErrorReporter | None = None,
        config: ExpansionConfig | None = None,
        call_stack: tuple[str, ...] = (),
    ) -> None:
        super().__init__()
        self._registry = registry
        self._reporter = reporter or ErrorReporter()
        self._config = config or DEFAULT_CONFIG
        self._slots = SlotResolver(self._reporter)
        self._traverser = Traverser()
        self.call_stack = call_stack

    def exit_block(self, node: Block, parent: Node | None) -> Block | None:
        return self._expand_children(node)

    def exit_namedblock(self, node: NamedBlock, parent: Node | None) -> Block | None:
        return self._expand_children(node)

    def _expand_children(self, block: Block) -> Block | None:
        if not any(is_component_call(child) for child in block.nodes):
            return None
        nodes: list[Node] = []
        for child in block.nodes:
            if is_component_call(child):
                nodes.extend(self.expand_call(cast(Tag, child)).nodes)
            else:
                nodes.append(child)
        return replace(block, nodes=nodes)

    def expand_call(self, call: Tag) -> Block:
        """Expand one call site into a Block of plain Pug nodes.

        Raises:
            RecursiveComponentCallError: If the component is already being
                expanded further up the stack
            ComponentNotFoundError: If no such component is registered
            SlotNotDefinedError: If the call fills a slot the component lacks
            DuplicateSlotProvidedError: If the call fills a slot twice
        """
        name = call.name
        location = NodeLocation.of(call)

        if name in self.call_stack:
            cycle = (*self.call_stack[self.call_stack.index(name) :], name)
            raise self._reporter.recursive_call(cycle, location)

        definition = self._registry.get(name)
        if definition is None:
            raise self._reporter.component_not_found(name, location, self._registry.names())

        if self._config.debug:
            logger.debug(
                "Expanding %s at %s (depth %d)",
                name,
                location.with_filename(self._reporter.filename).format(),
                len(self.call_stack),
            )

        body = definition.instantiate()
        provided = self._slots.extract_provided_slots(call)
        inject_attributes(body, extract_attributes(call), definition, at=call)
        body = self._slots.resolve_slots(body, provided, definition, location)

        nested = ComponentExpander(
            self._registry,
            self._reporter,
            self._config,
            (*self.call_stack, name),
        )
        return cast(Block, self._traverser.traverse(body, nested))
