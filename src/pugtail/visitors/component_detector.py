"""Detection of ``component`` definitions.

A definition is a ``component`` tag whose first text child holds the
component name::

    component Card()
      - const { title } = $props
      .card
        h2= title
        slot(body)
          p No content

Everything after the name is the body. Detection records the body's
slots, the ``$props``/``$attrs`` keys it declares, and its scope analysis,
then registers the definition.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pugtail._types import NodeLocation
from pugtail.analysis.scope import ScopeAnalyzer
from pugtail.analysis.usage import detect_usage
from pugtail.analysis.visitor import iter_children
from pugtail.attributes import unescape_derived_attributes
from pugtail.config import DEFAULT_CONFIG, ScopeIsolation
from pugtail.definitions import ComponentDefinition, SlotDefinition
from pugtail.exceptions import ErrorReporter
from pugtail.nodes import Block, Case, Conditional, Each, Tag, Text, When, While
from pugtail.slots import get_slot_name
from pugtail.utils.ast_helpers import (
    empty_block,
    is_component_call,
    is_component_definition,
    is_slot,
)
from pugtail.utils.clone import clone_nodes, deep_clone
from pugtail.utils.constants import COMPONENT_HEADER
from pugtail.visitors.base import NodeVisitor

if TYPE_CHECKING:
    from pugtail.config import ExpansionConfig
    from pugtail.definitions import ScopeAnalysisResult
    from pugtail.nodes import Node
    from pugtail.registry import ComponentRegistry

logger = logging.getLogger(__name__)

_PATH_SEPARATOR = ">"


class ComponentDetector(NodeVisitor):
    """Registers every ``component`` definition in a tree.

    Definitions inside resolved include/extends files are found too, since
    the Traverser descends into ``file.ast``.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        reporter: ErrorReporter | None = None,
        config: ExpansionConfig | None = None,
    ) -> None:
        super().__init__()
        self._registry = registry
        self._reporter = reporter or ErrorReporter()
        self._config = config or DEFAULT_CONFIG
        self._scope_analyzer = ScopeAnalyzer(self._config.allowed_globals)

    def enter_tag(self, node: Tag, parent: Node | None) -> None:
        if is_component_definition(node):
            definition = self.extract_definition(node)
            self._registry.register(definition)
            if self._config.debug:
                logger.debug(
                    "Registered component %s at %s (slots: %s, usage: %s)",
                    definition.name,
                    definition.location.format(),
                    ", ".join(definition.slot_names) or "-",
                    "props/attrs" if definition.usage else "legacy",
                )

    def extract_definition(self, node: Tag) -> ComponentDefinition:
        """Build a ComponentDefinition from a ``component`` tag.

        Raises:
            InvalidComponentDefinitionError: If the name header is missing or
                malformed
            DuplicateSlotDefinitionError: If a slot name repeats on one path
            ExternalVariableReferenceError: In ``error`` scope mode, for the
                first caller variable the body reads
        """
        location = NodeLocation.of(node).with_filename(self._reporter.filename)
        name, header = self._parse_header(node, location)

        children = [child for child in node.block.nodes if child is not header]  # type: ignore[union-attr]
        body = Block(
            nodes=clone_nodes(children),
            line=node.line,
            column=node.column,
            filename=node.filename,
        )

        slots: dict[str, SlotDefinition] = {}
        self._collect_slots(body, (), slots, {})
        usage = detect_usage(body)
        scope = self._scope_analyzer.analyze(body)
        self._check_scope(name, scope, location)
        if usage is not None:
            unescape_derived_attributes(body, scope.derived_variables)

        return ComponentDefinition(
            name=name,
            body=body,
            slots=slots,
            usage=usage,
            scope=scope,
            location=location,
        )

    def _parse_header(self, node: Tag, location: NodeLocation) -> tuple[str, Text]:
        header = None
        if node.block is not None:
            header = next((child for child in node.block.nodes if isinstance(child, Text)), None)
        if header is None:
            raise self._reporter.invalid_definition(
                "Component definition is missing a name",
                location,
                "Write the name after the keyword: component Card()",
            )
        match = COMPONENT_HEADER.match(header.val.strip())
        if match is None:
            raise self._reporter.invalid_definition(
                f'Invalid component name "{header.val.strip()}"',
                location,
                "Component names start with an uppercase letter: component Card()",
            )
        return match.group(1), header

    # -- slots ----------------------------------------------------------

    def _collect_slots(
        self,
        node: Node,
        path: tuple[str, ...],
        slots: dict[str, SlotDefinition],
        seen: dict[tuple[str, str], SlotDefinition],
    ) -> None:
        """Record slot placeholders, labelling each with its control-flow path.

        Two placeholders with the same name clash only when their paths are
        identical; ``if`` / ``else`` branches never render together.
        Placeholders inside nested component calls belong to the callee.
        """
        if is_component_call(node):
            return

        if is_slot(node):
            self._add_slot(node, path, slots, seen)  # type: ignore[arg-type]
        elif isinstance(node, Conditional):
            self._collect_conditional(node, path, 0, slots, seen)
            return
        elif isinstance(node, Each):
            self._collect_slots(node.block, (*path, "each"), slots, seen)
            if node.alternate is not None:
                self._collect_slots(node.alternate, (*path, "each-else"), slots, seen)
            return
        elif isinstance(node, Case):
            self._collect_slots(node.block, (*path, "case"), slots, seen)
            return
        elif isinstance(node, When):
            if node.block is not None:
                self._collect_slots(node.block, (*path, f"when:{node.expr}"), slots, seen)
            return
        elif isinstance(node, While):
            self._collect_slots(node.block, (*path, "while"), slots, seen)
            return

        for child in iter_children(node):
            self._collect_slots(child, path, slots, seen)

    def _collect_conditional(
        self,
        node: Conditional,
        path: tuple[str, ...],
        index: int,
        slots: dict[str, SlotDefinition],
        seen: dict[tuple[str, str], SlotDefinition],
    ) -> None:
        label = "if" if index == 0 else f"else-if:{index}"
        self._collect_slots(node.consequent, (*path, label), slots, seen)
        if isinstance(node.alternate, Conditional):
            self._collect_conditional(node.alternate, path, index + 1, slots, seen)
        elif node.alternate is not None:
            self._collect_slots(node.alternate, (*path, "else"), slots, seen)

    def _add_slot(
        self,
        node: Tag,
        path: tuple[str, ...],
        slots: dict[str, SlotDefinition],
        seen: dict[tuple[str, str], SlotDefinition],
    ) -> None:
        name = get_slot_name(node, self._reporter)
        label = _PATH_SEPARATOR.join(path)
        location = NodeLocation.of(node, path=label).with_filename(self._reporter.filename)

        previous = seen.get((name, label))
        if previous is not None:
            raise self._reporter.duplicate_slot_definition(name, location, previous.location)

        default = deep_clone(node.block) if node.block is not None else empty_block(node)
        definition = SlotDefinition(name=name, default_content=default, location=location, path=label)
        seen[(name, label)] = definition
        slots.setdefault(name, definition)

    # -- scope ----------------------------------------------------------

    def _check_scope(self, name: str, scope: ScopeAnalysisResult, location: NodeLocation) -> None:
        mode = self._config.scope_isolation
        if mode is ScopeIsolation.OFF or not scope.external_references:
            return
        for variable in sorted(scope.external_references):
            error = self._reporter.external_variable(variable, name, location)
            if mode is ScopeIsolation.ERROR:
                raise error
            logger.warning("%s", error)
