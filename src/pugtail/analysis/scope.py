"""Scope analysis for component bodies.

Finds the identifiers a component body declares and reads, and reports
reads that the component does not own. Those are variables that would
silently resolve against whatever scope the component happens to be
expanded into.

A name is owned when it is:

- declared in the body (``const``/``let``/``var``, function names and
  parameters, ``each`` loop variables, ``catch`` bindings)
- destructured from ``$props`` or ``$attrs``
- a JavaScript built-in or a Pug-provided name (ALLOWED_GLOBALS)
- listed in the configured ``allowed_globals``

Analysis is flow-insensitive: a name declared anywhere in the body counts
as declared everywhere in it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from pugtail.analysis.script import FragmentAnalysis, analyze_fragment
from pugtail.analysis.visitor import iter_children
from pugtail.definitions import ScopeAnalysisResult
from pugtail.utils.ast_helpers import is_component_call
from pugtail.utils.constants import ALLOWED_GLOBALS, ATTRS_OBJECT

if TYPE_CHECKING:
    from pugtail.config import ExpansionConfig
    from pugtail.nodes import (
        Attribute,
        AttributeBlock,
        Case,
        Code,
        Conditional,
        Each,
        InterpolatedTag,
        Mixin,
        Node,
        Tag,
        When,
        While,
    )


class ScopeAnalyzer:
    """Collect declared, referenced and external identifiers of a body.

    Looks at every ``Code`` fragment, every control-flow test and
    iterable, interpolated tag names, and attribute values (including
    ``&attributes`` expressions and shorthand component-call attributes).

    Thread-safe: creates new state for each analyze() call.

    Example:
        >>> analyzer = ScopeAnalyzer(allowed_globals=frozenset({"site"}))
        >>> result = analyzer.analyze(definition_body)
        >>> sorted(result.external_references)
        ['user']
    """

    def __init__(self, allowed_globals: Iterable[str] = ()) -> None:
        self._allowed = ALLOWED_GLOBALS | frozenset(allowed_globals)
        self._declared: set[str] = set()
        self._referenced: set[str] = set()
        self._props: set[str] = set()
        self._attrs: set[str] = set()
        self._dispatch: dict[str, Callable[..., None]] = {}
        for name in dir(self):
            if name.startswith("_visit_") and name != "_visit_children":
                self._dispatch[name[7:]] = getattr(self, name)

    def analyze(self, body: Node) -> ScopeAnalysisResult:
        """Analyze a component body.

        Returns:
            ScopeAnalysisResult with ``external_references`` =
            referenced - declared - derived - allowed
        """
        self._declared = set()
        self._referenced = set()
        self._props = set()
        self._attrs = set()
        self._visit(body)

        owned = self._declared | self._props | self._attrs | self._allowed
        return ScopeAnalysisResult(
            declared=frozenset(self._declared),
            referenced=frozenset(self._referenced),
            props_variables=frozenset(self._props),
            attrs_variables=frozenset(self._attrs),
            external_references=frozenset(self._referenced - owned),
        )

    def _visit(self, node: Node) -> None:
        handler = self._dispatch.get(type(node).__name__.lower())
        if handler is not None:
            handler(node)
        self._visit_children(node)

    def _visit_children(self, node: Node) -> None:
        for child in iter_children(node):
            self._visit(child)

    def _record(self, analysis: FragmentAnalysis) -> None:
        self._declared |= analysis.declared
        self._referenced |= analysis.referenced
        for destructuring in analysis.destructurings:
            target = self._attrs if destructuring.source == ATTRS_OBJECT else self._props
            target.update(destructuring.bindings)

    def _expression(self, source: str | None) -> None:
        if source and source.strip():
            self._record(analyze_fragment(source, expression=True))

    def _attributes(self, attrs: Iterable[Attribute], blocks: Iterable[AttributeBlock]) -> None:
        for attr in attrs:
            if isinstance(attr.val, str):
                self._expression(attr.val)
        for block in blocks:
            self._expression(block.val)

    # Handlers record the node's own expressions; _visit walks the children.

    def _visit_code(self, node: Code) -> None:
        if node.buffer:
            self._expression(node.val)
        elif node.val.strip():
            self._record(analyze_fragment(node.val))

    def _visit_conditional(self, node: Conditional) -> None:
        self._expression(node.test)

    def _visit_each(self, node: Each) -> None:
        self._expression(node.obj)
        self._declared.add(node.val)
        if node.key:
            self._declared.add(node.key)

    def _visit_while(self, node: While) -> None:
        self._expression(node.test)

    def _visit_case(self, node: Case) -> None:
        self._expression(node.expr)

    def _visit_when(self, node: When) -> None:
        if node.expr != "default":
            self._expression(node.expr)

    def _visit_interpolatedtag(self, node: InterpolatedTag) -> None:
        self._expression(node.expr)
        self._attributes(node.attrs, node.attribute_blocks)

    def _visit_tag(self, node: Tag) -> None:
        self._attributes(node.attrs, node.attribute_blocks)
        if is_component_call(node):
            # Card(title) reads ``title``
            self._referenced.update(attr.name for attr in node.attrs if attr.val is True)

    def _visit_mixin(self, node: Mixin) -> None:
        self._attributes(node.attrs, node.attribute_blocks)
        if not node.args:
            return
        if node.call:
            self._expression(f"[{node.args}]")
        else:
            for param in node.args.split(","):
                name = param.strip().removeprefix("...").split("=", 1)[0].strip()
                if name:
                    self._declared.add(name)


def is_allowed_identifier(
    name: str,
    result: ScopeAnalysisResult,
    config: ExpansionConfig | None = None,
) -> bool:
    """Whether a component body may read ``name``.

    True for names the body declares or destructures, built-ins, and the
    configured ``allowed_globals``.
    """
    if name in ALLOWED_GLOBALS:
        return True
    if config is not None and name in config.allowed_globals:
        return True
    return name in result.declared or name in result.derived_variables
