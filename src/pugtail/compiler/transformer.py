"""Expansion pipeline.

Runs four traversals over a parsed template:

1. ComponentDetector: register every ``component`` definition
2. ComponentExpander: replace every call site with its expansion
3. DefinitionRemover: drop the definitions themselves
4. IncludeFlattener: inline resolved include/extends files

The result contains only plain Pug nodes and can go straight to
pug-code-gen.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pugtail._types import NodeLocation
from pugtail.compiler.traverser import Traverser, Visitor
from pugtail.config import DEFAULT_CONFIG, ExpansionConfig
from pugtail.exceptions import ErrorReporter
from pugtail.registry import ComponentRegistry
from pugtail.visitors.component_detector import ComponentDetector
from pugtail.visitors.component_expander import ComponentExpander
from pugtail.visitors.definition_remover import DefinitionRemover
from pugtail.visitors.include_flattener import IncludeFlattener

if TYPE_CHECKING:
    from pugtail.nodes import Node

logger = logging.getLogger(__name__)


class Transformer:
    """Expands all components in one compilation unit.

    A Transformer owns the registry for its unit: definitions found by
    :meth:`transform` stay registered on it, so a second call on the same
    instance rejects them as duplicates. Use :func:`expand`, or a new
    Transformer, per template.

    Example:
        >>> transformer = Transformer(config=ExpansionConfig(filename="page.pug"))
        >>> expanded = transformer.transform(ast)
        >>> transformer.registry.names()
        ['Card', 'Button']
    """

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        reporter: ErrorReporter | None = None,
        config: ExpansionConfig | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._reporter = reporter or ErrorReporter(self._config.filename)
        self._registry = registry if registry is not None else ComponentRegistry(self._reporter)
        self._traverser = Traverser()

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    @property
    def config(self) -> ExpansionConfig:
        return self._config

    def transform(self, ast: Node) -> Node:
        """Run the full pipeline over ``ast``.

        The input tree is not modified.

        Raises:
            PugTailError: Any expansion error (see pugtail.exceptions)
            ExpansionDepthError: If nesting exhausts the recursion limit
        """
        root = ast
        try:
            for visitor in self._create_pipeline():
                ast = self._traverser.traverse(ast, visitor)
        except RecursionError:
            raise self._reporter.expansion_depth(NodeLocation.of(root)) from None

        if self._config.debug:
            logger.debug(
                "Expanded %s with %d component(s)",
                self._config.filename or "<template>",
                self._registry.size,
            )
        return ast

    def _create_pipeline(self) -> list[Visitor]:
        return [
            ComponentDetector(self._registry, self._reporter, self._config),
            ComponentExpander(self._registry, self._reporter, self._config),
            DefinitionRemover(),
            IncludeFlattener(),
        ]


def expand(ast: Node, config: ExpansionConfig | None = None, **overrides: Any) -> Node:
    """Expand all components in a parsed template.

    Args:
        ast: Root of a pug-parser AST (usually a Block)
        config: Expansion options; DEFAULT_CONFIG when omitted
        **overrides: Individual options on top of ``config``
            (``scope_isolation="warn"``, ``allowedGlobals=[...]``...)

    Returns:
        A new tree with no component vocabulary left in it

    Example:
        >>> from pugtail import expand, from_json
        >>> html_ready = expand(from_json(pug_json), filename="page.pug")
    """
    config = (config or DEFAULT_CONFIG).merged(**overrides)
    return Transformer(config=config).transform(ast)
