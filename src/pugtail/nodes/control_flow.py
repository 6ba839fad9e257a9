"""Control flow nodes for the Pug AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from pugtail.nodes.base import Node
from pugtail.nodes.structure import Block


@dataclass(slots=True, kw_only=True)
class Conditional(Node):
    """Conditional: ``if test`` / ``else if test`` / ``else``

    An ``else if`` chain is a Conditional in ``alternate``.
    """

    test: str = "true"
    consequent: Block = field(default_factory=Block)
    alternate: Block | Conditional | None = None


@dataclass(slots=True, kw_only=True)
class Each(Node):
    """Loop: ``each val, key in obj`` with an optional ``else`` block."""

    obj: str = ""
    val: str = ""
    key: str | None = None
    block: Block = field(default_factory=Block)
    alternate: Block | None = None


@dataclass(slots=True, kw_only=True)
class While(Node):
    """While loop: ``while test``"""

    test: str = "false"
    block: Block = field(default_factory=Block)


@dataclass(slots=True, kw_only=True)
class Case(Node):
    """Switch: ``case expr``"""

    expr: str = ""
    block: Block = field(default_factory=Block)


@dataclass(slots=True, kw_only=True)
class When(Node):
    """Switch arm: ``when expr`` or ``default``"""

    expr: str = "default"
    block: Block | None = None
    debug: bool = False
