"""Output and code nodes for the Pug AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from pugtail.nodes.base import Attribute, Node
from pugtail.nodes.structure import Block


@dataclass(slots=True, kw_only=True)
class Text(Node):
    """Plain text: ``| Hello``"""

    val: str = ""


@dataclass(slots=True, kw_only=True)
class Comment(Node):
    """Comment: ``// shown`` (buffered) or ``//- hidden``"""

    val: str = ""
    buffer: bool = True


@dataclass(slots=True, kw_only=True)
class BlockComment(Node):
    """Multi-line comment with an indented body."""

    val: str = ""
    buffer: bool = True
    block: Block | None = None


@dataclass(slots=True, kw_only=True)
class Code(Node):
    """Embedded JavaScript.

    Unbuffered statements (``- const x = 1``) have ``buffer=False``;
    expressions (``= x`` / ``#{x}``) have ``buffer=True``. A statement
    followed by indented content (``- for (...)``) carries a ``block``.
    """

    val: str = ""
    buffer: bool = False
    must_escape: bool = True
    is_inline: bool = False
    block: Block | None = None


@dataclass(slots=True, kw_only=True)
class Doctype(Node):
    """Doctype declaration: ``doctype html``"""

    val: str = ""


@dataclass(slots=True, kw_only=True)
class Filter(Node):
    """Filtered text block: ``:markdown``"""

    name: str = ""
    attrs: list[Attribute] = field(default_factory=list)
    block: Block | None = None
