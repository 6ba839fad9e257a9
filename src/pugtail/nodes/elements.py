"""Element nodes for the Pug AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from pugtail.nodes.base import Attribute, AttributeBlock, Node
from pugtail.nodes.structure import Block


@dataclass(slots=True, kw_only=True)
class Tag(Node):
    """Element: ``div.card(title="x")&attributes(obj)``

    Tags whose name starts with an uppercase letter are component calls;
    ``component`` and ``slot`` tags carry component vocabulary. All three
    are gone after expansion.
    """

    name: str
    attrs: list[Attribute] = field(default_factory=list)
    attribute_blocks: list[AttributeBlock] = field(default_factory=list)
    block: Block | None = None
    self_closing: bool = False
    is_inline: bool = False


@dataclass(slots=True, kw_only=True)
class InterpolatedTag(Node):
    """Element with a computed name: ``#{tagName}``"""

    expr: str
    attrs: list[Attribute] = field(default_factory=list)
    attribute_blocks: list[AttributeBlock] = field(default_factory=list)
    block: Block | None = None
    self_closing: bool = False
    is_inline: bool = False


@dataclass(slots=True, kw_only=True)
class Mixin(Node):
    """Mixin definition or call: ``mixin item(x)`` / ``+item(x)``"""

    name: str
    args: str | None = None
    call: bool = False
    attrs: list[Attribute] = field(default_factory=list)
    attribute_blocks: list[AttributeBlock] = field(default_factory=list)
    block: Block | None = None


@dataclass(slots=True, kw_only=True)
class MixinBlock(Node):
    """Content placeholder inside a mixin: ``block``"""


@dataclass(slots=True, kw_only=True)
class YieldBlock(Node):
    """Insertion point for included content: ``yield``"""
