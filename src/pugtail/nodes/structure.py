"""Structural nodes for the Pug AST."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pugtail.nodes.base import Node


@dataclass(slots=True, kw_only=True)
class Block(Node):
    """Ordered list of child nodes. A Block owns its children exclusively."""

    nodes: list[Node] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class NamedBlock(Block):
    """Template inheritance block: ``block content`` / ``append`` / ``prepend``"""

    name: str = ""
    mode: str = "replace"


@dataclass(slots=True, kw_only=True)
class FileReference(Node):
    """Path of an included or extended file.

    ``ast`` is filled in by the external loader once the file is parsed.
    """

    path: str = ""
    full_path: str | None = None
    ast: Block | None = None


@dataclass(slots=True, kw_only=True)
class Include(Node):
    """Include another template: ``include partials/nav.pug``"""

    file: FileReference = field(default_factory=FileReference)
    block: Block | None = None


@dataclass(slots=True, kw_only=True)
class Extends(Node):
    """Extend a layout: ``extends layout.pug``"""

    file: FileReference = field(default_factory=FileReference)


@dataclass(slots=True, kw_only=True)
class RawInclude(Node):
    """Include a file verbatim or through filters: ``include:markdown notes.md``"""

    file: FileReference = field(default_factory=FileReference)
    filters: list[dict[str, Any]] = field(default_factory=list)
