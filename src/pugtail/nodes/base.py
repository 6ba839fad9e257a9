"""Base node classes for the Pug AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, kw_only=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error reporting.
    Nodes are mutable: expansion edits freshly cloned sub-trees in place,
    and canonical component bodies are only ever handed out as clones.

    """

    line: int = 0
    column: int | None = None
    filename: str | None = None


@dataclass(slots=True, kw_only=True)
class Attribute:
    """Tag attribute: ``name=val``.

    ``val`` is the JavaScript source of the value, or ``True`` for a bare
    attribute such as ``input(disabled)``.
    """

    name: str
    val: str | bool = True
    must_escape: bool = True
    line: int = 0
    column: int | None = None
    filename: str | None = None


@dataclass(slots=True, kw_only=True)
class AttributeBlock:
    """Attribute spread: ``&attributes(expr)``"""

    val: str
    line: int = 0
    column: int | None = None
    filename: str | None = None
