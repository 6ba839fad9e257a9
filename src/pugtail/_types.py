"""Shared value types for pugtail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pugtail.nodes.base import Node


@dataclass(frozen=True, slots=True)
class NodeLocation:
    """Source position of an AST node.

    Attributes:
        line: 1-based line number (0 when unknown)
        column: 1-based column, if the parser recorded one
        filename: Template file the node came from
        path: Control-flow path label, used for slot diagnostics
    """

    line: int = 0
    column: int | None = None
    filename: str | None = None
    path: str | None = None

    @classmethod
    def of(cls, node: Node, *, path: str | None = None) -> NodeLocation:
        """Capture the location of ``node``."""
        return cls(line=node.line, column=node.column, filename=node.filename, path=path)

    def with_filename(self, filename: str | None) -> NodeLocation:
        """Return a copy that falls back to ``filename`` when none is recorded."""
        if self.filename or not filename:
            return self
        return NodeLocation(self.line, self.column, filename, self.path)

    def format(self) -> str:
        """Render as ``file:line N:column M``.

        Example:
            >>> NodeLocation(3, 5, "page.pug").format()
            'page.pug:line 3:column 5'
        """
        parts = [self.filename or "<unknown>", f"line {self.line}"]
        if self.column is not None:
            parts.append(f"column {self.column}")
        return ":".join(parts)

    def __str__(self) -> str:
        return self.format()
