"""Traversal and the expansion pipeline."""

from pugtail.compiler.traverser import REMOVE, Traverser, Visitor, VisitorMethods
from pugtail.compiler.transformer import Transformer, expand

__all__ = [
    "REMOVE",
    "Transformer",
    "Traverser",
    "Visitor",
    "VisitorMethods",
    "expand",
]
