"""Traversal visitors that make up the expansion pipeline."""

from pugtail.visitors.base import REMOVE, NodeVisitor, Visitor, VisitorMethods
from pugtail.visitors.component_detector import ComponentDetector
from pugtail.visitors.component_expander import ComponentExpander
from pugtail.visitors.definition_remover import DefinitionRemover
from pugtail.visitors.include_flattener import IncludeFlattener

__all__ = [
    "REMOVE",
    "ComponentDetector",
    "ComponentExpander",
    "DefinitionRemover",
    "IncludeFlattener",
    "NodeVisitor",
    "Visitor",
    "VisitorMethods",
]
