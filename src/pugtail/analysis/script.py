"""Identifier analysis for embedded JavaScript fragments.

Pug templates embed JavaScript in ``Code`` nodes, control-flow tests,
``each`` iterables and attribute values. Each fragment is parsed with the
tree-sitter TypeScript grammar (a superset of the JavaScript that Pug
accepts) and walked to collect:

- declared names: ``const``/``let``/``var`` bindings, function and class
  names, parameters, ``catch`` and ``for ... in/of`` bindings
- referenced names: every identifier read, including shorthand object
  properties (``{ title }``)
- ``const { ... } = $props`` / ``$attrs`` destructurings, with their
  original keys and local bindings

Fragments that do not parse on their own (``- if (x) {`` split across
lines, ``else``...) fall back to a plain-text scan. The scan ignores
strings, comments, member names and object keys, and still binds the
parameters of ``function`` and arrow-function heads.

Example:
    >>> info = analyze_fragment("const { title: heading = 'x' } = $props")
    >>> info.destructurings[0].keys, sorted(info.declared)
    (('title',), ['heading'])
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Parser
from tree_sitter import Node as SyntaxNode

from pugtail.utils.ast_helpers import strip_quotes
from pugtail.utils.constants import ATTRS_OBJECT, JS_KEYWORDS, PROPS_OBJECT

logger = logging.getLogger(__name__)

_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

# Parsers are not safe to share between threads
_local = threading.local()

_DESTRUCTURING_SOURCES = frozenset({PROPS_OBJECT, ATTRS_OBJECT})

# Syntax node kinds that read a variable
_REFERENCE_KINDS = frozenset({"identifier", "shorthand_property_identifier"})


def _parser() -> Parser:
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = Parser(_LANGUAGE)
        _local.parser = parser
    return parser


@dataclass(frozen=True, slots=True)
class Destructuring:
    """``const { a, b: local } = $props``

    Attributes:
        source: ``$props`` or ``$attrs``
        keys: Property names read from the source (``a``, ``b``)
        bindings: Local names introduced (``a``, ``local``)
    """

    source: str
    keys: tuple[str, ...]
    bindings: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class FragmentAnalysis:
    """Identifiers found in one JavaScript fragment."""

    declared: frozenset[str]
    referenced: frozenset[str]
    destructurings: tuple[Destructuring, ...] = ()
    parsed: bool = True


@lru_cache(maxsize=4096)
def analyze_fragment(source: str, *, expression: bool = False) -> FragmentAnalysis:
    """Collect declared and referenced identifiers from a fragment.

    Args:
        source: JavaScript source text
        expression: Parse as a single expression (tests, iterables and
            attribute values) rather than as statements

    Returns:
        FragmentAnalysis; ``parsed`` is False when the text scan was used
    """
    text = f"({source})" if expression else source
    encoded = text.encode("utf-8")
    tree = _parser().parse(encoded)
    if tree.root_node.has_error:
        logger.debug("Falling back to text scan for fragment %r", source)
        return _scan_text(source)

    walker = _FragmentWalker(encoded)
    walker.visit(tree.root_node)
    return FragmentAnalysis(
        declared=frozenset(walker.declared),
        referenced=frozenset(walker.referenced),
        destructurings=tuple(walker.destructurings),
    )


class _FragmentWalker:
    """Walks a tree-sitter syntax tree, tracking bindings and reads.

    Handlers are found by syntax-node kind: ``_visit_variable_declarator``
    handles ``variable_declarator`` nodes. Everything else recurses into
    its named children.
    """

    def __init__(self, source: bytes) -> None:
        self._source = source
        self.declared: set[str] = set()
        self.referenced: set[str] = set()
        self.destructurings: list[Destructuring] = []
        self._dispatch: dict[str, Callable[[SyntaxNode], None]] = {}
        for name in dir(self):
            if name.startswith("_visit_"):
                self._dispatch[name[7:]] = getattr(self, name)

    def _text(self, node: SyntaxNode) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def visit(self, node: SyntaxNode | None) -> None:
        if node is None:
            return
        handler = self._dispatch.get(node.type)
        if handler is not None:
            handler(node)
        elif node.type in _REFERENCE_KINDS:
            self.referenced.add(self._text(node))
        else:
            for child in node.named_children:
                self.visit(child)

    # -- declarations ---------------------------------------------------

    def _visit_variable_declarator(self, node: SyntaxNode) -> None:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is not None:
            self.bind(name)
        if value is not None:
            self.visit(value)
            if (
                name is not None
                and name.type == "object_pattern"
                and value.type == "identifier"
                and self._text(value) in _DESTRUCTURING_SOURCES
            ):
                self.destructurings.append(self._destructuring(name, self._text(value)))

    def _visit_function_declaration(self, node: SyntaxNode) -> None:
        self._function(node)

    def _visit_generator_function_declaration(self, node: SyntaxNode) -> None:
        self._function(node)

    def _visit_function_expression(self, node: SyntaxNode) -> None:
        self._function(node)

    def _visit_function(self, node: SyntaxNode) -> None:
        # Older grammars name function expressions "function"
        self._function(node)

    def _visit_generator_function(self, node: SyntaxNode) -> None:
        self._function(node)

    def _visit_arrow_function(self, node: SyntaxNode) -> None:
        self._function(node)

    def _visit_method_definition(self, node: SyntaxNode) -> None:
        self._function(node)

    def _function(self, node: SyntaxNode) -> None:
        name = node.child_by_field_name("name")
        if name is not None and name.type == "identifier":
            self.declared.add(self._text(name))
        parameter = node.child_by_field_name("parameter")
        if parameter is not None:
            self.bind(parameter)
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            self.bind(parameters)
        self.visit(node.child_by_field_name("body"))

    def _visit_class_declaration(self, node: SyntaxNode) -> None:
        name = node.child_by_field_name("name")
        if name is not None:
            self.declared.add(self._text(name))
        self.visit(node.child_by_field_name("body"))

    def _visit_catch_clause(self, node: SyntaxNode) -> None:
        parameter = node.child_by_field_name("parameter")
        if parameter is not None:
            self.bind(parameter)
        self.visit(node.child_by_field_name("body"))

    def _visit_for_in_statement(self, node: SyntaxNode) -> None:
        left = node.child_by_field_name("left")
        if left is not None:
            if node.child_by_field_name("kind") is not None:
                self.bind(left)
            else:
                self.visit(left)
        self.visit(node.child_by_field_name("right"))
        self.visit(node.child_by_field_name("body"))

    # -- binding patterns -----------------------------------------------

    def bind(self, pattern: SyntaxNode) -> None:
        """Record every name a binding pattern introduces.

        Default values inside the pattern are reads, not bindings.
        """
        kind = pattern.type
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            self.declared.add(self._text(pattern))
        elif kind in ("object_pattern", "array_pattern", "formal_parameters", "rest_pattern"):
            for child in pattern.named_children:
                self.bind(child)
        elif kind == "pair_pattern":
            key = pattern.child_by_field_name("key")
            if key is not None and key.type == "computed_property_name":
                self.visit(key)
            value = pattern.child_by_field_name("value")
            if value is not None:
                self.bind(value)
        elif kind in ("object_assignment_pattern", "assignment_pattern"):
            left = pattern.child_by_field_name("left")
            if left is not None:
                self.bind(left)
            self.visit(pattern.child_by_field_name("right"))
        elif kind in ("required_parameter", "optional_parameter"):
            inner = pattern.child_by_field_name("pattern")
            if inner is not None:
                self.bind(inner)
            self.visit(pattern.child_by_field_name("value"))
        elif kind != "comment":
            # Assignment targets such as ``obj.prop`` in ``for (obj.prop of xs)``
            self.visit(pattern)

    def _destructuring(self, pattern: SyntaxNode, source: str) -> Destructuring:
        keys: list[str] = []
        bindings: list[str] = []
        for child in pattern.named_children:
            if child.type == "shorthand_property_identifier_pattern":
                name = self._text(child)
                keys.append(name)
                bindings.append(name)
            elif child.type == "object_assignment_pattern":
                left = child.child_by_field_name("left")
                if left is not None and left.type == "shorthand_property_identifier_pattern":
                    name = self._text(left)
                    keys.append(name)
                    bindings.append(name)
            elif child.type == "pair_pattern":
                key = self._property_key(child.child_by_field_name("key"))
                if key is not None:
                    keys.append(key)
                value = child.child_by_field_name("value")
                if value is not None and value.type == "assignment_pattern":
                    value = value.child_by_field_name("left")
                if value is not None and value.type == "identifier":
                    bindings.append(self._text(value))
            elif child.type == "rest_pattern":
                bindings.extend(
                    self._text(ident) for ident in child.named_children if ident.type == "identifier"
                )
        return Destructuring(source, tuple(keys), tuple(bindings))

    def _property_key(self, key: SyntaxNode | None) -> str | None:
        if key is None:
            return None
        if key.type in ("property_identifier", "number"):
            return self._text(key)
        if key.type == "string":
            return strip_quotes(self._text(key))
        return None


# ---------------------------------------------------------------------------
# Text fallback
# ---------------------------------------------------------------------------

_STRING_LITERAL = re.compile(r"""(["'`])(?:\\.|(?!\1)[^\\])*\1""")
# A string literal takes precedence over a comment marker inside it
_STRING_OR_COMMENT = re.compile(
    r"""(["'`])(?:\\.|(?!\1)[^\\])*\1|//[^\n]*|/\*.*?\*/""", re.DOTALL
)
_IDENTIFIER = re.compile(r"(?<![\w$.])[A-Za-z_$][\w$]*")
_NAME = re.compile(r"[A-Za-z_$][\w$]*")
_OBJECT_KEY = re.compile(r"([{,]\s*)[A-Za-z_$][\w$]*(\s*:)(?!:)")
_DECLARATION = re.compile(r"\b(?:const|let|var)\s+([A-Za-z_$][\w$]*)")
_DESTRUCTURING = re.compile(
    r"\b(?:const|let|var)\s*\{([^}]*)\}\s*=\s*(\$props|\$attrs)(?![\w$])"
)
_FUNCTION = re.compile(r"\bfunction\b\s*\*?\s*([A-Za-z_$][\w$]*)?\s*\(([^()]*)\)")
_ARROW_PARAMETERS = re.compile(r"\(([^()]*)\)\s*=>")
_ARROW_PARAMETER = re.compile(r"(?<![\w$.])([A-Za-z_$][\w$]*)\s*=>")
_CATCH = re.compile(r"\bcatch\s*\(([^()]*)\)")


def _strip_comment(match: re.Match[str]) -> str:
    return match.group(0) if match.group(1) else " "


def _scan_text(source: str) -> FragmentAnalysis:
    uncommented = _STRING_OR_COMMENT.sub(_strip_comment, source)
    destructurings = tuple(
        _parse_destructuring(match.group(1), match.group(2))
        for match in _DESTRUCTURING.finditer(uncommented)
    )
    stripped = _STRING_LITERAL.sub('""', uncommented)

    declared = set(_DECLARATION.findall(stripped))
    for destructuring in destructurings:
        declared.update(destructuring.bindings)
    for name, parameters in _FUNCTION.findall(stripped):
        if name:
            declared.add(name)
        declared.update(_parameter_names(parameters))
    for pattern in (_ARROW_PARAMETERS, _CATCH):
        for parameters in pattern.findall(stripped):
            declared.update(_parameter_names(parameters))
    declared.update(_ARROW_PARAMETER.findall(stripped))

    referenced = {
        name
        for name in _IDENTIFIER.findall(_OBJECT_KEY.sub(r"\1\2", stripped))
        if name not in JS_KEYWORDS
    }
    return FragmentAnalysis(
        declared=frozenset(declared),
        referenced=frozenset(referenced),
        destructurings=destructurings,
        parsed=False,
    )


def _parameter_names(parameters: str) -> list[str]:
    """Names bound by a parameter list such as ``a, { b: c }, ...rest``.

    Default values are dropped; nested patterns are only followed one
    level deep.
    """
    names = []
    for entry in parameters.split(","):
        target = entry.split("=", 1)[0]
        if ":" in target:
            target = target.split(":", 1)[1]
        target = target.strip(" \t\n.{}[]")
        if _NAME.fullmatch(target):
            names.append(target)
    return names


def _parse_destructuring(body: str, source: str) -> Destructuring:
    keys: list[str] = []
    bindings: list[str] = []
    for entry in body.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if entry.startswith("..."):
            bindings.append(entry[3:].strip())
            continue
        target = entry.split("=", 1)[0]
        if ":" in target:
            key, local = target.split(":", 1)
            keys.append(strip_quotes(key.strip()))
            bindings.append(local.strip())
        else:
            keys.append(target.strip())
            bindings.append(target.strip())
    return Destructuring(source, tuple(keys), tuple(bindings))
