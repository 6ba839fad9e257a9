"""Call-site attribute handling.

Turns the attributes of a component call (``Card(title=t, class="x")``)
into binding statements injected at the top of the expanded body, and
forwards pass-through attributes to the component's root element.

Two modes, chosen per component:

**Props/attrs mode** (the body destructures ``$props`` or ``$attrs``):

    - const { title } = $props      ->  ;((__pug_arg_t) => {
                                        - const $props = {"title": __pug_arg_t}
                                        - const $attrs = {"class": "x"}
                                        ...body...
                                        - })(t)

  Declared ``$props`` keys become props and every other attribute becomes
  an attr. Values that are bare variable references are passed through
  the arrow function's parameters, so a body that declares a local with
  the same name (``const { title } = $props`` called as
  ``Card(title=title)``) cannot read its own uninitialized binding.
  Without such values a plain ``{`` ... ``}`` block scope is used.

**Legacy mode** (no destructuring): ``var attributes = {...}`` is
prepended and the root element gets ``&attributes(attributes)``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pugtail.analysis.visitor import walk
from pugtail.nodes import AttributeBlock, Code, Tag
from pugtail.utils.ast_helpers import is_slot
from pugtail.utils.constants import (
    ATTRS_OBJECT,
    CAPTURE_PREFIX,
    JS_IDENTIFIER,
    LEGACY_ATTRIBUTES,
    PROPS_OBJECT,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pugtail.definitions import ComponentDefinition, ComponentUsage
    from pugtail.nodes import Block, Node

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_NON_REFERENCES = frozenset({"true", "false", "null", "undefined", PROPS_OBJECT, ATTRS_OBJECT})


def extract_attributes(call: Tag) -> dict[str, str]:
    """Map a call site's attributes to JavaScript source strings.

    ``Card(title)`` (a bare attribute) is shorthand for ``Card(title=title)``;
    an explicit boolean is kept as its literal. A repeated name keeps its
    last value.

    Example:
        >>> extract_attributes(tag)  # Card(title="Hi", count=5, open)
        {'title': '"Hi"', 'count': '5', 'open': 'open'}
    """
    attributes: dict[str, str] = {}
    for attr in call.attrs:
        if attr.val is True:
            attributes[attr.name] = attr.name
        elif attr.val is False:
            attributes[attr.name] = "false"
        else:
            attributes[attr.name] = attr.val
    return attributes


def categorize_attributes(
    attributes: Mapping[str, str], usage: ComponentUsage
) -> tuple[dict[str, str], dict[str, str]]:
    """Split call-site attributes into ``(props, attrs)``.

    Keys declared from ``$props`` go to props; everything else, declared
    or not, goes to attrs. Every attribute lands in exactly one of the two.
    """
    props: dict[str, str] = {}
    attrs: dict[str, str] = {}
    for key, value in attributes.items():
        if key in usage.from_props:
            props[key] = value
        else:
            attrs[key] = value
    return props, attrs


def is_variable_reference(value: str) -> bool:
    """Whether ``value`` is a bare identifier read from the caller's scope.

    Literals (booleans, ``null``, ``undefined``, numbers, strings, template
    literals) and the reserved ``$props`` / ``$attrs`` objects are not.
    """
    value = value.strip()
    if value in _NON_REFERENCES or _NUMBER.match(value):
        return False
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return False
    return JS_IDENTIFIER.match(value) is not None


def referenced_variables(*maps: Mapping[str, str]) -> list[str]:
    """Bare variable references among the values of ``maps``, in first-seen order."""
    names: list[str] = []
    for mapping in maps:
        for value in mapping.values():
            name = value.strip()
            if is_variable_reference(name) and name not in names:
                names.append(name)
    return names


def _statement(val: str, at: Node | None) -> Code:
    if at is None:
        return Code(val=val, buffer=False, must_escape=False)
    return Code(
        val=val,
        buffer=False,
        must_escape=False,
        line=at.line,
        column=at.column,
        filename=at.filename,
    )


def _object_literal(values: Mapping[str, str], captured: Iterable[str]) -> str:
    captured = set(captured)
    pairs = []
    for key, value in values.items():
        if value.strip() in captured:
            value = CAPTURE_PREFIX + value.strip()
        pairs.append(f"{json.dumps(key)}: {value}")
    return "{" + ", ".join(pairs) + "}"


def create_props_code(
    props: Mapping[str, str], captured: Iterable[str] = (), at: Node | None = None
) -> Code:
    """``const $props = {"key": value, ...}``; captured names use their parameter."""
    return _statement(f"const {PROPS_OBJECT} = {_object_literal(props, captured)}", at)


def create_attrs_code(
    attrs: Mapping[str, str], captured: Iterable[str] = (), at: Node | None = None
) -> Code:
    """``const $attrs = {"key": value, ...}``; captured names use their parameter."""
    return _statement(f"const {ATTRS_OBJECT} = {_object_literal(attrs, captured)}", at)


def create_legacy_attributes_code(attributes: Mapping[str, str], at: Node | None = None) -> Code:
    """``var attributes = {key: value}``; keys that are not identifiers are quoted."""
    pairs = [
        f"{key if JS_IDENTIFIER.match(key) else json.dumps(key)}: {value}"
        for key, value in attributes.items()
    ]
    return _statement(f"var {LEGACY_ATTRIBUTES} = {{{', '.join(pairs)}}}", at)


def inject_attributes(
    body: Block,
    attributes: Mapping[str, str],
    definition: ComponentDefinition,
    at: Node | None = None,
) -> None:
    """Inject binding statements into a cloned body and apply fallthrough.

    Mutates ``body``; it must be a private clone.
    """
    usage = definition.usage
    if usage is None:
        body.nodes.insert(0, create_legacy_attributes_code(attributes, at))
    else:
        props, attrs = categorize_attributes(attributes, usage)
        captured = referenced_variables(props, attrs)
        prologue = [
            create_props_code(props, captured, at),
            create_attrs_code(attrs, captured, at),
        ]
        if captured:
            params = ", ".join(CAPTURE_PREFIX + name for name in captured)
            opening = _statement(f";(({params}) => {{", at)
            closing = _statement(f"}})({', '.join(captured)})", at)
        else:
            opening = _statement("{", at)
            closing = _statement("}", at)
        body.nodes[:0] = [opening, *prologue]
        body.nodes.append(closing)

    apply_fallthrough(body, definition)


def has_attribute_blocks(body: Block) -> bool:
    """Whether any Tag in ``body`` already spreads attributes manually."""
    return any(isinstance(node, Tag) and node.attribute_blocks for node in walk(body))


def find_root_elements(body: Block) -> list[Tag]:
    """Top-level Tags of a body. Slot placeholders are not elements."""
    return [node for node in body.nodes if isinstance(node, Tag) and not is_slot(node)]


def add_attribute_fallthrough(root: Tag, variable: str = LEGACY_ATTRIBUTES) -> Tag:
    """Append ``&attributes(variable)`` unless the element already spreads."""
    if not root.attribute_blocks:
        root.attribute_blocks.append(
            AttributeBlock(val=variable, line=root.line, column=root.column, filename=root.filename)
        )
    return root


def apply_fallthrough(body: Block, definition: ComponentDefinition) -> None:
    """Forward pass-through attributes to the body's single root element.

    Nothing happens when the body already uses ``&attributes`` anywhere or
    has no root element. With several roots the forwarding target is
    ambiguous, so it is skipped with a warning.
    """
    if has_attribute_blocks(body):
        return

    roots = find_root_elements(body)
    if len(roots) > 1:
        logger.warning(
            'Component "%s" has multiple root elements. '
            "Attribute fallthrough is disabled. "
            "Use &attributes($attrs) explicitly if needed.",
            definition.name,
        )
        return
    if not roots:
        return

    root = roots[0]
    usage = definition.usage
    if usage is None:
        add_attribute_fallthrough(root, LEGACY_ATTRIBUTES)
        return
    # An element that sets a declared $attrs key itself opts out entirely
    if any(attr.name in usage.from_attrs for attr in root.attrs):
        return
    add_attribute_fallthrough(root, ATTRS_OBJECT)


def unescape_derived_attributes(body: Block, names: Iterable[str]) -> int:
    """Disable escaping for attributes whose value is exactly a derived binding.

    ``button(disabled=disabled)`` where ``disabled`` comes from ``$props``
    must reach the code generator unescaped, or a boolean becomes the
    string ``"true"``.

    Returns:
        Number of attributes changed
    """
    names = frozenset(names)
    if not names:
        return 0
    changed = 0
    for node in walk(body):
        if not isinstance(node, Tag):
            continue
        for attr in node.attrs:
            if isinstance(attr.val, str) and attr.val.strip() in names and attr.must_escape:
                attr.must_escape = False
                changed += 1
    return changed
