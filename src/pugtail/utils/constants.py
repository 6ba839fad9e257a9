"""Shared constants for pugtail."""

from __future__ import annotations

import re

# Component vocabulary
COMPONENT_TAG = "component"
SLOT_TAG = "slot"
DEFAULT_SLOT = "default"

# Names injected into expanded bodies
PROPS_OBJECT = "$props"
ATTRS_OBJECT = "$attrs"
LEGACY_ATTRIBUTES = "attributes"

# Parameter prefix for values captured from the caller's scope
CAPTURE_PREFIX = "__pug_arg_"

# ``component Card()`` header text
COMPONENT_HEADER = re.compile(r"^([A-Z][a-zA-Z0-9_]*)\s*(?:\(\s*\)?)?\s*$")

JS_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")

# Identifiers a component body may read without declaring them
ALLOWED_GLOBALS: frozenset[str] = frozenset(
    {
        # JavaScript built-ins
        "console",
        "Math",
        "Date",
        "JSON",
        "Object",
        "Array",
        "String",
        "Number",
        "Boolean",
        "RegExp",
        "Error",
        "Promise",
        "Set",
        "Map",
        "WeakMap",
        "WeakSet",
        "Symbol",
        "BigInt",
        "Proxy",
        "Reflect",
        "globalThis",
        # Literal-like globals
        "undefined",
        "null",
        "true",
        "false",
        "NaN",
        "Infinity",
        # Provided by Pug or by expansion
        LEGACY_ATTRIBUTES,
        "block",
        PROPS_OBJECT,
        ATTRS_OBJECT,
    }
)

# Reserved words, skipped by the plain-text identifier scan
JS_KEYWORDS: frozenset[str] = frozenset(
    {
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "let",
        "new",
        "null",
        "of",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
        "async",
    }
)
