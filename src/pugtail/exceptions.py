"""Exceptions for pugtail component expansion.

Exception Hierarchy:
PugTailError (base)
├── ComponentNotFoundError          # Call site names an unregistered component
├── DuplicateComponentError         # Two definitions share a name
├── DuplicateSlotProvidedError      # Call site fills the same slot twice
├── DuplicateSlotDefinitionError    # Definition declares a slot twice on one path
├── SlotNotDefinedError             # Call site fills a slot the component lacks
├── RecursiveComponentCallError     # Component calls itself (directly or not)
├── ExternalVariableReferenceError  # Component body reads a caller variable
├── UnexpectedNodeTypeError         # Wrong or unknown AST node kind
├── InvalidComponentDefinitionError # Malformed ``component`` header or slot name
├── ExpansionDepthError             # Interpreter recursion limit hit
└── TraversalError                  # Visitor broke the traversal contract

Error Messages:
Every error carries the node location and an actionable hint:

    ```
    Component "Crad" not found at page.pug:line 12:column 3

    Hint: Available components: Button, Card
    ```

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from pugtail import terminal
from pugtail._types import NodeLocation

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

_DOCS_BASE = "docs/errors.md"


class ErrorCode(Enum):
    """Searchable error codes for expansion errors.

    Format: PT-{CATEGORY}-{NUMBER}
    Categories: CMP (components), SLT (slots), SCP (scope), AST (tree shape)
    """

    # Component errors (PT-CMP-xxx)
    COMPONENT_NOT_FOUND = "PT-CMP-001"
    DUPLICATE_COMPONENT = "PT-CMP-002"
    RECURSIVE_COMPONENT_CALL = "PT-CMP-003"
    INVALID_COMPONENT_DEFINITION = "PT-CMP-004"
    EXPANSION_DEPTH = "PT-CMP-005"

    # Slot errors (PT-SLT-xxx)
    DUPLICATE_SLOT_PROVIDED = "PT-SLT-001"
    DUPLICATE_SLOT_DEFINITION = "PT-SLT-002"
    SLOT_NOT_DEFINED = "PT-SLT-003"

    # Scope errors (PT-SCP-xxx)
    EXTERNAL_VARIABLE_REFERENCE = "PT-SCP-001"

    # Tree errors (PT-AST-xxx)
    UNEXPECTED_NODE_TYPE = "PT-AST-001"
    TRAVERSAL_CONTRACT = "PT-AST-002"

    @property
    def docs_url(self) -> str:
        """Documentation anchor for this error code."""
        return f"{_DOCS_BASE}#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category (e.g., 'component', 'slot', 'scope', 'ast')."""
        prefix = self.value.split("-")[1]
        return {
            "CMP": "component",
            "SLT": "slot",
            "SCP": "scope",
            "AST": "ast",
        }.get(prefix, "unknown")


def _join_names(names: Iterable[str]) -> str:
    return ", ".join(names)


class PugTailError(Exception):
    """Base exception for all pugtail errors.

    Attributes:
        message: One-line description of the problem
        location: Where in the template it happened, when known
        hint: Suggested fix
        code: Class-level ErrorCode
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        location: NodeLocation | None = None,
        hint: str | None = None,
    ) -> None:
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        text = self.message
        if self.location is not None:
            text += f" at {self.location.format()}"
        if self.hint:
            text += f"\n\nHint: {self.hint}"
        return text

    def format_compact(self) -> str:
        """Format the error as a short terminal diagnostic.

        Format::

            PT-CMP-001: Component "Crad" not found
              --> page.pug:line 12:column 3
              Hint: Available components: Button, Card
              Docs: docs/errors.md#pt-cmp-001

        Returns:
            Multi-line string with the error code, location, hint and
            documentation anchor. Coloured when the terminal supports it.
        """
        header = self.message
        if self.code:
            header = f"{terminal.error_code(self.code.value)}: {header}"
        parts = [header]

        if self.location is not None:
            parts.append(f"  --> {terminal.location(self.location.format())}")

        if self.hint:
            lines = self.hint.splitlines()
            parts.append(f"  Hint: {terminal.hint(lines[0])}")
            parts.extend(f"        {terminal.hint(line)}" for line in lines[1:])

        if self.code:
            parts.append(f"  Docs: {terminal.docs_url(self.code.docs_url)}")

        return "\n".join(parts)


class ComponentNotFoundError(PugTailError):
    """A call site names a component that was never defined."""

    code = ErrorCode.COMPONENT_NOT_FOUND

    def __init__(
        self,
        name: str,
        location: NodeLocation | None = None,
        available: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.available = tuple(available)
        if self.available:
            hint = f"Available components: {_join_names(self.available)}"
        else:
            hint = "No components are defined. Make sure to define components before use."
        super().__init__(f'Component "{name}" not found', location, hint)


class DuplicateComponentError(PugTailError):
    """Two ``component`` blocks in one compilation unit share a name."""

    code = ErrorCode.DUPLICATE_COMPONENT

    def __init__(
        self,
        name: str,
        location: NodeLocation | None = None,
        previous: NodeLocation | None = None,
    ) -> None:
        self.name = name
        self.previous = previous
        hint = f"Previously defined at {previous.format()}" if previous else None
        super().__init__(f'Component "{name}" is already defined', location, hint)


class DuplicateSlotProvidedError(PugTailError):
    """A call site provides content for the same slot twice.

    Bare content next to an explicit ``slot(default)`` counts as providing
    ``default`` twice.
    """

    code = ErrorCode.DUPLICATE_SLOT_PROVIDED

    def __init__(self, name: str, location: NodeLocation | None = None) -> None:
        self.name = name
        if name == "default":
            hint = "Use either an explicit slot(default) or bare content, not both."
        else:
            hint = "Each slot can only be provided once per component call."
        super().__init__(f'Duplicate slot "{name}" provided', location, hint)


class DuplicateSlotDefinitionError(PugTailError):
    """A component declares the same slot twice on one control-flow path."""

    code = ErrorCode.DUPLICATE_SLOT_DEFINITION

    def __init__(
        self,
        name: str,
        location: NodeLocation | None = None,
        previous: NodeLocation | None = None,
    ) -> None:
        self.name = name
        self.previous = previous
        hint = "Slot names must be unique unless they sit in mutually exclusive branches."
        if previous is not None:
            hint += f"\nPreviously defined at {previous.format()}"
        super().__init__(f'Duplicate slot "{name}" defined in component', location, hint)


class SlotNotDefinedError(PugTailError):
    """A call site provides a named slot the component does not declare."""

    code = ErrorCode.SLOT_NOT_DEFINED

    def __init__(
        self,
        name: str,
        location: NodeLocation | None = None,
        available: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.available = tuple(available)
        if self.available:
            hint = f"Available slots: {_join_names(self.available)}"
        else:
            hint = "This component does not define any slots."
        super().__init__(f'Slot "{name}" is not defined in this component', location, hint)


class RecursiveComponentCallError(PugTailError):
    """A component calls itself, directly or through other components.

    Attributes:
        cycle: Component names from the first occurrence back to the repeat,
            e.g. ``("A", "B", "A")``
    """

    code = ErrorCode.RECURSIVE_COMPONENT_CALL

    def __init__(self, cycle: Sequence[str], location: NodeLocation | None = None) -> None:
        self.cycle = tuple(cycle)
        super().__init__(
            f"Recursive component call detected: {' -> '.join(self.cycle)}",
            location,
            "Components cannot call themselves directly or indirectly.",
        )


class ExternalVariableReferenceError(PugTailError):
    """A component body reads a variable from the caller's scope."""

    code = ErrorCode.EXTERNAL_VARIABLE_REFERENCE

    def __init__(
        self,
        variable: str,
        component: str,
        location: NodeLocation | None = None,
    ) -> None:
        self.variable = variable
        self.component = component
        hint = "\n".join(
            (
                f"Pass it as a prop: {component}({variable}={variable})",
                "Or declare it inside the component",
                "Or set scopeIsolation to 'warn' or 'off'",
            )
        )
        super().__init__(
            f'Component "{component}" references external variable "{variable}"',
            location,
            hint,
        )


class UnexpectedNodeTypeError(PugTailError):
    """A node of the wrong kind was found where another was required."""

    code = ErrorCode.UNEXPECTED_NODE_TYPE

    def __init__(
        self,
        expected: str,
        actual: str,
        location: NodeLocation | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} node, but got {actual}", location)


class InvalidComponentDefinitionError(PugTailError):
    """A ``component`` header or a slot name cannot be parsed."""

    code = ErrorCode.INVALID_COMPONENT_DEFINITION


class ExpansionDepthError(PugTailError):
    """Expansion exhausted the interpreter recursion limit.

    Raised for very deep, non-cyclic nesting. Cycles are reported as
    RecursiveComponentCallError before this can happen.
    """

    code = ErrorCode.EXPANSION_DEPTH

    def __init__(self, location: NodeLocation | None = None) -> None:
        super().__init__(
            "Maximum expansion depth exceeded",
            location,
            "The template nests too deeply. Flatten the component tree "
            "or raise sys.setrecursionlimit().",
        )


class TraversalError(PugTailError):
    """A visitor broke the traversal contract (e.g. removed the root)."""

    code = ErrorCode.TRAVERSAL_CONTRACT


# ---------------------------------------------------------------------------
# Error factory
# ---------------------------------------------------------------------------


class ErrorReporter:
    """Builds expansion errors for one compilation unit.

    Locations that lack a filename get the reporter's default filename,
    so errors from nodes the parser left unattributed still point at the
    template being expanded.

    Example:
        >>> reporter = ErrorReporter("page.pug")
        >>> err = reporter.component_not_found("Crad", NodeLocation(3, 1), ["Card"])
        >>> err.location.filename
        'page.pug'
    """

    __slots__ = ("filename",)

    def __init__(self, filename: str | None = None) -> None:
        self.filename = filename

    def _loc(self, location: NodeLocation | None) -> NodeLocation | None:
        if location is None:
            return NodeLocation(filename=self.filename) if self.filename else None
        return location.with_filename(self.filename)

    def component_not_found(
        self, name: str, location: NodeLocation | None, available: Sequence[str]
    ) -> ComponentNotFoundError:
        return ComponentNotFoundError(name, self._loc(location), available)

    def duplicate_component(
        self, name: str, location: NodeLocation | None, previous: NodeLocation | None
    ) -> DuplicateComponentError:
        return DuplicateComponentError(name, self._loc(location), self._loc(previous))

    def duplicate_slot_provided(
        self, name: str, location: NodeLocation | None
    ) -> DuplicateSlotProvidedError:
        return DuplicateSlotProvidedError(name, self._loc(location))

    def duplicate_slot_definition(
        self, name: str, location: NodeLocation | None, previous: NodeLocation | None
    ) -> DuplicateSlotDefinitionError:
        return DuplicateSlotDefinitionError(name, self._loc(location), self._loc(previous))

    def slot_not_defined(
        self, name: str, location: NodeLocation | None, available: Sequence[str]
    ) -> SlotNotDefinedError:
        return SlotNotDefinedError(name, self._loc(location), available)

    def recursive_call(
        self, cycle: Sequence[str], location: NodeLocation | None
    ) -> RecursiveComponentCallError:
        return RecursiveComponentCallError(cycle, self._loc(location))

    def external_variable(
        self, variable: str, component: str, location: NodeLocation | None
    ) -> ExternalVariableReferenceError:
        return ExternalVariableReferenceError(variable, component, self._loc(location))

    def unexpected_node(
        self, expected: str, actual: str, location: NodeLocation | None
    ) -> UnexpectedNodeTypeError:
        return UnexpectedNodeTypeError(expected, actual, self._loc(location))

    def invalid_definition(
        self, message: str, location: NodeLocation | None, hint: str | None = None
    ) -> InvalidComponentDefinitionError:
        return InvalidComponentDefinitionError(message, self._loc(location), hint)

    def expansion_depth(self, location: NodeLocation | None = None) -> ExpansionDepthError:
        return ExpansionDepthError(self._loc(location))
