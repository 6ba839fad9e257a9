"""Tests for error types, codes and formatting."""

import pytest

from pugtail import terminal
from pugtail.exceptions import (
    ComponentNotFoundError,
    DuplicateSlotDefinitionError,
    DuplicateSlotProvidedError,
    ErrorCode,
    ErrorReporter,
    ExternalVariableReferenceError,
    PugTailError,
    RecursiveComponentCallError,
    SlotNotDefinedError,
    UnexpectedNodeTypeError,
)
from pugtail._types import NodeLocation


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch):
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


class TestErrorCodes:
    """Code values, categories and documentation anchors."""

    def test_codes_are_unique(self) -> None:
        """Every error code value is distinct."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (ErrorCode.COMPONENT_NOT_FOUND, "component"),
            (ErrorCode.DUPLICATE_SLOT_PROVIDED, "slot"),
            (ErrorCode.EXTERNAL_VARIABLE_REFERENCE, "scope"),
            (ErrorCode.UNEXPECTED_NODE_TYPE, "ast"),
        ],
    )
    def test_category(self, code: ErrorCode, category: str) -> None:
        """Categories derive from the code prefix."""
        assert code.category == category

    def test_docs_url(self) -> None:
        """Docs anchors are the lowercased code."""
        assert ErrorCode.RECURSIVE_COMPONENT_CALL.docs_url == "docs/errors.md#pt-cmp-003"

    def test_every_error_class_has_code(self) -> None:
        """All concrete errors declare an ErrorCode."""
        for cls in PugTailError.__subclasses__():
            assert isinstance(cls.code, ErrorCode), cls.__name__


class TestMessages:
    """Message and hint text."""

    def test_location_in_message(self) -> None:
        """The location is appended to the message."""
        err = ComponentNotFoundError("Crad", NodeLocation(12, 3, "page.pug"), ["Button", "Card"])
        assert str(err).startswith('Component "Crad" not found at page.pug:line 12:column 3')
        assert err.hint == "Available components: Button, Card"

    def test_not_found_without_components(self) -> None:
        """With nothing registered the hint says so."""
        err = ComponentNotFoundError("Card")
        assert "No components are defined" in err.hint

    def test_default_slot_provided_twice_hint(self) -> None:
        """The default slot has a dedicated hint."""
        assert "bare content" in DuplicateSlotProvidedError("default").hint
        assert "once per component call" in DuplicateSlotProvidedError("header").hint

    def test_duplicate_slot_definition_previous(self) -> None:
        """The previous definition is named in the hint."""
        err = DuplicateSlotDefinitionError(
            "icon", NodeLocation(5, 3, "a.pug"), NodeLocation(2, 3, "a.pug")
        )
        assert "Previously defined at a.pug:line 2:column 3" in err.hint

    def test_slot_not_defined_lists_slots(self) -> None:
        """Available slots are listed."""
        err = SlotNotDefinedError("footer", None, ["header", "body"])
        assert err.hint == "Available slots: header, body"
        assert "does not define any slots" in SlotNotDefinedError("x").hint

    def test_recursive_cycle(self) -> None:
        """The cycle is kept and rendered with arrows."""
        err = RecursiveComponentCallError(["A", "B", "A"])
        assert err.cycle == ("A", "B", "A")
        assert "A -> B -> A" in str(err)

    def test_external_variable_hint(self) -> None:
        """The hint shows how to pass the variable as a prop."""
        err = ExternalVariableReferenceError("user", "Greeting")
        assert err.message == 'Component "Greeting" references external variable "user"'
        assert "Greeting(user=user)" in err.hint
        assert "scopeIsolation" in err.hint

    def test_unexpected_node(self) -> None:
        """Expected and actual kinds are reported."""
        err = UnexpectedNodeTypeError("Block", "Text")
        assert err.message == "Expected Block node, but got Text"


class TestFormatCompact:
    """Terminal rendering."""

    def test_compact_layout(self) -> None:
        """Code, location, hint and docs are each on their own line."""
        err = ComponentNotFoundError("Crad", NodeLocation(12, 3, "page.pug"), ["Card"])
        assert err.format_compact().splitlines() == [
            'PT-CMP-001: Component "Crad" not found',
            "  --> page.pug:line 12:column 3",
            "  Hint: Available components: Card",
            "  Docs: docs/errors.md#pt-cmp-001",
        ]

    def test_multiline_hint_is_indented(self) -> None:
        """Continuation lines of a hint line up under the first."""
        lines = ExternalVariableReferenceError("user", "Greeting").format_compact().splitlines()
        assert lines[1].startswith("  Hint: Pass it as a prop")
        assert lines[2] == "        Or declare it inside the component"

    def test_colors_strip_cleanly(self, monkeypatch) -> None:
        """Coloured output reduces to the plain layout."""
        err = ComponentNotFoundError("Crad")
        plain = err.format_compact()
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        colored = err.format_compact()
        assert colored != plain
        assert terminal.strip_colors(colored) == plain


class TestErrorReporter:
    """Filename attribution."""

    def test_fills_missing_filename(self) -> None:
        """Locations without a filename get the reporter's."""
        err = ErrorReporter("page.pug").component_not_found("X", NodeLocation(3, 1), [])
        assert err.location.filename == "page.pug"

    def test_keeps_existing_filename(self) -> None:
        """Locations from included files keep their own filename."""
        err = ErrorReporter("page.pug").component_not_found(
            "X", NodeLocation(3, 1, "partial.pug"), []
        )
        assert err.location.filename == "partial.pug"

    def test_location_without_node(self) -> None:
        """With no node position, the error still names the file."""
        err = ErrorReporter("page.pug").expansion_depth()
        assert err.location == NodeLocation(filename="page.pug")
        assert ErrorReporter().expansion_depth().location is None
