"""End-to-end tests for component expansion."""

import logging

import pytest

from pugtail import Transformer, expand
from pugtail.exceptions import (
    ComponentNotFoundError,
    ExpansionDepthError,
    RecursiveComponentCallError,
    SlotNotDefinedError,
)
from pugtail.nodes import Code, Tag

from .builders import (
    block,
    code,
    code_values,
    component,
    conditional,
    find_all,
    slot,
    tag,
    tag_names,
    text,
    text_values,
)


def card_definition():
    """component Card()
      - const { title } = $props
      .card
        h2= title
        slot(body)
          p Empty
    """
    return component(
        "Card",
        code("const { title } = $props"),
        tag(
            "div",
            tag("h2", code("title", buffer=True)),
            slot("body", tag("p", text("Empty"))),
            attrs={"class": "'card'"},
        ),
    )


def button_definition():
    """component Button()
      button.btn
        slot
          | Click
    """
    return component(
        "Button",
        tag("button", slot(None, text("Click")), attrs={"class": "'btn'"}),
    )


def has_component_vocabulary(ast) -> bool:
    return any(
        node.name in ("component", "slot") or node.name[:1].isupper()
        for node in find_all(ast, Tag)
    )


class TestCard:
    """The props/attrs Card component."""

    def test_full_expansion(self) -> None:
        """A call becomes the body with bindings, fallthrough and slots."""
        page = block(
            card_definition(),
            tag(
                "Card",
                slot("body", tag("p", text("Custom"))),
                attrs={"title": '"Hello"', "class": '"wide"'},
            ),
        )
        result = expand(page)
        assert [type(node).__name__ for node in result.nodes] == [
            "Code",
            "Code",
            "Code",
            "Code",
            "Tag",
            "Code",
        ]
        assert code_values(result) == [
            "{",
            'const $props = {"title": "Hello"}',
            'const $attrs = {"class": "wide"}',
            "const { title } = $props",
            "title",
            "}",
        ]
        div = result.nodes[4]
        assert div.name == "div"
        assert [block.val for block in div.attribute_blocks] == ["$attrs"]
        assert tag_names(div) == ["div", "h2", "p"]
        assert text_values(div) == ["Custom"]
        assert not has_component_vocabulary(result)

    def test_default_slot_content(self) -> None:
        """Unfilled slots render their default content."""
        page = block(card_definition(), tag("Card", attrs={"title": '"Hi"'}))
        assert text_values(expand(page)) == ["Empty"]

    def test_variable_values_are_captured(self) -> None:
        """Caller variables are passed through an arrow function."""
        page = block(card_definition(), tag("Card", attrs={"title": "title"}))
        values = code_values(expand(page))
        assert values[0] == ";((__pug_arg_title) => {"
        assert values[1] == 'const $props = {"title": __pug_arg_title}'
        assert values[-1] == "})(title)"

    def test_shorthand_attribute(self) -> None:
        """``Card(title)`` passes the caller's ``title``."""
        page = block(card_definition(), tag("Card", attrs={"title": True}))
        values = code_values(expand(page))
        assert values[1] == 'const $props = {"title": __pug_arg_title}'
        assert values[-1] == "})(title)"

    def test_expansions_are_independent(self) -> None:
        """Each call gets its own copy of the body."""
        page = block(
            card_definition(),
            tag("Card", attrs={"title": '"a"'}),
            tag("Card", attrs={"title": '"b"'}),
        )
        transformer = Transformer()
        result = transformer.transform(page)
        first, second = [node for node in result.nodes if isinstance(node, Tag)]
        assert first == second
        assert first is not second
        assert first.block.nodes[0] is not second.block.nodes[0]
        canonical = transformer.registry["Card"].body
        assert canonical.nodes[1].attribute_blocks == []
        assert "slot" in tag_names(canonical)

    def test_input_tree_unchanged(self) -> None:
        """expand() never edits the tree it is given."""
        call = tag("Card", attrs={"title": '"a"'})
        page = block(card_definition(), call)
        expand(page)
        assert page.nodes[1] is call
        assert call.name == "Card"
        assert call.attribute_blocks == []


class TestPropsButton:
    """A props Button with a destructuring default."""

    @staticmethod
    def _definition():
        """component Button()
          - const { label, type = "button" } = $props
          button(type=type)= label
        """
        return component(
            "Button",
            code('const { label, type = "button" } = $props'),
            tag("button", code("label", buffer=True), attrs={"type": "type"}),
        )

    def test_default_left_to_runtime(self) -> None:
        """Only passed props are bound; the default stays in the destructuring."""
        result = expand(block(self._definition(), tag("Button", attrs={"label": '"Go"'})))
        assert code_values(result) == [
            "{",
            'const $props = {"label": "Go"}',
            "const $attrs = {}",
            'const { label, type = "button" } = $props',
            "label",
            "}",
        ]
        (label,) = [node for node in find_all(result, Code) if node.val == "label"]
        assert label.buffer
        assert tag_names(result) == ["button"]
        assert not has_component_vocabulary(result)


class TestLegacyMode:
    """Components without $props/$attrs destructuring."""

    def test_attributes_object_and_spread(self) -> None:
        """Call attributes become ``attributes`` spread on the root."""
        page = block(button_definition(), tag("Button", attrs={"type": '"submit"', "data-id": "7"}))
        result = expand(page)
        assert code_values(result) == ['var attributes = {type: "submit", "data-id": 7}']
        button = result.nodes[1]
        assert button.name == "button"
        assert [block.val for block in button.attribute_blocks] == ["attributes"]
        assert text_values(button) == ["Click"]

    def test_bare_content_fills_default_slot(self) -> None:
        """Call-site children go to the unnamed slot."""
        page = block(button_definition(), tag("Button", text("Save")))
        assert text_values(expand(page)) == ["Save"]

    def test_multiple_roots_warn(self, caplog) -> None:
        """Fallthrough is skipped for multi-root bodies."""
        page = block(
            component("Pair", tag("h2", text("a")), tag("p", text("b"))),
            tag("Pair", attrs={"id": '"x"'}),
        )
        with caplog.at_level(logging.WARNING, logger="pugtail"):
            result = expand(page)
        assert all(not node.attribute_blocks for node in find_all(result, Tag))
        assert 'Component "Pair" has multiple root elements' in caplog.text


class TestComposition:
    """Components using components."""

    def test_nested_definitions(self) -> None:
        """A component body may call other components."""
        page = block(
            button_definition(),
            component(
                "Toolbar",
                tag("nav", tag("Button", text("Save")), tag("Button", text("Undo"))),
            ),
            tag("Toolbar"),
        )
        result = expand(page)
        assert tag_names(result) == ["nav", "button", "button"]
        assert text_values(result) == ["Save", "Undo"]
        assert not has_component_vocabulary(result)

    def test_component_in_provided_slot(self) -> None:
        """Passing a Card into a Card's slot is not recursion."""
        page = block(
            card_definition(),
            tag(
                "Card",
                slot("body", tag("Card", attrs={"title": '"inner"'})),
                attrs={"title": '"outer"'},
            ),
        )
        result = expand(page)
        assert tag_names(result).count("div") == 2
        assert 'const $props = {"title": "inner"}' in code_values(result)
        assert not has_component_vocabulary(result)

    def test_named_slots_of_inner_component(self) -> None:
        """Slots provided to a nested call reach the nested component."""
        page = block(
            card_definition(),
            component("Page", tag("main", tag("Card", slot("body", text("from page")), attrs={"title": '"t"'}))),
            tag("Page"),
        )
        assert text_values(expand(page)) == ["from page"]

    def test_calls_inside_control_flow(self) -> None:
        """Calls in conditional branches are expanded in place."""
        page = block(
            button_definition(),
            conditional("show", block(tag("Button")), block(text("hidden"))),
        )
        cond = expand(page).nodes[0]
        assert tag_names(cond.consequent) == ["button"]
        assert text_values(cond.alternate) == ["hidden"]


class TestErrors:
    """Expansion failures."""

    def test_unknown_component(self) -> None:
        """Unknown calls list the available components."""
        page = block(card_definition(), tag("Crad", line=12, column=3))
        with pytest.raises(ComponentNotFoundError) as exc_info:
            expand(page, filename="page.pug")
        err = exc_info.value
        assert err.name == "Crad"
        assert err.available == ("Card",)
        assert str(err.location) == "page.pug:line 12:column 3"

    def test_undefined_slot(self) -> None:
        """Providing an undeclared slot is an error."""
        page = block(card_definition(), tag("Card", slot("footer", text("x"))))
        with pytest.raises(SlotNotDefinedError) as exc_info:
            expand(page)
        assert exc_info.value.available == ("body",)

    def test_direct_recursion(self) -> None:
        """A component calling itself is rejected."""
        page = block(component("Tree", tag("ul", tag("Tree"))), tag("Tree"))
        with pytest.raises(RecursiveComponentCallError) as exc_info:
            expand(page)
        assert exc_info.value.cycle == ("Tree", "Tree")

    def test_mutual_recursion(self) -> None:
        """Indirect cycles are reported with the full chain."""
        page = block(component("A", tag("B")), component("B", tag("A")))
        with pytest.raises(RecursiveComponentCallError) as exc_info:
            expand(page)
        cycle = exc_info.value.cycle
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B"}
        assert len(cycle) == 3

    def test_deep_nesting(self) -> None:
        """Non-cyclic nesting beyond the recursion limit is reported cleanly."""
        depth = 600
        definitions = [component(f"C{i}", tag("div", tag(f"C{i + 1}"))) for i in range(depth)]
        definitions.append(component(f"C{depth}", tag("span")))
        with pytest.raises(ExpansionDepthError):
            expand(block(*definitions, tag("C0")), filename="deep.pug")


class TestOptions:
    """expand() options."""

    def test_scope_override(self) -> None:
        """Keyword overrides apply on top of the default config."""
        page = block(
            component("Greeting", tag("p", code("user.name", buffer=True))),
            tag("Greeting"),
        )
        result = expand(page, scope_isolation="off")
        assert code_values(result) == ["var attributes = {}", "user.name"]

    def test_debug_logging(self, caplog) -> None:
        """Expansion steps are logged in debug mode."""
        page = block(button_definition(), tag("Button"))
        with caplog.at_level(logging.DEBUG, logger="pugtail"):
            expand(page, debug=True, filename="page.pug")
        assert "Expanding Button at page.pug:line 1:column 1 (depth 0)" in caplog.text
        assert "Expanded page.pug with 1 component(s)" in caplog.text

    def test_generated_code_is_not_buffered(self) -> None:
        """Injected bindings are statements, not output."""
        page = block(card_definition(), tag("Card", attrs={"title": '"a"'}))
        injected = [node for node in expand(page).nodes if isinstance(node, Code)]
        assert all(node.buffer is False for node in injected)
