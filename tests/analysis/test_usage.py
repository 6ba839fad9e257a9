"""Tests for $props / $attrs usage detection."""

from pugtail.analysis.usage import detect_usage
from pugtail.definitions import ComponentUsage

from ..builders import block, code, conditional, tag


class TestDetectUsage:
    """Declared keys of a component body."""

    def test_props_and_attrs(self) -> None:
        """Keys from both sources are collected separately."""
        body = block(
            code("const { title, size = 'md' } = $props"),
            code("const { 'data-id': id } = $attrs"),
            tag("div"),
        )
        assert detect_usage(body) == ComponentUsage(
            from_props=("title", "size"), from_attrs=("data-id",)
        )

    def test_legacy_body(self) -> None:
        """No destructuring means legacy mode."""
        assert detect_usage(block(code("const x = 1"), tag("div"))) is None

    def test_rest_only_is_legacy(self) -> None:
        """A rest element declares no keys."""
        assert detect_usage(block(code("const { ...rest } = $attrs"))) is None

    def test_nested_code_is_found(self) -> None:
        """Destructuring inside control flow still counts."""
        body = block(conditional("x", block(code("const { title } = $props"))))
        assert detect_usage(body).from_props == ("title",)

    def test_keys_deduplicated_in_order(self) -> None:
        """A key declared twice is listed once, where first seen."""
        body = block(
            code("const { b, a } = $props"),
            code("const { a: other, c } = $props"),
        )
        assert detect_usage(body).from_props == ("b", "a", "c")

    def test_contains(self) -> None:
        """Membership checks either source."""
        usage = ComponentUsage(from_props=("title",), from_attrs=("class",))
        assert "title" in usage
        assert "class" in usage
        assert "id" not in usage
