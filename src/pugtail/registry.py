"""Component registry for one compilation unit."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from pugtail.exceptions import ErrorReporter

if TYPE_CHECKING:
    from pugtail.definitions import ComponentDefinition


class ComponentRegistry:
    """Name -> ComponentDefinition store.

    Supports:
        - registry.register(definition)
        - registry.get("Card") / registry["Card"]
        - "Card" in registry
        - len(registry), iter(registry)

    One registry belongs to one expansion run; it is not shared between
    threads.
    """

    __slots__ = ("_components", "_reporter")

    def __init__(self, reporter: ErrorReporter | None = None) -> None:
        self._components: dict[str, ComponentDefinition] = {}
        self._reporter = reporter or ErrorReporter()

    def register(self, definition: ComponentDefinition) -> None:
        """Add a definition.

        Raises:
            DuplicateComponentError: If the name is already registered; the
                error carries both locations
        """
        existing = self._components.get(definition.name)
        if existing is not None:
            raise self._reporter.duplicate_component(
                definition.name, definition.location, existing.location
            )
        self._components[definition.name] = definition

    def get(self, name: str) -> ComponentDefinition | None:
        return self._components.get(name)

    def has(self, name: str) -> bool:
        return name in self._components

    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._components)

    @property
    def size(self) -> int:
        return len(self._components)

    def clear(self) -> None:
        self._components.clear()

    def __getitem__(self, name: str) -> ComponentDefinition:
        return self._components[name]

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        return f"ComponentRegistry({', '.join(self._components)})"
