"""Component metadata produced by detection.

All types here are frozen: a ComponentDefinition is created once per
``component`` block and never changes. Its ``body`` is the canonical
Block; expansion always works on a clone from :meth:`instantiate`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pugtail._types import NodeLocation
from pugtail.nodes import Block
from pugtail.utils.clone import deep_clone


@dataclass(frozen=True, slots=True)
class ComponentUsage:
    """Keys a component destructures from ``$props`` and ``$attrs``.

    Keys keep declaration order and are original property names:
    ``const { type: kind = "button" } = $props`` yields ``type``.
    """

    from_props: tuple[str, ...] = ()
    from_attrs: tuple[str, ...] = ()

    def __contains__(self, key: object) -> bool:
        return key in self.from_props or key in self.from_attrs


@dataclass(frozen=True, slots=True)
class ScopeAnalysisResult:
    """Identifier sets for a component body.

    Attributes:
        declared: Names bound inside the body (declarations, parameters,
            loop variables)
        referenced: Every name the body reads
        props_variables: Local names destructured from ``$props``
        attrs_variables: Local names destructured from ``$attrs``
        external_references: Reads that resolve to nothing the component
            owns: the caller's variables
    """

    declared: frozenset[str] = frozenset()
    referenced: frozenset[str] = frozenset()
    props_variables: frozenset[str] = frozenset()
    attrs_variables: frozenset[str] = frozenset()
    external_references: frozenset[str] = frozenset()

    @property
    def derived_variables(self) -> frozenset[str]:
        """Locals bound from ``$props`` or ``$attrs``."""
        return self.props_variables | self.attrs_variables


@dataclass(frozen=True, slots=True)
class SlotDefinition:
    """A ``slot`` placeholder declared in a component body.

    Attributes:
        name: Slot name (``default`` when unnamed)
        default_content: Children of the placeholder, used when the call
            site provides nothing
        location: Placeholder position
        path: Control-flow path label (``if>each``); empty at top level
    """

    name: str
    default_content: Block
    location: NodeLocation
    path: str = ""


@dataclass(frozen=True, slots=True)
class ComponentDefinition:
    """A registered component.

    Attributes:
        name: Component name (uppercase first letter)
        body: Canonical body; never mutated
        slots: Slot name -> first definition on any path
        usage: Declared ``$props``/``$attrs`` keys; None selects legacy
            ``attributes`` mode
        scope: Identifier analysis of the body
        location: Position of the ``component`` tag
    """

    name: str
    body: Block
    slots: Mapping[str, SlotDefinition] = field(default_factory=dict)
    usage: ComponentUsage | None = None
    scope: ScopeAnalysisResult | None = None
    location: NodeLocation = field(default_factory=NodeLocation)

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", MappingProxyType(dict(self.slots)))

    @property
    def slot_names(self) -> tuple[str, ...]:
        return tuple(self.slots)

    def instantiate(self) -> Block:
        """Return a private copy of the body for one expansion."""
        return deep_clone(self.body)
