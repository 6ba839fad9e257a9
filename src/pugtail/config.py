"""Expansion configuration.

Example:
    >>> from pugtail.config import ExpansionConfig, ScopeIsolation
    >>> config = ExpansionConfig(
    ...     scope_isolation=ScopeIsolation.WARN,
    ...     allowed_globals=frozenset({"site", "t"}),
    ... )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class ScopeIsolation(str, Enum):
    """What to do when a component body reads a caller variable."""

    ERROR = "error"
    WARN = "warn"
    OFF = "off"


# Accepted spellings of each option, as produced by config-file loaders
_OPTION_KEYS = {
    "scope_isolation": ("scope_isolation", "scopeIsolation"),
    "allowed_globals": ("allowed_globals", "allowedGlobals"),
    "debug": ("debug",),
    "filename": ("filename",),
}


@dataclass(frozen=True, slots=True)
class ExpansionConfig:
    """Options for one expansion run.

    Attributes:
        scope_isolation: Handling of external variable references in
            component bodies. Defaults to ``ScopeIsolation.ERROR``.
        allowed_globals: Extra identifiers component bodies may read
            without passing them as props (e.g. helpers exposed to every
            template).
        debug: Emit ``logger.debug`` records for registration and expansion.
        filename: Template filename used in diagnostics when nodes carry none.
    """

    scope_isolation: ScopeIsolation = ScopeIsolation.ERROR
    allowed_globals: frozenset[str] = field(default_factory=frozenset)
    debug: bool = False
    filename: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.scope_isolation, ScopeIsolation):
            object.__setattr__(self, "scope_isolation", _coerce_mode(self.scope_isolation))
        if not isinstance(self.allowed_globals, frozenset):
            object.__setattr__(self, "allowed_globals", frozenset(self.allowed_globals))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ExpansionConfig:
        """Build a config from a loader mapping.

        Both snake_case and camelCase keys are accepted; unknown keys are
        ignored so a full project config can be passed through.

        Raises:
            ValueError: If ``scopeIsolation`` is not one of error/warn/off
        """
        values: dict[str, Any] = {}
        for name, keys in _OPTION_KEYS.items():
            for key in keys:
                if key in options and options[key] is not None:
                    values[name] = options[key]
                    break
        if "allowed_globals" in values:
            values["allowed_globals"] = _as_names(values["allowed_globals"])
        return cls(**values)

    def merged(self, **overrides: Any) -> ExpansionConfig:
        """Return a copy with ``overrides`` applied (camelCase keys allowed)."""
        if not overrides:
            return self
        updates = {
            name: overrides[key]
            for name, keys in _OPTION_KEYS.items()
            for key in keys
            if key in overrides
        }
        unknown = set(overrides) - {key for keys in _OPTION_KEYS.values() for key in keys}
        if unknown:
            raise TypeError(f"Unknown expansion option(s): {', '.join(sorted(unknown))}")
        if "allowed_globals" in updates:
            updates["allowed_globals"] = _as_names(updates["allowed_globals"])
        return replace(self, **updates)


def _coerce_mode(value: Any) -> ScopeIsolation:
    try:
        return ScopeIsolation(value)
    except ValueError:
        valid = ", ".join(mode.value for mode in ScopeIsolation)
        raise ValueError(f"Invalid scopeIsolation {value!r}; expected one of: {valid}") from None


def _as_names(value: Iterable[str] | str) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset(name.strip() for name in value.split(",") if name.strip())
    return frozenset(value)


DEFAULT_CONFIG = ExpansionConfig()
