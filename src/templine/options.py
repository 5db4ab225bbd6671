"""
Parser configuration: which characters trigger control statements (`%{if x}`)
and variable interpolation (`#{x}`).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

# Characters that already carry meaning right after a trigger.
_RESERVED_TRIGGERS = frozenset("\\{}")


@dataclass(frozen=True, slots=True)
class ParseOptions:
    control_prefix: str = "%"
    variable_prefix: str = "#"

    def __post_init__(self) -> None:
        for label, ch in (("control_prefix", self.control_prefix),
                          ("variable_prefix", self.variable_prefix)):
            if len(ch) != 1:
                raise ValueError(f"{label} must be a single character (got {ch!r})")
            if ch.isspace() or ch in _RESERVED_TRIGGERS:
                raise ValueError(f"{label} cannot be {ch!r}")
        if self.control_prefix == self.variable_prefix:
            raise ValueError(
                f"control_prefix and variable_prefix must differ (both are {self.control_prefix!r})"
            )

    def evolve(self, **overrides: Any) -> ParseOptions:
        _validate_override_keys(ParseOptions, overrides)
        return replace(self, **overrides)


def _validate_override_keys(cls: type[ParseOptions], overrides: Mapping[str, Any] | None) -> None:
    if not overrides:
        return
    allowed = {f.name for f in fields(cls)}
    unknown = [k for k in overrides.keys() if k not in allowed]
    if unknown:
        raise KeyError("Unknown ParseOptions override keys: " + ", ".join(sorted(unknown)))


_PRESETS: dict[str, ParseOptions] = {
    "default": ParseOptions(),
    "dollar": ParseOptions(control_prefix="$", variable_prefix="@"),
}


def _normalize_name(name: str) -> str:
    return name.strip().lower()


def get_options(name: str) -> ParseOptions:
    """Fetch a named preset ("default", "dollar")."""
    try:
        return _PRESETS[_normalize_name(name)]
    except KeyError:
        raise KeyError(f"Unknown options preset: {name!r}") from None


def list_presets() -> list[str]:
    return sorted(_PRESETS.keys())


def default_options() -> ParseOptions:
    return _PRESETS["default"]


__all__ = [
    "ParseOptions",
    "get_options",
    "list_presets",
    "default_options",
]
