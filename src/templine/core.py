from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

# Characters allowed in a parenthesised operator name such as `(:+)`.
OPERATOR_CHARS = "!#$%&*+./<=>?@\\^|-~:"


@dataclass(frozen=True, slots=True)
class Ident:
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Ident cannot be empty")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Ident({self.name!r})"


def _first_char(ident: Ident | str) -> str:
    name = ident.name if isinstance(ident, Ident) else ident
    if not name:
        raise ValueError("bad identifier: empty name")
    return name[0]


def _is_upper(ch: str) -> bool:
    # titlecase letters (e.g. U+01C5) count as uppercase
    return ch.isupper() or ch.istitle()


def is_variable(ident: Ident | str) -> bool:
    """Variables are names that do not start with an uppercase letter."""
    return not _is_upper(_first_char(ident))


def is_constructor(ident: Ident | str) -> bool:
    """
    Constructors start with an uppercase letter, or are operators (the name
    written between parentheses, e.g. `:+` from `(:+)`).
    """
    first = _first_char(ident)
    return _is_upper(first) or first in OPERATOR_CHARS


@dataclass(frozen=True, slots=True)
class Unqualified:
    ident: Ident

    def __str__(self) -> str:
        return str(self.ident)


@dataclass(frozen=True, slots=True)
class Qualified:
    modules: tuple[str, ...]
    ident: Ident

    def __post_init__(self) -> None:
        if not self.modules:
            raise ValueError("Qualified name needs at least one module segment")

    def __str__(self) -> str:
        return ".".join((*self.modules, str(self.ident)))


QualifiedName: TypeAlias = Unqualified | Qualified


def qualified_name(pieces: Sequence[str]) -> QualifiedName:
    """All but the last piece form the module path; a single piece is unqualified."""
    if not pieces:
        raise ValueError("qualified_name needs at least one piece")
    *modules, last = pieces
    if not modules:
        return Unqualified(Ident(last))
    return Qualified(tuple(modules), Ident(last))
