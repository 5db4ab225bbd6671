from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TypeAlias

from templine.core import Ident


@dataclass(frozen=True, slots=True)
class DerefIdent:
    ident: Ident


@dataclass(frozen=True, slots=True)
class DerefModulesIdent:
    modules: tuple[str, ...]
    ident: Ident


@dataclass(frozen=True, slots=True)
class DerefIntegral:
    value: int


@dataclass(frozen=True, slots=True)
class DerefRational:
    value: Fraction


@dataclass(frozen=True, slots=True)
class DerefString:
    value: str


@dataclass(frozen=True, slots=True)
class DerefBranch:
    """Application: `func` applied to `arg`."""
    func: Deref
    arg: Deref


@dataclass(frozen=True, slots=True)
class DerefList:
    items: tuple[Deref, ...]


@dataclass(frozen=True, slots=True)
class DerefTuple:
    items: tuple[Deref, ...]


@dataclass(frozen=True, slots=True)
class DerefGetField:
    expr: Deref
    field: str


Deref: TypeAlias = (
    DerefIdent
    | DerefModulesIdent
    | DerefIntegral
    | DerefRational
    | DerefString
    | DerefBranch
    | DerefList
    | DerefTuple
    | DerefGetField
)
