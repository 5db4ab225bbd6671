from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from templine.core import Ident, QualifiedName
from templine.deref.model import Deref

# ────────────────────────── Pattern bindings ──────────────────────────


@dataclass(frozen=True, slots=True)
class BindVar:
    ident: Ident


@dataclass(frozen=True, slots=True)
class BindAs:
    """`name@pattern`: `ident` is bound to whatever `binding` matches."""
    ident: Ident
    binding: Binding


@dataclass(frozen=True, slots=True)
class BindConstr:
    constr: QualifiedName
    args: tuple[Binding, ...] = ()


@dataclass(frozen=True, slots=True)
class BindRecord:
    """
    `Con{field = pat, ...}`. `wildcard` is True when the field list ends in
    `..`; duplicate field names are kept as written.
    """
    constr: QualifiedName
    fields: tuple[tuple[Ident, Binding], ...]
    wildcard: bool


@dataclass(frozen=True, slots=True)
class BindTuple:
    items: tuple[Binding, ...]


@dataclass(frozen=True, slots=True)
class BindList:
    items: tuple[Binding, ...]


Binding: TypeAlias = BindVar | BindAs | BindConstr | BindRecord | BindTuple | BindList

# ────────────────────────── Content ──────────────────────────


@dataclass(frozen=True, slots=True)
class Raw:
    text: str


@dataclass(frozen=True, slots=True)
class Interpolated:
    deref: Deref


Content: TypeAlias = Raw | Interpolated

# ────────────────────────── Control tokens ──────────────────────────


@dataclass(frozen=True, slots=True)
class ForallStart:
    deref: Deref
    binding: Binding


@dataclass(frozen=True, slots=True)
class ForallEnd:
    pass


@dataclass(frozen=True, slots=True)
class IfStart:
    deref: Deref


@dataclass(frozen=True, slots=True)
class ElseIf:
    deref: Deref


@dataclass(frozen=True, slots=True)
class Else:
    pass


@dataclass(frozen=True, slots=True)
class IfEnd:
    pass


@dataclass(frozen=True, slots=True)
class CaseStart:
    deref: Deref


@dataclass(frozen=True, slots=True)
class CaseOf:
    binding: Binding


@dataclass(frozen=True, slots=True)
class CaseEnd:
    pass


@dataclass(frozen=True, slots=True)
class Plain:
    content: Content


Control: TypeAlias = (
    ForallStart
    | ForallEnd
    | IfStart
    | ElseIf
    | Else
    | IfEnd
    | CaseStart
    | CaseOf
    | CaseEnd
    | Plain
)
