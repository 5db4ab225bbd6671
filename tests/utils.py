from __future__ import annotations

from templine.control.model import BindConstr, Binding, BindVar, Control, Plain, Raw
from templine.core import Ident, qualified_name
from templine.deref.model import Deref, DerefIdent


def ctl(body: str, prefix: str = "%") -> str:
    """Wrap `body` in a control statement, e.g. ctl("if x") == "%{if x}"."""
    return f"{prefix}{{{body}}}"


def plain(text: str) -> Control:
    return Plain(Raw(text))


def var(name: str) -> Binding:
    return BindVar(Ident(name))


def con(name: str, *args: Binding) -> Binding:
    return BindConstr(qualified_name(name.split(".")), tuple(args))


def ref(name: str) -> Deref:
    return DerefIdent(Ident(name))
