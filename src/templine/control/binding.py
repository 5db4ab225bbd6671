from lark import Token, Transformer, v_args

from templine.core import Ident, QualifiedName, qualified_name

from .model import (
    BindAs,
    BindConstr,
    Binding,
    BindList,
    BindRecord,
    BindTuple,
    BindVar,
)


def _name(tok: Token) -> str:
    # tokens carry the spaces that follow them; operators drop their parens
    name = str(tok).rstrip(" ")
    if tok.type == "OPID":
        return name[1:-1]
    return name


class BindingTransformer(Transformer[Token, Binding]):
    """Turns `pattern` subtrees into Binding values."""

    @v_args(inline=True)
    def binding(self, inner: Binding) -> Binding:
        return inner

    @v_args(inline=True)
    def var(self, tok: Token) -> Binding:
        return BindVar(Ident(_name(tok)))

    @v_args(inline=True)
    def as_pat(self, tok: Token, inner: Binding) -> Binding:
        return BindAs(Ident(_name(tok)), inner)

    @v_args(inline=True)
    def bare_con(self, constr: QualifiedName) -> Binding:
        return BindConstr(constr)

    def con_app(self, items: list) -> Binding:
        constr, *args = items
        return BindConstr(constr, tuple(args))

    def record(self, items: list) -> Binding:
        constr, *rest = items
        wildcard = False
        fields: list[tuple[Ident, Binding]] = []
        for item in rest:
            if isinstance(item, Token) and item.type == "WILDCARD":
                wildcard = True
            else:
                fields.append(item)
        return BindRecord(constr, tuple(fields), wildcard)

    def field(self, items: list) -> tuple[Ident, Binding]:
        tok, *value = items
        ident = Ident(_name(tok))
        if value:
            return (ident, value[0])
        # `Con{x}` binds field x to a variable of the same name
        return (ident, BindVar(ident))

    def tuple_pat(self, items: list[Binding]) -> Binding:
        if len(items) == 1:
            return items[0]
        return BindTuple(tuple(items))

    def list_pat(self, items: list[Binding]) -> Binding:
        return BindList(tuple(items))

    def qcon(self, items: list[Token]) -> QualifiedName:
        return qualified_name([_name(t) for t in items])
