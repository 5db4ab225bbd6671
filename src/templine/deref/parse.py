import re
from fractions import Fraction
from functools import reduce

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedInput, VisitError

from templine.core import Ident
from templine.errors import nesting_error, syntax_error
from templine.source import Source

from .grammar import DEREF_GRAMMAR, TERMINAL_LABELS
from .model import (
    Deref,
    DerefBranch,
    DerefGetField,
    DerefIdent,
    DerefIntegral,
    DerefList,
    DerefModulesIdent,
    DerefRational,
    DerefString,
    DerefTuple,
)

_STRING_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "b": "\b",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
_ESCAPE_RE = re.compile(r"\\(.)")


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _STRING_ESCAPES[m.group(1)], body)


class DerefTransformer(Transformer[Token, Deref]):
    """Turns `expr` subtrees into Deref values."""

    def expr(self, items: list[Deref]) -> Deref:
        return items[0]

    def application(self, items: list[Deref]) -> Deref:
        return reduce(DerefBranch, items)

    @v_args(inline=True)
    def dollar(self, lhs: Deref, rhs: Deref) -> Deref:
        return DerefBranch(lhs, rhs)

    @v_args(inline=True)
    def infix(self, lhs: Deref, op: Deref, rhs: Deref) -> Deref:
        return DerefBranch(DerefBranch(op, lhs), rhs)

    def single(self, items: list[Deref | Token]) -> Deref:
        base, *fields = items
        for f in fields:
            base = DerefGetField(base, str(f)[1:])
        return base

    @v_args(inline=True)
    def parens(self, inner: Deref) -> Deref:
        return inner

    def tuple_expr(self, items: list[Deref]) -> Deref:
        return DerefTuple(tuple(items))

    def list_expr(self, items: list[Deref]) -> Deref:
        return DerefList(tuple(items))

    def QIDENT(self, tok: Token) -> Deref:
        *mods, name = str(tok).split(".")
        if mods:
            return DerefModulesIdent(tuple(mods), Ident(name))
        return DerefIdent(Ident(name))

    def NUMBER(self, tok: Token) -> Deref:
        if "." in tok:
            return DerefRational(Fraction(str(tok)))
        return DerefIntegral(int(tok))

    def STRING(self, tok: Token) -> Deref:
        return DerefString(_unescape(str(tok)[1:-1]))

    def OPERATOR_NAME(self, tok: Token) -> Deref:
        return DerefIdent(Ident(str(tok)[1:-1]))

    def OPERATOR(self, tok: Token) -> Deref:
        return DerefIdent(Ident(str(tok)))


_PARSER = Lark(
    DEREF_GRAMMAR,
    start="expr",
    parser="earley",
    lexer="dynamic",
    ambiguity="resolve",
    regex=True,
)


def parse_deref(text: str, label: str | None = None) -> Deref:
    """Parse all of `text` as a single expression; trailing blanks are ignored."""
    text = text.rstrip(" \t")
    try:
        tree = _PARSER.parse(text)
        return DerefTransformer().transform(tree)
    except UnexpectedInput as e:
        raise syntax_error(e, Source(text, label), TERMINAL_LABELS) from e
    except VisitError as e:
        if isinstance(e.orig_exc, RecursionError):
            raise nesting_error(Source(text, label)) from None
        raise e.orig_exc from None
    except RecursionError:
        raise nesting_error(Source(text, label)) from None


__all__ = ["DerefTransformer", "parse_deref"]
