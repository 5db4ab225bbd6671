from __future__ import annotations

from functools import lru_cache

from lark import Lark, Token, v_args
from lark.exceptions import UnexpectedInput, VisitError

from templine.deref.model import Deref
from templine.deref.parse import DerefTransformer
from templine.errors import nesting_error, syntax_error
from templine.options import ParseOptions, default_options
from templine.source import Source

from .binding import BindingTransformer
from .grammar import TERMINAL_LABELS, line_grammar
from .model import (
    Binding,
    CaseEnd,
    CaseOf,
    CaseStart,
    Control,
    Else,
    ElseIf,
    ForallEnd,
    ForallStart,
    IfEnd,
    IfStart,
    Interpolated,
    Plain,
    Raw,
)


def _coalesce(controls: list[Control]) -> list[Control]:
    # merge neighbouring literal text into a single Plain(Raw)
    out: list[Control] = []
    for c in controls:
        if (
            out
            and isinstance(c, Plain) and isinstance(c.content, Raw)
            and isinstance(out[-1], Plain) and isinstance(out[-1].content, Raw)
        ):
            out[-1] = Plain(Raw(out[-1].content.text + c.content.text))
        else:
            out.append(c)
    return out


class _LineTransformer(BindingTransformer, DerefTransformer):
    def line(self, items: list[Control]) -> list[Control]:
        return _coalesce(items)

    @v_args(inline=True)
    def raw(self, tok: Token) -> Control:
        return Plain(Raw(str(tok)))

    @v_args(inline=True)
    def interpolation(self, deref: Deref) -> Control:
        return Plain(Interpolated(deref))

    @v_args(inline=True)
    def var_literal(self, tok: Token) -> Control:
        if tok.type == "VAR_AT_EOL":
            return Plain(Raw(""))
        # escaped or stray trigger: the trigger character itself
        return Plain(Raw(str(tok)[0]))

    @v_args(inline=True)
    def ctrl_literal(self, tok: Token) -> Control:
        return Plain(Raw(str(tok)[0]))

    @v_args(inline=True)
    def statement(self, control: Control) -> Control:
        return control

    @v_args(inline=True)
    def forall_start(self, binding: Binding, deref: Deref) -> Control:
        return ForallStart(deref, binding)

    def forall_end(self, _: list) -> Control:
        return ForallEnd()

    @v_args(inline=True)
    def if_start(self, deref: Deref) -> Control:
        return IfStart(deref)

    @v_args(inline=True)
    def else_if(self, deref: Deref) -> Control:
        return ElseIf(deref)

    def else_branch(self, _: list) -> Control:
        return Else()

    def if_end(self, _: list) -> Control:
        return IfEnd()

    @v_args(inline=True)
    def case_start(self, deref: Deref) -> Control:
        return CaseStart(deref)

    @v_args(inline=True)
    def case_of(self, binding: Binding) -> Control:
        return CaseOf(binding)

    def case_end(self, _: list) -> Control:
        return CaseEnd()


@lru_cache(maxsize=None)
def _parser_for(control_prefix: str, variable_prefix: str) -> Lark:
    return Lark(
        line_grammar(control_prefix, variable_prefix),
        start=["line", "binding"],
        parser="earley",
        lexer="dynamic",
        ambiguity="resolve",
        regex=True,
    )


def _run(options: ParseOptions, text: str, start: str, label: str | None):
    parser = _parser_for(options.control_prefix, options.variable_prefix)
    # both the parse-tree builder and the transformer recurse once per nesting level
    try:
        tree = parser.parse(text, start=start)
        return _LineTransformer().transform(tree)
    except UnexpectedInput as e:
        raise syntax_error(e, Source(text, label), TERMINAL_LABELS) from e
    except VisitError as e:
        if isinstance(e.orig_exc, RecursionError):
            raise nesting_error(Source(text, label)) from None
        raise e.orig_exc from None
    except RecursionError:
        raise nesting_error(Source(text, label)) from None


def parse_line_control(
    options: ParseOptions, text: str, label: str | None = None
) -> list[Control]:
    """
    Parse one line of template text into control tokens.

    The whole of `text` must be accounted for; any failure raises
    TemplateSyntaxError and no partial result is returned. A line
    terminator directly after a control statement is absorbed.
    """
    return _run(options, text, "line", label)


def parse_binding(text: str, label: str | None = None) -> Binding:
    """Parse all of `text` as a single pattern binding."""
    return _run(default_options(), text, "binding", label)


__all__ = ["parse_line_control", "parse_binding"]
