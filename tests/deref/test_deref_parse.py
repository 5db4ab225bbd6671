from __future__ import annotations

from fractions import Fraction

import pytest

from templine.core import Ident
from templine.deref.model import (
    Deref,
    DerefBranch,
    DerefGetField,
    DerefIntegral,
    DerefList,
    DerefModulesIdent,
    DerefRational,
    DerefString,
    DerefTuple,
)
from templine.deref.parse import parse_deref
from templine.errors import TemplateSyntaxError

from tests.utils import ref


def app(*items: Deref) -> Deref:
    out = items[0]
    for item in items[1:]:
        out = DerefBranch(out, item)
    return out


@pytest.mark.parametrize(
    "text,expected",
    [
        ("x", ref("x")),
        ("  x  ", ref("x")),
        ("x'", ref("x'")),
        ("Data.Map.lookup", DerefModulesIdent(("Data", "Map"), Ident("lookup"))),
        ("Nothing", ref("Nothing")),
        ("42", DerefIntegral(42)),
        ("-7", DerefIntegral(-7)),
        ("3.25", DerefRational(Fraction(13, 4))),
        ("-0.5", DerefRational(Fraction(-1, 2))),
        ('"plain"', DerefString("plain")),
        ('"a\\nb"', DerefString("a\nb")),
        ('"say \\"hi\\""', DerefString('say "hi"')),
        ('"}"', DerefString("}")),
        ("(+)", ref("+")),
        ("(x)", ref("x")),
    ],
)
def test_atoms(text: str, expected: Deref) -> None:
    assert parse_deref(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("f x y", app(ref("f"), ref("x"), ref("y"))),
        ("f   x", app(ref("f"), ref("x"))),
        ("f (g x)", app(ref("f"), app(ref("g"), ref("x")))),
        ("f(x)", app(ref("f"), ref("x"))),
        ('show"x"', app(ref("show"), DerefString("x"))),
        ("f -1", app(ref("f"), DerefIntegral(-1))),
        ("f $ g x", app(ref("f"), app(ref("g"), ref("x")))),
        ("f $ g $ h x", app(ref("f"), app(ref("g"), app(ref("h"), ref("x"))))),
        ("a + b", app(ref("+"), ref("a"), ref("b"))),
        ("a - 1", app(ref("-"), ref("a"), DerefIntegral(1))),
        ("xs !! n", app(ref("!!"), ref("xs"), ref("n"))),
        ("f x <> g y", app(ref("<>"), app(ref("f"), ref("x")), app(ref("g"), ref("y")))),
        ("(+) 1 2", app(ref("+"), DerefIntegral(1), DerefIntegral(2))),
    ],
)
def test_application_and_operators(text: str, expected: Deref) -> None:
    assert parse_deref(text) == expected


def test_field_access() -> None:
    assert parse_deref("user.name") == DerefGetField(ref("user"), "name")
    assert parse_deref("a.b.c") == DerefGetField(DerefGetField(ref("a"), "b"), "c")
    assert parse_deref("Foo.bar.baz") == DerefGetField(
        DerefModulesIdent(("Foo",), Ident("bar")), "baz"
    )
    assert parse_deref("(f x).y") == DerefGetField(app(ref("f"), ref("x")), "y")


def test_tuples_and_lists() -> None:
    assert parse_deref("(a, b)") == DerefTuple((ref("a"), ref("b")))
    assert parse_deref("( a , b )") == DerefTuple((ref("a"), ref("b")))
    assert parse_deref("(1, f x, [])") == DerefTuple(
        (DerefIntegral(1), app(ref("f"), ref("x")), DerefList(()))
    )
    assert parse_deref("[]") == DerefList(())
    assert parse_deref("[ 1, 2 ]") == DerefList((DerefIntegral(1), DerefIntegral(2)))
    assert parse_deref("map f [x]") == app(ref("map"), ref("f"), DerefList((ref("x"),)))


@pytest.mark.parametrize(
    "text",
    ["", "   ", "f $", "(a", "[a,", "a + ", '"open', "(,)", "f x)", "x.Y"],
)
def test_deref_syntax_errors(text: str) -> None:
    with pytest.raises(TemplateSyntaxError):
        parse_deref(text)


def test_deref_error_position() -> None:
    with pytest.raises(TemplateSyntaxError) as ei:
        parse_deref("f (x")
    assert ei.value.position == 4
    assert ei.value.line_col == (1, 5)
    assert "`)`" in (ei.value.diagnostic.hint or "")


def test_very_deep_nesting_is_a_syntax_error() -> None:
    with pytest.raises(TemplateSyntaxError) as ei:
        parse_deref("(" * 2000 + "x" + ")" * 2000)
    assert ei.value.message == "input nested too deeply"
