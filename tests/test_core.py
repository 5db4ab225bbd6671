from __future__ import annotations

import pytest

from templine.core import (
    Ident,
    Qualified,
    Unqualified,
    is_constructor,
    is_variable,
    qualified_name,
)


@pytest.mark.parametrize("name", ["x", "xs'", "_", "_Foo", "fooBar", "1", "ñame"])
def test_variable_shaped(name: str) -> None:
    assert is_variable(Ident(name))
    assert not is_constructor(name)


@pytest.mark.parametrize("name", ["X", "Just", "Ñame", "ǅx", ":+", "<|>", "."])
def test_constructor_shaped(name: str) -> None:
    assert is_constructor(Ident(name))


def test_operator_names_classify_by_first_character() -> None:
    # the grammar only accepts `(op)` in constructor positions
    assert is_constructor(":+")
    assert is_variable(":+")


def test_empty_ident_is_rejected() -> None:
    with pytest.raises(ValueError):
        Ident("")
    with pytest.raises(ValueError):
        is_variable("")


def test_qualified_name_assembly() -> None:
    assert qualified_name(["Foo"]) == Unqualified(Ident("Foo"))
    q = qualified_name(["Data", "Map", "Foo"])
    assert q == Qualified(("Data", "Map"), Ident("Foo"))
    assert str(q) == "Data.Map.Foo"
    with pytest.raises(ValueError):
        qualified_name([])
    with pytest.raises(ValueError):
        Qualified((), Ident("Foo"))
