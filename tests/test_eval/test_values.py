"""Tests for value forms."""

import pytest

from fullsimple.core.ast import (
    Abs,
    App,
    FalseLit,
    If,
    IsZero,
    Pred,
    Succ,
    Tag,
    TrueLit,
    Tuple,
    Unit,
    Var,
    Zero,
)
from fullsimple.core.desugar import numeral
from fullsimple.core.types import INT, TypeSum
from fullsimple.eval.value import is_numeric_value, is_value

SUM = TypeSum({"a": INT})


@pytest.mark.parametrize(
    "term",
    [
        Abs("x", INT, Var(0, "x")),
        Abs("x", INT, App(Var(0, "x"), Var(0, "x"))),
        Unit(),
        TrueLit(),
        FalseLit(),
        Zero(),
        numeral(5),
        Tuple({}),
        Tuple.of(Zero(), Tuple.of(TrueLit(), Unit())),
        Tag("a", numeral(2), SUM),
    ],
)
def test_values(term):
    """Test terms that are fully evaluated."""
    assert is_value(term)


@pytest.mark.parametrize(
    "term",
    [
        Var(0, "x"),
        App(Abs("x", INT, Var(0, "x")), Zero()),
        If(TrueLit(), Zero(), Zero()),
        Pred(Zero()),
        IsZero(Zero()),
        Succ(Pred(Zero())),
        Succ(TrueLit()),
        Tuple.of(Zero(), Pred(Zero())),
        Tag("a", Pred(Zero()), SUM),
    ],
)
def test_non_values(term):
    """Test terms that still have work to do, or are stuck."""
    assert not is_value(term)


def test_numeric_values():
    """Test numerals are succ chains ending in zero."""
    assert is_numeric_value(Zero())
    assert is_numeric_value(numeral(3))
    assert not is_numeric_value(Succ(Var(0, "n")))
    assert not is_numeric_value(TrueLit())
