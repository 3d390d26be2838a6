"""Tests for derived forms built from core terms."""

import pytest

from fullsimple.core.ast import (
    Abs,
    App,
    FalseLit,
    If,
    IsZero,
    Let,
    PRecord,
    PVar,
    Pred,
    Succ,
    TrueLit,
    Tuple,
    Unit,
    Var,
    Zero,
)
from fullsimple.core.checker import type_of
from fullsimple.core.context import Context
from fullsimple.core.desugar import ascribe, let_in, letrec, numeral, project, sequence, to_int
from fullsimple.core.errors import TypeError
from fullsimple.core.types import BOOL, INT, UNIT, TypeArrow, TypeBase, TypeProduct
from fullsimple.eval.machine import evaluate


class TestNumerals:
    def test_zero(self):
        assert numeral(0) == Zero()

    def test_three(self):
        assert numeral(3) == Succ(Succ(Succ(Zero())))

    def test_negative(self):
        with pytest.raises(ValueError):
            numeral(-1)

    def test_to_int(self):
        assert to_int(numeral(12)) == 12
        assert to_int(Zero()) == 0

    def test_to_int_of_non_numeral(self):
        assert to_int(Succ(TrueLit())) is None
        assert to_int(Pred(Zero())) is None

    def test_printed_as_digits(self):
        assert str(numeral(4)) == "4"


class TestAscribe:
    def test_type(self):
        assert type_of(ascribe(Zero(), INT)) == INT

    def test_mismatch(self):
        with pytest.raises(TypeError, match="function expects bool"):
            type_of(ascribe(Zero(), BOOL))

    def test_alias_ascription(self):
        ctx = Context(aliases={"Nat": INT})
        assert type_of(ascribe(numeral(2), TypeBase("Nat")), ctx) == INT

    def test_evaluates_to_argument(self, settings):
        assert evaluate(ascribe(numeral(2), INT), settings=settings) == numeral(2)


class TestProject:
    def test_labeled(self, settings):
        term = project(Tuple({"a": Zero(), "b": TrueLit()}), "b")
        assert type_of(term) == BOOL
        assert evaluate(term, settings=settings) == TrueLit()

    def test_positional(self, settings):
        term = project(Tuple.of(Unit(), numeral(3)), "1")
        assert type_of(term) == INT
        assert evaluate(term, settings=settings) == numeral(3)

    def test_nested(self, settings):
        """x.a.b.c"""
        record = Tuple({"a": Tuple({"b": Tuple({"c": numeral(1)})})})
        term = project(project(project(record, "a"), "b"), "c")
        assert type_of(term) == INT
        assert evaluate(term, settings=settings) == numeral(1)

    def test_of_free_variable(self):
        ctx = Context({0: TypeProduct({"x": INT, "y": BOOL})})
        assert type_of(project(Var(0, "p"), "y"), ctx) == BOOL

    def test_missing_label(self):
        with pytest.raises(TypeError, match="label c is not in"):
            type_of(project(Tuple({"a": Zero()}), "c"))

    def test_shape(self):
        assert project(Var(0, "p"), "a") == Let(PRecord({"a": PVar("x")}), Var(0, "p"), Var(0, "x"))


class TestLetIn:
    def test_binds_at_index_zero(self, settings):
        term = let_in("x", numeral(2), Succ(Var(0, "x")))
        assert type_of(term) == INT
        assert evaluate(term, settings=settings) == numeral(3)


class TestLetrec:
    def iseven(self):
        """letrec iseven:int->bool = \\x:int. if isZero x then true
        else if isZero (pred x) then false else iseven (pred (pred x))"""
        body = Abs(
            "x",
            INT,
            If(
                IsZero(Var(0, "x")),
                TrueLit(),
                If(
                    IsZero(Pred(Var(0, "x"))),
                    FalseLit(),
                    App(Var(1, "iseven"), Pred(Pred(Var(0, "x")))),
                ),
            ),
        )
        return body

    def test_type(self):
        term = letrec("iseven", TypeArrow(INT, BOOL), self.iseven(), Var(0, "iseven"))
        assert type_of(term) == TypeArrow(INT, BOOL)

    @pytest.mark.parametrize("n,expected", [(0, True), (1, False), (4, True), (7, False)])
    def test_evaluation(self, settings, n, expected):
        term = letrec(
            "iseven",
            TypeArrow(INT, BOOL),
            self.iseven(),
            App(Var(0, "iseven"), numeral(n)),
        )
        assert evaluate(term, settings=settings) == (TrueLit() if expected else FalseLit())

    def test_annotation_must_match(self):
        term = letrec("f", TypeArrow(INT, INT), self.iseven(), Var(0, "f"))
        with pytest.raises(TypeError):
            type_of(term)


class TestSequence:
    def test_type_and_value(self, settings):
        term = sequence(Unit(), numeral(2))
        assert type_of(term) == INT
        assert evaluate(term, settings=settings) == numeral(2)

    def test_first_must_be_unit(self):
        with pytest.raises(TypeError, match="function expects unit"):
            type_of(sequence(Zero(), Zero()))

    def test_second_keeps_outer_variables(self):
        term = sequence(Unit(), Var(0, "b"))
        assert term == App(Abs("_", UNIT, Var(1, "b")), Unit())
        assert type_of(term, Context({0: BOOL})) == BOOL

    def test_chained(self, settings):
        term = sequence(Unit(), sequence(App(Abs("x", INT, Unit()), Zero()), TrueLit()))
        assert evaluate(term, settings=settings) == TrueLit()
