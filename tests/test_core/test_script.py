"""Tests for scripts of named terms."""

import pytest

from fullsimple.core.ast import Abs, App, FalseLit, Fix, If, IsZero, Pred, TrueLit, Tuple, Var, Zero
from fullsimple.core.checker import TypeChecker, type_of
from fullsimple.core.context import Context, NamingContext
from fullsimple.core.desugar import numeral, project
from fullsimple.core.errors import TypeError
from fullsimple.core.script import NamedTerm, Script
from fullsimple.core.types import BOOL, INT, TypeArrow, TypeProduct
from fullsimple.eval.machine import evaluate

INT_TO_BOOL = TypeArrow(INT, BOOL)


def iseven_script(n: int) -> Script:
    """ff = \\ie:int->bool.\\x:int. ...; iseven = fix ff; iseven n"""
    ff = Abs(
        "ie",
        INT_TO_BOOL,
        Abs(
            "x",
            INT,
            If(
                IsZero(Var(0, "x")),
                TrueLit(),
                If(
                    IsZero(Pred(Var(0, "x"))),
                    FalseLit(),
                    App(Var(1, "ie"), Pred(Pred(Var(0, "x")))),
                ),
            ),
        ),
    )
    return Script(
        (NamedTerm("ff", ff), NamedTerm("iseven", Fix(Var(0, "ff")))),
        App(Var(0, "iseven"), numeral(n)),
    )


def even_odd_script(n: int) -> Script:
    """Mutual recursion through a record of functions.

    ff = \\ieio:{iseven:int->bool, isodd:int->bool}.
           {iseven = \\x:int. if isZero x then true else ieio.isodd (pred x),
            isodd  = \\x:int. if isZero x then false else ieio.iseven (pred x)};
    r = fix ff;
    r.iseven n
    """
    pair = TypeProduct({"iseven": INT_TO_BOOL, "isodd": INT_TO_BOOL})

    def half(base, other):
        return Abs(
            "x",
            INT,
            If(
                IsZero(Var(0, "x")),
                base,
                App(project(Var(1, "ieio"), other), Pred(Var(0, "x"))),
            ),
        )

    ff = Abs("ieio", pair, Tuple({"iseven": half(TrueLit(), "isodd"), "isodd": half(FalseLit(), "iseven")}))
    return Script(
        (NamedTerm("ff", ff), NamedTerm("r", Fix(Var(0, "ff")))),
        App(project(Var(0, "r"), "iseven"), numeral(n)),
    )


class TestNamedTerm:
    def test_str(self):
        assert str(NamedTerm("x", Zero())) == "x = 0"

    def test_script_str(self):
        script = Script((NamedTerm("x", Zero()), NamedTerm("y", TrueLit())), Var(1, "x"))
        assert str(script) == "x = 0; y = true; x"


class TestDesugar:
    def test_single_binding(self, checker, ctx):
        """x = 0; x  =>  (\\x:int.x) 0"""
        script = Script((NamedTerm("x", Zero()),), Var(0, "x"))
        assert checker.desugar_script(ctx, script) == App(Abs("x", INT, Var(0, "x")), Zero())

    def test_two_bindings(self, checker, ctx):
        """x = 0; y = true; x  =>  (\\x:int.(\\y:bool.x) true) 0"""
        script = Script((NamedTerm("x", Zero()), NamedTerm("y", TrueLit())), Var(1, "x"))
        expected = App(Abs("x", INT, App(Abs("y", BOOL, Var(1, "x")), TrueLit())), Zero())
        assert checker.desugar_script(ctx, script) == expected
        assert checker.infer(ctx, expected) == INT

    def test_later_binding_sees_earlier(self, checker, ctx):
        script = Script((NamedTerm("x", Zero()), NamedTerm("y", IsZero(Var(0, "x")))), Var(0, "y"))
        assert script.binding_types(checker, ctx) == [INT, BOOL]

    def test_empty_script_is_body(self, checker, ctx):
        assert checker.desugar_script(ctx, Script((), Zero())) == Zero()

    def test_binding_failure_names_the_binding(self, checker, ctx):
        script = Script((NamedTerm("x", Zero()), NamedTerm("bad", IsZero(TrueLit()))), Var(0, "x"))
        with pytest.raises(TypeError, match="Could not type named term bad"):
            checker.desugar_script(ctx, script)

    def test_binding_cannot_see_later_binding(self, checker, ctx):
        script = Script((NamedTerm("x", Var(0, "y")), NamedTerm("y", Zero())), Var(0, "y"))
        with pytest.raises(TypeError, match="named term x"):
            checker.desugar_script(ctx, script)

    def test_naming(self):
        script = Script((NamedTerm("ff", Zero()), NamedTerm("iseven", Zero())), Zero())
        naming = script.naming()
        assert naming.index_of("iseven") == 0
        assert naming.index_of("ff") == 1

    def test_naming_extends_outer(self):
        script = Script((NamedTerm("x", Zero()),), Zero())
        naming = script.naming(NamingContext().bind("outer"))
        assert naming.index_of("outer") == 1


class TestScriptsEndToEnd:
    def test_type_of_with_named_terms(self):
        ctx = Context(named_terms=(NamedTerm("x", Zero()), NamedTerm("y", TrueLit())))
        assert type_of(Var(1, "x"), ctx) == INT
        assert type_of(Var(0, "y"), ctx) == BOOL

    def test_evaluate_with_named_terms(self, settings):
        ctx = Context(named_terms=(NamedTerm("x", numeral(2)),))
        assert evaluate(IsZero(Var(0, "x")), ctx, settings) == FalseLit()

    @pytest.mark.parametrize("n,expected", [(4, TrueLit()), (5, FalseLit())])
    def test_iseven(self, checker, ctx, settings, n, expected):
        term = checker.desugar_script(ctx, iseven_script(n))
        assert checker.infer(ctx, term) == BOOL
        assert evaluate(term, settings=settings) == expected

    def test_iseven_binding_types(self, checker, ctx):
        types = iseven_script(0).binding_types(checker, ctx)
        assert types == [TypeArrow(INT_TO_BOOL, INT_TO_BOOL), INT_TO_BOOL]

    @pytest.mark.parametrize("n,expected", [(0, TrueLit()), (3, FalseLit()), (6, TrueLit())])
    def test_mutual_recursion(self, checker, ctx, settings, n, expected):
        term = checker.desugar_script(ctx, even_odd_script(n))
        assert checker.infer(ctx, term) == BOOL
        assert evaluate(term, settings=settings) == expected
