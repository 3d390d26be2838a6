"""Derived forms.

Each helper builds its construct out of core terms only, so the checker
and the evaluator need no extra rules for them.
"""

from __future__ import annotations

from fullsimple.core.ast import Abs, App, Fix, Let, PRecord, PVar, Succ, Term, Var, Zero
from fullsimple.core.shift import shift
from fullsimple.core.types import UNIT, Type


def numeral(n: int) -> Term:
    """The natural number ``n`` as ``succ(...succ(0))``."""
    if n < 0:
        raise ValueError(f"Numerals are natural numbers, got {n}")
    term: Term = Zero()
    for _ in range(n):
        term = Succ(term)
    return term


def to_int(term: Term) -> int | None:
    """Read a numeral back as an int, or None if ``term`` is not one."""
    count = 0
    while isinstance(term, Succ):
        count += 1
        term = term.term
    if isinstance(term, Zero):
        return count
    return None


def ascribe(term: Term, ty: Type) -> Term:
    """``term as T``: the identity on ``T`` applied to ``term``."""
    return App(Abs("x", ty, Var(0, "x")), term)


def project(term: Term, label: str) -> Term:
    """``term.label``: ``let {label=x} = term in x``."""
    return Let(PRecord({label: PVar("x")}), term, Var(0, "x"))


def let_in(name: str, value: Term, body: Term) -> Term:
    """``let name = value in body``; ``body`` sees ``name`` at index 0."""
    return Let(PVar(name), value, body)


def letrec(name: str, ty: Type, value: Term, body: Term) -> Term:
    """``letrec name:T = value in body``.

    ``value`` and ``body`` both see ``name`` at index 0.
    """
    return Let(PVar(name), Fix(Abs(name, ty, value)), body)


def sequence(first: Term, second: Term) -> Term:
    """``first; second`` where ``first`` is evaluated for its effect and must be unit."""
    return App(Abs("_", UNIT, shift(1, 0, second)), first)
