"""De Bruijn index shifting and capture-avoiding substitution.

Binders and the number of variables they introduce:

- ``Abs``: 1 in its body
- ``Let``: ``pattern.length`` in its body (the bound value is outside the scope)
- ``Branch``: 1 in its body (the variant payload)

Every other construct passes the cutoff through unchanged.
"""

from __future__ import annotations

from fullsimple.core.ast import (
    Abs,
    App,
    Branch,
    Case,
    FalseLit,
    Fix,
    If,
    IsZero,
    Let,
    Pred,
    Succ,
    Tag,
    Term,
    TrueLit,
    Tuple,
    Unit,
    Var,
    Zero,
)


def shift(d: int, cutoff: int, term: Term) -> Term:
    """Add ``d`` to every free variable index ``>= cutoff`` in ``term``."""
    if d == 0:
        return term

    def walk(c: int, t: Term) -> Term:
        match t:
            case Var(index, name):
                if index < c:
                    return t
                return Var(index + d, name)
            case Abs(name, var_type, body):
                return Abs(name, var_type, walk(c + 1, body))
            case App(func, arg):
                return App(walk(c, func), walk(c, arg))
            case If(cond, then, else_):
                return If(walk(c, cond), walk(c, then), walk(c, else_))
            case Succ(inner):
                return Succ(walk(c, inner))
            case Pred(inner):
                return Pred(walk(c, inner))
            case IsZero(inner):
                return IsZero(walk(c, inner))
            case Tuple(fields):
                return Tuple({label: walk(c, field) for label, field in fields.items()})
            case Let(pattern, value, body):
                return Let(pattern, walk(c, value), walk(c + pattern.length, body))
            case Tag(label, payload, ascribed_type):
                return Tag(label, walk(c, payload), ascribed_type)
            case Case(scrutinee, branches):
                return Case(
                    walk(c, scrutinee),
                    {
                        label: Branch(branch.label, branch.var_name, walk(c + 1, branch.body))
                        for label, branch in branches.items()
                    },
                )
            case Fix(inner):
                return Fix(walk(c, inner))
            case Unit() | TrueLit() | FalseLit() | Zero():
                return t
            case _:
                raise ValueError(f"Unknown term type: {type(t)}")

    return walk(cutoff, term)


def substitute(j: int, s: Term, term: Term, cutoff: int = 0) -> Term:
    """Replace variable ``j`` with ``s`` in ``term``.

    Under ``k`` binders the variable shows up as ``j + k`` and ``s`` is
    shifted up by ``k`` so its own free variables keep pointing outwards.
    """
    match term:
        case Var(index, _):
            if index == j + cutoff:
                return shift(cutoff, 0, s)
            return term
        case Abs(name, var_type, body):
            return Abs(name, var_type, substitute(j, s, body, cutoff + 1))
        case App(func, arg):
            return App(substitute(j, s, func, cutoff), substitute(j, s, arg, cutoff))
        case If(cond, then, else_):
            return If(
                substitute(j, s, cond, cutoff),
                substitute(j, s, then, cutoff),
                substitute(j, s, else_, cutoff),
            )
        case Succ(inner):
            return Succ(substitute(j, s, inner, cutoff))
        case Pred(inner):
            return Pred(substitute(j, s, inner, cutoff))
        case IsZero(inner):
            return IsZero(substitute(j, s, inner, cutoff))
        case Tuple(fields):
            return Tuple({label: substitute(j, s, field, cutoff) for label, field in fields.items()})
        case Let(pattern, value, body):
            return Let(
                pattern,
                substitute(j, s, value, cutoff),
                substitute(j, s, body, cutoff + pattern.length),
            )
        case Tag(label, payload, ascribed_type):
            return Tag(label, substitute(j, s, payload, cutoff), ascribed_type)
        case Case(scrutinee, branches):
            return Case(
                substitute(j, s, scrutinee, cutoff),
                {
                    label: Branch(branch.label, branch.var_name, substitute(j, s, branch.body, cutoff + 1))
                    for label, branch in branches.items()
                },
            )
        case Fix(inner):
            return Fix(substitute(j, s, inner, cutoff))
        case Unit() | TrueLit() | FalseLit() | Zero():
            return term
        case _:
            raise ValueError(f"Unknown term type: {type(term)}")


def term_subst_top(s: Term, term: Term) -> Term:
    """Substitute ``s`` for the outermost bound variable of ``term`` and drop the binder.

    ``term`` is a binder body (index 0 is the bound variable) and ``s`` lives
    in the context outside that binder.
    """
    return shift(-1, 0, substitute(0, shift(1, 0, s), term, 0))
