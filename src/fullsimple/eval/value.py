"""Value forms of the call-by-value semantics."""

from __future__ import annotations

from fullsimple.core.ast import Abs, FalseLit, Succ, Tag, Term, TrueLit, Tuple, Unit, Zero


def is_numeric_value(term: Term) -> bool:
    """Zero, or succ of a numeric value."""
    while isinstance(term, Succ):
        term = term.term
    return isinstance(term, Zero)


def is_value(term: Term) -> bool:
    """Whether ``term`` is fully evaluated.

    Values: abstractions, unit, booleans, numerals, tuples of values and
    tags carrying a value.
    """
    match term:
        case Abs() | Unit() | TrueLit() | FalseLit():
            return True
        case Tuple(fields):
            return all(is_value(field) for field in fields.values())
        case Tag(_, payload, _):
            return is_value(payload)
        case _:
            return is_numeric_value(term)
