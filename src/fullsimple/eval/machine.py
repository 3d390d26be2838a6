"""Small-step call-by-value evaluator for the FullSimple core language."""

from __future__ import annotations

import itertools

from loguru import logger

from fullsimple.config.settings import Settings
from fullsimple.core.ast import (
    Abs,
    App,
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
    Zero,
)
from fullsimple.core.checker import TypeChecker
from fullsimple.core.context import Context
from fullsimple.core.errors import StepLimitExceeded, StuckError
from fullsimple.core.script import Script
from fullsimple.core.shift import shift, term_subst_top
from fullsimple.eval.pattern import PatternMatcher
from fullsimple.eval.value import is_numeric_value, is_value


class NoRuleApplies(Exception):
    """Raised by ``Evaluator.step`` when the term is in normal form."""


class Evaluator:
    """Call-by-value evaluator working directly on terms.

    Variables are never looked up: every binder is eliminated by
    substitution, so no environment or names are needed at runtime.
    Types are carried along untouched.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.pattern_matcher = PatternMatcher()

    def step(self, term: Term) -> Term:
        """Perform one reduction of the leftmost-outermost redex.

        Raises:
            NoRuleApplies: If ``term`` is a value or stuck
        """
        match term:
            case App(Abs(_, _, body), arg) if is_value(arg):
                return term_subst_top(arg, body)
            case App(func, arg) if is_value(func):
                return App(func, self.step(arg))
            case App(func, arg):
                return App(self.step(func), arg)

            case If(TrueLit(), then, _):
                return then
            case If(FalseLit(), _, else_):
                return else_
            case If(cond, then, else_):
                return If(self.step(cond), then, else_)

            case Succ(inner):
                return Succ(self.step(inner))
            case Pred(Zero()):
                return Zero()
            case Pred(Succ(inner)) if is_numeric_value(inner):
                return inner
            case Pred(inner):
                return Pred(self.step(inner))
            case IsZero(Zero()):
                return TrueLit()
            case IsZero(Succ(inner)) if is_numeric_value(inner):
                return FalseLit()
            case IsZero(inner):
                return IsZero(self.step(inner))

            case Tuple(fields):
                for label, field in fields.items():
                    if not is_value(field):
                        stepped = dict(fields)
                        stepped[label] = self.step(field)
                        return Tuple(stepped)
                raise NoRuleApplies(term)

            case Let(pattern, value, body) if is_value(value):
                values = self.pattern_matcher.match(pattern, value).values()
                # variables[0] is the innermost binder; strip binders inside out
                remaining = len(values)
                result = body
                for bound in values:
                    remaining -= 1
                    result = term_subst_top(shift(remaining, 0, bound), result)
                return result
            case Let(pattern, value, body):
                return Let(pattern, self.step(value), body)

            case Tag(label, payload, ascribed_type):
                return Tag(label, self.step(payload), ascribed_type)

            case Case(Tag(label, payload, _) as scrutinee, branches) if is_value(scrutinee):
                if label not in branches:
                    raise NoRuleApplies(term)
                return term_subst_top(payload, branches[label].body)
            case Case(scrutinee, branches):
                return Case(self.step(scrutinee), branches)

            case Fix(Abs(_, _, body)):
                return term_subst_top(term, body)
            case Fix(inner):
                return Fix(self.step(inner))

            case _:
                raise NoRuleApplies(term)

    def evaluate(self, term: Term) -> Term:
        """Reduce ``term`` until it is a value.

        Raises:
            StuckError: If a normal form that is not a value is reached
            StepLimitExceeded: If ``settings.max_steps`` reductions were not enough
        """
        limit = self.settings.max_steps
        trace = self.settings.trace_steps
        logger.debug("eval.start term={}", term)
        for steps in itertools.count():
            if is_value(term):
                logger.debug("eval.done steps={} value={}", steps, term)
                return term
            if limit is not None and steps >= limit:
                raise StepLimitExceeded(limit, term)
            try:
                term = self.step(term)
            except NoRuleApplies:
                raise StuckError(term) from None
            if trace:
                logger.trace("eval.step n={} term={}", steps + 1, term)


def evaluate(term: Term, ctx: Context | None = None, settings: Settings | None = None) -> Term:
    """Evaluate a closed, well-typed term to a value.

    Named terms in ``ctx`` are folded around ``term`` as a script first.
    """
    if ctx is not None and ctx.named_terms:
        checker = TypeChecker(settings)
        term = checker.desugar_script(ctx.without_named_terms(), Script(ctx.named_terms, term))
    return Evaluator(settings).evaluate(term)
