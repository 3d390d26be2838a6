"""Structural type checker for FullSimple."""

from __future__ import annotations

from loguru import logger

from fullsimple.config.settings import Settings
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
    Pattern,
    PRecord,
    Pred,
    PVar,
    Succ,
    Tag,
    Term,
    TrueLit,
    Tuple,
    Unit,
    Var,
    Zero,
)
from fullsimple.core.context import Context
from fullsimple.core.errors import TypeError
from fullsimple.core.script import Script
from fullsimple.core.types import BOOL, INT, UNIT, Type, TypeArrow, TypeProduct, TypeSum


class TypeChecker:
    """Structural type checker with alias resolution.

    Every type returned by ``infer`` is alias-resolved, so callers can
    compare results with ``==`` directly.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings if settings is not None else Settings()

    def real(self, ctx: Context, ty: Type) -> Type:
        """Resolve the named aliases of ``ctx`` inside ``ty``."""
        return ty.resolve(ctx.aliases, detect_cycles=self.settings.detect_alias_cycles)

    def infer(self, ctx: Context, term: Term) -> Type:
        """Compute the type of ``term`` under ``ctx``.

        Raises:
            TypeError: If the term is ill-typed
        """
        match term:
            case Var(index, name):
                try:
                    return self.real(ctx, ctx.lookup_type(index))
                except IndexError as e:
                    raise TypeError(f"Could not find variable {name} (index {index}) in {ctx}") from e

            case Abs(_, var_type, body):
                body_type = self.infer(ctx.extend_term(var_type), body)
                return TypeArrow(self.real(ctx, var_type), body_type)

            case App(func, arg):
                return self._infer_app(ctx, func, arg)

            case Unit():
                return UNIT

            case TrueLit() | FalseLit():
                return BOOL

            case If(cond, then, else_):
                cond_type = self.infer(ctx, cond)
                if cond_type != BOOL:
                    raise TypeError(f"Incorrect type of conditional: {cond_type}")
                then_type = self.infer(ctx, then)
                else_type = self.infer(ctx, else_)
                if then_type != else_type:
                    raise TypeError(f"Type of if branches don't match: {then_type}, {else_type}")
                return then_type

            case Zero():
                return INT

            case IsZero(inner):
                self._expect_int(ctx, inner, "isZero")
                return BOOL

            case Succ(inner):
                self._expect_int(ctx, inner, "succ")
                return INT

            case Pred(inner):
                self._expect_int(ctx, inner, "pred")
                return INT

            case Tuple(fields):
                return self._infer_tuple(ctx, fields)

            case Let(pattern, value, body):
                try:
                    value_type = self.infer(ctx, value)
                except TypeError as e:
                    raise TypeError(f"Couldn't typecheck let argument {value}\n{e}") from e
                bound = self.bind_pattern(ctx, pattern, value_type)
                return self.infer(ctx.extend_pattern(bound), body)

            case Tag(label, payload, ascribed_type):
                return self._infer_tag(ctx, label, payload, ascribed_type)

            case Case(scrutinee, branches):
                return self._infer_case(ctx, scrutinee, branches)

            case Fix(inner):
                inner_type = self.infer(ctx, inner)
                match inner_type:
                    case TypeArrow(arg_type, ret_type) if arg_type == ret_type:
                        return ret_type
                    case _:
                        raise TypeError(f"fix expects a function of type T -> T, got {inner_type}")

            case _:
                raise ValueError(f"Unknown term type: {type(term)}")

    def bind_pattern(self, ctx: Context, pattern: Pattern, ty: Type) -> list[Type]:
        """Types bound by ``pattern`` when matched against a value of type ``ty``.

        The result is parallel to ``pattern.variables``.
        """
        match pattern:
            case PVar():
                return [self.real(ctx, ty)]
            case PRecord(fields):
                resolved = self.real(ctx, ty)
                if not isinstance(resolved, TypeProduct):
                    raise TypeError(f"Incorrect pattern types {pattern}, {resolved}: not a record type")
                bound: list[Type] = []
                failures: list[str] = []
                for label, sub_pattern in fields.items():
                    if label not in resolved.fields:
                        failures.append(f"label {label} is not in {resolved}")
                        continue
                    try:
                        bound.extend(self.bind_pattern(ctx, sub_pattern, resolved.fields[label]))
                    except TypeError as e:
                        failures.append(str(e))
                if failures:
                    raise TypeError.combined(f"Incorrect pattern types {pattern}, {resolved}", failures)
                return bound
            case _:
                raise ValueError(f"Unknown pattern type: {type(pattern)}")

    def desugar_script(self, ctx: Context, script: Script) -> Term:
        """Turn a script into one term, typing each named term first."""
        return script.desugar(self, ctx)

    def _expect_int(self, ctx: Context, term: Term, operator: str) -> None:
        ty = self.infer(ctx, term)
        if ty != INT:
            raise TypeError(f"{operator} called on non-integer term {term} : {ty}")

    def _infer_app(self, ctx: Context, func: Term, arg: Term) -> Type:
        try:
            func_type = self.infer(ctx, func)
        except TypeError as e:
            raise TypeError(f"Could not type function {func}\n{e}") from e
        try:
            arg_type = self.infer(ctx, arg)
        except TypeError as e:
            raise TypeError(f"Could not type argument {arg}\n{e}") from e

        match func_type:
            case TypeArrow(param_type, ret_type):
                if param_type != arg_type:
                    raise TypeError(
                        f"Incorrect application types, function expects {param_type}, "
                        f"argument {arg} has type {arg_type}"
                    )
                return ret_type
            case _:
                raise TypeError(f"Incorrect application, {func} : {func_type} is not a function")

    def _infer_tuple(self, ctx: Context, fields: dict[str, Term]) -> Type:
        types: dict[str, Type] = {}
        failures: list[str] = []
        for label, field in fields.items():
            try:
                types[label] = self.infer(ctx, field)
            except TypeError as e:
                failures.append(f"{label}: {e}")
        if failures:
            raise TypeError.combined("Tuple contents has incorrect type.", failures)
        return TypeProduct(types)

    def _infer_tag(self, ctx: Context, label: str, payload: Term, ascribed_type: Type) -> Type:
        sum_type = self.real(ctx, ascribed_type)
        if not isinstance(sum_type, TypeSum):
            raise TypeError(f"Couldn't typecheck tag <{label}>: {sum_type} is not a variant type")
        if label not in sum_type.variants:
            raise TypeError(f"Couldn't typecheck tag: label {label} is not in {sum_type}")
        payload_type = self.infer(ctx, payload)
        expected = sum_type.variants[label]
        if payload_type != expected:
            raise TypeError(f"Couldn't typecheck tag <{label}>: expected {expected}, got {payload_type}")
        return sum_type

    def _infer_case(self, ctx: Context, scrutinee: Term, branches: dict[str, Branch]) -> Type:
        scrut_type = self.infer(ctx, scrutinee)
        if not isinstance(scrut_type, TypeSum):
            raise TypeError(f"Couldn't typecheck case: {scrutinee} : {scrut_type} is not a variant")

        branch_types: dict[str, Type] = {}
        failures: list[str] = []
        for label, payload_type in scrut_type.variants.items():
            if label not in branches:
                failures.append(f"missing branch for <{label}>")
                continue
            try:
                branch_types[label] = self.infer(ctx.extend_term(payload_type), branches[label].body)
            except TypeError as e:
                failures.append(f"<{label}>: {e}")
        for label in branches:
            if label not in scrut_type.variants:
                failures.append(f"branch <{label}> is not a label of {scrut_type}")
        if failures:
            raise TypeError.combined("Couldn't typecheck case.", failures)

        if not branch_types:
            raise TypeError(f"Couldn't typecheck case: {scrut_type} has no variants")
        result_type = next(iter(branch_types.values()))
        if any(ty != result_type for ty in branch_types.values()):
            found = ", ".join(f"<{label}>: {ty}" for label, ty in branch_types.items())
            raise TypeError(f"Couldn't typecheck case, branch types don't match: {found}")
        return result_type


def type_of(term: Term, ctx: Context | None = None, settings: Settings | None = None) -> Type:
    """Type of ``term`` under ``ctx``.

    Named terms in ``ctx`` are first folded around ``term`` as a script.

    Raises:
        TypeError: If the term is ill-typed
    """
    if ctx is None:
        ctx = Context.empty()
    checker = TypeChecker(settings)
    try:
        if ctx.named_terms:
            term = checker.desugar_script(ctx.without_named_terms(), Script(ctx.named_terms, term))
            ctx = ctx.without_named_terms()
        return checker.infer(ctx, term)
    except TypeError as e:
        logger.debug("typecheck.failed term={} error={}", term, e.message)
        raise
