"""Core language AST for FullSimple."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from fullsimple.core.types import Type


class Term:
    """Base class for terms."""

    pass


@dataclass(frozen=True)
class Var(Term):
    """Variable reference using de Bruijn index.

    Index 0 refers to the nearest binder, 1 to the next, etc.
    Example: λx.λy.x  =>  Abs(_, Abs(_, Var(1)))

    The name is kept for printing only.
    """

    index: int
    name: str = "x"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Abs(Term):
    """Lambda abstraction: λ(x:σ).t

    var_type is the type annotation for the bound variable.
    """

    name: str
    var_type: Type
    body: Term

    def __str__(self) -> str:
        return f"\\{self.name}:{self.var_type}.{self.body}"


@dataclass(frozen=True)
class App(Term):
    """Function application: f arg."""

    func: Term
    arg: Term

    def __str__(self) -> str:
        return f"({self.func} {self.arg})"


@dataclass(frozen=True)
class Unit(Term):
    def __str__(self) -> str:
        return "unit"


@dataclass(frozen=True)
class TrueLit(Term):
    def __str__(self) -> str:
        return "true"


@dataclass(frozen=True)
class FalseLit(Term):
    def __str__(self) -> str:
        return "false"


@dataclass(frozen=True)
class If(Term):
    """Conditional: if cond then then_ else else_."""

    cond: Term
    then: Term
    else_: Term

    def __str__(self) -> str:
        return f"if {self.cond} then {self.then} else {self.else_}"


@dataclass(frozen=True)
class Zero(Term):
    def __str__(self) -> str:
        return "0"


@dataclass(frozen=True)
class Succ(Term):
    term: Term

    def __str__(self) -> str:
        count = 1
        inner = self.term
        while isinstance(inner, Succ):
            count += 1
            inner = inner.term
        if isinstance(inner, Zero):
            return str(count)
        return f"succ({self.term})"


@dataclass(frozen=True)
class Pred(Term):
    term: Term

    def __str__(self) -> str:
        return f"pred({self.term})"


@dataclass(frozen=True)
class IsZero(Term):
    term: Term

    def __str__(self) -> str:
        return f"isZero({self.term})"


@dataclass(frozen=True)
class Tuple(Term):
    """Record of labelled terms: {l1=t1, ..., ln=tn}.

    Unlabelled components get their position as label, starting at "0".
    """

    fields: dict[str, Term]

    @staticmethod
    def of(*terms: Term) -> "Tuple":
        """Build a tuple with positional labels."""
        return Tuple({str(i): term for i, term in enumerate(terms)})

    def __str__(self) -> str:
        return "{" + ", ".join(f"{label}={term}" for label, term in self.fields.items()) + "}"


class Pattern:
    """Left-hand side of a let binding."""

    @property
    def length(self) -> int:
        """Number of variables the pattern binds."""
        raise NotImplementedError

    @property
    def variables(self) -> list[str]:
        """Bound names in binding order; variables[i] is index i in the let body."""
        raise NotImplementedError


@dataclass(frozen=True)
class PVar(Pattern):
    name: str

    @property
    def length(self) -> int:
        return 1

    @property
    def variables(self) -> list[str]:
        return [self.name]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PRecord(Pattern):
    """Record pattern {l1=p1, ..., ln=pn}, destructuring a tuple."""

    fields: dict[str, Pattern]

    @staticmethod
    def of(*patterns: Pattern) -> "PRecord":
        """Build a record pattern with positional labels."""
        return PRecord({str(i): pattern for i, pattern in enumerate(patterns)})

    @property
    def length(self) -> int:
        return sum(pattern.length for pattern in self.fields.values())

    @property
    def variables(self) -> list[str]:
        return [name for pattern in self.fields.values() for name in pattern.variables]

    def __str__(self) -> str:
        return "{" + ", ".join(f"{label}={pattern}" for label, pattern in self.fields.items()) + "}"


@dataclass(frozen=True)
class Let(Term):
    """Pattern let binding: let pattern = value in body.

    The body sees pattern.length new binders, pattern.variables[0] at index 0.
    """

    pattern: Pattern
    value: Term
    body: Term

    def __str__(self) -> str:
        return f"let {self.pattern} = {self.value} in {self.body}"


@dataclass(frozen=True)
class Tag(Term):
    """Variant injection: <label=payload> as ascribed_type."""

    label: str
    payload: Term
    ascribed_type: Type

    def __str__(self) -> str:
        return f"<{self.label}={self.payload}> as {self.ascribed_type}"


@dataclass(frozen=True)
class Branch:
    """Case branch: <label=var_name> => body.

    var_name is for debugging only (de Bruijn index 0 in body).
    """

    label: str
    var_name: str
    body: Term

    def __str__(self) -> str:
        return f"<{self.label}={self.var_name}> => {self.body}"


@dataclass(frozen=True)
class Case(Term):
    """Variant analysis: case scrutinee of branches, keyed by label."""

    scrutinee: Term
    branches: dict[str, Branch]

    @staticmethod
    def of(scrutinee: Term, *branches: Branch) -> "Case":
        return Case(scrutinee, {branch.label: branch for branch in branches})

    def __str__(self) -> str:
        branches_str = " | ".join(str(branch) for branch in self.branches.values())
        return f"case {self.scrutinee} of {branches_str}"


@dataclass(frozen=True)
class Fix(Term):
    """Fixed point of a function: fix t."""

    term: Term

    def __str__(self) -> str:
        return f"fix {self.term}"


# Export the term union for type checking
TermRepr = Union[
    Var, Abs, App, Unit, TrueLit, FalseLit, If, Zero, Succ, Pred, IsZero, Tuple, Let, Tag, Case, Fix
]
