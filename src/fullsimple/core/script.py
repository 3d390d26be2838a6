"""Top-level scripts: a sequence of named terms followed by a body.

``x = 0; y = succ x; y`` is a script with two named terms. Each named term
sees the ones before it (the most recent at index 0), and so does the body.
It desugars to nested applications::

    (\\x:int.(\\y:int.y) (succ x)) 0

where each parameter type is inferred from its term before the next one is
checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fullsimple.core.ast import Abs, App, Term
from fullsimple.core.context import Context, NamingContext
from fullsimple.core.errors import TypeError
from fullsimple.core.types import Type

if TYPE_CHECKING:
    from fullsimple.core.checker import TypeChecker


@dataclass(frozen=True)
class NamedTerm:
    """Top-level binding ``name = term``."""

    name: str
    term: Term

    def __str__(self) -> str:
        return f"{self.name} = {self.term}"


@dataclass(frozen=True)
class Script:
    bindings: tuple[NamedTerm, ...]
    body: Term

    def naming(self, outer: NamingContext | None = None) -> NamingContext:
        """Names visible to the body."""
        naming = outer if outer is not None else NamingContext()
        for binding in self.bindings:
            naming = naming.bind(binding.name)
        return naming

    def binding_types(self, checker: "TypeChecker", ctx: Context) -> list[Type]:
        """Infer each named term's type under the ones defined before it."""
        types: list[Type] = []
        for binding in self.bindings:
            try:
                ty = checker.infer(ctx, binding.term)
            except TypeError as e:
                raise TypeError(f"Could not type named term {binding.name}\n{e}") from e
            types.append(ty)
            ctx = ctx.extend_term(ty)
        return types

    def desugar(self, checker: "TypeChecker", ctx: Context) -> Term:
        """Fold the named terms around the body as applied abstractions."""
        types = self.binding_types(checker, ctx)
        result = self.body
        for binding, ty in reversed(list(zip(self.bindings, types))):
            result = App(Abs(binding.name, ty, result), binding.term)
        return result

    def __str__(self) -> str:
        return "".join(f"{binding}; " for binding in self.bindings) + str(self.body)
