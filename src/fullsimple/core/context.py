"""Typing and naming contexts for FullSimple."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fullsimple.core.ast import Pattern, Var
from fullsimple.core.types import Type

if TYPE_CHECKING:
    from fullsimple.core.script import NamedTerm


@dataclass(frozen=True)
class Context:
    """Typing context Γ.

    - term_vars: de Bruijn index -> type of the variable (index 0 = most recent)
    - aliases: named type aliases, resolved before any structural comparison
    - named_terms: top-level ``name = term`` bindings, in definition order

    Contexts are never updated in place; every extension returns a new one.
    """

    term_vars: Mapping[int, Type] = field(default_factory=dict)
    aliases: Mapping[str, Type] = field(default_factory=dict)
    named_terms: tuple["NamedTerm", ...] = ()

    @staticmethod
    def empty() -> "Context":
        """Create an empty context."""
        return Context()

    def lookup_type(self, index: int) -> Type:
        """Look up the type of a variable by de Bruijn index.

        Raises:
            IndexError: If no variable is bound at ``index``
        """
        if index not in self.term_vars:
            raise IndexError(f"Variable index {index} is not bound in context with {len(self)} variables")
        return self.term_vars[index]

    def extend_term(self, ty: Type) -> "Context":
        """Bind a new variable at index 0, shifting existing indices up by 1."""
        return self.extend_pattern([ty])

    def extend_pattern(self, types: list[Type]) -> "Context":
        """Bind ``types[i]`` at index ``i``, shifting existing indices up by ``len(types)``."""
        shifted = {index + len(types): ty for index, ty in self.term_vars.items()}
        shifted.update(enumerate(types))
        return Context(shifted, self.aliases, self.named_terms)

    def with_aliases(self, aliases: Mapping[str, Type]) -> "Context":
        merged = dict(self.aliases)
        merged.update(aliases)
        return Context(self.term_vars, merged, self.named_terms)

    def with_named_terms(self, named_terms: tuple["NamedTerm", ...]) -> "Context":
        return Context(self.term_vars, self.aliases, tuple(named_terms))

    def without_named_terms(self) -> "Context":
        return Context(self.term_vars, self.aliases, ())

    def __len__(self) -> int:
        """Return the number of term variables in context."""
        return len(self.term_vars)

    def __str__(self) -> str:
        terms = ", ".join(f"x{i}:{t}" for i, t in sorted(self.term_vars.items()))
        aliases = ", ".join(f"{name}={t}" for name, t in self.aliases.items())
        return f"Context(terms=[{terms}], aliases=[{aliases}])"


@dataclass(frozen=True)
class NamingContext:
    """Name -> de Bruijn index map maintained while terms are built.

    Binding a name makes it index 0 and moves every other name one step
    out; a shadowed name disappears until the inner scope is dropped by
    going back to the previous (unchanged) context.
    """

    names: tuple[str, ...] = ()

    def bind(self, name: str) -> "NamingContext":
        return NamingContext((name,) + self.names)

    def bind_pattern(self, pattern: Pattern) -> "NamingContext":
        """Bind every pattern variable, variables[i] at index i."""
        return NamingContext(tuple(pattern.variables) + self.names)

    def index_of(self, name: str) -> int:
        """Index of the innermost binding of ``name``.

        Raises:
            KeyError: If ``name`` is not bound
        """
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(name) from None

    def var(self, name: str) -> Var:
        """Variable reference to ``name`` as seen from this scope."""
        return Var(self.index_of(name), name)

    def name_of(self, index: int) -> str:
        if index < 0 or index >= len(self.names):
            raise IndexError(f"Variable index {index} out of bounds in naming context of {len(self.names)}")
        return self.names[index]

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)
