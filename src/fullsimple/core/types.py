"""Type representations for FullSimple."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

from fullsimple.core.errors import TypeError


class Type:
    """Base class for types."""

    def resolve(self, aliases: Mapping[str, Type], *, detect_cycles: bool = True) -> Type:
        """Replace every aliased base type with its definition.

        Compound types resolve through their components. A base type with
        no entry in ``aliases`` is left as is.
        """
        return self._resolve(aliases, frozenset() if detect_cycles else None)

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        raise NotImplementedError


@dataclass(frozen=True)
class TypeArrow(Type):
    """Function type: σ -> τ."""

    arg: Type
    ret: Type

    def __str__(self) -> str:
        match self.arg:
            case TypeArrow():
                arg_str = f"({self.arg})"
            case _:
                arg_str = str(self.arg)
        return f"{arg_str} -> {self.ret}"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return TypeArrow(self.arg._resolve(aliases, seen), self.ret._resolve(aliases, seen))


@dataclass(frozen=True)
class TypeBool(Type):
    def __str__(self) -> str:
        return "bool"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return self


@dataclass(frozen=True)
class TypeInt(Type):
    """Natural numbers built from zero and succ."""

    def __str__(self) -> str:
        return "int"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return self


@dataclass(frozen=True)
class TypeUnit(Type):
    def __str__(self) -> str:
        return "unit"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return self


@dataclass(frozen=True)
class TypeBase(Type):
    """Named type: either an alias or an uninterpreted base type.

    Names with an entry in the alias table are replaced by their definition
    during resolution; any other name stays opaque and only equals itself.
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        if self.name not in aliases:
            return self
        if seen is not None:
            if self.name in seen:
                raise TypeError(f"Cyclic type alias: {self.name}")
            seen = seen | {self.name}
        return aliases[self.name]._resolve(aliases, seen)


@dataclass(frozen=True)
class TypeProduct(Type):
    """Record type {l1:T1, ..., ln:Tn}; label order is irrelevant to equality."""

    fields: dict[str, Type]

    def __str__(self) -> str:
        return "{" + ", ".join(f"{label}:{ty}" for label, ty in self.fields.items()) + "}"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return TypeProduct({label: ty._resolve(aliases, seen) for label, ty in self.fields.items()})


@dataclass(frozen=True)
class TypeSum(Type):
    """Variant type <l1:T1, ..., ln:Tn>."""

    variants: dict[str, Type]

    def __str__(self) -> str:
        return "<" + ", ".join(f"{label}:{ty}" for label, ty in self.variants.items()) + ">"

    def _resolve(self, aliases: Mapping[str, Type], seen: frozenset[str] | None) -> Type:
        return TypeSum({label: ty._resolve(aliases, seen) for label, ty in self.variants.items()})


BOOL = TypeBool()
INT = TypeInt()
UNIT = TypeUnit()


# Export the type union for type checking
TypeRepr = Union[TypeArrow, TypeBool, TypeInt, TypeUnit, TypeBase, TypeProduct, TypeSum]
