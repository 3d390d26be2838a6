"""Core language: AST, types, substitution, and type checker."""

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
from fullsimple.core.checker import TypeChecker, type_of
from fullsimple.core.context import Context, NamingContext
from fullsimple.core.errors import EvaluationError, StepLimitExceeded, StuckError, TypeError
from fullsimple.core.script import NamedTerm, Script
from fullsimple.core.shift import shift, substitute, term_subst_top
from fullsimple.core.types import (
    BOOL,
    INT,
    UNIT,
    Type,
    TypeArrow,
    TypeBase,
    TypeBool,
    TypeInt,
    TypeProduct,
    TypeSum,
    TypeUnit,
)

__all__ = [
    # AST
    "Term",
    "Var",
    "Abs",
    "App",
    "Unit",
    "TrueLit",
    "FalseLit",
    "If",
    "Zero",
    "Succ",
    "Pred",
    "IsZero",
    "Tuple",
    "Let",
    "Tag",
    "Case",
    "Branch",
    "Fix",
    "Pattern",
    "PVar",
    "PRecord",
    # Types
    "Type",
    "TypeArrow",
    "TypeBool",
    "TypeInt",
    "TypeUnit",
    "TypeBase",
    "TypeProduct",
    "TypeSum",
    "BOOL",
    "INT",
    "UNIT",
    # Substitution
    "shift",
    "substitute",
    "term_subst_top",
    # Context
    "Context",
    "NamingContext",
    # Scripts
    "NamedTerm",
    "Script",
    # Errors
    "TypeError",
    "EvaluationError",
    "StuckError",
    "StepLimitExceeded",
    # Type Checker
    "TypeChecker",
    "type_of",
]
