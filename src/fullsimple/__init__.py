"""FullSimple: an extended simply-typed lambda calculus.

Typical use::

    from fullsimple import evaluate, type_of

    ty = type_of(term)       # raises fullsimple.TypeError when ill-typed
    value = evaluate(term)
"""

from fullsimple.core import *  # noqa: F403
from fullsimple.core import __all__ as _core_all
from fullsimple.eval import Evaluator, evaluate, is_value

__all__ = [*_core_all, "Evaluator", "evaluate", "is_value"]
