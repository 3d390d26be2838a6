"""Interpreter and operational semantics."""

from fullsimple.eval.machine import Evaluator, NoRuleApplies, evaluate
from fullsimple.eval.pattern import MatchResult, PatternMatcher
from fullsimple.eval.value import is_numeric_value, is_value

__all__ = [
    "Evaluator",
    "NoRuleApplies",
    "evaluate",
    "MatchResult",
    "PatternMatcher",
    "is_numeric_value",
    "is_value",
]
