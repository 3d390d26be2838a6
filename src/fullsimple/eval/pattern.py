"""Pattern matching implementation for the FullSimple evaluator."""

from dataclasses import dataclass

from fullsimple.core.ast import Pattern, PRecord, PVar, Term, Tuple


@dataclass(frozen=True)
class MatchResult:
    """Result of pattern matching."""

    bindings: list[tuple[str, Term]]  # (name, value) in pattern.variables order

    def values(self) -> list[Term]:
        return [value for _, value in self.bindings]


class PatternMatcher:
    """Pattern matching implementation.

    Let patterns are irrefutable once the program type checks, so matching
    never fails on well-typed input.
    """

    def match(self, pattern: Pattern, argument: Term) -> MatchResult:
        """Destructure ``argument`` against ``pattern``.

        Bindings follow the pattern's declaration order, not the order of
        the tuple's fields.
        """
        match (pattern, argument):
            case (PVar(name), _):
                return MatchResult([(name, argument)])
            case (PRecord(fields), Tuple(values)):
                bindings: list[tuple[str, Term]] = []
                for label, sub_pattern in fields.items():
                    bindings.extend(self.match(sub_pattern, values[label]).bindings)
                return MatchResult(bindings)
            case _:
                # Shouldn't happen if type checking passed
                raise RuntimeError(f"Cannot match {argument} against pattern {pattern}")
