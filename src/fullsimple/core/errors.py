"""Error types for the FullSimple checker and evaluator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fullsimple.core.ast import Term


class TypeError(Exception):
    """The single kind of type error, carrying a descriptive message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def combined(cls, summary: str, failures: list[str]) -> "TypeError":
        """Build one error out of several collected sub-failures."""
        if not failures:
            return cls(summary)
        details = "\n".join(f"  - {failure}" for failure in failures)
        return cls(f"{summary}\n{details}")


class EvaluationError(RuntimeError):
    """Base class for evaluation faults."""


class StuckError(EvaluationError):
    """A term is in normal form but is not a value.

    Only reachable with open or ill-typed input; well-typed closed terms
    always make progress.
    """

    def __init__(self, term: "Term"):
        self.term = term
        super().__init__(f"Evaluation is stuck at {term}")


class StepLimitExceeded(EvaluationError):
    """The configured reduction budget ran out before a value was reached."""

    def __init__(self, limit: int, term: "Term"):
        self.limit = limit
        self.term = term
        super().__init__(f"No value after {limit} reduction steps")
