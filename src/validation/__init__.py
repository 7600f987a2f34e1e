"""
Answer Validator.

One checker per answer kind, each with:
- parse(): Turn a typed answer into a value of that kind
- check(): Decide correctness and classify the mistake

validate() is the entry point: it picks the checker for the problem's answer
kind, parses text answers and rejects answers of the wrong shape before the
checker sees them.
"""

from typing import TYPE_CHECKING

from src.core.problem import AnswerKind

if TYPE_CHECKING:
    from .base import AnswerChecker


# Checker registry - populated by @register decorator
CHECKERS: dict[AnswerKind, "AnswerChecker"] = {}


def register(answer_kind: AnswerKind):
    """Decorator to register an answer checker."""
    def decorator(cls):
        CHECKERS[answer_kind] = cls()
        return cls
    return decorator


def get_checker(answer_kind: str | AnswerKind) -> "AnswerChecker | None":
    """Get the checker for an answer kind."""
    if isinstance(answer_kind, str) and not isinstance(answer_kind, AnswerKind):
        try:
            answer_kind = AnswerKind(answer_kind.lower())
        except ValueError:
            return None
    return CHECKERS.get(answer_kind)


# Import checkers to trigger registration
from . import numeric
from . import multi_fraction
from . import comparison

from .base import MistakeKind, ValidationResult, normalize_answer, normalize_fraction
from .feedback import Feedback, feedback_for
from .validator import validate

__all__ = [
    "CHECKERS",
    "get_checker",
    "register",
    "MistakeKind",
    "ValidationResult",
    "normalize_answer",
    "normalize_fraction",
    "validate",
    "Feedback",
    "feedback_for",
]
