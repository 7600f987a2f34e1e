"""
Answer validation entry point.
"""

from __future__ import annotations

from typing import Any

from src.core.problem import ComparisonSymbol, Problem, answer_kind_of

from . import get_checker
from .base import MistakeKind, ValidationResult, normalize_answer


def _misread(problem: Problem, normalized_user_answer: Any = None) -> ValidationResult:
    return ValidationResult(
        is_correct=False,
        mistake_kind=MistakeKind.INTERPRETATION,
        normalized_user_answer=normalized_user_answer,
        normalized_expected_answer=normalize_answer(problem.expected_answer),
    )


def validate(problem: Problem, user_answer: Any) -> ValidationResult:
    """
    Check a learner's answer against a problem.

    Pure: no logging, no state. Wrong answers are results, never exceptions.

    Args:
        problem: The problem being answered
        user_answer: A Fraction, a sequence of Fractions, a ComparisonSymbol,
            or the raw text the learner typed

    Returns:
        ValidationResult with the mistake classified when incorrect. Text that
        cannot be parsed, and answers of the wrong shape, are interpretation
        mistakes.
    """
    checker = get_checker(problem.answer_kind)

    if isinstance(user_answer, str) and not isinstance(user_answer, ComparisonSymbol):
        try:
            user_answer = checker.parse(user_answer)
        except ValueError:
            return _misread(problem)

    if isinstance(user_answer, list):
        user_answer = tuple(user_answer)

    kind = answer_kind_of(user_answer)
    if kind is not problem.answer_kind:
        return _misread(problem, normalize_answer(user_answer) if kind else None)

    return checker.check(problem, user_answer)
