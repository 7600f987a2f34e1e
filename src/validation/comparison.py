"""
Comparison answer checker.

Exact symbol match; a wrong symbol is not sub-classified.
"""

from __future__ import annotations

from src.core.problem import AnswerKind, ComparisonSymbol, Problem

from . import register
from .base import ValidationResult


@register(AnswerKind.COMPARISON)
class ComparisonChecker:
    """Checker for "<", "=" or ">" answers."""

    def parse(self, text: str) -> ComparisonSymbol:
        return ComparisonSymbol.parse(text)

    def check(self, problem: Problem, answer: ComparisonSymbol) -> ValidationResult:
        return ValidationResult(
            is_correct=answer is problem.expected_answer,
            mistake_kind=None,
            normalized_user_answer=answer,
            normalized_expected_answer=problem.expected_answer,
        )
