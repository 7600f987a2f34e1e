"""
Multi-fraction answer checker.

Order-dependent sequence of fractions (expand to a common denominator, order
from smallest to largest). Correct only when every element has the expected
value at the same position; there is no partial credit.
"""

from __future__ import annotations

import re
from collections import Counter

from src.arithmetic.normalizer import equals_as_number
from src.core.fraction import Fraction
from src.core.problem import AnswerKind, Problem

from . import register
from .base import MistakeKind, ValidationResult, normalize_fraction

_SEPARATOR = re.compile(r"[,;]")


@register(AnswerKind.FRACTION_SEQUENCE)
class MultiFractionChecker:
    """Checker for ordered fraction sequences."""

    def parse(self, text: str) -> tuple[Fraction, ...]:
        """Parse a comma- or semicolon-separated list of fractions."""
        parts = [part.strip() for part in _SEPARATOR.split(text)]
        if not any(parts) or not all(parts):
            raise ValueError(f"Not a list of fractions: {text!r}")
        return tuple(Fraction.parse(part) for part in parts)

    def check(self, problem: Problem, answer: tuple[Fraction, ...]) -> ValidationResult:
        """Element-wise numeric comparison in expected order."""
        expected = tuple(normalize_fraction(f) for f in problem.expected_answer)
        normalized = tuple(normalize_fraction(f) for f in answer)

        if len(normalized) != len(expected):
            mistake: MistakeKind | None = MistakeKind.INTERPRETATION
        elif all(equals_as_number(u, e) for u, e in zip(normalized, expected)):
            mistake = None
        elif Counter(normalized) == Counter(expected):
            # Same values, wrong positions
            mistake = MistakeKind.ORDER
        else:
            mistake = MistakeKind.CALCULATION

        return ValidationResult(
            is_correct=mistake is None,
            mistake_kind=mistake,
            normalized_user_answer=normalized,
            normalized_expected_answer=expected,
        )
