"""
Base protocol and types for answer checkers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union

from src.arithmetic.normalizer import reduce, to_improper
from src.core.fraction import Fraction
from src.core.problem import ComparisonSymbol, ExpectedAnswer, Problem


class MistakeKind(str, Enum):
    """Classified reason an answer was wrong."""

    COMMON_DENOMINATOR = "commonDenominator"  # combined without a common denominator
    SIMPLIFICATION = "simplification"  # right value, not reduced
    CALCULATION = "calculation"
    CONCEPTUAL = "conceptual"
    CONVERSION = "conversion"  # mixed/improper form mix-up
    SIGN = "sign"
    ORDER = "order"  # right values, wrong sequence
    INTERPRETATION = "interpretation"  # answered a different question

    @property
    def display_name(self) -> str:
        return {
            MistakeKind.COMMON_DENOMINATOR: "Common denominator",
            MistakeKind.SIMPLIFICATION: "Simplification",
            MistakeKind.CALCULATION: "Calculation",
            MistakeKind.CONCEPTUAL: "Conceptual",
            MistakeKind.CONVERSION: "Conversion",
            MistakeKind.SIGN: "Sign",
            MistakeKind.ORDER: "Order",
            MistakeKind.INTERPRETATION: "Interpretation",
        }[self]


NormalizedAnswer = Union[Fraction, tuple[Fraction, ...], ComparisonSymbol, None]


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of checking one submitted answer.

    Fraction answers are normalized to reduced improper form; sequences are
    tuples of those. normalized_user_answer is None when the submission could
    not be interpreted at all.
    """

    is_correct: bool
    mistake_kind: MistakeKind | None
    normalized_user_answer: NormalizedAnswer
    normalized_expected_answer: NormalizedAnswer


def normalize_fraction(fraction: Fraction) -> Fraction:
    """Reduced improper form; zero is never negative."""
    return reduce(to_improper(fraction))


def normalize_answer(answer: ExpectedAnswer | None) -> NormalizedAnswer:
    if isinstance(answer, Fraction):
        return normalize_fraction(answer)
    if isinstance(answer, (tuple, list)):
        return tuple(normalize_fraction(f) for f in answer)
    return answer


class AnswerChecker(Protocol):
    """Protocol for per-answer-kind checkers."""

    def parse(self, text: str) -> Any:
        """Turn a typed answer into a value of this kind. Raises ValueError."""
        ...

    def check(self, problem: Problem, answer: Any) -> ValidationResult:
        """Grade an answer already known to have the right shape."""
        ...
