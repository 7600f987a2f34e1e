"""
Numeric answer checker.

A single-fraction answer is correct when it has the expected value AND the
representation the problem asks for (lowest terms by default; conversion
problems ask for a mixed number or an improper fraction).

Mistake hypotheses, tested in order, first match wins:
1. simplification  - unreduced, and the reduced answer would be accepted
2. conversion      - conversion problems only: right value in the wrong form,
                     or whole part and numerator swapped
   simplification  - any other right value in a non-canonical form
3. sign            - the negated answer has the expected value
4. commonDenominator - two-operand addition/subtraction combined as
                       (a±c)/(b±d)
5. calculation     - anything else (conceptual for concept problems)
"""

from __future__ import annotations

from dataclasses import replace

from src.arithmetic.normalizer import (
    equals_as_number,
    from_signed,
    is_canonical,
    is_reduced,
    negate,
    reduce,
    to_improper,
)
from src.core.fraction import Fraction
from src.core.problem import AnswerForm, AnswerKind, Problem, SkillMode

from . import register
from .base import MistakeKind, ValidationResult, normalize_fraction


def _is_whole(fraction: Fraction) -> bool:
    """Whole numbers such as 3 or 3 0/1 count as mixed and as improper."""
    return fraction.denominator == 1 and (fraction.whole_number == 0 or fraction.numerator == 0)


def satisfies_form(fraction: Fraction, form: AnswerForm) -> bool:
    """Check a fraction against a representation rule."""
    if form is AnswerForm.ANY:
        return True
    if form is AnswerForm.IMPROPER:
        return _is_whole(fraction) or (fraction.whole_number == 0 and is_reduced(fraction))
    if form is AnswerForm.MIXED:
        return _is_whole(fraction) or (
            is_canonical(fraction) and fraction.numerator < fraction.denominator
        )
    return is_canonical(fraction)


def _swap_whole_and_numerator(fraction: Fraction) -> Fraction:
    return replace(fraction, whole_number=fraction.numerator, numerator=fraction.whole_number)


def _naive_combination(problem: Problem) -> Fraction | None:
    """The (a±c)/(b±d) result of combining without a common denominator."""
    if problem.skill_mode not in (SkillMode.ADDITION, SkillMode.SUBTRACTION):
        return None
    if len(problem.operands) != 2:
        return None

    left, right = (to_improper(f) for f in problem.operands)
    if problem.skill_mode is SkillMode.ADDITION:
        numerator = left.signed_numerator + right.signed_numerator
        denominator = left.denominator + right.denominator
    else:
        numerator = left.signed_numerator - right.signed_numerator
        denominator = left.denominator - right.denominator
    if denominator <= 0:
        return None
    return from_signed(numerator, denominator)


@register(AnswerKind.FRACTION)
class NumericChecker:
    """Checker for single-fraction answers."""

    def parse(self, text: str) -> Fraction:
        return Fraction.parse(text)

    def accepts(self, problem: Problem, answer: Fraction) -> bool:
        """True when the answer has the expected value and form."""
        return equals_as_number(answer, problem.expected_answer) and satisfies_form(
            answer, problem.effective_answer_form
        )

    def classify(self, problem: Problem, answer: Fraction) -> MistakeKind:
        """Name the most likely mistake behind a rejected answer."""
        if not is_reduced(answer) and self.accepts(problem, reduce(answer)):
            return MistakeKind.SIMPLIFICATION

        if problem.is_conversion and (
            equals_as_number(answer, problem.expected_answer)
            or self.accepts(problem, _swap_whole_and_numerator(answer))
        ):
            return MistakeKind.CONVERSION

        if equals_as_number(answer, problem.expected_answer):
            # Right value, improper remainder or other non-canonical form
            return MistakeKind.SIMPLIFICATION

        if equals_as_number(negate(answer), problem.expected_answer):
            return MistakeKind.SIGN

        naive = _naive_combination(problem)
        if naive is not None and equals_as_number(answer, naive):
            return MistakeKind.COMMON_DENOMINATOR

        if problem.skill_mode is SkillMode.CONCEPT:
            return MistakeKind.CONCEPTUAL
        return MistakeKind.CALCULATION

    def check(self, problem: Problem, answer: Fraction) -> ValidationResult:
        """Grade a fraction answer."""
        is_correct = self.accepts(problem, answer)
        return ValidationResult(
            is_correct=is_correct,
            mistake_kind=None if is_correct else self.classify(problem, answer),
            normalized_user_answer=normalize_fraction(answer),
            normalized_expected_answer=normalize_fraction(problem.expected_answer),
        )
