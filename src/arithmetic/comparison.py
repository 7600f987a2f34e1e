"""
Comparison Engine.

Orders fractions exactly: both sides are converted to improper form, rescaled
to their least common denominator and compared by signed numerator. No
floating-point values are involved.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

from src.arithmetic.normalizer import lcm, rescale, to_improper
from src.arithmetic.operations import DerivationStep, StepKind
from src.core.fraction import Fraction
from src.core.problem import ComparisonSymbol


@dataclass(frozen=True)
class ComparisonResult:
    """Comparison outcome with the steps that justify it."""

    left: Fraction
    right: Fraction
    symbol: ComparisonSymbol
    steps: tuple[DerivationStep, ...]


def _common_numerators(a: Fraction, b: Fraction) -> tuple[Fraction, Fraction]:
    left = to_improper(a)
    right = to_improper(b)
    denominator = lcm(left.denominator, right.denominator)
    return rescale(left, denominator), rescale(right, denominator)


def _cmp(a: Fraction, b: Fraction) -> int:
    left, right = _common_numerators(a, b)
    if left.signed_numerator < right.signed_numerator:
        return -1
    if left.signed_numerator > right.signed_numerator:
        return 1
    return 0


_SYMBOLS = {-1: ComparisonSymbol.LESS, 0: ComparisonSymbol.EQUAL, 1: ComparisonSymbol.GREATER}


def compare(a: Fraction, b: Fraction) -> ComparisonSymbol:
    """Return "<", "=" or ">" for a compared to b."""
    return _SYMBOLS[_cmp(a, b)]


def order_ascending(fractions: Iterable[Fraction]) -> tuple[Fraction, ...]:
    """Smallest to largest; equal values keep their input order."""
    return tuple(sorted(fractions, key=cmp_to_key(_cmp)))


def order_descending(fractions: Iterable[Fraction]) -> tuple[Fraction, ...]:
    """Largest to smallest; equal values keep their input order."""
    return tuple(sorted(fractions, key=cmp_to_key(lambda a, b: _cmp(b, a))))


def explain_comparison(a: Fraction, b: Fraction) -> ComparisonResult:
    """
    Compare two fractions and record the derivation.

    Steps:
        convert             only when either side is a mixed number
        common_denominator  only when the denominators differ
        compare             always, showing the two numerators being compared
    """
    steps: list[DerivationStep] = []
    left = to_improper(a)
    right = to_improper(b)
    if a.has_whole_part or b.has_whole_part:
        steps.append(
            DerivationStep(
                kind=StepKind.CONVERT,
                description="Convert mixed numbers to improper fractions",
                fractions=(left, right),
            )
        )

    if left.denominator != right.denominator:
        left, right = _common_numerators(left, right)
        steps.append(
            DerivationStep(
                kind=StepKind.COMMON_DENOMINATOR,
                description=f"Find a common denominator: {left.denominator}",
                fractions=(left, right),
            )
        )

    symbol = compare(a, b)
    steps.append(
        DerivationStep(
            kind=StepKind.COMPARE,
            description=(
                f"Compare the numerators: {left.signed_numerator} "
                f"{symbol.value} {right.signed_numerator}"
            ),
            fractions=(left, right),
        )
    )
    return ComparisonResult(left=a, right=b, symbol=symbol, steps=tuple(steps))
