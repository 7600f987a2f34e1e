"""
Fraction Normalizer.

Pure helpers that canonicalize the Fraction representation:
- reduce(): lowest terms via the greatest common divisor
- to_improper() / to_mixed(): move value between the whole part and numerator
- equals_as_number(): numeric equality across representations
- canonicalize(): reduced fraction, or reduced mixed number with a proper remainder

Zero is never negative: a zero value compares equal regardless of is_negative.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace

from src.core.exceptions import DivisionByZero
from src.core.fraction import Fraction


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of |a| and |b|; gcd(0, n) = n."""
    return math.gcd(abs(a), abs(b))


def lcm(a: int, b: int) -> int:
    """Least common multiple, |a*b| / gcd(a, b)."""
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def from_signed(numerator: int, denominator: int) -> Fraction:
    """Build an improper Fraction from a signed numerator."""
    return Fraction(
        numerator=abs(numerator),
        denominator=denominator,
        is_negative=numerator < 0,
    )


def reduce(fraction: Fraction) -> Fraction:
    """
    Reduce numerator and denominator to lowest terms.

    The whole-number part is kept as is. {0, n} becomes {0, 1}.
    """
    divisor = gcd(fraction.numerator, fraction.denominator)
    numerator = fraction.numerator // divisor
    denominator = fraction.denominator // divisor
    is_negative = fraction.is_negative and not (numerator == 0 and fraction.whole_number == 0)
    return Fraction(
        numerator=numerator,
        denominator=denominator,
        whole_number=fraction.whole_number,
        is_negative=is_negative,
    )


def to_improper(fraction: Fraction) -> Fraction:
    """Fold the whole-number part into the numerator."""
    if fraction.whole_number == 0:
        return fraction
    return Fraction(
        numerator=fraction.improper_numerator,
        denominator=fraction.denominator,
        is_negative=fraction.is_negative,
    )


def to_mixed(fraction: Fraction) -> Fraction:
    """Split an improper numerator into a whole part and a proper remainder."""
    if fraction.numerator < fraction.denominator:
        return fraction
    whole, remainder = divmod(fraction.numerator, fraction.denominator)
    return Fraction(
        numerator=remainder,
        denominator=fraction.denominator,
        whole_number=fraction.whole_number + whole,
        is_negative=fraction.is_negative,
    )


def _numeric_key(fraction: Fraction) -> tuple[int, int, bool]:
    reduced = reduce(to_improper(fraction))
    return reduced.numerator, reduced.denominator, reduced.is_negative and reduced.numerator != 0


def equals_as_number(a: Fraction, b: Fraction) -> bool:
    """True when both fractions denote the same rational number."""
    return _numeric_key(a) == _numeric_key(b)


def is_reduced(fraction: Fraction) -> bool:
    """True when numerator and denominator share no common factor."""
    return gcd(fraction.numerator, fraction.denominator) == 1


def is_canonical(fraction: Fraction) -> bool:
    """Reduced, and a mixed number's remainder is proper."""
    if not is_reduced(fraction):
        return False
    return fraction.whole_number == 0 or fraction.numerator < fraction.denominator


def canonicalize(fraction: Fraction) -> Fraction:
    """
    Canonical form of a fraction.

    Fractions without a whole part are reduced in place (they may stay
    improper). Mixed numbers are rebuilt with a reduced, proper remainder.
    """
    if fraction.whole_number == 0:
        return reduce(fraction)
    return to_mixed(reduce(to_improper(fraction)))


def equals_as_representation(a: Fraction, b: Fraction) -> bool:
    """Numerically equal with the same whole part and the same reduced state."""
    return (
        equals_as_number(a, b)
        and a.whole_number == b.whole_number
        and is_reduced(a) == is_reduced(b)
    )


def negate(fraction: Fraction) -> Fraction:
    return replace(fraction, is_negative=not fraction.is_negative)


def reciprocal(fraction: Fraction) -> Fraction:
    """
    Swap numerator and denominator of the improper form.

    Raises:
        DivisionByZero: If the fraction's value is zero
    """
    improper = to_improper(fraction)
    if improper.numerator == 0:
        raise DivisionByZero(f"{fraction} has no reciprocal")
    return Fraction(
        numerator=improper.denominator,
        denominator=improper.numerator,
        is_negative=improper.is_negative,
    )


def rescale(fraction: Fraction, denominator: int) -> Fraction:
    """Express a fraction (improper form) over a multiple of its denominator."""
    improper = to_improper(fraction)
    if denominator % improper.denominator != 0:
        raise ValueError(
            f"{denominator} is not a multiple of {improper.denominator}"
        )
    factor = denominator // improper.denominator
    return Fraction(
        numerator=improper.numerator * factor,
        denominator=denominator,
        is_negative=improper.is_negative,
    )


def least_common_denominator(fractions: Iterable[Fraction]) -> int:
    result = 1
    for fraction in fractions:
        result = lcm(result, fraction.denominator)
    return result


def common_denominator(fractions: Iterable[Fraction]) -> tuple[Fraction, ...]:
    """
    Rescale every fraction to the least common denominator.

    Mixed numbers are converted to improper form first.
    """
    improper = [to_improper(f) for f in fractions]
    if not improper:
        return ()
    lcd = least_common_denominator(improper)
    return tuple(rescale(f, lcd) for f in improper)
