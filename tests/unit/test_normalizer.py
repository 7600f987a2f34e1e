"""
Unit tests for the fraction normalizer.

Tests:
- gcd / lcm helpers
- reduce, to_improper, to_mixed
- Numeric vs representational equality
- canonicalize and common_denominator
- Value preservation, checked against the standard library's rationals

Run: pytest tests/unit/test_normalizer.py -v
"""

from fractions import Fraction as Rational

import pytest

from src.arithmetic.normalizer import (
    canonicalize,
    common_denominator,
    equals_as_number,
    equals_as_representation,
    gcd,
    is_canonical,
    is_reduced,
    lcm,
    negate,
    reciprocal,
    reduce,
    to_improper,
    to_mixed,
)
from src.core.exceptions import DivisionByZero
from src.core.fraction import Fraction


def f(text):
    return Fraction.parse(text)


def value_of(fraction):
    """Exact rational value of a Fraction."""
    return Rational(fraction.signed_numerator, fraction.denominator)


SAMPLES = [
    "0/5",
    "-0/3",
    "1/2",
    "6/8",
    "-6/8",
    "12/4",
    "11/4",
    "-11/4",
    "1 2/4",
    "-2 6/9",
    "3 7/5",
    "5",
    "100/75",
]


class TestDivisors:
    """gcd and lcm."""

    @pytest.mark.parametrize("a,b,expected", [(12, 18, 6), (0, 7, 7), (-4, 6, 2), (17, 5, 1)])
    def test_gcd(self, a, b, expected):
        assert gcd(a, b) == expected

    @pytest.mark.parametrize("a,b,expected", [(4, 6, 12), (3, 4, 12), (5, 5, 5), (0, 3, 0)])
    def test_lcm(self, a, b, expected):
        assert lcm(a, b) == expected


class TestReduce:
    """reduce()."""

    def test_reduces_to_lowest_terms(self):
        assert reduce(f("6/8")) == f("3/4")

    def test_keeps_whole_part(self):
        assert reduce(f("1 2/4")) == f("1 1/2")

    def test_zero_becomes_zero_over_one(self):
        """{0, n} reduces to {0, 1}."""
        assert reduce(f("0/5")) == Fraction(0, 1)

    def test_negative_zero_loses_sign(self):
        assert reduce(Fraction(0, 7, is_negative=True)).is_negative is False

    def test_keeps_sign(self):
        assert reduce(f("-6/8")) == f("-3/4")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = reduce(f(text))
        assert reduce(once) == once

    @pytest.mark.parametrize("text", SAMPLES)
    def test_result_is_reduced(self, text):
        assert is_reduced(reduce(f(text)))


class TestImproperAndMixed:
    """to_improper() and to_mixed()."""

    def test_to_improper(self):
        assert to_improper(f("2 3/4")) == f("11/4")

    def test_to_improper_keeps_sign(self):
        assert to_improper(f("-1 2/3")) == f("-5/3")

    def test_to_improper_without_whole_part_is_identity(self):
        frac = f("5/3")
        assert to_improper(frac) is frac

    def test_to_mixed(self):
        assert to_mixed(f("11/4")) == f("2 3/4")

    def test_to_mixed_exact_division(self):
        assert to_mixed(f("12/4")) == Fraction(0, 4, whole_number=3)

    def test_to_mixed_proper_unchanged(self):
        assert to_mixed(f("3/4")) == f("3/4")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_round_trip_preserves_value(self, text):
        frac = f(text)
        assert value_of(to_mixed(to_improper(frac))) == value_of(frac)
        assert value_of(to_improper(frac)) == value_of(frac)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_improper_of_mixed_matches_reduced_improper(self, text):
        frac = f(text)
        assert reduce(to_improper(to_mixed(frac))) == reduce(to_improper(frac))


class TestEquality:
    """Numeric vs representational equality."""

    def test_equivalent_fractions_equal_as_number(self):
        assert equals_as_number(f("6/8"), f("3/4"))

    def test_mixed_equals_improper(self):
        assert equals_as_number(f("1 1/2"), f("3/2"))

    def test_different_values(self):
        assert not equals_as_number(f("1/2"), f("1/3"))

    def test_signed_zeros_are_equal(self):
        assert equals_as_number(Fraction(0, 3, is_negative=True), Fraction(0, 5))

    def test_sign_matters(self):
        assert not equals_as_number(f("-1/2"), f("1/2"))

    @pytest.mark.parametrize("a", SAMPLES)
    @pytest.mark.parametrize("b", ["3/4", "-11/4", "1 1/2", "0/1"])
    def test_matches_rational_equality(self, a, b):
        assert equals_as_number(f(a), f(b)) == (value_of(f(a)) == value_of(f(b)))

    def test_representation_differs_on_reduction(self):
        assert not equals_as_representation(f("6/8"), f("3/4"))

    def test_representation_differs_on_whole_part(self):
        assert not equals_as_representation(f("1 1/2"), f("3/2"))

    def test_representation_same(self):
        assert equals_as_representation(f("1 1/2"), f("1 1/2"))


class TestCanonical:
    """canonicalize() and is_canonical()."""

    def test_improper_stays_improper(self):
        assert canonicalize(f("10/4")) == f("5/2")

    def test_mixed_remainder_made_proper(self):
        assert canonicalize(f("3 7/5")) == f("4 2/5")

    def test_mixed_remainder_reduced(self):
        assert canonicalize(f("-2 6/9")) == f("-2 2/3")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_canonical_form_is_canonical(self, text):
        assert is_canonical(canonicalize(f(text)))

    @pytest.mark.parametrize("text", SAMPLES)
    def test_canonical_form_preserves_value(self, text):
        assert value_of(canonicalize(f(text))) == value_of(f(text))

    def test_unreduced_not_canonical(self):
        assert not is_canonical(f("2/4"))

    def test_improper_remainder_not_canonical(self):
        assert not is_canonical(f("1 5/4"))


class TestHelpers:
    """negate, reciprocal, common_denominator."""

    def test_negate(self):
        assert negate(f("3/4")) == f("-3/4")
        assert negate(f("-3/4")) == f("3/4")

    def test_reciprocal_of_mixed(self):
        assert reciprocal(f("1 1/2")) == f("2/3")

    def test_reciprocal_keeps_sign(self):
        assert reciprocal(f("-3/4")) == f("-4/3")

    def test_reciprocal_of_zero(self):
        with pytest.raises(DivisionByZero):
            reciprocal(f("0/4"))

    def test_common_denominator(self):
        assert common_denominator([f("1/3"), f("1/4")]) == (f("4/12"), f("3/12"))

    def test_common_denominator_converts_mixed(self):
        assert common_denominator([f("1 1/2"), f("1/3")]) == (f("9/6"), f("2/6"))

    def test_common_denominator_preserves_values(self):
        inputs = [f("5/6"), f("-3/4"), f("2 1/9")]
        for before, after in zip(inputs, common_denominator(inputs)):
            assert value_of(before) == value_of(after)
            assert after.denominator == 36

    def test_common_denominator_empty(self):
        assert common_denominator([]) == ()
