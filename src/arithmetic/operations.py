"""
Arithmetic Engine.

Adds, subtracts, multiplies and divides fractions and records the derivation a
learner is shown, one DerivationStep per visible transformation:

    convert            only when an operand had a whole-number part
    common_denominator only when denominators differ (add/subtract)
    combine            add/subtract the numerators
    reciprocal         flip the divisor (divide)
    multiply           numerators together, denominators together
    simplify           only when reduction actually changed the result

Every function is pure and deterministic. Results are reduced improper
fractions; use normalizer.to_mixed() for display as a mixed number.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from src.arithmetic.normalizer import (
    from_signed,
    lcm,
    reciprocal,
    reduce,
    rescale,
    to_improper,
)
from src.core.exceptions import DivisionByZero
from src.core.fraction import Fraction


class OperationKind(str, Enum):
    """The four fraction operations."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return {
            OperationKind.ADD: "+",
            OperationKind.SUBTRACT: "-",
            OperationKind.MULTIPLY: "×",
            OperationKind.DIVIDE: "÷",
        }[self]

    @classmethod
    def from_symbol(cls, text: str) -> OperationKind:
        """Accept an operator symbol ("+", "-", "*", "x", "×", "/", "÷") or a name."""
        aliases = {
            "+": cls.ADD,
            "-": cls.SUBTRACT,
            "*": cls.MULTIPLY,
            "x": cls.MULTIPLY,
            "×": cls.MULTIPLY,
            "/": cls.DIVIDE,
            "÷": cls.DIVIDE,
        }
        key = text.strip().lower()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown operation: {text!r}") from None


class StepKind(str, Enum):
    """Kind of derivation step, for styling step-by-step displays."""

    CONVERT = "convert"
    COMMON_DENOMINATOR = "common_denominator"
    COMBINE = "combine"
    MULTIPLY = "multiply"
    RECIPROCAL = "reciprocal"
    SIMPLIFY = "simplify"
    COMPARE = "compare"


@dataclass(frozen=True)
class DerivationStep:
    """One labeled intermediate state."""

    kind: StepKind
    description: str
    fractions: tuple[Fraction, ...]


@dataclass(frozen=True)
class OperationResult:
    """Result of a fraction operation with its derivation."""

    kind: OperationKind
    left: Fraction
    right: Fraction
    result: Fraction
    steps: tuple[DerivationStep, ...]
    raw_result: Fraction | None = None

    @property
    def expression(self) -> str:
        return f"{self.left} {self.kind.symbol} {self.right} = {self.result}"


# =============================================================================
# Shared stages
# =============================================================================


def _convert_operands(
    left: Fraction, right: Fraction, steps: list[DerivationStep]
) -> tuple[Fraction, Fraction]:
    improper_left = to_improper(left)
    improper_right = to_improper(right)
    if left.has_whole_part or right.has_whole_part:
        steps.append(
            DerivationStep(
                kind=StepKind.CONVERT,
                description="Convert mixed numbers to improper fractions",
                fractions=(improper_left, improper_right),
            )
        )
    return improper_left, improper_right


def _combine(
    left: Fraction,
    right: Fraction,
    subtract: bool,
    steps: list[DerivationStep],
) -> Fraction:
    if left.denominator != right.denominator:
        denominator = lcm(left.denominator, right.denominator)
        left = rescale(left, denominator)
        right = rescale(right, denominator)
        steps.append(
            DerivationStep(
                kind=StepKind.COMMON_DENOMINATOR,
                description=f"Find a common denominator: {denominator}",
                fractions=(left, right),
            )
        )

    if subtract:
        numerator = left.signed_numerator - right.signed_numerator
        description = "Subtract the numerators"
    else:
        numerator = left.signed_numerator + right.signed_numerator
        description = "Add the numerators"

    raw = from_signed(numerator, left.denominator)
    steps.append(DerivationStep(kind=StepKind.COMBINE, description=description, fractions=(raw,)))
    return raw


def _multiply(
    left: Fraction, right: Fraction, description: str, steps: list[DerivationStep]
) -> Fraction:
    numerator = left.numerator * right.numerator
    raw = Fraction(
        numerator=numerator,
        denominator=left.denominator * right.denominator,
        is_negative=(left.is_negative != right.is_negative) and numerator != 0,
    )
    steps.append(DerivationStep(kind=StepKind.MULTIPLY, description=description, fractions=(raw,)))
    return raw


def _finish(
    kind: OperationKind,
    left: Fraction,
    right: Fraction,
    raw: Fraction,
    steps: list[DerivationStep],
) -> OperationResult:
    result = reduce(raw)
    if (result.numerator, result.denominator) != (raw.numerator, raw.denominator):
        steps.append(
            DerivationStep(
                kind=StepKind.SIMPLIFY,
                description="Simplify to lowest terms",
                fractions=(result,),
            )
        )
    return OperationResult(
        kind=kind,
        left=left,
        right=right,
        result=result,
        steps=tuple(steps),
        raw_result=raw,
    )


# =============================================================================
# Operations
# =============================================================================


def add(left: Fraction, right: Fraction) -> OperationResult:
    """Add two fractions."""
    steps: list[DerivationStep] = []
    a, b = _convert_operands(left, right, steps)
    raw = _combine(a, b, subtract=False, steps=steps)
    return _finish(OperationKind.ADD, left, right, raw, steps)


def subtract(left: Fraction, right: Fraction) -> OperationResult:
    """Subtract right from left; a negative difference sets is_negative."""
    steps: list[DerivationStep] = []
    a, b = _convert_operands(left, right, steps)
    raw = _combine(a, b, subtract=True, steps=steps)
    return _finish(OperationKind.SUBTRACT, left, right, raw, steps)


def multiply(left: Fraction, right: Fraction) -> OperationResult:
    """Multiply two fractions; the sign is the XOR of the operand signs."""
    steps: list[DerivationStep] = []
    a, b = _convert_operands(left, right, steps)
    raw = _multiply(a, b, "Multiply numerators together and denominators together", steps)
    return _finish(OperationKind.MULTIPLY, left, right, raw, steps)


def divide(left: Fraction, right: Fraction) -> OperationResult:
    """
    Divide left by right by multiplying with the reciprocal.

    Raises:
        DivisionByZero: If right is zero
    """
    if to_improper(right).numerator == 0:
        raise DivisionByZero(f"Cannot divide {left} by zero")

    steps: list[DerivationStep] = []
    a, b = _convert_operands(left, right, steps)
    flipped = reciprocal(b)
    steps.append(
        DerivationStep(
            kind=StepKind.RECIPROCAL,
            description="Take the reciprocal of the divisor",
            fractions=(flipped,),
        )
    )
    raw = _multiply(a, flipped, "Multiply by the reciprocal", steps)
    return _finish(OperationKind.DIVIDE, left, right, raw, steps)


OPERATIONS: dict[OperationKind, Callable[[Fraction, Fraction], OperationResult]] = {
    OperationKind.ADD: add,
    OperationKind.SUBTRACT: subtract,
    OperationKind.MULTIPLY: multiply,
    OperationKind.DIVIDE: divide,
}


def calculate(kind: OperationKind | str, left: Fraction, right: Fraction) -> OperationResult:
    """Dispatch to the operation named by kind (enum, name or symbol)."""
    if not isinstance(kind, OperationKind):
        kind = OperationKind.from_symbol(kind)
    return OPERATIONS[kind](left, right)
