"""
Fraction value object.

A fraction is stored the way a learner writes it: an optional whole-number
part, a numerator and a denominator, with the sign kept apart in a flag.
Numerator, denominator and whole number are never negative.

    Fraction(3, 4)                        # 3/4
    Fraction(2, 3, whole_number=1)        # 1 2/3
    Fraction(5, 4, is_negative=True)      # -5/4

Instances are immutable; the normalizer and arithmetic modules always return
new instances.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from src.core.exceptions import InvalidFraction

# "-1 2/3", "3/4", "- 5 / 8", "7"
_FRACTION_PATTERN = re.compile(
    r"^\s*(?P<sign>-)?\s*(?:(?P<whole>\d+)\s+)?(?P<num>\d+)(?:\s*/\s*(?P<den>\d+))?\s*$"
)


def _check_part(name: str, value: Any, *, positive: bool = False) -> None:
    if value is None:
        raise InvalidFraction(f"{name} is missing")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFraction(f"{name} must be an integer, got {value!r}")
    if positive and value <= 0:
        raise InvalidFraction(f"{name} must be positive, got {value}")
    if value < 0:
        raise InvalidFraction(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class Fraction:
    """A signed fraction or mixed number."""

    numerator: int
    denominator: int
    whole_number: int = 0
    is_negative: bool = False

    def __post_init__(self) -> None:
        _check_part("denominator", self.denominator, positive=True)
        _check_part("numerator", self.numerator)
        _check_part("whole_number", self.whole_number)
        if not isinstance(self.is_negative, bool):
            raise InvalidFraction(f"is_negative must be a bool, got {self.is_negative!r}")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_zero(self) -> bool:
        return self.numerator == 0 and self.whole_number == 0

    @property
    def has_whole_part(self) -> bool:
        return self.whole_number > 0

    @property
    def improper_numerator(self) -> int:
        """Numerator of the equivalent improper fraction, without sign."""
        return self.whole_number * self.denominator + self.numerator

    @property
    def signed_numerator(self) -> int:
        """Improper numerator with the sign applied."""
        value = self.improper_numerator
        return -value if self.is_negative else value

    # =========================================================================
    # Text and dict forms
    # =========================================================================

    @classmethod
    def parse(cls, text: str) -> Fraction:
        """
        Parse learner input such as "3/4", "-3/4", "1 2/3" or "5".

        Args:
            text: Raw input text

        Returns:
            Parsed Fraction (not reduced)

        Raises:
            InvalidFraction: If the text is not a fraction or has a zero denominator
        """
        if not isinstance(text, str):
            raise InvalidFraction(f"Cannot parse {text!r} as a fraction")

        match = _FRACTION_PATTERN.match(text)
        if not match:
            raise InvalidFraction(f"Cannot parse {text!r} as a fraction")

        whole = match.group("whole")
        den = match.group("den")
        if whole is not None and den is None:
            raise InvalidFraction(f"Mixed number {text!r} is missing a denominator")

        return cls(
            numerator=int(match.group("num")),
            denominator=int(den) if den is not None else 1,
            whole_number=int(whole) if whole is not None else 0,
            is_negative=match.group("sign") is not None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "numerator": self.numerator,
            "denominator": self.denominator,
            "whole_number": self.whole_number,
            "is_negative": self.is_negative,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fraction:
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise InvalidFraction(f"Expected a mapping, got {type(data).__name__}")
        return cls(
            numerator=data.get("numerator"),
            denominator=data.get("denominator"),
            whole_number=data.get("whole_number", 0),
            is_negative=data.get("is_negative", False),
        )

    def __str__(self) -> str:
        sign = "-" if self.is_negative and not self.is_zero else ""
        if self.whole_number:
            if self.numerator == 0:
                return f"{sign}{self.whole_number}"
            return f"{sign}{self.whole_number} {self.numerator}/{self.denominator}"
        if self.denominator == 1:
            return f"{sign}{self.numerator}"
        return f"{sign}{self.numerator}/{self.denominator}"
