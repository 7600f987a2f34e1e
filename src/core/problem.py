"""
Problem definitions consumed from the problem bank.

A Problem is read-only input to the engine. Its expected answer is either a
single Fraction, an ordered tuple of Fractions (expand / ordering problems) or
a ComparisonSymbol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from src.core.exceptions import InvalidProblem
from src.core.fraction import Fraction


class SkillMode(str, Enum):
    """Skill a problem trains; mastery is tracked per skill."""

    CONCEPT = "concept"
    EQUIVALENT = "equivalent"
    COMPARISON = "comparison"
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    MIXED_CONVERSION = "mixedConversion"
    APPLICATION = "application"

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        if self is SkillMode.MIXED_CONVERSION:
            return "Mixed Conversion"
        return self.value.title()


class ProblemType(str, Enum):
    """What the learner is asked to do."""

    IDENTIFY = "identify"
    CREATE = "create"
    SIMPLIFY = "simplify"
    EXPAND = "expand"
    COMPARE = "compare"
    CALCULATE = "calculate"
    CONVERT = "convert"
    WORD = "word"


class ComparisonSymbol(str, Enum):
    """Result of comparing two fractions."""

    LESS = "<"
    EQUAL = "="
    GREATER = ">"

    @classmethod
    def parse(cls, text: str) -> ComparisonSymbol:
        """Parse "<", "=" or ">" (surrounding whitespace ignored)."""
        try:
            return cls(text.strip())
        except (AttributeError, ValueError):
            raise ValueError(f"Not a comparison symbol: {text!r}") from None


class AnswerForm(str, Enum):
    """Representation rule a numeric answer must satisfy."""

    ANY = "any"  # any numerically equal form
    LOWEST_TERMS = "lowest_terms"  # reduced, mixed remainder proper
    MIXED = "mixed"  # reduced mixed number
    IMPROPER = "improper"  # reduced, no whole-number part


class AnswerKind(str, Enum):
    """Shape of an expected answer."""

    FRACTION = "fraction"
    FRACTION_SEQUENCE = "fraction_sequence"
    COMPARISON = "comparison"


ExpectedAnswer = Union[Fraction, tuple[Fraction, ...], ComparisonSymbol]


def answer_kind_of(answer: object) -> AnswerKind | None:
    """Classify an answer value by shape, or None if it has no known shape."""
    if isinstance(answer, Fraction):
        return AnswerKind.FRACTION
    if isinstance(answer, ComparisonSymbol):
        return AnswerKind.COMPARISON
    if isinstance(answer, (tuple, list)) and all(isinstance(f, Fraction) for f in answer):
        return AnswerKind.FRACTION_SEQUENCE
    return None


@dataclass(frozen=True)
class Problem:
    """A single exercise from the problem bank."""

    id: str
    skill_mode: SkillMode
    problem_type: ProblemType
    difficulty: int
    operands: tuple[Fraction, ...]
    expected_answer: ExpectedAnswer
    hints: tuple[str, ...] = field(default_factory=tuple)
    question: str = ""
    answer_form: AnswerForm | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidProblem("Problem id is required")
        if isinstance(self.difficulty, bool) or not isinstance(self.difficulty, int) \
                or not 1 <= self.difficulty <= 5:
            raise InvalidProblem(
                f"Problem {self.id}: difficulty must be 1..5, got {self.difficulty!r}"
            )
        if self.expected_answer is None:
            raise InvalidProblem(f"Problem {self.id}: expected answer is missing")

        # Lists are accepted for convenience but stored as tuples
        if isinstance(self.expected_answer, list):
            object.__setattr__(self, "expected_answer", tuple(self.expected_answer))
        if not isinstance(self.operands, tuple):
            object.__setattr__(self, "operands", tuple(self.operands))
        if not isinstance(self.hints, tuple):
            object.__setattr__(self, "hints", tuple(self.hints))

        kind = answer_kind_of(self.expected_answer)
        if kind is None or (kind is AnswerKind.FRACTION_SEQUENCE and not self.expected_answer):
            raise InvalidProblem(
                f"Problem {self.id}: unsupported expected answer {self.expected_answer!r}"
            )
        if self.problem_type is ProblemType.COMPARE and kind is AnswerKind.FRACTION:
            raise InvalidProblem(f"Problem {self.id}: compare problems need a symbol or ordering")
        if self.problem_type is ProblemType.EXPAND and kind is not AnswerKind.FRACTION_SEQUENCE:
            raise InvalidProblem(f"Problem {self.id}: expand problems need a fraction sequence")

    @property
    def answer_kind(self) -> AnswerKind:
        return answer_kind_of(self.expected_answer)

    @property
    def is_conversion(self) -> bool:
        """True for mixed/improper conversion exercises."""
        return (
            self.skill_mode is SkillMode.MIXED_CONVERSION
            or self.problem_type is ProblemType.CONVERT
        )

    @property
    def effective_answer_form(self) -> AnswerForm:
        """
        Representation rule used when checking a numeric answer.

        An explicit answer_form wins. Conversion problems expect the form of
        their stored answer (mixed when it has a whole part, improper
        otherwise); everything else expects lowest terms.
        """
        if self.answer_form is not None:
            return self.answer_form
        if self.problem_type is ProblemType.CONVERT and isinstance(self.expected_answer, Fraction):
            if self.expected_answer.has_whole_part:
                return AnswerForm.MIXED
            return AnswerForm.IMPROPER
        return AnswerForm.LOWEST_TERMS
