"""
Core Module - Shared domain models.

This module contains the canonical value types used across the engine:

Components:
- fraction: Fraction value object (sign flag, whole part, numerator, denominator)
- problem: Problem, SkillMode, ProblemType, ComparisonSymbol, AnswerForm
- mastery: MasteryRecord, SkillProgress, MasteryLevel, default_record()
- exceptions: Engine error taxonomy

Design Principle:
Arithmetic, validation, learning and adaptive modules import from src/core/
rather than defining their own copies of these types.
"""

from src.core.exceptions import (
    DivisionByZero,
    FractionEngineError,
    InvalidFraction,
    InvalidProblem,
    MalformedProgress,
    NoMatchingProblem,
)
from src.core.fraction import Fraction
from src.core.mastery import (
    UNCLASSIFIED,
    AttemptSample,
    DifficultyStats,
    MasteryLevel,
    MasteryRecord,
    SkillProgress,
    default_record,
)
from src.core.problem import (
    AnswerForm,
    AnswerKind,
    ComparisonSymbol,
    Problem,
    ProblemType,
    SkillMode,
)

__all__ = [
    # Errors
    "FractionEngineError",
    "InvalidFraction",
    "DivisionByZero",
    "InvalidProblem",
    "NoMatchingProblem",
    "MalformedProgress",
    # Values
    "Fraction",
    "Problem",
    "SkillMode",
    "ProblemType",
    "ComparisonSymbol",
    "AnswerForm",
    "AnswerKind",
    # Mastery
    "UNCLASSIFIED",
    "AttemptSample",
    "SkillProgress",
    "DifficultyStats",
    "MasteryRecord",
    "MasteryLevel",
    "default_record",
]
