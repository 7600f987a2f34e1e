"""
Learner-facing feedback for validation results.

One message and one suggestion per mistake kind, shown by the practice loop
after every submission.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import MistakeKind, ValidationResult

SUCCESS_MESSAGES = (
    "Excellent, well done!",
    "Perfect, keep it up!",
    "Correct! You're on your way to fraction mastery.",
    "Nice! Your understanding is growing.",
    "Great job! Try the next one.",
)

_MESSAGES: dict[MistakeKind, tuple[str, str]] = {
    MistakeKind.COMMON_DENOMINATOR: (
        "The denominators need to match first.",
        "Find the least common multiple and rewrite both fractions over it.",
    ),
    MistakeKind.SIMPLIFICATION: (
        "Simplify your answer.",
        "Divide the numerator and denominator by their greatest common divisor.",
    ),
    MistakeKind.CALCULATION: (
        "Check your calculation again.",
        "Work through it one step at a time.",
    ),
    MistakeKind.CONCEPTUAL: (
        "Think about what the fraction means.",
        "Try picturing it as parts of a whole.",
    ),
    MistakeKind.CONVERSION: (
        "Check how you converted the number.",
        "Remember: whole × denominator + numerator gives the improper numerator.",
    ),
    MistakeKind.SIGN: (
        "Watch the sign.",
        "Review the rules for negative numbers.",
    ),
    MistakeKind.ORDER: (
        "The values are right but the order is not.",
        "Rewrite them over a common denominator, then sort by numerator.",
    ),
    MistakeKind.INTERPRETATION: (
        "Read the question again.",
        "Focus on the key words, and answer in the format asked.",
    ),
}

_FALLBACK = ("Not quite. Think it over once more.", "Use a hint if you're stuck.")


@dataclass(frozen=True)
class Feedback:
    """Text shown to the learner after a submission."""

    title: str
    message: str
    suggestion: str | None = None


def feedback_for(result: ValidationResult, attempt: int = 0) -> Feedback:
    """
    Build feedback for a validation result.

    Args:
        result: Outcome of validate()
        attempt: Rotates the success message so repeats vary

    Returns:
        Feedback with a suggestion for incorrect answers
    """
    if result.is_correct:
        return Feedback(title="Correct", message=SUCCESS_MESSAGES[attempt % len(SUCCESS_MESSAGES)])

    message, suggestion = _MESSAGES.get(result.mistake_kind, _FALLBACK)
    title = "Incorrect"
    if result.mistake_kind is not None:
        title = f"Incorrect · {result.mistake_kind.display_name}"
    return Feedback(title=title, message=message, suggestion=suggestion)
