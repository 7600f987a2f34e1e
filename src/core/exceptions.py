"""
Engine exceptions.

Only construction problems and impossible operations are errors. A wrong
answer or an unexpected comparison is an ordinary ValidationResult.
"""

from __future__ import annotations


class FractionEngineError(Exception):
    """Base class for all fraction engine errors."""
    pass


class InvalidFraction(FractionEngineError, ValueError):
    """Raised when a fraction has a zero, missing or negative part."""
    pass


class DivisionByZero(FractionEngineError, ZeroDivisionError):
    """Raised when dividing by a fraction whose value is zero."""
    pass


class InvalidProblem(FractionEngineError, ValueError):
    """Raised when a problem definition is inconsistent."""
    pass


class NoMatchingProblem(FractionEngineError, LookupError):
    """Raised when a problem query leaves no candidates."""

    def __init__(self, message: str, filters: dict | None = None):
        super().__init__(message)
        self.filters = filters or {}


class MalformedProgress(FractionEngineError, ValueError):
    """Raised when a stored mastery record fails shape validation."""

    def __init__(self, message: str, learner_id: str | None = None):
        super().__init__(message)
        self.learner_id = learner_id
