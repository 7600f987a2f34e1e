"""
Adaptive problem supply.

Components:
- ProblemBank: Read-only, versioned problem collection (JSON or in code)
- load_default_bank(): The built-in problem set
- ProblemSelector: Random selection with explicit exclude_ids and nearest-
  difficulty fallback
"""
from src.adaptive.default_problems import DEFAULT_BANK_VERSION, DEFAULT_PROBLEMS, load_default_bank
from src.adaptive.problem_bank import ProblemBank, problem_from_dict, problem_to_dict
from src.adaptive.problem_selector import ProblemSelector

__all__ = [
    "ProblemBank",
    "ProblemSelector",
    "load_default_bank",
    "problem_from_dict",
    "problem_to_dict",
    "DEFAULT_PROBLEMS",
    "DEFAULT_BANK_VERSION",
]
