"""
Problem bank.

A static, versioned collection of problems. The bank is read-only: queries
return tuples and never mutate the stored problems.

Banks can be built in code (see default_problems.py) or loaded from a JSON
file of the shape:

    {
      "version": "2024.1",
      "problems": [
        {"id": "add-1", "skill_mode": "addition", "problem_type": "calculate",
         "difficulty": 2,
         "operands": [{"numerator": 1, "denominator": 5}, ...],
         "expected_answer": {"fraction": {"numerator": 3, "denominator": 5}},
         "hints": ["..."], "question": "1/5 + 2/5 = ?"}
      ]
    }

expected_answer holds exactly one of "fraction", "fractions" or "comparison".
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from src.core.exceptions import InvalidFraction, InvalidProblem
from src.core.fraction import Fraction
from src.core.problem import (
    AnswerForm,
    ComparisonSymbol,
    ExpectedAnswer,
    Problem,
    ProblemType,
    SkillMode,
)


# =============================================================================
# Dict conversion
# =============================================================================


def _answer_to_dict(answer: ExpectedAnswer) -> dict[str, Any]:
    if isinstance(answer, Fraction):
        return {"fraction": answer.to_dict()}
    if isinstance(answer, ComparisonSymbol):
        return {"comparison": answer.value}
    return {"fractions": [f.to_dict() for f in answer]}


def _answer_from_dict(data: dict[str, Any]) -> ExpectedAnswer:
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidProblem(f"expected_answer needs exactly one entry, got {data!r}")
    if "fraction" in data:
        return Fraction.from_dict(data["fraction"])
    if "fractions" in data:
        return tuple(Fraction.from_dict(f) for f in data["fractions"])
    if "comparison" in data:
        try:
            return ComparisonSymbol.parse(data["comparison"])
        except ValueError as e:
            raise InvalidProblem(str(e)) from e
    raise InvalidProblem(f"Unknown expected_answer entry: {next(iter(data))!r}")


def problem_to_dict(problem: Problem) -> dict[str, Any]:
    """Convert a problem to a JSON-serializable dictionary."""
    data = {
        "id": problem.id,
        "skill_mode": problem.skill_mode.value,
        "problem_type": problem.problem_type.value,
        "difficulty": problem.difficulty,
        "operands": [f.to_dict() for f in problem.operands],
        "expected_answer": _answer_to_dict(problem.expected_answer),
        "hints": list(problem.hints),
        "question": problem.question,
    }
    if problem.answer_form is not None:
        data["answer_form"] = problem.answer_form.value
    return data


def problem_from_dict(data: dict[str, Any]) -> Problem:
    """
    Create a problem from a dictionary.

    Raises:
        InvalidProblem: If a field is missing or has an unknown value
        InvalidFraction: If an operand or answer fraction is invalid
    """
    problem_id = data.get("id", "<unknown>")
    try:
        return Problem(
            id=data["id"],
            skill_mode=SkillMode(data["skill_mode"]),
            problem_type=ProblemType(data["problem_type"]),
            difficulty=data["difficulty"],
            operands=tuple(Fraction.from_dict(f) for f in data.get("operands", [])),
            expected_answer=_answer_from_dict(data["expected_answer"]),
            hints=tuple(data.get("hints", [])),
            question=data.get("question", ""),
            answer_form=AnswerForm(data["answer_form"]) if data.get("answer_form") else None,
        )
    except KeyError as e:
        raise InvalidProblem(f"Problem {problem_id}: missing field {e.args[0]!r}") from e
    except (InvalidProblem, InvalidFraction):
        raise
    except ValueError as e:
        # Unknown enum value
        raise InvalidProblem(f"Problem {problem_id}: {e}") from e


# =============================================================================
# Bank
# =============================================================================


class ProblemBank:
    """
    Read-only, versioned problem collection.

    Usage:
        bank = load_default_bank()
        bank.query(skill_mode=SkillMode.ADDITION, difficulty=2, exclude_ids={"add-1"})
    """

    def __init__(self, problems: Iterable[Problem], version: str = "1"):
        self.version = version
        self._problems: dict[str, Problem] = {}
        for problem in problems:
            if problem.id in self._problems:
                raise InvalidProblem(f"Duplicate problem id: {problem.id}")
            self._problems[problem.id] = problem

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemBank:
        """Create a bank from {"version": ..., "problems": [...]}."""
        if not isinstance(data, dict) or not isinstance(data.get("problems"), list):
            raise InvalidProblem("Problem bank needs a 'problems' list")
        return cls(
            (problem_from_dict(p) for p in data["problems"]),
            version=str(data.get("version", "1")),
        )

    @classmethod
    def from_file(cls, path: Path | str) -> ProblemBank:
        """Load a bank from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            bank = cls.from_dict(json.load(f))
        logger.debug(f"Loaded {len(bank)} problems (version {bank.version}) from {path}")
        return bank

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "problems": [problem_to_dict(p) for p in self._problems.values()],
        }

    def __len__(self) -> int:
        return len(self._problems)

    def __iter__(self):
        return iter(self._problems.values())

    def __contains__(self, problem_id: object) -> bool:
        return problem_id in self._problems

    @property
    def problems(self) -> tuple[Problem, ...]:
        return tuple(self._problems.values())

    @property
    def skill_modes(self) -> list[SkillMode]:
        """Skill modes with at least one problem, in SkillMode order."""
        present = {p.skill_mode for p in self._problems.values()}
        return [mode for mode in SkillMode if mode in present]

    def get(self, problem_id: str) -> Problem | None:
        return self._problems.get(problem_id)

    def by_mode(self, skill_mode: SkillMode) -> tuple[Problem, ...]:
        return self.query(skill_mode=skill_mode)

    def by_difficulty(self, difficulty: int) -> tuple[Problem, ...]:
        return self.query(difficulty=difficulty)

    def difficulties(self, skill_mode: SkillMode | None = None) -> list[int]:
        """Sorted distinct difficulty levels, optionally for one skill."""
        return sorted(
            {
                p.difficulty
                for p in self._problems.values()
                if skill_mode is None or p.skill_mode is skill_mode
            }
        )

    def query(
        self,
        skill_mode: SkillMode | None = None,
        difficulty: int | None = None,
        exclude_types: Iterable[ProblemType] = (),
        exclude_ids: Iterable[str] = (),
    ) -> tuple[Problem, ...]:
        """
        Filter problems, preserving bank order.

        Args:
            skill_mode: Only problems training this skill
            difficulty: Only problems at this difficulty
            exclude_types: Problem types to leave out
            exclude_ids: Problem ids to leave out (e.g. already seen this session)

        Returns:
            Matching problems (possibly empty)
        """
        excluded_types = set(exclude_types)
        excluded_ids = set(exclude_ids)
        return tuple(
            p
            for p in self._problems.values()
            if (skill_mode is None or p.skill_mode is skill_mode)
            and (difficulty is None or p.difficulty == difficulty)
            and p.problem_type not in excluded_types
            and p.id not in excluded_ids
        )
