"""
Problem selection.

Picks the next problem from a ProblemBank. The selector keeps no history:
callers pass the ids to avoid (typically the problems already shown this
session) as exclude_ids.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from loguru import logger

from src.adaptive.problem_bank import ProblemBank
from src.core.exceptions import NoMatchingProblem
from src.core.problem import Problem, ProblemType, SkillMode


class ProblemSelector:
    """
    Select problems uniformly at random among those matching the filters.

    Usage:
        selector = ProblemSelector(load_default_bank(), rng=random.Random(42))
        problem = selector.select_adaptive(SkillMode.ADDITION, 2, exclude_ids=seen)
    """

    def __init__(self, bank: ProblemBank, rng: random.Random | None = None):
        self.bank = bank
        self.rng = rng or random.Random()

    @classmethod
    def with_seed(cls, bank: ProblemBank, seed: int | None) -> ProblemSelector:
        return cls(bank, random.Random(seed))

    def select(
        self,
        skill_mode: SkillMode | None = None,
        difficulty: int | None = None,
        exclude_types: Iterable[ProblemType] = (),
        exclude_ids: Iterable[str] = (),
    ) -> Problem:
        """
        Pick one problem matching all filters.

        Raises:
            NoMatchingProblem: If no problem matches
        """
        exclude_types = tuple(exclude_types)
        exclude_ids = frozenset(exclude_ids)
        candidates = self.bank.query(
            skill_mode=skill_mode,
            difficulty=difficulty,
            exclude_types=exclude_types,
            exclude_ids=exclude_ids,
        )
        if not candidates:
            filters = {
                "skill_mode": skill_mode.value if skill_mode else None,
                "difficulty": difficulty,
                "exclude_types": [t.value for t in exclude_types],
                "exclude_ids": sorted(exclude_ids),
            }
            logger.debug(f"No problem matches {filters}")
            raise NoMatchingProblem("No problem matches the given filters", filters=filters)
        return self.rng.choice(candidates)

    def select_adaptive(
        self,
        skill_mode: SkillMode | None,
        difficulty: int,
        exclude_ids: Iterable[str] = (),
    ) -> Problem:
        """
        Pick a problem at the requested difficulty, else the nearest one.

        Difficulties are tried by distance from the requested level; at equal
        distance the easier level goes first.

        Raises:
            NoMatchingProblem: If no difficulty has a remaining problem
        """
        exclude_ids = frozenset(exclude_ids)
        levels = self.bank.difficulties(skill_mode)
        for level in sorted(levels, key=lambda d: (abs(d - difficulty), d)):
            try:
                problem = self.select(skill_mode, level, exclude_ids=exclude_ids)
            except NoMatchingProblem:
                continue
            if level != difficulty:
                logger.debug(
                    f"No problem at difficulty {difficulty}, using {level} instead"
                )
            return problem

        raise NoMatchingProblem(
            "No problem left to practice",
            filters={
                "skill_mode": skill_mode.value if skill_mode else None,
                "difficulty": difficulty,
                "exclude_ids": sorted(exclude_ids),
            },
        )
