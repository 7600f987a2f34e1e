"""
Core Mastery Module.

Canonical mastery state shared by the tracker, the progress store and the CLI.

Design:
- MasteryLevel: Enum for categorizing 0-100 mastery scores
- AttemptSample: One graded attempt kept in the recent window
- SkillProgress: Counters, mistake histogram and score for one skill
- DifficultyStats: Attempted/correct counters for one difficulty level
- MasteryRecord: Per-learner record covering every SkillMode, plus the
  correct-answer streak and per-difficulty statistics
- default_record(): The only way to start a record from nothing

Records are immutable. MasteryTracker.fold() returns a new record for every
graded attempt; nothing patches a record in place. Mapping fields are copied
into read-only proxies on construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from src.core.problem import SkillMode

# Histogram bucket for incorrect attempts without a classified mistake
UNCLASSIFIED = "unclassified"


class MasteryLevel(str, Enum):
    """
    Mastery level categorization.

    Aligned with learning science research on skill acquisition stages.
    """

    NOT_STARTED = "not_started"  # 0
    NOVICE = "novice"  # 1-39
    DEVELOPING = "developing"  # 40-69
    PROFICIENT = "proficient"  # 70-89
    MASTERED = "mastered"  # 90-100

    @classmethod
    def from_score(cls, score: float) -> MasteryLevel:
        """
        Convert a 0-100 mastery score to a level.

        Args:
            score: Mastery score between 0 and 100

        Returns:
            Corresponding MasteryLevel
        """
        if score <= 0:
            return cls.NOT_STARTED
        elif score < 40:
            return cls.NOVICE
        elif score < 70:
            return cls.DEVELOPING
        elif score < 90:
            return cls.PROFICIENT
        else:
            return cls.MASTERED

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ").title()

    @property
    def emoji(self) -> str:
        """Status emoji for CLI display."""
        return {
            MasteryLevel.NOT_STARTED: "○",
            MasteryLevel.NOVICE: "◔",
            MasteryLevel.DEVELOPING: "◑",
            MasteryLevel.PROFICIENT: "◕",
            MasteryLevel.MASTERED: "●",
        }[self]

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            MasteryLevel.NOT_STARTED: "dim",
            MasteryLevel.NOVICE: "red",
            MasteryLevel.DEVELOPING: "yellow",
            MasteryLevel.PROFICIENT: "cyan",
            MasteryLevel.MASTERED: "green",
        }[self]


@dataclass(frozen=True)
class AttemptSample:
    """One graded attempt in a skill's recent window."""

    is_correct: bool
    hints_used: int = 0


@dataclass(frozen=True)
class SkillProgress:
    """Progress on a single skill."""

    attempts: int = 0
    correct: int = 0
    mistake_histogram: Mapping[str, int] = field(default_factory=dict)
    mastery_score: float = 0.0  # 0-100
    recent: tuple[AttemptSample, ...] = ()  # oldest first

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "mistake_histogram", MappingProxyType(dict(self.mistake_histogram))
        )

    @property
    def accuracy(self) -> float:
        """Accuracy as percentage (0-100)."""
        if self.attempts == 0:
            return 0.0
        return 100.0 * self.correct / self.attempts

    @property
    def level(self) -> MasteryLevel:
        return MasteryLevel.from_score(self.mastery_score)

    @property
    def top_mistake(self) -> str | None:
        """Most frequent mistake bucket, ties broken by name."""
        if not self.mistake_histogram:
            return None
        return min(self.mistake_histogram.items(), key=lambda kv: (-kv[1], kv[0]))[0]


@dataclass(frozen=True)
class DifficultyStats:
    """Attempted and correct counts at one difficulty level."""

    attempts: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        if self.attempts == 0:
            return 0.0
        return 100.0 * self.correct / self.attempts


@dataclass(frozen=True)
class MasteryRecord:
    """
    Full mastery state for one learner.

    Every SkillMode has an entry, practised or not.
    """

    learner_id: str
    skills: Mapping[SkillMode, SkillProgress]
    overall_mastery: float = 0.0  # 0-100
    updated_at: str | None = None  # ISO format, stamped by the store
    current_streak: int = 0  # consecutive correct answers, any skill
    best_streak: int = 0
    by_difficulty: Mapping[int, DifficultyStats] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", MappingProxyType(dict(self.skills)))
        object.__setattr__(
            self, "by_difficulty", MappingProxyType(dict(sorted(self.by_difficulty.items())))
        )

    def skill(self, skill_mode: SkillMode) -> SkillProgress:
        return self.skills[skill_mode]

    @property
    def total_attempts(self) -> int:
        return sum(p.attempts for p in self.skills.values())

    @property
    def total_correct(self) -> int:
        return sum(p.correct for p in self.skills.values())

    @property
    def practised_skills(self) -> list[SkillMode]:
        return [mode for mode in SkillMode if self.skills[mode].attempts > 0]

    @property
    def level(self) -> MasteryLevel:
        return MasteryLevel.from_score(self.overall_mastery)


def default_record(learner_id: str) -> MasteryRecord:
    """Create an empty record with zero progress for every skill."""
    return MasteryRecord(
        learner_id=learner_id,
        skills={mode: SkillProgress() for mode in SkillMode},
    )


def format_progress_bar(score: float, width: int = 10) -> str:
    """
    Format a text progress bar.

    Args:
        score: Score 0-100
        width: Character width

    Returns:
        String like "████████░░"
    """
    filled = int(max(0.0, min(score, 100.0)) / 100 * width)
    empty = width - filled
    return "█" * filled + "░" * empty
