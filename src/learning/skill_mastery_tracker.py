"""
Skill Mastery Tracker.

Folds graded attempts into a learner's MasteryRecord and derives the adaptive
difficulty signal consumed by problem selection.

Formula:
- mastery = 0.6 * accuracy% + 0.4 * min(attempts * 5, 30), clamped to 0-100
- overall = attempt-weighted mean of per-skill mastery
- signal  = over the last N attempts of a skill (N = window, default 5):
    increase  accuracy >= 85% and average hints <= 1
    decrease  accuracy < 60% or average hints > 3
    maintain  otherwise, or with fewer than min_attempts samples

Each fold also advances the learner's correct-answer streak and, when the
problem's difficulty is given, the per-difficulty attempted/correct counters.

fold() is pure: it returns a new record and never touches storage. The caller
persists the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from loguru import logger

from src.core.mastery import (
    UNCLASSIFIED,
    AttemptSample,
    DifficultyStats,
    MasteryRecord,
    SkillProgress,
)
from src.core.problem import SkillMode
from src.validation.base import ValidationResult

# Mastery score weights
ACCURACY_WEIGHT = 0.6
REPETITION_WEIGHT = 0.4
POINTS_PER_ATTEMPT = 5
REPETITION_CAP = 30

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class DifficultySignal(str, Enum):
    """Recommendation for the next problem's difficulty."""

    INCREASE = "increase"
    MAINTAIN = "maintain"
    DECREASE = "decrease"

    @property
    def arrow(self) -> str:
        return {
            DifficultySignal.INCREASE: "↑",
            DifficultySignal.MAINTAIN: "→",
            DifficultySignal.DECREASE: "↓",
        }[self]


@dataclass(frozen=True)
class DifficultyThresholds:
    """Window size and cut-offs for the difficulty signal."""

    window: int = 5
    min_attempts: int = 3
    increase_min_accuracy: float = 85.0
    increase_max_hints: float = 1.0
    decrease_max_accuracy: float = 60.0
    decrease_min_hints: float = 3.0

    def __post_init__(self) -> None:
        if self.window < 1:
            raise ValueError(f"window must be at least 1, got {self.window}")
        if not 1 <= self.min_attempts <= self.window:
            raise ValueError(
                f"min_attempts must be between 1 and window ({self.window}), "
                f"got {self.min_attempts}"
            )

    @classmethod
    def from_settings(cls, settings: Any) -> DifficultyThresholds:
        """Build thresholds from a config.Settings instance."""
        return cls(
            window=settings.difficulty_window,
            min_attempts=settings.difficulty_min_attempts,
            increase_min_accuracy=settings.increase_min_accuracy,
            increase_max_hints=settings.increase_max_hints,
            decrease_max_accuracy=settings.decrease_max_accuracy,
            decrease_min_hints=settings.decrease_min_hints,
        )


def compute_mastery_score(attempts: int, correct: int) -> float:
    """
    Mastery for one skill.

    Args:
        attempts: Total graded attempts
        correct: Correct attempts

    Returns:
        Score 0-100; 0 before the first attempt
    """
    if attempts <= 0:
        return 0.0
    accuracy = 100.0 * correct / attempts
    repetition = min(attempts * POINTS_PER_ATTEMPT, REPETITION_CAP)
    score = ACCURACY_WEIGHT * accuracy + REPETITION_WEIGHT * repetition
    return max(0.0, min(100.0, score))


def compute_overall_mastery(skills: Mapping[SkillMode, SkillProgress]) -> float:
    """Attempt-weighted mean of per-skill mastery scores."""
    total_attempts = sum(p.attempts for p in skills.values())
    if total_attempts == 0:
        return 0.0
    weighted = sum(p.mastery_score * p.attempts for p in skills.values())
    return weighted / total_attempts


def next_difficulty(current: int, signal: DifficultySignal) -> int:
    """Apply a signal to a difficulty level, clamped to 1-5."""
    if signal is DifficultySignal.INCREASE:
        current += 1
    elif signal is DifficultySignal.DECREASE:
        current -= 1
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, current))


def weakest_skills(
    record: MasteryRecord, limit: int = 3, threshold: float = 60.0
) -> list[SkillMode]:
    """
    Practised skills below a mastery threshold, weakest first.

    Args:
        record: Learner's mastery record
        limit: Maximum number of skills to return
        threshold: Mastery score below which a skill counts as weak

    Returns:
        Skill modes ordered by ascending mastery score
    """
    weak = [
        mode
        for mode in record.practised_skills
        if record.skills[mode].mastery_score < threshold
    ]
    weak.sort(key=lambda mode: record.skills[mode].mastery_score)
    return weak[:limit]


class MasteryTracker:
    """
    Fold validation outcomes into mastery records.

    Usage:
        tracker = MasteryTracker()
        record = tracker.fold(record, SkillMode.ADDITION, result, hints_used=1)
        signal = tracker.difficulty_signal(record, SkillMode.ADDITION)
    """

    def __init__(self, thresholds: DifficultyThresholds | None = None):
        self.thresholds = thresholds or DifficultyThresholds()

    @classmethod
    def from_settings(cls, settings: Any = None) -> MasteryTracker:
        """Create a tracker configured from settings (defaults to get_settings())."""
        if settings is None:
            from config import get_settings

            settings = get_settings()
        return cls(DifficultyThresholds.from_settings(settings))

    def fold(
        self,
        record: MasteryRecord,
        skill_mode: SkillMode,
        result: ValidationResult,
        hints_used: int = 0,
        difficulty: int | None = None,
    ) -> MasteryRecord:
        """
        Fold one graded attempt into a record.

        Args:
            record: Current record (left unchanged)
            skill_mode: Skill the problem trained
            result: Outcome of validate()
            hints_used: Hints revealed before answering
            difficulty: Problem difficulty 1-5, tallied in by_difficulty

        Returns:
            New MasteryRecord with the skill's counters, histogram, score and
            recent window updated, the streak advanced and the overall mastery
            recomputed

        Raises:
            ValueError: If hints_used is negative or difficulty is out of range
        """
        if hints_used < 0:
            raise ValueError(f"hints_used must be non-negative, got {hints_used}")
        if difficulty is not None and not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
            raise ValueError(f"difficulty must be 1..5, got {difficulty}")

        previous = record.skill(skill_mode)
        old_signal = self._signal_for(previous)

        attempts = previous.attempts + 1
        correct = previous.correct + (1 if result.is_correct else 0)

        histogram = dict(previous.mistake_histogram)
        if not result.is_correct:
            bucket = result.mistake_kind.value if result.mistake_kind else UNCLASSIFIED
            histogram[bucket] = histogram.get(bucket, 0) + 1

        sample = AttemptSample(is_correct=result.is_correct, hints_used=hints_used)
        recent = (previous.recent + (sample,))[-self.thresholds.window:]

        progress = SkillProgress(
            attempts=attempts,
            correct=correct,
            mistake_histogram=histogram,
            mastery_score=compute_mastery_score(attempts, correct),
            recent=recent,
        )

        skills = dict(record.skills)
        skills[skill_mode] = progress

        by_difficulty = dict(record.by_difficulty)
        if difficulty is not None:
            stats = by_difficulty.get(difficulty, DifficultyStats())
            by_difficulty[difficulty] = DifficultyStats(
                attempts=stats.attempts + 1,
                correct=stats.correct + (1 if result.is_correct else 0),
            )

        streak = record.current_streak + 1 if result.is_correct else 0
        updated = replace(
            record,
            skills=skills,
            overall_mastery=compute_overall_mastery(skills),
            current_streak=streak,
            best_streak=max(record.best_streak, streak),
            by_difficulty=by_difficulty,
        )

        logger.debug(
            f"Folded {skill_mode.value} attempt for {record.learner_id}: "
            f"correct={result.is_correct}, mastery {previous.mastery_score:.1f} -> "
            f"{progress.mastery_score:.1f}, overall {updated.overall_mastery:.1f}"
        )
        new_signal = self._signal_for(progress)
        if new_signal is not old_signal:
            logger.debug(
                f"Difficulty signal for {record.learner_id}/{skill_mode.value}: "
                f"{old_signal.value} -> {new_signal.value}"
            )
        return updated

    def difficulty_signal(self, record: MasteryRecord, skill_mode: SkillMode) -> DifficultySignal:
        """Adaptive difficulty signal from a skill's recent window."""
        return self._signal_for(record.skill(skill_mode))

    def recommend_difficulty(
        self, record: MasteryRecord, skill_mode: SkillMode, current: int
    ) -> int:
        """Next difficulty level for a skill, starting from the current one."""
        return next_difficulty(current, self.difficulty_signal(record, skill_mode))

    def _signal_for(self, progress: SkillProgress) -> DifficultySignal:
        t = self.thresholds
        samples = progress.recent[-t.window:]
        if len(samples) < t.min_attempts:
            return DifficultySignal.MAINTAIN

        accuracy = 100.0 * sum(1 for s in samples if s.is_correct) / len(samples)
        average_hints = sum(s.hints_used for s in samples) / len(samples)

        if accuracy >= t.increase_min_accuracy and average_hints <= t.increase_max_hints:
            return DifficultySignal.INCREASE
        if accuracy < t.decrease_max_accuracy or average_hints > t.decrease_min_hints:
            return DifficultySignal.DECREASE
        return DifficultySignal.MAINTAIN


_default_tracker = MasteryTracker()


def fold(
    record: MasteryRecord,
    skill_mode: SkillMode,
    result: ValidationResult,
    hints_used: int = 0,
    difficulty: int | None = None,
) -> MasteryRecord:
    """Fold with the default thresholds. See MasteryTracker.fold()."""
    return _default_tracker.fold(record, skill_mode, result, hints_used, difficulty)


def difficulty_signal(record: MasteryRecord, skill_mode: SkillMode) -> DifficultySignal:
    """Difficulty signal with the default thresholds."""
    return _default_tracker.difficulty_signal(record, skill_mode)
