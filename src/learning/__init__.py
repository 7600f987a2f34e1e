"""
Learning: Mastery tracking and persistence.

This package contains the learner-progress logic:
- skill_mastery_tracker: fold graded attempts into a MasteryRecord, derive
  the adaptive difficulty signal
- progress_store: JSON persistence of mastery records
"""

# Re-export key components for convenience
from src.learning.progress_store import ProgressStore, record_from_dict, record_to_dict
from src.learning.skill_mastery_tracker import (
    DifficultySignal,
    DifficultyThresholds,
    MasteryTracker,
    compute_mastery_score,
    compute_overall_mastery,
    difficulty_signal,
    fold,
    next_difficulty,
    weakest_skills,
)

__all__ = [
    # Tracker
    "MasteryTracker",
    "DifficultySignal",
    "DifficultyThresholds",
    "fold",
    "difficulty_signal",
    "next_difficulty",
    "weakest_skills",
    "compute_mastery_score",
    "compute_overall_mastery",
    # Persistence
    "ProgressStore",
    "record_to_dict",
    "record_from_dict",
]
