"""
Mastery record persistence.

Records are stored as JSON files, one per learner, in ~/.fraction_trainer/progress/
by default. Payloads are validated with pydantic on the way in; a file that
fails validation or cannot be read never reaches the tracker. load()
substitutes a default record for it. Derived values (per-skill mastery and
overall mastery) are recomputed from the stored counters, never trusted.

Writes go to a temporary file that replaces the target, so a crash mid-save
leaves the previous record intact. Concurrent sessions resolve by last write
wins.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from src.core.exceptions import MalformedProgress
from src.core.mastery import (
    AttemptSample,
    DifficultyStats,
    MasteryRecord,
    SkillProgress,
    default_record,
)
from src.core.problem import SkillMode
from src.learning.skill_mastery_tracker import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    compute_mastery_score,
    compute_overall_mastery,
)

# Default progress directory
PROGRESS_DIR = Path.home() / ".fraction_trainer" / "progress"

# Bumped when the payload shape changes incompatibly
SCHEMA_VERSION = 1

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")

# Stored counters must be real non-negative ints, not numeric strings
Count = Annotated[int, Field(strict=True, ge=0)]


# =============================================================================
# Payload models
# =============================================================================


class AttemptSamplePayload(BaseModel):
    is_correct: bool = Field(..., strict=True)
    hints_used: Count = 0


class DifficultyStatsPayload(BaseModel):
    attempts: Count = 0
    correct: Count = 0

    @model_validator(mode="after")
    def _correct_within_attempts(self) -> DifficultyStatsPayload:
        if self.correct > self.attempts:
            raise ValueError(
                f"correct ({self.correct}) exceeds attempts ({self.attempts})"
            )
        return self


class SkillProgressPayload(BaseModel):
    """Stored shape of one skill's progress."""

    attempts: Count = 0
    correct: Count = 0
    mistake_histogram: dict[str, Count] = Field(default_factory=dict)
    mastery_score: float = Field(0.0, ge=0.0, le=100.0, strict=True)
    recent: list[AttemptSamplePayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _correct_within_attempts(self) -> SkillProgressPayload:
        if self.correct > self.attempts:
            raise ValueError(
                f"correct ({self.correct}) exceeds attempts ({self.attempts})"
            )
        return self


class MasteryRecordPayload(BaseModel):
    """Stored shape of a learner's mastery record."""

    version: int = Field(SCHEMA_VERSION, strict=True)
    learner_id: str = Field(..., min_length=1, strict=True)
    skills: dict[str, SkillProgressPayload] = Field(default_factory=dict)
    overall_mastery: float = Field(0.0, ge=0.0, le=100.0, strict=True)
    updated_at: str | None = None
    current_streak: Count = 0
    best_streak: Count = 0
    by_difficulty: dict[str, DifficultyStatsPayload] = Field(default_factory=dict)

    @field_validator("skills")
    @classmethod
    def _known_skills(cls, value: dict[str, SkillProgressPayload]) -> dict[str, SkillProgressPayload]:
        known = {mode.value for mode in SkillMode}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ValueError(f"unknown skill modes: {', '.join(unknown)}")
        return value

    @field_validator("by_difficulty")
    @classmethod
    def _known_difficulties(
        cls, value: dict[str, DifficultyStatsPayload]
    ) -> dict[str, DifficultyStatsPayload]:
        allowed = {str(level) for level in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise ValueError(f"unknown difficulty levels: {', '.join(unknown)}")
        return value

    @model_validator(mode="after")
    def _streak_within_best(self) -> MasteryRecordPayload:
        if self.current_streak > self.best_streak:
            raise ValueError(
                f"current_streak ({self.current_streak}) exceeds best_streak ({self.best_streak})"
            )
        return self

    @field_validator("version")
    @classmethod
    def _supported_version(cls, value: int) -> int:
        if value > SCHEMA_VERSION:
            raise ValueError(f"unsupported schema version {value}")
        return value


# =============================================================================
# Conversion
# =============================================================================


def record_to_dict(record: MasteryRecord) -> dict[str, Any]:
    """Convert a record to a JSON-serializable dictionary."""
    return {
        "version": SCHEMA_VERSION,
        "learner_id": record.learner_id,
        "overall_mastery": record.overall_mastery,
        "updated_at": record.updated_at,
        "current_streak": record.current_streak,
        "best_streak": record.best_streak,
        "by_difficulty": {
            str(level): {"attempts": stats.attempts, "correct": stats.correct}
            for level, stats in record.by_difficulty.items()
        },
        "skills": {
            mode.value: {
                "attempts": progress.attempts,
                "correct": progress.correct,
                "mistake_histogram": dict(progress.mistake_histogram),
                "mastery_score": progress.mastery_score,
                "recent": [
                    {"is_correct": s.is_correct, "hints_used": s.hints_used}
                    for s in progress.recent
                ],
            }
            for mode, progress in record.skills.items()
        },
    }


def record_from_dict(data: Any) -> MasteryRecord:
    """
    Rebuild a record from a stored dictionary.

    Skill modes missing from the payload get zero progress, so the result
    always covers every SkillMode. Mastery scores are recomputed from the
    stored attempts and correct counts.

    Raises:
        MalformedProgress: If the payload fails shape validation
    """
    learner_id = data.get("learner_id") if isinstance(data, dict) else None
    try:
        payload = MasteryRecordPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedProgress(
            f"Malformed progress record: {e.error_count()} validation error(s)\n{e}",
            learner_id=learner_id if isinstance(learner_id, str) else None,
        ) from e

    skills = dict(default_record(payload.learner_id).skills)
    for key, stored in payload.skills.items():
        skills[SkillMode(key)] = SkillProgress(
            attempts=stored.attempts,
            correct=stored.correct,
            mistake_histogram=dict(stored.mistake_histogram),
            mastery_score=compute_mastery_score(stored.attempts, stored.correct),
            recent=tuple(
                AttemptSample(is_correct=s.is_correct, hints_used=s.hints_used)
                for s in stored.recent
            ),
        )

    return MasteryRecord(
        learner_id=payload.learner_id,
        skills=skills,
        overall_mastery=compute_overall_mastery(skills),
        updated_at=payload.updated_at,
        current_streak=payload.current_streak,
        best_streak=payload.best_streak,
        by_difficulty={
            int(level): DifficultyStats(attempts=stats.attempts, correct=stats.correct)
            for level, stats in payload.by_difficulty.items()
        },
    )


# =============================================================================
# Store
# =============================================================================


class ProgressStore:
    """
    Load/save mastery records as JSON files.

    Files are named {learner_id}.json, with characters outside
    [A-Za-z0-9_.-] replaced by "_".
    """

    def __init__(self, progress_dir: Path | str | None = None):
        self.progress_dir = Path(progress_dir).expanduser() if progress_dir else PROGRESS_DIR
        self.progress_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings: Any = None) -> ProgressStore:
        """Create a store in the configured progress directory."""
        if settings is None:
            from config import get_settings

            settings = get_settings()
        return cls(settings.progress_dir)

    def path_for(self, learner_id: str) -> Path:
        """File path holding a learner's record."""
        if not learner_id or not learner_id.strip():
            raise ValueError("learner_id is required")
        safe = _UNSAFE_CHARS.sub("_", learner_id.strip())
        if set(safe) <= {"."}:
            safe = safe.replace(".", "_")
        return self.progress_dir / f"{safe}.json"

    def exists(self, learner_id: str) -> bool:
        return self.path_for(learner_id).exists()

    def load(self, learner_id: str) -> MasteryRecord:
        """
        Load a learner's record.

        Returns a default record when nothing is stored yet, and also (with a
        warning) when the stored file is unreadable or malformed.
        """
        filepath = self.path_for(learner_id)
        if not filepath.exists():
            return default_record(learner_id)

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            record = record_from_dict(data)
        except OSError as e:
            logger.warning(f"Progress for {learner_id} is unreadable, starting fresh: {e}")
            return default_record(learner_id)
        except (json.JSONDecodeError, UnicodeDecodeError, MalformedProgress) as e:
            logger.warning(f"Progress for {learner_id} is malformed, starting fresh: {e}")
            return default_record(learner_id)

        if record.learner_id != learner_id:
            logger.warning(
                f"Progress file {filepath.name} belongs to {record.learner_id}, starting fresh"
            )
            return default_record(learner_id)
        return record

    def save(self, record: MasteryRecord) -> MasteryRecord:
        """
        Save a record, replacing any stored version.

        Returns:
            The record stamped with its save time
        """
        stamped = replace(record, updated_at=datetime.now().isoformat())
        filepath = self.path_for(record.learner_id)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{filepath.stem}.", suffix=".tmp", dir=self.progress_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record_to_dict(stamped), f, indent=2)
            os.replace(tmp_name, filepath)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved progress for {record.learner_id} to {filepath}")
        return stamped

    def delete(self, learner_id: str) -> bool:
        """Delete a learner's stored record."""
        filepath = self.path_for(learner_id)
        if filepath.exists():
            filepath.unlink()
            return True
        return False

    def list_learners(self) -> list[str]:
        """Learner ids of all readable stored records, sorted."""
        learners = []
        for filepath in sorted(self.progress_dir.glob("*.json")):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
                learners.append(record_from_dict(data).learner_id)
            except (OSError, json.JSONDecodeError, UnicodeDecodeError, MalformedProgress):
                continue
        return sorted(learners)
