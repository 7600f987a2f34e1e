"""
Unit tests for the JSON progress store.

Tests:
- Save/load round trip
- Malformed or foreign files fall back to a default record
- Payload validation (record_from_dict)
- File naming, atomic writes, listing and deletion
- Unreadable files and recomputed mastery scores

Run: pytest tests/unit/test_progress_store.py -v
"""

import json

import pytest

from src.core.exceptions import MalformedProgress
from src.core.mastery import default_record
from src.core.problem import SkillMode
from src.learning.progress_store import (
    SCHEMA_VERSION,
    ProgressStore,
    record_from_dict,
    record_to_dict,
)
from src.learning.skill_mastery_tracker import fold
from src.validation import MistakeKind, ValidationResult


def _result(is_correct, mistake_kind=None):
    return ValidationResult(
        is_correct=is_correct,
        mistake_kind=mistake_kind,
        normalized_user_answer=None,
        normalized_expected_answer=None,
    )


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress")


@pytest.fixture
def practised_record(empty_record):
    record = fold(empty_record, SkillMode.ADDITION, _result(True), hints_used=1)
    record = fold(record, SkillMode.ADDITION, _result(False, MistakeKind.COMMON_DENOMINATOR))
    return fold(record, SkillMode.DIVISION, _result(False))


class TestRoundTrip:
    """save() then load()."""

    def test_missing_learner_gets_default_record(self, store):
        record = store.load("nobody")
        assert record == default_record("nobody")
        assert not store.exists("nobody")

    def test_round_trip(self, store, practised_record):
        saved = store.save(practised_record)
        loaded = store.load(practised_record.learner_id)
        assert loaded == saved
        assert loaded.skills[SkillMode.ADDITION].mistake_histogram == {"commonDenominator": 1}
        assert loaded.skills[SkillMode.DIVISION].mistake_histogram == {"unclassified": 1}
        assert loaded.skills[SkillMode.ADDITION].recent[0].hints_used == 1

    def test_save_stamps_updated_at(self, store, practised_record):
        assert practised_record.updated_at is None
        saved = store.save(practised_record)
        assert saved.updated_at is not None
        assert saved.skills == practised_record.skills

    def test_last_write_wins(self, store, empty_record, practised_record):
        store.save(practised_record)
        store.save(empty_record)
        assert store.load(empty_record.learner_id).total_attempts == 0

    def test_no_temporary_files_left(self, store, practised_record):
        store.save(practised_record)
        names = [p.name for p in store.progress_dir.iterdir()]
        assert names == ["learner-1.json"]

    def test_stored_json_shape(self, store, practised_record):
        store.save(practised_record)
        data = json.loads(store.path_for("learner-1").read_text(encoding="utf-8"))
        assert data["version"] == SCHEMA_VERSION
        assert set(data["skills"]) == {mode.value for mode in SkillMode}
        assert data["skills"]["addition"]["attempts"] == 2


class TestMalformedFiles:
    """Unreadable files never reach the caller."""

    def _write(self, store, learner_id, content):
        store.path_for(learner_id).write_text(content, encoding="utf-8")

    def test_invalid_json(self, store):
        self._write(store, "learner-1", "{not json")
        assert store.load("learner-1") == default_record("learner-1")

    def test_correct_exceeds_attempts(self, store):
        payload = {
            "learner_id": "learner-1",
            "skills": {"addition": {"attempts": 1, "correct": 2}},
        }
        self._write(store, "learner-1", json.dumps(payload))
        assert store.load("learner-1").total_attempts == 0

    def test_foreign_learner_id(self, store, practised_record):
        store.save(practised_record)
        store.path_for("learner-1").rename(store.path_for("learner-2"))
        assert store.load("learner-2") == default_record("learner-2")

    def test_binary_garbage(self, store):
        store.path_for("learner-1").write_bytes(b"\xff\xfe\x00garbage")
        assert store.load("learner-1") == default_record("learner-1")

    def test_unreadable_path(self, store):
        """A directory where the file should be is skipped like a malformed file."""
        store.path_for("learner-1").mkdir()
        assert store.load("learner-1") == default_record("learner-1")
        assert store.list_learners() == []


class TestRecordFromDict:
    """Payload validation."""

    def test_missing_skills_get_zero_progress(self):
        record = record_from_dict(
            {"learner_id": "a", "skills": {"addition": {"attempts": 2, "correct": 1, "mastery_score": 34.0}}}
        )
        assert set(record.skills) == set(SkillMode)
        assert record.skills[SkillMode.DIVISION].attempts == 0

    def test_mastery_score_recomputed(self):
        """A stored score that disagrees with the counters is ignored."""
        record = record_from_dict(
            {
                "learner_id": "a",
                "skills": {
                    "addition": {"attempts": 0, "correct": 0, "mastery_score": 70.0},
                    "division": {"attempts": 1, "correct": 1, "mastery_score": 5.0},
                },
            }
        )
        assert record.skills[SkillMode.ADDITION].mastery_score == 0.0
        assert record.skills[SkillMode.DIVISION].mastery_score == pytest.approx(62.0)
        assert record.overall_mastery == pytest.approx(62.0)

    def test_overall_mastery_recomputed(self):
        record = record_from_dict(
            {
                "learner_id": "a",
                "overall_mastery": 99.0,
                "skills": {"addition": {"attempts": 2, "correct": 1, "mastery_score": 34.0}},
            }
        )
        assert record.overall_mastery == pytest.approx(34.0)

    def test_round_trip_through_dict(self, practised_record):
        assert record_from_dict(record_to_dict(practised_record)) == practised_record

    def test_streak_and_difficulty_stats(self, empty_record):
        record = fold(empty_record, SkillMode.ADDITION, _result(True), difficulty=2)
        record = fold(record, SkillMode.ADDITION, _result(True), difficulty=3)
        data = record_to_dict(record)
        assert data["by_difficulty"] == {
            "2": {"attempts": 1, "correct": 1},
            "3": {"attempts": 1, "correct": 1},
        }
        loaded = record_from_dict(data)
        assert loaded == record
        assert loaded.current_streak == 2
        assert loaded.by_difficulty[3].correct == 1

    def test_older_payload_without_streak(self):
        record = record_from_dict({"learner_id": "a"})
        assert record.current_streak == 0
        assert record.by_difficulty == {}

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"learner_id": ""},
            {"learner_id": "a", "skills": {"geometry": {}}},
            {"learner_id": "a", "skills": {"addition": {"attempts": "3"}}},
            {"learner_id": "a", "skills": {"addition": {"attempts": -1}}},
            {"learner_id": "a", "skills": {"addition": {"mastery_score": 120.0}}},
            {"learner_id": "a", "skills": {"addition": {"recent": [{"is_correct": "yes"}]}}},
            {"learner_id": "a", "version": SCHEMA_VERSION + 1},
            {"learner_id": "a", "by_difficulty": {"7": {"attempts": 1}}},
            {"learner_id": "a", "by_difficulty": {"2": {"attempts": 1, "correct": 2}}},
            {"learner_id": "a", "current_streak": 3, "best_streak": 2},
        ],
    )
    def test_malformed_payloads(self, payload):
        with pytest.raises(MalformedProgress):
            record_from_dict(payload)

    def test_not_a_dict(self):
        with pytest.raises(MalformedProgress):
            record_from_dict(["learner"])

    def test_error_carries_learner_id(self):
        with pytest.raises(MalformedProgress) as exc_info:
            record_from_dict({"learner_id": "a", "skills": {"geometry": {}}})
        assert exc_info.value.learner_id == "a"


class TestFiles:
    """Naming, listing and deletion."""

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "progress"
        ProgressStore(target)
        assert target.is_dir()

    @pytest.mark.parametrize("learner_id", ["../escape", "a/b", "名前", "..", "x y"])
    def test_path_stays_in_directory(self, store, learner_id):
        path = store.path_for(learner_id)
        assert path.parent == store.progress_dir
        assert path.suffix == ".json"

    def test_empty_learner_id(self, store):
        with pytest.raises(ValueError):
            store.path_for("  ")

    def test_delete(self, store, practised_record):
        store.save(practised_record)
        assert store.delete("learner-1") is True
        assert store.delete("learner-1") is False
        assert not store.exists("learner-1")

    def test_list_learners_skips_malformed(self, store, practised_record):
        store.save(practised_record)
        store.save(default_record("another"))
        store.path_for("broken").write_text("[]", encoding="utf-8")
        assert store.list_learners() == ["another", "learner-1"]

    def test_from_settings(self, settings_env):
        store = ProgressStore.from_settings()
        assert store.progress_dir == settings_env
        assert settings_env.is_dir()
