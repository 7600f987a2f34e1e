"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import get_settings
from src.core.fraction import Fraction
from src.core.mastery import default_record
from src.core.problem import ComparisonSymbol, Problem, ProblemType, SkillMode


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "learning: Mastery tracking and persistence tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "learning" in str(item.fspath):
            item.add_marker(pytest.mark.learning)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def f(text: str) -> Fraction:
    """Shorthand: parse a fraction literal."""
    return Fraction.parse(text)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    """Point settings at a temporary progress directory."""
    progress_dir = tmp_path / "progress"
    monkeypatch.setenv("FRACTION_TRAINER_PROGRESS_DIR", str(progress_dir))
    monkeypatch.setenv("FRACTION_TRAINER_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("FRACTION_TRAINER_LOG_FILE", raising=False)
    monkeypatch.delenv("FRACTION_TRAINER_PROBLEM_BANK_FILE", raising=False)
    get_settings.cache_clear()
    yield progress_dir
    get_settings.cache_clear()


@pytest.fixture
def empty_record():
    """A learner with no attempts."""
    return default_record("learner-1")


@pytest.fixture
def addition_problem():
    """1/3 + 1/4 = 7/12."""
    return Problem(
        id="add-test",
        skill_mode=SkillMode.ADDITION,
        problem_type=ProblemType.CALCULATE,
        difficulty=3,
        operands=(f("1/3"), f("1/4")),
        expected_answer=f("7/12"),
        hints=("Find a common denominator", "12", "4/12 + 3/12"),
    )


@pytest.fixture
def half_problem():
    """A problem whose expected answer is 1/2."""
    return Problem(
        id="multiply-test",
        skill_mode=SkillMode.MULTIPLICATION,
        problem_type=ProblemType.CALCULATE,
        difficulty=3,
        operands=(f("2/3"), f("3/4")),
        expected_answer=f("1/2"),
    )


@pytest.fixture
def compare_problem():
    """2/3 vs 3/5 -> '>'."""
    return Problem(
        id="compare-test",
        skill_mode=SkillMode.COMPARISON,
        problem_type=ProblemType.COMPARE,
        difficulty=2,
        operands=(f("2/3"), f("3/5")),
        expected_answer=ComparisonSymbol.GREATER,
    )


@pytest.fixture
def expand_problem():
    """1/3, 1/4 -> 4/12, 3/12."""
    return Problem(
        id="expand-test",
        skill_mode=SkillMode.EQUIVALENT,
        problem_type=ProblemType.EXPAND,
        difficulty=2,
        operands=(f("1/3"), f("1/4")),
        expected_answer=(f("4/12"), f("3/12")),
    )


@pytest.fixture
def to_mixed_problem():
    """11/4 -> 2 3/4."""
    return Problem(
        id="convert-test",
        skill_mode=SkillMode.MIXED_CONVERSION,
        problem_type=ProblemType.CONVERT,
        difficulty=2,
        operands=(f("11/4"),),
        expected_answer=f("2 3/4"),
    )
