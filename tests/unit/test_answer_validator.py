"""
Unit tests for answer validation.

Tests:
- Correctness per answer kind (fraction, sequence, comparison)
- Mistake classification order
- Text parsing and wrong-shape answers
- Feedback messages
- Checker registry

Run: pytest tests/unit/test_answer_validator.py -v
"""

import pytest

from src.adaptive.default_problems import load_default_bank
from src.core.fraction import Fraction
from src.core.problem import (
    AnswerForm,
    AnswerKind,
    ComparisonSymbol,
    Problem,
    ProblemType,
    SkillMode,
)
from src.validation import (
    MistakeKind,
    feedback_for,
    get_checker,
    normalize_answer,
    validate,
)
from src.validation.comparison import ComparisonChecker
from src.validation.feedback import SUCCESS_MESSAGES
from src.validation.multi_fraction import MultiFractionChecker
from src.validation.numeric import NumericChecker, satisfies_form


def f(text):
    return Fraction.parse(text)


@pytest.fixture
def bank():
    return load_default_bank()


class TestNumericCorrect:
    """Single-fraction answers that are accepted."""

    def test_exact_answer(self, addition_problem):
        result = validate(addition_problem, f("7/12"))
        assert result.is_correct
        assert result.mistake_kind is None

    def test_text_answer(self, addition_problem):
        assert validate(addition_problem, " 7/12 ").is_correct

    def test_mixed_form_accepted_for_lowest_terms(self, bank):
        """1 7/12 and 19/12 are both in lowest terms."""
        problem = bank.get("subtract-2")
        assert validate(problem, "1 7/12").is_correct
        assert validate(problem, "19/12").is_correct

    def test_normalized_values(self, half_problem):
        result = validate(half_problem, f("1/2"))
        assert result.normalized_user_answer == f("1/2")
        assert result.normalized_expected_answer == f("1/2")


class TestMistakeClassification:
    """Mistake hypotheses, first match wins."""

    def test_unreduced_is_simplification(self, half_problem):
        """{2, 4} against {1, 2}."""
        result = validate(half_problem, Fraction(2, 4))
        assert not result.is_correct
        assert result.mistake_kind is MistakeKind.SIMPLIFICATION
        assert result.normalized_user_answer == f("1/2")
        assert result.normalized_expected_answer == f("1/2")

    def test_unreduced_mixed_is_simplification(self, bank):
        assert validate(bank.get("subtract-2"), "1 14/24").mistake_kind is MistakeKind.SIMPLIFICATION

    def test_improper_remainder_is_simplification(self):
        problem = Problem(
            id="p",
            skill_mode=SkillMode.ADDITION,
            problem_type=ProblemType.CALCULATE,
            difficulty=2,
            operands=(f("2"), f("1/4")),
            expected_answer=f("9/4"),
        )
        result = validate(problem, "1 5/4")
        assert result.mistake_kind is MistakeKind.SIMPLIFICATION

    def test_negated_is_sign(self, half_problem):
        assert validate(half_problem, "-1/2").mistake_kind is MistakeKind.SIGN

    def test_negated_unreduced_is_sign(self, half_problem):
        """Wrong sign and left unreduced: the sign is the mistake to report."""
        assert validate(half_problem, "-2/4").mistake_kind is MistakeKind.SIGN

    def test_negated_mixed_is_sign(self, bank):
        assert validate(bank.get("subtract-2"), "-1 7/12").mistake_kind is MistakeKind.SIGN

    def test_naive_addition_is_common_denominator(self, addition_problem):
        """1/3 + 1/4 answered as 2/7."""
        result = validate(addition_problem, "2/7")
        assert result.mistake_kind is MistakeKind.COMMON_DENOMINATOR

    def test_naive_subtraction_is_common_denominator(self):
        problem = Problem(
            id="p",
            skill_mode=SkillMode.SUBTRACTION,
            problem_type=ProblemType.CALCULATE,
            difficulty=2,
            operands=(f("3/5"), f("1/3")),
            expected_answer=f("4/15"),
        )
        assert validate(problem, "2/2").mistake_kind is MistakeKind.COMMON_DENOMINATOR

    def test_naive_subtraction_with_equal_denominators_skipped(self, bank):
        """4/7 - 2/7 would give a zero denominator; no hypothesis."""
        result = validate(bank.get("subtract-1"), "3/7")
        assert result.mistake_kind is MistakeKind.CALCULATION

    def test_other_wrong_value_is_calculation(self, addition_problem):
        assert validate(addition_problem, "5/12").mistake_kind is MistakeKind.CALCULATION

    def test_wrong_concept_answer_is_conceptual(self, bank):
        assert validate(bank.get("concept-1"), "1/4").mistake_kind is MistakeKind.CONCEPTUAL


class TestConversion:
    """Mixed/improper conversion problems."""

    def test_correct_mixed(self, to_mixed_problem):
        assert validate(to_mixed_problem, "2 3/4").is_correct

    def test_improper_left_as_is(self, to_mixed_problem):
        """Right value in the wrong form."""
        result = validate(to_mixed_problem, "11/4")
        assert not result.is_correct
        assert result.mistake_kind is MistakeKind.CONVERSION

    def test_swapped_whole_and_numerator(self, to_mixed_problem):
        result = validate(to_mixed_problem, "3 2/4")
        assert result.mistake_kind is MistakeKind.CONVERSION

    def test_unreduced_remainder(self, to_mixed_problem):
        assert validate(to_mixed_problem, "2 6/8").mistake_kind is MistakeKind.SIMPLIFICATION

    def test_improper_target(self, bank):
        problem = bank.get("convert-2")
        assert validate(problem, "7/5").is_correct
        assert validate(problem, "1 2/5").mistake_kind is MistakeKind.CONVERSION
        assert validate(problem, "14/10").mistake_kind is MistakeKind.SIMPLIFICATION

    def test_whole_number_result(self):
        """12/4 as a mixed number is just 3."""
        problem = Problem(
            id="convert-whole",
            skill_mode=SkillMode.MIXED_CONVERSION,
            problem_type=ProblemType.CONVERT,
            difficulty=2,
            operands=(f("12/4"),),
            expected_answer=Fraction(0, 1, whole_number=3),
        )
        assert problem.effective_answer_form is AnswerForm.MIXED
        assert validate(problem, "3").is_correct
        assert validate(problem, "3 0/1").is_correct
        assert validate(problem, "12/4").mistake_kind is MistakeKind.SIMPLIFICATION
        assert validate(problem, "4").mistake_kind is MistakeKind.CALCULATION


class TestInterpretation:
    """Answers that cannot be read as the expected kind."""

    @pytest.mark.parametrize("text", ["", "abc", "1/0", "seven twelfths"])
    def test_unparseable_text(self, addition_problem, text):
        result = validate(addition_problem, text)
        assert result.mistake_kind is MistakeKind.INTERPRETATION
        assert result.normalized_user_answer is None
        assert result.normalized_expected_answer == f("7/12")

    def test_fraction_for_comparison(self, compare_problem):
        result = validate(compare_problem, f("6/8"))
        assert result.mistake_kind is MistakeKind.INTERPRETATION
        assert result.normalized_user_answer == f("3/4")

    def test_sequence_for_single_fraction(self, addition_problem):
        result = validate(addition_problem, (f("7/12"),))
        assert result.mistake_kind is MistakeKind.INTERPRETATION

    def test_unknown_object(self, addition_problem):
        result = validate(addition_problem, 0.58)
        assert result.mistake_kind is MistakeKind.INTERPRETATION
        assert result.normalized_user_answer is None


class TestSequences:
    """Multi-fraction answers."""

    def test_exact(self, expand_problem):
        assert validate(expand_problem, "4/12, 3/12").is_correct

    def test_list_input(self, expand_problem):
        assert validate(expand_problem, [f("4/12"), f("3/12")]).is_correct

    def test_equal_values_accepted(self, expand_problem):
        """Element-wise numeric equality: unexpanded values still match."""
        assert validate(expand_problem, "1/3; 1/4").is_correct

    def test_wrong_order(self, expand_problem):
        result = validate(expand_problem, "3/12, 4/12")
        assert result.mistake_kind is MistakeKind.ORDER

    def test_wrong_length(self, expand_problem):
        result = validate(expand_problem, "4/12")
        assert result.mistake_kind is MistakeKind.INTERPRETATION

    def test_wrong_value(self, expand_problem):
        result = validate(expand_problem, "4/12, 2/12")
        assert result.mistake_kind is MistakeKind.CALCULATION

    def test_empty_element(self, expand_problem):
        result = validate(expand_problem, "4/12,,3/12")
        assert result.mistake_kind is MistakeKind.INTERPRETATION

    def test_normalized_sequences(self, expand_problem):
        result = validate(expand_problem, "4/12, 3/12")
        assert result.normalized_user_answer == (f("1/3"), f("1/4"))
        assert result.normalized_expected_answer == (f("1/3"), f("1/4"))

    def test_ordering_problem(self, bank):
        problem = bank.get("compare-2")
        assert validate(problem, "2/5, 1/2, 3/4").is_correct
        assert validate(problem, "1/2, 2/5, 3/4").mistake_kind is MistakeKind.ORDER


class TestComparison:
    """Comparison symbol answers."""

    def test_correct_symbol(self, compare_problem):
        result = validate(compare_problem, ComparisonSymbol.GREATER)
        assert result.is_correct
        assert result.normalized_user_answer is ComparisonSymbol.GREATER

    def test_text_symbol(self, compare_problem):
        assert validate(compare_problem, " > ").is_correct

    def test_wrong_symbol_has_no_mistake_kind(self, compare_problem):
        result = validate(compare_problem, "<")
        assert not result.is_correct
        assert result.mistake_kind is None

    def test_invalid_symbol(self, compare_problem):
        assert validate(compare_problem, ">=").mistake_kind is MistakeKind.INTERPRETATION


class TestAnswerForms:
    """satisfies_form()."""

    @pytest.mark.parametrize(
        "text,form,ok",
        [
            ("6/8", AnswerForm.ANY, True),
            ("6/8", AnswerForm.LOWEST_TERMS, False),
            ("5/2", AnswerForm.LOWEST_TERMS, True),
            ("2 1/2", AnswerForm.LOWEST_TERMS, True),
            ("2 1/2", AnswerForm.IMPROPER, False),
            ("5/2", AnswerForm.IMPROPER, True),
            ("5/2", AnswerForm.MIXED, False),
            ("2 1/2", AnswerForm.MIXED, True),
            ("3", AnswerForm.MIXED, True),
            ("3 0/1", AnswerForm.MIXED, True),
            ("3", AnswerForm.IMPROPER, True),
            ("3 0/1", AnswerForm.IMPROPER, True),
            ("6/2", AnswerForm.MIXED, False),
        ],
    )
    def test_forms(self, text, form, ok):
        assert satisfies_form(f(text), form) is ok


class TestFeedback:
    """feedback_for()."""

    def test_success_rotates(self, half_problem):
        result = validate(half_problem, "1/2")
        first = feedback_for(result, attempt=0)
        second = feedback_for(result, attempt=1)
        assert first.title == "Correct"
        assert first.message == SUCCESS_MESSAGES[0]
        assert second.message == SUCCESS_MESSAGES[1]
        assert first.suggestion is None

    def test_mistake_feedback(self, half_problem):
        feedback = feedback_for(validate(half_problem, "2/4"))
        assert feedback.title == "Incorrect · Simplification"
        assert "Simplify" in feedback.message
        assert feedback.suggestion

    @pytest.mark.parametrize("kind", list(MistakeKind))
    def test_every_kind_has_feedback(self, half_problem, kind):
        from src.validation.base import ValidationResult

        result = ValidationResult(False, kind, None, normalize_answer(half_problem.expected_answer))
        feedback = feedback_for(result)
        assert feedback.message
        assert feedback.suggestion

    def test_unclassified_feedback(self, compare_problem):
        feedback = feedback_for(validate(compare_problem, "<"))
        assert feedback.title == "Incorrect"
        assert feedback.suggestion


class TestRegistry:
    """Checker registry."""

    def test_checkers_registered(self):
        assert isinstance(get_checker(AnswerKind.FRACTION), NumericChecker)
        assert isinstance(get_checker(AnswerKind.FRACTION_SEQUENCE), MultiFractionChecker)
        assert isinstance(get_checker(AnswerKind.COMPARISON), ComparisonChecker)

    def test_lookup_by_name(self):
        assert isinstance(get_checker("Fraction"), NumericChecker)

    def test_unknown_kind(self):
        assert get_checker("decimal") is None
