"""
Built-in problem set.

Design:
- Steps up from visual concept problems to abstract calculation
- Real-life contexts for application problems
- Small steps: every problem carries three progressive hints
"""

from __future__ import annotations

from src.adaptive.problem_bank import ProblemBank
from src.core.fraction import Fraction
from src.core.problem import ComparisonSymbol, Problem, ProblemType, SkillMode

DEFAULT_BANK_VERSION = "2024.1"


def _f(numerator: int, denominator: int, whole_number: int = 0) -> Fraction:
    return Fraction(numerator, denominator, whole_number=whole_number)


# =============================================================================
# Level 1: Concept
# =============================================================================

CONCEPT_PROBLEMS = [
    Problem(
        id="concept-1",
        skill_mode=SkillMode.CONCEPT,
        problem_type=ProblemType.IDENTIFY,
        difficulty=1,
        question="A pizza is cut into 4 equal slices and 3 are eaten. What fraction was eaten?",
        operands=(_f(3, 4),),
        expected_answer=_f(3, 4),
        hints=(
            "The whole pizza was cut into 4 slices",
            "3 slices were eaten",
            "The denominator counts the parts of the whole, the numerator the chosen parts",
        ),
    ),
    Problem(
        id="concept-2",
        skill_mode=SkillMode.CONCEPT,
        problem_type=ProblemType.CREATE,
        difficulty=1,
        question="A bar has 5 equal parts and 2 are coloured. Write the coloured part as a fraction.",
        operands=(_f(2, 5),),
        expected_answer=_f(2, 5),
        hints=(
            "How many parts is the whole split into?",
            "How many parts are coloured?",
            "Write the whole count as the denominator and the coloured count as the numerator",
        ),
    ),
    Problem(
        id="concept-3",
        skill_mode=SkillMode.CONCEPT,
        problem_type=ProblemType.IDENTIFY,
        difficulty=2,
        question="0 to 1 on a number line is split into 8 equal steps. The mark is 3 steps from 0. Which fraction is it?",
        operands=(_f(3, 8),),
        expected_answer=_f(3, 8),
        hints=(
            "The distance from 0 to 1 is split into 8 equal steps",
            "The mark is on the third step from the left",
            "That is three eighths",
        ),
    ),
]

# =============================================================================
# Level 2: Equivalent fractions
# =============================================================================

EQUIVALENT_PROBLEMS = [
    Problem(
        id="equivalent-1",
        skill_mode=SkillMode.EQUIVALENT,
        problem_type=ProblemType.SIMPLIFY,
        difficulty=2,
        question="Simplify 6/8.",
        operands=(_f(6, 8),),
        expected_answer=_f(3, 4),
        hints=(
            "Find the greatest common divisor of the numerator and denominator",
            "The greatest common divisor of 6 and 8 is 2",
            "Divide the numerator and the denominator by 2",
        ),
    ),
    Problem(
        id="equivalent-2",
        skill_mode=SkillMode.EQUIVALENT,
        problem_type=ProblemType.EXPAND,
        difficulty=2,
        question="Rewrite 1/3 and 1/4 over a common denominator.",
        operands=(_f(1, 3), _f(1, 4)),
        expected_answer=(_f(4, 12), _f(3, 12)),
        hints=(
            "Find the least common multiple of the denominators",
            "The least common multiple of 3 and 4 is 12",
            "Multiply each numerator and denominator by the same number",
        ),
    ),
]

# =============================================================================
# Level 3: Comparison
# =============================================================================

COMPARISON_PROBLEMS = [
    Problem(
        id="compare-1",
        skill_mode=SkillMode.COMPARISON,
        problem_type=ProblemType.COMPARE,
        difficulty=2,
        question="Which is larger, 2/3 or 3/5? Answer with <, = or >.",
        operands=(_f(2, 3), _f(3, 5)),
        expected_answer=ComparisonSymbol.GREATER,
        hints=(
            "Rewrite both over a common denominator and compare",
            "The least common multiple of 3 and 5 is 15",
            "2/3 = 10/15 and 3/5 = 9/15",
        ),
    ),
    Problem(
        id="compare-2",
        skill_mode=SkillMode.COMPARISON,
        problem_type=ProblemType.COMPARE,
        difficulty=3,
        question="Order 1/2, 2/5 and 3/4 from smallest to largest.",
        operands=(_f(1, 2), _f(2, 5), _f(3, 4)),
        expected_answer=(_f(2, 5), _f(1, 2), _f(3, 4)),
        hints=(
            "Rewrite all of them over a common denominator",
            "Try a denominator of 20",
            "2/5 = 8/20, 1/2 = 10/20, 3/4 = 15/20",
        ),
    ),
]

# =============================================================================
# Level 4-7: Arithmetic
# =============================================================================

ADDITION_PROBLEMS = [
    Problem(
        id="add-1",
        skill_mode=SkillMode.ADDITION,
        problem_type=ProblemType.CALCULATE,
        difficulty=2,
        question="1/5 + 2/5 = ?",
        operands=(_f(1, 5), _f(2, 5)),
        expected_answer=_f(3, 5),
        hints=(
            "With equal denominators, only the numerators are added",
            "1 + 2 = 3",
            "The answer is 3/5",
        ),
    ),
    Problem(
        id="add-2",
        skill_mode=SkillMode.ADDITION,
        problem_type=ProblemType.CALCULATE,
        difficulty=3,
        question="1/3 + 1/4 = ?",
        operands=(_f(1, 3), _f(1, 4)),
        expected_answer=_f(7, 12),
        hints=(
            "First rewrite both over a common denominator",
            "The least common multiple of 3 and 4 is 12",
            "4/12 + 3/12 = 7/12",
        ),
    ),
]

SUBTRACTION_PROBLEMS = [
    Problem(
        id="subtract-1",
        skill_mode=SkillMode.SUBTRACTION,
        problem_type=ProblemType.CALCULATE,
        difficulty=2,
        question="4/7 - 2/7 = ?",
        operands=(_f(4, 7), _f(2, 7)),
        expected_answer=_f(2, 7),
        hints=(
            "With equal denominators, only the numerators are subtracted",
            "4 - 2 = 2",
            "The answer is 2/7",
        ),
    ),
    Problem(
        id="subtract-2",
        skill_mode=SkillMode.SUBTRACTION,
        problem_type=ProblemType.CALCULATE,
        difficulty=4,
        question="2 1/3 - 3/4 = ?",
        operands=(_f(1, 3, 2), _f(3, 4)),
        expected_answer=_f(7, 12, 1),
        hints=(
            "Turn the mixed number into an improper fraction",
            "2 1/3 = 7/3",
            "Rewrite over a common denominator, then subtract",
        ),
    ),
]

MULTIPLICATION_PROBLEMS = [
    Problem(
        id="multiply-1",
        skill_mode=SkillMode.MULTIPLICATION,
        problem_type=ProblemType.CALCULATE,
        difficulty=3,
        question="2/3 × 3/4 = ?",
        operands=(_f(2, 3), _f(3, 4)),
        expected_answer=_f(1, 2),
        hints=(
            "Multiply numerators together and denominators together",
            "2 × 3 = 6 and 3 × 4 = 12",
            "6/12 simplifies to 1/2",
        ),
    ),
]

DIVISION_PROBLEMS = [
    Problem(
        id="divide-1",
        skill_mode=SkillMode.DIVISION,
        problem_type=ProblemType.CALCULATE,
        difficulty=4,
        question="3/4 ÷ 1/2 = ?",
        operands=(_f(3, 4), _f(1, 2)),
        expected_answer=_f(3, 2),
        hints=(
            "Dividing means multiplying by the reciprocal",
            "The reciprocal of 1/2 is 2/1",
            "3/4 × 2/1 = 6/4 = 3/2",
        ),
    ),
]

# =============================================================================
# Mixed number conversion
# =============================================================================

CONVERSION_PROBLEMS = [
    Problem(
        id="convert-1",
        skill_mode=SkillMode.MIXED_CONVERSION,
        problem_type=ProblemType.CONVERT,
        difficulty=2,
        question="Write 11/4 as a mixed number.",
        operands=(_f(11, 4),),
        expected_answer=_f(3, 4, 2),
        hints=(
            "How many whole 4/4 fit into 11/4?",
            "11 ÷ 4 = 2 remainder 3",
            "2 wholes and 3/4 left over",
        ),
    ),
    Problem(
        id="convert-2",
        skill_mode=SkillMode.MIXED_CONVERSION,
        problem_type=ProblemType.CONVERT,
        difficulty=2,
        question="Write 1 2/5 as an improper fraction.",
        operands=(_f(2, 5, 1),),
        expected_answer=_f(7, 5),
        hints=(
            "One whole is 5/5",
            "Multiply the whole part by the denominator: 1 × 5 = 5",
            "Add the numerator: 5 + 2 = 7",
        ),
    ),
    Problem(
        id="convert-3",
        skill_mode=SkillMode.MIXED_CONVERSION,
        problem_type=ProblemType.CONVERT,
        difficulty=3,
        question="Write 3 5/6 as an improper fraction.",
        operands=(_f(5, 6, 3),),
        expected_answer=_f(23, 6),
        hints=(
            "Three wholes are 18/6",
            "3 × 6 = 18",
            "18 + 5 = 23",
        ),
    ),
]

# =============================================================================
# Level 8: Application
# =============================================================================

APPLICATION_PROBLEMS = [
    Problem(
        id="word-1",
        skill_mode=SkillMode.APPLICATION,
        problem_type=ProblemType.WORD,
        difficulty=3,
        question=(
            "3/4 of a cake is left. It is shared equally by 3 people. "
            "What fraction of the whole cake does each person get?"
        ),
        operands=(_f(3, 4),),
        expected_answer=_f(1, 4),
        hints=(
            "Divide 3/4 by 3",
            "3/4 ÷ 3 = 3/4 × 1/3",
            "= 3/12 = 1/4",
        ),
    ),
    Problem(
        id="word-2",
        skill_mode=SkillMode.APPLICATION,
        problem_type=ProblemType.WORD,
        difficulty=4,
        question=(
            "A tank is 2/5 full of water. 3/4 of that water is used. "
            "What fraction of the whole tank was used?"
        ),
        operands=(_f(2, 5), _f(3, 4)),
        expected_answer=_f(3, 10),
        hints=(
            '"3/4 of" something means multiplying',
            "3/4 of 2/5 = 2/5 × 3/4",
            "= 6/20 = 3/10",
        ),
    ),
]

DEFAULT_PROBLEMS: tuple[Problem, ...] = (
    *CONCEPT_PROBLEMS,
    *EQUIVALENT_PROBLEMS,
    *COMPARISON_PROBLEMS,
    *ADDITION_PROBLEMS,
    *SUBTRACTION_PROBLEMS,
    *MULTIPLICATION_PROBLEMS,
    *DIVISION_PROBLEMS,
    *CONVERSION_PROBLEMS,
    *APPLICATION_PROBLEMS,
)


def load_default_bank() -> ProblemBank:
    """The built-in problem bank."""
    return ProblemBank(DEFAULT_PROBLEMS, version=DEFAULT_BANK_VERSION)
