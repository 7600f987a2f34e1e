"""
Problem solver.

Pre-computes the canonical answer of a problem from its operands, and the
derivation steps behind it, so a problem can be checked against the engine
and its worked solution shown on request.
"""

from __future__ import annotations

from src.arithmetic.comparison import compare, explain_comparison, order_ascending
from src.arithmetic.normalizer import (
    canonicalize,
    common_denominator,
    equals_as_number,
    reduce,
    to_improper,
    to_mixed,
)
from src.arithmetic.operations import (
    DerivationStep,
    OperationKind,
    OperationResult,
    StepKind,
    calculate,
)
from src.core.fraction import Fraction
from src.core.problem import (
    AnswerForm,
    AnswerKind,
    ExpectedAnswer,
    Problem,
    ProblemType,
    SkillMode,
)

_ARITHMETIC_MODES = {
    SkillMode.ADDITION: OperationKind.ADD,
    SkillMode.SUBTRACTION: OperationKind.SUBTRACT,
    SkillMode.MULTIPLICATION: OperationKind.MULTIPLY,
    SkillMode.DIVISION: OperationKind.DIVIDE,
}


def _chain(kind: OperationKind, operands: tuple[Fraction, ...]) -> list[OperationResult]:
    """Apply an operation left to right across all operands."""
    results = []
    current = operands[0]
    for operand in operands[1:]:
        result = calculate(kind, current, operand)
        results.append(result)
        current = result.result
    return results


def is_derivable(problem: Problem) -> bool:
    """True when the answer can be computed from the operands alone."""
    if not problem.operands:
        return False
    if problem.skill_mode in _ARITHMETIC_MODES:
        return len(problem.operands) >= 2
    if problem.skill_mode is SkillMode.COMPARISON:
        if problem.answer_kind is AnswerKind.COMPARISON:
            return len(problem.operands) == 2
        return problem.answer_kind is AnswerKind.FRACTION_SEQUENCE
    if problem.skill_mode is SkillMode.EQUIVALENT:
        return problem.problem_type in (ProblemType.SIMPLIFY, ProblemType.EXPAND)
    if problem.skill_mode is SkillMode.MIXED_CONVERSION:
        return len(problem.operands) == 1
    return False


def solve(problem: Problem) -> ExpectedAnswer:
    """
    Compute a problem's answer from its operands.

    Problems whose answer cannot be derived (concept and application
    problems, or unusual operand counts) return the stored expected answer.

    Raises:
        DivisionByZero: If a division problem divides by zero
    """
    if not is_derivable(problem):
        return problem.expected_answer

    operands = problem.operands
    mode = problem.skill_mode

    if mode in _ARITHMETIC_MODES:
        return _chain(_ARITHMETIC_MODES[mode], operands)[-1].result

    if mode is SkillMode.COMPARISON:
        if problem.answer_kind is AnswerKind.COMPARISON:
            return compare(operands[0], operands[1])
        return order_ascending(operands)

    if mode is SkillMode.EQUIVALENT:
        if problem.problem_type is ProblemType.EXPAND:
            return common_denominator(operands)
        return canonicalize(operands[0])

    # Mixed/improper conversion
    value = reduce(to_improper(operands[0]))
    if problem.effective_answer_form is AnswerForm.MIXED:
        return to_mixed(value)
    return value


def worked_steps(problem: Problem) -> tuple[DerivationStep, ...]:
    """Derivation steps for a problem's solution; empty when not derivable."""
    if not is_derivable(problem):
        return ()

    operands = problem.operands
    mode = problem.skill_mode

    if mode in _ARITHMETIC_MODES:
        steps: list[DerivationStep] = []
        for result in _chain(_ARITHMETIC_MODES[mode], operands):
            steps.extend(result.steps)
        return tuple(steps)

    if mode is SkillMode.COMPARISON:
        if problem.answer_kind is AnswerKind.COMPARISON:
            return explain_comparison(operands[0], operands[1]).steps
        rescaled = common_denominator(operands)
        return (
            DerivationStep(
                kind=StepKind.COMMON_DENOMINATOR,
                description="Rewrite every fraction over a common denominator",
                fractions=rescaled,
            ),
            DerivationStep(
                kind=StepKind.COMPARE,
                description="Order by numerator, smallest first",
                fractions=order_ascending(operands),
            ),
        )

    answer = solve(problem)
    if mode is SkillMode.EQUIVALENT:
        if problem.problem_type is ProblemType.EXPAND:
            return (
                DerivationStep(
                    kind=StepKind.COMMON_DENOMINATOR,
                    description="Rewrite every fraction over the least common denominator",
                    fractions=answer,
                ),
            )
        if answer == operands[0]:
            return ()
        return (
            DerivationStep(
                kind=StepKind.SIMPLIFY,
                description="Divide numerator and denominator by their greatest common divisor",
                fractions=(answer,),
            ),
        )

    description = (
        "Split the numerator into a whole part and a remainder"
        if answer.has_whole_part
        else "Multiply the whole part by the denominator and add the numerator"
    )
    return (DerivationStep(kind=StepKind.CONVERT, description=description, fractions=(answer,)),)


def answers_agree(a: ExpectedAnswer, b: ExpectedAnswer) -> bool:
    """Numeric agreement of two answers of any shape; sequences compare in order."""
    if isinstance(a, Fraction) and isinstance(b, Fraction):
        return equals_as_number(a, b)
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(equals_as_number(x, y) for x, y in zip(a, b))
    return a == b


def is_consistent(problem: Problem) -> bool:
    """True when a problem's stored answer matches the computed one."""
    return answers_agree(solve(problem), problem.expected_answer)
