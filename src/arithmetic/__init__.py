"""
Arithmetic Module - Exact fraction arithmetic.

Components:
- normalizer: reduce / to_improper / to_mixed / equals_as_number and friends
- operations: add, subtract, multiply, divide with derivation steps
- comparison: compare, order_ascending, explain_comparison
- solver: pre-compute a problem's answer and its worked solution

Everything here is pure and deterministic; nothing logs or reads settings.
"""

from src.arithmetic.comparison import (
    ComparisonResult,
    compare,
    explain_comparison,
    order_ascending,
    order_descending,
)
from src.arithmetic.normalizer import (
    canonicalize,
    common_denominator,
    equals_as_number,
    equals_as_representation,
    gcd,
    is_canonical,
    is_reduced,
    lcm,
    negate,
    reciprocal,
    reduce,
    to_improper,
    to_mixed,
)
from src.arithmetic.operations import (
    OPERATIONS,
    DerivationStep,
    OperationKind,
    OperationResult,
    StepKind,
    add,
    calculate,
    divide,
    multiply,
    subtract,
)
from src.arithmetic.solver import answers_agree, is_consistent, is_derivable, solve, worked_steps

__all__ = [
    # Normalizer
    "gcd",
    "lcm",
    "reduce",
    "to_improper",
    "to_mixed",
    "equals_as_number",
    "equals_as_representation",
    "is_reduced",
    "is_canonical",
    "canonicalize",
    "negate",
    "reciprocal",
    "common_denominator",
    # Operations
    "OperationKind",
    "StepKind",
    "DerivationStep",
    "OperationResult",
    "OPERATIONS",
    "add",
    "subtract",
    "multiply",
    "divide",
    "calculate",
    # Comparison
    "ComparisonResult",
    "compare",
    "order_ascending",
    "order_descending",
    "explain_comparison",
    # Solver
    "solve",
    "worked_steps",
    "is_derivable",
    "is_consistent",
    "answers_agree",
]
