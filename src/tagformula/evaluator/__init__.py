"""
Formula evaluation over token sequences.
"""

from tagformula.evaluator.formula_evaluator import (
    EvaluationResult,
    FormulaEvaluator,
    evaluate_tokens,
)

__all__ = [
    "EvaluationResult",
    "FormulaEvaluator",
    "evaluate_tokens",
]
