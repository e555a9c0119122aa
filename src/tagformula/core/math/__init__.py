"""
Core math modules для tagformula

IEEE-754 примитивы и арифметический evaluator выражений.
"""

# Numerical Safeguards
from tagformula.core.math.numerical_safeguards import (
    NAN_TEXT,
    NEGATIVE_INFINITY_TEXT,
    POSITIVE_INFINITY_TEXT,
    format_number,
    ieee_divide,
    ieee_power,
    is_odd_integer,
    is_valid_float,
)

# Expression evaluator
from tagformula.core.math.expression import (
    BINARY_OPERATORS,
    CLOSE_PAREN,
    OPEN_PAREN,
    InvalidFormula,
    Lexeme,
    evaluate_expression,
    evaluate_lexemes,
    is_valid_expression,
    operand,
    symbol,
    tokenize,
)

__all__ = [
    # Numerical Safeguards - Display constants
    "NAN_TEXT",
    "NEGATIVE_INFINITY_TEXT",
    "POSITIVE_INFINITY_TEXT",
    # Numerical Safeguards - Functions
    "format_number",
    "ieee_divide",
    "ieee_power",
    "is_odd_integer",
    "is_valid_float",
    # Expression - Constants
    "BINARY_OPERATORS",
    "OPEN_PAREN",
    "CLOSE_PAREN",
    # Expression - Exceptions
    "InvalidFormula",
    # Expression - Types
    "Lexeme",
    # Expression - Functions
    "evaluate_expression",
    "evaluate_lexemes",
    "is_valid_expression",
    "operand",
    "symbol",
    "tokenize",
]
