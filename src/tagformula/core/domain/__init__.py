"""
Domain models and value objects.

Contains the formula token variants and the suggestion record model.
"""

from tagformula.core.domain.suggestion import Suggestion
from tagformula.core.domain.token import (
    NUMBER_PATTERN,
    OPERATOR_SYMBOLS,
    PERCENTAGE_PATTERN,
    InvalidTokenFormat,
    NumberToken,
    OperatorToken,
    PercentageToken,
    TagToken,
    Token,
    TokenVariant,
    make_number,
    make_operator,
    make_percentage,
    make_tag,
    token_from_dict,
)

__all__ = [
    # Token patterns
    "NUMBER_PATTERN",
    "PERCENTAGE_PATTERN",
    "OPERATOR_SYMBOLS",
    # Token model
    "Token",
    "TokenVariant",
    "NumberToken",
    "PercentageToken",
    "OperatorToken",
    "TagToken",
    "InvalidTokenFormat",
    "make_number",
    "make_percentage",
    "make_operator",
    "make_tag",
    "token_from_dict",
    # Suggestion model
    "Suggestion",
]
