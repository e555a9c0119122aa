"""
Contract Validation Module

Модуль для валидации JSON контрактов внешних провайдеров tagformula.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    SuggestionListValidator,
    validate_suggestion_list,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SuggestionListValidator",
    # Functions
    "validate_suggestion_list",
]
