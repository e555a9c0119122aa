"""
FormulaConfig: политики вычисления и редактирования формулы

Все policy-константы собраны в одном месте, чтобы выбор (например,
значение по умолчанию для unresolved tag) был явным, а не спрятанным
в коде evaluator'а.
"""

import math
from dataclasses import dataclass
from typing import Final

# =============================================================================
# DEFAULTS
# =============================================================================

# Значение, которое подставляется вместо TagToken без resolved value.
# Ранние версии UI использовали 0, актуальная использует 1.
UNRESOLVED_TAG_VALUE_DEFAULT: Final[float] = 1.0

# Маркер, который показывается вместо числа при InvalidFormula
INVALID_FORMULA_MARKER: Final[str] = "Invalid formula"

# Опции, которые пользователь может выбрать для тега
TAG_OPTIONS_DEFAULT: Final[tuple[str, ...]] = ("Option 1", "Option 2")


@dataclass(frozen=True)
class FormulaConfig:
    """Конфигурация сессии редактирования формулы.

    Attributes:
        unresolved_tag_value: значение для TagToken без value
        invalid_formula_marker: строка результата при InvalidFormula
        tag_options: допустимые опции тега (пустой tuple - опции отключены)
    """

    unresolved_tag_value: float = UNRESOLVED_TAG_VALUE_DEFAULT
    invalid_formula_marker: str = INVALID_FORMULA_MARKER
    tag_options: tuple[str, ...] = TAG_OPTIONS_DEFAULT

    def __post_init__(self) -> None:
        if not math.isfinite(self.unresolved_tag_value):
            raise ValueError(
                f"unresolved_tag_value must be finite, got {self.unresolved_tag_value}"
            )
        if not self.invalid_formula_marker:
            raise ValueError("invalid_formula_marker cannot be empty")
        if any(not option for option in self.tag_options):
            raise ValueError(f"tag_options cannot contain empty strings: {self.tag_options}")
