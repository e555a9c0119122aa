"""Evaluator: последовательность токенов → результат или InvalidFormula

Алгоритм:
1. Каждый токен → фрагмент выражения:
   - NumberToken → float(raw)
   - PercentageToken → value / 100
   - TagToken → value, либо FormulaConfig.unresolved_tag_value для unresolved
   - OperatorToken → символ без изменений
2. Фрагменты склеиваются через пробел в инфиксное выражение (для отображения)
3. Выражение вычисляется shunting-yard evaluator'ом (core.math.expression)
4. Синтаксическая ошибка → EvaluationResult с error и маркером "Invalid formula"

Пересчёт всегда полный: кэша частичных результатов между правками нет.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from tagformula.config import INVALID_FORMULA_MARKER, FormulaConfig
from tagformula.core.domain.token import OperatorToken, TagToken, TokenVariant
from tagformula.core.math.expression import InvalidFormula, Lexeme, evaluate_lexemes, operand, symbol
from tagformula.core.math.numerical_safeguards import format_number

logger = logging.getLogger("tagformula.evaluator")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class EvaluationResult:
    """Результат вычисления формулы."""

    # Числовой результат (None при ошибке)
    value: Optional[float]

    # Текст ошибки InvalidFormula (None при успехе)
    error: Optional[str]

    # Выражение, построенное из токенов
    expression: str

    # Маркер для отображения ошибки
    invalid_marker: str = INVALID_FORMULA_MARKER

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        """Строка для UI: число или маркер "Invalid formula"."""
        if self.value is None:
            return self.invalid_marker
        return format_number(self.value)


# =============================================================================
# EVALUATOR
# =============================================================================


class FormulaEvaluator:
    """Evaluator формулы (stateless; конфигурация задаёт policy для unresolved tag)."""

    def __init__(self, config: Optional[FormulaConfig] = None):
        self.config = config or FormulaConfig()

    def operand_value(self, token: TokenVariant) -> float:
        """Числовое значение операнда.

        Raises:
            ValueError: для OperatorToken (у оператора нет значения)
        """
        if isinstance(token, OperatorToken):
            raise ValueError(f"Operator {token.symbol!r} has no operand value")
        if isinstance(token, TagToken):
            if token.value is None:
                return self.config.unresolved_tag_value
            return token.value
        return token.numeric_value

    def to_lexemes(self, tokens: Iterable[TokenVariant]) -> list[Lexeme]:
        return [
            symbol(token.symbol) if isinstance(token, OperatorToken) else operand(self.operand_value(token))
            for token in tokens
        ]

    def to_expression(self, tokens: Iterable[TokenVariant]) -> str:
        """Инфиксное выражение: фрагменты токенов через пробел."""
        return " ".join(
            token.symbol if isinstance(token, OperatorToken) else format_number(self.operand_value(token))
            for token in tokens
        )

    def evaluate(self, tokens: Iterable[TokenVariant]) -> EvaluationResult:
        """Вычисление формулы.

        Никогда не бросает исключений для пользовательского ввода: синтаксические
        ошибки возвращаются как EvaluationResult с error.
        """
        tokens = list(tokens)
        expression = self.to_expression(tokens)
        marker = self.config.invalid_formula_marker

        try:
            value = evaluate_lexemes(self.to_lexemes(tokens))
        except InvalidFormula as e:
            logger.debug("Invalid formula %r: %s", expression, e)
            return EvaluationResult(
                value=None, error=str(e), expression=expression, invalid_marker=marker
            )

        return EvaluationResult(value=value, error=None, expression=expression, invalid_marker=marker)


def evaluate_tokens(
    tokens: Iterable[TokenVariant],
    config: Optional[FormulaConfig] = None,
) -> EvaluationResult:
    """Вычисление формулы evaluator'ом с заданной (или дефолтной) конфигурацией."""
    return FormulaEvaluator(config).evaluate(tokens)
