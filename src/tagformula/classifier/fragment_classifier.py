"""Classifier: фрагмент текста → токен формулы

Фрагмент - trimmed текст, который пользователь зафиксировал Enter/Space.
Результат - ноль или один токен. Фрагмент, не подошедший ни под одно
правило, отбрасывается (rejected fragment): это no-op, а не ошибка.

Порядок правил (первое совпадение побеждает):
1. NUMBER_PATTERN → NumberToken
2. PERCENTAGE_PATTERN → PercentageToken
3. Один из OPERATOR_SYMBOLS → OperatorToken
4. Точное (case-sensitive) совпадение с именем suggestion → TagToken
5. Иначе → None

Числовые и операторные правила идут раньше тегов: имя тега, похожее на
число ("2024"), всегда классифицируется как число.
"""

import logging
from typing import Iterable, Optional, Union

from tagformula.core.domain.suggestion import Suggestion
from tagformula.core.domain.token import (
    NUMBER_PATTERN,
    OPERATOR_SYMBOLS,
    PERCENTAGE_PATTERN,
    NumberToken,
    OperatorToken,
    PercentageToken,
    TokenVariant,
)
from tagformula.suggestions.provider import SuggestionSnapshot, find_by_name

logger = logging.getLogger("tagformula.classifier")

SuggestionSource = Optional[Union[SuggestionSnapshot, Iterable[Suggestion]]]


class FragmentClassifier:
    """Классификатор фрагментов (stateless, чистая функция от двух входов)."""

    def classify(
        self,
        fragment: str,
        suggestions: SuggestionSource = None,
    ) -> Optional[TokenVariant]:
        """Классификация фрагмента.

        Args:
            fragment: текст, зафиксированный пользователем (обрезается по краям)
            suggestions: текущий snapshot подсказок; None - ещё не загружен

        Returns:
            Токен или None для пустого / нераспознанного фрагмента
        """
        text = fragment.strip()
        if not text:
            return None

        # 1-2. Числовые литералы
        if NUMBER_PATTERN.fullmatch(text):
            return NumberToken(raw=text)

        if PERCENTAGE_PATTERN.fullmatch(text):
            return PercentageToken(raw=text)

        # 3. Оператор или скобка
        if text in OPERATOR_SYMBOLS:
            return OperatorToken(symbol=text)

        # 4. Тег из snapshot
        match = self._find_suggestion(text, suggestions)
        if match is not None:
            return match.to_tag()

        logger.debug("Rejected fragment %r: no classification rule matched", text)
        return None

    @staticmethod
    def _find_suggestion(name: str, suggestions: SuggestionSource) -> Optional[Suggestion]:
        if suggestions is None:
            return None
        if isinstance(suggestions, SuggestionSnapshot):
            return suggestions.find_by_name(name)
        return find_by_name(suggestions, name)


_DEFAULT_CLASSIFIER = FragmentClassifier()


def classify_fragment(
    fragment: str,
    suggestions: SuggestionSource = None,
) -> Optional[TokenVariant]:
    """Классификация фрагмента классификатором по умолчанию."""
    return _DEFAULT_CLASSIFIER.classify(fragment, suggestions)
