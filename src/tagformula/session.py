"""FormulaSession: одна сессия редактирования формулы

Связывает компоненты в конвейер:
    ввод фрагмента → Classifier (по snapshot подсказок) → FormulaStore.insert
    → Evaluator пересчитывает всю последовательность → result

Store создаётся на старте сессии (или передаётся извне) и отбрасывается
в close(). Session подписана на store, поэтому пересчёт выполняется после
любой мутации, в том числе сделанной напрямую через session.store.

Все события синхронны: каждое выполняется до конца перед следующим.
"""

import logging
from typing import Optional

from tagformula.classifier import FragmentClassifier
from tagformula.config import FormulaConfig
from tagformula.core.domain.suggestion import Suggestion
from tagformula.core.domain.token import TagToken, TokenVariant
from tagformula.evaluator import EvaluationResult, FormulaEvaluator
from tagformula.store import FormulaStore
from tagformula.suggestions import SnapshotState, SuggestionProvider, SuggestionSnapshot

logger = logging.getLogger("tagformula.session")


class FormulaSession:
    """Сессия: store + snapshot подсказок + classifier + evaluator."""

    def __init__(
        self,
        config: Optional[FormulaConfig] = None,
        suggestions: Optional[SuggestionSnapshot] = None,
        store: Optional[FormulaStore] = None,
    ):
        """
        Args:
            config: политики вычисления (default: FormulaConfig())
            suggestions: snapshot подсказок (default: пустой, PENDING)
            store: последовательность токенов (default: новая пустая)
        """
        self.config = config or FormulaConfig()
        self.suggestions = suggestions if suggestions is not None else SuggestionSnapshot()
        self.store = store if store is not None else FormulaStore()
        self.classifier = FragmentClassifier()
        self.evaluator = FormulaEvaluator(self.config)

        self._result = self.evaluator.evaluate(self.store.tokens)
        self._unsubscribe = self.store.subscribe(self._on_store_changed)
        self._closed = False

    # -------------------------------------------------------------------------
    # Состояние для UI
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[TokenVariant, ...]:
        return self.store.tokens

    @property
    def cursor(self) -> int:
        return self.store.cursor

    @property
    def result(self) -> EvaluationResult:
        return self._result

    @property
    def display(self) -> str:
        return self._result.display

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # События ввода
    # -------------------------------------------------------------------------

    def submit_fragment(self, text: str) -> Optional[TokenVariant]:
        """Enter/Space: классификация фрагмента и вставка в позицию курсора.

        Returns:
            Вставленный токен или None (rejected fragment - состояние не меняется)
        """
        token = self.classifier.classify(text, self.suggestions)
        if token is None:
            return None
        self.store.insert(token, self.store.cursor)
        return token

    def choose_suggestion(self, suggestion: Suggestion) -> TagToken:
        """Клик по подсказке в dropdown: вставка тега в позицию курсора."""
        token = suggestion.to_tag()
        self.store.insert(token, self.store.cursor)
        return token

    def backspace(self, pending_text: str = "") -> Optional[TokenVariant]:
        """Backspace: удаляет токен перед курсором, только если поле ввода пусто."""
        if pending_text:
            return None
        return self.store.delete_before_cursor()

    def remove_token(self, index: int) -> Optional[TokenVariant]:
        """Кнопка удаления у токена (индекс вне диапазона - no-op)."""
        return self.store.remove_at(index)

    def select_token(self, index: int) -> int:
        """Клик по токену: курсор сразу за ним."""
        return self.store.select(index)

    def move_cursor(self, index: int) -> int:
        return self.store.move_cursor(index)

    # -------------------------------------------------------------------------
    # Обновление тегов
    # -------------------------------------------------------------------------

    def set_tag_option(self, index: int, option: Optional[str]) -> TagToken:
        """Выбор опции тега; токен заменяется на месте.

        Raises:
            IndexError: индекс вне последовательности
            ValueError: токен не TagToken или option не из config.tag_options
        """
        if option is not None and option not in self.config.tag_options:
            raise ValueError(f"option must be one of {self.config.tag_options}, got {option!r}")
        return self._replace_tag(index, option=option)

    def set_tag_value(self, index: int, value: Optional[float]) -> TagToken:
        """Обновление resolved value тега; None делает тег unresolved.

        Raises:
            IndexError: индекс вне последовательности
            ValueError: токен не TagToken
        """
        return self._replace_tag(index, value=value)

    def _replace_tag(self, index: int, **changes) -> TagToken:
        current = self.store[index] if 0 <= index < len(self.store) else None
        if current is None:
            raise IndexError(f"token index {index} out of range [0, {len(self.store)})")
        if not isinstance(current, TagToken):
            raise ValueError(f"token at {index} is {current.kind!r}, expected 'tag'")

        updated = TagToken.model_validate({**current.model_dump(), **changes})
        self.store.replace_at(index, updated)
        return updated

    # -------------------------------------------------------------------------
    # Подсказки
    # -------------------------------------------------------------------------

    def refresh_suggestions(self, provider: SuggestionProvider) -> SnapshotState:
        """Загрузка подсказок; ошибка провайдера не прерывает сессию."""
        return self.suggestions.refresh(provider)

    def autocomplete(self, query: str) -> list[Suggestion]:
        """Подсказки для dropdown по текущему вводу."""
        return self.suggestions.search(query)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Конец сессии: отписка и сброс формулы (персистентности нет)."""
        if self._closed:
            return
        self._unsubscribe()
        self.store.clear()
        self._result = self.evaluator.evaluate(())
        self._closed = True
        logger.debug("Formula session closed")

    def _on_store_changed(self, store: FormulaStore) -> None:
        self._result = self.evaluator.evaluate(store.tokens)
        logger.debug(
            "Formula recomputed: %r → %s", self._result.expression, self._result.display
        )
