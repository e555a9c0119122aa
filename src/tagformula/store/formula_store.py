"""Formula Sequence Store: упорядоченная последовательность токенов с курсором.

Единственное изменяемое состояние core. Создаётся один раз на сессию и
передаётся компонентам явно (никакого глобального singleton).

Cursor Index: точка вставки в [0, length]:
- Старт: cursor = length (режим дописывания)
- insert: курсор встаёт сразу за вставленным токеном
- remove_at(i), i < cursor: курсор сдвигается влево на 1 (указывает на тот же зазор)
- remove_at(i), i >= cursor: курсор не двигается
- Backspace (delete_before_cursor) - частный случай remove_at(cursor - 1)
- replace_at: курсор не двигается
Курсор всегда зажат в [0, length].

Ошибки редактирования прощаются: remove_at вне диапазона - тихий no-op.
"""

import logging
from typing import Callable, Iterator, List, Optional

from tagformula.core.domain.token import TokenVariant

logger = logging.getLogger("tagformula.store")

StoreListener = Callable[["FormulaStore"], None]


class FormulaStore:
    """Formula Sequence + Cursor Index с уведомлением подписчиков об изменениях."""

    def __init__(self) -> None:
        self._tokens: List[TokenVariant] = []
        self._cursor = 0
        self._listeners: List[StoreListener] = []

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[TokenVariant, ...]:
        """Снимок последовательности (read-only view для UI и evaluator)."""
        return tuple(self._tokens)

    @property
    def cursor(self) -> int:
        return self._cursor

    def length(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[TokenVariant]:
        return iter(tuple(self._tokens))

    def __getitem__(self, index: int) -> TokenVariant:
        return self._tokens[index]

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def insert(self, token: TokenVariant, at_index: Optional[int] = None) -> int:
        """Вставка токена.

        Args:
            token: токен для вставки
            at_index: позиция (зажимается в [0, length]); None - в конец

        Returns:
            Фактическая позиция вставленного токена
        """
        index = len(self._tokens) if at_index is None else self._clamp(at_index)

        self._tokens.insert(index, token)
        self._cursor = index + 1

        logger.debug("Inserted %s at %d, cursor=%d", token.kind, index, self._cursor)
        self._notify()
        return index

    def remove_at(self, index: int) -> Optional[TokenVariant]:
        """Удаление токена по индексу.

        Returns:
            Удалённый токен или None, если индекс вне [0, length)
        """
        if not 0 <= index < len(self._tokens):
            logger.debug("Ignored remove_at(%d): out of range, length=%d", index, len(self._tokens))
            return None

        removed = self._tokens.pop(index)
        if index < self._cursor:
            self._cursor -= 1
        self._cursor = self._clamp(self._cursor)

        logger.debug("Removed %s at %d, cursor=%d", removed.kind, index, self._cursor)
        self._notify()
        return removed

    def replace_at(self, index: int, token: TokenVariant) -> TokenVariant:
        """Замена токена на месте (порядок и длина сохраняются).

        Returns:
            Заменённый (старый) токен

        Raises:
            IndexError: если индекс вне [0, length)
        """
        if not 0 <= index < len(self._tokens):
            raise IndexError(f"replace_at index {index} out of range [0, {len(self._tokens)})")

        previous = self._tokens[index]
        self._tokens[index] = token

        logger.debug("Replaced %s at %d with %s", previous.kind, index, token.kind)
        self._notify()
        return previous

    def delete_before_cursor(self) -> Optional[TokenVariant]:
        """Backspace: удаление токена непосредственно перед курсором."""
        if self._cursor == 0:
            return None
        return self.remove_at(self._cursor - 1)

    def clear(self) -> None:
        """Сброс последовательности (конец сессии)."""
        if not self._tokens and self._cursor == 0:
            return
        self._tokens.clear()
        self._cursor = 0
        self._notify()

    # -------------------------------------------------------------------------
    # Курсор
    # -------------------------------------------------------------------------

    def move_cursor(self, index: int) -> int:
        """Установка курсора (зажимается в [0, length]). Returns: новый курсор."""
        self._cursor = self._clamp(index)
        return self._cursor

    def select(self, index: int) -> int:
        """Клик по токену: курсор встаёт сразу за ним."""
        return self.move_cursor(index + 1)

    # -------------------------------------------------------------------------
    # Подписчики
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Подписка на изменения последовательности.

        Returns:
            Функция отписки
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self._tokens)))
