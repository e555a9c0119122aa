"""Suggestion Provider: источник кандидатов для TagToken.

Провайдер - внешний коллаборатор: core только читает его снапшот.
Загрузка выполняется один раз за сессию (refresh можно вызвать повторно),
и пока данные не пришли или провайдер упал, snapshot просто пуст:
классификатор не находит тегов, ошибок наружу не выходит.

States:
- PENDING: данные ещё не загружались
- LOADED: последний refresh успешен
- FAILED: последний refresh завершился ошибкой, записи очищены
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Protocol, Sequence

from jsonschema import ValidationError as ContractValidationError
from pydantic import ValidationError

from tagformula.core.contracts import validate_suggestion_list
from tagformula.core.domain.suggestion import Suggestion

logger = logging.getLogger("tagformula.suggestions")


class SnapshotState(str, Enum):
    """Состояние загрузки snapshot."""

    PENDING = "PENDING"
    LOADED = "LOADED"
    FAILED = "FAILED"


class SuggestionProvider(Protocol):
    """Контракт провайдера: fetch_suggestions() → последовательность Suggestion."""

    def fetch_suggestions(self) -> Sequence[Suggestion]:
        ...


def parse_suggestions(data: Any) -> list[Suggestion]:
    """
    Валидация payload по контракту и построение Suggestion моделей.

    Raises:
        jsonschema.ValidationError: payload не соответствует suggestion_list.json
        pydantic.ValidationError: запись не приводится к модели
    """
    validate_suggestion_list(data)
    return [Suggestion.model_validate(record) for record in data]


class StaticSuggestionProvider:
    """In-memory провайдер (фиксированный список; удобен для тестов и демо)."""

    def __init__(self, records: Iterable[Suggestion | dict]):
        self._records = [
            r if isinstance(r, Suggestion) else Suggestion.model_validate(r) for r in records
        ]

    def fetch_suggestions(self) -> Sequence[Suggestion]:
        return list(self._records)


class JsonFileSuggestionProvider:
    """Провайдер, читающий payload из JSON-файла (тот же контракт, что у HTTP API)."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def fetch_suggestions(self) -> Sequence[Suggestion]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return parse_suggestions(data)


class SuggestionSnapshot:
    """
    Read-only, обновляемый снапшот записей провайдера.

    Снапшот может быть устаревшим относительно провайдера: классификатор
    работает с тем, что загружено на момент ввода фрагмента.
    """

    def __init__(self, records: Optional[Iterable[Suggestion]] = None):
        if records is None:
            self._records: tuple[Suggestion, ...] = ()
            self._state = SnapshotState.PENDING
        else:
            self._records = tuple(records)
            self._state = SnapshotState.LOADED
        self._last_error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Состояние
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SnapshotState:
        return self._state

    @property
    def records(self) -> tuple[Suggestion, ...]:
        return self._records

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Suggestion]:
        return iter(self._records)

    # -------------------------------------------------------------------------
    # Загрузка
    # -------------------------------------------------------------------------

    def refresh(self, provider: SuggestionProvider) -> SnapshotState:
        """
        Загрузка записей из провайдера.

        Любая ошибка провайдера переводит snapshot в FAILED с пустым списком
        (деградация до "нет подсказок"), исключение не пробрасывается.

        Returns:
            Новое состояние snapshot
        """
        try:
            records = tuple(provider.fetch_suggestions())
        except Exception as e:
            self._fail(f"{type(e).__name__}: {e}")
            return self._state

        self._load(records)
        return self._state

    def load_payload(self, data: Any) -> SnapshotState:
        """
        Загрузка сырого payload (list of dict) с валидацией по контракту.

        Returns:
            LOADED при успехе, FAILED если payload нарушает контракт
        """
        try:
            records = parse_suggestions(data)
        except (ContractValidationError, ValidationError) as e:
            self._fail(f"{type(e).__name__}: {e}")
            return self._state

        self._load(records)
        return self._state

    def _load(self, records: Sequence[Suggestion]) -> None:
        self._records = tuple(records)
        self._state = SnapshotState.LOADED
        self._last_error = None
        logger.debug("Suggestion snapshot loaded: %d records", len(self._records))

    def _fail(self, reason: str) -> None:
        self._records = ()
        self._state = SnapshotState.FAILED
        self._last_error = reason
        logger.warning("Suggestion fetch failed, tag suggestions unavailable: %s", reason)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find_by_name(self, name: str) -> Optional[Suggestion]:
        """Точное (case-sensitive) совпадение по имени; при дублях - первая запись."""
        return find_by_name(self._records, name)

    def search(self, query: str) -> list[Suggestion]:
        """
        Подсказки для dropdown: case-insensitive вхождение query в имя.

        Пустой (или пробельный) query → пустой список.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        return [s for s in self._records if needle in s.name.lower()]


def find_by_name(records: Iterable[Suggestion], name: str) -> Optional[Suggestion]:
    for record in records:
        if record.name == name:
            return record
    return None
