"""
Suggestion: Запись из suggestion list (внешний провайдер тегов)

Immutable Pydantic модель. Провайдер отдаёт value как число или как строку
("12.5"); всё, что не удаётся привести к конечному float, становится None
(unresolved) - формула с таким тегом остаётся вычислимой.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .token import TagToken


class Suggestion(BaseModel):
    """Кандидат для TagToken: {id, name, category, value}."""

    id: str = Field(..., min_length=1, description="Идентификатор записи")
    name: str = Field(..., min_length=1, description="Имя, по которому матчится фрагмент")
    category: str = Field(default="", description="Категория (для dropdown)")
    value: float | None = Field(default=None, description="Числовое значение или None")

    model_config = ConfigDict(frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """mockapi-подобные провайдеры иногда отдают id числом"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> float | None:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        try:
            number = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        return number

    def to_tag(self) -> TagToken:
        """TagToken, несущий id/name/category/value этой записи."""
        return TagToken(id=self.id, name=self.name, category=self.category, value=self.value)
