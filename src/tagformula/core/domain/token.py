"""
Token: Модель элемента формулы

Tagged variant из четырёх вариантов:
- NumberToken: числовой литерал ("12", "3.5")
- PercentageToken: процентный литерал ("10%" → 0.1)
- OperatorToken: один символ из {+, -, *, /, ^, (, )}
- TagToken: ссылка на внешнюю именованную величину из suggestion list

Number/Percentage/Operator - immutable Pydantic модели (frozen=True).
У TagToken изменяемы только value и option; kind, id, name, category заморожены.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вариант токена (kind) не меняется после создания
2. NumberToken.raw соответствует NUMBER_PATTERN, PercentageToken.raw - PERCENTAGE_PATTERN
3. OperatorToken.symbol - ровно один из OPERATOR_SYMBOLS
"""

import re
from typing import Annotated, Final, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

# =============================================================================
# PATTERNS
# =============================================================================

NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]+(\.[0-9]+)?$")

PERCENTAGE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]+(\.[0-9]+)?%$")

# Порядок символов совпадает с порядком в UI-подсказке
OPERATOR_SYMBOLS: Final[tuple[str, ...]] = ("+", "-", "*", "/", "^", "(", ")")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidTokenFormat(ValueError):
    """
    Payload не соответствует формату варианта токена.

    Наружу (пользователю) не выходит: классификатор отбрасывает такие
    фрагменты до создания токена.
    """


# =============================================================================
# TOKEN VARIANTS
# =============================================================================


class NumberToken(BaseModel):
    """Числовой литерал: цифры и не более одной десятичной точки."""

    kind: Literal["number"] = "number"
    raw: str = Field(..., description="Исходный текст литерала")

    model_config = ConfigDict(frozen=True)

    @field_validator("raw")
    @classmethod
    def validate_raw(cls, v: str) -> str:
        if not NUMBER_PATTERN.fullmatch(v):
            raise ValueError(f"number literal must match {NUMBER_PATTERN.pattern}, got {v!r}")
        return v

    @property
    def numeric_value(self) -> float:
        return float(self.raw)

    @property
    def text(self) -> str:
        return self.raw


class PercentageToken(BaseModel):
    """Процентный литерал: число с завершающим '%', в формуле даёт value / 100."""

    kind: Literal["percentage"] = "percentage"
    raw: str = Field(..., description="Исходный текст литерала, включая '%'")

    model_config = ConfigDict(frozen=True)

    @field_validator("raw")
    @classmethod
    def validate_raw(cls, v: str) -> str:
        if not PERCENTAGE_PATTERN.fullmatch(v):
            raise ValueError(
                f"percentage literal must match {PERCENTAGE_PATTERN.pattern}, got {v!r}"
            )
        return v

    @property
    def numeric_value(self) -> float:
        return float(self.raw[:-1]) / 100

    @property
    def text(self) -> str:
        return self.raw


class OperatorToken(BaseModel):
    """Арифметический оператор или скобка."""

    kind: Literal["operator"] = "operator"
    symbol: str = Field(..., description="Один из OPERATOR_SYMBOLS")

    model_config = ConfigDict(frozen=True)

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        if v not in OPERATOR_SYMBOLS:
            raise ValueError(f"operator must be one of {OPERATOR_SYMBOLS}, got {v!r}")
        return v

    @property
    def text(self) -> str:
        return self.symbol


class TagToken(BaseModel):
    """
    Ссылка на внешнюю именованную величину.

    value=None означает unresolved tag: evaluator подставит
    FormulaConfig.unresolved_tag_value. option - выбранная пользователем опция.
    """

    kind: Literal["tag"] = Field(default="tag", frozen=True)
    id: str = Field(..., min_length=1, frozen=True, description="Идентификатор suggestion")
    name: str = Field(..., min_length=1, frozen=True, description="Отображаемое имя")
    category: str = Field(default="", frozen=True, description="Категория suggestion")
    value: float | None = Field(default=None, description="Resolved numeric value")
    option: str | None = Field(default=None, description="Выбранная опция тега")

    model_config = ConfigDict(validate_assignment=True)

    @property
    def numeric_value(self) -> float | None:
        return self.value

    @property
    def is_resolved(self) -> bool:
        return self.value is not None

    @property
    def text(self) -> str:
        return self.name


TokenVariant = Union[NumberToken, PercentageToken, OperatorToken, TagToken]

Token = Annotated[TokenVariant, Field(discriminator="kind")]

TOKEN_ADAPTER: Final[TypeAdapter] = TypeAdapter(Token)


# =============================================================================
# VALIDATING CONSTRUCTORS
# =============================================================================


def make_number(raw: str) -> NumberToken:
    """
    Создание NumberToken с валидацией.

    Raises:
        InvalidTokenFormat: если raw не является числовым литералом
    """
    try:
        return NumberToken(raw=raw)
    except ValidationError as e:
        raise InvalidTokenFormat(f"Invalid number literal: {raw!r}") from e


def make_percentage(raw: str) -> PercentageToken:
    """
    Создание PercentageToken с валидацией.

    Raises:
        InvalidTokenFormat: если raw не является процентным литералом
    """
    try:
        return PercentageToken(raw=raw)
    except ValidationError as e:
        raise InvalidTokenFormat(f"Invalid percentage literal: {raw!r}") from e


def make_operator(symbol: str) -> OperatorToken:
    """
    Создание OperatorToken с валидацией.

    Raises:
        InvalidTokenFormat: если symbol не входит в OPERATOR_SYMBOLS
    """
    try:
        return OperatorToken(symbol=symbol)
    except ValidationError as e:
        raise InvalidTokenFormat(f"Invalid operator: {symbol!r}") from e


def make_tag(
    id: str,
    name: str,
    category: str = "",
    value: float | None = None,
    option: str | None = None,
) -> TagToken:
    """
    Создание TagToken с валидацией.

    Raises:
        InvalidTokenFormat: пустые id/name или нечисловое value
    """
    try:
        return TagToken(id=id, name=name, category=category, value=value, option=option)
    except ValidationError as e:
        raise InvalidTokenFormat(f"Invalid tag payload: id={id!r}, name={name!r}") from e


def token_from_dict(data: dict) -> TokenVariant:
    """
    Восстановление токена из dict (результат model_dump()) по полю kind.

    Raises:
        InvalidTokenFormat: если данные не описывают валидный токен
    """
    try:
        return TOKEN_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise InvalidTokenFormat(f"Invalid token payload: {data!r}") from e
