"""
Numerical Safeguards: IEEE-754 арифметика без исключений

Python float в большинстве операций уже ведёт себя как IEEE-754 double,
но деление на ноль и возведение в степень бросают исключения
(ZeroDivisionError, OverflowError, ValueError). Формула пользователя не должна
падать на таких входах: результатом становится ±Infinity или NaN.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ieee_divide / ieee_power никогда не бросают исключений для float входов
2. x / 0 → ±inf по знакам операндов, 0 / 0 → nan
3. Переполнение степени → ±inf, недопустимая степень → nan
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# DISPLAY-КОНСТАНТЫ
# =============================================================================

# Текстовые представления неконечных значений (как их показывает UI)
POSITIVE_INFINITY_TEXT: Final[str] = "Infinity"
NEGATIVE_INFINITY_TEXT: Final[str] = "-Infinity"
NAN_TEXT: Final[str] = "NaN"

# Порог, после которого целые значения выводятся в экспоненциальной форме
INTEGER_DISPLAY_LIMIT: Final[float] = 1e21


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def is_odd_integer(value: float) -> bool:
    """True, если value - конечное нечётное целое (важно для знака степени)."""
    if not is_valid_float(value) or not value.is_integer():
        return False
    return int(value) % 2 == 1


# =============================================================================
# IEEE-754 ОПЕРАЦИИ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление с семантикой IEEE-754.

    Examples:
        >>> ieee_divide(10.0, 4.0)
        2.5
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(-1.0, 0.0)
        -inf
        >>> ieee_divide(0.0, 0.0)
        nan
    """
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        # Знак бесконечности = знак числителя × знак нуля (-0.0 учитывается)
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)

    return numerator / denominator


def ieee_power(base: float, exponent: float) -> float:
    """
    Возведение в степень с семантикой IEEE-754 pow.

    math.pow бросает ValueError для 0 ** -n и отрицательного основания
    с дробной степенью, OverflowError при переполнении. Здесь эти случаи
    превращаются в ±inf / nan.

    Examples:
        >>> ieee_power(2.0, 10.0)
        1024.0
        >>> ieee_power(0.0, -1.0)
        inf
        >>> ieee_power(-8.0, 0.5)
        nan
        >>> ieee_power(10.0, 400.0)
        inf
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0 and exponent < 0:
            if is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_number(value: float) -> str:
    """
    Текстовое представление результата для UI.

    Целые значения выводятся без дробной части, неконечные - как
    Infinity / -Infinity / NaN.

    Examples:
        >>> format_number(5.0)
        '5'
        >>> format_number(0.1)
        '0.1'
        >>> format_number(float('inf'))
        'Infinity'
    """
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT

    if value.is_integer() and abs(value) < INTEGER_DISPLAY_LIMIT:
        return str(int(value))

    return repr(value)
