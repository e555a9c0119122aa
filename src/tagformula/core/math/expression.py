"""
Expression: Арифметический evaluator (shunting-yard)

Вычисление инфиксных выражений над операторами + - * / ^ и скобками.
Произвольный код не исполняется: на вход принимаются только числовые
литералы и символы операторов.

ГРАММАТИКА:
    expression := term (("+" | "-") term)*
    term       := power (("*" | "/") power)*
    power      := primary ("^" primary)*
    primary    := NUMBER | "(" expression ")"

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Приоритет: ^ > * / > + -; при равном приоритете вычисление слева направо
   (2 ^ 3 ^ 2 = 64)
2. Унарных операторов нет: "+ 5", "2 * - 3" → InvalidFormula
3. Неявного умножения нет: "2 (3)", "2 3" → InvalidFormula
4. Пустое выражение → InvalidFormula
5. Арифметика IEEE-754 double: деление на ноль даёт ±inf / nan, не исключение
6. Глубина вложенности скобок не ограничена стеком вызовов

Evaluator формулы передаёт лексемы напрямую (evaluate_lexemes). Строковый
вход (tokenize / evaluate_expression) нужен, чтобы повторно разобрать
FormulaEvaluator.to_expression: там встречаются отрицательные значения тегов,
экспоненциальная форма (1e+22) и Infinity / NaN из format_number.
"""

import operator
import re
from typing import Callable, Final, Iterable, NamedTuple, Sequence

from tagformula.core.math.numerical_safeguards import ieee_divide, ieee_power

# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidFormula(ValueError):
    """
    Выражение не может быть вычислено: пустое выражение, висящий оператор,
    несбалансированные скобки, два оператора подряд и т.п.

    Не фатально: пользователь исправляет формулу следующими правками.
    """


# =============================================================================
# LEXEMES
# =============================================================================

BINARY_OPERATORS: Final[tuple[str, ...]] = ("+", "-", "*", "/", "^")
OPEN_PAREN: Final[str] = "("
CLOSE_PAREN: Final[str] = ")"

_NUMBER_RE: Final[re.Pattern[str]] = re.compile(
    r"-?(?:[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?|Infinity)|NaN"
)
_SYMBOL_RE: Final[re.Pattern[str]] = re.compile(r"[-+*/^()]")


class Lexeme(NamedTuple):
    """Операнд (symbol=None) или символ оператора/скобки (value=None)."""

    value: float | None = None
    symbol: str | None = None

    @property
    def is_operand(self) -> bool:
        return self.symbol is None


def operand(value: float) -> Lexeme:
    return Lexeme(value=float(value))


def symbol(sym: str) -> Lexeme:
    if sym not in BINARY_OPERATORS and sym not in (OPEN_PAREN, CLOSE_PAREN):
        raise InvalidFormula(f"Unsupported symbol: {sym!r}")
    return Lexeme(symbol=sym)


def tokenize(text: str) -> list[Lexeme]:
    """
    Разбор строки выражения на лексемы.

    Знак "-" считается частью литерала только если он вплотную примыкает к
    цифрам и стоит там, где ожидается операнд (начало, после оператора или "(").
    Так отрицательные операнды ("2 * -5") отличаются от бинарного минуса ("3 - 5").

    Raises:
        InvalidFormula: если в тексте есть символы вне грамматики
    """
    lexemes: list[Lexeme] = []
    pos = 0
    length = len(text)

    while pos < length:
        if text[pos].isspace():
            pos += 1
            continue

        expects_operand = not lexemes or (
            not lexemes[-1].is_operand and lexemes[-1].symbol != CLOSE_PAREN
        )

        match = _NUMBER_RE.match(text, pos)
        if match and (expects_operand or not match.group().startswith("-")):
            literal = match.group()
            lexemes.append(operand(float(literal.replace("Infinity", "inf"))))
            pos = match.end()
            continue

        match = _SYMBOL_RE.match(text, pos)
        if match:
            lexemes.append(Lexeme(symbol=match.group()))
            pos = match.end()
            continue

        raise InvalidFormula(f"Unexpected character {text[pos]!r} at position {pos}")

    return lexemes


# =============================================================================
# PARSER
# =============================================================================

# Символ оператора → (приоритет, функция)
_OPERATORS: Final[dict[str, tuple[int, Callable[[float, float], float]]]] = {
    "+": (1, operator.add),
    "-": (1, operator.sub),
    "*": (2, operator.mul),
    "/": (2, ieee_divide),
    "^": (3, ieee_power),
}


class _Parser:
    """
    Shunting-yard по списку лексем; вычисляет значение на лету.

    Операторы сворачиваются сразу при выталкивании со стека, поэтому RPN
    целиком не строится. Разбор итеративный: глубина скобок и длина цепочек
    ограничены только памятью, а не стеком вызовов Python.
    """

    def __init__(self, lexemes: Sequence[Lexeme]):
        self._lexemes = lexemes
        self._operands: list[float] = []
        self._symbols: list[str] = []

    def parse(self) -> float:
        if not self._lexemes:
            raise InvalidFormula("Expression is empty")

        expects_operand = True
        for pos, lexeme in enumerate(self._lexemes):
            if lexeme.is_operand:
                if not expects_operand:
                    raise InvalidFormula(f"Unexpected operand {lexeme.value} at position {pos}")
                self._operands.append(lexeme.value)
                expects_operand = False

            elif lexeme.symbol == OPEN_PAREN:
                if not expects_operand:
                    raise InvalidFormula(f"Unexpected symbol '(' at position {pos}")
                self._symbols.append(OPEN_PAREN)

            elif lexeme.symbol == CLOSE_PAREN:
                if expects_operand:
                    raise InvalidFormula(f"Expected operand but found symbol ')' at position {pos}")
                self._close_group(pos)

            elif lexeme.symbol in _OPERATORS:
                if expects_operand:
                    raise InvalidFormula(
                        f"Expected operand but found symbol {lexeme.symbol!r} at position {pos}"
                    )
                # Все операторы левоассоциативны: сворачиваем равный и более высокий приоритет
                precedence = _OPERATORS[lexeme.symbol][0]
                while self._top_precedence() >= precedence:
                    self._reduce()
                self._symbols.append(lexeme.symbol)
                expects_operand = True

            else:
                raise InvalidFormula(f"Unsupported symbol {lexeme.symbol!r} at position {pos}")

        if expects_operand:
            raise InvalidFormula("Expected operand but found end of expression")

        while self._symbols:
            if self._symbols[-1] == OPEN_PAREN:
                raise InvalidFormula("Expected ')' but found end of expression")
            self._reduce()

        return self._operands.pop()

    # -------------------------------------------------------------------------

    def _top_precedence(self) -> int:
        if not self._symbols or self._symbols[-1] == OPEN_PAREN:
            return 0
        return _OPERATORS[self._symbols[-1]][0]

    def _close_group(self, pos: int) -> None:
        while self._symbols and self._symbols[-1] != OPEN_PAREN:
            self._reduce()
        if not self._symbols:
            raise InvalidFormula(f"Unbalanced ')' at position {pos}")
        self._symbols.pop()

    def _reduce(self) -> None:
        fn = _OPERATORS[self._symbols.pop()][1]
        right = self._operands.pop()
        left = self._operands.pop()
        self._operands.append(fn(left, right))


# =============================================================================
# PUBLIC API
# =============================================================================


def evaluate_lexemes(lexemes: Iterable[Lexeme]) -> float:
    """
    Вычисление последовательности лексем.

    Raises:
        InvalidFormula: если последовательность не является корректным выражением
    """
    return _Parser(list(lexemes)).parse()


def evaluate_expression(text: str) -> float:
    """
    Вычисление строки выражения.

    Examples:
        >>> evaluate_expression("( 2 + 3 ) * 4")
        20.0
        >>> evaluate_expression("2 ^ 3 ^ 2")
        64.0

    Raises:
        InvalidFormula: пустое или синтаксически некорректное выражение
    """
    return evaluate_lexemes(tokenize(text))


def is_valid_expression(text: str) -> bool:
    """Проверка выражения без exception."""
    try:
        evaluate_expression(text)
    except InvalidFormula:
        return False
    return True

