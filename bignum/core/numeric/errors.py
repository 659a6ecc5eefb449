"""
Numeric errors — таксономия ошибок арифметического ядра

Каждая ошибка наследуется от NumericError и от ближайшего builtin-исключения,
поэтому вызывающий код может ловить как `FormatError`, так и `ValueError`.

Ошибки фатальны только для операции, которая их выбросила: частичных
результатов нет, повторных попыток на этом уровне нет.
"""


class NumericError(Exception):
    """Базовая ошибка для всех операций BigInt / BigDecimal."""

    pass


class FormatError(NumericError, ValueError):
    """
    Некорректная входная строка.

    Пустая строка, только знак, посторонний символ, отсутствие цифр,
    лишняя десятичная точка.
    """

    pass


class DivisionByZeroError(NumericError, ZeroDivisionError):
    """Делитель равен нулю (divide, modulo, divmod)."""

    pass


class InvalidExponentError(NumericError, ValueError):
    """Отрицательный показатель степени в pow."""

    pass


class NegativeOperandError(NumericError, ValueError):
    """Квадратный корень из отрицательного числа."""

    pass


class ExponentOverflowError(NumericError, OverflowError):
    """
    Сдвиг экспоненты превышает MAX_EXPONENT_SHIFT.

    Экспонента BigDecimal конвертируется в native int для количества
    сдвигаемых разрядов; слишком большие сдвиги отклоняются до выделения памяти.
    """

    pass
