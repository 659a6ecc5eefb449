"""
Разбор десятичных строк — общие примитивы для BigInt и BigDecimal.

Грамматика:
    integer := ['+'|'-'] digit+
    decimal := ['+'|'-'] (digit+ ['.' digit*] | '.' digit+)
"""

import logging
from typing import List, Tuple

from bignum.core.numeric.constants import DIGIT_CHARS, SIGN_CHARS
from bignum.core.numeric.errors import FormatError

logger = logging.getLogger(__name__)


def split_sign(number: str) -> Tuple[str, bool]:
    """
    Отделение необязательного префикса знака.

    Args:
        number: Входная строка

    Returns:
        (тело строки без знака, True если знак '-')

    Raises:
        FormatError: Если number не является строкой
    """
    if not isinstance(number, str):
        raise FormatError(f"Expected a decimal string, got {type(number).__name__}")

    if number and number[0] in SIGN_CHARS:
        return number[1:], number[0] == "-"
    return number, False


def is_digit_run(text: str) -> bool:
    """True если text состоит только из ASCII цифр (пустая строка допустима)."""
    return all(ch in DIGIT_CHARS for ch in text)


def digits_from_string(text: str) -> List[int]:
    """
    Конверсия строки цифр в список цифр, младший разряд первым.

    Старшие нули не удаляются: это делает вызывающий код.
    """
    return [DIGIT_CHARS.index(ch) for ch in reversed(text)]


def reject(number: str, kind: str) -> FormatError:
    """Построение FormatError для отклонённой строки (с debug-записью)."""
    logger.debug("Rejected %s literal %r", kind, number)
    return FormatError(f"Invalid {kind} format: {number!r}")
