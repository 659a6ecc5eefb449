"""
Numeric constants — параметры арифметического ядра

Все параметры модуля — неизменяемые константы (Final). Они используются
как значения по умолчанию в BigInt / BigDecimal и не читаются из окружения.
"""

from typing import Final

# =============================================================================
# ПРЕДСТАВЛЕНИЕ ЦИФР
# =============================================================================

# Основание системы счисления для хранения цифр
DIGIT_BASE: Final[int] = 10

# Допустимые символы цифр во входной строке (только ASCII)
DIGIT_CHARS: Final[str] = "0123456789"

# Допустимые префиксы знака
SIGN_CHARS: Final[str] = "+-"

# Разделитель целой и дробной части
DECIMAL_POINT: Final[str] = "."


# =============================================================================
# BIGDECIMAL ПАРАМЕТРЫ
# =============================================================================

# Максимальный сдвиг мантиссы (в десятичных разрядах) при выравнивании
# экспонент и при конверсии экспоненты в native int.
# При превышении → ExponentOverflowError
MAX_EXPONENT_SHIFT: Final[int] = 1_000_000

# Количество дополнительных дробных разрядов при делении по умолчанию.
# 0 → чистое усечённое деление мантисс (10 / 4 = 2)
DEFAULT_DIVISION_PRECISION: Final[int] = 0

# Минимальное количество дробных разрядов результата sqrt по умолчанию
DEFAULT_SQRT_PRECISION: Final[int] = 0
