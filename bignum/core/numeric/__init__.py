"""
Core numeric modules для bignum

Целые и десятичные числа произвольной точности на школьных алгоритмах.
"""

# Constants
from bignum.core.numeric.constants import (
    DECIMAL_POINT,
    DEFAULT_DIVISION_PRECISION,
    DEFAULT_SQRT_PRECISION,
    DIGIT_BASE,
    MAX_EXPONENT_SHIFT,
)

# Errors
from bignum.core.numeric.errors import (
    DivisionByZeroError,
    ExponentOverflowError,
    FormatError,
    InvalidExponentError,
    NegativeOperandError,
    NumericError,
)

# Value types
from bignum.core.numeric.big_integer import BigInt
from bignum.core.numeric.big_decimal import BigDecimal

__all__ = [
    # Constants
    "DECIMAL_POINT",
    "DEFAULT_DIVISION_PRECISION",
    "DEFAULT_SQRT_PRECISION",
    "DIGIT_BASE",
    "MAX_EXPONENT_SHIFT",
    # Errors
    "NumericError",
    "FormatError",
    "DivisionByZeroError",
    "InvalidExponentError",
    "NegativeOperandError",
    "ExponentOverflowError",
    # Value types
    "BigInt",
    "BigDecimal",
]
