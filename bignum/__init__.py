"""
bignum — arbitrary-precision BigInt and BigDecimal.

    >>> from bignum import BigInt, BigDecimal
    >>> str(BigInt("999999999999") * BigInt("999999999999"))
    '999999999998000000000001'
    >>> str(BigDecimal("1.5") + BigDecimal("2.25"))
    '3.75'
"""

from bignum.core.numeric import (
    BigDecimal,
    BigInt,
    DivisionByZeroError,
    ExponentOverflowError,
    FormatError,
    InvalidExponentError,
    NegativeOperandError,
    NumericError,
)

__all__ = [
    "BigInt",
    "BigDecimal",
    "NumericError",
    "FormatError",
    "DivisionByZeroError",
    "InvalidExponentError",
    "NegativeOperandError",
    "ExponentOverflowError",
]

__version__ = "0.1.0"
