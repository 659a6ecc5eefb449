"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных чисел bignum.
"""

from .validators import (
    BigDecimalValidator,
    BigIntegerValidator,
    ContractValidator,
    SchemaLoader,
    validate_big_decimal,
    validate_big_integer,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigIntegerValidator",
    "BigDecimalValidator",
    # Functions
    "validate_big_integer",
    "validate_big_decimal",
]
