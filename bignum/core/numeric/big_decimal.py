"""
BigDecimal — десятичное число произвольной точности

Immutable Pydantic модель поверх BigInt:

    value = (-1)^negative × mantissa × 10^exponent

Мантисса и экспонента — значения BigInt; мантисса всегда неотрицательна,
знак хранится отдельно. Фиксированной точности и ошибок округления нет:
результат каждой операции точен в рамках контракта деления BigInt.

Алгоритмы:
- сложение / вычитание / сравнение: выравнивание экспонент сдвигом мантиссы
  с большей экспонентой, затем операция BigInt над знаковыми мантиссами
- умножение / деление: мантиссы комбинируются напрямую, экспоненты
  складываются / вычитаются, знак = XOR
- sqrt: целочисленный sqrt BigInt над мантиссой, приведённой к чётной экспоненте

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Мантисса неотрицательна
2. Нулевая мантисса → экспонента 0, знак положительный
3. Хвостовые нули мантиссы сохраняются ("1.50" остаётся "1.50")
4. Сдвиги мантиссы (выравнивание, sqrt, дописывание нулей) ограничены
   MAX_EXPONENT_SHIFT; дробная часть любой длины рендерится без ограничения
"""

import logging
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from bignum.core.numeric.big_integer import BigInt
from bignum.core.numeric.constants import (
    DECIMAL_POINT,
    DEFAULT_DIVISION_PRECISION,
    DEFAULT_SQRT_PRECISION,
    MAX_EXPONENT_SHIFT,
)
from bignum.core.numeric.errors import (
    DivisionByZeroError,
    ExponentOverflowError,
    InvalidExponentError,
    NegativeOperandError,
)
from bignum.core.numeric.parsing import is_digit_run, reject, split_sign

logger = logging.getLogger(__name__)

_MAX_SHIFT = BigInt.from_int(MAX_EXPONENT_SHIFT)


# =============================================================================
# ЭКСПОНЕНТА → NATIVE INT
# =============================================================================


def _checked_shift(count: int) -> int:
    """Проверка количества сдвигаемых разрядов против MAX_EXPONENT_SHIFT."""
    if abs(count) > MAX_EXPONENT_SHIFT:
        logger.warning(
            "Decimal shift %d exceeds MAX_EXPONENT_SHIFT=%d",
            count,
            MAX_EXPONENT_SHIFT,
        )
        raise ExponentOverflowError(
            f"Decimal shift {count} exceeds MAX_EXPONENT_SHIFT={MAX_EXPONENT_SHIFT}"
        )
    return count


def _exponent_to_int(exponent: BigInt) -> int:
    # Сравнение в BigInt до to_int: экспонента может не помещаться в native int
    if exponent.abs().greater_than(_MAX_SHIFT):
        logger.warning(
            "Decimal shift %s exceeds MAX_EXPONENT_SHIFT=%d",
            exponent.to_string(),
            MAX_EXPONENT_SHIFT,
        )
        raise ExponentOverflowError(
            f"Decimal shift {exponent.to_string()} exceeds MAX_EXPONENT_SHIFT={MAX_EXPONENT_SHIFT}"
        )
    return exponent.to_int()


# =============================================================================
# BIGDECIMAL MODEL
# =============================================================================


class BigDecimal(BaseModel):
    """
    Десятичное число: знак, мантисса BigInt и десятичная экспонента BigInt.

    Примеры:
        >>> BigDecimal("1.5").add(BigDecimal("2.25")).to_string()
        '3.75'
        >>> BigDecimal("-.05")
        BigDecimal('-0.05')
        >>> BigDecimal("10").divide(BigDecimal("4")).to_string()
        '2'

    Равенство (==) — по значению: BigDecimal("1.5") == BigDecimal("1.50").
    """

    mantissa: BigInt = Field(default_factory=BigInt, description="Модуль мантиссы (>= 0)")
    exponent: BigInt = Field(default_factory=BigInt, description="Десятичная экспонента")
    negative: bool = Field(default=False, description="True только для строго отрицательных")

    model_config = {"frozen": True}  # Immutable

    def __init__(self, number: Optional[str] = None, /, **data: Any) -> None:
        """
        Args:
            number: Десятичная строка ['+'|'-'] (digit+ ['.' digit*] | '.' digit+)
            **data: Поля модели (mantissa, exponent, negative), если number не задан

        Raises:
            FormatError: Если строка не соответствует грамматике
        """
        if number is not None:
            if data:
                raise TypeError("BigDecimal accepts either a decimal string or fields, not both")
            data = _parse_decimal(number)
        super().__init__(**data)

    @field_validator("mantissa")
    @classmethod
    def validate_mantissa_sign(cls, v: BigInt) -> BigInt:
        """Знак хранится в поле negative, мантисса — только модуль."""
        if v.is_negative():
            raise ValueError(f"mantissa must be non-negative, got {v.to_string()}")
        return v

    @model_validator(mode="after")
    def validate_canonical_zero(self) -> "BigDecimal":
        """Ноль имеет единственное представление: мантисса 0, экспонента 0, знак +."""
        if self.mantissa.is_zero() and (self.negative or not self.exponent.is_zero()):
            raise ValueError("zero must have exponent 0 and no sign")
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, number: str) -> "BigDecimal":
        """Разбор десятичной строки (эквивалент BigDecimal(number))."""
        return cls(number)

    @classmethod
    def from_integer(cls, value: BigInt) -> "BigDecimal":
        """Точная конверсия BigInt → BigDecimal с экспонентой 0."""
        return cls._from_signed(value, BigInt())

    @classmethod
    def _compose(cls, mantissa: BigInt, exponent: BigInt, negative: bool) -> "BigDecimal":
        # Нормализация: нулевая мантисса сбрасывает экспоненту и знак
        if mantissa.is_zero():
            return cls()
        return cls(mantissa=mantissa, exponent=exponent, negative=negative)

    @classmethod
    def _from_signed(cls, mantissa: BigInt, exponent: BigInt) -> "BigDecimal":
        return cls._compose(mantissa.abs(), exponent, mantissa.is_negative())

    # -------------------------------------------------------------------------
    # Выравнивание экспонент
    # -------------------------------------------------------------------------

    def _signed_mantissa(self) -> BigInt:
        return self.mantissa.negate() if self.negative else self.mantissa

    def _aligned(self, other: "BigDecimal") -> Tuple[BigInt, BigInt, BigInt]:
        """
        Приведение двух операндов к общей экспоненте.

        Мантисса операнда с большей экспонентой сдвигается влево на разность
        экспонент, общей становится меньшая экспонента; значения операндов
        не меняются.

        Returns:
            (знаковая мантисса self, знаковая мантисса other, общая экспонента)

        Raises:
            ExponentOverflowError: Если разность экспонент > MAX_EXPONENT_SHIFT
        """
        lhs = self._signed_mantissa()
        rhs = other._signed_mantissa()

        order = self.exponent.compare(other.exponent)
        if order > 0:
            shift = _exponent_to_int(self.exponent.subtract(other.exponent))
            return lhs.shift_left(shift), rhs, other.exponent
        if order < 0:
            shift = _exponent_to_int(other.exponent.subtract(self.exponent))
            return lhs, rhs.shift_left(shift), self.exponent
        return lhs, rhs, self.exponent

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "BigDecimal") -> int:
        """-1 / 0 / 1 по значению (после выравнивания экспонент)."""
        lhs, rhs, _ = self._aligned(other)
        return lhs.compare(rhs)

    def less_than(self, other: "BigDecimal") -> bool:
        return self.compare(other) < 0

    def greater_than(self, other: "BigDecimal") -> bool:
        return self.compare(other) > 0

    def equal(self, other: "BigDecimal") -> bool:
        return self.compare(other) == 0

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.mantissa.is_zero()

    def is_positive(self) -> bool:
        return not self.negative and not self.mantissa.is_zero()

    def is_negative(self) -> bool:
        return self.negative

    def abs(self) -> "BigDecimal":
        return BigDecimal._compose(self.mantissa, self.exponent, False)

    def negate(self) -> "BigDecimal":
        return BigDecimal._compose(self.mantissa, self.exponent, not self.negative)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "BigDecimal") -> "BigDecimal":
        lhs, rhs, exponent = self._aligned(other)
        return BigDecimal._from_signed(lhs.add(rhs), exponent)

    def subtract(self, other: "BigDecimal") -> "BigDecimal":
        lhs, rhs, exponent = self._aligned(other)
        return BigDecimal._from_signed(lhs.subtract(rhs), exponent)

    def multiply(self, other: "BigDecimal") -> "BigDecimal":
        return BigDecimal._compose(
            self.mantissa.multiply(other.mantissa),
            self.exponent.add(other.exponent),
            self.negative != other.negative,
        )

    def divide(
        self, other: "BigDecimal", precision: int = DEFAULT_DIVISION_PRECISION
    ) -> "BigDecimal":
        """
        Деление мантисс с усечением (контракт BigInt.divide).

        Без precision результат — усечённое частное мантисс с разностью
        экспонент: 10 / 4 = 2, 1.0 / 4 = 0.2, 1 / 3 = 0.
        precision сдвигает мантиссу делимого влево и добавляет столько же
        дробных разрядов в результат: BigDecimal("1").divide(BigDecimal("3"), 4) = 0.3333.

        Args:
            other: Делитель
            precision: Дополнительные дробные разряды (>= 0)

        Raises:
            DivisionByZeroError: Если other == 0
            ValueError: Если precision < 0
        """
        if other.is_zero():
            raise DivisionByZeroError(f"Division by zero: {self.to_string()} / 0")
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")
        _checked_shift(precision)

        return BigDecimal._compose(
            self.mantissa.shift_left(precision).divide(other.mantissa),
            self.exponent.subtract(other.exponent).subtract(BigInt.from_int(precision)),
            self.negative != other.negative,
        )

    def pow(self, exponent: Union[int, BigInt]) -> "BigDecimal":
        """
        Возведение в неотрицательную целую степень (бинарное возведение).

        Raises:
            InvalidExponentError: Если exponent < 0
        """
        if isinstance(exponent, BigInt):
            exponent = exponent.to_int()
        if exponent < 0:
            raise InvalidExponentError(f"Negative exponent not supported: {exponent}")

        result = _ONE
        base = self
        while exponent > 0:
            if exponent % 2 == 1:
                result = result.multiply(base)
            exponent //= 2
            if exponent:
                base = base.multiply(base)
        return result

    def sqr(self) -> "BigDecimal":
        return self.multiply(self)

    def sqrt(self, precision: int = DEFAULT_SQRT_PRECISION) -> "BigDecimal":
        """
        Квадратный корень с округлением вниз (floor) на сетке 10^q.

        q = min(floor(exponent / 2), -precision). Мантисса приводится к
        экспоненте 2q, после чего используется бинарный поиск BigInt.sqrt:
            root² <= value < (root + 10^q)²

        Для полных квадратов результат точный: sqrt(2.25) = 1.5.

        Args:
            precision: Минимальное количество дробных разрядов результата

        Raises:
            NegativeOperandError: Если self < 0
            ValueError: Если precision < 0
        """
        if self.negative:
            raise NegativeOperandError(f"Square root of negative number: {self.to_string()}")
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")
        if self.is_zero():
            return self

        exponent = _exponent_to_int(self.exponent)
        target = min(exponent // 2, -precision)
        scaled = self.mantissa.shift_left(_checked_shift(exponent - 2 * target))
        return BigDecimal._compose(scaled.sqrt(), BigInt.from_int(target), False)

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_integer(self) -> BigInt:
        """Целая часть с усечением к нулю."""
        if self.exponent.is_negative():
            # Отбрасывание дробных цифр не ограничено MAX_EXPONENT_SHIFT
            fraction = self.exponent.negate()
            if not fraction.less_than(BigInt.from_int(self.mantissa.num_digits)):
                return BigInt()
            return self._signed_mantissa().shift_right(fraction.to_int())
        return self._signed_mantissa().shift_left(_exponent_to_int(self.exponent))

    def reduced(self) -> "BigDecimal":
        """Равное значение без хвостовых нулей мантиссы (перенесены в экспоненту)."""
        zeros = 0
        for digit in self.mantissa.digits:
            if digit:
                break
            zeros += 1
        if zeros == 0:
            return self
        return BigDecimal._compose(
            self.mantissa.shift_right(zeros),
            self.exponent.add(BigInt.from_int(zeros)),
            self.negative,
        )

    def to_string(self) -> str:
        """
        Десятичная строка.

        Отрицательная экспонента вставляет точку (с ведущими "0." и нулями,
        если точка левее первой цифры мантиссы); неотрицательная дописывает
        нули справа.

        Raises:
            ExponentOverflowError: Если положительная экспонента больше
                MAX_EXPONENT_SHIFT
        """
        digits = self.mantissa.to_string()
        sign = "-" if self.negative and not self.mantissa.is_zero() else ""

        if not self.exponent.is_negative():
            return sign + digits + "0" * _exponent_to_int(self.exponent)

        # Длина дробной части равна |exponent|, ограничение сдвига не нужно
        exponent = self.exponent.to_int()
        point = len(digits) + exponent
        if point <= 0:
            return f"{sign}0{DECIMAL_POINT}{'0' * -point}{digits}"
        return f"{sign}{digits[:point]}{DECIMAL_POINT}{digits[point:]}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigDecimal({self.to_string()!r})"

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        lhs, rhs = self.reduced(), other.reduced()
        return (lhs.mantissa, lhs.exponent, lhs.negative) == (
            rhs.mantissa,
            rhs.exponent,
            rhs.negative,
        )

    def __hash__(self) -> int:
        canonical = self.reduced()
        return hash((canonical.mantissa, canonical.exponent, canonical.negative))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) >= 0

    def __add__(self, other: object) -> "BigDecimal":
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "BigDecimal":
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> "BigDecimal":
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> "BigDecimal":
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, exponent: object) -> "BigDecimal":
        if not isinstance(exponent, (int, BigInt)):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> "BigDecimal":
        return self.negate()

    def __pos__(self) -> "BigDecimal":
        return self

    def __abs__(self) -> "BigDecimal":
        return self.abs()


def _parse_decimal(number: str) -> dict:
    body, negative = split_sign(number)
    int_part, _, frac_part = body.partition(DECIMAL_POINT)

    if not (int_part or frac_part):
        raise reject(number, "decimal")
    if not is_digit_run(int_part) or not is_digit_run(frac_part):
        raise reject(number, "decimal")

    # mantissa = int_part × 10^len(frac_part) + frac_part
    mantissa = BigInt(int_part + frac_part)
    if mantissa.is_zero():
        return {}
    return {
        "mantissa": mantissa,
        "exponent": BigInt.from_int(-len(frac_part)),
        "negative": negative,
    }


_ONE = BigDecimal("1")
