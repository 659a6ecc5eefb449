"""
BigInt — знаковое целое произвольной точности

Immutable Pydantic модель. Значение хранится как последовательность
десятичных цифр (младший разряд первым) и флаг знака.

Все алгоритмы — школьные (schoolbook) и работают только с цифрами 0-9:
- сложение / вычитание с переносом и заёмом
- умножение двойным циклом с накоплением в позиции i+j
- деление столбиком с бинарным поиском цифры частного
- возведение в степень повторным возведением в квадрат
- целочисленный квадратный корень бинарным поиском

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая цифра в диапазоне 0..9
2. Старший разряд непустой последовательности никогда не равен 0
3. Ноль — пустая последовательность, и ноль никогда не отрицателен
4. Операции не изменяют self, каждая возвращает новый нормализованный экземпляр
"""

from typing import Any, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from bignum.core.numeric.constants import DIGIT_BASE, DIGIT_CHARS
from bignum.core.numeric.errors import (
    DivisionByZeroError,
    InvalidExponentError,
    NegativeOperandError,
)
from bignum.core.numeric.parsing import digits_from_string, is_digit_run, reject, split_sign


# =============================================================================
# ОПЕРАЦИИ НАД МОДУЛЯМИ (последовательности цифр, младший разряд первым)
# =============================================================================


def _strip_high_zeros(digits: List[int]) -> List[int]:
    while digits and digits[-1] == 0:
        digits.pop()
    return digits


def _compare_magnitudes(lhs: Sequence[int], rhs: Sequence[int]) -> int:
    if len(lhs) != len(rhs):
        return 1 if len(lhs) > len(rhs) else -1
    for i in range(len(lhs) - 1, -1, -1):
        if lhs[i] != rhs[i]:
            return 1 if lhs[i] > rhs[i] else -1
    return 0


def _add_magnitudes(lhs: Sequence[int], rhs: Sequence[int]) -> List[int]:
    result: List[int] = []
    carry = 0
    for i in range(max(len(lhs), len(rhs))):
        total = carry
        if i < len(lhs):
            total += lhs[i]
        if i < len(rhs):
            total += rhs[i]
        result.append(total % DIGIT_BASE)
        carry = total // DIGIT_BASE
    if carry:
        result.append(carry)
    return result


def _subtract_magnitudes(larger: Sequence[int], smaller: Sequence[int]) -> List[int]:
    """|larger| - |smaller|, требует |larger| >= |smaller|."""
    result: List[int] = []
    borrow = 0
    for i in range(len(larger)):
        diff = larger[i] - borrow
        if i < len(smaller):
            diff -= smaller[i]
        if diff < 0:
            diff += DIGIT_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    return _strip_high_zeros(result)


def _multiply_magnitudes(lhs: Sequence[int], rhs: Sequence[int]) -> List[int]:
    if not lhs or not rhs:
        return []

    # Длина произведения не превышает сумму длин сомножителей
    result = [0] * (len(lhs) + len(rhs))
    for i, digit in enumerate(lhs):
        carry = 0
        j = 0
        while j < len(rhs) or carry:
            total = result[i + j] + digit * (rhs[j] if j < len(rhs) else 0) + carry
            result[i + j] = total % DIGIT_BASE
            carry = total // DIGIT_BASE
            j += 1
    return _strip_high_zeros(result)


def _largest_quotient_digit(remainder: Sequence[int], divisor: Sequence[int]) -> int:
    """Наибольшая цифра q в 0..9 такая, что divisor * q <= remainder."""
    low, high = 0, DIGIT_BASE - 1
    best = 0
    while low <= high:
        mid = (low + high) // 2
        if _compare_magnitudes(_multiply_magnitudes(divisor, [mid]), remainder) <= 0:
            best = mid
            low = mid + 1
        else:
            high = mid - 1
    return best


def _divide_magnitudes(
    dividend: Sequence[int], divisor: Sequence[int]
) -> Tuple[List[int], List[int]]:
    """
    Деление столбиком: (частное, остаток) модулей.

    Цифры делимого обрабатываются от старшей к младшей, текущий остаток
    дополняется очередной цифрой, цифра частного ищется бинарным поиском.
    """
    quotient: List[int] = []
    remainder: List[int] = []
    for digit in reversed(dividend):
        remainder.insert(0, digit)
        _strip_high_zeros(remainder)

        q = _largest_quotient_digit(remainder, divisor)
        quotient.append(q)
        if q:
            remainder = _subtract_magnitudes(remainder, _multiply_magnitudes(divisor, [q]))

    # Частное собиралось старшим разрядом первым
    quotient.reverse()
    return _strip_high_zeros(quotient), remainder


# =============================================================================
# BIGINT MODEL
# =============================================================================


class BigInt(BaseModel):
    """
    Знаковое целое произвольной точности.

    Создание:
        >>> BigInt("-00123")
        BigInt('-123')
        >>> BigInt.from_int(10**20).to_string()
        '100000000000000000000'
        >>> BigInt()
        BigInt('0')

    Immutable модель (frozen=True): все операции возвращают новый экземпляр.
    """

    digits: Tuple[int, ...] = Field(
        default=(), description="Десятичные цифры, младший разряд первым; () для нуля"
    )
    negative: bool = Field(default=False, description="True только для строго отрицательных")

    model_config = {"frozen": True}  # Immutable

    def __init__(self, number: Optional[str] = None, /, **data: Any) -> None:
        """
        Args:
            number: Десятичная строка ['+'|'-'] digit+ (опционально)
            **data: Поля модели (digits, negative), если number не задан

        Raises:
            FormatError: Если строка не соответствует грамматике целого
        """
        if number is not None:
            if data:
                raise TypeError("BigInt accepts either a decimal string or fields, not both")
            data = _parse_integer(number)
        super().__init__(**data)

    @field_validator("digits")
    @classmethod
    def validate_digit_range(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Каждая цифра в диапазоне 0..9."""
        for digit in v:
            if not 0 <= digit < DIGIT_BASE:
                raise ValueError(f"digit {digit} outside 0..{DIGIT_BASE - 1}")
        return v

    @model_validator(mode="after")
    def validate_canonical(self) -> "BigInt":
        """Нет старшего нуля; ноль не может быть отрицательным."""
        if self.digits and self.digits[-1] == 0:
            raise ValueError("most significant digit must not be zero")
        if not self.digits and self.negative:
            raise ValueError("zero cannot be negative")
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, number: str) -> "BigInt":
        """Разбор десятичной строки (эквивалент BigInt(number))."""
        return cls(number)

    @classmethod
    def from_int(cls, value: int) -> "BigInt":
        """Конверсия native int → BigInt."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        return cls(str(int(value)))

    @classmethod
    def _from_magnitude(cls, digits: List[int], negative: bool) -> "BigInt":
        # Нормализация перед созданием: без старших нулей, ноль без знака
        _strip_high_zeros(digits)
        return cls(digits=tuple(digits), negative=negative and bool(digits))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "BigInt") -> int:
        """
        Полный порядок: -1 если self < other, 0 если равны, 1 если self > other.

        Разные знаки решают сразу. При одинаковом знаке сравниваются модули
        (сначала длина, затем цифры от старшей); для отрицательных порядок
        модулей инвертируется.
        """
        if self.negative != other.negative:
            return -1 if self.negative else 1

        order = _compare_magnitudes(self.digits, other.digits)
        return -order if self.negative else order

    def less_than(self, other: "BigInt") -> bool:
        return self.compare(other) < 0

    def greater_than(self, other: "BigInt") -> bool:
        return self.compare(other) > 0

    def equal(self, other: "BigInt") -> bool:
        return self.compare(other) == 0

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return not self.digits

    def is_positive(self) -> bool:
        return bool(self.digits) and not self.negative

    def is_negative(self) -> bool:
        return self.negative

    def abs(self) -> "BigInt":
        if not self.negative:
            return self
        return BigInt._from_magnitude(list(self.digits), False)

    def negate(self) -> "BigInt":
        """Смена знака; ноль остаётся нулём."""
        return BigInt._from_magnitude(list(self.digits), not self.negative)

    @property
    def num_digits(self) -> int:
        """Количество десятичных цифр модуля (0 для нуля)."""
        return len(self.digits)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "BigInt") -> "BigInt":
        """
        Сложение.

        Одинаковые знаки: сложение цифр с переносом, общий знак.
        Разные знаки: из большего модуля вычитается меньший, знак берётся
        у операнда с большим модулем.
        """
        if self.negative == other.negative:
            return BigInt._from_magnitude(
                _add_magnitudes(self.digits, other.digits), self.negative
            )

        order = _compare_magnitudes(self.digits, other.digits)
        if order == 0:
            return BigInt()
        if order > 0:
            return BigInt._from_magnitude(
                _subtract_magnitudes(self.digits, other.digits), self.negative
            )
        return BigInt._from_magnitude(
            _subtract_magnitudes(other.digits, self.digits), other.negative
        )

    def subtract(self, other: "BigInt") -> "BigInt":
        """
        Вычитание.

        Разные знаки: сложение модулей со знаком уменьшаемого.
        Одинаковые знаки: больший модуль минус меньший; знак уменьшаемого,
        инвертированный если модуль уменьшаемого меньше.
        """
        if self.negative != other.negative:
            return BigInt._from_magnitude(
                _add_magnitudes(self.digits, other.digits), self.negative
            )

        order = _compare_magnitudes(self.digits, other.digits)
        if order == 0:
            return BigInt()
        if order > 0:
            return BigInt._from_magnitude(
                _subtract_magnitudes(self.digits, other.digits), self.negative
            )
        return BigInt._from_magnitude(
            _subtract_magnitudes(other.digits, self.digits), not self.negative
        )

    def multiply(self, other: "BigInt") -> "BigInt":
        """Умножение столбиком; знак = XOR знаков."""
        return BigInt._from_magnitude(
            _multiply_magnitudes(self.digits, other.digits),
            self.negative != other.negative,
        )

    def divide(self, other: "BigInt") -> "BigInt":
        """
        Деление с усечением к нулю.

        Raises:
            DivisionByZeroError: Если other == 0

        Examples:
            >>> BigInt("100").divide(BigInt("7"))
            BigInt('14')
            >>> BigInt("-7").divide(BigInt("2"))
            BigInt('-3')
        """
        if other.is_zero():
            raise DivisionByZeroError(f"Division by zero: {self.to_string()} / 0")

        quotient, _ = _divide_magnitudes(self.digits, other.digits)
        return BigInt._from_magnitude(quotient, self.negative != other.negative)

    def modulo(self, other: "BigInt") -> "BigInt":
        """
        Остаток усечённого деления: self - (self / other) * other.

        Знак остатка всегда совпадает со знаком делимого (как в C),
        а не с делителем: BigInt("-7").modulo(BigInt("2")) == BigInt("-1").

        Raises:
            DivisionByZeroError: Если other == 0
        """
        result = self.subtract(self.divide(other).multiply(other))
        if result.negative != self.negative:
            result = BigInt._from_magnitude(list(result.digits), self.negative)
        return result

    def divmod(self, other: "BigInt") -> Tuple["BigInt", "BigInt"]:
        """(divide, modulo) за один проход деления столбиком."""
        if other.is_zero():
            raise DivisionByZeroError(f"Division by zero: {self.to_string()} / 0")

        quotient, remainder = _divide_magnitudes(self.digits, other.digits)
        return (
            BigInt._from_magnitude(quotient, self.negative != other.negative),
            BigInt._from_magnitude(remainder, self.negative),
        )

    def pow(self, exponent: Union[int, "BigInt"]) -> "BigInt":
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

    def sqr(self) -> "BigInt":
        return self.multiply(self)

    def sqrt(self) -> "BigInt":
        """
        Целочисленный квадратный корень (floor) бинарным поиском.

        Границы поиска [1, self]; low = mid + 1 если mid² < self,
        иначе high = mid - 1. На выходе high — наибольшее значение,
        квадрат которого не превышает self.

        Raises:
            NegativeOperandError: Если self < 0
        """
        if self.negative:
            raise NegativeOperandError(f"Square root of negative number: {self.to_string()}")
        if self.is_zero() or self.equal(_ONE):
            return self

        low, high = _ONE, self
        while low.compare(high) <= 0:
            mid = low.add(high).divide(_TWO)
            order = mid.sqr().compare(self)
            if order == 0:
                return mid
            if order < 0:
                low = mid.add(_ONE)
            else:
                high = mid.subtract(_ONE)
        return high

    # -------------------------------------------------------------------------
    # Десятичные сдвиги
    # -------------------------------------------------------------------------

    def shift_left(self, positions: int) -> "BigInt":
        """Умножение модуля на 10^positions (отрицательный сдвиг → shift_right)."""
        if positions < 0:
            return self.shift_right(-positions)
        if positions == 0 or self.is_zero():
            return self
        return BigInt._from_magnitude([0] * positions + list(self.digits), self.negative)

    def shift_right(self, positions: int) -> "BigInt":
        """Деление модуля на 10^positions с усечением (отрицательный сдвиг → shift_left)."""
        if positions < 0:
            return self.shift_left(-positions)
        if positions == 0:
            return self
        if positions >= len(self.digits):
            return BigInt()
        return BigInt._from_magnitude(list(self.digits[positions:]), self.negative)

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        if not self.digits:
            return "0"
        body = "".join(DIGIT_CHARS[d] for d in reversed(self.digits))
        return "-" + body if self.negative else body

    def to_int(self) -> int:
        value = 0
        for digit in reversed(self.digits):
            value = value * DIGIT_BASE + digit
        return -value if self.negative else value

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInt({self.to_string()!r})"

    def __int__(self) -> int:
        return self.to_int()

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.compare(other) >= 0

    def __add__(self, other: object) -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.multiply(other)

    def __floordiv__(self, other: object) -> "BigInt":
        # Усечение к нулю, в отличие от int (округление к -inf)
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other: object) -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.modulo(other)

    def __divmod__(self, other: object) -> Tuple["BigInt", "BigInt"]:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.divmod(other)

    def __pow__(self, exponent: object) -> "BigInt":
        if not isinstance(exponent, (int, BigInt)):
            return NotImplemented
        return self.pow(exponent)

    def __lshift__(self, positions: int) -> "BigInt":
        return self.shift_left(positions)

    def __rshift__(self, positions: int) -> "BigInt":
        return self.shift_right(positions)

    def __neg__(self) -> "BigInt":
        return self.negate()

    def __pos__(self) -> "BigInt":
        return self

    def __abs__(self) -> "BigInt":
        return self.abs()


def _parse_integer(number: str) -> dict:
    body, negative = split_sign(number)
    if not body or not is_digit_run(body):
        raise reject(number, "integer")

    digits = _strip_high_zeros(digits_from_string(body))
    return {"digits": tuple(digits), "negative": negative and bool(digits)}


_ONE = BigInt("1")
_TWO = BigInt("2")
