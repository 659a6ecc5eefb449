"""
Тесты для BigInt — знаковое целое произвольной точности

Проверяет:
1. Разбор строк и канонизацию (старшие нули, знак нуля)
2. Отклонение некорректных строк (FormatError)
3. Сравнение и полный порядок
4. Сложение / вычитание / умножение / деление / остаток
5. Степень, квадрат, целочисленный квадратный корень
6. Десятичные сдвиги
7. Immutability (frozen=True) и операторы Python
"""

import logging

import pytest
from pydantic import ValidationError

from bignum.core.numeric import (
    BigInt,
    DivisionByZeroError,
    FormatError,
    InvalidExponentError,
    NegativeOperandError,
    NumericError,
)


def big(value: str) -> BigInt:
    return BigInt(value)


# =============================================================================
# РАЗБОР СТРОК
# =============================================================================


class TestBigIntParsing:
    """Тесты разбора десятичных строк"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("123", "123"),
            ("+42", "42"),
            ("-42", "-42"),
            ("000123", "123"),
            ("-000123", "-123"),
            ("0", "0"),
            ("-0", "0"),
            ("+000", "0"),
            ("123456789012345678901234567890", "123456789012345678901234567890"),
        ],
    )
    def test_canonical_rendering(self, text: str, expected: str) -> None:
        """Строка приводится к канонической форме"""
        assert BigInt(text).to_string() == expected

    def test_digits_stored_least_significant_first(self) -> None:
        value = BigInt("120")
        assert value.digits == (0, 2, 1)
        assert value.negative is False

    def test_zero_is_empty_and_not_negative(self) -> None:
        """Ноль — пустая последовательность без знака"""
        zero = BigInt("-0000")
        assert zero.digits == ()
        assert zero.negative is False
        assert zero == BigInt()

    @pytest.mark.parametrize(
        "text",
        ["", "+", "-", "12a", " 1", "1 ", "1.5", "--1", "+-1", "1e5", "١٢"],
    )
    def test_invalid_strings_rejected(self, text: str) -> None:
        """Некорректные строки → FormatError"""
        with pytest.raises(FormatError):
            BigInt(text)

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            BigInt("abc")
        with pytest.raises(NumericError):
            BigInt("abc")

    def test_rejected_literal_logged(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="bignum.core.numeric.parsing")
        with pytest.raises(FormatError):
            BigInt("12x")
        assert "Rejected integer literal '12x'" in caplog.text

    def test_parse_and_from_int(self) -> None:
        assert BigInt.parse("-17") == BigInt("-17")
        assert BigInt.from_int(-12345678901234567890).to_string() == "-12345678901234567890"
        assert BigInt.from_int(0) == BigInt()

    def test_from_int_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            BigInt.from_int(1.5)

    @pytest.mark.parametrize("flag", [True, False])
    def test_from_int_rejects_bool(self, flag: bool) -> None:
        with pytest.raises(TypeError, match="got bool"):
            BigInt.from_int(flag)

    def test_string_and_fields_together_rejected(self) -> None:
        with pytest.raises(TypeError):
            BigInt("1", negative=True)


class TestBigIntModelValidation:
    """Тесты инвариантов модели при создании из полей"""

    def test_valid_fields(self) -> None:
        assert BigInt(digits=(3, 2, 1), negative=True).to_string() == "-123"

    def test_digit_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            BigInt(digits=(10,))

    def test_high_order_zero_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BigInt(digits=(1, 0))

    def test_negative_zero_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BigInt(digits=(), negative=True)

    def test_frozen(self) -> None:
        """Immutable: присваивание полей запрещено"""
        value = BigInt("5")
        with pytest.raises(ValidationError):
            value.negative = True


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestBigIntCompare:
    """Тесты полного порядка"""

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("-5", "3", -1),
            ("3", "-5", 1),
            ("100", "99", 1),
            ("99", "100", -1),
            ("-100", "-99", -1),
            ("-99", "-100", 1),
            ("-12", "-13", 1),
            ("12", "13", -1),
            ("12", "12", 0),
            ("0", "-0", 0),
            ("-1", "0", -1),
        ],
    )
    def test_compare(self, lhs: str, rhs: str, expected: int) -> None:
        assert big(lhs).compare(big(rhs)) == expected

    def test_predicates(self) -> None:
        assert big("1").less_than(big("2"))
        assert big("2").greater_than(big("1"))
        assert big("7").equal(big("007"))
        assert not big("7").equal(big("-7"))

    def test_rich_comparisons(self) -> None:
        assert big("-3") < big("2") <= big("2") < big("10")
        assert big("10") > big("-10") >= big("-10")
        assert sorted([big("3"), big("-7"), big("0"), big("12")]) == [
            big("-7"),
            big("0"),
            big("3"),
            big("12"),
        ]

    def test_sign_predicates(self) -> None:
        assert big("5").is_positive()
        assert not big("0").is_positive()
        assert not big("-5").is_positive()
        assert big("-5").is_negative()
        assert not big("0").is_negative()
        assert big("0").is_zero()


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


class TestBigIntAddSubtract:
    """Тесты сложения и вычитания со всеми комбинациями знаков"""

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("123", "877", "1000"),
            ("99999", "1", "100000"),
            ("-5", "3", "-2"),
            ("5", "-3", "2"),
            ("-3", "5", "2"),
            ("3", "-5", "-2"),
            ("-5", "-3", "-8"),
            ("5", "-5", "0"),
            ("0", "0", "0"),
            ("0", "-7", "-7"),
        ],
    )
    def test_add(self, lhs: str, rhs: str, expected: str) -> None:
        assert big(lhs).add(big(rhs)).to_string() == expected

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("1000", "1", "999"),
            ("3", "5", "-2"),
            ("-5", "-3", "-2"),
            ("-3", "-5", "2"),
            ("5", "-3", "8"),
            ("-5", "3", "-8"),
            ("7", "7", "0"),
            ("0", "7", "-7"),
            ("100000000000000000000", "1", "99999999999999999999"),
        ],
    )
    def test_subtract(self, lhs: str, rhs: str, expected: str) -> None:
        assert big(lhs).subtract(big(rhs)).to_string() == expected

    def test_zero_result_is_not_negative(self) -> None:
        result = big("-5").add(big("5"))
        assert result.negative is False
        assert big("-5").subtract(big("-5")).negative is False

    def test_operands_not_mutated(self) -> None:
        a, b = big("5"), big("-8")
        a.add(b)
        a.subtract(b)
        assert a.to_string() == "5"
        assert b.to_string() == "-8"


# =============================================================================
# УМНОЖЕНИЕ, ДЕЛЕНИЕ, ОСТАТОК
# =============================================================================


class TestBigIntMultiply:
    """Тесты умножения столбиком"""

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("999999999999", "999999999999", "999999999998000000000001"),
            ("123456789", "987654321", "121932631112635269"),
            ("-12", "3", "-36"),
            ("-12", "-3", "36"),
            ("0", "-5", "0"),
            ("1", "-1", "-1"),
        ],
    )
    def test_multiply(self, lhs: str, rhs: str, expected: str) -> None:
        assert big(lhs).multiply(big(rhs)).to_string() == expected

    def test_zero_product_is_not_negative(self) -> None:
        assert big("0").multiply(big("-5")).negative is False

    def test_product_length_bounded(self) -> None:
        a = big("9" * 30)
        b = big("9" * 25)
        assert a.multiply(b).num_digits <= a.num_digits + b.num_digits


class TestBigIntDivideModulo:
    """Тесты деления с усечением к нулю и остатка со знаком делимого"""

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("100", "7", "14"),
            ("-7", "2", "-3"),
            ("7", "-2", "-3"),
            ("-7", "-2", "3"),
            ("3", "7", "0"),
            ("0", "5", "0"),
            ("1000000000000000000000", "7", "142857142857142857142"),
            ("121932631112635269", "987654321", "123456789"),
        ],
    )
    def test_divide(self, lhs: str, rhs: str, expected: str) -> None:
        assert big(lhs).divide(big(rhs)).to_string() == expected

    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("100", "7", "2"),
            ("-7", "2", "-1"),
            ("7", "-2", "1"),
            ("-7", "-2", "-1"),
            ("6", "3", "0"),
            ("-6", "3", "0"),
            ("3", "7", "3"),
        ],
    )
    def test_modulo(self, lhs: str, rhs: str, expected: str) -> None:
        assert big(lhs).modulo(big(rhs)).to_string() == expected

    def test_divmod_matches_divide_and_modulo(self) -> None:
        quotient, remainder = big("-17").divmod(big("5"))
        assert quotient == big("-3")
        assert remainder == big("-2")
        assert divmod(big("17"), big("-5")) == (big("-3"), big("2"))

    @pytest.mark.parametrize("operation", ["divide", "modulo", "divmod"])
    def test_division_by_zero(self, operation: str) -> None:
        with pytest.raises(DivisionByZeroError):
            getattr(big("10"), operation)(big("-0"))

    def test_division_by_zero_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            big("10") // big("0")


# =============================================================================
# СТЕПЕНЬ И КОРЕНЬ
# =============================================================================


class TestBigIntPower:
    """Тесты возведения в степень"""

    @pytest.mark.parametrize(
        "base, exponent, expected",
        [
            ("2", 10, "1024"),
            ("2", 100, "1267650600228229401496703205376"),
            ("-3", 3, "-27"),
            ("-3", 4, "81"),
            ("0", 0, "1"),
            ("5", 0, "1"),
            ("0", 5, "0"),
            ("10", 1, "10"),
        ],
    )
    def test_pow(self, base: str, exponent: int, expected: str) -> None:
        assert big(base).pow(exponent).to_string() == expected

    def test_pow_accepts_bigint_exponent(self) -> None:
        assert big("5").pow(big("3")) == big("125")
        assert big("5") ** 3 == big("125")

    def test_negative_exponent_rejected(self) -> None:
        with pytest.raises(InvalidExponentError):
            big("2").pow(-1)
        with pytest.raises(InvalidExponentError):
            big("2").pow(big("-3"))

    def test_sqr(self) -> None:
        assert big("-12").sqr() == big("144")


class TestBigIntSqrt:
    """
    Тесты целочисленного квадратного корня.

    Бинарный поиск возвращает high на выходе: проверяем, что это floor
    на полных квадратах и их соседях.
    """

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0", "0"),
            ("1", "1"),
            ("2", "1"),
            ("3", "1"),
            ("4", "2"),
            ("15", "3"),
            ("16", "4"),
            ("17", "4"),
            ("99", "9"),
            ("100", "10"),
            ("100000000000000000000", "10000000000"),
            ("999999999998000000000001", "999999999999"),
            ("999999999998000000000000", "999999999998"),
        ],
    )
    def test_sqrt(self, value: str, expected: str) -> None:
        assert big(value).sqrt().to_string() == expected

    @pytest.mark.parametrize("n", range(0, 150))
    def test_floor_property(self, n: int) -> None:
        """root² <= n < (root + 1)²"""
        value = BigInt.from_int(n)
        root = value.sqrt()
        assert root.sqr().compare(value) <= 0
        assert root.add(BigInt("1")).sqr().compare(value) > 0

    def test_negative_rejected(self) -> None:
        with pytest.raises(NegativeOperandError):
            big("-4").sqrt()


# =============================================================================
# СДВИГИ И КОНВЕРСИИ
# =============================================================================


class TestBigIntShift:
    """Тесты десятичных сдвигов"""

    def test_shift_left(self) -> None:
        assert big("123").shift_left(3) == big("123000")
        assert big("-123") << 2 == big("-12300")
        assert big("0").shift_left(5) == big("0")

    def test_shift_right(self) -> None:
        assert big("12345").shift_right(2) == big("123")
        assert big("-123") >> 1 == big("-12")
        assert big("123").shift_right(10) == big("0")

    def test_shift_right_to_zero_clears_sign(self) -> None:
        result = big("-5").shift_right(1)
        assert result.is_zero()
        assert result.negative is False

    def test_negative_shift_redirects(self) -> None:
        assert big("123").shift_left(-1) == big("12")
        assert big("123").shift_right(-2) == big("12300")


class TestBigIntConversions:
    """Тесты конверсий и операторов"""

    def test_to_int(self) -> None:
        assert int(big("-42")) == -42
        assert big("123456789012345678901234567890").to_int() == 123456789012345678901234567890
        assert big("0").to_int() == 0

    def test_str_and_repr(self) -> None:
        assert str(big("-7")) == "-7"
        assert repr(big("-7")) == "BigInt('-7')"

    def test_abs_and_negate(self) -> None:
        assert big("-9").abs() == big("9")
        assert abs(big("9")) == big("9")
        assert big("9").negate() == big("-9")
        assert -big("-9") == big("9")
        assert big("0").negate().negative is False

    def test_bool(self) -> None:
        assert bool(big("3"))
        assert not bool(big("0"))

    def test_hash_is_structural(self) -> None:
        assert len({big("12"), big("012"), big("+12")}) == 1

    def test_operators(self) -> None:
        a, b = big("17"), big("5")
        assert a + b == big("22")
        assert a - b == big("12")
        assert a * b == big("85")
        assert a // b == big("3")
        assert a % b == big("2")

    def test_mixed_type_operators_not_supported(self) -> None:
        with pytest.raises(TypeError):
            big("1") + 1
        with pytest.raises(TypeError):
            big("1") < 2
