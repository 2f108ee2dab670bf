from decimal import Decimal

import pytest

from exact_number.utils.decimal_tools import (
    as_decimal,
    count_decimals,
    is_finite_number,
    is_numeric_string,
    is_valid_scale,
    to_plain_string,
)


@pytest.mark.parametrize("value", ["1", "-1", "+1", "1.50", "-0.001", ".5", "5.", " 12.3 ", "000123"])
def test_numeric_strings_are_accepted(value: str):
    assert is_numeric_string(value)


@pytest.mark.parametrize("value", ["", " ", "abc", "1.2.3", "1e5", "1E-8", "NaN", "Infinity", "-", ".", "1,5", "1 000"])
def test_non_numeric_strings_are_rejected(value: str):
    assert not is_numeric_string(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1.500", 3),
        ("1", 0),
        ("5.", 0),
        (" 0.25 ", 2),
        (10, 0),
        (1.005, 3),
        (1.1, 1),
        (1.0000000005, 10),
        (0.00000001, 8),
        (1e20, 0),
        (Decimal("1.500"), 3),
        (Decimal("1E+3"), 0),
    ],
)
def test_count_decimals(value, expected: int):
    assert count_decimals(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("-0.00"), "0.00"),
        (Decimal("-0"), "0"),
        (Decimal("1E+3"), "1000"),
        (Decimal("1E-8"), "0.00000001"),
        (Decimal("-12.340"), "-12.340"),
    ],
)
def test_to_plain_string(value: Decimal, expected: str):
    assert to_plain_string(value) == expected


def test_as_decimal_converts_floats_through_their_string_form():
    assert as_decimal(0.1) == Decimal("0.1")
    assert as_decimal(" 2.50 ") == Decimal("2.50")
    value = Decimal("3.14")
    assert as_decimal(value) is value


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, True),
        (1.5, True),
        (Decimal("1.5"), True),
        (float("nan"), False),
        (float("inf"), False),
        (Decimal("NaN"), False),
        (Decimal("-Infinity"), False),
        (True, False),
        ("1", False),
        (None, False),
    ],
)
def test_is_finite_number(value, expected: bool):
    assert is_finite_number(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [(0, True), (2, True), (18, True), (-1, False), (True, False), (False, False), (1.0, False), ("2", False), (None, False)],
)
def test_is_valid_scale(value, expected: bool):
    assert is_valid_scale(value) is expected
