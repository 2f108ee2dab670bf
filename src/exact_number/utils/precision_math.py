"""Arbitrary-precision arithmetic on decimal strings.

Every function takes numbers as decimal strings (or anything `as_decimal` accepts) and returns
a plain-notation string. Arithmetic is computed with one guard digit (`scale + 1` fractional
digits, truncated) and then rounded half away from zero to `scale` digits, so results never
depend on binary floating-point.
"""

from __future__ import annotations

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, Context, Decimal, InvalidOperation, Overflow

from exact_number.domain.exceptions import DivisionByZeroError
from exact_number.utils.decimal_tools import DecimalLike, as_decimal, to_plain_string

# Exact context: add / sub / mul never lose digits, and every quantize truncates toward zero
_EXACT = Context(prec=MAX_PREC, rounding=ROUND_DOWN, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[InvalidOperation, Overflow])


def _quantum(scale: int) -> Decimal:
    return Decimal(1).scaleb(-scale, context=_EXACT)


def _truncate(value: Decimal, scale: int) -> Decimal:
    return value.quantize(_quantum(scale), rounding=ROUND_DOWN, context=_EXACT)


def _check_scale(scale: int, function_name: str) -> None:
    # Raise: scale is a count of fractional digits
    if scale < 0:
        raise ValueError(f"Cannot call `{function_name}` because $scale ({scale}) is negative")


def truncate(value: DecimalLike, scale: int) -> str:
    """Keep $scale fractional digits of $value and drop the rest (toward zero).

    Examples:
        >>> truncate("1.239", 2)
        '1.23'
        >>> truncate("-1.5", 2)
        '-1.50'
    """
    _check_scale(scale, "truncate")
    return to_plain_string(_truncate(as_decimal(value), scale))


def round_half_away(value: DecimalLike, scale: int) -> str:
    """Round $value to $scale fractional digits, halves away from zero.

    The value is shifted left by `scale + 1` digits and truncated to an integer, which keeps
    exactly one guard digit. Adding 5 (or -5 for negative values) to that guard digit and
    truncating back to $scale digits rounds the last kept digit.

    Examples:
        >>> round_half_away("1.005", 2)
        '1.01'
        >>> round_half_away("-1.005", 2)
        '-1.01'
        >>> round_half_away("1.014", 2)
        '1.01'
    """
    _check_scale(scale, "round_half_away")
    number = as_decimal(value)

    shifted = number.scaleb(scale + 1, context=_EXACT).to_integral_value(rounding=ROUND_DOWN, context=_EXACT)
    guard = Decimal(-5) if number.is_signed() else Decimal(5)
    rounded = _EXACT.add(shifted, guard).scaleb(-(scale + 1), context=_EXACT)

    return to_plain_string(_truncate(rounded, scale))


def add(a: DecimalLike, b: DecimalLike, scale: int) -> str:
    """Return $a + $b rounded to $scale fractional digits."""
    _check_scale(scale, "add")
    result = _EXACT.add(as_decimal(a), as_decimal(b))
    return round_half_away(_truncate(result, scale + 1), scale)


def sub(a: DecimalLike, b: DecimalLike, scale: int) -> str:
    """Return $a - $b rounded to $scale fractional digits."""
    _check_scale(scale, "sub")
    result = _EXACT.subtract(as_decimal(a), as_decimal(b))
    return round_half_away(_truncate(result, scale + 1), scale)


def mul(a: DecimalLike, b: DecimalLike, scale: int) -> str:
    """Return $a * $b rounded to $scale fractional digits."""
    _check_scale(scale, "mul")
    result = _EXACT.multiply(as_decimal(a), as_decimal(b))
    return round_half_away(_truncate(result, scale + 1), scale)


def div(a: DecimalLike, b: DecimalLike, scale: int) -> str:
    """Return $a / $b rounded to $scale fractional digits.

    The quotient is computed on Python integers, truncated at `scale + 1` digits, so
    non-terminating quotients (1 / 3) never need more digits than that.

    Raises:
        DivisionByZeroError: If $b is zero.
    """
    _check_scale(scale, "div")
    dividend = as_decimal(a)
    divisor = as_decimal(b)

    # Raise: a zero divisor has no quotient
    if divisor.is_zero():
        raise DivisionByZeroError(f"Cannot call `div` because divisor $b ({b}) is zero")

    guarded_scale = scale + 1
    dividend_sign, dividend_digits, dividend_exponent = dividend.as_tuple()
    divisor_sign, divisor_digits, divisor_exponent = divisor.as_tuple()

    # a * 10^guarded_scale / b == a_int * 10^shift / b_int
    numerator = int("".join(map(str, dividend_digits)))
    denominator = int("".join(map(str, divisor_digits)))
    shift = dividend_exponent + guarded_scale - divisor_exponent
    if shift >= 0:
        numerator *= 10**shift
    else:
        denominator *= 10**-shift

    quotient = numerator // denominator
    if dividend_sign != divisor_sign:
        quotient = -quotient

    result = Decimal(quotient).scaleb(-guarded_scale, context=_EXACT)
    return round_half_away(result, scale)


def ceil(value: DecimalLike) -> str:
    """Return the smallest integer not below $value.

    Examples:
        >>> ceil("1.005")
        '2'
        >>> ceil("-1.005")
        '-1'
    """
    return to_plain_string(as_decimal(value).to_integral_value(rounding=ROUND_CEILING, context=_EXACT))


def floor(value: DecimalLike) -> str:
    """Return the largest integer not above $value.

    Examples:
        >>> floor("1.005")
        '1'
        >>> floor("-1.005")
        '-2'
    """
    return to_plain_string(as_decimal(value).to_integral_value(rounding=ROUND_FLOOR, context=_EXACT))
