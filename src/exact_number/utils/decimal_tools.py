from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Plain positional notation only: no exponent, no NaN / Infinity
_NUMERIC_STRING = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def is_numeric_string(value: str) -> bool:
    """Check whether $value is a number written in plain positional notation.

    Surrounding whitespace is ignored. Exponent notation is not accepted.
    """
    return _NUMERIC_STRING.fullmatch(value.strip()) is not None


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    if isinstance(value, str):
        return Decimal(value.strip())

    return Decimal(str(value))


def is_finite_number(value: object) -> bool:
    """Check whether $value is an int, float or Decimal holding a finite number.

    `bool` is deliberately not a number here.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def to_plain_string(value: Decimal) -> str:
    """Format $value in positional notation, never with an exponent and never as `-0`."""
    if value.is_zero():
        value = value.copy_abs()
    return format(value, "f")


def count_decimals(value: DecimalLike) -> int:
    """Count fractional digits carried by $value.

    Strings count the digits written after the `.`; floats count the digits of their
    shortest `repr`; Decimals use their exponent; ints carry none.

    Examples:
        >>> count_decimals("1.500")
        3
        >>> count_decimals(1.005)
        3
        >>> count_decimals(10)
        0
    """
    if isinstance(value, str):
        _, dot, fraction = value.strip().partition(".")
        return len(fraction) if dot else 0

    if isinstance(value, int):
        return 0

    exponent = as_decimal(value).as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def is_valid_scale(value: object) -> bool:
    """Check whether $value can be used as a count of fractional digits (a non-negative int, not `bool`)."""
    return not isinstance(value, bool) and isinstance(value, int) and value >= 0
