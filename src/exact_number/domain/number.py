from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from decimal import Decimal
from types import NotImplementedType
from typing import TypeAlias

from exact_number.domain.exceptions import InvalidPrecisionError, NotANumberError
from exact_number.utils import precision_math
from exact_number.utils.decimal_tools import as_decimal, count_decimals, is_finite_number, is_numeric_string, is_valid_scale, to_plain_string

logger = logging.getLogger(__name__)

# Anything `Number.of` can coerce into a `Number`
NumberLike: TypeAlias = "Number | Decimal | str | int | float"

# Swap American separators ("1,234.56") for European ones ("1.234,56")
_EUROPEAN_SEPARATORS = str.maketrans({",": ".", ".": ","})


class Number:
    """Immutable decimal number for exact monetary and quantity arithmetic.

    A `Number` carries a canonical decimal string ($value) and a scale ($decimals), the count of
    fractional digits the number is rounded to. The canonical string has no leading zeros (except
    a lone "0"), no trailing fractional zeros, no trailing "." and a "-" sign only when negative.

    Every operation returns a new instance; numeric work is delegated to `precision_math`, so no
    result ever passes through binary floating-point (except the explicitly lossy `to_float`).

    Attributes:
        MIN_DECIMALS (int): Smallest scale ever inferred from an input.
        PERCENTAGE_DECIMALS (int): Working scale used inside `percentage`.
        CENTS_DECIMALS (int): Scale of cent amounts (`in_cents`, `from_cents`).

    Examples:
        >>> Number.of("1.005").round(2)
        Number('1.01', decimals=2)
        >>> Number.of(10).div(3, 4).to_string()
        '3.3333'
    """

    __slots__ = ("_value", "_decimals")

    MIN_DECIMALS = 2
    PERCENTAGE_DECIMALS = 25
    CENTS_DECIMALS = 2

    def __init__(self, value: str, decimals: int | None = None):
        """Initialize Number from a numeric string.

        If $decimals is not given, it is inferred from the digits after "." (at least
        `MIN_DECIMALS`). The value is rounded half away from zero to $decimals and canonicalized.

        Args:
            value (str): Number in plain positional notation, e.g. "-1234.50".
            decimals (int | None): Scale to round $value to.

        Raises:
            NotANumberError: If $value is not a numeric string.
            ValueError: If $decimals is not a non-negative integer.
        """
        # Raise: $value must be a numeric string
        if not isinstance(value, str) or not is_numeric_string(value):
            raise NotANumberError(f"Cannot init `Number` because $value ({value!r}) is not a numeric string")

        if decimals is None:
            decimals = self._infer_decimals(value)

        self._check_decimals(decimals)

        self._value = self._sanitize(precision_math.round_half_away(value, decimals))
        self._decimals = decimals

    # region Construction

    @classmethod
    def of(cls, value: NumberLike, decimals: int | None = None) -> Number:
        """Coerce $value into a `Number` with $decimals scale.

        If $decimals is not given, it is inferred: a `Number` keeps its own scale, strings count
        their fractional digits, floats count the digits of their shortest `repr`, Decimals use
        their exponent and ints carry none. The inferred scale is never below `MIN_DECIMALS`.

        Floats are first written as a decimal string with one digit more than $decimals and only
        then rounded, so the binary representation never leaks into the result.

        Args:
            value: A `Number`, numeric string, `Decimal`, int or float.
            decimals: Target scale. Defaults to the inferred scale.

        Returns:
            Number: $value itself when it is a `Number` already at $decimals, otherwise a new instance.

        Raises:
            NotANumberError: If $value is not numeric.
            ValueError: If $decimals is given but is not a non-negative integer.
        """
        if decimals is not None:
            cls._check_decimals(decimals)

        if isinstance(value, Number):
            if decimals is None or decimals == value.decimals:
                return value
            return cls(value.value, decimals)

        if isinstance(value, str):
            # Raise: strings must hold a plain decimal number
            if not is_numeric_string(value):
                raise NotANumberError(f"Cannot call `of` because $value ({value!r}) is not a numeric string")
            return cls(value, decimals)

        # Raise: everything else must be a finite int, float or Decimal
        if not is_finite_number(value):
            raise NotANumberError(f"Cannot call `of` because $value ({value!r}) is not a number or a Number instance")

        if decimals is None:
            decimals = cls._infer_decimals(value)

        if isinstance(value, float):
            formatted = precision_math.round_half_away(as_decimal(value), decimals + 1)
            logger.debug(f"Converted float {value!r} to '{formatted}' before rounding to {decimals} decimals")
            return cls(formatted, decimals)

        return cls(to_plain_string(as_decimal(value)), decimals)

    @classmethod
    def from_cents(cls, cents: int) -> Number:
        """Create a `Number` with 2 decimals from an integer count of cents.

        Examples:
            >>> Number.from_cents(-110).to_string()
            '-1.1'
        """
        # Raise: cents are whole numbers
        if isinstance(cents, bool) or not isinstance(cents, int):
            raise NotANumberError(f"Cannot call `from_cents` because $cents ({cents!r}) is not an integer")

        sign = "-" if cents < 0 else ""
        digits = str(abs(cents)).rjust(cls.CENTS_DECIMALS + 1, "0")
        return cls(f"{sign}{digits[: -cls.CENTS_DECIMALS]}.{digits[-cls.CENTS_DECIMALS :]}", cls.CENTS_DECIMALS)

    @classmethod
    def min(cls, values: Iterable[NumberLike]) -> Number:
        """Return the smallest of $values, coerced to `Number`.

        Ties resolve to the first occurrence.

        Raises:
            ValueError: If $values is empty.
            NotANumberError: If any of $values is not numeric.
        """
        return cls._extreme(values, "min", lambda candidate, best: candidate.lt(best))

    @classmethod
    def max(cls, values: Iterable[NumberLike]) -> Number:
        """Return the largest of $values, coerced to `Number`.

        Ties resolve to the first occurrence.

        Raises:
            ValueError: If $values is empty.
            NotANumberError: If any of $values is not numeric.
        """
        return cls._extreme(values, "max", lambda candidate, best: candidate.gt(best))

    @classmethod
    def _extreme(cls, values: Iterable[NumberLike], function_name: str, is_better: Callable[[Number, Number], bool]) -> Number:
        result: Number | None = None
        for value in values:
            candidate = cls.of(value)
            if result is None or is_better(candidate, result):
                result = candidate

        # Raise: there is no extreme of nothing
        if result is None:
            raise ValueError(f"Cannot call `{function_name}` because $values is empty")

        return result

    # endregion

    # region Properties

    @property
    def value(self) -> str:
        """Get the canonical decimal string."""
        return self._value

    @property
    def decimals(self) -> int:
        """Get the scale (count of fractional digits this number is rounded to)."""
        return self._decimals

    # endregion

    # region Arithmetic

    def add(self, number: NumberLike, decimals: int | None = None) -> Number:
        """Add $number; the result has $decimals scale (default: own scale)."""
        return self._calculate(precision_math.add, number, decimals)

    def sub(self, number: NumberLike, decimals: int | None = None) -> Number:
        """Subtract $number; the result has $decimals scale (default: own scale)."""
        return self._calculate(precision_math.sub, number, decimals)

    def mul(self, number: NumberLike, decimals: int | None = None) -> Number:
        """Multiply by $number; the result has $decimals scale (default: own scale)."""
        return self._calculate(precision_math.mul, number, decimals)

    def div(self, number: NumberLike, decimals: int | None = None) -> Number:
        """Divide by $number; the result has $decimals scale (default: own scale).

        Raises:
            DivisionByZeroError: If $number is zero.
        """
        return self._calculate(precision_math.div, number, decimals)

    def negate(self, when: bool = True) -> Number:
        """Flip the sign. With $when False, return the number unchanged."""
        if when:
            return self.mul(-1)

        return self

    def abs(self) -> Number:
        """Get the absolute value, i.e. remove the sign. The scale is kept."""
        return self.__class__(self._value.lstrip("-"), self._decimals)

    def round(self, decimals: int = 0) -> Number:
        """Round half away from zero to $decimals; the scale is re-inferred from the result."""
        return self.__class__(precision_math.round_half_away(self._value, decimals))

    def ceil(self) -> Number:
        return self.__class__(precision_math.ceil(self._value))

    def floor(self) -> Number:
        return self.__class__(precision_math.floor(self._value))

    def percentage(self, value: NumberLike, decimals: int | None = None) -> Number:
        """Calculate $value percent of this number.

        Intermediate steps run at `PERCENTAGE_DECIMALS` scale; only the final result is rounded
        to $decimals (default: own scale).

        Examples:
            >>> Number.of(500).percentage(10).to_string()
            '50'
        """
        percent = self.__class__.of(value, self.PERCENTAGE_DECIMALS)
        base = self.__class__(self._value, self.PERCENTAGE_DECIMALS)
        return base.div(100).mul(percent, self._resolve_decimals(decimals))

    def exchange_with_rate(self, exchange_rate: NumberLike, decimals: int | None = None) -> Number:
        """Exchange with a rate quoted per 100 units, e.g. 1000 with rate 745 gives 7450."""
        return self.mul(exchange_rate).div(100, decimals)

    def decimal_fraction(self) -> Number:
        """Get the fractional part with the sign of this number, e.g. 0.25 for 1.25 or -0.5 for -2.5."""
        _, dot, fraction = self._value.partition(".")
        fraction_value = f"0.{fraction}" if dot else "0"

        return self.__class__.of(fraction_value).negate(when=self.is_negative())

    def _calculate(self, operation: Callable[[str, str, int], str], number: NumberLike, decimals: int | None) -> Number:
        operand = self.__class__.of(number)
        scale = self._resolve_decimals(decimals)
        return self.__class__(operation(self._value, operand.value, scale), scale)

    def _resolve_decimals(self, decimals: int | None) -> int:
        return self._decimals if decimals is None else decimals

    # endregion

    # region Comparison

    def lt(self, number: NumberLike) -> bool:
        return self._compare(number) < 0

    def lte(self, number: NumberLike) -> bool:
        return self._compare(number) <= 0

    def gt(self, number: NumberLike) -> bool:
        return self._compare(number) > 0

    def gte(self, number: NumberLike) -> bool:
        return self._compare(number) >= 0

    def eq(self, number: NumberLike) -> bool:
        """Check that $number, once coerced, has exactly the same canonical value."""
        return self._value == self.__class__.of(number).value

    def is_zero(self) -> bool:
        return self._value == "0"

    def is_positive(self) -> bool:
        return self.gt(0)

    def is_positive_or_zero(self) -> bool:
        return self.gte(0)

    def is_negative(self) -> bool:
        return self.lt(0)

    def is_negative_or_zero(self) -> bool:
        return self.lte(0)

    def _compare(self, number: NumberLike) -> int:
        """Return -1, 0 or 1 as this number is below, equal to or above $number.

        Canonical strings are compared as Decimals; comparing them as text would put "10" below "9".
        """
        mine = as_decimal(self._value)
        theirs = as_decimal(self.__class__.of(number).value)
        return (mine > theirs) - (mine < theirs)

    # endregion

    # region Conversion

    def to_string(self) -> str:
        """Get the canonical decimal string; this is the storage / wire form."""
        return self._value

    def to_float(self) -> float:
        """Convert to float. Lossy for values beyond float precision."""
        return float(self._value)

    def to_int(self) -> int:
        """Convert to int, dropping the fractional part (toward zero)."""
        return int(as_decimal(self._value))

    def to_monetary_amount(self) -> str:
        """Get the number as a string with exactly two decimals, e.g. "12.50".

        Extra digits are truncated, not rounded.
        """
        return precision_math.truncate(self._value, self.CENTS_DECIMALS)

    def in_cents(self) -> int:
        """Get the number as an integer count of cents.

        Raises:
            InvalidPrecisionError: If the scale is above 2 decimals.
        """
        # Raise: cents cannot represent more than two decimals
        if self._decimals > self.CENTS_DECIMALS:
            raise InvalidPrecisionError(f"Cannot call `in_cents` because $decimals ({self._decimals}) is greater than {self.CENTS_DECIMALS}")

        return int(self.to_monetary_amount().replace(".", ""))

    def format(self, decimals: int, european_style: bool = True) -> str:
        """Format with thousands grouping, e.g. "1.234.567,89" (European) or "1,234,567.89".

        The value is rounded half away from zero to $decimals first; only the integer digits are
        grouped, so no float conversion is involved.

        Examples:
            >>> Number.of("2.5").format(0, european_style=False)
            '3'
        """
        rounded = precision_math.round_half_away(self._value, decimals)
        integer_part, dot, fraction = rounded.partition(".")
        sign = "-" if integer_part.startswith("-") else ""

        formatted = f"{sign}{int(integer_part.lstrip('-')):,}{dot}{fraction}"
        if european_style:
            return formatted.translate(_EUROPEAN_SEPARATORS)

        return formatted

    # endregion

    # region Python protocols

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._value}', decimals={self._decimals})"

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return self.to_int()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        """Hash based on the canonical value; the scale is not part of equality."""
        return hash(self._value)

    def __eq__(self, other: object) -> bool | NotImplementedType:
        """Check canonical equality with another Number.

        Use `eq` to compare against strings, ints or floats.
        """
        if not isinstance(other, Number):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool | NotImplementedType:
        return self._compare_operator(other, self.lt)

    def __le__(self, other: object) -> bool | NotImplementedType:
        return self._compare_operator(other, self.lte)

    def __gt__(self, other: object) -> bool | NotImplementedType:
        return self._compare_operator(other, self.gt)

    def __ge__(self, other: object) -> bool | NotImplementedType:
        return self._compare_operator(other, self.gte)

    def __add__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.add)

    def __radd__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.add)

    def __sub__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.sub)

    def __rsub__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, lambda number: self.__class__.of(number).sub(self, self._decimals))

    def __mul__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.mul)

    def __rmul__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.mul)

    def __truediv__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, self.div)

    def __rtruediv__(self, other: object) -> Number | NotImplementedType:
        return self._arithmetic_operator(other, lambda number: self.__class__.of(number).div(self, self._decimals))

    def __neg__(self) -> Number:
        return self.negate()

    def __pos__(self) -> Number:
        return self

    def __abs__(self) -> Number:
        return self.abs()

    @staticmethod
    def _compare_operator(other: object, comparison: Callable[[NumberLike], bool]) -> bool | NotImplementedType:
        try:
            return comparison(other)
        except NotANumberError:
            return NotImplemented

    @staticmethod
    def _arithmetic_operator(other: object, operation: Callable[[NumberLike], Number]) -> Number | NotImplementedType:
        try:
            return operation(other)
        except NotANumberError:
            return NotImplemented

    # endregion

    @staticmethod
    def _sanitize(value: str) -> str:
        """Strip trailing fractional zeros, then a trailing bare "."."""
        if value == "0" or "." not in value:
            return value

        return value.rstrip("0").rstrip(".")

    @staticmethod
    def _check_decimals(decimals: object) -> None:
        # Raise: $decimals must be a non-negative integer
        if not is_valid_scale(decimals):
            raise ValueError(f"$decimals must be a non-negative integer, but provided value is: {decimals!r}")

    @classmethod
    def _infer_decimals(cls, value: NumberLike) -> int:
        decimals = value.decimals if isinstance(value, Number) else count_decimals(value)
        return max(cls.MIN_DECIMALS, decimals)
