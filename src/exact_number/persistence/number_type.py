from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.engine import Dialect
from sqlalchemy.types import String, TypeDecorator

from exact_number.domain.exceptions import NotANumberError
from exact_number.domain.number import Number
from exact_number.utils.decimal_tools import is_valid_scale

logger = logging.getLogger(__name__)


class NumberType(TypeDecorator):
    """SQLAlchemy column type that stores a `Number` as its canonical decimal text.

    Values read back are coerced with `Number.of(stored, decimals)`, so every column has its own
    default scale. Writing anything that is not a `Number` is rejected.

    Examples:
        >>> price: Mapped[Number] = mapped_column(NumberType(decimals=4))
        >>> amount: Mapped[Number | None] = mapped_column(NumberType.with_decimals(2), nullable=True)
    """

    impl = String
    cache_ok = True

    def __init__(self, decimals: int = 2, length: int | None = None):
        """Initialize the column type.

        Args:
            decimals (int): Scale of every `Number` read from this column.
            length (int | None): Optional length of the underlying VARCHAR column.

        Raises:
            ValueError: If $decimals is not a non-negative integer.
        """
        # Raise: scale is a count of fractional digits
        if not is_valid_scale(decimals):
            raise ValueError(f"$decimals must be a non-negative integer, but provided value is: {decimals!r}")

        super().__init__(length=length)
        self.decimals = decimals

    @classmethod
    def with_decimals(cls, decimals: int) -> NumberType:
        return cls(decimals=decimals)

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None

        # Raise: only Number instances may be written
        if not isinstance(value, Number):
            message = f"Cannot store $value ({value!r}) in a `NumberType` column because it is not a Number instance"
            logger.error(message)
            raise NotANumberError(message)

        logger.debug(f"Binding {value!r} as '{value.to_string()}'")
        return value.to_string()

    def process_result_value(self, value: Any, dialect: Dialect) -> Number | None:
        if value is None:
            return None

        number = Number.of(value, self.decimals)
        logger.debug(f"Loaded stored value {value!r} as {number!r}")
        return number

    @property
    def python_type(self) -> type:
        return Number
