__version__ = "0.1.0"

from exact_number.domain.exceptions import DivisionByZeroError, InvalidPrecisionError, NotANumberError, NumberError
from exact_number.domain.number import Number, NumberLike

__all__ = [
    "Number",
    "NumberLike",
    "NumberError",
    "NotANumberError",
    "DivisionByZeroError",
    "InvalidPrecisionError",
]
