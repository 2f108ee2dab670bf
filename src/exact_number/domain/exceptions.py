from __future__ import annotations


class NumberError(Exception):
    """Base class for every error raised by `Number` and its precision engine."""


class NotANumberError(NumberError, ValueError):
    """Raised when a value offered to `Number` is neither numeric nor a `Number`."""

    def __init__(self, message: str = "The given value is not a number"):
        super().__init__(message)


class DivisionByZeroError(NumberError, ZeroDivisionError):
    """Raised when dividing by a zero-valued operand."""


class InvalidPrecisionError(NumberError, ValueError):
    """Raised when a conversion needs fewer decimals than the `Number` carries."""
