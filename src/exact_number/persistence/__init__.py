"""Persistence adapters mapping `Number` onto database columns."""

from exact_number.persistence.number_type import NumberType

__all__ = ["NumberType"]
