"""Compile-time constants stored in the values table of the bytecode."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

__all__ = [
    "CValueType",
    "CValue",
]


class CValueType(Enum):
    """Kinds of constants the compiler can put in the values table."""

    Number = 0
    String = 1
    PageAddr = 2


@dataclass(frozen=True)
class CValue:
    """A constant: a number, a string or the address of a code page.

    Two constants are equal only when both their type and their value match,
    so a Number 1 and a PageAddr 1 stay distinct entries of the table.
    """

    value: Union[float, str, int]
    type: CValueType

    @classmethod
    def number(cls, value: float) -> CValue:
        """Build a Number constant."""
        return cls(float(value), CValueType.Number)

    @classmethod
    def string(cls, value: str) -> CValue:
        """Build a String constant."""
        return cls(str(value), CValueType.String)

    @classmethod
    def page_addr(cls, value: int) -> CValue:
        """Build a constant holding the index of a code page."""
        if value < 0:
            raise ValueError("a page address can not be negative")
        return cls(int(value), CValueType.PageAddr)