"""Runtime values handled by the virtual machine, with closures, scopes and user types."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, Callable, Iterable, Iterator

from arkscript.errors import ArkTypeError

__all__ = [
    "ValueType",
    "Closure",
    "Scope",
    "UserType",
    "Value",
    "type_name",
]


class ValueType(IntEnum):
    """Kinds of runtime values; the order matters for comparisons."""

    List = 0
    Number = 1
    String = 2
    PageAddr = 3
    CProc = 4
    Closure = 5
    User = 6
    Nil = 7
    True_ = 8
    False_ = 9
    Undefined = 10
    Reference = 11
    InstPtr = 12


_TYPE_NAMES = (
    "List", "Number", "String", "Function",
    "CProc", "Closure", "UserType", "Nil",
    "Bool", "Bool", "Undefined", "Reference",
    "InstPtr",
)


def type_name(value_type: ValueType) -> str:
    """Return the user-facing name of a value type."""
    return _TYPE_NAMES[int(value_type)]


class Closure:
    """A function page bound to the scope it captured."""

    def __init__(self, scope: Scope | None, page_addr: int) -> None:
        self.scope = scope
        self.page_addr = page_addr

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Closure):
            return NotImplemented
        return self.scope is other.scope

    def __lt__(self, other: Closure) -> bool:
        if not isinstance(other, Closure):
            return NotImplemented
        return self.page_addr < other.page_addr

    def __hash__(self) -> int:
        return id(self.scope)

    def __repr__(self) -> str:
        return f"Closure(page_addr={self.page_addr})"


class Scope:
    """Local variables of a frame, as (symbol id, value) pairs."""

    def __init__(self) -> None:
        self._data: list[tuple[int, Value]] = []

    def push_back(self, symbol_id: int, value: Value) -> None:
        """Bind a value to a symbol id."""
        self._data.append((symbol_id, value))

    def has(self, symbol_id: int) -> bool:
        """Tell whether the symbol id is bound in this scope."""
        return any(sid == symbol_id for sid, _ in self._data)

    def get(self, symbol_id: int) -> Value | None:
        """Return the value bound to a symbol id, or None."""
        for sid, value in self._data:
            if sid == symbol_id:
                return value
        return None

    def id_from_value(self, value: Value) -> int | None:
        """Return the symbol id of the first variable equal to ``value``, or None."""
        for sid, held in self._data:
            if held == value:
                return sid
        return None

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[tuple[int, Value]]:
        return iter(self._data)


class UserType:
    """Wraps an arbitrary host object so scripts can carry it around."""

    def __init__(self, data: Any = None, on_delete: Callable[[Any], None] | None = None) -> None:
        self.data = data
        self.kind = type(data)
        self.on_delete = on_delete

    def is_(self, kind: type) -> bool:
        """Tell whether the wrapped object is exactly of type ``kind``."""
        return self.kind is kind

    def delete(self) -> None:
        """Release the wrapped object through the deleter, if any."""
        if self.on_delete is not None:
            self.on_delete(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserType):
            return NotImplemented
        return self.kind is other.kind and self.data is other.data

    def __lt__(self, other: UserType) -> bool:
        if not isinstance(other, UserType):
            return NotImplemented
        return id(self.data) < id(other.data)

    def __hash__(self) -> int:
        return hash((self.kind, id(self.data)))

    def __str__(self) -> str:
        return f"UserType<{self.kind.__name__}, {id(self.data):#x}>"


def _format_number(n: float) -> str:
    if math.isfinite(n) and n == int(n):
        return str(int(n))
    return repr(n)


class Value:
    """A runtime value: a type tag, a payload and a constness flag."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, type: ValueType = ValueType.Nil, data: Any = None) -> None:
        self.type = ValueType(type)
        if self.type is ValueType.List and data is None:
            data = []
        elif self.type is ValueType.Number and data is not None:
            data = float(data)
        self.data = data
        self.const = False

    @classmethod
    def number_(cls, n: float) -> Value:
        """Build a Number."""
        return cls(ValueType.Number, float(n))

    @classmethod
    def string_(cls, s: str) -> Value:
        """Build a String."""
        return cls(ValueType.String, str(s))

    @classmethod
    def list_(cls, items: Iterable[Value] = ()) -> Value:
        """Build a List holding the given values."""
        return cls(ValueType.List, list(items))

    def is_function(self) -> bool:
        """Tell whether the value can be called."""
        if self.type in (ValueType.PageAddr, ValueType.Closure, ValueType.CProc):
            return True
        return self.type is ValueType.Reference and self.data.is_function()

    def push_back(self, value: Value) -> None:
        """Append to the list held by this value."""
        if self.type is not ValueType.List:
            raise ArkTypeError(f"can not append to a {type_name(self.type)}")
        self.data.append(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.type is not other.type:
            return False
        if self.type >= ValueType.Nil:
            return True
        return self.data == other.data

    def __lt__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.type is not other.type:
            return self.type < other.type
        if self.type >= ValueType.Nil:
            return False
        if self.type is ValueType.CProc:
            return id(self.data) < id(other.data)
        return self.data < other.data

    def __bool__(self) -> bool:
        kind = self.type
        if kind in (ValueType.List, ValueType.String):
            return len(self.data) > 0
        if kind is ValueType.Number:
            return bool(self.data)
        if kind in (ValueType.User, ValueType.Nil, ValueType.False_):
            return False
        return True

    def __str__(self) -> str:
        kind = self.type
        if kind is ValueType.Number:
            return _format_number(self.data)
        if kind is ValueType.String:
            return self.data
        if kind is ValueType.List:
            parts = (f'"{v.data}"' if v.type is ValueType.String else str(v) for v in self.data)
            return "[" + " ".join(parts) + "]"
        if kind is ValueType.PageAddr:
            return f"Function @ {self.data}"
        if kind is ValueType.CProc:
            return "CProcedure"
        if kind is ValueType.Closure:
            return f"Closure @ {self.data.page_addr}"
        if kind is ValueType.User:
            return str(self.data)
        if kind is ValueType.Nil:
            return "nil"
        if kind is ValueType.True_:
            return "true"
        if kind is ValueType.False_:
            return "false"
        if kind is ValueType.Reference:
            return str(self.data)
        if kind is ValueType.InstPtr:
            return f"Instruction @ {self.data}"
        return "undefined"

    def __repr__(self) -> str:
        return f"Value({self.type.name}, {self.data!r})"