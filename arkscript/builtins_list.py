"""List builtins: ``list:reverse``, ``list:find``, ``list:slice`` and friends."""

from __future__ import annotations

import warnings
from typing import Any, Sequence

from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType

__all__ = [
    "reverse_list",
    "find_in_list",
    "remove_at_list",
    "slice_list",
    "sort_list",
    "fill",
    "set_list_at",
]


def _copy(value: Value) -> Value:
    """Copy a value the way the VM copies it: lists are duplicated, recursively."""
    if value.type is ValueType.List:
        return Value.list_(_copy(item) for item in value.data)
    return Value(value.type, value.data)


def _arity(args: Sequence[Value], count: int, name: str, signature: str) -> None:
    if len(args) != count:
        raise RuntimeError(f"{name} needs {count} argument(s): {signature}")


def _expect(value: Value, kind: ValueType, name: str, position: int, what: str) -> None:
    if value.type is not kind:
        raise ArkTypeError(f"{name}: argument {position} ({what}) must be a {kind.name}")


def reverse_list(args: Sequence[Value], vm: Any) -> Value:
    """Return a reversed copy of a list."""
    if not args or args[0].type is not ValueType.List:
        raise ArkTypeError("list:reverse: argument 0 (list) must be a List")
    if len(args) != 1:
        raise ArkTypeError("list:reverse needs 1 argument: list")
    return Value.list_(_copy(item) for item in reversed(args[0].data))


def find_in_list(args: Sequence[Value], vm: Any) -> Value:
    """Return the index of the first element equal to the searched one, or -1."""
    _arity(args, 2, "list:find", "list, value")
    _expect(args[0], ValueType.List, "list:find", 0, "list")
    target = args[1]
    index = next((i for i, item in enumerate(args[0].data) if item == target), -1)
    return Value.number_(index)


def remove_at_list(args: Sequence[Value], vm: Any) -> Value:
    """Return a copy of a list without the element at the given index."""
    warnings.warn(
        "list:removeAt will be deprecated in ArkScript 4.0.0, consider using pop! or pop",
        DeprecationWarning,
        stacklevel=2,
    )
    _arity(args, 2, "list:removeAt", "list, index")
    _expect(args[0], ValueType.List, "list:removeAt", 0, "list")
    _expect(args[1], ValueType.Number, "list:removeAt", 1, "index")

    items = args[0].data
    index = int(args[1].data)
    if index < 0 or index >= len(items):
        raise RuntimeError("list:removeAt: index out of range")
    return Value.list_(_copy(item) for i, item in enumerate(items) if i != index)


def slice_list(args: Sequence[Value], vm: Any) -> Value:
    """Return the elements of ``list`` from ``start`` (included) to ``end`` (excluded) by ``step``."""
    _arity(args, 4, "list:slice", "list, start, end, step")
    _expect(args[0], ValueType.List, "list:slice", 0, "list")
    _expect(args[1], ValueType.Number, "list:slice", 1, "start")
    _expect(args[2], ValueType.Number, "list:slice", 2, "end")
    _expect(args[3], ValueType.Number, "list:slice", 3, "step")

    step = int(args[3].data)
    if step <= 0:
        raise RuntimeError("list:slice: step must be greater than 0")

    start = int(args[1].data)
    end = int(args[2].data)
    items = args[0].data
    if start > end:
        raise RuntimeError("list:slice: start must be less than or equal to end")
    if start < 0 or end > len(items):
        raise RuntimeError("list:slice: start and end must be within the list")
    return Value.list_(_copy(item) for item in items[start:end:step])


def sort_list(args: Sequence[Value], vm: Any) -> Value:
    """Return a sorted copy of a list."""
    _arity(args, 1, "list:sort", "list")
    _expect(args[0], ValueType.List, "list:sort", 0, "list")
    return Value.list_(_copy(item) for item in sorted(args[0].data))


def fill(args: Sequence[Value], vm: Any) -> Value:
    """Return a list made of ``count`` copies of a value."""
    _arity(args, 2, "list:fill", "count, value")
    _expect(args[0], ValueType.Number, "list:fill", 0, "count")
    count = max(int(args[0].data), 0)
    return Value.list_(_copy(args[1]) for _ in range(count))


def set_list_at(args: Sequence[Value], vm: Any) -> Value:
    """Return a copy of a list with the element at ``index`` replaced."""
    _arity(args, 3, "list:setAt", "list, index, value")
    _expect(args[0], ValueType.List, "list:setAt", 0, "list")
    _expect(args[1], ValueType.Number, "list:setAt", 1, "index")

    items = [_copy(item) for item in args[0].data]
    index = int(args[1].data)
    if index < 0 or index >= len(items):
        raise RuntimeError("list:setAt: index out of range")
    items[index] = _copy(args[2])
    return Value.list_(items)