"""String builtins: ``str:format``, ``str:find``, ``str:removeAt``, ``str:ord``, ``str:chr``."""

from __future__ import annotations

import re
from typing import Any, Sequence

from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType

__all__ = [
    "format_string",
    "find_substr",
    "remove_at_str",
    "ord_",
    "chr_",
]

_PLACEHOLDER = re.compile(r"%[%x]")
_MAX_CODEPOINT = 0x10FFFF


def _arity(args: Sequence[Value], count: int, name: str, signature: str) -> None:
    if len(args) != count:
        raise RuntimeError(f"{name} needs {count} argument(s): {signature}")


def _expect(value: Value, kind: ValueType, name: str, position: int, what: str) -> None:
    if value.type is not kind:
        raise ArkTypeError(f"{name}: argument {position} ({what}) must be a {kind.name}")


def _render(value: Value, placeholder: str) -> str:
    if placeholder == "%x" and value.type is ValueType.Number:
        return format(int(value.data), "x")
    return str(value)


def format_string(args: Sequence[Value], vm: Any) -> Value:
    """Replace ``%%`` (anything) and ``%x`` (hex number) placeholders, left to right.

    Placeholders without a matching value are left as they are.
    """
    if not args:
        raise RuntimeError("str:format needs at least 1 argument: format, values...")
    _expect(args[0], ValueType.String, "str:format", 0, "format")

    text: str = args[0].data
    position = 0
    for value in args[1:]:
        match = _PLACEHOLDER.search(text, position)
        if match is None:
            break
        rendered = _render(value, match.group())
        text = text[: match.start()] + rendered + text[match.end():]
        position = match.start() + len(rendered)
    return Value.string_(text)


def find_substr(args: Sequence[Value], vm: Any) -> Value:
    """Return the position of a substring, or -1 when it is absent."""
    _arity(args, 2, "str:find", "string, substring")
    _expect(args[0], ValueType.String, "str:find", 0, "string")
    _expect(args[1], ValueType.String, "str:find", 1, "substring")
    return Value.number_(args[0].data.find(args[1].data))


def remove_at_str(args: Sequence[Value], vm: Any) -> Value:
    """Return the string without the character at the given index."""
    _arity(args, 2, "str:removeAt", "string, index")
    _expect(args[0], ValueType.String, "str:removeAt", 0, "string")
    _expect(args[1], ValueType.Number, "str:removeAt", 1, "index")

    text: str = args[0].data
    index = int(args[1].data)
    if index < 0 or index >= len(text):
        raise RuntimeError("str:removeAt: index out of range")
    return Value.string_(text[:index] + text[index + 1:])


def ord_(args: Sequence[Value], vm: Any) -> Value:
    """Return the codepoint of the first character (0 for an empty string)."""
    _arity(args, 1, "str:ord", "string")
    _expect(args[0], ValueType.String, "str:ord", 0, "string")
    text: str = args[0].data
    return Value.number_(ord(text[0]) if text else 0)


def chr_(args: Sequence[Value], vm: Any) -> Value:
    """Return the one-character string for a codepoint; invalid codepoints give ``""``."""
    _arity(args, 1, "str:chr", "codepoint")
    _expect(args[0], ValueType.Number, "str:chr", 0, "codepoint")
    codepoint = int(args[0].data)
    if codepoint <= 0 or codepoint > _MAX_CODEPOINT:
        return Value.string_("")
    return Value.string_(chr(codepoint))