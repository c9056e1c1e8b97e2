"""String and filesystem helpers shared by the toolchain."""

from __future__ import annotations

import math
import os
import re
from pathlib import PurePath

__all__ = [
    "string_replace_all",
    "split_string",
    "parse_double",
    "is_double",
    "file_exists",
    "read_file",
    "directory_from_path",
    "filename_from_path",
    "canonical_rel_path",
]

_DECIMAL = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_HEX = r"0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
_NUMBER_RE = re.compile(
    r"[ \t\n\v\f\r]*"
    r"(?P<sign>[+-]?)"
    r"(?:(?P<hex>" + _HEX + r")"
    r"|(?P<dec>" + _DECIMAL + r")"
    r"|(?P<inf>(?i:inf(?:inity)?))"
    r"|(?P<nan>(?i:nan)(?:\([0-9A-Za-z_]*\))?))",
    re.ASCII,
)


def string_replace_all(source: str, old: str, new: str) -> str:
    """Return ``source`` with every occurrence of ``old`` replaced by ``new``."""
    if not old:
        raise ValueError("the text to replace must not be empty")
    return source.replace(old, new)


def split_string(source: str, sep: str) -> list[str]:
    """Cut ``source`` at every ``sep`` character; always yields at least one piece."""
    if len(sep) != 1:
        raise ValueError("the separator must be a single character")
    return source.split(sep)


def parse_double(text: str) -> float:
    """Parse the whole of ``text`` as a C-style floating point number.

    Leading whitespace, hexadecimal floats, ``inf`` and ``nan`` are accepted;
    trailing characters and positive overflow are rejected with ValueError.
    """
    text = text.split("\0", 1)[0]
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"not a valid number: {text!r}")

    negative = match["sign"] == "-"
    if match["hex"] is not None:
        try:
            value = float.fromhex(match["hex"])
        except OverflowError:
            value = math.inf
    elif match["dec"] is not None:
        value = float(match["dec"])
    elif match["inf"] is not None:
        value = math.inf
    else:
        value = math.nan

    if negative:
        value = -value
    if value == math.inf:
        raise ValueError(f"number out of range: {text!r}")
    return value


def is_double(text: str) -> bool:
    """Tell whether ``text`` is accepted by :func:`parse_double`."""
    try:
        parse_double(text)
    except ValueError:
        return False
    return True


def file_exists(name: str) -> bool:
    """Tell whether a path exists; invalid paths count as missing."""
    try:
        return os.path.exists(name)
    except (OSError, ValueError):
        return False


def read_file(name: str) -> str:
    """Return the whole content of a text file, line endings untouched."""
    with open(name, encoding="utf-8", newline="") as handle:
        return handle.read()


def directory_from_path(path: str) -> str:
    """Return the parent directory part of ``path``."""
    return os.path.dirname(path)


def filename_from_path(path: str) -> str:
    """Return the last component of ``path`` (empty when it ends with a separator)."""
    return os.path.basename(path)


def canonical_rel_path(path: str) -> str:
    """Return ``path`` made canonical and relative to the working directory, with ``/`` separators."""
    target = os.path.realpath(path)
    base = os.path.realpath(os.getcwd())
    return PurePath(os.path.relpath(target, base)).as_posix()