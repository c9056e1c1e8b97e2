"""Input/output builtins: printing, reading input and working with files."""

from __future__ import annotations

import os
import shutil
import sys
from typing import Any, Sequence

from arkscript import utils
from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType

__all__ = [
    "print_",
    "puts",
    "input_",
    "write_file",
    "read_file",
    "file_exists",
    "list_files",
    "is_directory",
    "make_dir",
    "remove_files",
]


def _nil() -> Value:
    return Value(ValueType.Nil)


def _bool(flag: bool) -> Value:
    return Value(ValueType.True_ if flag else ValueType.False_)


def _single_path(args: Sequence[Value], name: str) -> str:
    if len(args) != 1:
        raise RuntimeError(f"{name} needs 1 argument: path")
    if args[0].type is not ValueType.String:
        raise ArkTypeError(f"{name}: argument 0 (path) must be a String")
    return args[0].data


def print_(args: Sequence[Value], vm: Any) -> Value:
    """Write the values with no separator, then a newline."""
    sys.stdout.write("".join(str(value) for value in args) + "\n")
    return _nil()


def puts(args: Sequence[Value], vm: Any) -> Value:
    """Write the values with no separator and no trailing newline."""
    sys.stdout.write("".join(str(value) for value in args))
    return _nil()


def input_(args: Sequence[Value], vm: Any) -> Value:
    """Read a line from standard input, after printing an optional prompt."""
    if len(args) == 1:
        if args[0].type is not ValueType.String:
            raise ArkTypeError("input: argument 0 (prompt) must be a String")
        sys.stdout.write(args[0].data)
        sys.stdout.flush()
    line = sys.stdin.readline()
    if line.endswith("\n"):
        line = line[:-1]
    return Value.string_(line)


def _write(path: str, mode: str, content: Value) -> None:
    try:
        with open(path, mode, encoding="utf-8", newline="") as handle:
            handle.write(str(content))
    except OSError as exc:
        raise RuntimeError(f'Couldn\'t write to file "{path}"') from exc


def write_file(args: Sequence[Value], vm: Any) -> Value:
    """Write a value to a file, with an optional mode "w" (default) or "a"."""
    if len(args) not in (2, 3):
        raise RuntimeError("io:writeFile needs 2 or 3 arguments: filename, (mode), content")
    if args[0].type is not ValueType.String:
        raise ArkTypeError("io:writeFile: argument 0 (filename) must be a String")

    if len(args) == 2:
        _write(args[0].data, "w", args[1])
        return _nil()

    if args[1].type is not ValueType.String:
        raise ArkTypeError("io:writeFile: argument 1 (mode) must be a String")
    mode = args[1].data
    if mode not in ("w", "a"):
        raise RuntimeError('io:writeFile: mode must be either "a" or "w"')
    _write(args[0].data, mode, args[2])
    return _nil()


def read_file(args: Sequence[Value], vm: Any) -> Value:
    """Return the content of a file as a String."""
    if len(args) != 1:
        raise RuntimeError("io:readFile needs 1 argument: filename")
    if args[0].type is not ValueType.String:
        raise ArkTypeError("io:readFile: argument 0 (filename) must be a String")
    filename = args[0].data
    if not utils.file_exists(filename):
        raise RuntimeError(f'Couldn\'t read file "{filename}": it doesn\'t exist')
    return Value.string_(utils.read_file(filename))


def file_exists(args: Sequence[Value], vm: Any) -> Value:
    """Tell whether a path exists."""
    return _bool(utils.file_exists(_single_path(args, "io:fileExists?")))


def list_files(args: Sequence[Value], vm: Any) -> Value:
    """Return the paths of the entries of a directory, as a List of String."""
    path = _single_path(args, "io:listFiles")
    with os.scandir(path) as entries:
        paths = sorted(entry.path for entry in entries)
    return Value.list_(Value.string_(p) for p in paths)


def is_directory(args: Sequence[Value], vm: Any) -> Value:
    """Tell whether a path is a directory."""
    return _bool(os.path.isdir(_single_path(args, "io:dir?")))


def make_dir(args: Sequence[Value], vm: Any) -> Value:
    """Create a directory and any missing parents."""
    os.makedirs(_single_path(args, "io:makeDir"), exist_ok=True)
    return _nil()


def _remove_all(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


def remove_files(args: Sequence[Value], vm: Any) -> Value:
    """Delete every given path, recursively; missing paths are ignored."""
    if not args:
        raise RuntimeError("io:removeFiles needs at least 1 argument: paths...")
    for value in args:
        if value.type is not ValueType.String:
            raise ArkTypeError("io:removeFiles: every argument must be a String")
        _remove_all(value.data)
    return _nil()