"""System and time builtins: ``sys:exec``, ``sys:sleep``, ``sys:exit`` and ``time``."""

from __future__ import annotations

import subprocess
import time
from typing import Any, Sequence

from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType

__all__ = [
    "system_exec",
    "sleep",
    "exit_",
    "time_since_epoch",
]


def _single(args: Sequence[Value], kind: ValueType, name: str, what: str) -> Value:
    if len(args) != 1:
        raise RuntimeError(f"{name} needs 1 argument: {what}")
    if args[0].type is not kind:
        raise ArkTypeError(f"{name}: argument 0 ({what}) must be a {kind.name}")
    return args[0]


def system_exec(args: Sequence[Value], vm: Any) -> Value:
    """Run a shell command and return what it wrote on its standard output."""
    command = _single(args, ValueType.String, "sys:exec", "command").data
    try:
        completed = subprocess.run(command, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        raise RuntimeError("sys:exec: couldn't retrieve command output") from exc
    return Value.string_(completed.stdout.decode("utf-8", errors="replace"))


def sleep(args: Sequence[Value], vm: Any) -> Value:
    """Sleep for a duration given in milliseconds."""
    duration = _single(args, ValueType.Number, "sys:sleep", "duration").data
    time.sleep(max(duration, 0.0) / 1000.0)
    return Value(ValueType.Nil)


def exit_(args: Sequence[Value], vm: Any) -> Value:
    """Ask the virtual machine to stop with the given exit code."""
    code = _single(args, ValueType.Number, "sys:exit", "exit code").data
    vm.exit(int(code))
    return Value(ValueType.Nil)


def time_since_epoch(args: Sequence[Value], vm: Any) -> Value:
    """Return the seconds since the epoch, with microsecond precision."""
    return Value.number_((time.time_ns() // 1000) / 1_000_000)