"""The table of builtin values and procedures, and the list of operators."""

from __future__ import annotations

import math

from arkscript import builtins_io as io_
from arkscript import builtins_list as list_
from arkscript import builtins_math as math_
from arkscript import builtins_string as string_
from arkscript import builtins_system as system_
from arkscript.value import Value, ValueType

__all__ = [
    "BUILTINS",
    "OPERATORS",
    "builtin_index",
    "operator_index",
    "lookup",
]


def _proc(func) -> Value:
    return Value(ValueType.CProc, func)


BUILTINS: tuple[tuple[str, Value], ...] = (
    ("false", Value(ValueType.False_)),
    ("true", Value(ValueType.True_)),
    ("nil", Value(ValueType.Nil)),
    # List
    ("list:reverse", _proc(list_.reverse_list)),
    ("list:find", _proc(list_.find_in_list)),
    ("list:removeAt", _proc(list_.remove_at_list)),
    ("list:slice", _proc(list_.slice_list)),
    ("list:sort", _proc(list_.sort_list)),
    ("list:fill", _proc(list_.fill)),
    ("list:setAt", _proc(list_.set_list_at)),
    # IO
    ("print", _proc(io_.print_)),
    ("puts", _proc(io_.puts)),
    ("input", _proc(io_.input_)),
    ("io:writeFile", _proc(io_.write_file)),
    ("io:readFile", _proc(io_.read_file)),
    ("io:fileExists?", _proc(io_.file_exists)),
    ("io:listFiles", _proc(io_.list_files)),
    ("io:dir?", _proc(io_.is_directory)),
    ("io:makeDir", _proc(io_.make_dir)),
    ("io:removeFiles", _proc(io_.remove_files)),
    # Time
    ("time", _proc(system_.time_since_epoch)),
    # System
    ("sys:exec", _proc(system_.system_exec)),
    ("sys:sleep", _proc(system_.sleep)),
    ("sys:exit", _proc(system_.exit_)),
    # String
    ("str:format", _proc(string_.format_string)),
    ("str:find", _proc(string_.find_substr)),
    ("str:removeAt", _proc(string_.remove_at_str)),
    ("str:ord", _proc(string_.ord_)),
    ("str:chr", _proc(string_.chr_)),
    # Mathematics
    ("math:exp", _proc(math_.exponential)),
    ("math:ln", _proc(math_.logarithm)),
    ("math:ceil", _proc(math_.ceil_)),
    ("math:floor", _proc(math_.floor_)),
    ("math:round", _proc(math_.round_)),
    ("math:NaN?", _proc(math_.isnan_)),
    ("math:Inf?", _proc(math_.isinf_)),
    ("math:pi", Value.number_(math.pi)),
    ("math:e", Value.number_(math.e)),
    ("math:tau", Value.number_(math.tau)),
    ("math:Inf", Value.number_(math.inf)),
    ("math:NaN", Value.number_(math.nan)),
    ("math:cos", _proc(math_.cos_)),
    ("math:sin", _proc(math_.sin_)),
    ("math:tan", _proc(math_.tan_)),
    ("math:arccos", _proc(math_.acos_)),
    ("math:arcsin", _proc(math_.asin_)),
    ("math:arctan", _proc(math_.atan_)),
    ("math:cosh", _proc(math_.cosh_)),
    ("math:sinh", _proc(math_.sinh_)),
    ("math:tanh", _proc(math_.tanh_)),
    ("math:acosh", _proc(math_.acosh_)),
    ("math:asinh", _proc(math_.asinh_)),
    ("math:atanh", _proc(math_.atanh_)),
)

# Order matches the operator instructions, from the first to the last one.
OPERATORS: tuple[str, ...] = (
    "+", "-", "*", "/",
    ">", "<", "<=", ">=", "!=", "=",
    "len", "empty?", "tail", "head",
    "nil?", "assert",
    "toNumber", "toString",
    "@", "and", "or", "mod",
    "type", "hasField",
    "not",
)

_BUILTIN_INDEX = {name: index for index, (name, _) in enumerate(BUILTINS)}
_OPERATOR_INDEX = {name: index for index, name in enumerate(OPERATORS)}


def builtin_index(name: str) -> int | None:
    """Return the position of a builtin in the table, or None."""
    return _BUILTIN_INDEX.get(name)


def operator_index(name: str) -> int | None:
    """Return the position of an operator, or None."""
    return _OPERATOR_INDEX.get(name)


def lookup(name: str) -> Value | None:
    """Return a fresh copy of the builtin value bound to ``name``, or None."""
    index = _BUILTIN_INDEX.get(name)
    if index is None:
        return None
    held = BUILTINS[index][1]
    return Value(held.type, held.data)