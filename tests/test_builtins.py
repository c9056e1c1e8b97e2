import math

from arkscript import builtins
from arkscript import builtins_io, builtins_list
from arkscript.value import Value, ValueType


def test_first_builtins_are_constants():
    assert builtins.builtin_index("false") == 0
    assert builtins.builtin_index("true") == 1
    assert builtins.builtin_index("nil") == 2
    assert builtins.lookup("nil").type is ValueType.Nil
    assert builtins.lookup("true").type is ValueType.True_


def test_unknown_names():
    assert builtins.builtin_index("nope") is None
    assert builtins.operator_index("nope") is None
    assert builtins.lookup("nope") is None


def test_operator_order():
    assert builtins.operator_index("+") == 0
    assert builtins.operator_index("=") == 9
    assert builtins.operator_index("not") == len(builtins.OPERATORS) - 1
    assert builtins.operator_index("print") is None


def test_indices_match_table():
    for index, (name, _) in enumerate(builtins.BUILTINS):
        assert builtins.builtin_index(name) == index
    for index, name in enumerate(builtins.OPERATORS):
        assert builtins.operator_index(name) == index


def test_math_constants():
    assert builtins.lookup("math:pi").data == math.pi
    assert builtins.lookup("math:tau").data == 2 * math.pi
    assert builtins.lookup("math:e").data == math.e
    assert math.isinf(builtins.lookup("math:Inf").data)
    assert math.isnan(builtins.lookup("math:NaN").data)


def test_procedures_are_callable():
    proc = builtins.lookup("print")
    assert proc.type is ValueType.CProc
    assert proc.data is builtins_io.print_
    sort = builtins.lookup("list:sort")
    assert sort.data is builtins_list.sort_list
    result = sort.data([Value.list_([Value.number_(3), Value.number_(1)])], None)
    assert [v.data for v in result.data] == [1.0, 3.0]


def test_lookup_returns_copies():
    first = builtins.lookup("math:pi")
    first.data = 0.0
    assert builtins.lookup("math:pi").data == math.pi
    assert first is not builtins.lookup("math:pi")