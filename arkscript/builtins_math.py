"""Mathematics builtins: exponentials, rounding, NaN/Inf checks and trigonometry."""

from __future__ import annotations

import math
from typing import Any, Callable, Sequence

from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType

__all__ = [
    "exponential",
    "logarithm",
    "ceil_",
    "floor_",
    "round_",
    "isnan_",
    "isinf_",
    "cos_",
    "sin_",
    "tan_",
    "acos_",
    "asin_",
    "atan_",
    "cosh_",
    "sinh_",
    "tanh_",
    "acosh_",
    "asinh_",
    "atanh_",
]

_TRUE = ValueType.True_
_FALSE = ValueType.False_


def _check_arity(args: Sequence[Value], name: str) -> None:
    if len(args) != 1:
        raise RuntimeError(f"{name} needs 1 argument: number")


def _number_arg(args: Sequence[Value], name: str) -> float:
    _check_arity(args, name)
    if args[0].type is not ValueType.Number:
        raise ArkTypeError(f"{name}: argument 0 (number) must be a Number")
    return args[0].data


def _unary(
    args: Sequence[Value],
    name: str,
    func: Callable[[float], float],
    *,
    odd: bool = False,
) -> Value:
    """Apply ``func`` like the C math library would: domain errors give NaN, overflow gives Inf."""
    x = _number_arg(args, name)
    try:
        result = func(x)
    except OverflowError:
        result = math.copysign(math.inf, x) if odd else math.inf
    except ValueError:
        result = math.nan
    return Value.number_(result)


def _round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    truncated = float(math.trunc(x))
    if abs(x - truncated) >= 0.5:
        truncated += math.copysign(1.0, x)
    return math.copysign(truncated, x) if truncated == 0 else truncated


def _keep_non_finite(func: Callable[[float], int]) -> Callable[[float], float]:
    def apply(x: float) -> float:
        if not math.isfinite(x):
            return x
        return float(func(x))

    return apply


def _atanh(x: float) -> float:
    if abs(x) == 1.0:
        return math.copysign(math.inf, x)
    return math.atanh(x)


def exponential(args: Sequence[Value], vm: Any) -> Value:
    """Return e raised to the number."""
    return _unary(args, "math:exp", math.exp)


def logarithm(args: Sequence[Value], vm: Any) -> Value:
    """Return the natural logarithm of a strictly positive number."""
    x = _number_arg(args, "math:log")
    if x <= 0.0:
        raise RuntimeError("Argument of math:log must be greater than 0")
    return Value.number_(math.log(x))


def ceil_(args: Sequence[Value], vm: Any) -> Value:
    """Return the smallest integer not less than the number."""
    return _unary(args, "math:ceil", _keep_non_finite(math.ceil))


def floor_(args: Sequence[Value], vm: Any) -> Value:
    """Return the largest integer not greater than the number."""
    return _unary(args, "math:floor", _keep_non_finite(math.floor))


def round_(args: Sequence[Value], vm: Any) -> Value:
    """Round to the nearest integer, halves away from zero."""
    return _unary(args, "math:round", _round_half_away)


def isnan_(args: Sequence[Value], vm: Any) -> Value:
    """Tell whether the argument is a NaN Number; non-numbers give false."""
    _check_arity(args, "math:NaN?")
    if args[0].type is not ValueType.Number:
        return Value(_FALSE)
    return Value(_TRUE if math.isnan(args[0].data) else _FALSE)


def isinf_(args: Sequence[Value], vm: Any) -> Value:
    """Tell whether the argument is an infinite Number; non-numbers give false."""
    _check_arity(args, "math:Inf?")
    if args[0].type is not ValueType.Number:
        return Value(_FALSE)
    return Value(_TRUE if math.isinf(args[0].data) else _FALSE)


def cos_(args: Sequence[Value], vm: Any) -> Value:
    """Return the cosine of an angle in radians."""
    return _unary(args, "math:cos", math.cos)


def sin_(args: Sequence[Value], vm: Any) -> Value:
    """Return the sine of an angle in radians."""
    return _unary(args, "math:sin", math.sin)


def tan_(args: Sequence[Value], vm: Any) -> Value:
    """Return the tangent of an angle in radians."""
    return _unary(args, "math:tan", math.tan)


def acos_(args: Sequence[Value], vm: Any) -> Value:
    """Return the arc cosine of the number."""
    return _unary(args, "math:arccos", math.acos)


def asin_(args: Sequence[Value], vm: Any) -> Value:
    """Return the arc sine of the number."""
    return _unary(args, "math:arcsin", math.asin)


def atan_(args: Sequence[Value], vm: Any) -> Value:
    """Return the arc tangent of the number."""
    return _unary(args, "math:arctan", math.atan)


def cosh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic cosine of the number."""
    return _unary(args, "math:cosh", math.cosh)


def sinh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic sine of the number."""
    return _unary(args, "math:sinh", math.sinh, odd=True)


def tanh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic tangent of the number."""
    return _unary(args, "math:tanh", math.tanh)


def acosh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic arc cosine of the number."""
    return _unary(args, "math:acosh", math.acosh)


def asinh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic arc sine of the number."""
    return _unary(args, "math:asinh", math.asinh)


def atanh_(args: Sequence[Value], vm: Any) -> Value:
    """Return the hyperbolic arc tangent of the number."""
    return _unary(args, "math:atanh", _atanh, odd=True)