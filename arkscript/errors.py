"""Exceptions raised by the language front end and the virtual machine."""

from __future__ import annotations

__all__ = [
    "ArkError",
    "ArkTypeError",
    "ArkZeroDivisionError",
    "PowError",
    "AssertionFailed",
    "ArkSyntaxError",
    "ParseError",
    "OptimizerError",
    "MacroProcessingError",
    "CompilationError",
]


class ArkError(Exception):
    """Base class of every error; its text is ``"<kind>: <message>"``."""

    kind = "ArkError"

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(f"{self.kind}: {message}")


class ArkTypeError(ArkError, TypeError):
    """Raised when the types of values do not match what an operation needs."""

    kind = "TypeError"


class ArkZeroDivisionError(ArkError, ZeroDivisionError):
    """Raised when a number is divided by zero."""

    kind = "ZeroDivisionError"

    def __init__(self) -> None:
        super().__init__(
            "In ordonary arithmetic, the expression has no meaning, "
            "as there is no number which, when multiplied by 0, gives a (assuming a != 0), "
            "and so division by zero is undefined. Since any number multiplied by 0 is 0, "
            "the expression 0/0 is also undefined."
        )


class PowError(ArkError, ArithmeticError):
    """Raised when a number cannot be raised to the given exponent."""

    kind = "PowError"

    def __init__(self) -> None:
        super().__init__(
            "Can not pow the given number (a) to the given exponent (b) because "
            "a^b, with b being a member of the rational numbers, isn't supported."
        )


class AssertionFailed(ArkError, AssertionError):
    """Raised by a failing ``(assert expr message)`` in script code."""

    kind = "AssertionFailed"


class ArkSyntaxError(ArkError):
    """Raised by the lexer."""

    kind = "SyntaxError"


class ParseError(ArkError):
    """Raised by the parser."""

    kind = "ParseError"


class OptimizerError(ArkError):
    """Raised by the AST optimizer."""

    kind = "OptimizerError"


class MacroProcessingError(ArkError):
    """Raised while expanding macros."""

    kind = "MacroProcessingError"


class CompilationError(ArkError):
    """Raised by the compiler."""

    kind = "CompilationError"