"""ArkScript runtime values, builtin functions, compile-time constants and a bytecode reader."""

__version__ = "0.1.0"