"""Reading compiled bytecode: header fields and a human readable listing."""

from __future__ import annotations

import struct
import sys
from enum import Enum, IntEnum
from typing import Optional, TextIO

from arkscript.builtins import BUILTINS

__all__ = [
    "Instruction",
    "BytecodeSegment",
    "BytecodeReader",
    "FIRST_OPERATOR",
    "LAST_OPERATOR",
    "SYM_TABLE_START",
    "VAL_TABLE_START",
    "CODE_SEGMENT_START",
    "NUMBER_TYPE",
    "STRING_TYPE",
    "FUNC_TYPE",
    "HEADER_SIZE",
    "DIGEST_SIZE",
]


class Instruction(IntEnum):
    """Opcodes of the virtual machine."""

    NOP = 0x00
    LOAD_SYMBOL = 0x01
    LOAD_CONST = 0x02
    POP_JUMP_IF_TRUE = 0x03
    STORE = 0x04
    LET = 0x05
    POP_JUMP_IF_FALSE = 0x06
    JUMP = 0x07
    RET = 0x08
    HALT = 0x09
    CALL = 0x0A
    CAPTURE = 0x0B
    BUILTIN = 0x0C
    MUT = 0x0D
    DEL = 0x0E
    SAVE_ENV = 0x0F
    GET_FIELD = 0x10
    PLUGIN = 0x11
    LIST = 0x12
    APPEND = 0x13
    CONCAT = 0x14
    # operators, in the order of builtins.OPERATORS
    ADD = 0x15
    SUB = 0x16
    MUL = 0x17
    DIV = 0x18
    GT = 0x19
    LT = 0x1A
    LE = 0x1B
    GE = 0x1C
    NEQ = 0x1D
    EQ = 0x1E
    LEN = 0x1F
    EMPTY = 0x20
    TAIL = 0x21
    HEAD = 0x22
    ISNIL = 0x23
    ASSERT = 0x24
    TO_NUM = 0x25
    TO_STR = 0x26
    AT = 0x27
    AND_ = 0x28
    OR_ = 0x29
    MOD = 0x2A
    TYPE = 0x2B
    HASFIELD = 0x2C
    NOT = 0x2D


FIRST_OPERATOR = Instruction.ADD
LAST_OPERATOR = Instruction.NOT

SYM_TABLE_START = 0x01
VAL_TABLE_START = 0x02
CODE_SEGMENT_START = 0x03

NUMBER_TYPE = 0x01
STRING_TYPE = 0x02
FUNC_TYPE = 0x03

HEADER_SIZE = 18
DIGEST_SIZE = 32
_MAGIC = b"ark\x00"


class BytecodeSegment(Enum):
    """Which part of the bytecode a listing shows."""

    All = 0
    Symbols = 1
    Values = 2
    Code = 3
    HeadersOnly = 4


class _Arg(Enum):
    SYMBOL = 0
    CAPTURE = 1
    CONSTANT = 2
    JUMP = 3
    COUNT = 4
    BUILTIN = 5


_ARGUMENTS = {
    Instruction.LOAD_SYMBOL: _Arg.SYMBOL,
    Instruction.STORE: _Arg.SYMBOL,
    Instruction.LET: _Arg.SYMBOL,
    Instruction.MUT: _Arg.SYMBOL,
    Instruction.DEL: _Arg.SYMBOL,
    Instruction.GET_FIELD: _Arg.SYMBOL,
    Instruction.CAPTURE: _Arg.CAPTURE,
    Instruction.LOAD_CONST: _Arg.CONSTANT,
    Instruction.PLUGIN: _Arg.CONSTANT,
    Instruction.POP_JUMP_IF_TRUE: _Arg.JUMP,
    Instruction.POP_JUMP_IF_FALSE: _Arg.JUMP,
    Instruction.JUMP: _Arg.JUMP,
    Instruction.CALL: _Arg.COUNT,
    Instruction.LIST: _Arg.COUNT,
    Instruction.APPEND: _Arg.COUNT,
    Instruction.CONCAT: _Arg.COUNT,
    Instruction.BUILTIN: _Arg.BUILTIN,
}


class _Palette:
    """ANSI colours, or empty strings when the output is not a terminal."""

    _CODES = {
        "reset": "\x1b[00m",
        "red": "\x1b[31m",
        "green": "\x1b[32m",
        "yellow": "\x1b[33m",
        "magenta": "\x1b[35m",
        "cyan": "\x1b[36m",
    }

    def __init__(self, enabled: bool) -> None:
        for name, code in self._CODES.items():
            setattr(self, name, code if enabled else "")


def _is_terminal(out: TextIO) -> bool:
    try:
        return bool(out.isatty())
    except (AttributeError, ValueError):
        return False


class _Cursor:
    """Sequential reader over the bytecode; running past the end raises IndexError."""

    def __init__(self, data: bytes, pos: int = 0) -> None:
        self.data = data
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self) -> int:
        return self.data[self.pos]

    def byte(self) -> int:
        value = self.data[self.pos]
        self.pos += 1
        return value

    def u16(self) -> int:
        high, low = self.data[self.pos], self.data[self.pos + 1]
        self.pos += 2
        return (high << 8) | low

    def take(self, count: int) -> bytes:
        chunk = self.data[self.pos:self.pos + count]
        if len(chunk) != count:
            raise IndexError("not enough bytes")
        self.pos += count
        return chunk

    def cstring(self) -> str:
        end = self.data.find(b"\x00", self.pos)
        if end < 0:
            raise IndexError("unterminated string")
        text = self.data[self.pos:end].decode("utf-8", errors="replace")
        self.pos = end + 1
        return text


class BytecodeReader:
    """Holds a compiled program and reads its header, tables and code pages."""

    def __init__(self, bytecode: bytes = b"") -> None:
        self._bytecode = bytes(bytecode)

    def feed(self, path: str) -> None:
        """Load the bytecode from a file."""
        try:
            with open(path, "rb") as handle:
                self._bytecode = handle.read()
        except OSError as exc:
            raise RuntimeError(f"[BytecodeReader] Couldn't open file '{path}'") from exc

    def feed_bytes(self, data: bytes) -> None:
        """Use the given bytes as bytecode."""
        self._bytecode = bytes(data)

    def bytecode(self) -> bytes:
        """Return the bytecode held."""
        return self._bytecode

    def _header(self) -> Optional[tuple[tuple[int, int, int], int]]:
        data = self._bytecode
        if not (len(data) > 4 and data[:4] == _MAGIC):
            return None
        if len(data) < HEADER_SIZE:
            raise ValueError("truncated bytecode header")
        version = struct.unpack_from(">HHH", data, 4)
        (stamp,) = struct.unpack_from(">Q", data, 10)
        return (version[0], version[1], version[2]), stamp

    def timestamp(self) -> int:
        """Return the compilation timestamp, or 0 when the header is not valid."""
        header = self._header()
        return 0 if header is None else header[1]

    def version(self) -> Optional[tuple[int, int, int]]:
        """Return (major, minor, patch) of the compiler, or None when the header is not valid."""
        header = self._header()
        return None if header is None else header[0]

    def display(
        self,
        segment: BytecodeSegment = BytecodeSegment.All,
        start: Optional[int] = None,
        end: Optional[int] = None,
        page: Optional[int] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        """Write a listing of the bytecode.

        ``start`` and ``end`` (both or neither) restrict the listed entries,
        ``page`` restricts the listing to one code page.
        """
        out = sys.stdout if out is None else out
        try:
            self._display(segment, start, end, page, out)
        except IndexError as exc:
            raise ValueError("truncated bytecode") from exc

    def _display(
        self,
        segment: BytecodeSegment,
        start: Optional[int],
        end: Optional[int],
        page: Optional[int],
        out: TextIO,
    ) -> None:
        w = out.write
        p = _Palette(_is_terminal(out))

        header = self._header()
        if header is None:
            w("Invalid format")
            return
        (major, minor, patch), stamp = header
        w(f"Version:   {major}.{minor}.{patch}\n")
        w(f"Timestamp: {stamp}\n")

        cur = _Cursor(self._bytecode, HEADER_SIZE)
        digest = cur.take(DIGEST_SIZE)
        w("SHA256:    " + "".join(format(x, "x") for x in digest) + "\n\n")

        if (start is None) != (end is None):
            w(f"{p.red}Both start and end parameter need to be provided together\n{p.reset}")
            return
        sliced = start is not None and end is not None
        if sliced and start >= end:
            w(f"{p.red}Invalid slice start and end arguments\n{p.reset}")
            return

        def in_slice(position: int) -> bool:
            return not sliced or start <= position <= end

        # symbols table
        if cur.peek() != SYM_TABLE_START:
            w(f"{p.red}Missing symbole table entry point\n{p.reset}")
            return
        cur.byte()
        size = cur.u16()
        slice_size = size
        show_sym = segment in (BytecodeSegment.All, BytecodeSegment.Symbols)
        if show_sym and sliced and (start > size or end > size):
            w(f"{p.red}Slice start or end can't be greater than the segment size: {size}\n")
        elif show_sym and sliced:
            slice_size = end - start + 1
        if show_sym or segment is BytecodeSegment.HeadersOnly:
            w(f"{p.cyan}Symbols table{p.reset} (length: {slice_size})\n")

        symbols: list[str] = []
        for j in range(size):
            content = cur.cstring()
            if show_sym and in_slice(j):
                w(f"{j}) {content}\n")
            symbols.append(content)
        if show_sym:
            w("\n")

        if segment is BytecodeSegment.Symbols:
            return

        # constants table
        if cur.peek() != VAL_TABLE_START:
            w(f"{p.red}Missing constant table entry point\n{p.reset}")
            return
        cur.byte()
        size = cur.u16()
        slice_size = size
        show_val = segment in (BytecodeSegment.All, BytecodeSegment.Values)
        if show_val and sliced and (start > size or end > size):
            w(f"{p.red}Slice start or end can't be greater than the segment size: {size}\n")
        elif show_val and sliced:
            slice_size = end - start + 1
        if show_val or segment is BytecodeSegment.HeadersOnly:
            w(f"{p.green}Constants table{p.reset} (length: {slice_size})\n")

        values: list[str] = []
        for j in range(size):
            visible = show_val and in_slice(j)
            if visible:
                w(f"{j}) ")
            kind = cur.byte()
            if kind == NUMBER_TYPE:
                text = "(Number) " + cur.cstring()
            elif kind == STRING_TYPE:
                text = "(String) " + cur.cstring()
            elif kind == FUNC_TYPE:
                text = f"(PageAddr) {cur.u16()}"
                cur.byte()
            else:
                w(f"{p.red}Unknown value type: {kind}\n{p.reset}")
                return
            if visible:
                w(text + "\n")
            values.append(text)
        if show_val:
            w("\n")

        if segment is BytecodeSegment.Values:
            return

        # code pages
        listed = (BytecodeSegment.All, BytecodeSegment.Code, BytecodeSegment.HeadersOnly)
        page_number = 0
        while segment in listed and not cur.at_end() and cur.peek() == CODE_SEGMENT_START:
            cur.byte()
            size = cur.u16()
            slice_size = end - start + 1 if sliced else size
            display_code = page is None or page_number == page

            if display_code:
                w(f"{p.magenta}Code segment {page_number}{p.reset} (length: {slice_size})\n")

            if size == 0:
                if display_code:
                    w("NOP")
            else:
                first = cur.pos
                display_line = display_code and segment is not BytecodeSegment.HeadersOnly
                while True:
                    line_number = cur.pos - first
                    if sliced and (start > size or end > size):
                        w(
                            f"{p.red}Slice start or end can't be greater than the segment size: "
                            f"{size}{p.reset}\n"
                        )
                        return
                    if sliced and page is not None:
                        display_line = display_code and in_slice(line_number)

                    if display_line:
                        w(f"{p.cyan}{line_number}{p.reset} {p.yellow}")
                    opcode = cur.byte()
                    try:
                        inst = Instruction(opcode)
                    except ValueError:
                        if display_line:
                            w(f"{p.reset}Unknown instruction: {opcode}\n{p.reset}")
                        return

                    kind = _ARGUMENTS.get(inst)
                    if kind is None:
                        line = inst.name
                    else:
                        arg = cur.u16()
                        line = f"{inst.name} " + self._render_argument(kind, arg, symbols, values, p)
                    if display_line:
                        w(line + "\n")

                    if cur.pos - first >= size:
                        break

            if display_code and segment is not BytecodeSegment.HeadersOnly:
                w("\n" + p.reset)

            if page is not None and page_number == page:
                return
            page_number += 1

    @staticmethod
    def _render_argument(
        kind: _Arg, arg: int, symbols: list[str], values: list[str], p: _Palette
    ) -> str:
        if kind is _Arg.SYMBOL:
            return f"{p.green}{symbols[arg]}"
        if kind is _Arg.CAPTURE:
            return f"{p.reset}{symbols[arg]}"
        if kind is _Arg.CONSTANT:
            return f"{p.magenta}{values[arg]}"
        if kind is _Arg.JUMP:
            return f"{p.red}({arg})"
        if kind is _Arg.COUNT:
            return f"{p.reset}({arg})"
        return f"{p.reset}{BUILTINS[arg][0]}"