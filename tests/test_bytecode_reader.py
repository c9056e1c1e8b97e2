import hashlib
import io

import pytest

from arkscript.builtins import builtin_index
from arkscript.bytecode_reader import (
    CODE_SEGMENT_START,
    FUNC_TYPE,
    NUMBER_TYPE,
    STRING_TYPE,
    SYM_TABLE_START,
    VAL_TABLE_START,
    BytecodeReader,
    BytecodeSegment,
    Instruction,
)


def _u16(n):
    return n.to_bytes(2, "big")


def num(text):
    return bytes([NUMBER_TYPE]) + text.encode() + b"\0"


def string(text):
    return bytes([STRING_TYPE]) + text.encode() + b"\0"


def func(addr):
    return bytes([FUNC_TYPE]) + _u16(addr) + b"\0"


def build(symbols=(), values=(), pages=((Instruction.HALT,),), version=(3, 1, 2),
          timestamp=1_600_000_000, digest=None):
    head = bytearray(b"ark\0")
    for part in version:
        head += _u16(part)
    head += timestamp.to_bytes(8, "big")
    body = bytearray([SYM_TABLE_START]) + _u16(len(symbols))
    for name in symbols:
        body += name.encode() + b"\0"
    body += bytes([VAL_TABLE_START]) + _u16(len(values))
    for entry in values:
        body += entry
    for page in pages:
        code = bytes(page)
        body += bytes([CODE_SEGMENT_START]) + _u16(len(code)) + code
    if digest is None:
        digest = hashlib.sha256(body).digest()
    return bytes(head) + digest + bytes(body)


def listing(data, **kwargs):
    out = io.StringIO()
    BytecodeReader(data).display(out=out, **kwargs)
    return out.getvalue()


SAMPLE = build(
    symbols=("foo", "bar"),
    values=(num("42.000000"), string("hi"), func(1)),
    pages=(
        (Instruction.LOAD_CONST, 0, 0, Instruction.LET, 0, 0, Instruction.LOAD_SYMBOL, 0, 1,
         Instruction.ADD, Instruction.HALT),
        (Instruction.MUT, 0, 1, Instruction.RET),
    ),
)


def test_timestamp_is_read_big_endian():
    assert BytecodeReader(build(timestamp=1_600_000_000)).timestamp() == 1_600_000_000


def test_timestamp_zero_on_bad_header():
    assert BytecodeReader(b"nope-not-bytecode").timestamp() == 0
    assert BytecodeReader(b"ark").timestamp() == 0


def test_version():
    assert BytecodeReader(build(version=(3, 1, 2))).version() == (3, 1, 2)
    assert BytecodeReader(b"xyz\0\0\0").version() is None


def test_feed_bytes_and_bytecode():
    reader = BytecodeReader()
    reader.feed_bytes(SAMPLE)
    assert reader.bytecode() == SAMPLE


def test_feed_from_file(tmp_path):
    path = tmp_path / "prog.arkc"
    path.write_bytes(SAMPLE)
    reader = BytecodeReader()
    reader.feed(str(path))
    assert reader.bytecode() == SAMPLE
    assert reader.timestamp() == 1_600_000_000


def test_feed_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="Couldn't open file"):
        BytecodeReader().feed(str(tmp_path / "missing.arkc"))


def test_display_invalid_format():
    assert listing(b"garbage") == "Invalid format"


def test_display_header_lines():
    text = listing(build(digest=bytes(32)))
    lines = text.splitlines()
    assert lines[0] == "Version:   3.1.2"
    assert lines[1] == "Timestamp: 1600000000"
    assert lines[2] == "SHA256:    " + "0" * 32


def test_display_full_listing():
    text = listing(SAMPLE)
    assert "Symbols table (length: 2)" in text
    assert "0) foo" in text
    assert "1) bar" in text
    assert "Constants table (length: 3)" in text
    assert "0) (Number) 42.000000" in text
    assert "1) (String) hi" in text
    assert "2) (PageAddr) 1" in text
    assert "Code segment 0 (length: 11)" in text
    assert "LOAD_CONST (Number) 42.000000" in text
    assert "LET foo" in text
    assert "LOAD_SYMBOL bar" in text
    assert "Code segment 1 (length: 4)" in text
    assert "MUT bar" in text
    assert "RET" in text


def test_display_symbols_only():
    text = listing(SAMPLE, segment=BytecodeSegment.Symbols)
    assert "0) foo" in text
    assert "Constants table" not in text
    assert "Code segment" not in text


def test_display_values_only_hides_symbols():
    text = listing(SAMPLE, segment=BytecodeSegment.Values)
    assert "Symbols table" not in text
    assert "1) (String) hi" in text
    assert "Code segment" not in text


def test_display_headers_only_shows_titles_without_lines():
    text = listing(SAMPLE, segment=BytecodeSegment.HeadersOnly)
    assert "Symbols table (length: 2)" in text
    assert "Constants table (length: 3)" in text
    assert "Code segment 0" in text
    assert "LOAD_SYMBOL" not in text
    assert "0) foo" not in text


def test_display_single_page():
    text = listing(SAMPLE, segment=BytecodeSegment.Code, page=1)
    assert "Code segment 1" in text
    assert "Code segment 0" not in text
    assert "MUT bar" in text


def test_start_without_end():
    text = listing(SAMPLE, start=1)
    assert "Both start and end parameter need to be provided together" in text
    assert "Symbols table" not in text


def test_start_not_before_end():
    text = listing(SAMPLE, start=2, end=2)
    assert "Invalid slice start and end arguments" in text


def test_slice_restricts_lines_of_a_page():
    text = listing(SAMPLE, segment=BytecodeSegment.Code, start=3, end=6, page=0)
    assert "LET foo" in text
    assert "LOAD_SYMBOL bar" in text
    assert "LOAD_CONST" not in text


def test_builtin_name_shown():
    index = builtin_index("print")
    data = build(pages=((Instruction.BUILTIN, 0, index, Instruction.CALL, 0, 1, Instruction.HALT),))
    text = listing(data)
    assert "BUILTIN print" in text
    assert "CALL (1)" in text


def test_unknown_instruction():
    data = build(pages=((0xFE, Instruction.HALT),))
    assert "Unknown instruction: 254" in listing(data)


def test_unknown_value_type():
    data = build(values=(bytes([0x7F]) + b"x\0",))
    assert "Unknown value type: 127" in listing(data)


def test_missing_symbol_table():
    data = build()
    header_and_digest = 18 + 32
    broken = data[:header_and_digest] + b"\x09" + data[header_and_digest + 1:]
    assert "Missing symbole table entry point" in listing(broken)


def test_truncated_bytecode_raises():
    with pytest.raises(ValueError):
        listing(SAMPLE[:40])


def test_operators_follow_first_operator():
    assert Instruction.NOT - Instruction.ADD == 24
    assert Instruction(Instruction.ADD + 21) is Instruction.MOD