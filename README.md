# arkscript

Building blocks for running ArkScript programs: the runtime value model, the
builtin functions, the compile-time constant type and a reader for compiled
bytecode.

## Installing

```
pip install .
```

For the test suite, install the `test` extra and run `pytest`.

## Modules

- `arkscript.errors`: the error hierarchy. Every error derives from
  `ArkError`, and its text reads `"<kind>: <message>"`. The classes are
  `ArkTypeError`, `ArkZeroDivisionError`, `PowError`, `AssertionFailed`,
  `ArkSyntaxError`, `ParseError`, `OptimizerError`, `MacroProcessingError`
  and `CompilationError`.
- `arkscript.utils`: string and path helpers: `string_replace_all`,
  `split_string`, `parse_double` (C-style number parsing, including hex
  floats, `inf` and `nan`), `is_double`, `file_exists`, `read_file`,
  `directory_from_path`, `filename_from_path` and `canonical_rel_path`.
- `arkscript.value`: `Value` (a type tag from `ValueType` plus a payload),
  `Closure`, `Scope`, `UserType` and `type_name`. Values compare with `==` and
  `<` and have truthiness: empty lists and strings, zero, nil, false and user
  types are false.
- `arkscript.builtins`: the `BUILTINS` table of named values and procedures
  and the `OPERATORS` tuple, with `lookup`, `builtin_index` and
  `operator_index`.
- `arkscript.builtins_list`, `builtins_string`, `builtins_math`,
  `builtins_io` and `builtins_system`: the builtin procedures. Each one takes
  a sequence of `Value` arguments and a virtual machine object, and returns a
  `Value`. Wrong argument counts raise `RuntimeError`; wrong argument types
  raise `ArkTypeError`. Only `sys:exit` (`builtins_system.exit_`) uses the
  virtual machine object, and it calls its `exit(code)` method; the others
  accept `None`.
- `arkscript.cvalue`: `CValue` and `CValueType`, the constants of a values
  table, built with `CValue.number`, `CValue.string` and `CValue.page_addr`.
- `arkscript.bytecode_reader`: `BytecodeReader`, `BytecodeSegment` and the
  `Instruction` opcodes. The reader loads bytecode with `feed(path)` or
  `feed_bytes(data)`, gives the header through `version()` and `timestamp()`,
  and writes a listing of the symbol table, the constants and the code pages
  with `display(segment, start, end, page, out)`.

## Example

Builtins are stored as `Value`s of type `CProc`; the procedure itself is the
value's `data`:

```python
from arkscript.builtins import lookup
from arkscript.value import Value

reverse = lookup("list:reverse")
result = reverse.data([Value.list_([Value.number_(1), Value.number_(2)])], None)
print(result)  # [2 1]
```

Reading a compiled file:

```python
import io

from arkscript.bytecode_reader import BytecodeReader, BytecodeSegment

reader = BytecodeReader()
reader.feed("program.arkc")
print(reader.version(), reader.timestamp())

listing = io.StringIO()
reader.display(BytecodeSegment.Symbols, out=listing)
print(listing.getvalue())
```

`display` writes colour codes only when its output is a terminal.

## What this package does not do

There is no lexer, parser, compiler or virtual machine here, and no command
to run scripts: the package cannot turn ArkScript source into bytecode nor
execute it. It provides the values, builtins and bytecode reading that such
tools are built on.