import io

import pytest

from arkscript import builtins_io as bio
from arkscript.errors import ArkTypeError
from arkscript.value import Value, ValueType


def s(text):
    return Value.string_(text)


def test_print_joins_and_adds_newline(capsys):
    result = bio.print_([s("hello"), s(" "), s("world")], None)
    assert capsys.readouterr().out == "hello world\n"
    assert result.type is ValueType.Nil


def test_puts_has_no_newline(capsys):
    bio.puts([s("a"), s("b")], None)
    assert capsys.readouterr().out == "ab"


def test_print_uses_value_text(capsys):
    bio.print_([Value(ValueType.Nil), Value(ValueType.True_)], None)
    assert capsys.readouterr().out == "niltrue\n"


def test_input_reads_line_and_prints_prompt(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("answer\nnext\n"))
    result = bio.input_([s("put a number> ")], None)
    assert result.data == "answer"
    assert capsys.readouterr().out == "put a number> "


def test_input_at_end_of_file(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert bio.input_([], None).data == ""


def test_input_rejects_non_string_prompt():
    with pytest.raises(ArkTypeError):
        bio.input_([Value.number_(1)], None)


def test_write_then_read_round_trip(tmp_path):
    path = str(tmp_path / "hello.json")
    bio.write_file([s(path), s('{"key": 12}')], None)
    assert bio.read_file([s(path)], None).data == '{"key": 12}'


def test_write_modes(tmp_path):
    path = str(tmp_path / "out.txt")
    bio.write_file([s(path), s("w"), s("first")], None)
    bio.write_file([s(path), s("a"), s("second")], None)
    assert bio.read_file([s(path)], None).data == "firstsecond"
    bio.write_file([s(path), s("w"), s("again")], None)
    assert bio.read_file([s(path)], None).data == "again"


def test_write_errors(tmp_path):
    path = str(tmp_path / "x.txt")
    with pytest.raises(RuntimeError):
        bio.write_file([s(path), s("r"), s("content")], None)
    with pytest.raises(RuntimeError):
        bio.write_file([s(path)], None)
    with pytest.raises(ArkTypeError):
        bio.write_file([Value.number_(1), s("c")], None)
    with pytest.raises(ArkTypeError):
        bio.write_file([s(path), Value.number_(1), s("c")], None)
    with pytest.raises(RuntimeError, match="Couldn't write"):
        bio.write_file([s(str(tmp_path / "missing" / "x.txt")), s("c")], None)


def test_read_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="doesn't exist"):
        bio.read_file([s(str(tmp_path / "nope"))], None)
    with pytest.raises(ArkTypeError):
        bio.read_file([Value.number_(3)], None)


def test_file_exists(tmp_path):
    path = tmp_path / "f"
    assert bio.file_exists([s(str(path))], None).type is ValueType.False_
    path.write_text("x")
    assert bio.file_exists([s(str(path))], None).type is ValueType.True_
    with pytest.raises(RuntimeError):
        bio.file_exists([], None)


def test_make_dir_and_is_directory(tmp_path):
    nested = tmp_path / "a" / "b"
    assert bio.is_directory([s(str(nested))], None).type is ValueType.False_
    bio.make_dir([s(str(nested))], None)
    assert bio.is_directory([s(str(nested))], None).type is ValueType.True_


def test_list_files(tmp_path):
    (tmp_path / "one").write_text("1")
    (tmp_path / "two").write_text("2")
    listed = bio.list_files([s(str(tmp_path))], None)
    assert [v.data for v in listed.data] == sorted(
        [str(tmp_path / "one"), str(tmp_path / "two")]
    )


def test_remove_files(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x")
    folder = tmp_path / "dir"
    (folder / "inner").mkdir(parents=True)
    (folder / "inner" / "f").write_text("y")
    bio.remove_files([s(str(target)), s(str(folder)), s(str(tmp_path / "ghost"))], None)
    assert not target.exists()
    assert not folder.exists()


def test_remove_files_errors():
    with pytest.raises(RuntimeError):
        bio.remove_files([], None)
    with pytest.raises(ArkTypeError):
        bio.remove_files([Value.number_(1)], None)