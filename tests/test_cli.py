import io
import sys

import pytest

from tinyvm.cli import main


@pytest.fixture
def stdin_lines(monkeypatch):
    def feed(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    return feed


def test_assemble_writes_bytecode(tmp_path):
    src = tmp_path / "add.src"
    out = tmp_path / "add.tbc"
    src.write_text("# add two bytes\nREAD\nREAD\nADD\nPRINT\nHALT\n", encoding="utf-8")
    assert main(["assemble", str(src), str(out)]) == 0
    assert out.read_bytes() == b"\x01\x01\x03\x02\xff"


def test_assemble_error_writes_nothing(tmp_path):
    src = tmp_path / "bad.src"
    out = tmp_path / "bad.tbc"
    src.write_text("READ\nPUSH 1\n", encoding="utf-8")
    assert main(["assemble", str(src), str(out)]) == 1
    assert not out.exists()


def test_assemble_missing_source(tmp_path):
    assert main(["assemble", str(tmp_path / "nope.src"), str(tmp_path / "x.tbc")]) == 1


def test_run_echo(tmp_path, stdin_lines, capsysbinary):
    prog = tmp_path / "echo.tbc"
    prog.write_bytes(b"\x01\x02\xff")
    stdin_lines(b"A\n")
    assert main(["run", str(prog)]) == 0
    assert capsysbinary.readouterr().out == b"A"


def test_run_underflow_status(tmp_path, stdin_lines, capsysbinary):
    prog = tmp_path / "underflow.tbc"
    prog.write_bytes(b"\x02")
    stdin_lines(b"")
    assert main(["run", str(prog)]) == 2
    captured = capsysbinary.readouterr()
    assert captured.out == b""
    assert b"stack underflow in PRINT" in captured.err


def test_run_unknown_opcode_status(tmp_path, stdin_lines):
    prog = tmp_path / "bad.tbc"
    prog.write_bytes(b"\x42")
    stdin_lines(b"")
    assert main(["run", str(prog)]) == 3


def test_run_missing_file(tmp_path):
    assert main(["run", str(tmp_path / "missing.tbc")]) == 1


def test_usage_error_exits_with_failure():
    with pytest.raises(SystemExit) as exc:
        main(["frobnicate"])
    assert exc.value.code == 1
