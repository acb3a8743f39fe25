import pytest

from tinyvm.asm import assemble, assemble_file, assemble_source
from tinyvm.errors import AssembleError
from tinyvm.opcodes import ADD, HALT, MNEMONICS, PRINT, READ


def test_comments_and_blank_lines_only():
    src = ["# header", "", "   ", "\t# indented comment", "\r\n", "#READ"]
    assert assemble(src) == bytearray()


def test_every_mnemonic_in_source_order():
    src = ["HALT", "# comment", "ADD", "", "PRINT", "READ"]
    assert list(assemble(src)) == [HALT, ADD, PRINT, READ]


def test_one_byte_per_accepted_line():
    src = ["READ", "READ", "ADD", "PRINT", "HALT"]
    assert bytes(assemble(src)) == b"\x01\x01\x03\x02\xff"


def test_whitespace_is_trimmed():
    assert assemble(["  READ \r\n", "\tPRINT\t"]) == bytearray([READ, PRINT])


@pytest.mark.parametrize("bad", ["read", "PUSH", "ADD 1", "PRINT # done", "HALT;", "RE AD"])
def test_invalid_line_reports_number_and_text(bad):
    src = ["# prog", "READ", "", bad, "HALT"]
    with pytest.raises(AssembleError) as exc:
        assemble(src)
    assert exc.value.line_number == 4
    assert exc.value.line_text == bad.strip()
    assert exc.value.status == 1
    assert "line 4" in str(exc.value)


def test_first_invalid_line_wins():
    with pytest.raises(AssembleError) as exc:
        assemble(["NOP", "ALSO BAD"])
    assert exc.value.line_number == 1


def test_assemble_source_splits_lines():
    assert assemble_source("READ\nPRINT\nHALT") == bytearray([READ, PRINT, HALT])


def test_assemble_file(tmp_path):
    path = tmp_path / "echo.src"
    path.write_text("# echo one byte\nREAD\nPRINT\nHALT\n", encoding="utf-8")
    assert assemble_file(str(path)) == bytearray([READ, PRINT, HALT])


def test_assemble_file_crlf(tmp_path):
    path = tmp_path / "dos.src"
    path.write_bytes(b"READ\r\nPRINT\r\n")
    assert assemble_file(str(path)) == bytearray([READ, PRINT])


def test_assemble_file_lone_cr_does_not_end_a_line(tmp_path):
    path = tmp_path / "cr.src"
    path.write_bytes(b"HALT\nREAD\rPRINT\n")
    with pytest.raises(AssembleError) as exc:
        assemble_file(str(path))
    assert exc.value.line_number == 2
    assert exc.value.line_text == "READ\rPRINT"


def test_opcode_table_is_read_only():
    with pytest.raises(TypeError):
        MNEMONICS["NOP"] = 0x00
