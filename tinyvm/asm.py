# tinyvm/asm.py
import logging
from typing import Iterable

from .errors import AssembleError
from .opcodes import lookup

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"


def assemble(lines: Iterable[str]) -> bytearray:
    """
    One-pass assembler: one mnemonic per line, '#' starts a comment line.
    >>> assemble(["# echo", "READ", "  PRINT\\t", "", "HALT"])
    bytearray(b'\\x01\\x02\\xff')
    >>> assemble(["READ", "PRINT # trailing"])
    Traceback (most recent call last):
    ...
    tinyvm.errors.AssembleError: line 2: invalid instruction: 'PRINT # trailing'
    """
    rom = bytearray()
    for number, raw in enumerate(lines, start=1):
        line = raw.strip(WHITESPACE)
        if not line or line.startswith('#'):
            continue
        opcode = lookup(line)
        if opcode is None:
            raise AssembleError(number, line)
        rom.append(opcode)
    logger.debug(f"Assembled {len(rom)} bytes")
    return rom


def assemble_source(source: str) -> bytearray:
    """
    Assemble a whole source text.
    >>> assemble_source("READ\\nREAD\\nADD\\nPRINT\\n")
    bytearray(b'\\x01\\x01\\x03\\x02')
    """
    return assemble(source.split('\n'))


def assemble_file(path: str) -> bytearray:
    # only '\n' ends a line; iterating the file would also split on a lone '\r'
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return assemble_source(f.read())
