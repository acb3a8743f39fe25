from types import MappingProxyType
from typing import Mapping, Optional

READ = 0x01
PRINT = 0x02
ADD = 0x03
HALT = 0xff

MNEMONICS: Mapping[str, int] = MappingProxyType({
    "READ": READ,
    "PRINT": PRINT,
    "ADD": ADD,
    "HALT": HALT,
})

NAMES: Mapping[int, str] = MappingProxyType({op: name for name, op in MNEMONICS.items()})


def lookup(name: str) -> Optional[int]:
    """
    Opcode byte for a mnemonic, or None when the mnemonic is unknown.
    >>> hex(lookup("HALT"))
    '0xff'
    >>> lookup("halt") is None
    True
    """
    return MNEMONICS.get(name)


def name_of(opcode: int) -> Optional[str]:
    """
    Mnemonic for an opcode byte, or None for an unknown opcode.
    >>> name_of(0x03)
    'ADD'
    >>> name_of(0x42) is None
    True
    """
    return NAMES.get(opcode)
