# tinyvm/__init__.py
from .opcodes import READ, PRINT, ADD, HALT, MNEMONICS, NAMES
from .errors import AssembleError, VMFault, StackUnderflow, UnknownOpcode
from .asm import assemble, assemble_source, assemble_file
from .vm import VM, Stack
from .devices.console import Console
from .emu import Emu
