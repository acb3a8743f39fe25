from typing import Iterable, List, Optional
import logging

from .devices.console import Console
from .errors import EXIT_OK, StackUnderflow, UnknownOpcode, VMFault
from .opcodes import ADD, HALT, PRINT, READ, name_of


logger = logging.getLogger(__name__)

class Stack:
    """
    Execution stack of byte values.
    >>> s = Stack()
    >>> s.push(0x1ff)
    >>> s.push(7)
    >>> s
    WST ff 07 <02
    >>> s.pop(), len(s)
    (7, 1)
    """
    def __init__(self, name: str = "WST") -> None:
        self.items: List[int] = []
        self.name: str = name

    def push(self, val: int) -> None:
        self.items.append(val & 0xff)

    def pop(self) -> int:
        return self.items.pop()

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        res = f"{self.name} "
        for val in self.items[-8:]:
            res += f"{val:02x} "
        res += f"<{len(self.items):02x}"
        return res


class VM:
    """
    Fetch-decode-execute interpreter for READ/PRINT/ADD/HALT bytecode.
    >>> from io import BytesIO
    >>> c = Console(stdin=BytesIO(b"\\x05\\n\\x07\\n"), capture_output=True)
    >>> VM(c).run([0x01, 0x01, 0x03, 0x02, 0xff])
    0
    >>> c.output_buffer
    bytearray(b'\\x0c')
    """
    def __init__(self, console: Optional[Console] = None, emu: Optional[object] = None) -> None:
        self.console: Console = console if console is not None else Console()
        self.emu: Optional[object] = emu
        self.rom: bytes = b""
        self.ip: int = 0
        self.wst: Stack = Stack()
        self.status: Optional[int] = None

    def need(self, depth: int, op: str) -> None:
        if len(self.wst) < depth:
            raise StackUnderflow(op)

    def step(self) -> bool:
        """
        Execute one instruction; False once the machine has halted.
        >>> vm = VM(Console(capture_output=True)).load([0x02])
        >>> vm.step()
        Traceback (most recent call last):
        ...
        tinyvm.errors.StackUnderflow: stack underflow in PRINT
        """
        if self.ip >= len(self.rom):
            self.status = EXIT_OK
            return False
        ins = self.rom[self.ip]
        self.ip += 1
        logger.debug(f"ip={self.ip - 1:04x} ins={ins:02x} {name_of(ins) or '???'}")
        if ins == READ:
            self.wst.push(self.console.read())
        elif ins == PRINT:
            self.need(1, "PRINT")
            self.console.output(self.wst.pop())
        elif ins == ADD:
            self.need(2, "ADD")
            a = self.wst.pop()
            b = self.wst.pop()
            self.wst.push(a + b)
        elif ins == HALT:
            self.status = EXIT_OK
            return False
        else:
            raise UnknownOpcode(ins)
        return True

    def load(self, program: Iterable[int]) -> 'VM':
        self.rom = bytes(program)
        self.ip = 0
        self.wst = Stack()
        self.status = None
        return self

    def run(self, program: Iterable[int]) -> int:
        return self.load(program).eval()

    def eval(self) -> int:
        """
        Run from the current instruction pointer until halt or fault; returns the exit status.
        >>> VM(Console(capture_output=True)).run([0x42])
        3
        >>> VM(Console(capture_output=True)).run([])
        0
        """
        logger.debug(f"Eval starting at ip: {self.ip:04x}, rom length: {len(self.rom)}")
        try:
            while self.step():
                if self.emu and hasattr(self.emu, 'update_repr'):
                    self.emu.update_repr()
        except VMFault as fault:
            logger.debug(f"Fault at ip {self.ip - 1:04x}: {fault}")
            self.console.error(str(fault))
            self.status = fault.status
        return self.status

    def __repr__(self) -> str:
        return f"{self.wst}\nIP  {self.ip:04x}/{len(self.rom):04x}"
