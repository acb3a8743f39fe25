EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNDERFLOW = 2
EXIT_UNKNOWN_OPCODE = 3


class TinyVMError(Exception):
    status: int = EXIT_FAILURE


class AssembleError(TinyVMError):
    """
    A source line that is not a comment, blank, or known mnemonic.
    >>> err = AssembleError(3, "PUSH 1")
    >>> str(err)
    "line 3: invalid instruction: 'PUSH 1'"
    >>> err.status
    1
    """
    def __init__(self, line_number: int, line_text: str) -> None:
        self.line_number = line_number
        self.line_text = line_text
        super().__init__(f"line {line_number}: invalid instruction: '{line_text}'")


class VMFault(TinyVMError):
    """Runtime fault; always terminates the run."""


class StackUnderflow(VMFault):
    """
    >>> str(StackUnderflow("ADD"))
    'stack underflow in ADD'
    """
    status = EXIT_UNDERFLOW

    def __init__(self, op: str) -> None:
        self.op = op
        super().__init__(f"stack underflow in {op}")


class UnknownOpcode(VMFault):
    """
    >>> str(UnknownOpcode(0x42))
    'unknown opcode 0x42'
    """
    status = EXIT_UNKNOWN_OPCODE

    def __init__(self, opcode: int) -> None:
        self.opcode = opcode
        super().__init__(f"unknown opcode 0x{opcode:02x}")
