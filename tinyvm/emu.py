import logging
from typing import BinaryIO, Iterable, Optional, TextIO
from .vm import VM
from .devices.console import Console


logger = logging.getLogger(__name__)

class Emu:
    """
    Emulator wiring the tinyvm interpreter to its console device.
    >>> e = Emu(capture_output=True)
    >>> e.console.on_console("*")
    >>> e.load(bytearray([0x01, 0x02, 0xff]))
    0
    >>> e.console.output_buffer
    bytearray(b'*')
    """
    def __init__(self, app: Optional[object] = None, capture_output: bool = False,
                 stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
                 stderr: Optional[TextIO] = None) -> None:
        """
        Initialize the emulator with a VM and Console device.
        :param app: Optional Textual app for console output redirection.
        :param capture_output: If True, Console captures output in a bytearray.
        """
        self.app: Optional[object] = app
        self.console: Console = Console(app=app, capture_output=capture_output,
                                        stdin=stdin, stdout=stdout, stderr=stderr)
        self.vm: VM = VM(self.console, emu=self)

    def load_file(self, file_path: str) -> int:
        """
        Load a bytecode file verbatim and run it.
        >>> import os, tempfile
        >>> with tempfile.NamedTemporaryFile(delete=False) as f:
        ...     _ = f.write(b'\\x02')
        >>> e = Emu(capture_output=True)
        >>> e.load_file(f.name)
        2
        >>> e.console.error_buffer
        bytearray(b'[VM] stack underflow in PRINT\\n')
        >>> os.unlink(f.name)
        """
        with open(file_path, 'rb') as f:
            rom = f.read()
        return self.load(rom)

    def load(self, rom: Iterable[int]) -> int:
        rom = bytes(rom)
        logger.debug(f"Loading ROM of length {len(rom)}")
        status = self.vm.run(rom)
        self.update_repr()
        return status

    def update_repr(self) -> None:
        """
        Update the Textual app with the current VM state if an app is attached.
        >>> e = Emu()
        >>> e.update_repr()  # No crash if app is None
        """
        if self.app:
            self.app.update_repr()
