from collections import deque
from typing import BinaryIO, Deque, Optional, TextIO
import sys
from io import BytesIO


class Console:
    """
    Console device for the tinyvm virtual machine.
    >>> c = Console(stdin=BytesIO(b"A\\n"), capture_output=True)
    >>> c.read()
    65
    >>> c.output(66)
    >>> c.output_buffer
    bytearray(b'B')
    """
    def __init__(self, app: Optional[object] = None, capture_output: bool = False,
                 stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
                 stderr: Optional[TextIO] = None) -> None:
        """
        Initialize the Console device.
        :param app: Optional Textual app for output redirection.
        :param capture_output: If True, store stdout in output_buffer and diagnostics in error_buffer.
        :param stdin: Binary line source for READ; defaults to the process stdin.
        :param stdout: Binary sink for PRINT; defaults to the process stdout.
        :param stderr: Text sink for diagnostics; defaults to the process stderr.
        """
        self.app = app
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.input_buffer: Deque[bytes] = deque()
        self.capture_output = capture_output
        self.output_buffer = bytearray() if capture_output else None
        self.error_buffer = bytearray() if capture_output else None

    def on_console(self, query: str) -> None:
        """
        Queue a line of input ahead of the input stream.
        >>> c = Console(stdin=BytesIO(b""))
        >>> c.on_console("hi")
        >>> c.read(), c.read()
        (104, 0)
        """
        self.input_buffer.append(query.encode('utf-8', errors='surrogateescape'))

    def readline(self) -> Optional[bytes]:
        """
        Blocking read of one line, without its terminator; None at end of input.
        >>> c = Console(stdin=BytesIO(b"ab\\r\\n\\n"))
        >>> c.readline(), c.readline(), c.readline()
        (b'ab\\r', b'', None)
        """
        if self.input_buffer:
            return self.input_buffer.popleft()
        stream = self.stdin if self.stdin is not None else sys.stdin.buffer
        line = stream.readline()
        if not line:
            return None
        if line.endswith(b'\n'):
            line = line[:-1]
        return line

    def read(self) -> int:
        """
        Value for READ: first raw byte of the next line, 0 on an empty line or end of input.
        >>> Console(stdin=BytesIO(b"\\n")).read()
        0
        >>> Console(stdin=BytesIO(b"")).read()
        0
        >>> Console(stdin=BytesIO(b"123\\n")).read()
        49
        """
        line = self.readline()
        if not line:
            return 0
        return line[0] & 0xff

    def output(self, char: int) -> None:
        """
        Output one raw byte to stdout, Textual app, or output_buffer.
        >>> out = BytesIO()
        >>> Console(stdout=out).output(0x141)
        >>> out.getvalue()
        b'A'
        """
        char &= 0xff
        if self.capture_output:
            self.output_buffer.append(char)
        elif self.app:
            self.app.write_output(char)
        else:
            stream = self.stdout if self.stdout is not None else sys.stdout.buffer
            stream.write(bytes([char]))
            stream.flush()

    def error(self, message: str) -> None:
        """
        Report a diagnostic line to stderr, Textual app, or error_buffer.
        >>> c = Console(capture_output=True)
        >>> c.error("stack underflow in PRINT")
        >>> c.error_buffer
        bytearray(b'[VM] stack underflow in PRINT\\n')
        """
        line = f"[VM] {message}\n"
        if self.capture_output:
            self.error_buffer.extend(line.encode('utf-8'))
        elif self.app:
            self.app.write_error(message)
        else:
            stream = self.stderr if self.stderr is not None else sys.stderr
            stream.write(line)
            stream.flush()
