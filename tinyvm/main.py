import logging
import queue
from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import RichLog, Input, Static, Footer
from .asm import assemble
from .emu import Emu
from .errors import AssembleError
from typing import List, Optional

logger = logging.getLogger(__name__)


class LineFeed:
    """
    Blocking line source fed from the input widget. End of input is sticky once closed.
    >>> feed = LineFeed()
    >>> feed.feed("A")
    >>> feed.close()
    >>> feed.readline(), feed.readline(), feed.readline()
    (b'A\\n', b'', b'')
    """
    def __init__(self) -> None:
        self.lines: "queue.Queue[bytes]" = queue.Queue()
        self.closed = False

    def feed(self, text: str) -> None:
        if not self.closed:
            self.lines.put(text.encode('utf-8', errors='surrogateescape') + b'\n')

    def close(self) -> None:
        self.closed = True
        self.lines.put(b'')

    def readline(self) -> bytes:
        line = self.lines.get()
        if not line:
            # wake the next reader too
            self.lines.put(b'')
        return line


# Posted from the VM worker thread; post_message never blocks on the UI loop.
class ProgramOutput(Message):
    def __init__(self, char: int) -> None:
        self.char = char
        super().__init__()


class ProgramError(Message):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__()


class ProgramState(Message):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__()


class ProgramDone(Message):
    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__()


class TinyVMApp(App):
    CSS = """
    RichLog#output {
        height: 45%;
        border: tall white;
        margin: 1;
        background: black;
        min-height: 10;
    }
    Static#stdout {
        height: 15%;
        border: round yellow;
        padding: 0 1;
        min-height: 3;
    }
    Input {
        height: 10%;
        margin: 1;
        &:focus {
            border: heavy green;
        }
    }
    Static#repr {
        height: 20%;
        border: round green;
        padding: 1;
        background: darkblue;
        content-align: center middle;
        min-height: 4;
    }
    Footer {
        height: 5%;
    }
    """

    BINDINGS = [Binding("escape", "quit_vm", "Quit", priority=True)]

    def __init__(self) -> None:
        super().__init__()
        self.source: List[str] = []
        self.stdout_text = ""
        self.log_lines: List[str] = []
        self.line_feed: Optional[LineFeed] = None
        self.emu: Optional[Emu] = None
        self.last_status: Optional[int] = None

    def compose(self) -> ComposeResult:
        yield RichLog(id="output")
        yield Static(id="stdout")
        yield Input(placeholder="Enter a mnemonic, or :run / :list / :clear")
        yield Static(id="repr", classes="repr")
        yield Footer()

    def on_mount(self) -> None:
        logger.info("TUI starting...")
        self.query_one(Input).focus()
        logger.debug("Input widget focused")
        self.show_state("idle")

    @property
    def program_running(self) -> bool:
        return self.line_feed is not None

    # Called from the VM worker thread.
    def write_output(self, char: int) -> None:
        self.post_message(ProgramOutput(char))

    def write_error(self, message: str) -> None:
        self.post_message(ProgramError(message))

    def update_repr(self) -> None:
        if self.emu is not None:
            self.post_message(ProgramState(repr(self.emu.vm)))

    @on(ProgramOutput)
    def append_stdout(self, event: ProgramOutput) -> None:
        logger.debug(f"Writing to stdout panel: {event.char:02x}")
        self.stdout_text += chr(event.char)
        self.query_one("#stdout", Static).update(Text(self.stdout_text))

    @on(ProgramError)
    def report_error(self, event: ProgramError) -> None:
        self.log_line(f"VM: {event.message}", "red")

    @on(ProgramState)
    def refresh_state(self, event: ProgramState) -> None:
        self.show_state(event.text)

    @on(ProgramDone)
    def finish_program(self, event: ProgramDone) -> None:
        logger.info(f"Program finished with status {event.status}")
        self.last_status = event.status
        self.log_line(f"Exit status: {event.status}")
        self.line_feed = None
        self.query_one(Input).focus()

    def log_line(self, text: str, style: str = "") -> None:
        self.log_lines.append(text)
        self.query_one(RichLog).write(Text(text, style=style))

    def show_state(self, text: str) -> None:
        self.query_one("#repr", Static).update(text)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value
        logger.debug(f"Input submitted: {value}")
        self.query_one(Input).value = ""
        if self.program_running:
            self.log_line(f"READ < {value}")
            self.line_feed.feed(value)
        elif value.strip() == ":run":
            self.start_program()
        elif value.strip() == ":list":
            for number, line in enumerate(self.source, start=1):
                self.log_line(f"{number:4d}  {line}")
        elif value.strip() == ":clear":
            self.source = []
            self.log_line("Source cleared")
        else:
            self.source.append(value)
            self.log_line(f"{len(self.source):4d}  {value}")

    def start_program(self) -> None:
        try:
            rom = assemble(self.source)
        except AssembleError as e:
            logger.warning(f"Assembly failed: {e}")
            self.log_line(f"Assembler: {e}", "red")
            return
        self.log_line(f"Assembled ROM: {rom.hex()}")
        self.stdout_text = ""
        self.query_one("#stdout", Static).update("")
        self.line_feed = LineFeed()
        self.emu = Emu(app=self, stdin=self.line_feed)
        self.run_program(bytes(rom))

    @work(thread=True, exclusive=True)
    def run_program(self, rom: bytes) -> None:
        status = self.emu.load(rom)
        self.post_message(ProgramDone(status))

    def action_quit_vm(self) -> None:
        logger.debug("Escape pressed, quitting")
        if self.line_feed is not None:
            self.line_feed.close()
        self.exit()

    def on_unmount(self) -> None:
        if self.line_feed is not None:
            self.line_feed.close()
