import argparse
import logging
import os
import sys
from typing import List, Optional

from .asm import assemble_file
from .emu import Emu
from .errors import EXIT_FAILURE, EXIT_OK, AssembleError

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with the boundary failure status."""
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def configure_logging(level: str, log_file: Optional[str] = None, stream: bool = True) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)] if stream else []
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="tinyvm", description="Assemble and run tinyvm bytecode.")
    parser.add_argument("--log-level", default=os.environ.get("TINYVM_LOG_LEVEL", "INFO"),
                        help="logging level (default: $TINYVM_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", help="also write the log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_asm = sub.add_parser("assemble", help="assemble a source file into bytecode")
    p_asm.add_argument("source", help="mnemonic source, one instruction per line")
    p_asm.add_argument("output", help="bytecode file to write")

    p_run = sub.add_parser("run", help="run a bytecode file")
    p_run.add_argument("bytecode", help="bytecode file to execute")

    sub.add_parser("tui", help="interactive terminal front end")
    return parser


def cmd_assemble(source: str, output: str) -> int:
    try:
        rom = assemble_file(source)
    except AssembleError as e:
        logger.error(str(e))
        return e.status
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"cannot read '{source}': {e}")
        return EXIT_FAILURE
    try:
        with open(output, 'wb') as f:
            f.write(rom)
    except OSError as e:
        logger.error(f"cannot write '{output}': {e}")
        return EXIT_FAILURE
    logger.info(f"OK: wrote {output} ({len(rom)} bytes)")
    return EXIT_OK


def cmd_run(bytecode: str) -> int:
    emu = Emu()
    try:
        return emu.load_file(bytecode)
    except OSError as e:
        logger.error(f"cannot open '{bytecode}': {e}")
        return EXIT_FAILURE


def cmd_tui() -> int:
    from .main import TinyVMApp
    TinyVMApp().run()
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "tui":
        # stderr belongs to the terminal UI
        configure_logging(args.log_level, args.log_file or "tui_debug.log", stream=False)
    else:
        configure_logging(args.log_level, args.log_file)
    if args.command == "assemble":
        return cmd_assemble(args.source, args.output)
    if args.command == "run":
        return cmd_run(args.bytecode)
    return cmd_tui()
