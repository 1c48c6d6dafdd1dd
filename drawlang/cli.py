"""Interactive terminal for drawlang.

Run:
  drawlang
  drawlang --max-depth 50 -v < commands.txt
"""

import argparse
import sys
from typing import List, Optional, TextIO

from loguru import logger

from drawlang.core import CommandProcessor, DrawLangError, EvalInfo, format_error
from drawlang.core.ast import DEFAULT_MAX_DEPTH
from drawlang.figure import FigureHistory


PROMPT = "> "


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="drawlang",
        description="Read drawing commands, one per line, and print what they draw.",
        epilog="Terminal commands: :undo, :redo, :list, :quit",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum bracket nesting of a command (default: {DEFAULT_MAX_DEPTH}).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any command fails.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every pipeline stage.")
    return p


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


class Terminal:
    def __init__(self, processor: CommandProcessor, out: TextIO):
        self.processor = processor
        self.history = FigureHistory()
        self.out = out
        self.failures = 0

    def handle(self, line: str) -> bool:
        """Handle one input line. Returns False when the session should end."""
        cmd = line.strip()
        if not cmd:
            return True

        if cmd.startswith(":"):
            return self._handle_meta(cmd)

        try:
            drawables = self.processor.process_command(cmd)
        except DrawLangError as e:
            self.failures += 1
            print(format_error(cmd, e), file=self.out)
            return True

        self.history.append(cmd, drawables)
        for drawable in drawables:
            print(drawable.canonical(), file=self.out)
        return True

    def _handle_meta(self, cmd: str) -> bool:
        if cmd == ":quit":
            return False

        if cmd == ":undo":
            entry = self.history.undo()
            print(f"undo {entry.command}" if entry else "nothing to undo", file=self.out)
        elif cmd == ":redo":
            entry = self.history.redo()
            print(f"redo {entry.command}" if entry else "nothing to redo", file=self.out)
        elif cmd == ":list":
            for entry in self.history.entries():
                print(f"[{entry.handle}] {entry.command}", file=self.out)
        else:
            print(f"unknown terminal command: {cmd}", file=self.out)
        return True


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging(args.verbose)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()

    terminal = Terminal(CommandProcessor(info=EvalInfo(max_depth=args.max_depth)), stdout)

    while True:
        if interactive:
            print(PROMPT, end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line or not terminal.handle(line):
            break

    if args.strict and terminal.failures:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
