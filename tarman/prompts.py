"""Interactive questions asked on the console."""

from __future__ import annotations

import re
import sys
from typing import TextIO

from tarman.output import Console

_INT_RE = re.compile(r"[+-]?\d+")


class Prompter:
    """Asks the user for numbers, yes/no answers and strings."""

    def __init__(self, console: Console | None = None, stream: TextIO | None = None):
        self.console = console if console is not None else Console()
        self.stream = stream if stream is not None else sys.stdin

    def _readline(self) -> str:
        line = self.stream.readline()
        if not line:
            raise EOFError("end of input")
        return line

    @staticmethod
    def _strip(line: str) -> str:
        return line[:-1] if line.endswith("\n") else line

    def ask_int(self, message: str, range_min: int = 0, range_max: int = 0) -> int:
        """Ask for an integer; equal bounds mean any integer is accepted."""
        bounded = range_min != range_max
        while True:
            self.console.newline()
            if bounded:
                self.console.prompt(f"{message} [{range_min}, {range_max}]:")
            else:
                self.console.prompt(f"{message}:")

            line = self._readline()
            while not line.strip():
                line = self._readline()

            match = _INT_RE.match(line.split()[0])
            if match is None:
                self.console.error("I/O Error: invalid input")
                continue

            value = int(match.group())
            if bounded and not range_min <= value <= range_max:
                self.console.error(
                    f"Range Error: value '{value}' is not valid for range "
                    f"[{range_min}, {range_max}]"
                )
                continue

            self.console.newline()
            return value

    def ask_bool(self, message: str) -> bool:
        """Ask a yes/no question; an empty answer means yes."""
        while True:
            self.console.newline()
            self.console.prompt(f"{message} [Y/n]:")

            answer = self._readline()[0]
            if answer == "\n" or answer.upper() == "Y":
                self.console.newline()
                return True
            if answer.lower() == "n":
                self.console.newline()
                return False

            self.console.error(
                f"Range Error: '{answer}' is not a valid input for range [Y/n]"
            )

    def ask_str(self, message: str, limit: int) -> str:
        """Ask for a string of at most limit characters."""
        self.console.newline()
        self.console.prompt(f"{message}:")
        text = self._strip(self.stream.readline())
        self.console.newline()
        return text[:limit]

    def ask_line(self, message: str) -> str:
        """Ask for a whole line; raises EOFError at end of input."""
        self.console.newline()
        self.console.prompt(f"{message}:")
        text = self._strip(self._readline())
        if text:
            self.console.newline()
        return text