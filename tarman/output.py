"""Formatted console output: progress, success, error, warning and prompts."""

from __future__ import annotations

import shutil
import sys
from enum import Enum
from typing import TextIO


class _Color(Enum):
    RESET = "0"
    TEXT = "39"
    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    MAGENTA = "35"
    CYAN = "36"


def console_columns() -> int:
    """Return the number of columns of the attached terminal."""
    return shutil.get_terminal_size().columns


class Console:
    """Writes tarman's decorated messages to a text stream."""

    def __init__(self, stream: TextIO | None = None, color: bool | None = None):
        self.stream = stream if stream is not None else sys.stdout
        if color is None:
            isatty = getattr(self.stream, "isatty", None)
            color = bool(isatty()) if callable(isatty) else False
        self.color = color
        self._at_newline = False

    def _write(self, text: str) -> None:
        self.stream.write(text)

    def _set_color(self, color: _Color, bold: bool = False) -> None:
        if not self.color:
            return
        if color is _Color.RESET:
            self._write("\033[0m")
        else:
            self._write(f"\033[{'1;' if bold else ''}{color.value}m")

    def _message(self, mark: _Color, body: _Color, label: str, message: str) -> None:
        self._set_color(mark)
        self._write("=> ")
        self._set_color(body, bold=True)
        self._write(label + message)
        self._set_color(_Color.RESET)
        self._write("\n")
        self._at_newline = False

    def newline(self) -> None:
        """Write a line break unless the last thing written was one."""
        if not self._at_newline:
            self._write("\n")
            self._at_newline = True

    def reset(self) -> None:
        """Forget that the last thing written was a line break."""
        self._at_newline = False

    def progress(self, message: str) -> None:
        self._message(_Color.MAGENTA, _Color.TEXT, "", message)

    def success(self, message: str) -> None:
        self._message(_Color.GREEN, _Color.GREEN, "", message)

    def error(self, message: str) -> None:
        self._message(_Color.RED, _Color.RED, "ERROR: ", message)

    def warning(self, message: str) -> None:
        self._message(_Color.YELLOW, _Color.YELLOW, "WARNING: ", message)

    def prompt(self, message: str) -> None:
        self._set_color(_Color.CYAN, bold=True)
        self._write(":: " + message)
        self._set_color(_Color.RESET)
        self._write(" ")
        self._at_newline = False

    def space(self, count: int) -> None:
        self._write(" " * count)
        self._at_newline = False

    def tab_words(self, offset: int, text: str, columns: int) -> None:
        """Write text word by word, wrapping to an indented column."""
        words = [word for word in text.split(" ") if word]
        if not words:
            self._write(text + "\n")
            return

        width = columns - offset
        remaining = width
        for word in words:
            remaining = self._print_word(word, remaining, offset, width)

        self._write("\n")
        self._at_newline = False

    def _print_word(self, word: str, remaining: int, offset: int, width: int) -> int:
        while True:
            # A word too long for a fresh line is written anyway.
            if width <= 0 or remaining > len(word) or remaining == width:
                self._write(word + " ")
                return remaining - len(word) - 1
            self._write("\n")
            remaining = width
            self.space(offset)