"""Turning command-line arguments into a command and its settings."""

from __future__ import annotations

from typing import Iterable

from tarman.lookup import find_command, find_option
from tarman.options import CliInfo, TarmanError


class ParseError(TarmanError):
    """The command line could not be understood."""


def parse(argv: Iterable[str]) -> tuple[str | None, CliInfo]:
    """Parse arguments (without the program name).

    Returns the command name, or None when no command was given, and the
    collected settings. Raises ParseError or OptionError on bad input.
    """
    args = list(argv)
    info = CliInfo()
    if not args:
        return None, info

    command = find_command(args[0])
    if command is None:
        raise ParseError(f"Unknown command '{args[0]}'. Try 'tarman help' for help")

    rest = iter(args[1:])
    for argument in rest:
        directive = find_option(argument)

        if directive is None:
            if argument.startswith("-"):
                raise ParseError(
                    f"Unrecognized option '{argument}'. Try 'tarman help' for help"
                )
            if info.input is not None:
                raise ParseError("Too many inputs")
            info.input = argument
            continue

        value = next(rest, None) if directive.has_argument else None
        if directive.handler is not None:
            directive.handler(info, value)

    return command.full, info