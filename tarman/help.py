"""The help command: a table of commands and options."""

from __future__ import annotations

from typing import Iterable

from tarman.lookup import Directive, command_table, option_table
from tarman.options import CliInfo
from tarman.output import Console, console_columns

_BASE_LINE_LEN = 4
_COLUMN_SEPARATOR_LEN = 4


def _line_len(directive: Directive) -> int:
    return (
        _BASE_LINE_LEN
        + _COLUMN_SEPARATOR_LEN
        + len(directive.short or "")
        + len(directive.full or "")
    )


def _names(directive: Directive) -> str:
    return ", ".join(name for name in (directive.short, directive.full) if name)


def _print_list(
    console: Console, title: str, table: Iterable[Directive], columns: int
) -> None:
    table = tuple(table)
    console.stream.write(f"{title}:\n")

    max_len = max(
        (_line_len(d) for d in table),
        default=_BASE_LINE_LEN + _COLUMN_SEPARATOR_LEN,
    )
    max_len = max(max_len, _BASE_LINE_LEN + _COLUMN_SEPARATOR_LEN)

    for directive in table:
        console.space(_BASE_LINE_LEN)
        console.stream.write(_names(directive))
        console.space(_COLUMN_SEPARATOR_LEN)
        console.space(max_len - _line_len(directive))
        console.tab_words(
            max_len + _COLUMN_SEPARATOR_LEN, directive.description, columns
        )

    console.stream.write("\n")


def run(
    info: CliInfo | None = None,
    console: Console | None = None,
    columns: int | None = None,
) -> int:
    """Print the help screen; always succeeds."""
    console = console if console is not None else Console()
    columns = columns if columns is not None else console_columns()

    console.stream.write("tarman\n")
    console.stream.write(
        "The portable, cross-platform, extensible, and simple package manager\n\n"
    )
    console.stream.write(
        "Usage: tarman <command> [<options>] [<package|url|repo>]\n\n"
    )

    _print_list(console, "COMMANDS", command_table(), columns)
    _print_list(console, "OPTIONS", option_table(), columns)
    return 0