"""Command-line entry point."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

from tarman import add_repo, help, install, listing, remove
from tarman.lookup import CMD_ADD_REPO, CMD_HELP, CMD_INSTALL, CMD_LIST, CMD_REMOVE
from tarman.options import CliInfo, TarmanError
from tarman.output import Console
from tarman.parser import parse


def _dispatch(console: Console) -> dict[str, Callable[[CliInfo], int]]:
    return {
        CMD_HELP: lambda info: help.run(info, console),
        CMD_INSTALL: lambda info: install.run(info, console),
        CMD_LIST: lambda info: listing.run(info, console),
        CMD_REMOVE: lambda info: remove.run(info, console),
        CMD_ADD_REPO: lambda info: add_repo.run(info, console),
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Run tarman with the given arguments; return the exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    console = Console()

    try:
        command, info = parse(args)
    except TarmanError as exc:
        console.error(str(exc))
        return 1

    for warning in info.warnings:
        console.warning(warning)

    if command is None:
        return help.run(info, console)

    handler = _dispatch(console).get(command)
    if handler is None:
        console.error(f"Command '{command}' is not supported")
        return 1
    return handler(info)


if __name__ == "__main__":
    raise SystemExit(main())