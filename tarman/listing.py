"""The list command: show installed packages."""

from __future__ import annotations

from tarman.home import TarmanHome
from tarman.options import CliInfo
from tarman.output import Console, console_columns

_GAP = 8
_PREFIX = " --- "
_ELLIPSIS = "[...]"


def installed_packages(home: TarmanHome) -> list[str]:
    """Return the names of installed packages; raises OSError if unreadable."""
    return sorted(entry.name for entry in home.packages_dir.iterdir() if entry.is_dir())


def _end_line(console: Console) -> None:
    console.reset()
    console.newline()


def _table_print(
    console: Console, home: TarmanHome, names: list[str], max_len: int, width: int
) -> None:
    path_space = width - max_len - _GAP - len(_PREFIX) - 1
    for name in names:
        console.stream.write(_PREFIX + name)
        console.space(max_len - len(name))
        console.space(_GAP)

        path = str(home.package_path(name))
        if len(path) < path_space:
            console.stream.write(path)
        else:
            tail = path[len(path) - path_space + len(_ELLIPSIS) :]
            console.stream.write(_ELLIPSIS + tail)
        _end_line(console)


def run(
    info: CliInfo | None = None,
    console: Console | None = None,
    home: TarmanHome | None = None,
    columns: int | None = None,
) -> int:
    """List installed packages; return the exit code."""
    console = console if console is not None else Console()
    home = home if home is not None else TarmanHome()

    try:
        home.init()
    except OSError:
        console.progress("Failed to inizialize host file system")
        return 1

    columns = columns if columns is not None else console_columns()

    try:
        names = installed_packages(home)
    except OSError:
        console.error("Unable to access package directory")
        return 1

    max_len = max((len(name) for name in names), default=0)

    if columns > max_len + _GAP + len(_PREFIX) + len(_ELLIPSIS):
        _table_print(console, home, names, max_len, columns)
        return 0

    for name in names:
        console.stream.write(name)
        _end_line(console)
    return 0