"""Tables of the commands and options tarman understands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from tarman import options as opt
from tarman.options import CliInfo

CMD_HELP = "help"
CMD_INSTALL = "install"
CMD_LIST = "list"
CMD_REMOVE = "remove"
CMD_ADD_REPO = "add-repo"

OptionHandler = Callable[[CliInfo, Optional[str]], None]


@dataclass(frozen=True)
class Directive:
    """A command or option: its spellings, handler and help text."""

    short: str | None
    full: str | None
    handler: OptionHandler | None
    has_argument: bool
    description: str

    def matches(self, arg: str) -> bool:
        return arg in (self.short, self.full)


_COMMANDS = (
    Directive(None, CMD_HELP, None, False, "Show this menu"),
    Directive(None, CMD_INSTALL, None, False, "Install a package"),
    Directive(None, CMD_LIST, None, False, "List all installed packages"),
    Directive(None, CMD_REMOVE, None, False, "Remove an installed package"),
    Directive(
        None,
        CMD_ADD_REPO,
        None,
        False,
        "Add a remote repository to the local database",
    ),
)

_OPTIONS = (
    Directive(
        opt.SHORT_FROM_URL,
        opt.FULL_FROM_URL,
        opt.from_url,
        False,
        "[Install] Use URL as package input and perform download",
    ),
    Directive(
        opt.SHORT_FROM_REPO,
        opt.FULL_FROM_REPO,
        opt.from_repo,
        False,
        "[Install] use package name as input and perform local repository lookup",
    ),
    Directive(
        opt.SHORT_PKG_NAME,
        opt.FULL_PKG_NAME,
        opt.pkg_name,
        True,
        "[Install] Specify package name",
    ),
    Directive(
        opt.SHORT_APP_NAME,
        opt.FULL_APP_NAME,
        opt.app_name,
        True,
        "[Install] Specify application name",
    ),
    Directive(
        opt.SHORT_EXEC,
        opt.FULL_EXEC,
        opt.exec_path,
        True,
        "[Install] Specify relative path to executable",
    ),
    Directive(
        opt.SHORT_WRK_DIR,
        opt.FULL_WRK_DIR,
        opt.working_dir,
        True,
        "[Install] Specify a relative directory to use as WD for the desktop "
        "application",
    ),
    Directive(
        opt.SHORT_ICON,
        opt.FULL_ICON,
        opt.icon,
        True,
        "[Install] Specify realtive path to icon file for desktop application",
    ),
    Directive(
        opt.SHORT_ADD_PATH,
        opt.FULL_ADD_PATH,
        opt.add_path,
        False,
        "[Install] Add package executable to PATH",
    ),
    Directive(
        opt.SHORT_ADD_DESKTOP,
        opt.FULL_ADD_DESKTOP,
        opt.add_desktop,
        False,
        "[Install] Add package as desktop application",
    ),
    Directive(
        opt.SHORT_ADD_TARMAN,
        opt.FULL_ADD_TARMAN,
        opt.add_tarman,
        False,
        "[Install] Add package to tarman plugins",
    ),
    Directive(
        opt.SHORT_PKG_FMT,
        opt.FULL_PKG_FMT,
        opt.pkg_fmt,
        True,
        "Specify archive format (e.g., tar.gz, tar.xz, zip)",
    ),
)


def _find(table: tuple[Directive, ...], arg: str) -> Directive | None:
    return next((d for d in table if d.matches(arg)), None)


def find_command(name: str) -> Directive | None:
    """Return the command spelled name, or None."""
    return _find(_COMMANDS, name)


def find_option(arg: str) -> Directive | None:
    """Return the option spelled arg, or None."""
    return _find(_OPTIONS, arg)


def command_table() -> tuple[Directive, ...]:
    return _COMMANDS


def option_table() -> tuple[Directive, ...]:
    return _OPTIONS