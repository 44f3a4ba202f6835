"""Command-line options and the settings they collect."""

from __future__ import annotations

from dataclasses import dataclass, field

SHORT_FROM_URL = "-u"
FULL_FROM_URL = "--from-url"
SHORT_FROM_REPO = "-r"
FULL_FROM_REPO = "--from-repo"
SHORT_PKG_NAME = "-n"
FULL_PKG_NAME = "--pkg-name"
SHORT_APP_NAME = "-a"
FULL_APP_NAME = "--app-name"
SHORT_EXEC = "-e"
FULL_EXEC = "--exec"
SHORT_WRK_DIR = "-w"
FULL_WRK_DIR = "--working-dir"
SHORT_ICON = "-i"
FULL_ICON = "--icon"
SHORT_ADD_PATH = "-P"
FULL_ADD_PATH = "--add-path"
SHORT_ADD_DESKTOP = "-A"
FULL_ADD_DESKTOP = "--add-desktop"
SHORT_ADD_TARMAN = "-T"
FULL_ADD_TARMAN = "--add-tarman"
SHORT_PKG_FMT = "-f"
FULL_PKG_FMT = "--format"


class TarmanError(Exception):
    """Base class of tarman's errors."""


class OptionError(TarmanError):
    """An option was given in a way that cannot be honoured."""


@dataclass
class CliInfo:
    """Settings collected from the command line."""

    input: str | None = None
    from_url: bool = False
    from_repo: bool = False
    pkg_fmt: str | None = None
    pkg_name: str | None = None
    app_name: str | None = None
    exec_path: str | None = None
    working_dir: str | None = None
    icon_path: str | None = None
    add_path: bool = False
    add_desktop: bool = False
    add_tarman: bool = False
    warnings: list[str] = field(default_factory=list)


def _set_once(info: CliInfo, attr: str, option: str, value: str | None) -> None:
    previous = getattr(info, attr)
    if previous is not None:
        info.warnings.append(
            f"Ignoring repeated option '{option}' with value '{value}', "
            f"using previous '{previous}'"
        )
        return
    if value is None:
        raise OptionError("Unexpected end-of-command after last option")
    setattr(info, attr, value)


def from_url(info: CliInfo, value: str | None) -> None:
    if info.from_repo:
        raise OptionError(
            f"Options '{FULL_FROM_REPO}' and '{FULL_FROM_URL}' are not compatible"
        )
    info.from_url = True


def from_repo(info: CliInfo, value: str | None) -> None:
    if info.from_url:
        raise OptionError(
            f"Options '{FULL_FROM_URL}' and '{FULL_FROM_REPO}' are not compatible"
        )
    info.from_repo = True


def pkg_fmt(info: CliInfo, value: str | None) -> None:
    _set_once(info, "pkg_fmt", FULL_PKG_FMT, value)


def pkg_name(info: CliInfo, value: str | None) -> None:
    _set_once(info, "pkg_name", FULL_PKG_NAME, value)


def app_name(info: CliInfo, value: str | None) -> None:
    _set_once(info, "app_name", FULL_APP_NAME, value)


def exec_path(info: CliInfo, value: str | None) -> None:
    _set_once(info, "exec_path", FULL_EXEC, value)


def working_dir(info: CliInfo, value: str | None) -> None:
    _set_once(info, "working_dir", FULL_WRK_DIR, value)


def icon(info: CliInfo, value: str | None) -> None:
    _set_once(info, "icon_path", FULL_ICON, value)


def add_path(info: CliInfo, value: str | None) -> None:
    info.add_path = True


def add_desktop(info: CliInfo, value: str | None) -> None:
    info.add_desktop = True


def add_tarman(info: CliInfo, value: str | None) -> None:
    info.add_tarman = True