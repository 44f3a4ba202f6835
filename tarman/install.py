"""The install command: unpack a package and register it with the system."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path, PurePath

from tarman import archive as _archive
from tarman.archive import ArchiveError, Extractor
from tarman.home import TarmanHome
from tarman.options import CliInfo, TarmanError
from tarman.output import Console
from tarman.prompts import Prompter

PACKAGE_FILE = "package.tarman"
RECIPE_ARTIFACT = "recipe.tarman"
DEFAULT_FORMAT = "tar.gz"

_FLAG_FIELDS = ("add_to_path", "add_to_desktop", "add_to_tarman")


class CommandError(TarmanError):
    """A command could not be carried out."""


@dataclass
class PackageInfo:
    """Where a package comes from and how its application is laid out."""

    url: str | None = None
    from_repository: str | None = None
    application_name: str | None = None
    executable_path: str | None = None
    working_directory: str | None = None
    icon_path: str | None = None


@dataclass
class Recipe:
    """Everything needed to install a package."""

    package_format: str | None = None
    pkg_info: PackageInfo = field(default_factory=PackageInfo)
    add_to_path: bool = False
    add_to_desktop: bool = False
    add_to_tarman: bool = False


_PKG_FIELDS = tuple(f.name for f in fields(PackageInfo))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _parse_bool(value: str, where: str) -> bool:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"{where}: invalid boolean value '{value}'")


def load_recipe_file(path: str | os.PathLike[str]) -> Recipe:
    """Read a recipe or package file of 'key = value' lines.

    Raises OSError if the file cannot be read and ValueError if it is malformed.
    """
    recipe = Recipe()
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle, 1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            where = f"{os.fspath(path)}:{number}"
            key, sep, value = line.partition("=")
            if not sep:
                raise ValueError(f"{where}: expected 'key = value'")
            key = key.strip()
            value = _unquote(value.strip())
            if key in _PKG_FIELDS:
                setattr(recipe.pkg_info, key, value or None)
            elif key == "package_format":
                recipe.package_format = value or None
            elif key in _FLAG_FIELDS:
                setattr(recipe, key, _parse_bool(value, where))
            else:
                raise ValueError(f"{where}: unknown key '{key}'")
    return recipe


def dump_recipe_file(path: str | os.PathLike[str], recipe: Recipe) -> None:
    """Write a recipe in the format load_recipe_file reads."""
    lines = []
    if recipe.package_format is not None:
        lines.append(f"package_format = {recipe.package_format}")
    for name in _PKG_FIELDS:
        value = getattr(recipe.pkg_info, name)
        if value is not None:
            lines.append(f"{name} = {value}")
    for name in _FLAG_FIELDS:
        lines.append(f"{name} = {'true' if getattr(recipe, name) else 'false'}")
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


def find_executables(base: str | os.PathLike[str]) -> list[str]:
    """Return the paths, relative to base, of executable files below it."""
    base_path = Path(base)
    found: list[str] = []

    def visit(directory: Path) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                visit(entry)
            elif entry.is_file() and os.access(entry, os.X_OK):
                found.append(entry.relative_to(base_path).as_posix())

    visit(base_path)
    return found


def _filled(value: str | None) -> bool:
    return value is not None and value != ""


class _Installer:
    def __init__(
        self,
        info: CliInfo,
        console: Console,
        prompter: Prompter,
        home: TarmanHome,
        extractor: Extractor,
    ):
        self.info = info
        self.console = console
        self.prompter = prompter
        self.home = home
        self.extractor = extractor
        self.recipe = Recipe()
        self.pkg_name: str | None = None
        self.is_remote = False
        self.archive_path: Path | None = None

    # Helpers

    def _merge_missing(self, source: Recipe) -> None:
        target = self.recipe.pkg_info
        for name in (
            "url",
            "application_name",
            "executable_path",
            "working_directory",
            "icon_path",
        ):
            if not _filled(getattr(target, name)):
                candidate = getattr(source.pkg_info, name)
                if _filled(candidate):
                    setattr(target, name, candidate)

    def _choose(self, options: list[str], allow_custom: bool, title: str) -> int:
        if len(options) == 1 and not allow_custom:
            return 1
        if not options:
            return 0

        write = self.console.stream.write
        self.console.newline()
        write(title + ":")
        self.console.reset()
        self.console.newline()

        range_min = 1
        if allow_custom:
            self.console.space(8)
            write("0. [Custom]")
            self.console.newline()
            range_min = 0

        for number, option in enumerate(options, 1):
            self.console.space(8)
            write(f"{number}. {option}")
            self.console.newline()
            self.console.reset()

        return self.prompter.ask_int(
            "Enter the desired option number", range_min, len(options)
        )

    def _ask_nonempty(self, message: str) -> str:
        while True:
            text = self.prompter.ask_line(message)
            if text:
                return text

    # Steps

    def _apply_cli(self) -> None:
        info, recipe = self.info, self.recipe
        if _filled(info.pkg_fmt):
            recipe.package_format = info.pkg_fmt
        if _filled(info.pkg_name):
            self.pkg_name = info.pkg_name
        for attr, value in (
            ("application_name", info.app_name),
            ("executable_path", info.exec_path),
            ("working_directory", info.working_dir),
            ("icon_path", info.icon_path),
        ):
            if _filled(value):
                setattr(recipe.pkg_info, attr, value)
        recipe.add_to_path = info.add_path
        recipe.add_to_desktop = info.add_desktop
        recipe.add_to_tarman = info.add_tarman

    def _load_repo_recipe(self) -> None:
        repo = self.recipe.pkg_info.from_repository
        path = self.home.recipe_path(repo, self.pkg_name)
        try:
            loaded = load_recipe_file(path)
        except ValueError as exc:
            raise CommandError(
                f"Recipe file for package '{self.pkg_name}' in repository "
                f"'{repo}' is malformed"
            ) from exc
        except OSError as exc:
            raise CommandError(
                f"Unable to read contents of recipe file '{path}'"
            ) from exc

        self.console.progress(f"Using recipe file '{path}'")
        self._merge_missing(loaded)
        if not _filled(self.recipe.package_format) and _filled(loaded.package_format):
            self.recipe.package_format = loaded.package_format
        self.recipe.add_to_path = loaded.add_to_path
        self.recipe.add_to_desktop = loaded.add_to_desktop
        self.recipe.add_to_tarman = loaded.add_to_tarman

    def _find_repository(self) -> None:
        try:
            entries = sorted(self.home.repos_dir.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise CommandError("Unable to open repositories directory") from exc

        repos = [
            entry.name
            for entry in entries
            if entry.is_dir()
            and self.home.recipe_path(entry.name, self.pkg_name).exists()
        ]
        if not repos:
            raise CommandError(
                f"Package '{self.pkg_name}' not found in local repositories"
            )

        choice = self._choose(
            repos,
            False,
            f"Multiple repositories found for package '{self.pkg_name}', "
            "choose between",
        )
        self.recipe.pkg_info.from_repository = repos[choice - 1]
        self._load_repo_recipe()

    def _fetch(self) -> None:
        fmt = self.recipe.package_format
        if not _filled(fmt):
            self.console.warning(
                f"Package format not specified, using '{DEFAULT_FORMAT}'"
            )
            fmt = self.recipe.package_format = DEFAULT_FORMAT
        url = self.recipe.pkg_info.url
        path = _archive.cache_archive_path(self.home, self.pkg_name, fmt)
        self.archive_path = path
        self.console.progress(f"Downloading package from '{url}' to '{path}'")
        try:
            _archive.download(path, url)
        except ArchiveError as exc:
            raise CommandError("Unable to download package") from exc

    def _create_pkg_dir(self, pkg_path: Path) -> None:
        try:
            pkg_path.mkdir()
        except FileExistsError:
            if not self.prompter.ask_bool(
                "This package is already installed, proceed with clean install?"
            ):
                raise CommandError("Installation aborted") from None
        except OSError as exc:
            raise CommandError(f"Unable to create directory in '{pkg_path}'") from exc

    def _load_package_file(self, pkg_path: Path) -> None:
        if self.is_remote:
            return
        path = pkg_path / PACKAGE_FILE
        try:
            loaded = load_recipe_file(path)
        except FileNotFoundError:
            self.console.warning(
                f"Package configuration file '{path}' does not exist"
            )
            return
        except ValueError:
            self.console.warning(
                f"Ignoring malformed package configuration file at '{path}'"
            )
            return
        except OSError:
            self.console.error(
                f"Unable to read contents of package configuration file at '{path}'"
            )
            return

        self.console.progress(f"Using package configuration file at '{path}'")
        self._merge_missing(loaded)

    def _infer_exec(self, pkg_path: Path) -> None:
        try:
            execs = find_executables(pkg_path)
        except OSError as exc:
            raise CommandError(f"Unable to visit subdirectory '{pkg_path}'") from exc
        choice = self._choose(execs, True, "Choose an executable")
        if choice == 0:
            self.recipe.pkg_info.executable_path = self._ask_nonempty(
                "Enter executable path"
            )
        else:
            self.recipe.pkg_info.executable_path = execs[choice - 1]

    def _infer_app_name(self, pkg_path: Path) -> None:
        self.console.progress("Inferring application name")
        default = self.pkg_name[:1].upper() + self.pkg_name[1:]
        try:
            others = sorted(
                entry.name
                for entry in pkg_path.iterdir()
                if entry.is_dir() and entry.name != default
            )
        except OSError as exc:
            raise CommandError(
                f"Unable to visit package directory '{pkg_path}'"
            ) from exc

        names = [default, *others]
        choice = self._choose(names, True, "Choose an application name")
        if choice == 0:
            self.recipe.pkg_info.application_name = self._ask_nonempty(
                "Enter application name"
            )
        else:
            self.recipe.pkg_info.application_name = names[choice - 1]

    def _infer_additional_info(self, pkg_path: Path) -> None:
        if self.is_remote:
            return
        recipe, pkg = self.recipe, self.recipe.pkg_info

        if not recipe.add_to_path:
            recipe.add_to_path = self.prompter.ask_bool(
                "Do you want to add this package to PATH?"
            )
        if pkg.executable_path is None:
            self._infer_exec(pkg_path)
        if not recipe.add_to_desktop:
            recipe.add_to_desktop = self.prompter.ask_bool(
                "Do you want to add this package as an app?"
            )
        if recipe.add_to_desktop and pkg.application_name is None:
            self._infer_app_name(pkg_path)
        if (
            recipe.add_to_desktop
            and pkg.executable_path is not None
            and pkg.working_directory is None
        ):
            self.console.progress("Inferring working directory")
            pkg.working_directory = str(PurePath(pkg.executable_path).parent)

    def _register(self, pkg_path: Path) -> None:
        pkg = self.recipe.pkg_info
        if pkg.executable_path is None:
            return
        exec_path = pkg_path / pkg.executable_path

        if self.recipe.add_to_path:
            self.console.progress(f"Adding executable '{exec_path}' to PATH")
            try:
                self.home.add_to_path(exec_path)
            except OSError:
                self.console.warning("Could not add executable to PATH")

        if self.recipe.add_to_desktop:
            self.console.progress(
                f"Adding app '{pkg.application_name}' to installed apps"
            )
            icon = None
            workdir = None
            if pkg.icon_path is None:
                self.console.warning("Application has no icon")
            else:
                icon = pkg_path / pkg.icon_path
            if pkg.working_directory is None:
                self.console.warning("Application has no explicit working directory")
            else:
                workdir = pkg_path / pkg.working_directory
            try:
                self.home.add_desktop(
                    pkg.application_name or self.pkg_name, exec_path, icon, workdir
                )
            except OSError:
                self.console.warning("Unable to add app to system applications")

    def _remove_cache(self) -> None:
        self.console.progress(f"Removing cache '{self.archive_path}'")
        try:
            Path(self.archive_path).unlink()
        except OSError:
            self.console.warning("Unable to delete cache")

    def run(self) -> None:
        info = self.info
        self.console.progress("Initializing host file system")
        try:
            self.home.init()
        except OSError as exc:
            raise CommandError("Failed to inizialize host file system") from exc

        self.console.progress("Initiating installation process")
        self._apply_cli()

        if info.from_url and self.recipe.package_format is None:
            self.console.warning(
                "Package format not specified for remote download, "
                f"using '{DEFAULT_FORMAT}'"
            )
            self.recipe.package_format = DEFAULT_FORMAT

        if info.from_repo:
            self.is_remote = True
            self.pkg_name = info.input
            self._find_repository()
            if self.recipe.pkg_info.url is None:
                raise CommandError("Package URL not found in recipe")
            self._fetch()

        if self.pkg_name is None:
            self.pkg_name = self._ask_nonempty("Enter package name")

        if info.from_url:
            self.recipe.pkg_info.url = info.input
            self._fetch()

        archive_path = self.archive_path or Path(info.input)
        pkg_path = self.home.package_path(self.pkg_name)

        self.console.progress(f"Creating package in '{pkg_path}'")
        self._create_pkg_dir(pkg_path)

        self.console.progress(f"Extracting archive '{archive_path}' to '{pkg_path}'")
        try:
            self.extractor.extract(pkg_path, archive_path)
        except ArchiveError as exc:
            raise CommandError(
                "Unable to extract archive. You may be missing the plugin "
                "for this archive type"
            ) from exc

        self._load_package_file(pkg_path)
        self._infer_additional_info(pkg_path)

        artifact = pkg_path / RECIPE_ARTIFACT
        self.console.progress(f"Creating recipe artifact in '{artifact}'")
        dump_recipe_file(artifact, self.recipe)

        self._register(pkg_path)

        if (info.from_url or info.from_repo) and self.archive_path is not None:
            self._remove_cache()

        self.console.success(f"Package '{self.pkg_name}' installed successfully")


def run(
    info: CliInfo,
    console: Console | None = None,
    prompter: Prompter | None = None,
    home: TarmanHome | None = None,
    extractor: Extractor | None = None,
) -> int:
    """Install the package named by info; return the exit code."""
    console = console if console is not None else Console()
    prompter = prompter if prompter is not None else Prompter(console)
    home = home if home is not None else TarmanHome()
    extractor = extractor if extractor is not None else Extractor()

    if info.input is None:
        console.error("Must specify a package to install")
        return 1

    try:
        _Installer(info, console, prompter, home, extractor).run()
    except CommandError as exc:
        console.error(str(exc))
        return 1
    except EOFError:
        console.error("Unexpected end of input")
        return 1
    return 0