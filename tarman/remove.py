"""The remove command: uninstall a package and its system registrations."""

from __future__ import annotations

import shutil

from tarman.home import TarmanHome
from tarman.install import RECIPE_ARTIFACT, Recipe, load_recipe_file
from tarman.options import CliInfo
from tarman.output import Console
from tarman.prompts import Prompter


def _load_artifact(home: TarmanHome, name: str) -> Recipe | None:
    try:
        return load_recipe_file(home.package_path(name) / RECIPE_ARTIFACT)
    except (OSError, ValueError):
        return None


def _unregister(console: Console, home: TarmanHome, recipe: Recipe) -> None:
    pkg = recipe.pkg_info
    if recipe.add_to_path:
        console.progress("Removing executable from PATH")
        try:
            if pkg.executable_path is None:
                raise FileNotFoundError("no executable recorded")
            home.remove_from_path(pkg.executable_path)
        except OSError:
            console.warning("Could not remove executable from PATH")

    if recipe.add_to_desktop:
        console.progress("Removing app from system applications")
        try:
            if pkg.application_name is None:
                raise FileNotFoundError("no application recorded")
            home.remove_desktop(pkg.application_name)
        except OSError:
            console.warning("Could not remove app from system applications")


def run(
    info: CliInfo,
    console: Console | None = None,
    prompter: Prompter | None = None,
    home: TarmanHome | None = None,
) -> int:
    """Remove the package named by info; return the exit code."""
    console = console if console is not None else Console()
    prompter = prompter if prompter is not None else Prompter(console)
    home = home if home is not None else TarmanHome()

    name = info.input
    if name is None:
        console.error(
            "You must specify a package name for it to be removed. Use "
            "'tarman remove <pkg name>'"
        )
        return 1

    console.progress("Initializing host file system")
    try:
        home.init()
    except OSError:
        console.progress("Failed to inizialize host file system")
        return 1

    pkg_path = home.package_path(name)
    if not pkg_path.exists():
        console.error(
            f"The package '{name}' is not installed on this system, at least "
            "not as a tarman package. Try with other package managers "
            "you may have on your system"
        )
        return 1
    if not pkg_path.is_dir():
        console.error(f"Unable to open package directory '{pkg_path}'")
        return 1

    try:
        if not prompter.ask_bool("Proceed with removal?"):
            return 1
    except EOFError:
        console.error("Unexpected end of input")
        return 1

    recipe = _load_artifact(home, name)
    if recipe is not None:
        _unregister(console, home, recipe)
    else:
        console.warning(
            "Removing package without metadata (recipe artifact), some "
            "files may persist"
        )

    console.progress(f"Removing package directory '{pkg_path}'")
    try:
        shutil.rmtree(pkg_path)
    except OSError:
        console.error(
            f"Unable to remove package directory '{pkg_path}'. The package may "
            "now be fully or partially as a result. You can attempt "
            "manual removal of the package by deleting the package "
            "directory and all PATH or Desktop references that may exist"
        )
        return 1

    console.success(f"Package '{name}' removed successfully")
    return 0