"""The directory tree tarman keeps its packages, repositories and caches in."""

from __future__ import annotations

import os
from pathlib import Path

from tarman.output import Console


def default_root() -> Path:
    """Return the directory tarman uses when none is given."""
    return Path.home() / ".tarman"


class TarmanHome:
    """Paths and operations on tarman's home directory."""

    def __init__(self, root: str | os.PathLike[str] | None = None):
        self.root = Path(root) if root is not None else default_root()

    @property
    def packages_dir(self) -> Path:
        return self.root / "pkgs"

    @property
    def repos_dir(self) -> Path:
        return self.root / "repos"

    @property
    def cache_dir(self) -> Path:
        return self.root / "tmp"

    @property
    def bin_dir(self) -> Path:
        return self.root / "bin"

    @property
    def apps_dir(self) -> Path:
        return self.root / "apps"

    def init(self) -> None:
        """Create every directory tarman needs; raises OSError on failure."""
        for directory in (
            self.root,
            self.packages_dir,
            self.repos_dir,
            self.cache_dir,
            self.bin_dir,
            self.apps_dir,
        ):
            directory.mkdir(parents=True, exist_ok=True)

    def package_path(self, name: str) -> Path:
        return self.packages_dir / name

    def recipe_path(self, repo: str, name: str) -> Path:
        return self.repos_dir / repo / f"{name}.tarman"

    def cached_path(self, filename: str) -> Path:
        return self.cache_dir / filename

    def add_to_path(self, exec_path: str | os.PathLike[str]) -> None:
        """Link an executable into tarman's bin directory."""
        target = Path(exec_path).resolve()
        link = self.bin_dir / target.name
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(target)

    def remove_from_path(self, exec_path: str | os.PathLike[str]) -> None:
        """Remove the link made by add_to_path; raises OSError if absent."""
        (self.bin_dir / Path(exec_path).name).unlink()

    def add_desktop(
        self,
        name: str,
        exec_path: str | os.PathLike[str],
        icon: str | os.PathLike[str] | None = None,
        workdir: str | os.PathLike[str] | None = None,
    ) -> Path:
        """Write a desktop entry for an application and return its path."""
        lines = [
            "[Desktop Entry]",
            "Type=Application",
            f"Name={name}",
            f"Exec={exec_path}",
        ]
        if icon is not None:
            lines.append(f"Icon={icon}")
        if workdir is not None:
            lines.append(f"Path={workdir}")
        entry = self.apps_dir / f"{name}.desktop"
        entry.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return entry

    def remove_desktop(self, name: str) -> None:
        """Delete an application's desktop entry; raises OSError if absent."""
        (self.apps_dir / f"{name}.desktop").unlink()


def _check_init(home: TarmanHome, console: Console) -> bool:
    console.progress("Testing fs init...")
    try:
        home.init()
    except OSError:
        return False
    return True


def _check_paths(home: TarmanHome, console: Console) -> bool:
    console.progress("Testing dypath...")
    console.stream.write(f"{home.root}\n")
    return True


def _check_dirs(home: TarmanHome, console: Console) -> bool:
    scratch = home.root / "test"
    console.progress("Testing dir creation...")
    try:
        scratch.mkdir()
    except OSError:
        return False

    console.progress("Testing dir enumeration...")
    try:
        count = sum(1 for _ in scratch.iterdir())
    except OSError:
        return False
    console.stream.write(f"Count: {count}, expected: 0\n")
    if count != 0:
        return False

    console.progress("Testing dir deletion...")
    try:
        scratch.rmdir()
    except OSError:
        return False
    return True


def run_selftest(home: TarmanHome, console: Console) -> int:
    """Exercise the file system layer; return 0 if every check passes."""
    all_passed = True
    for check in (_check_init, _check_paths, _check_dirs):
        if not check(home, console):
            console.error("Test failed")
            all_passed = False

    if not all_passed:
        console.error("One or more tests failed")
        return 1

    console.success("All tests passed")
    return 0