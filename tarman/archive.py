"""Extracting package archives and fetching them from the network."""

from __future__ import annotations

import os
import shutil
import tarfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable, Mapping

from tarman.home import TarmanHome
from tarman.options import TarmanError

ExtractHandler = Callable[[str, str], None]


class ArchiveError(TarmanError):
    """An archive could not be fetched or extracted."""


def tar_extract(dst: str | os.PathLike[str], src: str | os.PathLike[str]) -> None:
    """Extract a (possibly compressed) tar archive into dst."""
    try:
        with tarfile.open(src, "r:*") as archive:
            if hasattr(tarfile, "data_filter"):
                archive.extractall(dst, filter="data")
            else:
                archive.extractall(dst)
    except (tarfile.TarError, OSError) as exc:
        raise ArchiveError(f"Unable to extract '{src}': {exc}") from exc


_EMBEDDED: tuple[tuple[str, ExtractHandler], ...] = (
    ("tar", tar_extract),
    ("tar.gz", tar_extract),
    ("tar.xz", tar_extract),
)


class Extractor:
    """Chooses a plugin or a built-in handler for an archive and runs it."""

    def __init__(self, plugins: Mapping[str, ExtractHandler] | None = None):
        self.plugins = dict(plugins) if plugins else {}

    def _plugin_by_extension(self, src: str) -> ExtractHandler | None:
        for index, char in enumerate(src[:-1]):
            following = src[index + 1]
            if char != "." or not (following.isascii() and following.isalnum()):
                continue
            plugin = self.plugins.get(src[index + 1 :])
            if plugin is not None:
                return plugin
        return None

    def extract(
        self,
        dst: str | os.PathLike[str],
        src: str | os.PathLike[str],
        file_type: str | None = None,
    ) -> None:
        """Extract src into dst; raises ArchiveError if nothing handles it."""
        dst, src = os.fspath(dst), os.fspath(src)

        if file_type is not None:
            plugin = self.plugins.get(file_type)
            if plugin is not None:
                plugin(dst, src)
                return
            for name, handler in _EMBEDDED:
                if name == file_type:
                    handler(dst, src)
                    return
            raise ArchiveError(f"No extractor for archive type '{file_type}'")

        plugin = self._plugin_by_extension(src)
        if plugin is not None:
            plugin(dst, src)
            return

        for name, handler in _EMBEDDED:
            if src.endswith(name):
                handler(dst, src)
                return

        raise ArchiveError(f"No extractor for archive '{src}'")


def cache_archive_path(home: TarmanHome, filename: str, filetype: str) -> Path:
    """Return the cache location for an archive of the given name and type."""
    return home.cached_path(f"{filename}.{filetype}")


def download(dst: str | os.PathLike[str], url: str) -> None:
    """Fetch url and store its contents at dst."""
    try:
        with urllib.request.urlopen(url) as response, open(dst, "wb") as out:
            shutil.copyfileobj(response, out)
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise ArchiveError(f"Unable to download '{url}': {exc}") from exc