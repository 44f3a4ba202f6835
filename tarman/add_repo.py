"""The add-repo command: download a repository into the local database."""

from __future__ import annotations

from tarman import archive as _archive
from tarman.archive import ArchiveError, Extractor
from tarman.home import TarmanHome
from tarman.options import CliInfo
from tarman.output import Console

DEFAULT_FORMAT = "tar.gz"
_CACHE_NAME = "__downloaded_repo"


def run(
    info: CliInfo,
    console: Console | None = None,
    home: TarmanHome | None = None,
    extractor: Extractor | None = None,
) -> int:
    """Fetch the repository at info.input and unpack it; return the exit code."""
    console = console if console is not None else Console()
    home = home if home is not None else TarmanHome()
    extractor = extractor if extractor is not None else Extractor()

    url = info.input
    if url is None:
        console.error("Must specify a repository to add")
        return 1

    console.progress("Initializing host file system")
    try:
        home.init()
    except OSError:
        console.progress("Failed to inizialize host file system")
        return 1

    fmt = info.pkg_fmt
    if fmt is None:
        console.warning(f"Repository format not specified, using '{DEFAULT_FORMAT}'")
        fmt = DEFAULT_FORMAT

    archive_path = _archive.cache_archive_path(home, _CACHE_NAME, fmt)

    console.progress(f"Fetching repository from '{url}'")
    try:
        _archive.download(archive_path, url)
    except ArchiveError:
        console.error("Unable to download package")
        return 1

    console.progress("Extracting repository files")
    try:
        extractor.extract(home.repos_dir, archive_path)
    except ArchiveError:
        console.error(
            "Unable to extract archive. You may be missing the plugin "
            "for this archive type"
        )
        return 1

    console.progress(f"Removing cache '{archive_path}'")
    try:
        archive_path.unlink()
    except OSError:
        console.warning("Unable to delete cache")

    console.success("Repository added successfully")
    return 0