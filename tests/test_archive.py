import io
import tarfile

import pytest

from tarman.archive import (
    ArchiveError,
    Extractor,
    cache_archive_path,
    download,
    tar_extract,
)
from tarman.home import TarmanHome


def _make_tar(path, mode, members):
    with tarfile.open(path, mode) as archive:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return path


@pytest.mark.parametrize("suffix,mode", [("tar", "w"), ("tar.gz", "w:gz"), ("tar.xz", "w:xz")])
def test_embedded_by_extension(tmp_path, suffix, mode):
    src = _make_tar(tmp_path / f"pkg.{suffix}", mode, {"app/run": b"hello"})
    dst = tmp_path / "out"
    dst.mkdir()
    Extractor().extract(dst, src)
    assert (dst / "app" / "run").read_bytes() == b"hello"


def test_tar_extract_direct(tmp_path):
    src = _make_tar(tmp_path / "x.tar", "w", {"a.txt": b"abc"})
    dst = tmp_path / "d"
    dst.mkdir()
    tar_extract(dst, src)
    assert (dst / "a.txt").read_bytes() == b"abc"


def test_tar_extract_corrupt(tmp_path):
    src = tmp_path / "bad.tar"
    src.write_bytes(b"not an archive")
    with pytest.raises(ArchiveError):
        tar_extract(tmp_path, src)


def test_explicit_embedded_type(tmp_path):
    src = _make_tar(tmp_path / "archive.bin", "w:gz", {"f": b"1"})
    dst = tmp_path / "o"
    dst.mkdir()
    Extractor().extract(dst, src, "tar.gz")
    assert (dst / "f").read_bytes() == b"1"


def test_plugin_by_extension_with_many_dots(tmp_path):
    calls = []
    extractor = Extractor({"zip": lambda d, s: calls.append((d, s))})
    src = str(tmp_path / "a.b.zip")
    extractor.extract("dest", src)
    assert calls == [("dest", src)]


def test_plugin_multi_part_extension_takes_first_match():
    calls = []
    extractor = Extractor(
        {
            "tar.zst": lambda d, s: calls.append("tar.zst"),
            "zst": lambda d, s: calls.append("zst"),
        }
    )
    extractor.extract("d", "pkg.tar.zst")
    assert calls == ["tar.zst"]


def test_dot_before_slash_is_skipped():
    calls = []
    extractor = Extractor({"/zip": lambda d, s: calls.append(s)})
    with pytest.raises(ArchiveError):
        extractor.extract("d", "./zip")
    assert calls == []


def test_explicit_plugin_type_preferred():
    calls = []
    extractor = Extractor({"tar": lambda d, s: calls.append(s)})
    extractor.extract("d", "whatever.tar", "tar")
    assert calls == ["whatever.tar"]


def test_unknown_explicit_type():
    with pytest.raises(ArchiveError):
        Extractor().extract("d", "file.tar", "rar")


def test_unknown_extension():
    with pytest.raises(ArchiveError):
        Extractor().extract("d", "file.rar")


def test_cache_archive_path(tmp_path):
    home = TarmanHome(tmp_path)
    path = cache_archive_path(home, "__downloaded_repo", "tar.gz")
    assert path == home.cache_dir / "__downloaded_repo.tar.gz"


def test_download_file_url(tmp_path):
    source = tmp_path / "remote.bin"
    source.write_bytes(b"payload")
    target = tmp_path / "local.bin"
    download(target, source.as_uri())
    assert target.read_bytes() == b"payload"


def test_download_missing(tmp_path):
    with pytest.raises(ArchiveError):
        download(tmp_path / "x", (tmp_path / "absent").as_uri())


def test_download_bad_url(tmp_path):
    with pytest.raises(ArchiveError):
        download(tmp_path / "x", "not a url")