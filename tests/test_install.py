import io
import tarfile
from pathlib import Path

import pytest

from tarman.archive import Extractor
from tarman.home import TarmanHome
from tarman.install import (
    PackageInfo,
    Recipe,
    dump_recipe_file,
    find_executables,
    load_recipe_file,
    run,
)
from tarman.options import CliInfo
from tarman.output import Console
from tarman.prompts import Prompter


def _make_archive(path: Path, files: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as archive:
        for name, (data, mode) in files.items():
            member = tarfile.TarInfo(name)
            member.size = len(data)
            member.mode = mode
            archive.addfile(member, io.BytesIO(data))
    return path


def _env(tmp_path, answers=""):
    out = io.StringIO()
    console = Console(out, color=False)
    prompter = Prompter(console, io.StringIO(answers))
    home = TarmanHome(tmp_path / "home")
    return out, console, prompter, home


def test_recipe_round_trip(tmp_path):
    recipe = Recipe(
        package_format="tar.xz",
        pkg_info=PackageInfo(
            url="https://example.com/pkg.tar.xz",
            from_repository="main",
            application_name="Demo",
            executable_path="bin/demo",
            working_directory="bin",
            icon_path="share/icon.png",
        ),
        add_to_path=True,
        add_to_desktop=False,
        add_to_tarman=True,
    )
    path = tmp_path / "recipe.tarman"
    dump_recipe_file(path, recipe)
    assert load_recipe_file(path) == recipe


def test_load_ignores_comments_and_blank_lines(tmp_path):
    path = tmp_path / "r.tarman"
    path.write_text('# note\n\nurl = "x.tar"\nadd_to_path = TRUE\n')
    loaded = load_recipe_file(path)
    assert loaded.pkg_info.url == "x.tar"
    assert loaded.add_to_path is True
    assert loaded.package_format is None


@pytest.mark.parametrize(
    "content",
    ["no separator here\n", "colour = blue\n", "add_to_path = maybe\n"],
)
def test_load_malformed_raises(tmp_path, content):
    path = tmp_path / "bad.tarman"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_recipe_file(path)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_recipe_file(tmp_path / "absent.tarman")


def test_find_executables(tmp_path):
    (tmp_path / "bin").mkdir()
    app = tmp_path / "bin" / "app"
    app.write_text("#!/bin/sh\n")
    app.chmod(0o755)
    script = tmp_path / "run.sh"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o755)
    (tmp_path / "README").write_text("text")
    (tmp_path / "README").chmod(0o644)
    assert find_executables(tmp_path) == ["bin/app", "run.sh"]


def test_run_without_input_fails(tmp_path):
    out, console, prompter, home = _env(tmp_path)
    assert run(CliInfo(), console, prompter, home, Extractor()) == 1
    assert "Must specify a package to install" in out.getvalue()


def test_local_install_uses_package_file(tmp_path):
    archive = _make_archive(
        tmp_path / "src" / "demo.tar.gz",
        {
            "bin/app": (b"#!/bin/sh\n", 0o755),
            "package.tarman": (b"executable_path = bin/app\napplication_name = Demo\n", 0o644),
        },
    )
    out, console, prompter, home = _env(tmp_path, "n\n")
    info = CliInfo(input=str(archive), pkg_name="demo", add_path=True)
    assert run(info, console, prompter, home, Extractor()) == 0

    pkg = home.package_path("demo")
    artifact = load_recipe_file(pkg / "recipe.tarman")
    assert artifact.pkg_info.executable_path == "bin/app"
    assert artifact.pkg_info.application_name == "Demo"
    assert artifact.add_to_path is True
    assert artifact.add_to_desktop is False
    assert (home.bin_dir / "app").resolve() == (pkg / "bin" / "app").resolve()
    assert archive.exists()


def test_install_from_url_infers_executable(tmp_path):
    archive = _make_archive(
        tmp_path / "src" / "tool.tar.gz", {"tool.sh": (b"#!/bin/sh\n", 0o755)}
    )
    out, console, prompter, home = _env(tmp_path, "n\n1\nn\n")
    info = CliInfo(input=archive.as_uri(), from_url=True, pkg_name="tool")
    assert run(info, console, prompter, home, Extractor()) == 0

    artifact = load_recipe_file(home.package_path("tool") / "recipe.tarman")
    assert artifact.pkg_info.executable_path == "tool.sh"
    assert artifact.pkg_info.url == archive.as_uri()
    assert artifact.package_format == "tar.gz"
    assert list(home.cache_dir.iterdir()) == []


def test_existing_package_declined(tmp_path):
    archive = _make_archive(tmp_path / "src" / "demo.tar.gz", {"a": (b"x", 0o644)})
    out, console, prompter, home = _env(tmp_path, "n\n")
    home.init()
    home.package_path("demo").mkdir()
    info = CliInfo(input=str(archive), pkg_name="demo")
    assert run(info, console, prompter, home, Extractor()) == 1
    assert not (home.package_path("demo") / "recipe.tarman").exists()


def test_unknown_archive_type_fails(tmp_path):
    source = tmp_path / "demo.zip"
    source.write_bytes(b"not an archive")
    out, console, prompter, home = _env(tmp_path)
    info = CliInfo(input=str(source), pkg_name="demo")
    assert run(info, console, prompter, home, Extractor()) == 1
    assert "Unable to extract archive" in out.getvalue()


def _write_repo_recipe(home, repo, url):
    directory = home.repos_dir / repo
    directory.mkdir(parents=True)
    (directory / "demo.tarman").write_text(
        f"url = {url}\npackage_format = tar.gz\nexecutable_path = bin/app\n"
    )


def test_install_from_repository(tmp_path):
    archive = _make_archive(
        tmp_path / "src" / "demo.tar.gz", {"bin/app": (b"#!/bin/sh\n", 0o755)}
    )
    out, console, prompter, home = _env(tmp_path)
    home.init()
    _write_repo_recipe(home, "main", archive.as_uri())

    info = CliInfo(input="demo", from_repo=True)
    assert run(info, console, prompter, home, Extractor()) == 0

    pkg = home.package_path("demo")
    assert (pkg / "bin" / "app").read_bytes() == b"#!/bin/sh\n"
    artifact = load_recipe_file(pkg / "recipe.tarman")
    assert artifact.pkg_info.from_repository == "main"
    assert artifact.pkg_info.url == archive.as_uri()
    assert list(home.cache_dir.iterdir()) == []


def test_install_from_repository_choice(tmp_path):
    archive = _make_archive(
        tmp_path / "src" / "demo.tar.gz", {"bin/app": (b"#!/bin/sh\n", 0o755)}
    )
    out, console, prompter, home = _env(tmp_path, "2\n")
    home.init()
    _write_repo_recipe(home, "alpha", archive.as_uri())
    _write_repo_recipe(home, "beta", archive.as_uri())

    info = CliInfo(input="demo", from_repo=True)
    assert run(info, console, prompter, home, Extractor()) == 0
    artifact = load_recipe_file(home.package_path("demo") / "recipe.tarman")
    assert artifact.pkg_info.from_repository == "beta"


def test_repository_package_not_found(tmp_path):
    out, console, prompter, home = _env(tmp_path)
    info = CliInfo(input="ghost", from_repo=True)
    assert run(info, console, prompter, home, Extractor()) == 1
    assert "Package 'ghost' not found in local repositories" in out.getvalue()