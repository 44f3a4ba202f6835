# tarman

A portable and simple package manager for applications distributed as tar
archives (`.tar`, `.tar.gz`, `.tar.xz`). tarman unpacks each package into its
own directory, writes down how it was installed in a recipe file, and can
link the program into its own `bin` directory or write a desktop entry for it.

## Installation

```
pip install .
```

This installs the `tarman` command.

## Usage

```
tarman <command> [<options>] [<package|url|repo>]
```

Running `tarman` with no command prints the help screen.

### Commands

| Command    | What it does                                   |
|------------|------------------------------------------------|
| `help`     | Show the list of commands and options          |
| `install`  | Install a package                              |
| `list`     | List all installed packages                    |
| `remove`   | Remove an installed package                    |
| `add-repo` | Add a remote repository to the local database  |

### Options

| Option                     | Takes a value | Meaning                                             |
|----------------------------|---------------|-----------------------------------------------------|
| `-u`, `--from-url`         | no            | Treat the input as a URL and download it            |
| `-r`, `--from-repo`        | no            | Treat the input as a package name in a local repository |
| `-n`, `--pkg-name`         | yes           | Package name                                        |
| `-a`, `--app-name`         | yes           | Application name                                    |
| `-e`, `--exec`             | yes           | Executable, relative to the package directory       |
| `-w`, `--working-dir`      | yes           | Working directory for the desktop entry             |
| `-i`, `--icon`             | yes           | Icon file, relative to the package directory        |
| `-P`, `--add-path`         | no            | Link the executable into tarman's `bin` directory   |
| `-A`, `--add-desktop`      | no            | Write a desktop entry for the application           |
| `-T`, `--add-tarman`       | no            | Recorded in the recipe only                         |
| `-f`, `--format`           | yes           | Archive format (default `tar.gz` for downloads)     |

`--from-url` and `--from-repo` cannot be combined. Giving a value option twice
keeps the first value and prints a warning.

### Examples

Install from a local archive:

```
tarman install ./myapp.tar.gz
```

Download from a URL and install, naming the package and linking its executable:

```
tarman install --from-url https://example.com/myapp.tar.gz --pkg-name myapp --add-path
```

Install by name from a local repository:

```
tarman install --from-repo myapp
```

Add a repository, list packages and remove one:

```
tarman add-repo https://example.com/repo.tar.gz
tarman list
tarman remove myapp
```

When the executable, application name or working directory is not known,
tarman looks inside the unpacked package and asks you to choose.

## Where things are kept

Everything lives under `~/.tarman`:

- `pkgs/<name>/` – installed packages, each with a `recipe.tarman` file
- `repos/<repo>/<name>.tarman` – recipes from added repositories
- `tmp/` – downloaded archives, deleted after extraction
- `bin/` – symbolic links made by `--add-path`
- `apps/<name>.desktop` – desktop entries made by `--add-desktop`

Recipe and `package.tarman` files are plain `key = value` lines (blank lines
and lines starting with `#` are ignored). The keys are `package_format`,
`url`, `from_repository`, `application_name`, `executable_path`,
`working_directory`, `icon_path`, and the booleans `add_to_path`,
`add_to_desktop` and `add_to_tarman` (`true`/`false`).

## What tarman does not do

- It does not change your shell's `PATH`; add `~/.tarman/bin` to it yourself.
- Desktop entries are written to `~/.tarman/apps`, not installed into the
  desktop environment's application menu.
- There are no commands to update packages or to list or remove repositories.
- Only tar archives are extracted out of the box. Other formats need an
  extraction function passed to `tarman.archive.Extractor(plugins=...)`;
  there is no plugin discovery from the command line.
- `--add-tarman` is stored in the recipe but has no other effect.

## Running the tests

```
pip install .[test]
pytest
```