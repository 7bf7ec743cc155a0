"""
Main CLI entry point for dotprops.

Inspects YAML documents through PathMap paths. Documents are only read;
nothing is written back.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import rich.console as _rich_console
import rich.syntax as _rich_syntax
import yaml as _yaml

import dotprops
import dotprops.errors as errors
import dotprops.path_map as path_map
import dotprops.settings as settings_store

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_delimiter_option = _click.option(
    "-d",
    "--delimiter",
    default=".",
    show_default=True,
    help="Path segment delimiter",
)
_color_option = _click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)


def _load(file: _pathlib.Path, delimiter: str) -> path_map.PathMap:
    """Load a YAML file into a PathMap, turning library errors into CLI errors."""
    try:
        with file.open(encoding="utf-8") as stream:
            return path_map.load_yaml(stream, delimiter=delimiter)
    except errors.InvalidConfigurationError as e:
        raise _click.ClickException(f"{file}: {e}") from None


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_value(value: _typing.Any, *, as_json: bool, use_color: bool | None) -> None:
    """Print a value as JSON, a bare scalar, or highlighted YAML."""
    if as_json:
        _click.echo(_json.dumps(value, indent=2, default=str))
        return

    if not isinstance(value, (dict, list)):
        _click.echo("null" if value is None else str(value))
        return

    yaml_text = _yaml.safe_dump(value, default_flow_style=False, sort_keys=False)
    color, force_color = _should_use_color(use_color)
    if not color:
        _click.echo(yaml_text, nl=False)
        return

    # When forcing color (explicit --color flag):
    # - force_terminal=True: output color even when piped
    # - color_system='truecolor': override FORCE_COLOR=0 env var
    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    console.print(
        _rich_syntax.Syntax(
            yaml_text,
            "yaml",
            theme="monokai",
            background_color="default",
        )
    )


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(dotprops.__version__, "-v", "--version", prog_name="dotprops")
def cli() -> None:
    """dotprops - read nested YAML documents through dot paths.

    Examples:
        dotprops get config.yaml dir.public       # value or subtree
        dotprops get config.yaml 'dir.public:'    # subtree with value markers
        dotprops has config.yaml dir.cache dir.var
        dotprops flatten config.yaml --json
    """


@cli.command()
@_click.argument(
    "file", type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)
)
@_click.argument("path")
@_delimiter_option
@_click.option("--default", "default", default=None, help="Printed when the path is missing")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_color_option
def get(
    file: _pathlib.Path,
    path: str,
    delimiter: str,
    default: str | None,
    as_json: bool,
    use_color: bool | None,
) -> None:
    """Print the value at PATH in FILE.

    End PATH with '.' for the subtree without value markers, or ':' for the
    subtree verbatim.
    """
    try:
        value = _load(file, delimiter).get(path, default)
    except errors.InvalidPathError as e:
        raise _click.BadParameter(str(e), param_hint="PATH") from None
    _print_value(value, as_json=as_json, use_color=use_color)


@cli.command()
@_click.argument(
    "file", type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)
)
@_click.argument("paths", nargs=-1, required=True)
@_delimiter_option
def has(file: _pathlib.Path, paths: tuple[str, ...], delimiter: str) -> None:
    """Exit 0 if every one of PATHS exists in FILE, 1 otherwise."""
    found = _load(file, delimiter).has(list(paths))
    _click.echo("yes" if found else "no")
    if not found:
        raise SystemExit(1)


@cli.command()
@_click.argument(
    "file", type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)
)
@_delimiter_option
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def flatten(file: _pathlib.Path, delimiter: str, as_json: bool) -> None:
    """Print FILE as flat 'path = value' lines (or a JSON object)."""
    try:
        flat = _load(file, delimiter).flatten(delimiter)
    except errors.MergeConflictError as e:
        raise _click.ClickException(str(e)) from None

    if as_json:
        _click.echo(_json.dumps(flat, indent=2, default=str))
        return
    for key, value in flat.items():
        _click.echo(f"{key} = {_json.dumps(value, default=str)}")


@cli.command(name="settings")
@_click.argument("names", nargs=-1, required=True)
@_click.option(
    "--root",
    "root_dir",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Project root for generated directories (default: discover)",
)
def settings_cmd(names: tuple[str, ...], root_dir: _pathlib.Path | None) -> None:
    """Resolve setting NAMES (e.g. dir.cache) without storing anything."""
    store = settings_store.Settings(root_dir=root_dir, freeze=True)
    for name in names:
        value = store.get(name)
        _click.echo(f"{name}: {'null' if value is None else value}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
