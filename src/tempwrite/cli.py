"""CLI entry point using Typer.

Everything the CLI creates is left in place when it exits (like ``mktemp``);
the created path is printed on stdout.
"""

import csv
import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer

from tempwrite.config import Config
from tempwrite.config.runtime import parse_mode
from tempwrite.core.writer import TempWriter
from tempwrite.errors import TempWriteError
from tempwrite.logs import configure_logging

app = typer.Typer(
    name="tempwrite",
    help="Create temporary files and directories",
    no_args_is_help=True,
)

DirOption = Annotated[
    Path | None, typer.Option("-d", "--dir", help="Target directory (default: system temp)")
]
PrefixOption = Annotated[str | None, typer.Option("--prefix", help="Name prefix")]
ModeOption = Annotated[
    str | None, typer.Option("--mode", help="Permission bits in octal, e.g. 600")
]
ExtensionOption = Annotated[str, typer.Option("-e", "--ext", help="File extension")]


def main() -> None:
    """Entry point for the CLI."""
    app()


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Log informational events")] = False,
) -> None:
    configure_logging(verbose)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _overrides(directory: Path | None, prefix: str | None, mode: str | None) -> dict[str, Any]:
    values: dict[str, Any] = {"cleanup": False}
    if directory is not None:
        values["dir"] = directory
    if prefix is not None:
        values["prefix"] = prefix
    if mode is not None:
        try:
            values["mode"] = parse_mode(mode)
        except ValueError as err:
            raise _fail(f"Invalid mode: {mode}") from err
    return values


def _read_input(value: str | None) -> str:
    if value is not None:
        return value
    return typer.get_text_stream("stdin").read()


def _create(action: Callable[[TempWriter], Path]) -> None:
    try:
        config = Config.load()
        writer = TempWriter(
            defaults=config.to_csv_options(),
            dir_defaults=config.to_dir_options(),
        )
        path = action(writer)
    except TempWriteError as e:
        raise _fail(str(e)) from e
    typer.echo(str(path))


@app.command()
def write(
    content: Annotated[str | None, typer.Argument(help="Content (default: read stdin)")] = None,
    ext: ExtensionOption = "",
    directory: DirOption = None,
    prefix: PrefixOption = None,
    mode: ModeOption = None,
) -> None:
    """Write text to a new temporary file."""
    overrides = _overrides(directory, prefix, mode)
    text = _read_input(content)
    _create(lambda w: w.write(text, ext, **overrides))


@app.command("json")
def write_json(
    text: Annotated[str | None, typer.Argument(help="JSON text (default: read stdin)")] = None,
    directory: DirOption = None,
    prefix: PrefixOption = None,
    mode: ModeOption = None,
) -> None:
    """Reformat JSON into a new temporary .json file."""
    overrides = _overrides(directory, prefix, mode)
    try:
        value = json.loads(_read_input(text))
    except json.JSONDecodeError as err:
        raise _fail(f"Invalid JSON: {err}") from err
    _create(lambda w: w.write_json(value, **overrides))


@app.command("csv")
def write_csv(
    text: Annotated[str | None, typer.Argument(help="CSV text (default: read stdin)")] = None,
    delimiter: Annotated[
        str | None, typer.Option("--delimiter", help="Output delimiter")
    ] = None,
    directory: DirOption = None,
    prefix: PrefixOption = None,
    mode: ModeOption = None,
) -> None:
    """Rewrite CSV with every cell quoted into a new temporary .csv file."""
    overrides = _overrides(directory, prefix, mode)
    if delimiter is not None:
        overrides["delimiter"] = delimiter
    rows = list(csv.reader(io.StringIO(_read_input(text))))
    _create(lambda w: w.write_csv(rows, **overrides))


@app.command("dir")
def make_dir(
    directory: DirOption = None,
    prefix: PrefixOption = None,
    mode: ModeOption = None,
) -> None:
    """Create a new temporary directory."""
    overrides = _overrides(directory, prefix, mode)
    _create(lambda w: w.mkdtemp(**overrides))


@app.command()
def copy(
    source: Annotated[Path, typer.Argument(help="File to copy")],
    ext: ExtensionOption = "",
    directory: DirOption = None,
    prefix: PrefixOption = None,
    mode: ModeOption = None,
) -> None:
    """Copy a file into a new temporary file."""
    overrides = _overrides(directory, prefix, mode)
    _create(lambda w: w.copy(source, ext, **overrides))


@app.command()
def pattern(
    name_pattern: Annotated[
        str, typer.Argument(help="Name with {random}, {timestamp} or {time} placeholders")
    ],
    content: Annotated[str | None, typer.Argument(help="Content (default: read stdin)")] = None,
    directory: DirOption = None,
    mode: ModeOption = None,
) -> None:
    """Write text to a temporary file named after a pattern."""
    overrides = _overrides(directory, None, mode)
    text = _read_input(content)
    _create(lambda w: w.write_with_pattern(text, name_pattern, **overrides))


@app.command()
def clean(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to delete")],
) -> None:
    """Delete temporary files or directories, best effort."""
    writer = TempWriter()
    failed = [path for path in paths if not writer.cleanup(path)]
    for path in failed:
        typer.echo(f"Failed to remove {path}", err=True)
    if failed:
        raise typer.Exit(1)
