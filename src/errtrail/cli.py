from __future__ import annotations

import json
import sys

import typer

from .errors import TrailError, parse
from .errors import equal as equal_errors


def _read_source(text: str) -> str:
    if text == "-":
        return sys.stdin.read().strip()
    return text


def _parse_or_exit(text: str) -> TrailError:
    record: TrailError | None = parse(_read_source(text))
    if record is None:
        typer.echo("nothing to parse: empty input", err=True)
        raise typer.Exit(1)
    return record


app: typer.Typer = typer.Typer()


@app.command()
def show(
    text: str,
    as_json: bool = typer.Option(False, "--json", help="Print the normalized JSON form."),
) -> None:
    """Print the code and trail of an error.

    TEXT is the serialized error (or any error message), ``-`` reads it from stdin.
    """
    record: TrailError = _parse_or_exit(text)
    if as_json:
        typer.echo(record.to_json())
        return
    typer.echo(f"code: {record.code}")
    for at, items in zip(record.where, record.reason):
        typer.echo(f"  {at}: {json.dumps(items, default=repr)}")


@app.command()
def equal(first: str, second: str) -> None:
    """Compare two errors by code, exiting with 1 when they differ."""
    same: bool = equal_errors(_parse_or_exit(first), _parse_or_exit(second))
    typer.echo("true" if same else "false")
    if not same:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
