"""CLI argument parsers and validators."""

from __future__ import annotations

import codecs
from pathlib import Path

import typer


def parse_encoding(value: str) -> str:
    """Validate a text encoding name."""
    try:
        codecs.lookup(value)
    except LookupError as e:
        raise typer.BadParameter(f"Unknown encoding: {value!r}") from e
    return value


def parse_base_dir(value: str | Path | None) -> Path | None:
    """Validate the base directory used to resolve relative paths."""
    if value is None or str(value) == "":
        return None
    path = Path(value).expanduser()
    if not path.is_dir():
        raise typer.BadParameter(f"Base directory does not exist: {str(value)!r}")
    return path.resolve()


def pick(option: object, fallback: object) -> object:
    """Prefer an explicit command-line value over a settings default."""
    return fallback if option is None else option
