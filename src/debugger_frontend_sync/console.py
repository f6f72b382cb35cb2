"""Terminal output helpers shared by the pipeline stages."""

from __future__ import annotations

import os
from typing import TextIO

import typer

# SGR 22 resets intensity without clearing other attributes.
DIM_OPEN = typer.style("", dim=True, reset=False)
DIM_CLOSE = "\x1b[22m"


def supports_color(stream: TextIO) -> bool:
    """Return ``True`` when ANSI styling should be written to ``stream``."""
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def echo_banner(message: str) -> None:
    typer.echo("\n" + typer.style(message, bold=True, reverse=True) + "\n")


def echo_step(step: int, total: int, message: str) -> None:
    """Print a normalized progress step line."""
    typer.echo(f"[{step}/{total}] {message}")


def echo_dim(message: str) -> None:
    typer.echo(typer.style(message, dim=True))


def echo_error(message: str, hint: str | None = None) -> None:
    typer.secho(f"Error: {message}", fg="red", err=True)
    if hint:
        typer.echo(hint, err=True)
