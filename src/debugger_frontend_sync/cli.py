"""Typer-based CLI for syncing and building the debugger frontend."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.config import load_config
from debugger_frontend_sync.console import echo_error
from debugger_frontend_sync.errors import SyncError, UsageError
from debugger_frontend_sync.models import RunOptions
from debugger_frontend_sync.pipeline import run_sync, validate_options

HELP = """Sync and build the debugger frontend into @react-native/debugger-frontend.

By default, checks out the requested branch of the DevTools frontend.
If an existing checkout path is provided, builds it instead.
"""

app = typer.Typer(add_completion=False, help=HELP)


@app.command()
def sync(
    ctx: typer.Context,
    checkout_path: str | None = typer.Argument(None, help="Existing devtools-frontend checkout to build"),
    branch: str | None = typer.Option(
        None, "--branch", help="The DevTools frontend branch to use. Ignored with a local checkout path."
    ),
    nohooks: bool = typer.Option(
        False, "--nohooks", help="Don't run gclient hooks in the devtools checkout (useful for existing checkouts)."
    ),
    keep_scratch: bool = typer.Option(False, "--keep-scratch", help="Don't clean up temporary files."),
    create_diff: bool = typer.Option(False, "--create-diff", help="Create a diff with the updated files."),
    no_build: bool = typer.Option(
        False, "--no-build", help="Skip actually building and updating the frontend."
    ),
) -> None:
    """Sync and build the debugger frontend into @react-native/debugger-frontend."""
    options = RunOptions(
        branch=branch,
        local_checkout_path=Path(checkout_path) if checkout_path else None,
        keep_scratch=keep_scratch,
        nohooks=nohooks,
        create_diff=create_diff,
        no_build=no_build,
    )
    try:
        validate_options(options)
    except UsageError as exc:
        echo_error(str(exc))
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1) from exc

    config = load_config()
    try:
        run_sync(options, config)
    except SyncError as exc:
        echo_error(str(exc), hint=exc.hint)
        raise typer.Exit(code=1) from exc

    if not no_build:
        typer.echo(
            typer.style("Sync done.", fg="green")
            + f" Check in any updated files under {config.package_path}."
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
