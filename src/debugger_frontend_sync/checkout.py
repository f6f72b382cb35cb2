"""Tool checks and devtools-frontend checkout resolution."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.config import DEPOT_TOOLS_HINT_URL, DEVTOOLS_FRONTEND_REPO_URL
from debugger_frontend_sync.errors import CommandError, ToolUnavailableError
from debugger_frontend_sync.models import CheckoutResult
from debugger_frontend_sync.process import run_cmd

DEPOT_TOOLS = ("gn", "autoninja")


def check_required_tools() -> None:
    """Fail fast when git or any depot_tools executable is unavailable."""
    typer.echo("Checking that required tools are available")
    run_cmd("git", ["--version"], quiet=True)
    try:
        run_cmd("gclient", ["--version"], quiet=True)
        for tool in DEPOT_TOOLS:
            run_cmd("which", [tool], quiet=True)
    except CommandError as exc:
        raise ToolUnavailableError(
            f"depot_tools is not available: {exc}",
            hint=f"Install depot_tools first: {DEPOT_TOOLS_HINT_URL}",
        ) from exc
    typer.echo()


def checkout_devtools_frontend(
    checkout_path: Path,
    branch: str,
    repo_url: str = DEVTOOLS_FRONTEND_REPO_URL,
) -> None:
    """Shallow-clone ``branch`` and then fetch commit history without blobs."""
    typer.echo("Checking out devtools-frontend")
    checkout_path.mkdir(parents=True, exist_ok=True)
    run_cmd(
        "git",
        [
            "clone",
            repo_url,
            "--branch",
            branch,
            "--single-branch",
            "--depth",
            "1",
            str(checkout_path),
        ],
    )
    # History only, for the changelog.
    run_cmd("git", ["fetch", "--all", "--unshallow", "--filter=blob:none"], cwd=checkout_path)
    typer.echo()


def resolve_checkout(
    scratch_path: Path,
    local_checkout_path: Path | None,
    branch: str,
    repo_url: str = DEVTOOLS_FRONTEND_REPO_URL,
    checkout_name: str = "devtools-frontend",
) -> CheckoutResult:
    """Use an existing checkout as-is, or clone a fresh one into scratch."""
    if local_checkout_path is not None:
        return CheckoutResult(checkout_path=local_checkout_path, is_local_checkout=True)

    scratch_checkout_path = scratch_path / checkout_name
    scratch_path.mkdir(parents=True, exist_ok=True)
    checkout_devtools_frontend(scratch_checkout_path, branch, repo_url=repo_url)
    return CheckoutResult(checkout_path=scratch_checkout_path, is_local_checkout=False)
