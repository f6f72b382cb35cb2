"""gclient workspace setup for a devtools-frontend checkout."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.models import GclientSyncOptions
from debugger_frontend_sync.process import inherited_env, run_cmd


def setup_gclient_workspace(
    scratch_path: Path,
    checkout_path: Path,
    options: GclientSyncOptions,
    checkout_name: str = "devtools-frontend",
) -> None:
    """Register the checkout as an unmanaged gclient solution and sync deps."""
    typer.echo("Setting up gclient workspace")
    run_cmd(
        "gclient",
        ["config", "--unmanaged", str(checkout_path), "--name", checkout_name],
        cwd=scratch_path,
    )
    sync_args = ["sync", "--no-history"]
    if options.nohooks:
        sync_args.append("--nohooks")
    run_cmd(
        "gclient",
        sync_args,
        cwd=scratch_path,
        env=inherited_env(DEPOT_TOOLS_UPDATE="0"),
    )
    typer.echo()
