"""Release build of a devtools-frontend checkout with gn and autoninja."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.console import echo_dim
from debugger_frontend_sync.models import BuildResult
from debugger_frontend_sync.process import run_cmd

NOT_BUILT = "<not built>"
BUILD_DIR = "out/Release"
# is_official_build only toggles release optimisations, not branding.
GN_ARGS = "is_official_build=true\n"


def write_gn_args(build_path: Path) -> Path:
    build_path.mkdir(parents=True, exist_ok=True)
    args_path = build_path / "args.gn"
    args_path.write_text(GN_ARGS, encoding="utf-8")
    return args_path


def perform_release_build(checkout_path: Path) -> BuildResult:
    """Generate and run the release build.

    Returns:
        The build output directory and the ``gn args --overrides-only``
        summary for BUILD_INFO.
    """
    typer.echo("Performing release build of devtools-frontend")
    build_path = checkout_path / BUILD_DIR
    write_gn_args(build_path)
    run_cmd("gn", ["gen", BUILD_DIR], cwd=checkout_path)
    gn_args_summary = run_cmd(
        "gn",
        ["args", BUILD_DIR, "--list", "--short", "--overrides-only"],
        cwd=checkout_path,
        capture_stdout=True,
    ).strip()
    echo_dim(gn_args_summary)
    run_cmd("autoninja", ["-C", BUILD_DIR], cwd=checkout_path)
    typer.echo()
    return BuildResult(build_path=build_path, gn_args_summary=gn_args_summary)
