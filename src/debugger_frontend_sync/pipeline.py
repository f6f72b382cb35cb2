"""Linear sync pipeline: checkout, build, install, record, and optionally diff."""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import typer

from debugger_frontend_sync.build import NOT_BUILT, perform_release_build
from debugger_frontend_sync.build_info import generate_build_info
from debugger_frontend_sync.checkout import check_required_tools, resolve_checkout
from debugger_frontend_sync.config import SyncConfig
from debugger_frontend_sync.console import echo_banner, echo_dim, echo_step
from debugger_frontend_sync.diff import check_can_create_diff, create_sync_diff
from debugger_frontend_sync.errors import StageError, SyncError, UsageError
from debugger_frontend_sync.installer import (
    clean_package_files,
    copy_frontend_files_to_package,
    copy_license_to_package,
    remove_path,
)
from debugger_frontend_sync.models import (
    BuildResult,
    GclientSyncOptions,
    RunOptions,
    Stage,
    SyncOutcome,
)
from debugger_frontend_sync.workspace import setup_gclient_workspace

SCRATCH_PREFIX = "debugger-frontend-build-"
DIST_SUBDIR = Path("dist") / "third-party"

T = TypeVar("T")


def validate_options(options: RunOptions) -> None:
    if options.branch is None and not options.local_checkout_path:
        raise UsageError("Missing option --branch")


def planned_stages(options: RunOptions) -> list[Stage]:
    """Return the stages a run with ``options`` will attempt, in order."""
    stages = [Stage.CHECK_TOOLS]
    if options.create_diff:
        stages.append(Stage.DIFF_BASELINE)
    stages.append(Stage.CHECKOUT)
    if not options.no_build:
        stages.extend([Stage.CONFIGURE_WORKSPACE, Stage.BUILD, Stage.INSTALL_ARTIFACTS])
    stages.append(Stage.RECORD_PROVENANCE)
    if options.create_diff:
        stages.append(Stage.CREATE_DIFF)
    stages.append(Stage.CLEANUP)
    return stages


def install_artifacts(build: BuildResult, checkout_path: Path, package_path: Path) -> list[Path]:
    dest_path_in_package = package_path / DIST_SUBDIR
    clean_package_files(dest_path_in_package)
    copied = copy_frontend_files_to_package(build.build_path, dest_path_in_package)
    copied.append(copy_license_to_package(checkout_path, dest_path_in_package))
    return copied


def cleanup(scratch_path: Path, keep_scratch: bool) -> None:
    if keep_scratch:
        typer.echo("Not cleaning up temporary files because of --keep-scratch\n")
        return
    typer.echo("Cleaning up temporary files\n")
    remove_path(scratch_path)


class _StageRunner:
    """Runs stages in order, recording completions and tagging failures."""

    def __init__(self, stages: list[Stage]):
        self.stages = stages
        self.completed: list[Stage] = []

    def run(self, stage: Stage, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        echo_step(self.stages.index(stage) + 1, len(self.stages), stage.value)
        try:
            result = fn(*args, **kwargs)
        except (SyncError, OSError, ValueError) as exc:
            raise StageError(stage.value, exc, [done.value for done in self.completed]) from exc
        self.completed.append(stage)
        return result


def run_sync(options: RunOptions, config: SyncConfig, scratch_path: Path | None = None) -> SyncOutcome:
    """Run every stage planned for ``options``.

    Args:
        options: Parsed command-line options.
        config: Repository URL, package location, and review templates.
        scratch_path: Existing scratch directory; a fresh one is created when
            ``None``.

    Returns:
        The scratch and checkout paths together with the completed stages.

    Raises:
        UsageError: If neither a branch nor a local checkout was given. No
            side effects have happened in that case.
        StageError: If a stage fails. Later stages, including cleanup, are
            not attempted and earlier side effects stay on disk.
    """
    validate_options(options)

    echo_banner("Syncing debugger-frontend" + (" (--no-build)" if options.no_build else ""))
    if scratch_path is None:
        scratch_path = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX))
    echo_dim(f"Scratch path: {scratch_path}\n")

    runner = _StageRunner(planned_stages(options))
    package_path = config.package_path
    branch = options.branch or ""

    runner.run(Stage.CHECK_TOOLS, check_required_tools)

    diff_base_info = None
    if options.create_diff:
        diff_base_info = runner.run(Stage.DIFF_BASELINE, check_can_create_diff, package_path, config)

    checkout = runner.run(
        Stage.CHECKOUT,
        resolve_checkout,
        scratch_path,
        options.local_checkout_path,
        branch,
        repo_url=config.repo_url,
        checkout_name=config.checkout_name,
    )

    gn_args_summary = NOT_BUILT
    if not options.no_build:
        runner.run(
            Stage.CONFIGURE_WORKSPACE,
            setup_gclient_workspace,
            scratch_path,
            checkout.checkout_path,
            GclientSyncOptions(nohooks=options.nohooks),
            checkout_name=config.checkout_name,
        )
        build = runner.run(Stage.BUILD, perform_release_build, checkout.checkout_path)
        gn_args_summary = build.gn_args_summary
        runner.run(Stage.INSTALL_ARTIFACTS, install_artifacts, build, checkout.checkout_path, package_path)

    runner.run(
        Stage.RECORD_PROVENANCE,
        generate_build_info,
        checkout.checkout_path,
        package_path,
        branch=branch,
        is_local_checkout=checkout.is_local_checkout,
        nohooks=options.nohooks,
        gn_args_summary=gn_args_summary,
        no_build=options.no_build,
        remote_url=config.repo_url,
    )

    if diff_base_info is not None:
        runner.run(
            Stage.CREATE_DIFF,
            create_sync_diff,
            diff_base_info,
            scratch_path,
            checkout.checkout_path,
            config,
            no_build=options.no_build,
        )

    runner.run(Stage.CLEANUP, cleanup, scratch_path, options.keep_scratch)

    return SyncOutcome(
        scratch_path=scratch_path,
        checkout_path=checkout.checkout_path,
        completed_stages=runner.completed,
        diff_created=diff_base_info is not None,
    )
