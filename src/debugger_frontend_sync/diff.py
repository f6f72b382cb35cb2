"""Commit a synced package and submit it for review with a changelog."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.build_info import BUILD_INFO_NAME, parse_build_info, read_build_info
from debugger_frontend_sync.changelog import generate_changelog_table
from debugger_frontend_sync.config import SyncConfig
from debugger_frontend_sync.errors import (
    BuildInfoError,
    CommandError,
    DiffPreconditionError,
    SigningError,
)
from debugger_frontend_sync.models import DiffBaseInfo
from debugger_frontend_sync.process import run_cmd
from debugger_frontend_sync.signing import verify_signature

COMMIT_MESSAGE_NAME = "commit-msg"
SHORT_REV_LENGTH = 7


def _check_source_control(package_path: Path, config: SyncConfig) -> None:
    hint = f"Must be in an {config.project_id} checkout (Meta-only) to create a diff"
    try:
        repo_root = Path(run_cmd("hg", ["root"], cwd=package_path, capture_stdout=True).strip())
        project_id_path = repo_root / ".projectid"
        try:
            project_id = project_id_path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise DiffPreconditionError(f"Cannot read {project_id_path}: {exc}", hint=hint) from exc
        if project_id != config.project_id:
            raise DiffPreconditionError(
                f'Expected .projectid to contain "{config.project_id}" but found: {project_id}',
                hint=hint,
            )
        run_cmd("jf", ["-v"], cwd=package_path, quiet=True)
    except CommandError as exc:
        raise DiffPreconditionError(str(exc), hint=hint) from exc


def check_can_create_diff(package_path: Path, config: SyncConfig) -> DiffBaseInfo:
    """Verify a diff can be created and capture the revision to diff against.

    Runs before any checkout or build work so that a misconfigured
    environment fails immediately.

    Raises:
        DiffPreconditionError: If the package is not in the expected
            source-control checkout, the review tool is missing, or the
            existing BUILD_INFO is modified, missing, unparseable, or has
            a broken signature.
    """
    typer.echo("Checking that we can create a diff")
    _check_source_control(package_path, config)

    hint = "Must have a clean, signed BUILD_INFO file to create a diff"
    try:
        status = run_cmd("hg", ["status", BUILD_INFO_NAME], cwd=package_path, capture_stdout=True)
    except CommandError as exc:
        raise DiffPreconditionError(str(exc), hint=hint) from exc
    if status.strip():
        raise DiffPreconditionError("Must have a clean base BUILD_INFO file to create a diff", hint=hint)

    try:
        text = (package_path / BUILD_INFO_NAME).read_text(encoding="utf-8")
    except OSError as exc:
        raise DiffPreconditionError(f"Cannot read BUILD_INFO: {exc}", hint=hint) from exc
    try:
        parsed = parse_build_info(text)
        signature_ok = verify_signature(text)
    except (BuildInfoError, SigningError) as exc:
        raise DiffPreconditionError(str(exc), hint=hint) from exc
    if not signature_ok:
        raise DiffPreconditionError("BUILD_INFO signature does not match its contents", hint=hint)
    return DiffBaseInfo(package_path=package_path, base_git_revision=parsed.git_revision)


def compose_commit_message(
    base_revision: str,
    new_revision: str,
    changelog_table: str,
    config: SyncConfig,
    *,
    do_not_land: bool = False,
) -> str:
    base_short = base_revision[:SHORT_REV_LENGTH]
    new_short = new_revision[:SHORT_REV_LENGTH]
    title = config.commit_title_template.format(base=base_short, new=new_short)
    if do_not_land:
        title = "DO NOT LAND " + title
    package = f"`@react-native/{config.package_name}`"
    return "\n".join(
        [
            title,
            "",
            "Summary:",
            f"Changelog: [Internal] - Update {package} from {base_short}...{new_short}",
            "",
            f"Resyncs {package} from GitHub - see `rn-chrome-devtools-frontend` "
            f"[changelog]({config.repo_url}/compare/{base_revision}...{new_revision}).",
            "",
            changelog_table,
            "",
            f"Test Plan: {config.test_plan}",
            "",
            f"Reviewers: {config.reviewers}",
            "",
            f"Tags: {config.tags}",
            "",
        ]
    )


def create_sync_diff(
    diff_base_info: DiffBaseInfo,
    scratch_path: Path,
    checkout_path: Path,
    config: SyncConfig,
    *,
    no_build: bool = False,
) -> Path:
    """Commit the package and submit a draft review.

    With ``no_build`` the review is abandoned right after submission.

    Returns:
        Path of the commit message file written to the scratch directory.
    """
    typer.echo("Creating a sync diff")
    package_path = diff_base_info.package_path
    base_revision = diff_base_info.base_git_revision
    new_info = read_build_info(package_path)

    changelog_table = generate_changelog_table(checkout_path, base_revision, new_info.git_revision, config)
    message = compose_commit_message(
        base_revision,
        new_info.git_revision,
        changelog_table,
        config,
        do_not_land=new_info.is_local_checkout or no_build,
    )

    message_path = scratch_path / COMMIT_MESSAGE_NAME
    message_path.write_text(message, encoding="utf-8")
    run_cmd("hg", ["commit", str(package_path), "--addremove", "-l", str(message_path)], cwd=package_path)
    run_cmd("jf", ["submit", "--draft"], cwd=package_path)
    if no_build:
        run_cmd("jf", ["action", "--abandon"], cwd=package_path)
    return message_path
