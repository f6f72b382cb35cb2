"""Write and read the signed BUILD_INFO provenance file."""

from __future__ import annotations

import getpass
import re
import socket
from pathlib import Path

import typer

from debugger_frontend_sync.config import DEVTOOLS_FRONTEND_REPO_URL
from debugger_frontend_sync.errors import BuildInfoError
from debugger_frontend_sync.models import BuildInfo, ParsedBuildInfo
from debugger_frontend_sync.process import git_output
from debugger_frontend_sync.signing import get_signing_token, sign_file

BUILD_INFO_NAME = "BUILD_INFO"
GIT_REV_RE = re.compile(r"^Git revision: ([0-9a-f]{40})", re.MULTILINE)
REMOTE_CHECKOUT_RE = re.compile(r"^Is local checkout: false$", re.MULTILINE)
NO_BUILD_MARKER = "--no-build @" + "nocommit"


def _indent(lines: list[str], placeholder: str) -> list[str]:
    indented = ["  " + line.strip() for line in lines if line.strip()]
    return indented or [f"  {placeholder}"]


def render_build_info(info: BuildInfo) -> str:
    """Render the unsigned BUILD_INFO body, starting with the signing token."""
    if info.is_local_checkout:
        origin = [f"Hostname: {info.hostname or ''}", f"User: {info.user or ''}"]
    else:
        origin = [
            f"Remote URL: {info.remote_url or DEVTOOLS_FRONTEND_REPO_URL}",
            f"Remote branch: {info.branch}",
        ]
    lines = [
        get_signing_token(),
        f"Git revision: {info.git_revision}",
        f"Built with --nohooks: {str(info.nohooks).lower()}",
        f"Is local checkout: {str(info.is_local_checkout).lower()}",
        *origin,
        "GN build args (overrides only): ",
        *_indent(info.gn_args_summary.splitlines(), "<none>"),
        "Git status in checkout:",
        *_indent(info.git_status.splitlines(), "<no changes>"),
        "",
    ]
    if info.no_build:
        lines.append(NO_BUILD_MARKER)
    return "\n".join(lines)


def collect_build_info(
    checkout_path: Path,
    *,
    branch: str,
    is_local_checkout: bool,
    nohooks: bool,
    gn_args_summary: str,
    no_build: bool,
    remote_url: str = DEVTOOLS_FRONTEND_REPO_URL,
) -> BuildInfo:
    """Query the checkout and host for everything BUILD_INFO records."""
    return BuildInfo(
        git_revision=git_output(checkout_path, ["rev-parse", "HEAD"]),
        is_local_checkout=is_local_checkout,
        branch=branch,
        nohooks=nohooks,
        gn_args_summary=gn_args_summary,
        git_status=git_output(checkout_path, ["status", "--porcelain"]),
        remote_url=None if is_local_checkout else remote_url,
        hostname=socket.gethostname() if is_local_checkout else None,
        user=getpass.getuser() if is_local_checkout else None,
        no_build=no_build,
    )


def write_build_info(package_path: Path, info: BuildInfo) -> Path:
    package_path.mkdir(parents=True, exist_ok=True)
    target = package_path / BUILD_INFO_NAME
    target.write_text(sign_file(render_build_info(info)), encoding="utf-8")
    return target


def generate_build_info(checkout_path: Path, package_path: Path, **fields) -> Path:
    """Collect, sign, and write BUILD_INFO, replacing any previous file.

    ``fields`` are forwarded to :func:`collect_build_info`.
    """
    typer.echo("Generating BUILD_INFO for debugger-frontend\n")
    info = collect_build_info(checkout_path, **fields)
    return write_build_info(package_path, info)


def parse_build_info(text: str) -> ParsedBuildInfo:
    match = GIT_REV_RE.search(text)
    if match is None:
        raise BuildInfoError("Could not extract git revision from BUILD_INFO")
    return ParsedBuildInfo(
        git_revision=match.group(1),
        is_local_checkout=REMOTE_CHECKOUT_RE.search(text) is None,
    )


def read_build_info(package_path: Path) -> ParsedBuildInfo:
    path = package_path / BUILD_INFO_NAME
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise BuildInfoError(f"BUILD_INFO not found: {path}") from exc
    return parse_build_info(text)
