"""Pydantic models passed between the stages of a sync run."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Stage(str, Enum):
    CHECK_TOOLS = "check-tools"
    DIFF_BASELINE = "diff-baseline"
    CHECKOUT = "checkout"
    CONFIGURE_WORKSPACE = "configure-workspace"
    BUILD = "build"
    INSTALL_ARTIFACTS = "install-artifacts"
    RECORD_PROVENANCE = "record-provenance"
    CREATE_DIFF = "create-diff"
    CLEANUP = "cleanup"


class RunOptions(BaseModel):
    """Parsed command-line options; immutable for the whole run."""

    model_config = ConfigDict(frozen=True)

    branch: str | None = None
    local_checkout_path: Path | None = None
    keep_scratch: bool = False
    nohooks: bool = False
    create_diff: bool = False
    no_build: bool = False


class GclientSyncOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    nohooks: bool = False


class CheckoutResult(BaseModel):
    checkout_path: Path
    is_local_checkout: bool


class BuildResult(BaseModel):
    build_path: Path
    gn_args_summary: str


class BuildInfo(BaseModel):
    """Everything recorded in a BUILD_INFO file for one run."""

    git_revision: str = Field(pattern=r"^[0-9a-f]{40}$")
    is_local_checkout: bool
    branch: str = ""
    nohooks: bool = False
    gn_args_summary: str
    git_status: str = ""
    remote_url: str | None = None
    hostname: str | None = None
    user: str | None = None
    no_build: bool = False


class ParsedBuildInfo(BaseModel):
    """The fields read back from an existing BUILD_INFO file."""

    git_revision: str
    is_local_checkout: bool


class DiffBaseInfo(BaseModel):
    package_path: Path
    base_git_revision: str


class ChangelogEntry(BaseModel):
    """One first-parent commit between two synced revisions."""

    short_hash: str
    author_name: str
    author_email: str
    timestamp: str
    subject: str


class SyncOutcome(BaseModel):
    scratch_path: Path
    checkout_path: Path
    completed_stages: list[Stage] = Field(default_factory=list)
    diff_created: bool = False
