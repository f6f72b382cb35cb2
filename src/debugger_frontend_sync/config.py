"""Process-wide settings for syncing the debugger frontend package."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEVTOOLS_FRONTEND_REPO_URL = "https://github.com/facebook/react-native-devtools-frontend"
DEPOT_TOOLS_HINT_URL = (
    "https://commondatastorage.googleapis.com/chrome-infra-docs/flat/depot_tools/"
    "docs/html/depot_tools_tutorial.html#_setting_up"
)
PACKAGES_DIR_ENV = "DEBUGGER_FRONTEND_SYNC_PACKAGES_DIR"
DEFAULT_PACKAGES_DIR = Path("packages")


class SyncConfig(BaseModel):
    """Settings shared by every stage of a sync run."""

    repo_url: str = DEVTOOLS_FRONTEND_REPO_URL
    packages_dir: Path = DEFAULT_PACKAGES_DIR
    package_name: str = "debugger-frontend"
    checkout_name: str = "devtools-frontend"
    project_id: str = "fbsource"
    internal_email_domain: str = "@meta.com"
    max_changelog_rows: int = Field(default=50, ge=1)
    truncation_template: str = "{count} more {noun} not shown"
    commit_title_template: str = "[RN] Update debugger-frontend from {base}...{new}"
    reviewers: str = "#rn-debugging"
    tags: str = "msdkland[metro]"
    test_plan: str = "CI"

    @property
    def package_path(self) -> Path:
        return self.packages_dir / self.package_name


def resolve_packages_dir(default: Path = DEFAULT_PACKAGES_DIR) -> Path:
    """Resolve the monorepo ``packages`` directory.

    Resolution order:
    1. ``DEBUGGER_FRONTEND_SYNC_PACKAGES_DIR`` environment variable.
    2. ``default`` relative to the current directory.
    """
    override = (os.getenv(PACKAGES_DIR_ENV) or "").strip()
    if override:
        return Path(override).expanduser()
    return default


def load_config() -> SyncConfig:
    return SyncConfig(packages_dir=resolve_packages_dir())
