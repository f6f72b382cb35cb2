from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from debugger_frontend_sync import build, build_info, changelog, checkout, diff, workspace
from debugger_frontend_sync.config import SyncConfig
from debugger_frontend_sync.errors import CommandError
from debugger_frontend_sync.models import BuildInfo

REVISION_A = "a" * 40
REVISION_B = "b" * 40


class FakeCommands:
    """Records ``run_cmd`` calls and answers them by command prefix."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self._rules: list[tuple[list[str], str, bool, Callable[..., None] | None]] = []

    def respond(
        self,
        prefix: list[str],
        output: str = "",
        *,
        fail: bool = False,
        effect: Callable[[list[str], dict[str, Any]], None] | None = None,
    ) -> None:
        self._rules.append((prefix, output, fail, effect))

    def __call__(self, cmd: str, args: list[str] | None = None, **kwargs: Any) -> str:
        command = [cmd, *(args or [])]
        self.calls.append((command, kwargs))
        for prefix, output, fail, effect in self._rules:
            if command[: len(prefix)] == prefix:
                if fail:
                    raise CommandError(command, "exit code 1", returncode=1)
                if effect is not None:
                    effect(command, kwargs)
                return output
        return ""

    @property
    def commands(self) -> list[list[str]]:
        return [command for command, _kwargs in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(command[: len(prefix)] == list(prefix) for command in self.commands)


@pytest.fixture
def fake_commands(monkeypatch) -> FakeCommands:
    fake = FakeCommands()
    for module in (checkout, workspace, build, diff):
        monkeypatch.setattr(module, "run_cmd", fake)
    return fake


@pytest.fixture
def git_responses(monkeypatch) -> dict[str, str]:
    """Patch silent git queries; keys are the first git argument."""
    responses = {"rev-parse": REVISION_A, "status": "", "log": ""}

    def fake_git_output(_repo_path: Path, args: list[str]) -> str:
        return responses[args[0]]

    monkeypatch.setattr(build_info, "git_output", fake_git_output)
    monkeypatch.setattr(changelog, "git_output", fake_git_output)
    return responses


@pytest.fixture
def sync_config(tmp_path) -> SyncConfig:
    return SyncConfig(packages_dir=tmp_path / "packages")


@pytest.fixture
def remote_build_info() -> BuildInfo:
    return BuildInfo(
        git_revision=REVISION_A,
        is_local_checkout=False,
        branch="chromium/7000",
        nohooks=False,
        gn_args_summary="is_official_build = true",
        git_status="",
        remote_url="https://github.com/facebook/react-native-devtools-frontend",
    )


@pytest.fixture
def local_checkout(tmp_path) -> Path:
    path = tmp_path / "devtools-frontend"
    path.mkdir()
    (path / "LICENSE").write_text("BSD-style license\n", encoding="utf-8")
    return path


def write_build_output(build_path: Path, files: dict[str, str]) -> None:
    """Create ``gen/`` outputs and the packaging manifest that lists them."""
    gen = build_path / "gen"
    for relative, content in files.items():
        target = gen / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    gen.mkdir(parents=True, exist_ok=True)
    (gen / "input_grd_files.json").write_text(json.dumps(list(files)), encoding="utf-8")
