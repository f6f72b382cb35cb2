"""Synchronous subprocess helpers used by every external tool invocation."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

import typer

from debugger_frontend_sync.console import DIM_CLOSE, DIM_OPEN, supports_color
from debugger_frontend_sync.errors import CommandError


def _describe_signal(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)


def _check_returncode(command: list[str], returncode: int) -> None:
    if returncode < 0:
        name = _describe_signal(-returncode)
        raise CommandError(
            command, f"terminated by signal {name}", returncode=returncode, signal_name=name
        )
    if returncode != 0:
        raise CommandError(command, f"exit code {returncode}", returncode=returncode)


def run_cmd(
    cmd: str,
    args: list[str] | None = None,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    capture_stdout: bool = False,
    quiet: bool = False,
) -> str:
    """Run ``cmd`` to completion and return its captured stdout.

    The command line is echoed first. Output the child writes to the terminal
    is dimmed when the stream supports color.

    Args:
        cmd: Executable name, resolved through ``PATH``.
        args: Arguments passed to the executable.
        cwd: Working directory for the child process.
        env: Full environment for the child; inherits ours when ``None``.
        capture_stdout: Pipe stdout and return it instead of streaming it.
        quiet: Discard both stdout and stderr.

    Returns:
        Captured stdout text, or ``""`` when stdout was not captured.

    Raises:
        CommandError: If the process cannot be spawned, exits non-zero, or is
            killed by a signal.
    """
    command = [cmd, *(args or [])]
    typer.echo(f" > {' '.join(command)}")

    stdout = subprocess.DEVNULL if quiet else (subprocess.PIPE if capture_stdout else None)
    stderr = subprocess.DEVNULL if quiet else None

    dim_stdout = supports_color(sys.stdout)
    dim_stderr = supports_color(sys.stderr)
    if dim_stdout:
        sys.stdout.write(DIM_OPEN)
        sys.stdout.flush()
    if dim_stderr:
        sys.stderr.write(DIM_OPEN)
        sys.stderr.flush()
    try:
        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                env=dict(env) if env is not None else None,
                stdin=subprocess.DEVNULL,
                stdout=stdout,
                stderr=stderr,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CommandError(command, f"could not be spawned: {exc}") from exc
        _check_returncode(command, proc.returncode)
        return proc.stdout or ""
    finally:
        if dim_stdout:
            sys.stdout.write(DIM_CLOSE)
            sys.stdout.flush()
        if dim_stderr:
            sys.stderr.write(DIM_CLOSE)
            sys.stderr.flush()


def git_output(repo_path: Path, args: list[str]) -> str:
    """Run git silently in ``repo_path`` and return stripped stdout."""
    command = ["git", *args]
    try:
        proc = subprocess.run(
            command,
            cwd=str(repo_path),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise CommandError(command, f"could not be spawned: {exc}") from exc
    if proc.returncode != 0:
        stderr = proc.stderr.strip()
        if proc.returncode > 0 and stderr:
            raise CommandError(command, stderr, returncode=proc.returncode)
        _check_returncode(command, proc.returncode)
    return proc.stdout.strip()


def inherited_env(**overrides: str) -> dict[str, str]:
    """Return a copy of the current environment with ``overrides`` applied."""
    return {**os.environ, **overrides}
