"""Exception hierarchy for the sync pipeline."""

from __future__ import annotations


class SyncError(Exception):
    """Base error carrying an optional remediation hint for the user."""

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.hint = hint


class UsageError(SyncError):
    """Invalid or missing command-line arguments."""


class ToolUnavailableError(SyncError):
    """A required external tool is missing from ``PATH``."""


class CommandError(SyncError):
    """An external command could not be spawned or did not exit cleanly."""

    def __init__(
        self,
        command: list[str],
        reason: str,
        returncode: int | None = None,
        signal_name: str | None = None,
    ):
        super().__init__(f"Command failed ({' '.join(command)}): {reason}")
        self.command = command
        self.returncode = returncode
        self.signal_name = signal_name


class DiffPreconditionError(SyncError):
    """The package cannot be committed and submitted for review."""


class BuildInfoError(SyncError):
    """BUILD_INFO is missing or does not contain the expected fields."""


class ManifestError(SyncError):
    """The build manifest is not a JSON list of relative paths."""


class SigningError(SyncError):
    """Signed content is missing its signature or signing token."""


class StageError(SyncError):
    """A pipeline stage failed; later stages were not attempted."""

    def __init__(self, stage: str, cause: BaseException, completed: list[str]):
        hint = cause.hint if isinstance(cause, SyncError) else None
        super().__init__(f"Stage '{stage}' failed: {cause}", hint=hint)
        self.stage = stage
        self.cause = cause
        self.completed = completed
