"""Markdown changelog between two synced devtools-frontend revisions."""

from __future__ import annotations

from pathlib import Path

import typer

from debugger_frontend_sync.config import SyncConfig
from debugger_frontend_sync.models import ChangelogEntry
from debugger_frontend_sync.process import git_output

# NUL-separated so subjects containing pipes survive parsing.
LOG_FORMAT = "%h%x00%an%x00%ae%x00%aI%x00%s"


def parse_git_log(output: str) -> list[ChangelogEntry]:
    entries: list[ChangelogEntry] = []
    # Records are newline-separated; subjects may contain other line breaks.
    for line in output.split("\n"):
        if not line.strip():
            continue
        short_hash, author_name, author_email, timestamp, subject = line.split("\x00", maxsplit=4)
        entries.append(
            ChangelogEntry(
                short_hash=short_hash,
                author_name=author_name,
                author_email=author_email,
                timestamp=timestamp,
                subject=subject,
            )
        )
    return entries


def list_first_parent_commits(checkout_path: Path, base_revision: str, new_revision: str) -> list[ChangelogEntry]:
    """Return commits in ``base..new`` on the first-parent path, newest first."""
    output = git_output(
        checkout_path,
        ["log", "--first-parent", f"--pretty=format:{LOG_FORMAT}", f"{base_revision}..{new_revision}"],
    )
    return parse_git_log(output)


def format_author(entry: ChangelogEntry, internal_email_domain: str) -> str:
    if internal_email_domain and entry.author_email.endswith(internal_email_domain):
        handle = entry.author_email[: -len(internal_email_domain)]
        return f"{entry.author_name} (@{handle})"
    return f"{entry.author_name} ({entry.author_email})"


def format_row(entry: ChangelogEntry, repo_url: str, internal_email_domain: str) -> str:
    commit_url = f"{repo_url}/commit/{entry.short_hash}"
    subject = entry.subject.replace("|", "\\|")
    return (
        f"| [{entry.short_hash}]({commit_url}) "
        f"| {format_author(entry, internal_email_domain)} "
        f"| {entry.timestamp} "
        f"| [{subject}]({commit_url}) |"
    )


def format_truncation_row(remaining: int, template: str) -> str:
    noun = "commit" if remaining == 1 else "commits"
    return f"| ... | ... | ... | ... | {template.format(count=remaining, noun=noun)} |"


def format_changelog_table(entries: list[ChangelogEntry], config: SyncConfig) -> str:
    """Render ``entries`` as a Markdown table; empty input renders as ``""``."""
    if not entries:
        return ""
    limit = config.max_changelog_rows
    rows = [
        "",
        "### Changelog",
        "",
        "| Commit | Author | Date/Time | Subject |",
        "| ------ | ------ | --------- | ------- |",
    ]
    rows.extend(format_row(entry, config.repo_url, config.internal_email_domain) for entry in entries[:limit])
    if len(entries) > limit:
        rows.append(format_truncation_row(len(entries) - limit, config.truncation_template))
    return "\n".join(rows)


def generate_changelog_table(
    checkout_path: Path,
    base_revision: str,
    new_revision: str,
    config: SyncConfig,
) -> str:
    typer.echo("Generating changelog table")
    entries = list_first_parent_commits(checkout_path, base_revision, new_revision)
    return format_changelog_table(entries, config)
