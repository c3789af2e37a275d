from pathlib import Path

import typer
from pydantic import BaseModel

from eyepatch.commands.reporter import Reporter
from eyepatch.settings import Settings
from eyepatch.util.git import StatusEntry, changed_paths_between, status_entries


class StatusLine(BaseModel):
    path: str
    color: str
    conflict: bool


def classify_entry(entry: StatusEntry, remote_paths: set[str]) -> StatusLine:
    if entry.is_conflicted:
        return StatusLine(path=entry.path, color=typer.colors.MAGENTA, conflict=True)

    color = typer.colors.YELLOW
    if entry.is_untracked:
        color = typer.colors.GREEN
    elif entry.modified_in_worktree:
        color = typer.colors.YELLOW
    elif entry.deleted_from_worktree:
        color = typer.colors.RED

    # staged edits to a file that also moved on the base branch
    if entry.path in remote_paths and (
        entry.modified_in_index or entry.deleted_from_index
    ):
        return StatusLine(path=entry.path, color=typer.colors.MAGENTA, conflict=True)

    return StatusLine(path=entry.path, color=color, conflict=False)


def show_status(
    settings: Settings,
    reporter: Reporter,
    repo_dir: Path,
) -> list[StatusLine]:
    remote_paths = changed_paths_between(repo_dir, "HEAD", settings.base_branch)

    lines = [classify_entry(entry, remote_paths) for entry in status_entries(repo_dir)]
    for line in lines:
        suffix = " (CONFLICT)" if line.conflict else ""
        reporter.entry(f"{line.path}{suffix}", line.color)
    return lines
