import logging
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from eyepatch.exceptions import (
    GitCommandError,
    NotARepositoryError,
    ParentCommitNotFoundError,
)
from eyepatch.util.process import CommandResult, run_command

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SEC = 60

CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


class ChangeKind(StrEnum):
    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    RENAMED = "Renamed"
    COPIED = "Copied"
    TYPE_CHANGED = "TypeChanged"
    UNKNOWN = "Unknown"


_CHANGE_LETTERS = {
    "A": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    "C": ChangeKind.COPIED,
    "T": ChangeKind.TYPE_CHANGED,
}


class StatusEntry(BaseModel):
    """One line of `git status --porcelain` (XY = index, worktree)."""

    path: str
    index_status: str
    worktree_status: str

    @property
    def code(self) -> str:
        return self.index_status + self.worktree_status

    @property
    def is_conflicted(self) -> bool:
        return self.code in CONFLICT_CODES

    @property
    def is_untracked(self) -> bool:
        return self.code == "??"

    @property
    def modified_in_worktree(self) -> bool:
        return self.worktree_status == "M"

    @property
    def deleted_from_worktree(self) -> bool:
        return self.worktree_status == "D"

    @property
    def modified_in_index(self) -> bool:
        return self.index_status == "M"

    @property
    def deleted_from_index(self) -> bool:
        return self.index_status == "D"


def _git(
    cmd_name: str,
    args: list[str],
    repo_dir: Path,
    check: bool = True,
) -> CommandResult:
    cmd = ["git", *args]
    result = run_command(
        cmd_name=cmd_name,
        cmd=cmd,
        timeout=GIT_TIMEOUT_SEC,
        cwd=repo_dir,
    )
    if check and result.exit_code != 0:
        raise GitCommandError(cmd, result.exit_code, result.stderr)
    return result


def discover_repository(start: Path) -> Path:
    """Return the top-level directory of the repository containing `start`."""
    result = _git(
        "git_toplevel", ["rev-parse", "--show-toplevel"], Path(start), check=False
    )
    if result.exit_code != 0:
        raise NotARepositoryError(Path(start))
    return Path(result.stdout.strip())


def current_branch(repo_dir: Path) -> str:
    result = _git("git_branch", ["rev-parse", "--abbrev-ref", "HEAD"], repo_dir)
    return result.stdout.strip()


def merge_base(repo_dir: Path, base_ref: str, head_ref: str = "HEAD") -> str:
    """Commit where `head_ref` diverged from `base_ref`."""
    result = _git(
        "git_merge_base", ["merge-base", head_ref, base_ref], repo_dir, check=False
    )
    sha = result.stdout.strip()
    if result.exit_code != 0 or not sha:
        raise ParentCommitNotFoundError(base_ref)
    return sha


def lookup_blob_content(repo_dir: Path, blob_hash: str) -> str | None:
    """Resolve an (abbreviated) blob hash to its text, or None if unknown."""
    if not blob_hash:
        return None
    result = _git(
        "git_cat_file", ["cat-file", "blob", blob_hash], repo_dir, check=False
    )
    if result.exit_code != 0:
        logger.debug("Blob %s not found: %s", blob_hash, result.stderr.strip())
        return None
    return result.stdout


def show_file_at(repo_dir: Path, commit: str, path: str) -> str | None:
    result = _git("git_show", ["show", f"{commit}:{path}"], repo_dir, check=False)
    if result.exit_code != 0:
        logger.debug("%s not present at %s", path, commit)
        return None
    return result.stdout


def diff_against(repo_dir: Path, commit: str) -> str:
    """Unified diff of the index and working tree against `commit`."""
    return _git("git_diff", ["diff", commit], repo_dir).stdout


def changed_files(repo_dir: Path, commit: str) -> dict[str, ChangeKind]:
    """Committed, staged and unstaged changes since `commit`, keyed by path."""
    result = _git("git_diff_names", ["diff", "--name-status", commit], repo_dir)

    changes: dict[str, ChangeKind] = {}
    for line in result.stdout.splitlines():
        parts = line.split("\t")
        if len(parts) < 2:
            continue
        kind = _CHANGE_LETTERS.get(parts[0][:1], ChangeKind.UNKNOWN)
        changes[parts[-1]] = kind
    return changes


def changed_paths_between(repo_dir: Path, from_ref: str, to_ref: str) -> set[str]:
    result = _git(
        "git_diff_between",
        ["diff", "--name-only", from_ref, to_ref],
        repo_dir,
        check=False,
    )
    if result.exit_code != 0:
        logger.debug("Could not compare %s..%s: %s", from_ref, to_ref, result.stderr)
        return set()
    return {line for line in result.stdout.splitlines() if line}


def status_entries(repo_dir: Path) -> list[StatusEntry]:
    result = _git("git_status", ["status", "--porcelain"], repo_dir)

    entries: list[StatusEntry] = []
    for line in result.stdout.splitlines():
        if len(line) < 4:
            continue
        path = line[3:]
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        entries.append(
            StatusEntry(path=path, index_status=line[0], worktree_status=line[1])
        )
    return entries
