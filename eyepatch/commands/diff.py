import logging
from pathlib import Path

from eyepatch.commands.launcher import DiffLauncher, launch_diff_tool, temp_folder
from eyepatch.commands.reporter import Reporter
from eyepatch.commands.view import work_file_name
from eyepatch.exceptions import EyePatchError
from eyepatch.settings import Settings
from eyepatch.util.git import (
    ChangeKind,
    changed_files,
    current_branch,
    merge_base,
    show_file_at,
)

logger = logging.getLogger(__name__)

DIFFABLE_KINDS = {ChangeKind.MODIFIED, ChangeKind.ADDED, ChangeKind.DELETED}


def files_identical(current_path: Path, original_content: str) -> bool:
    if not current_path.is_file():
        return False
    current = current_path.read_bytes().decode("utf-8", errors="replace")
    return current == original_content


def diff_working_tree(
    settings: Settings,
    reporter: Reporter,
    repo_dir: Path,
    launcher: DiffLauncher = launch_diff_tool,
) -> int | None:
    """
    Open every file changed since the branch left `settings.base_branch`
    in the diff tool, base version on the left, working copy on the right.
    """

    reporter.info(f"Current Branch: {current_branch(repo_dir)}")
    parent = merge_base(repo_dir, settings.base_branch)
    reporter.info(f"Parent Commit: {parent}")

    changes = changed_files(repo_dir, parent)
    if not changes:
        reporter.warning("No changes to diff.")
        return None

    reporter.info(f"\nFiles ({len(changes)}):\n")

    with temp_folder() as work_dir:
        pairs: list[tuple[Path, Path]] = []

        for index, (path, kind) in enumerate(changes.items()):
            if kind not in DIFFABLE_KINDS:
                continue
            reporter.info(f"{path} ({kind})")

            try:
                original = show_file_at(repo_dir, parent, path)
                if original is None:
                    reporter.warning(f"Skipping {path}, as no original version found.")
                    continue

                current_path = repo_dir / path
                if files_identical(current_path, original):
                    reporter.warning(
                        f"Skipping {path} as it is identical (changes were reverted)."
                    )
                    continue

                base_path = work_dir / work_file_name(index, path)
                base_path.write_text(original, encoding="utf-8", newline="")
            except OSError as e:
                raise EyePatchError(f"Error processing diff for {path}: {e}") from e

            pairs.append((base_path, current_path))

        if not pairs:
            reporter.warning("Nothing to show.")
            return None

        logger.debug("Diffing %d files against %s", len(pairs), parent)
        reporter.success("\nAll done. Waiting on diff window to close...")
        return launcher(settings, work_dir, pairs)
