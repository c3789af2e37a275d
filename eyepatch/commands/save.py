import logging
from datetime import datetime
from pathlib import Path

from eyepatch.commands.reporter import Reporter
from eyepatch.exceptions import EyePatchError
from eyepatch.patching import parse_diff_document
from eyepatch.settings import Settings
from eyepatch.util.git import current_branch, diff_against, merge_base

logger = logging.getLogger(__name__)


def patch_file_name(name: str, now: datetime) -> str:
    """`<name>.<yyyyMMdd-HHmmss-fff>.patch`, keeping only the last path segment of name."""
    name = name.rsplit("/", 1)[-1]
    timestamp = now.strftime("%Y%m%d-%H%M%S") + f"-{now.microsecond // 1000:03d}"
    return f"{name}.{timestamp}.patch"


def write_and_verify_patch_file(path: Path, content: str, expected_files: int) -> None:
    path.write_bytes(content.encode("utf-8"))

    written = parse_diff_document(path.read_bytes().decode("utf-8"))
    if len(written) != expected_files:
        raise EyePatchError(
            f"Patch file {path} holds {len(written)} files, expected {expected_files}."
        )


def save_patch(
    settings: Settings,
    reporter: Reporter,
    repo_dir: Path,
    name: str | None = None,
    now: datetime | None = None,
) -> Path | None:
    """
    Save the branch's changes since it left `settings.base_branch` as a
    patch file in the patch directory. Returns the file path, or None when
    there was nothing to save.
    """

    branch = current_branch(repo_dir)
    reporter.info(f"Current Branch: {branch}")

    parent = merge_base(repo_dir, settings.base_branch)
    reporter.info(f"Parent Commit: {parent}")

    content = diff_against(repo_dir, parent)
    records = parse_diff_document(content)

    reporter.info(f"\nNumber of files in the patch: {len(records)}")
    if not records:
        reporter.warning("No changes to save.")
        return None

    reporter.info("\nGit Diff:")
    for record in records:
        reporter.info(f"File: {record.base_file_path}")

    patch_path = settings.ensure_patch_directory() / patch_file_name(
        name or branch, now or datetime.now()
    )
    write_and_verify_patch_file(patch_path, content, len(records))
    logger.info("Saved %d file patches to %s", len(records), patch_path)

    reporter.success(f"\nPatch file written: {patch_path}")
    return patch_path
