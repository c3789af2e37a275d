import logging
from collections.abc import Callable
from pathlib import Path

from eyepatch.commands.launcher import DiffLauncher, launch_diff_tool, temp_folder
from eyepatch.commands.reporter import Reporter
from eyepatch.exceptions import (
    BlobNotFoundError,
    EyePatchError,
    PatchApplyError,
    PatchFileNotFoundError,
)
from eyepatch.patching import HunkHeaderError, PatchRecord, apply_hunks, parse_diff_document
from eyepatch.settings import Settings
from eyepatch.util.git import lookup_blob_content

logger = logging.getLogger(__name__)

BlobLookup = Callable[[Path, str], str | None]


def flatten_path(file_path: str) -> str:
    return file_path.replace("/", "_").replace("\\", "_") or "unnamed"


def work_file_name(index: int, file_path: str) -> str:
    """
    Name for a copy of `file_path` inside a flat temp folder. The index
    keeps paths that flatten alike (`a/b_c`, `a_b/c`) apart.
    """
    return f"{index}_{flatten_path(file_path)}"


def read_patch_file(patch_path: Path | str | None) -> str:
    if not patch_path:
        raise EyePatchError("A patch file path is required.")
    patch_path = Path(patch_path)
    if not patch_path.is_file():
        raise PatchFileNotFoundError(patch_path)
    # bytes first so CRLF patches keep their line endings
    return patch_path.read_bytes().decode("utf-8", errors="replace")


def materialize_record(
    index: int,
    record: PatchRecord,
    base_content: str,
    work_dir: Path,
    newline: str,
) -> tuple[Path, Path]:
    """Write the base and patched versions of one file, return both paths."""
    try:
        patched_content = apply_hunks(base_content, record.diff_content, newline)
    except HunkHeaderError as e:
        raise PatchApplyError(record.base_file_path, e) from e

    flat_name = work_file_name(index, record.base_file_path)
    base_path = work_dir / flat_name
    patched_path = work_dir / f"patched_{flat_name}"
    base_path.write_text(base_content, encoding="utf-8", newline="")
    patched_path.write_text(patched_content, encoding="utf-8", newline="")
    return base_path, patched_path


def view_patch(
    patch_path: Path | str | None,
    settings: Settings,
    reporter: Reporter,
    repo_dir: Path,
    launcher: DiffLauncher = launch_diff_tool,
    blob_lookup: BlobLookup = lookup_blob_content,
) -> int | None:
    """
    Show a saved patch in the diff tool: every file's base blob next to the
    base with the patch applied. Returns the diff tool's exit code, or None
    when there was nothing to show.
    """

    records = parse_diff_document(read_patch_file(patch_path))
    if not records:
        reporter.warning("No file patches found in the patch file.")
        return None

    with temp_folder(prefix="EyePatch-View-") as work_dir:
        pairs: list[tuple[Path, Path]] = []

        for index, record in enumerate(records):
            base_content = blob_lookup(repo_dir, record.base_index)
            if base_content is None:
                error = BlobNotFoundError(record.base_file_path, record.base_index)
                logger.warning("%s", error)
                reporter.error(str(error))
                continue

            reporter.info(record.base_file_path)
            pairs.append(
                materialize_record(
                    index, record, base_content, work_dir, settings.newline
                )
            )

        if not pairs:
            reporter.warning("No base files could be resolved; nothing to show.")
            return None

        reporter.success("\nAll done. Waiting on diff window to close...")
        return launcher(settings, work_dir, pairs)
