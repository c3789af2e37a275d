import logging
import shlex
import shutil
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from eyepatch.settings import Settings
from eyepatch.util.process import run_command

logger = logging.getLogger(__name__)

DIFF_FILE_LIST = "diff_file_list.txt"
# the viewer stays open until the user closes it
LAUNCH_TIMEOUT_SEC = 24 * 60 * 60

DiffLauncher = Callable[[Settings, Path, list[tuple[Path, Path]]], int]


def write_pair_list(work_dir: Path, pairs: list[tuple[Path, Path]]) -> Path:
    list_path = Path(work_dir) / DIFF_FILE_LIST
    lines = [f"{left} {right}" for left, right in pairs]
    list_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return list_path


def launch_diff_tool(
    settings: Settings,
    work_dir: Path,
    pairs: list[tuple[Path, Path]],
) -> int:
    """
    Open every (left, right) pair in the configured diff tool at once.

    The pairs are written to a list file in `work_dir` and the tool is run
    as `<diff_app> -I <list file>`. Blocks until the tool exits.
    """

    list_path = write_pair_list(work_dir, pairs)
    cmd = [*shlex.split(settings.diff_app), "-I", str(list_path)]

    logger.info("Launching %s with %d file pairs", settings.diff_app, len(pairs))
    result = run_command(
        cmd_name="diff_tool",
        cmd=cmd,
        timeout=LAUNCH_TIMEOUT_SEC,
        cwd=Path(work_dir),
    )
    if result.exit_code != 0:
        logger.warning(
            "%s exited with %d: %s",
            settings.diff_app,
            result.exit_code,
            result.stderr.strip(),
        )
    return result.exit_code


@contextmanager
def temp_folder(prefix: str = "EyePatch-") -> Iterator[Path]:
    path = Path(tempfile.mkdtemp(prefix=prefix))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
