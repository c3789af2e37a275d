import logging
import subprocess
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124
NOT_FOUND_EXIT_CODE = 127


class CommandResult(BaseModel):
    exit_code: int
    stdout: str = ""
    stderr: str = ""


def _decode(data: bytes | str | None) -> str:
    if not data:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def run_command(
    cmd_name: str,
    cmd: list[str],
    timeout: int,
    cwd: Path | None = None,
) -> CommandResult:
    """
    Run `cmd` and capture its output as text.

    Returns exit code 124 when the command times out and 127 when the
    executable cannot be found, mirroring the shell conventions.
    """

    logger.debug("Running %s: %s (cwd=%s)", cmd_name, cmd, cwd)

    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss", cmd_name, timeout)
        return CommandResult(
            exit_code=TIMEOUT_EXIT_CODE,
            stderr=f"{cmd_name} timed out after {timeout} seconds",
        )
    except FileNotFoundError as e:
        logger.warning("%s could not start: %s", cmd_name, e)
        return CommandResult(exit_code=NOT_FOUND_EXIT_CODE, stderr=str(e))

    # decoded by hand: text mode would fold CRLF in blob content
    result = CommandResult(
        exit_code=completed.returncode,
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
    )
    logger.debug("%s exited with %d", cmd_name, result.exit_code)
    return result
