import logging
from pathlib import Path

import typer
from dotenv import load_dotenv

from eyepatch.commands import (
    ConsoleReporter,
    diff_working_tree,
    save_patch,
    show_status,
    view_patch,
)
from eyepatch.exceptions import EyePatchError
from eyepatch.logging import LOGGER_NAME, setup_logging
from eyepatch.settings import Settings
from eyepatch.util.git import discover_repository

app = typer.Typer(no_args_is_help=True)

logger = logging.getLogger(__name__)


def _load_settings() -> Settings:
    return Settings.load()


def _fail(error: EyePatchError) -> None:
    logger.debug("Command failed", exc_info=error)
    ConsoleReporter().error(str(error))
    raise typer.Exit(code=1)


@app.command("save")
def save_cmd(
    name: str | None = typer.Option(
        None, "--name", "-n", help="Optional name for the patch file."
    ),
):
    """Save the branch's changes as a timestamped patch file."""
    try:
        repo_dir = discover_repository(Path.cwd())
        save_patch(_load_settings(), ConsoleReporter(), repo_dir, name=name)
    except EyePatchError as e:
        _fail(e)


@app.command("diff")
def diff_cmd():
    """Compare the working tree with the branch's merge base in the diff tool."""
    try:
        repo_dir = discover_repository(Path.cwd())
        diff_working_tree(_load_settings(), ConsoleReporter(), repo_dir)
    except EyePatchError as e:
        _fail(e)


@app.command("view")
def view_cmd(
    patch_file: Path = typer.Argument(..., help="Patch file written by `save`."),
):
    """Apply a saved patch to its base blobs and show the result in the diff tool."""
    try:
        repo_dir = discover_repository(Path.cwd())
        view_patch(patch_file, _load_settings(), ConsoleReporter(), repo_dir)
    except EyePatchError as e:
        _fail(e)


@app.command("status")
def status_cmd():
    """List working tree changes, flagging likely conflicts."""
    try:
        repo_dir = discover_repository(Path.cwd())
        show_status(_load_settings(), ConsoleReporter(), repo_dir)
    except EyePatchError as e:
        _fail(e)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """
    EyePatch CLI
    """
    load_dotenv()
    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger(LOGGER_NAME)
    if package_logger.handlers:
        package_logger.setLevel(level)
    else:
        setup_logging(level=level)
