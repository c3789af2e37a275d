"""User-facing commands: save, diff, view and status."""

from .diff import diff_working_tree
from .launcher import launch_diff_tool
from .reporter import ConsoleReporter, Reporter
from .save import save_patch
from .status import show_status
from .view import view_patch

__all__ = [
    "ConsoleReporter",
    "Reporter",
    "launch_diff_tool",
    "diff_working_tree",
    "save_patch",
    "show_status",
    "view_patch",
]
