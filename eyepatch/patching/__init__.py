"""Unified-diff parsing and hunk application."""

from .applier import (
    HunkHeaderError,
    apply_hunks,
    classify_line,
    collect_operations,
    parse_hunk_header,
)
from .models import Delete, HunkHeader, Insert, Keep, Operation, PatchRecord
from .parser import parse_diff_document, split_lines

__all__ = [
    "PatchRecord",
    "HunkHeader",
    "Operation",
    "Keep",
    "Insert",
    "Delete",
    "HunkHeaderError",
    "parse_diff_document",
    "split_lines",
    "parse_hunk_header",
    "classify_line",
    "collect_operations",
    "apply_hunks",
]
