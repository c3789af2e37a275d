import logging
import re

from eyepatch.patching.models import Delete, HunkHeader, Insert, Keep, Operation
from eyepatch.patching.parser import split_lines

logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

NO_NEWLINE_MARKER = "\\ No newline at end of file"


class HunkHeaderError(ValueError):
    def __init__(self, header: str, line_number: int):
        self.header = header
        self.line_number = line_number
        super().__init__(
            f"Malformed hunk header at diff line {line_number}: {header!r}"
        )


def parse_hunk_header(line: str, line_number: int = 1) -> HunkHeader:
    """Parse `@@ -N[,M] +N[,M] @@`. Omitted counts default to 1."""
    match = HUNK_HEADER_RE.match(line)
    if match is None:
        raise HunkHeaderError(line, line_number)

    base_start, base_count, target_start, target_count = match.groups()
    return HunkHeader(
        base_start=int(base_start),
        base_count=int(base_count) if base_count is not None else 1,
        target_start=int(target_start),
        target_count=int(target_count) if target_count is not None else 1,
    )


def classify_line(line: str) -> Operation:
    if line.startswith("-"):
        return Delete()
    if line.startswith("+"):
        return Insert(line[1:])
    return Keep()


def collect_operations(diff_content: str) -> dict[int, list[Operation]]:
    """
    Queue inserts and deletes by absolute, zero-based base line index.

    Every hunk's minus-side start addresses the untouched base file, so the
    index is reset from each header and no running offset is carried between
    hunks. A start of 0 (insertion before the first line) keeps the current
    index instead of going negative.
    """

    queued: dict[int, list[Operation]] = {}
    current_index = 0

    for line_number, line in enumerate(split_lines(diff_content), start=1):
        if line.startswith("@@"):
            header = parse_hunk_header(line, line_number)
            if header.base_start != 0:
                current_index = header.base_start - 1
            continue
        if line.startswith(NO_NEWLINE_MARKER):
            continue

        operation = classify_line(line)
        if isinstance(operation, Keep):
            current_index += 1
            continue

        queued.setdefault(current_index, []).append(operation)
        if isinstance(operation, Delete):
            current_index += 1

    return queued


def apply_hunks(base_content: str, diff_content: str, newline: str = "\n") -> str:
    """
    Apply one file's hunk text (as found in `PatchRecord.diff_content`) to
    its base content and return the patched text joined with `newline`.

    Raises:
        HunkHeaderError: If an `@@` line is not a numeric hunk header.
    """

    base_lines = split_lines(base_content)
    queued = collect_operations(diff_content)

    patched: list[str] = []
    current_index = 0

    while current_index < len(base_lines) or current_index in queued:
        operations = queued.pop(current_index, [])
        patched.extend(op.text for op in operations if isinstance(op, Insert))

        deleted = any(isinstance(op, Delete) for op in operations)
        if not deleted and current_index < len(base_lines):
            patched.append(base_lines[current_index])

        current_index += 1

    if queued:
        logger.warning(
            "Dropped operations queued past the end of the base file at lines %s",
            sorted(index + 1 for index in queued),
        )

    return newline.join(patched)
