import logging
import re
from dataclasses import dataclass, field
from functools import reduce

from eyepatch.patching.models import PatchRecord

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")

DIFF_MARKER = "diff --git "
# dropped everywhere, including a removed line that itself began with "--"
FILE_HEADER_PREFIXES = ("---", "+++")


def split_lines(text: str) -> list[str]:
    """Split on CRLF, CR or LF. A trailing separator leaves a final empty line."""
    return LINE_SPLIT_RE.split(text)


@dataclass
class _OpenSection:
    base_file_path: str
    base_index: str = ""
    content: list[str] = field(default_factory=list)

    def seal(self) -> PatchRecord:
        return PatchRecord(
            base_file_path=self.base_file_path,
            base_index=self.base_index,
            diff_content="".join(f"{line}\n" for line in self.content),
        )


@dataclass
class _ParseState:
    records: list[PatchRecord] = field(default_factory=list)
    section: _OpenSection | None = None

    def sealed(self) -> list[PatchRecord]:
        if self.section is None:
            return self.records
        return [*self.records, self.section.seal()]


def _base_path_from_marker(line: str) -> str:
    parts = line.split()
    if len(parts) < 3:
        return ""
    return parts[2][2:]


def _base_index_from_line(line: str) -> str:
    parts = line.split()
    if len(parts) < 2:
        return ""
    return parts[1].split("..")[0]


def _step(state: _ParseState, line: str) -> _ParseState:
    if line.startswith(DIFF_MARKER):
        if state.section is not None:
            state.records.append(state.section.seal())
        state.section = _OpenSection(base_file_path=_base_path_from_marker(line))
        return state

    if state.section is None:
        return state

    if line.startswith("index"):
        state.section.base_index = _base_index_from_line(line)
    elif not line.startswith(FILE_HEADER_PREFIXES):
        state.section.content.append(line)
    return state


def parse_diff_document(document: str) -> list[PatchRecord]:
    """
    Split a multi-file unified diff (as produced by `git diff`) into one
    PatchRecord per `diff --git` section.

    A section looks like:
    ```diff
    diff --git a/foo.txt b/foo.txt
    index 1234567..89abcde 100644
    --- a/foo.txt
    +++ b/foo.txt
    @@ -1,2 +1,2 @@
    -old line
    +new line
     unchanged
    ```

    The parser is lenient: missing or malformed header lines leave the
    matching record field empty and never abort the scan. The `---`/`+++`
    file headers are dropped; everything else after the marker ends up in
    `diff_content`, one `\\n`-terminated line at a time.
    """

    if not document:
        return []

    state = reduce(_step, split_lines(document), _ParseState())
    records = state.sealed()

    logger.debug("Parsed %d file patches from diff document", len(records))
    return records
