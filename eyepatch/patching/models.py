from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class PatchRecord(BaseModel):
    """One file's section of a multi-file unified diff."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    base_file_path: str = ""
    base_index: str = ""
    diff_content: str = ""


@dataclass(frozen=True)
class HunkHeader:
    base_start: int
    base_count: int
    target_start: int
    target_count: int


@dataclass(frozen=True)
class Keep:
    pass


@dataclass(frozen=True)
class Insert:
    text: str


@dataclass(frozen=True)
class Delete:
    pass


Operation = Keep | Insert | Delete
