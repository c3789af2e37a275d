from pathlib import Path

import pytest

from eyepatch.settings import Settings


class RecordingReporter:
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def entry(self, message: str, color: str) -> None:
        self.messages.append((color, message))

    def of_kind(self, kind: str) -> list[str]:
        return [message for k, message in self.messages if k == kind]


class RecordingLauncher:
    """Stands in for the diff tool; snapshots the files it is shown."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.calls: list[tuple[Path, list[tuple[Path, Path]]]] = []
        self.contents: dict[str, str] = {}

    def __call__(self, settings: Settings, work_dir: Path, pairs) -> int:
        self.calls.append((work_dir, list(pairs)))
        for left, right in pairs:
            for path in (left, right):
                if path.is_file():
                    self.contents[path.name] = path.read_bytes().decode("utf-8")
        return self.exit_code


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(patch_directory=tmp_path / "patches", newline="\n")
