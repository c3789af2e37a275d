"""Unit tests for the save command."""

from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from eyepatch.commands.save import patch_file_name, save_patch, write_and_verify_patch_file
from eyepatch.exceptions import EyePatchError, ParentCommitNotFoundError

BRANCH_DIFF = (
    "diff --git a/src/main.py b/src/main.py\n"
    "index 1111111..2222222 100644\n"
    "--- a/src/main.py\n"
    "+++ b/src/main.py\n"
    "@@ -1,2 +1,3 @@\n"
    " def foo():\n"
    "+    print('hi')\n"
    "     pass\n"
    "diff --git a/README.md b/README.md\n"
    "index 3333333..4444444 100644\n"
    "--- a/README.md\n"
    "+++ b/README.md\n"
    "@@ -1 +1 @@\n"
    "-Old\n"
    "+New\n"
)

NOW = datetime(2024, 3, 5, 14, 7, 9, 123456)


class TestPatchFileName:
    def test_appends_timestamp_with_milliseconds(self):
        assert patch_file_name("fix", NOW) == "fix.20240305-140709-123.patch"

    def test_keeps_last_branch_segment(self):
        assert patch_file_name("users/me/feature", NOW).startswith("feature.")


class TestSavePatch:
    """Tests for save_patch."""

    def test_writes_patch_file_when_changes_exist(
        self, tmp_path: Path, settings, reporter
    ):
        with (
            patch("eyepatch.commands.save.current_branch", return_value="dev/login"),
            patch("eyepatch.commands.save.merge_base", return_value="abc123"),
            patch("eyepatch.commands.save.diff_against", return_value=BRANCH_DIFF) as mock_diff,
        ):
            path = save_patch(settings, reporter, tmp_path, now=NOW)

        mock_diff.assert_called_once_with(tmp_path, "abc123")
        assert path == settings.patch_directory / "login.20240305-140709-123.patch"
        assert path.read_text(encoding="utf-8") == BRANCH_DIFF
        assert "File: src/main.py" in reporter.of_kind("info")
        assert "File: README.md" in reporter.of_kind("info")
        assert any(str(path) in m for m in reporter.of_kind("success"))

    def test_explicit_name_wins_over_branch(self, tmp_path: Path, settings, reporter):
        with (
            patch("eyepatch.commands.save.current_branch", return_value="main"),
            patch("eyepatch.commands.save.merge_base", return_value="abc123"),
            patch("eyepatch.commands.save.diff_against", return_value=BRANCH_DIFF),
        ):
            path = save_patch(settings, reporter, tmp_path, name="hotfix", now=NOW)

        assert path.name == "hotfix.20240305-140709-123.patch"

    def test_no_changes_writes_nothing(self, tmp_path: Path, settings, reporter):
        with (
            patch("eyepatch.commands.save.current_branch", return_value="main"),
            patch("eyepatch.commands.save.merge_base", return_value="abc123"),
            patch("eyepatch.commands.save.diff_against", return_value=""),
            patch("eyepatch.commands.save.write_and_verify_patch_file") as mock_write,
        ):
            result = save_patch(settings, reporter, tmp_path, now=NOW)

        assert result is None
        mock_write.assert_not_called()
        assert "No changes to save." in reporter.of_kind("warning")

    def test_missing_parent_commit_propagates(self, tmp_path: Path, settings, reporter):
        with (
            patch("eyepatch.commands.save.current_branch", return_value="main"),
            patch(
                "eyepatch.commands.save.merge_base",
                side_effect=ParentCommitNotFoundError("origin/main"),
            ),
        ):
            with pytest.raises(ParentCommitNotFoundError):
                save_patch(settings, reporter, tmp_path)


class TestWriteAndVerify:
    def test_mismatched_count_raises(self, tmp_path: Path):
        with pytest.raises(EyePatchError):
            write_and_verify_patch_file(tmp_path / "x.patch", BRANCH_DIFF, 3)

    def test_matching_count_passes(self, tmp_path: Path):
        path = tmp_path / "x.patch"
        write_and_verify_patch_file(path, BRANCH_DIFF, 2)
        assert path.exists()
