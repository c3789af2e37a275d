from pathlib import Path


class EyePatchError(Exception):
    """Base class for errors reported to the user by the CLI."""


class SettingsError(EyePatchError):
    def __init__(self, settings_path: Path, original_error: Exception):
        self.settings_path = settings_path
        self.original_error = original_error
        super().__init__(
            f"Invalid settings file {settings_path}: {original_error}"
        )


class NotARepositoryError(EyePatchError):
    def __init__(self, start: Path):
        self.start = start
        super().__init__(f"Not in a Git repository: {start}")


class ParentCommitNotFoundError(EyePatchError):
    def __init__(self, base_ref: str):
        self.base_ref = base_ref
        super().__init__(
            f"Could not determine the parent commit against {base_ref}."
        )


class GitCommandError(EyePatchError):
    def __init__(self, cmd: list[str], exit_code: int, stderr: str):
        self.cmd = cmd
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(
            f"{' '.join(cmd)} failed with exit code {exit_code}: {stderr.strip()}"
        )


class BlobNotFoundError(EyePatchError):
    def __init__(self, file_path: str, blob_hash: str):
        self.file_path = file_path
        self.blob_hash = blob_hash
        super().__init__(
            f"Base file not found for {file_path} (index {blob_hash or '<none>'})."
        )


class PatchFileNotFoundError(EyePatchError):
    def __init__(self, patch_path: Path):
        self.patch_path = patch_path
        super().__init__(f"Patch file not found: {patch_path}")


class PatchApplyError(EyePatchError):
    def __init__(self, file_path: str, original_error: Exception):
        self.file_path = file_path
        self.original_error = original_error
        super().__init__(f"Could not apply patch to {file_path}: {original_error}")
