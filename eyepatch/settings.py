import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from eyepatch.exceptions import EyePatchError, SettingsError

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "EYEPATCH_SETTINGS"
DEFAULT_SETTINGS_FILE = ".eyepatch.settings"


def default_settings_path() -> Path:
    override = os.getenv(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / DEFAULT_SETTINGS_FILE


class Settings(BaseModel):
    """
    User settings, stored as JSON or YAML in `~/.eyepatch.settings`.

    - `diff_app`: visual diff tool, invoked as `<diff_app> -I <pair list>`
    - `patch_directory`: where `save` writes patches (falls back to $OneDrive/patches)
    - `base_branch`: branch the merge base is computed against
    - `newline`: line terminator used when writing patched files
    """

    model_config = ConfigDict(
        extra="forbid",
    )

    diff_app: str = "windiff"
    patch_directory: Path | None = None
    base_branch: str = "origin/main"
    newline: str = os.linesep

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        path = Path(path) if path else default_settings_path()
        if not path.exists():
            logger.debug("No settings file at %s, using defaults", path)
            return cls()

        try:
            # safe_load also reads the JSON files older versions wrote
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(raw, dict):
                raise TypeError("settings must be a mapping")
            settings = cls.model_validate(raw)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            raise SettingsError(path, e) from e

        logger.debug("Loaded settings from %s", path)
        return settings

    def ensure_patch_directory(self) -> Path:
        """Return the patch directory, creating it if needed."""
        patches_path = self.patch_directory
        if patches_path is None:
            one_drive = os.getenv("OneDrive")
            if not one_drive:
                raise EyePatchError(
                    "OneDrive is not configured on this system. "
                    "Either install it or configure a patch directory."
                )
            patches_path = Path(one_drive) / "patches"

        patches_path = Path(patches_path)
        patches_path.mkdir(parents=True, exist_ok=True)
        return patches_path
