"""
Settings for PathStore tooling.

Read from a YAML (or JSON) file in the user config directory, with the
PATHSTORE_DELIMITER environment variable taking precedence over the file.
"""
import logging
import os
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError
import yaml

APP_NAME = "pathstore"
SETTINGS_FILE = "settings.yaml"
ENV_DELIMITER = "PATHSTORE_DELIMITER"

logger = logging.getLogger("pathstore")


class StoreSettings(BaseModel):
    """Configuration settings for building PathStores."""
    delimiter: str = Field(":", min_length=1, description="Separator between path segments")
    verbose: bool = Field(False, description="Debug-level logging")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreSettings":
        """Hydrate StoreSettings from a dictionary, ignoring unknown keys."""
        valid_keys = set(cls.model_fields)
        return cls(**{k: v for k, v in data.items() if k in valid_keys})


def default_settings_path() -> Path:
    """Get the default settings file for PathStore."""
    return Path(user_config_dir(APP_NAME)).expanduser() / SETTINGS_FILE


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read settings from %s, using defaults: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a mapping, using defaults.", path)
        return {}
    return data


def load_settings(path: Path | None = None) -> StoreSettings:
    """
    Load settings from path (or the default settings file). A missing or
    broken file is not an error: defaults are used instead (failsafe).
    """
    if path is None:
        path = default_settings_path()
    data = _read_settings_file(path)
    env_delimiter = os.getenv(ENV_DELIMITER)
    if env_delimiter:
        data["delimiter"] = env_delimiter
    try:
        return StoreSettings.from_dict(data)
    except ValidationError as e:
        logger.warning("Invalid settings in %s, using defaults: %s", path, e)
    if env_delimiter:
        return StoreSettings(delimiter=env_delimiter)
    return StoreSettings()
