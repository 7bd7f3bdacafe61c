"""Settings for Salary Calc.

One machine-specific file, settings.json, in the config directory:

    tables_file            published tax tables file (JSON or YAML)
    default_output_format  "text" or "json" for calculation reports

The config directory is SALARY_CALC_CONFIG_PATH when set, otherwise
$XDG_CONFIG_HOME/salary-calc (~/.config/salary-calc).

The calculation engines never read settings. Settings only pick the tables
file the CLI and MCP server hand to the resolver, and the CLI report format.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError


APP_NAME = "salary-calc"
CONFIG_ENV_VAR = "SALARY_CALC_CONFIG_PATH"
SETTINGS_FILE = "settings.json"

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when settings.json is unreadable or a setting value is invalid."""
    pass


class Settings(BaseModel):
    """Known settings. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    tables_file: Optional[str] = None
    default_output_format: Literal["text", "json"] = "text"


def get_config_dir() -> Path:
    """Config directory: SALARY_CALC_CONFIG_PATH, else the XDG location."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILE


def load_settings() -> dict:
    """Read settings.json.

    Returns:
        Settings dictionary ({} when the file does not exist)

    Raises:
        SettingsError: file exists but is not a JSON object
    """
    path = get_settings_path()
    if not path.is_file():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SettingsError(f"{path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a JSON object")
    return data


def save_settings(settings: dict) -> Path:
    """Write settings.json, creating the config directory if needed."""
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")

    logger.debug(f"Saved settings to {path}")
    return path


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Validate and store one setting.

    Raises:
        SettingsError: value is not valid for a known key
    """
    try:
        Settings.model_validate({key: value})
    except ValidationError as e:
        raise SettingsError(f"Invalid value for {key}: {e.errors()[0]['msg']}")

    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns False if it was not set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True
