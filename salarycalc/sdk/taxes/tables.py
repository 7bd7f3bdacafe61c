"""Loading published tax tables files.

The engines never read files. This module is the boundary where a tables
file (JSON or YAML, camelCase schema) is read from disk and handed to
resolve_config() as a plain mapping.

Tables file resolution:
1. Explicit path (CLI --tables option, MCP tool argument)
2. SALARY_CALC_TABLES environment variable
3. settings.json "tables_file" key
4. None - built-in defaults
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config import get_setting

logger = logging.getLogger(__name__)


class TaxTablesError(Exception):
    """Base error for tables file problems."""
    pass


class TaxTablesNotFoundError(TaxTablesError):
    """Raised when a tables file does not exist."""
    pass


class TaxTablesFormatError(TaxTablesError):
    """Raised when a tables file cannot be parsed into a mapping."""
    pass


def load_tax_tables(path: Union[str, Path]) -> dict:
    """Load a tables file.

    ``.json`` files are parsed with json; anything else (``.yaml``, ``.yml``)
    with yaml.safe_load.

    Raises:
        TaxTablesNotFoundError: file does not exist
        TaxTablesFormatError: file is not valid JSON/YAML or not a mapping
    """
    tables_file = Path(path).expanduser()
    if not tables_file.exists():
        raise TaxTablesNotFoundError(f"Tax tables file not found: {tables_file}")

    try:
        with open(tables_file, "r", encoding="utf-8") as f:
            if tables_file.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise TaxTablesFormatError(f"Cannot parse {tables_file}: {e}")

    if not isinstance(data, dict):
        raise TaxTablesFormatError(
            f"{tables_file} must contain a mapping, got {type(data).__name__}"
        )

    logger.debug(f"Loaded tax tables {data.get('version')} from {tables_file}")
    return data


def get_tax_tables_path(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Resolve which tables file to use, if any.

    Returns:
        Path to the tables file, or None to use built-in defaults
    """
    if explicit:
        return Path(explicit).expanduser()

    env_path = os.environ.get("SALARY_CALC_TABLES")
    if env_path:
        return Path(env_path).expanduser()

    configured = get_setting("tables_file")
    if configured:
        return Path(configured).expanduser()

    return None


def load_configured_tax_tables(explicit: Optional[Union[str, Path]] = None) -> Optional[dict]:
    """Load the configured tables file, or None for built-in defaults.

    A configured file that is missing or unreadable is logged and treated as
    absent so callers fall back to the built-in tables. An explicit path is
    the caller's responsibility and its errors propagate.
    """
    tables_path = get_tax_tables_path(explicit)
    if tables_path is None:
        return None

    if explicit:
        return load_tax_tables(tables_path)

    try:
        return load_tax_tables(tables_path)
    except TaxTablesError as e:
        logger.warning(f"{e}; using built-in tables")
        return None
