"""
Application config loader — finds and reads ``app-config.json``.

Walking upward from the working directory mirrors how the tool is
used: commands may be run from any sub-folder of an application and
still find its root. Not finding the file is a normal state (the
directory is not an application yet), so discovery returns None
rather than raising.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ux4tools.core.constants import APP_CONFIG_FILE, BUILD_DESCRIPTOR_FILE
from ux4tools.core.errors import ConfigError
from ux4tools.core.models.app_config import AppConfig

logger = logging.getLogger(__name__)


def find_app_root(start_dir: Path | None = None) -> Path | None:
    """Search for app-config.json starting from start_dir, walking up.

    Returns:
        The directory holding app-config.json, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(64):  # safety limit
        if (current / APP_CONFIG_FILE).is_file():
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_app_config(app_root: Path) -> AppConfig:
    """Read and validate ``<app_root>/app-config.json``.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    path = app_root / APP_CONFIG_FILE
    logger.debug("Loading app config from %s", path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid application configuration in {path}: {e}") from e


def read_build_target(app_root: Path) -> str | None:
    """Return the ``target`` of ``<app_root>/build.json`` if there is one."""
    path = app_root / BUILD_DESCRIPTOR_FILE
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    target = data.get("target") if isinstance(data, dict) else None
    return str(target) if target else None
