"""
Settings persistence — the per-user config.json and cache.json.

Both documents are flat JSON objects. They are read once per process
and every mutation rewrites the whole document atomically (write to a
temp file, then rename) before the next step proceeds.

The two stores differ only in how they treat a corrupt file:

    - config.json → ConfigError (the user must fix or delete it)
    - cache.json  → silently reset to ``{}``
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import click

from ux4tools.core.constants import APP_DIR_NAME, CACHE_FILE, CONFIG_DIR_ENV, CONFIG_FILE
from ux4tools.core.errors import ConfigError

logger = logging.getLogger(__name__)

Scalar = str | bool | int | float


def default_config_dir() -> Path:
    """Per-user configuration directory (``UX4_CONFIG_DIR`` overrides)."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_DIR_NAME, roaming=True))


def write_json_atomic(data: dict[str, Any], path: Path) -> None:
    """Serialize ``data`` to ``path`` via temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent="\t", ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
        logger.debug("Saved %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class JsonDocumentStore:
    """A flat key/value JSON document backed by one file."""

    reset_on_corrupt = False

    def __init__(self, path: Path):
        self.path = path
        self._data: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Read the document, creating an empty one if absent."""
        if not self.path.is_file():
            logger.info("No %s at %s, creating an empty one", self.path.name, self.path)
            self._data = {}
            self.flush()
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        except (OSError, ValueError) as e:
            if self.reset_on_corrupt:
                logger.debug("Resetting unreadable %s: %s", self.path, e)
                self._data = {}
                self.flush()
                return
            raise ConfigError(
                f"Failed to read config from '{self.path}'. "
                f"The file could be corrupt or the format invalid. ({e})"
            ) from e

        self._data = data

    def flush(self) -> None:
        write_json_atomic(self._data, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Scalar) -> None:
        self._data[key] = value
        self.flush()

    def delete(self, key: str) -> bool:
        """Remove a key. Returns False if it was not present."""
        if key not in self._data:
            return False
        del self._data[key]
        self.flush()
        return True

    def list(self) -> dict[str, Any]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class ToolConfig(JsonDocumentStore):
    """User settings: address, user, password, database, fromDir."""

    @classmethod
    def open(cls, config_dir: Path) -> ToolConfig:
        return cls(config_dir / CONFIG_FILE)


class ToolCache(JsonDocumentStore):
    """Update-check bookkeeping: lastUpdateCheck, latestVersionAvailable."""

    reset_on_corrupt = True

    @classmethod
    def open(cls, config_dir: Path) -> ToolCache:
        return cls(config_dir / CACHE_FILE)

    @property
    def last_update_check(self) -> int:
        try:
            return int(self.get("lastUpdateCheck") or 0)
        except (TypeError, ValueError):
            return 0

    @property
    def latest_version_available(self) -> str | None:
        value = self.get("latestVersionAvailable")
        return value if isinstance(value, str) else None


def coerce_value(raw: str) -> Scalar:
    """Map ``"true"``/``"false"`` to booleans; leave everything else a string."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return raw
