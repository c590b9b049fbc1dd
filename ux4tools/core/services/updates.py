"""
Tool update checks — is a newer ``ux4`` published on npm?

The latest version is asked of ``npm show ux4 version`` and remembered
in the cache together with the (day-truncated) time of the last check,
so the automatic check runs at most once a day.
"""

from __future__ import annotations

import logging
import subprocess
import sys
import time
from collections.abc import Callable

from ux4tools.core.constants import DAY_MS, NPM_PACKAGE
from ux4tools.core.errors import UpdateCheckFailed
from ux4tools.core.persistence.settings_file import ToolCache
from ux4tools.core.services.versioning import SEMVER_RE, compare_versions

logger = logging.getLogger(__name__)


def _npm_command() -> str:
    return "npm.cmd" if sys.platform.startswith("win") else "npm"


def query_latest_version(timeout: int = 60) -> str:
    """Ask npm for the latest published tool version.

    Raises:
        UpdateCheckFailed: npm is unavailable or printed something odd.
    """
    try:
        result = subprocess.run(
            [_npm_command(), "show", NPM_PACKAGE, "version"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        raise UpdateCheckFailed(f"Failed to check for updates: {e}") from e

    latest = result.stdout.strip()
    if not SEMVER_RE.match(latest):
        logger.debug("npm show output: %r (stderr: %r)", latest, result.stderr.strip())
        raise UpdateCheckFailed(
            "Failed to check for updates. NPM repository may be inaccessible or down."
        )
    return latest


def check_for_update(
    cache: ToolCache,
    query: Callable[[], str] = query_latest_version,
) -> str:
    """Refresh ``latestVersionAvailable`` in the cache and return it."""
    latest = query()
    cache.set("latestVersionAvailable", latest)
    logger.info("Latest published version: %s", latest)
    return latest


def auto_update_due(cache: ToolCache, now_ms: int | None = None) -> bool:
    """Record today's check and return True if none ran yet today."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    today = now_ms - (now_ms % DAY_MS)

    if today > cache.last_update_check:
        cache.set("lastUpdateCheck", today)
        return True
    return False


def is_up_to_date(current: str, cache: ToolCache) -> bool:
    return compare_versions(cache.latest_version_available, current) < 1


def update_notice(current: str, cache: ToolCache) -> str | None:
    """Banner text when the cache knows of a newer version, else None."""
    latest = cache.latest_version_available
    if not latest or compare_versions(latest, current) != 1:
        return None
    rule = "=" * 40
    return (
        f"{rule}\n"
        "A new version of UX4 Tools is available.\n\n"
        f"Current: {current}\n"
        f" Latest: {latest}\n\n"
        f"Run 'npm update -g {NPM_PACKAGE}' to install.\n"
        f"{rule}"
    )
