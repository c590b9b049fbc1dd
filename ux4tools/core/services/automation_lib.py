"""
Automation library cache — the in-page UX4Automation scripts.

One copy per framework version lives under
``<config_dir>/ux4automation/<ux4version>/``. It is downloaded the
first time a test run (or ``test install-lib``) needs it; the presence
check always comes before any network access.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from ux4tools.adapters.base import BuildTransport
from ux4tools.core.constants import ARTIFACT_AUTOMATION
from ux4tools.core.context import ToolContext
from ux4tools.core.errors import ConfigurationMissing, NotAnApplication, ToolError, VersionUnresolved
from ux4tools.core.services.archive import ProgressCallback, extract
from ux4tools.core.services.versioning import load_catalog, resolve_version

logger = logging.getLogger(__name__)

LIBRARY_FOLDER = "UX4Automation"

CatalogSource = Callable[[], list[str]]


def declared_framework_version(ctx: ToolContext) -> str:
    """The ux4version of the enclosing application."""
    app = ctx.app_config
    if app is None:
        raise NotAnApplication(
            "No app-config.json found. The current path is not in a UX4 Application"
        )
    if not app.ux4version:
        raise VersionUnresolved(f"No ux4version declared in {ctx.app_root}/app-config.json")
    return app.ux4version


def ensure_automation_library(
    ctx: ToolContext,
    transport: BuildTransport | None = None,
    catalog: CatalogSource | None = None,
    on_progress: ProgressCallback | None = None,
) -> tuple[Path, bool]:
    """Make sure the automation library for the app's UX4 version is cached.

    Returns:
        (library directory, whether it was downloaded by this call).
    """
    declared = declared_framework_version(ctx)
    target = ctx.automation_dir / declared

    if target.is_dir():
        logger.info("Using UX4Automation v%s", declared)
        return target, False

    address = ctx.address
    if address is None:
        raise ConfigurationMissing(
            "No download address configured. This can be set using the command:\n\n"
            "    ux4 config set address <address>"
        )

    available = catalog() if catalog is not None else load_catalog(address, ctx.from_dir)
    version = resolve_version(declared, available)
    if version is None:
        raise VersionUnresolved(f"No UX4 build matches version '{declared}'")

    transport = transport or ctx.make_transport()
    logger.info("Installing UX4Automation v%s", declared)
    data = transport.fetch(address, version, ARTIFACT_AUTOMATION)

    target.mkdir(parents=True, exist_ok=True)
    try:
        extract(data, target, on_progress)
    except ToolError:
        # Presence of the directory marks a complete download
        shutil.rmtree(target, ignore_errors=True)
        raise

    logger.info("UX4Automation v%s installed to %s", declared, target)
    return target, True


def library_scripts(lib_dir: Path) -> list[Path]:
    """Top-level ``*.js`` files of a cached library."""
    return sorted(p for p in lib_dir.glob("*.js") if p.is_file())


def install_library_into(lib_dir: Path, project_dir: Path) -> Path:
    """Copy a cached library into ``<project_dir>/UX4Automation/``.

    Existing files are overwritten.
    """
    dest = project_dir / LIBRARY_FOLDER
    shutil.copytree(lib_dir, dest, dirs_exist_ok=True)
    logger.info("Copied UX4Automation from %s to %s", lib_dir, dest)
    return dest
