"""
Test scaffolding — starter files for a browser test project.

    init_manifest(path)        → test-manifest.json
    init_test_set(dir, name)   → <name>.js from the test-set template
    init_runner(dir)           → testrunner.js (the default entry point)
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from ux4tools.core.data import get_registry
from ux4tools.core.errors import ToolError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "test-manifest.json"
RUNNER_NAME = "testrunner.js"

_SET_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _write_new(path: Path, content: str, force: bool) -> Path:
    if path.exists() and not force:
        raise ToolError(f"{path} already exists (use --force to overwrite)")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def init_manifest(path: Path, force: bool = False) -> Path:
    """Write a default manifest. A directory gets ``test-manifest.json``."""
    if path.is_dir():
        path = path / DEFAULT_MANIFEST_NAME
    manifest = get_registry().manifest_template
    return _write_new(path, json.dumps(manifest, indent="\t") + "\n", force)


def init_runner(directory: Path, force: bool = False) -> Path:
    return _write_new(directory / RUNNER_NAME, get_registry().runner_template, force)


def init_test_set(directory: Path, name: str, force: bool = False) -> Path:
    """Write ``<name>.js`` from the test-set template.

    The runner entry point is written alongside it when missing.
    """
    name = name.removesuffix(".js")
    if not _SET_NAME_RE.match(name):
        raise ToolError(f"Invalid test set name '{name}'")

    content = get_registry().test_set_template.replace(
        "<Enter your testset name here>", name
    )
    created = _write_new(directory / f"{name}.js", content, force)
    if not (directory / RUNNER_NAME).exists():
        init_runner(directory)
    return created
