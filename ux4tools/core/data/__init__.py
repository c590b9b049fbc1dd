"""
Bundled template registry.

Loads the scaffolding templates from ``ux4tools/core/data/templates/``
once at first access and caches them for the process lifetime.

Usage::

    from ux4tools.core.data import get_registry

    registry = get_registry()
    manifest = registry.manifest_template   # dict
    runner = registry.runner_template       # str (JavaScript)
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent


def _load_text(relative_path: str) -> str:
    """Load a text file relative to the data directory."""
    path = _DATA_DIR / relative_path
    with open(path, encoding="utf-8") as f:
        return f.read()


class TemplateRegistry:
    """Registry for the test scaffolding templates.

    Each property lazily loads its file on first access and caches the
    result for the lifetime of the instance.
    """

    # ── Test project ─────────────────────────────────────────────

    @cached_property
    def manifest_template(self) -> dict:
        """Default test manifest written by ``ux4 test init-manifest``."""
        data = json.loads(_load_text("templates/test-manifest.json"))
        logger.debug("Loaded manifest template (%d keys)", len(data))
        return data

    @cached_property
    def runner_template(self) -> str:
        """Default entry point importing and running test sets."""
        return _load_text("templates/testrunner.js")

    @cached_property
    def test_set_template(self) -> str:
        """Skeleton of a single test set."""
        return _load_text("templates/testset.js")


# ── Module-level singleton ───────────────────────────────────────

_registry: TemplateRegistry | None = None


def get_registry() -> TemplateRegistry:
    """Return the process-level TemplateRegistry singleton."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = TemplateRegistry()
    return _registry
