"""
Module-level constants.

Pure data plus one label lookup. No imports beyond stdlib.
"""

from __future__ import annotations

# Per-user configuration directory name (under click.get_app_dir)
APP_DIR_NAME = "UX4"
CONFIG_DIR_ENV = "UX4_CONFIG_DIR"

CONFIG_FILE = "config.json"
CACHE_FILE = "cache.json"
BUILDS_DIR = "builds"
AUTOMATION_DIR = "ux4automation"

# Application marker files
APP_CONFIG_FILE = "app-config.json"
BUILD_DESCRIPTOR_FILE = "build.json"

# Artifact identifiers → human labels (messages only)
ARTIFACT_STANDALONE = "ux4"
ARTIFACT_APPLICATION = "ux4app"
ARTIFACT_AUTOMATION = "resources/ux4automation"

ARTIFACT_LABELS: dict[str, str] = {
    ARTIFACT_STANDALONE: "Standalone",
    ARTIFACT_APPLICATION: "Application",
    ARTIFACT_AUTOMATION: "Automation",
}

# Remote layout
CATALOG_PATH = "/releases/versions.json"
REMOTE_BUILDS_DIR = "builds"

# Timeout in seconds for HTTP and FTP connections
REQUEST_TIMEOUT = 30

# Update check
NPM_PACKAGE = "ux4"
DAY_MS = 86_400_000


def artifact_label(artifact: str) -> str:
    """Return the display label for an artifact identifier."""
    return ARTIFACT_LABELS.get(artifact, artifact)
