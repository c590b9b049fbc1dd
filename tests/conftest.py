"""
Shared test fixtures and configuration.
"""

import io
import json
import zipfile
from pathlib import Path

import pytest

from ux4tools.adapters.mock import MockHooks, ScriptedPrompter
from ux4tools.core.context import ToolContext


def build_zip(entries: dict[str, bytes | None]) -> bytes:
    """Zip bytes from {name: content}; a None content makes a directory entry."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, b"" if content is None else content)
    return buffer.getvalue()


@pytest.fixture
def zip_bytes():
    """Return the zip builder."""
    return build_zip


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Return a temporary per-user config directory."""
    path = tmp_path.resolve() / "config"
    path.mkdir()
    return path


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Return a minimal UX4 application root."""
    root = tmp_path.resolve() / "myapp"
    root.mkdir()
    (root / "app-config.json").write_text(json.dumps({
        "ux4version": "2.1.0",
        "name": "myapp",
        "displayName": "My App",
        "version": "1.0.0",
    }))
    return root


@pytest.fixture
def make_context(config_dir: Path):
    """Return a factory for ToolContext objects backed by mock adapters."""
    def _make(cwd: Path, overrides=None, prompter=None, hooks=None) -> ToolContext:
        return ToolContext.create(
            cwd=cwd,
            config_dir=config_dir,
            overrides=overrides,
            prompter=prompter or ScriptedPrompter(),
            hooks=hooks or MockHooks(),
        )

    return _make
