"""
Tool context — everything one CLI invocation works against.

Built once at process entry (``main.cli``) and passed explicitly to
every use case. Tests build their own with a temporary config
directory and mock adapters:

    - CLI:    main.py → ToolContext.create(cwd=..., overrides=...)
    - Tests:  ToolContext.create(cwd=tmp_path, config_dir=tmp_path / "cfg",
                                 prompter=ScriptedPrompter(), hooks=MockHooks())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ux4tools.adapters.base import BuildTransport, FrameworkHooks, Prompter
from ux4tools.core.config.loader import find_app_root, load_app_config
from ux4tools.core.constants import AUTOMATION_DIR, BUILDS_DIR
from ux4tools.core.models.app_config import AppConfig
from ux4tools.core.persistence.settings_file import ToolCache, ToolConfig, default_config_dir

logger = logging.getLogger(__name__)

# Settings that may be overridden per run from the command line
OVERRIDABLE_KEYS = ("address", "user", "password", "fromDir")


@dataclass
class ToolContext:
    """Process-wide state, held by reference instead of module globals."""

    cwd: Path
    config_dir: Path
    config: ToolConfig
    cache: ToolCache
    prompter: Prompter
    hooks: FrameworkHooks
    overrides: dict[str, Any] = field(default_factory=dict)

    _app_root: Path | None = field(default=None, init=False, repr=False)
    _app_config: AppConfig | None = field(default=None, init=False, repr=False)

    @classmethod
    def create(
        cls,
        cwd: Path | None = None,
        config_dir: Path | None = None,
        overrides: dict[str, Any] | None = None,
        prompter: Prompter | None = None,
        hooks: FrameworkHooks | None = None,
    ) -> ToolContext:
        """Load config and cache and discover the enclosing application."""
        if prompter is None:
            from ux4tools.adapters.prompts import ClickPrompter

            prompter = ClickPrompter()
        if hooks is None:
            from ux4tools.adapters.shell.hooks import NodeFrameworkHooks

            hooks = NodeFrameworkHooks()

        config_dir = config_dir or default_config_dir()
        ctx = cls(
            cwd=(cwd or Path.cwd()).resolve(),
            config_dir=config_dir,
            config=ToolConfig.open(config_dir),
            cache=ToolCache.open(config_dir),
            prompter=prompter,
            hooks=hooks,
            overrides={k: v for k, v in (overrides or {}).items() if v not in (None, "")},
        )
        ctx.refresh_app()
        return ctx

    # ── Settings ────────────────────────────────────────────────

    def setting(self, key: str) -> Any:
        """Command-line override first, then the config file."""
        if key in self.overrides:
            return self.overrides[key]
        return self.config.get(key)

    @property
    def from_dir(self) -> bool:
        return bool(self.setting("fromDir"))

    @property
    def address(self) -> str | None:
        address = self.setting("address")
        return address if isinstance(address, str) and address else None

    @property
    def user(self) -> str | None:
        return self.setting("user") or None

    def make_transport(self) -> BuildTransport:
        """Local-directory transport when ``fromDir`` is set, FTP otherwise."""
        if self.from_dir:
            from ux4tools.adapters.transport.local import LocalDirectoryTransport

            return LocalDirectoryTransport()

        from ux4tools.adapters.transport.ftp import FtpTransport

        return FtpTransport(
            user=self.user,
            password=self.setting("password") or None,
            prompter=self.prompter,
        )

    # ── Application ─────────────────────────────────────────────

    def refresh_app(self) -> AppConfig | None:
        """(Re)discover app-config.json upward from the working directory."""
        self._app_root = find_app_root(self.cwd)
        self._app_config = load_app_config(self._app_root) if self._app_root else None
        if self._app_root:
            logger.debug("Application root: %s", self._app_root)
        return self._app_config

    @property
    def app_root(self) -> Path | None:
        return self._app_root

    @property
    def app_config(self) -> AppConfig | None:
        return self._app_config

    @property
    def base_dir(self) -> Path:
        """The application root when inside one, else the working directory."""
        return self._app_root or self.cwd

    # ── Per-user directories ────────────────────────────────────

    @property
    def builds_dir(self) -> Path:
        return self.config_dir / BUILDS_DIR

    def build_dir(self, version: str) -> Path:
        return self.builds_dir / version

    @property
    def automation_dir(self) -> Path:
        return self.config_dir / AUTOMATION_DIR
