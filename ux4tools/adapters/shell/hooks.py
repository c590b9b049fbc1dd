"""
Framework hooks — run the install/build scripts shipped in a UX4 build.

The scripts are Node programs. They are started with the operator's
terminal attached (they may ask questions of their own) and only their
exit status is observed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from ux4tools.adapters.base import FrameworkHooks
from ux4tools.core.errors import HookFailed

logger = logging.getLogger(__name__)


class NodeFrameworkHooks(FrameworkHooks):
    """Run framework hook scripts with the ``node`` executable."""

    def __init__(self, executable: str = "node"):
        self.executable = executable

    def _run(self, script: Path, cwd: Path, args: list[str]) -> int:
        exe = shutil.which(self.executable)
        if exe is None:
            raise HookFailed(
                f"'{self.executable}' was not found on PATH. "
                "Node.js is required to run UX4 framework scripts."
            )

        cmd = [exe, str(script), *args]
        logger.debug("Running hook: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            result = subprocess.run(cmd, cwd=cwd, check=False)
        except OSError as e:
            raise HookFailed(f"Cannot start {script}: {e}") from e

        logger.info("Hook %s exited with code %d", script.name, result.returncode)
        return result.returncode

    def run_install_hook(self, script: Path, cwd: Path) -> int:
        return self._run(script, cwd, [])

    def run_build_hook(self, script: Path, cwd: Path, args: list[str]) -> int:
        return self._run(script, cwd, list(args))
