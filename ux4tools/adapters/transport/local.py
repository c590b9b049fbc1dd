"""
Local directory transport — read builds from a mounted folder.

Layout::

    <source>/<version>/<artifact>.zip
"""

from __future__ import annotations

import logging
from pathlib import Path

from ux4tools.adapters.base import BuildTransport
from ux4tools.core.constants import artifact_label
from ux4tools.core.errors import BuildNotFound, TransportError

logger = logging.getLogger(__name__)


class LocalDirectoryTransport(BuildTransport):
    """Read build archives straight from the filesystem."""

    @property
    def name(self) -> str:
        return "local"

    def artifact_path(self, source: str, version: str, artifact: str) -> Path:
        return Path(source).expanduser() / version / f"{artifact}.zip"

    def fetch(self, source: str, version: str, artifact: str) -> bytes:
        path = self.artifact_path(source, version, artifact)
        if not path.is_file():
            raise BuildNotFound(
                f"Specified version ({version} {artifact_label(artifact)}) "
                f"could not be found at location:\n{source}"
            )

        logger.debug("Reading %s", path)
        try:
            return path.read_bytes()
        except OSError as e:
            raise TransportError(f"Cannot read {path}: {e}") from e
