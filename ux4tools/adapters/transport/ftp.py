"""
FTP transport — download builds from the release server.

Remote layout::

    builds/<version>/<artifact>.zip

The whole archive is streamed into memory and the connection is closed
before the bytes are handed back.
"""

from __future__ import annotations

import ftplib
import io
import logging

from ux4tools.adapters.base import BuildTransport, Prompter
from ux4tools.core.constants import REMOTE_BUILDS_DIR, REQUEST_TIMEOUT, artifact_label
from ux4tools.core.errors import AuthFailure, BuildNotFound, TransportError

logger = logging.getLogger(__name__)

# quit() on a half-open connection can fail before any reply is read
_QUIT_ERRORS = ftplib.all_errors + (AttributeError,)


class FtpTransport(BuildTransport):
    """Fetch build archives over FTP.

    If no password is configured the operator is asked for one, once
    per transport instance.
    """

    def __init__(
        self,
        user: str | None,
        password: str | None,
        prompter: Prompter | None = None,
        timeout: int = REQUEST_TIMEOUT,
        ftp_factory: type[ftplib.FTP] = ftplib.FTP,
    ):
        self.user = user or ""
        self.password = password
        self.prompter = prompter
        self.timeout = timeout
        self._ftp_factory = ftp_factory

    @property
    def name(self) -> str:
        return "ftp"

    def _credentials(self) -> tuple[str, str]:
        if not self.password and self.prompter is not None:
            self.password = self.prompter.prompt("Password", hide_input=True)
        return self.user, self.password or ""

    def fetch(self, source: str, version: str, artifact: str) -> bytes:
        label = f"{version} {artifact_label(artifact)}"
        user, password = self._credentials()
        buffer = io.BytesIO()

        logger.debug("Connecting to ftp://%s as %r", source, user)
        try:
            ftp = self._ftp_factory(timeout=self.timeout)
            try:
                ftp.connect(source)
                try:
                    ftp.login(user, password)
                except ftplib.error_perm as e:
                    raise AuthFailure(f"FTP - login to {source} rejected: {e}") from e

                try:
                    ftp.cwd(f"{REMOTE_BUILDS_DIR}/{version}/")
                except ftplib.error_perm as e:
                    raise BuildNotFound(f"FTP - Specified version ({label}) could not be found") from e

                try:
                    ftp.retrbinary(f"RETR {artifact}.zip", buffer.write)
                except ftplib.error_perm as e:
                    raise BuildNotFound(f"FTP - Specified version ({label}) could not be found: {e}") from e
            finally:
                try:
                    ftp.quit()
                except _QUIT_ERRORS:
                    ftp.close()
        except TransportError:
            raise
        except ftplib.all_errors as e:
            raise TransportError(f"FTP - {e or 'error(s) occurred'} ({label})") from e

        data = buffer.getvalue()
        logger.info("Downloaded %s.zip for %s (%d bytes)", artifact, version, len(data))
        return data
