"""Build transports — local directory and FTP."""

from ux4tools.adapters.transport.ftp import FtpTransport
from ux4tools.adapters.transport.local import LocalDirectoryTransport

__all__ = [
    "FtpTransport",
    "LocalDirectoryTransport",
]
