"""
Error kinds raised by core services and adapters.

Components never print. They raise one of these and the CLI layer
turns it into a highlighted message and a non-zero exit code.
"""

from __future__ import annotations


class ToolError(Exception):
    """Base class for every failure the CLI reports to the user."""


# ── Configuration ───────────────────────────────────────────────


class ConfigError(ToolError):
    """Raised when a configuration document is unreadable or invalid."""


class ConfigurationMissing(ToolError):
    """Raised when a required setting (e.g. ``address``) is absent."""


# ── Versions ────────────────────────────────────────────────────


class VersionUnresolved(ToolError):
    """Raised when no concrete build matches the requested specifier."""


class CatalogUnavailable(ToolError):
    """Raised when the remote version catalog cannot be loaded."""


# ── Transport ───────────────────────────────────────────────────


class TransportError(ToolError):
    """Connection-level failure while fetching a build artifact."""


class BuildNotFound(TransportError):
    """The artifact does not exist at the resolved location."""


class AuthFailure(TransportError):
    """The remote server rejected the configured credentials."""


# ── Archive ─────────────────────────────────────────────────────


class ArchiveError(ToolError):
    """Base class for archive extraction failures."""


class CorruptArchive(ArchiveError):
    """The buffer is not a readable zip archive."""


class ArchiveWriteError(ArchiveError):
    """An entry could not be written to the destination."""


# ── Application lifecycle ───────────────────────────────────────


class FrameworkMissing(ToolError):
    """No installed UX4 build is available for the requested step."""


class NotAnApplication(ToolError):
    """The working directory is not inside a UX4 application."""


class AppAlreadyExists(ToolError):
    """An application already exists at the target location."""


class HookFailed(ToolError):
    """A framework-provided hook script exited unsuccessfully."""


class RegistrationFailure(ToolError):
    """Installation telemetry could not be delivered."""


class UpdateCheckFailed(ToolError):
    """The latest tool version could not be determined."""


# ── Testing ─────────────────────────────────────────────────────


class ManifestInvalid(ToolError):
    """The test manifest is missing or lacks required fields."""


class DeploymentError(ToolError):
    """Test scripts could not be deployed to the target folder."""


class HarnessError(ToolError):
    """Unexpected failure while driving the browser test run."""
