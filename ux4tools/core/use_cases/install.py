"""
Install use case — the application lifecycle orchestrator.

    install → create app → register

``install`` downloads and extracts a framework build, ``create_app``
runs the build's own installer, ``build_app`` runs the application's
build script and ``register_install`` reports the install. The full
``run_install`` workflow chains them and only registers once an
application was actually created.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ux4tools.adapters.base import BuildTransport
from ux4tools.core.constants import ARTIFACT_APPLICATION, ARTIFACT_STANDALONE, artifact_label
from ux4tools.core.context import ToolContext
from ux4tools.core.errors import (
    ConfigurationMissing,
    FrameworkMissing,
    HookFailed,
    NotAnApplication,
    RegistrationFailure,
    ToolError,
    VersionUnresolved,
)
from ux4tools.core.models.app_config import AppConfig
from ux4tools.core.services import registration
from ux4tools.core.services.archive import ProgressCallback, extract
from ux4tools.core.services.versioning import LATEST, list_local_catalog, load_catalog, resolve_version

logger = logging.getLogger(__name__)

CREATE_APP_QUESTION = "Do you want to create a new UX4 application now?"

CatalogSource = Callable[[], list[str]]


@dataclass
class InstallResult:
    """Outcome of ``install`` / ``run_install``."""

    version: str | None = None
    standalone: bool = False
    already_installed: bool = False
    skipped_download: bool = False
    destination: Path | None = None
    entries: int = 0
    app_created: bool = False
    app_updated: bool = False
    registered: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "standalone": self.standalone,
            "already_installed": self.already_installed,
            "skipped_download": self.skipped_download,
            "destination": str(self.destination) if self.destination else None,
            "entries": self.entries,
            "app_created": self.app_created,
            "app_updated": self.app_updated,
            "registered": self.registered,
            "warnings": list(self.warnings),
        }


class ApplicationLifecycle:
    """Install, create, build and register UX4 applications."""

    def __init__(
        self,
        context: ToolContext,
        transport: BuildTransport | None = None,
        catalog: CatalogSource | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        self.context = context
        self._transport = transport
        self._catalog = catalog
        self.on_progress = on_progress

    @property
    def transport(self) -> BuildTransport:
        if self._transport is None:
            self._transport = self.context.make_transport()
        return self._transport

    # ── Version resolution ───────────────────────────────────────

    def _require_address(self) -> str:
        address = self.context.address
        if address is None:
            raise ConfigurationMissing(
                "No download address configured. This can be set using the command:\n\n"
                "    ux4 config set address <address>"
            )
        return address

    def _specifier(self, specifier: str | None) -> str:
        app = self.context.app_config
        spec = specifier or (app.ux4version if app else None)
        if not spec:
            raise VersionUnresolved(
                "No version specified. To download the latest release of UX4 use --version latest"
            )
        return spec

    def resolve(self, specifier: str | None) -> str:
        """Resolve a specifier against the remote (or local) catalog."""
        spec = self._specifier(specifier)
        if self._catalog is not None:
            available = self._catalog()
        else:
            available = load_catalog(self._require_address(), self.context.from_dir)

        version = resolve_version(spec, available)
        if version is None:
            raise VersionUnresolved(f"No UX4 build matches version '{spec}'")
        logger.info("Version %s matches %s", spec, version)
        return version

    def resolve_installed(self, specifier: str | None) -> str:
        """Resolve a specifier against the builds already installed."""
        app = self.context.app_config
        spec = specifier or (app.ux4version if app else None) or LATEST
        version = resolve_version(spec, list_local_catalog(self.context.builds_dir))
        if version is None:
            raise FrameworkMissing(
                'No UX4 build found. Please run "ux4 install" then try again'
            )
        return version

    # ── Install ──────────────────────────────────────────────────

    def install(
        self,
        specifier: str | None = None,
        standalone: bool = False,
        local: bool = False,
    ) -> InstallResult:
        """Download and extract a framework build.

        Args:
            specifier: Version specifier; defaults to the app's ux4version.
            standalone: Extract the standalone build into the app (or cwd)
                instead of caching the application build per version.
            local: Skip the download and use what is already installed.

        Raises:
            ConfigurationMissing: No download address.
            VersionUnresolved: No specifier, or nothing in the catalog matches.
            TransportError: The build could not be fetched.
            ArchiveError: The build could not be extracted.
        """
        result = InstallResult(standalone=standalone)

        if local:
            logger.info("Local install requested, skipping download")
            result.skipped_download = True
            if not standalone:
                result.version = self.resolve_installed(specifier)
            return result

        self._require_address()
        version = self.resolve(specifier)
        result.version = version

        if standalone:
            artifact = ARTIFACT_STANDALONE
            destination = self.context.base_dir
        else:
            artifact = ARTIFACT_APPLICATION
            destination = self.context.build_dir(version)
            if destination.exists():
                logger.info("v%s already installed on the system", version)
                result.already_installed = True
                result.destination = destination
                return result
            destination.mkdir(parents=True)

        logger.info("Retrieving UX4 %s version %s", artifact_label(artifact), version)
        try:
            data = self.transport.fetch(self.context.address or "", version, artifact)
            result.entries = extract(data, destination, self.on_progress)
        except ToolError:
            if not standalone:
                # The build directory doubles as the installed marker
                shutil.rmtree(destination, ignore_errors=True)
            raise

        result.destination = destination
        logger.info("UX4 %s v%s installed to %s", artifact_label(artifact), version, destination)
        return result

    # ── Application ──────────────────────────────────────────────

    def create_app(self, version: str) -> AppConfig | None:
        """Run the installed build's application installer.

        Inside an existing application this updates it; elsewhere it
        creates one in the working directory.

        Raises:
            FrameworkMissing: The build for ``version`` is not installed.
            HookFailed: The installer exited non-zero.
        """
        framework = self.context.build_dir(version) / "ux4"
        if not framework.is_dir():
            raise FrameworkMissing(
                'No UX4 build found. Please run "ux4 install" then try again'
            )

        script = framework / "install"
        cwd = self.context.base_dir
        logger.info("Running %s in %s", script, cwd)
        code = self.context.hooks.run_install_hook(script, cwd)
        if code != 0:
            raise HookFailed(f"UX4 application installer exited with code {code}")

        return self.context.refresh_app()

    def build_app(self, args: list[str]) -> int:
        """Run the application's build script with passthrough args.

        The exit code is returned but never treated as a failure.
        """
        app_root = self.context.app_root
        if app_root is None or self.context.app_config is None:
            raise NotAnApplication(
                "No app-config.json found. The current path is not in a UX4 Application"
            )

        script = app_root / "ux4" / "build.js"
        legacy = app_root / "ux4" / "ux4app" / "build.js"
        if not script.is_file() and legacy.is_file():
            script = legacy
        code = self.context.hooks.run_build_hook(script, app_root, list(args))
        if code != 0:
            logger.debug("Build script exited with code %d", code)
        return code

    def register_install(self) -> dict[str, str]:
        """Report the current application to the registration endpoint."""
        app = self.context.app_config
        if app is None:
            raise RegistrationFailure("No application to register")
        return registration.register_install(
            self.context.setting("database"), app, self.context.user
        )

    def create_and_register(self, version: str, result: InstallResult | None = None) -> InstallResult:
        """Create (or update) the application, then register it."""
        result = result or InstallResult(version=version)
        existed = self.context.app_config is not None

        app = self.create_app(version)
        result.app_updated = existed
        result.app_created = not existed and app is not None

        if app is None:
            logger.warning("Installer finished but no app-config.json was found")
            return result

        try:
            self.register_install()
            result.registered = True
        except RegistrationFailure as e:
            logger.warning("Failed to register installation: %s", e)
            result.warnings.append(f"Failed to register installation: {e}")
        return result

    # ── Full workflow ────────────────────────────────────────────

    def run_install(
        self,
        specifier: str | None = None,
        standalone: bool = False,
        local: bool = False,
    ) -> InstallResult:
        """install → (application builds only) create/update app → register."""
        result = self.install(specifier, standalone=standalone, local=local)
        if standalone or result.version is None:
            return result

        if self.context.app_config is None:
            if not self.context.prompter.confirm(CREATE_APP_QUESTION):
                logger.info("Application creation declined")
                return result

        return self.create_and_register(result.version, result)
