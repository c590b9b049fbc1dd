"""
Adapter base — the capability contracts between use cases and the outside world.

Use cases only talk to these interfaces, never to FTP servers, child
processes, terminals or browsers directly. Each has a real
implementation in this package and an in-memory double in
``ux4tools.adapters.mock``.

They raise the error kinds from ``ux4tools.core.errors``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any


class BuildTransport(ABC):
    """Fetches a named build artifact as bytes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Transport identifier (e.g. 'local', 'ftp')."""

    @abstractmethod
    def fetch(self, source: str, version: str, artifact: str) -> bytes:
        """Return the bytes of ``<artifact>.zip`` for ``version``.

        Raises:
            BuildNotFound: The artifact is absent at the resolved location.
            AuthFailure: Remote credentials were rejected.
            TransportError: Any other connection-level failure.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class FrameworkHooks(ABC):
    """Scripts shipped inside an installed UX4 build.

    This tool only starts them and observes their exit status.
    """

    @abstractmethod
    def run_install_hook(self, script: Path, cwd: Path) -> int:
        """Run the framework's install/setup script. Returns the exit code."""

    @abstractmethod
    def run_build_hook(self, script: Path, cwd: Path, args: list[str]) -> int:
        """Run the application build script with passthrough args."""


class Prompter(ABC):
    """Interactive questions to the operator."""

    @abstractmethod
    def prompt(self, question: str, *, hide_input: bool = False, default: str | None = None) -> str:
        """Ask for a free-text answer."""

    @abstractmethod
    def confirm(self, question: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""


ConsoleListener = Callable[[list[Any]], None]


class BrowserSession(ABC):
    """One browser with one page, as seen by the test orchestrator."""

    @abstractmethod
    def on_console(self, listener: ConsoleListener) -> None:
        """Register a listener receiving the JSON values of each console message's args."""

    @abstractmethod
    def goto(self, url: str) -> None:
        """Navigate the page."""

    @abstractmethod
    def evaluate(self, script: str, arg: Any = None) -> Any:
        """Evaluate a function expression in the page and return its result."""

    @abstractmethod
    def wait_until_closed(self) -> None:
        """Block until the user closes the browser."""

    @abstractmethod
    def close(self) -> None:
        """Close the browser."""


class BrowserLauncher(ABC):
    """Starts browser sessions."""

    @abstractmethod
    def launch(self, options: dict[str, Any]) -> BrowserSession:
        """Launch a browser with engine-specific launch options."""
