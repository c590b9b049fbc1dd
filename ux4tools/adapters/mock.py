"""
Mock adapters — in-memory doubles for every capability in ``base``.

Used by the test suite and by embedders driving the CLI in-process. Each
mock records its calls so tests can assert on them.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from ux4tools.adapters.base import (
    BrowserLauncher,
    BrowserSession,
    BuildTransport,
    ConsoleListener,
    FrameworkHooks,
    Prompter,
)
from ux4tools.core.errors import BuildNotFound


class MockTransport(BuildTransport):
    """Serve artifacts from a dict keyed by (version, artifact)."""

    def __init__(self, artifacts: dict[tuple[str, str], bytes] | None = None):
        self._artifacts: dict[tuple[str, str], bytes] = dict(artifacts or {})
        self._failures: dict[tuple[str, str], Exception] = {}
        self._call_log: list[tuple[str, str, str]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[tuple[str, str, str]]:
        """All (source, version, artifact) requests received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def add(self, version: str, artifact: str, data: bytes) -> None:
        self._artifacts[(version, artifact)] = data

    def set_failure(self, version: str, artifact: str, error: Exception) -> None:
        """Make a specific request raise ``error``."""
        self._failures[(version, artifact)] = error

    def fetch(self, source: str, version: str, artifact: str) -> bytes:
        self._call_log.append((source, version, artifact))
        key = (version, artifact)
        if key in self._failures:
            raise self._failures[key]
        if key not in self._artifacts:
            raise BuildNotFound(f"Specified version ({version} {artifact}) could not be found")
        return self._artifacts[key]


class MockHooks(FrameworkHooks):
    """Record hook invocations and return configured exit codes.

    ``on_install`` runs in place of the install script, e.g. to write
    the app-config.json a real framework installer would create.
    """

    def __init__(
        self,
        install_code: int = 0,
        build_code: int = 0,
        on_install: Callable[[Path], None] | None = None,
    ):
        self.install_code = install_code
        self.build_code = build_code
        self.on_install = on_install
        self.install_calls: list[tuple[Path, Path]] = []
        self.build_calls: list[tuple[Path, Path, list[str]]] = []

    def run_install_hook(self, script: Path, cwd: Path) -> int:
        self.install_calls.append((script, cwd))
        if self.on_install is not None and self.install_code == 0:
            self.on_install(cwd)
        return self.install_code

    def run_build_hook(self, script: Path, cwd: Path, args: list[str]) -> int:
        self.build_calls.append((script, cwd, list(args)))
        return self.build_code


class ScriptedPrompter(Prompter):
    """Answer prompts from pre-set values.

    ``answers`` maps question text to a reply; ``confirm_answer`` is
    returned for every yes/no question.
    """

    def __init__(self, answers: dict[str, str] | None = None, confirm_answer: bool = False):
        self.answers = dict(answers or {})
        self.confirm_answer = confirm_answer
        self.asked: list[str] = []

    def prompt(self, question: str, *, hide_input: bool = False, default: str | None = None) -> str:
        self.asked.append(question)
        return self.answers.get(question, default or "")

    def confirm(self, question: str, *, default: bool = False) -> bool:
        self.asked.append(question)
        return self.confirm_answer


class MockBrowserSession(BrowserSession):
    """A page whose ``evaluate`` replays scripted outcomes.

    Each item of ``outcomes`` is either a value to return or an
    exception to raise; the last item repeats once the list is used up.
    ``console`` messages are emitted to listeners on every evaluate.
    """

    def __init__(self, outcomes: list[Any], console: list[list[Any]] | None = None):
        self.outcomes = list(outcomes)
        self.console = list(console or [])
        self.listeners: list[ConsoleListener] = []
        self.visited: list[str] = []
        self.evaluations: list[tuple[str, Any]] = []
        self.closed = False
        self.waited = False

    def on_console(self, listener: ConsoleListener) -> None:
        self.listeners.append(listener)

    def goto(self, url: str) -> None:
        self.visited.append(url)

    def evaluate(self, script: str, arg: Any = None) -> Any:
        self.evaluations.append((script, arg))
        for values in self.console:
            for listener in self.listeners:
                listener(values)

        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def wait_until_closed(self) -> None:
        self.waited = True

    def close(self) -> None:
        self.closed = True


class MockBrowserLauncher(BrowserLauncher):
    """Hand out a single pre-built mock session."""

    def __init__(self, session: MockBrowserSession):
        self.session = session
        self.launch_options: list[dict[str, Any]] = []

    def launch(self, options: dict[str, Any]) -> BrowserSession:
        self.launch_options.append(dict(options))
        return self.session
