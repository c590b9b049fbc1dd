"""
Playwright browser adapter — headless Chromium for the test runner.

Manifests carry puppeteer-style ``launchOptions`` (camelCase); the
common ones are translated to Playwright's keyword arguments.
"""

from __future__ import annotations

import logging
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, Playwright, sync_playwright

from ux4tools.adapters.base import BrowserLauncher, BrowserSession, ConsoleListener
from ux4tools.core.errors import HarnessError

logger = logging.getLogger(__name__)

_OPTION_NAMES = {
    "executablePath": "executable_path",
    "slowMo": "slow_mo",
    "ignoreDefaultArgs": "ignore_default_args",
    "handleSIGINT": "handle_sigint",
    "handleSIGTERM": "handle_sigterm",
    "handleSIGHUP": "handle_sighup",
}

_SUPPORTED = {
    "headless", "args", "channel", "executable_path", "slow_mo", "timeout",
    "ignore_default_args", "handle_sigint", "handle_sigterm", "handle_sighup",
    "env", "downloads_path", "proxy", "chromium_sandbox",
}


def translate_launch_options(options: dict[str, Any] | None) -> dict[str, Any]:
    """Map manifest launch options onto ``chromium.launch()`` kwargs.

    Unknown keys are dropped with a debug message.
    """
    kwargs: dict[str, Any] = {"headless": True}
    for key, value in (options or {}).items():
        name = _OPTION_NAMES.get(key, key)
        if name not in _SUPPORTED:
            logger.debug("Ignoring unsupported launch option %r", key)
            continue
        kwargs[name] = value
    return kwargs


class PlaywrightSession(BrowserSession):
    """One Chromium browser with a single page."""

    def __init__(self, playwright: Playwright, options: dict[str, Any]):
        self._playwright = playwright
        self._browser = playwright.chromium.launch(**translate_launch_options(options))
        self._page: Page = self._browser.new_page()

    def on_console(self, listener: ConsoleListener) -> None:
        def _relay(msg) -> None:
            values: list[Any] = []
            for handle in msg.args:
                try:
                    values.append(handle.json_value())
                except PlaywrightError:
                    values.append(str(handle))
            listener(values)

        self._page.on("console", _relay)

    def goto(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        self._page.goto(url)

    def evaluate(self, script: str, arg: Any = None) -> Any:
        return self._page.evaluate(script, arg)

    def wait_until_closed(self) -> None:
        logger.info("Browser left open, waiting for it to be closed")
        try:
            self._page.wait_for_event("close", timeout=0)
        except PlaywrightError as e:
            # Raised when the whole browser goes away instead of the page
            logger.debug("Browser closed: %s", e)

    def close(self) -> None:
        try:
            self._browser.close()
        finally:
            self._playwright.stop()


class PlaywrightLauncher(BrowserLauncher):
    """Start Playwright-driven Chromium sessions."""

    def launch(self, options: dict[str, Any]) -> BrowserSession:
        playwright = sync_playwright().start()
        try:
            return PlaywrightSession(playwright, options)
        except PlaywrightError as e:
            playwright.stop()
            raise HarnessError(f"Cannot launch the browser: {e}") from e
