"""Browser automation adapters."""

from ux4tools.adapters.browser.playwright import PlaywrightLauncher, PlaywrightSession

__all__ = [
    "PlaywrightLauncher",
    "PlaywrightSession",
]
