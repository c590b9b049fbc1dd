"""Adapters — bindings to transports, hook scripts, terminals and browsers.

Public re-exports for convenient access.
"""

from ux4tools.adapters.base import (
    BrowserLauncher,
    BrowserSession,
    BuildTransport,
    FrameworkHooks,
    Prompter,
)

__all__ = [
    "BrowserLauncher",
    "BrowserSession",
    "BuildTransport",
    "FrameworkHooks",
    "Prompter",
]
