"""
Terminal prompter — interactive questions through click.
"""

from __future__ import annotations

import click

from ux4tools.adapters.base import Prompter


class ClickPrompter(Prompter):
    """Ask the operator on the controlling terminal."""

    def prompt(self, question: str, *, hide_input: bool = False, default: str | None = None) -> str:
        return click.prompt(question, hide_input=hide_input, default=default, show_default=default is not None)

    def confirm(self, question: str, *, default: bool = False) -> bool:
        return click.confirm(question, default=default)
