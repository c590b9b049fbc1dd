"""
Shared helpers for the CLI command modules.
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from ux4tools.core.context import OVERRIDABLE_KEYS, ToolContext
from ux4tools.core.errors import ToolError


def fail(message: object) -> NoReturn:
    """Print a highlighted error and exit 1."""
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


def get_context(ctx: click.Context) -> ToolContext:
    """The ToolContext for this invocation, built on first use.

    Tests inject one via ``CliRunner.invoke(cli, ..., obj={"context": ...})``.
    """
    ctx.ensure_object(dict)
    context = ctx.obj.get("context")
    if context is None:
        overrides = {k: ctx.obj.get(k) for k in OVERRIDABLE_KEYS}
        try:
            context = ToolContext.create(cwd=ctx.obj.get("cwd"), overrides=overrides)
        except ToolError as e:
            fail(e)
        ctx.obj["context"] = context
    return context


def progress_printer(label: str):
    """A ``(processed, total)`` callback that redraws one status line."""
    def _report(processed: int, total: int) -> None:
        click.echo(f"\r   {label}: {processed}/{total}", nl=processed >= total)

    return _report
