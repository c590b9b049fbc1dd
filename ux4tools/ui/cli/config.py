"""
CLI commands for the per-user tool configuration.

Thin wrappers over ``ux4tools.core.persistence.settings_file``.
"""

from __future__ import annotations

import json

import click

from ux4tools.core.errors import ToolError
from ux4tools.ui.cli.common import fail, get_context

# Known keys, shown by ``ux4 config list``
CONFIG_KEYS = {
    "address": "Address (or local folder with --from-dir) to download builds from",
    "user": "Username for the build server",
    "password": "Password for the build server (prompted when unset)",
    "database": "Endpoint installations are registered with",
    "fromDir": "Treat address as a local directory (true/false)",
}


@click.group("config")
def config() -> None:
    """Tool configuration — address, user, password, database, fromDir."""


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value ("true"/"false" are stored as booleans)."""
    from ux4tools.core.persistence.settings_file import coerce_value

    context = get_context(ctx)
    try:
        context.config.set(key, coerce_value(value))
    except (ToolError, OSError) as e:
        fail(e)
    click.secho(f"✅ {key} updated", fg="green")


@config.command("get")
@click.argument("key", required=False)
@click.pass_context
def get_value(ctx: click.Context, key: str | None) -> None:
    """Print one value, or the whole configuration."""
    context = get_context(ctx)
    if key is None:
        click.echo(json.dumps(context.config.list(), indent=2))
        return
    if key not in context.config:
        fail(f"'{key}' is not set")
    value = context.config.get(key)
    click.echo(json.dumps(value) if isinstance(value, bool) else str(value))


@config.command("delete")
@click.argument("key")
@click.pass_context
def delete_value(ctx: click.Context, key: str) -> None:
    """Remove a configuration value."""
    context = get_context(ctx)
    try:
        removed = context.config.delete(key)
    except (ToolError, OSError) as e:
        fail(e)
    if not removed:
        fail(f"'{key}' is not set")
    click.secho(f"✅ {key} deleted", fg="green")


@config.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_values(ctx: click.Context, as_json: bool) -> None:
    """List the configuration and the known keys."""
    context = get_context(ctx)
    values = context.config.list()

    if as_json:
        click.echo(json.dumps(values, indent=2))
        return

    click.secho(f"⚙️  {context.config.path}", fg="cyan", bold=True)
    for key, description in CONFIG_KEYS.items():
        if key in values:
            shown = "********" if key == "password" else values[key]
            click.echo(f"   {key:<10} {shown}")
        else:
            click.secho(f"   {key:<10} (not set)  {description}", dim=True)
    for key in sorted(set(values) - set(CONFIG_KEYS)):
        click.echo(f"   {key:<10} {values[key]}")


@config.command("setup")
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Prompt for the user and address when they are missing."""
    context = get_context(ctx)
    missing = [k for k in ("user", "address") if not context.config.get(k)]
    if not missing:
        click.secho("✅ Configuration complete", fg="green")
        return

    click.echo("Some config values are required to continue...")
    questions = {"user": "Username", "address": "Address (to download builds from)"}
    try:
        for key in missing:
            answer = context.prompter.prompt(questions[key])
            if answer:
                context.config.set(key, answer)
    except (ToolError, OSError) as e:
        fail(e)

    click.secho("✅ Values updated.", fg="green")
    click.echo("   These can be modified using: ux4 config set <key> <value>")
