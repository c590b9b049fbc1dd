"""
UX4 Tools — CLI entrypoint.

Usage:
    ux4 --help
    ux4 install --version ^2.1
    ux4 create-app
    ux4 test run --manifest testing/test-manifest.json
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from ux4tools.core.observability.logging_config import setup_logging_from_env
from ux4tools.core.errors import ToolError
from ux4tools.ui.cli.common import fail, get_context, progress_printer

from ux4tools import __version__

# Tasks after which the daily tool update check runs
UPDATE_CHECK_TASKS = ("install", "create-app", "build-app", "check-update")


@click.group()
@click.version_option(version=__version__, prog_name="ux4")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory.",
)
@click.option("--address", default=None, help="Build server address for this run.")
@click.option("--user", default=None, help="Build server user for this run.")
@click.option("--password", default=None, help="Build server password for this run.")
@click.option("--from-dir", "from_dir", is_flag=True, default=None,
              help="Treat --address as a local build directory.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    cwd: Path | None,
    address: str | None,
    user: str | None,
    password: str | None,
    from_dir: bool | None,
) -> None:
    """UX4 Tools — install, create, build and test UX4 applications."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["cwd"] = cwd
    ctx.obj["address"] = address
    ctx.obj["user"] = user
    ctx.obj["password"] = password
    ctx.obj["fromDir"] = True if from_dir else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging_from_env(debug=debug, verbose=verbose, quiet=quiet)


@cli.result_callback()
@click.pass_context
def _after_task(ctx: click.Context, *_args, **_kwargs) -> None:
    if ctx.invoked_subcommand not in UPDATE_CHECK_TASKS:
        return
    context = ctx.obj.get("context")
    if context is None:
        return

    from ux4tools.core.services.updates import auto_update_due, check_for_update, update_notice

    query = ctx.obj.get("update_query")
    if ctx.invoked_subcommand != "check-update" and auto_update_due(context.cache):
        try:
            if query is None:
                check_for_update(context.cache)
            else:
                check_for_update(context.cache, query)
        except ToolError as e:
            click.secho(f"⚠️  {e}", fg="yellow", err=True)

    notice = update_notice(__version__, context.cache)
    if notice:
        click.secho(notice, fg="cyan")


# ── Install / create / build ────────────────────────────────────


def _lifecycle(ctx: click.Context):
    from ux4tools.core.use_cases.install import ApplicationLifecycle

    context = get_context(ctx)
    return ApplicationLifecycle(
        context,
        transport=ctx.obj.get("transport"),
        catalog=ctx.obj.get("catalog"),
        on_progress=None if ctx.obj.get("quiet") else progress_printer("Extracting"),
    )


@cli.command()
@click.option("--version", "-v", "specifier", default=None,
              help="Version specifier, e.g. latest, 2.1.0, ^2.1 or ~2.1.3.")
@click.option("--standalone", is_flag=True, help="Install the standalone build into this folder.")
@click.option("--local", is_flag=True, help="Skip the download and use installed builds.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, specifier: str | None, standalone: bool, local: bool, as_json: bool) -> None:
    """Download a UX4 build and create or update the application."""
    lifecycle = _lifecycle(ctx)
    try:
        result = lifecycle.run_install(specifier, standalone=standalone, local=local)
    except ToolError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.already_installed:
        click.secho(f"✅ v{result.version} already installed on the system", fg="green")
    elif result.skipped_download:
        click.secho("✅ Using installed builds (download skipped)", fg="green")
    else:
        click.secho(f"✅ UX4 v{result.version} installed to {result.destination}", fg="green")

    if result.app_created:
        click.secho("✅ Application created", fg="green")
    elif result.app_updated:
        click.secho("✅ Application updated", fg="green")
    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")


@cli.command("create-app")
@click.option("--version", "-v", "specifier", default=None,
              help="Installed build to create the application from (default: latest).")
@click.pass_context
def create_app(ctx: click.Context, specifier: str | None) -> None:
    """Create a new UX4 application in the current folder."""
    from ux4tools.core.errors import AppAlreadyExists

    lifecycle = _lifecycle(ctx)
    try:
        if lifecycle.context.app_config is not None:
            raise AppAlreadyExists("A UX4 application already exists at this location.")
        version = lifecycle.resolve_installed(specifier)
        result = lifecycle.create_and_register(version)
    except ToolError as e:
        fail(e)

    if result.app_created:
        click.secho(f"✅ Application created from UX4 v{version}", fg="green")
    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")


@cli.command(
    "build-app",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def build_app(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Build the current application (arguments go to the build script)."""
    lifecycle = _lifecycle(ctx)
    try:
        lifecycle.build_app(list(args))
    except ToolError as e:
        fail(e)


# ── Tool version ────────────────────────────────────────────────


@cli.command("check-update")
@click.pass_context
def check_update(ctx: click.Context) -> None:
    """Check npm for a newer version of UX4 Tools."""
    from ux4tools.core.services.updates import check_for_update, is_up_to_date

    context = get_context(ctx)
    click.echo("Checking for updates.")
    query = ctx.obj.get("update_query")
    try:
        if query is None:
            check_for_update(context.cache)
        else:
            check_for_update(context.cache, query)
    except ToolError as e:
        fail(e)

    if is_up_to_date(__version__, context.cache):
        click.secho("✅ Up to date.", fg="green")


@cli.command("version")
def version() -> None:
    """Print the UX4 Tools version."""
    click.echo(__version__)


cli.add_command(version, name="v")


@cli.command("help")
@click.pass_context
def help_(ctx: click.Context) -> None:
    """Show this message."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


# ── Register sub-groups ─────────────────────────────────────────

from ux4tools.ui.cli.config import config  # noqa: E402
from ux4tools.ui.cli.testing import testing  # noqa: E402

cli.add_command(config)
cli.add_command(testing)


if __name__ == "__main__":
    cli()
