"""
CLI commands for browser testing.

Thin wrappers over ``ux4tools.core.use_cases.test_run`` and
``ux4tools.core.services.test_scaffold``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from ux4tools.core.errors import ToolError
from ux4tools.ui.cli.common import fail, get_context


@click.group("test")
def testing() -> None:
    """Testing — scaffold, deploy and run UX4Automation test sets."""


# ── Scaffolding ─────────────────────────────────────────────────


@testing.command("init-manifest")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def init_manifest(ctx: click.Context, path: Path | None, force: bool) -> None:
    """Write a starter test manifest (default: ./test-manifest.json)."""
    from ux4tools.core.services.test_scaffold import init_manifest as write_manifest

    context = get_context(ctx)
    target = context.cwd / path if path else context.cwd
    try:
        written = write_manifest(target, force=force)
    except (ToolError, OSError) as e:
        fail(e)
    click.secho(f"✅ Created {written}", fg="green")


@testing.command("init-set")
@click.argument("name")
@click.option("--dir", "directory", type=click.Path(file_okay=False, path_type=Path),
              default=None, help="Folder for the test set (default: current folder).")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def init_set(ctx: click.Context, name: str, directory: Path | None, force: bool) -> None:
    """Write a starter test set NAME.js (and testrunner.js if missing)."""
    from ux4tools.core.services.test_scaffold import init_test_set

    context = get_context(ctx)
    folder = context.cwd / directory if directory else context.cwd
    try:
        written = init_test_set(folder, name, force=force)
    except (ToolError, OSError) as e:
        fail(e)
    click.secho(f"✅ Created {written}", fg="green")


# ── Library ─────────────────────────────────────────────────────


@testing.command("install-lib")
@click.argument("directory", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def install_lib(ctx: click.Context, directory: Path | None) -> None:
    """Copy UX4Automation for this app's UX4 version into DIRECTORY."""
    from ux4tools.core.services.automation_lib import (
        ensure_automation_library,
        install_library_into,
    )

    context = get_context(ctx)
    try:
        lib_dir, _ = ensure_automation_library(
            context, ctx.obj.get("transport"), ctx.obj.get("catalog")
        )
        dest = install_library_into(lib_dir, context.cwd / directory if directory else context.cwd)
    except (ToolError, OSError) as e:
        fail(e)
    click.secho(f"✅ UX4Automation copied to {dest}", fg="green")


# ── Run ─────────────────────────────────────────────────────────


@testing.command("run")
@click.option("--manifest", "-m", "manifest_path", required=True,
              type=click.Path(path_type=Path), help="Test manifest (JSON or YAML).")
@click.option("--url", default=None, help="Page to test (if not in the manifest).")
@click.option("--entry-point", "entry_point", default=None, help="Test runner module.")
@click.option("--save-results-to", "save_results_to", default=None, help="Results folder.")
@click.option("--copy-to", "copy_to", default=None, help="Sub-folder of the target to deploy into.")
@click.option("--target", default=None, help="Deployed application folder.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the summary as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    manifest_path: Path,
    url: str | None,
    entry_point: str | None,
    save_results_to: str | None,
    copy_to: str | None,
    target: str | None,
    as_json: bool,
) -> None:
    """Deploy the test scripts and run them in a browser."""
    from ux4tools.core.use_cases.test_run import TestOrchestrator

    context = get_context(ctx)
    overrides = {
        "url": url,
        "entryPoint": entry_point,
        "saveResultsTo": save_results_to,
        "copyTo": copy_to,
        "target": target,
    }
    orchestrator = TestOrchestrator(
        context,
        launcher=ctx.obj.get("launcher"),
        transport=ctx.obj.get("transport"),
        catalog=ctx.obj.get("catalog"),
    )
    try:
        result = orchestrator.run(context.cwd / manifest_path, overrides)
    except ToolError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    report = result.report
    if report is None:
        fail("Testing Completed. No report was produced")

    click.echo()
    click.secho("Results:", fg="cyan", bold=True)
    click.secho(f"   Passed: {report.passed}", fg="green")
    click.secho(f"   Failed: {report.failed}", fg="red" if report.failed else "white")

    if result.saved_to:
        click.echo(f"   Results saved to {result.saved_to[0]}")
    else:
        click.echo(json.dumps(report.json_report, indent="\t"))
        click.secho("Console Output", bold=True)
        click.echo("==============")
        click.echo(report.transcript)

    click.secho("✅ Testing Completed.", fg="green")
