"""
devutils — CLI entrypoint.

Usage:
    dev --help
    dev status
    dev install jq
    dev update --check
    python -m devutils.main setup --check
"""

from __future__ import annotations

import json
import os
import sys

import click

from devutils import PACKAGE_NAME, __version__
from devutils.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name=PACKAGE_NAME)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """devutils — bootstrap and maintain a developer machine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-update-check", is_flag=True, help="Skip the PyPI version check.")
def status(as_json: bool, no_update_check: bool) -> None:
    """Display current configuration and environment health."""
    from devutils.core.use_cases.status import get_status

    result = get_status(check_updates=not no_update_check)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("\n📋 DevUtils Status", fg="cyan", bold=True)

    click.secho("\n   Configuration:", bold=True)
    click.echo(f"     File:    {result.config_file}")
    if result.config:
        user = result.config.user
        click.echo("     Status:  ✅ Valid")
        click.echo(f"     User:    {user.name} <{user.email}>")
        click.echo(f"     Updated: {result.config.updated}")
    else:
        click.echo("     Status:  ❌ Not found")

    click.secho("\n   Environment:", bold=True)
    click.echo(f"     Platform: {result.platform.type.value}"
               f" ({result.platform.package_manager or 'no package manager'})")
    click.echo(f"     Python:   {result.python_version}")
    click.echo(f"     CWD:      {result.cwd}")

    click.secho("\n   Git Repository:", bold=True)
    if result.git_root:
        click.echo(f"     Root:    {result.git_root}")
        click.echo(f"     Branch:  {result.git_branch or 'Unknown'}")
    else:
        click.echo("     Status:  Not in a git repository")

    click.secho("\n   Available Tools:", bold=True)
    for label, present in result.tools.items():
        click.echo(f"     {'✅' if present else '❌'} {label}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def version(as_json: bool) -> None:
    """Display current version and check for updates."""
    from devutils.core.services.version_check import check_for_update

    if as_json:
        click.echo(json.dumps(check_for_update(), indent=2))
        return

    click.secho(f"\n📦 {PACKAGE_NAME}", fg="cyan", bold=True)
    click.echo(f"   Current version: {__version__}")
    click.echo("   Checking for updates...")
    result = check_for_update()

    if not result["latest"]:
        click.secho("   ⚠️  Unable to check for updates (PyPI unreachable)", fg="yellow")
    elif result["update_available"]:
        click.secho(f"   ⬆️  Update available: {result['current']} -> {result['latest']}", fg="yellow")
        click.echo("\n   To update, run:")
        click.echo(f"     pip install --upgrade {PACKAGE_NAME}")
    else:
        click.echo(f"   Latest version:  {result['latest']}")
        click.secho("   ✅ You are running the latest version.", fg="green")
    click.echo()


# ── Register sub-command groups from devutils/ui/cli/ ──────────────

from devutils.ui.cli.completion import completion
from devutils.ui.cli.configure import configure
from devutils.ui.cli.install import install
from devutils.ui.cli.scripts import scripts
from devutils.ui.cli.setup import setup
from devutils.ui.cli.update import update

cli.add_command(configure)
cli.add_command(setup)
cli.add_command(install)
cli.add_command(completion)
cli.add_command(scripts)
cli.add_command(update)


def main() -> None:
    """Console entry point; answers tab-completion requests from the shell."""
    if os.environ.get("COMP_LINE"):
        from devutils.core.services.completion import complete

        for line in complete():
            click.echo(line)
        sys.exit(0)
    cli()


if __name__ == "__main__":
    main()
