"""
CLI command for upgrading devutils itself.

Thin wrapper over ``devutils.core.services.version_check``.
"""

from __future__ import annotations

import json
import sys

import click

from devutils import PACKAGE_NAME


@click.command()
@click.option("--check", is_flag=True, help="Only report whether an update is available.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def update(check: bool, as_json: bool) -> None:
    """Update devutils to the latest published version."""
    from devutils.core.services.version_check import check_for_update, self_update

    result = check_for_update()
    run = result["update_available"] and not check

    if as_json:
        if run:
            result["update"] = self_update()
        click.echo(json.dumps(result, indent=2))
        if run and "error" in result["update"]:
            sys.exit(1)
        return

    click.secho(f"\n📦 {PACKAGE_NAME}", fg="cyan", bold=True)
    click.echo(f"   Current version: {result['current']}")
    click.echo("   Checking for updates...")

    if not result["latest"]:
        click.secho("   ⚠️  Unable to check for updates (PyPI unreachable)", fg="yellow")
        click.echo()
        return

    click.echo(f"   Latest version:  {result['latest']}")
    if not result["update_available"]:
        click.secho("   ✅ You are already running the latest version.", fg="green")
        click.echo()
        return

    click.secho(f"   ⬆️  Update available: {result['current']} -> {result['latest']}", fg="yellow")
    if check:
        click.echo("\n   Run 'dev update' to install it.")
        click.echo()
        return

    click.echo(f"\n   Installing {PACKAGE_NAME} {result['latest']}...")
    outcome = self_update()
    if "error" in outcome:
        click.secho(f"   ❌ Update failed: {outcome['error']}", fg="red")
        if outcome["output"].strip():
            click.echo(outcome["output"].rstrip())
        click.echo("\n   Try running manually:")
        click.echo(f"     pip install --upgrade {PACKAGE_NAME}")
        sys.exit(1)

    click.secho(f"   ✅ Successfully updated to version {result['latest']}", fg="green")
    click.echo()
