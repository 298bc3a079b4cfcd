"""
CLI command for installing the essential tools.

Thin wrapper over ``devutils.core.use_cases.setup``.
"""

from __future__ import annotations

import json
import sys

import click


def _show_statuses(statuses) -> None:
    click.secho("\n🧰 Essential Tools:", fg="cyan", bold=True)
    for s in statuses:
        mark = "✅ Installed" if s.installed else "❌ Missing  "
        click.echo(f"   {s.tool.name:<15} {mark}  {s.tool.description}")
    click.echo()


@click.command()
@click.option("--force", is_flag=True, help="Install without prompting.")
@click.option("--check", is_flag=True, help="Check tool status without installing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output status as JSON.")
def setup(force: bool, check: bool, as_json: bool) -> None:
    """Install essential tools required by devutils."""
    from devutils.core.services.platform_detect import detect
    from devutils.core.use_cases.setup import install_missing, tool_statuses

    statuses = tool_statuses()

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in statuses], indent=2))
        return

    if check:
        _show_statuses(statuses)
        if any(not s.installed for s in statuses):
            click.echo("Run 'dev setup' to install missing tools.")
        return

    platform = detect()
    click.secho("\n=== DevUtils Setup ===", bold=True)
    click.echo(f"   Platform:        {platform.type.value}")
    click.echo(f"   Package Manager: {platform.package_manager or 'unknown'}")
    _show_statuses(statuses)

    missing = [s.tool for s in statuses if not s.installed]
    if not missing:
        click.secho("✅ All essential tools are already installed.", fg="green")
        return

    click.echo(f"Missing {len(missing)} tool(s): {', '.join(t.name for t in missing)}")
    if not force and not click.confirm("Install missing tools?", default=False):
        click.echo("Setup cancelled.")
        return

    click.echo("\nInstalling missing tools...\n")
    result = install_missing(missing, on_progress=lambda line: click.echo(f"   {line}"))

    click.echo("─" * 50)
    color = "green" if not result.failed else "yellow"
    click.secho(result.summary, fg=color, bold=True)
    if result.installed:
        _show_statuses(tool_statuses())
    if result.failed:
        sys.exit(1)
