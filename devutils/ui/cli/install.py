"""
CLI command for tool installs with dependency resolution.

Thin wrapper over ``devutils.core.use_cases.install``.
"""

from __future__ import annotations

import json
import sys

import click


def _list(as_json: bool) -> None:
    from devutils.core.services.installs import get_installer, list_installers

    rows = []
    for name in list_installers():
        installer = get_installer(name)
        rows.append({
            "name": name,
            "title": installer.title,
            "description": installer.description,
            "eligible": installer.is_eligible(),
        })

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.secho("\n📦 Available installers:", fg="cyan", bold=True)
    for row in rows:
        suffix = "" if row["eligible"] else click.style("  (not available on this platform)", fg="yellow")
        click.echo(f"   {row['name']:<20} {row['description']}{suffix}")
    click.echo("\n   Usage: dev install <name>\n")


@click.command()
@click.argument("name", required=False)
@click.option("--list", "list_", is_flag=True, help="List all available installers.")
@click.option("--dry-run", is_flag=True, help="Show the install plan without running it.")
@click.option("--force", is_flag=True, help="Skip confirmation prompts.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    name: str | None,
    list_: bool,
    dry_run: bool,
    force: bool,
    as_json: bool,
) -> None:
    """Install a development tool and the tools it depends on."""
    from devutils.core.use_cases.install import plan_install, run_plan

    if list_:
        _list(as_json)
        return

    if not name:
        click.secho("❌ No package specified.", fg="red")
        click.echo("   Usage: dev install <name>")
        click.echo("   Run `dev install --list` to see available options.")
        sys.exit(1)

    plan = plan_install(name)
    verbose = (ctx.obj or {}).get("verbose", False)

    if as_json and (dry_run or not plan.runnable):
        click.echo(json.dumps(plan.to_dict(), indent=2))
        sys.exit(0 if plan.known and plan.eligible else 1)

    if not plan.known:
        click.secho(f'❌ Unknown package "{name}".', fg="red")
        click.echo("   Run `dev install --list` to see available options.")
        sys.exit(1)
    if plan.already_installed:
        click.secho(f"✅ {plan.title} is already installed.", fg="green")
        return
    if not plan.eligible:
        click.secho(f"❌ {plan.title} is not available for this platform.", fg="red")
        sys.exit(1)

    if verbose:
        for note in plan.notes:
            click.echo(f"   [{note}]")

    if len(plan.steps) > 1:
        click.secho("\nThe following will be installed:", bold=True)
        for step in plan.steps:
            click.echo(f"   • {step.title}")
    else:
        click.echo(f"\nPreparing to install: {plan.title}")

    if dry_run:
        click.secho("[Dry run mode - no changes will be made]", fg="yellow")
        return

    if not force and not click.confirm("Proceed with installation?", default=False):
        click.echo("Installation cancelled.")
        return

    def _on_step(step) -> None:
        click.echo("\n" + "─" * 50)
        click.secho(f"Installing {step.title}...", bold=True)
        click.echo("─" * 50)

    def _continue(step, report) -> bool:
        return force or click.confirm("Continue with remaining installations?", default=False)

    reports = run_plan(
        plan,
        on_progress=lambda line: click.echo(f"   {line}"),
        on_step=_on_step,
        should_continue=_continue,
    )

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in reports], indent=2))

    ok = sum(1 for r in reports if r.succeeded)
    failed = len(reports) - ok
    click.echo("\n" + "─" * 50)
    click.secho("Installation Summary:", bold=True)
    click.secho(f"   ✅ Successful: {ok}", fg="green")
    if failed:
        click.secho(f"   ❌ Failed: {failed}", fg="red")
        sys.exit(1)
