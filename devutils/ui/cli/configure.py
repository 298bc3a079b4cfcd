"""
CLI command for the developer profile (``~/.devutils``).

Thin wrapper over ``devutils.core.use_cases.configure``.
"""

from __future__ import annotations

import sys

import click


def _ask(label: str, default: str | None) -> str:
    return click.prompt(label, default=default or "", show_default=bool(default)).strip()


def _show(config, path) -> None:
    click.secho("\n👤 Current Configuration:", fg="cyan", bold=True)
    click.echo(f"   Name:  {config.user.name}")
    click.echo(f"   Email: {config.user.email}")
    click.echo(f"   URL:   {config.user.url or '(not set)'}")
    click.echo(f"\n   Config file: {path}")
    click.echo(f"   Created:     {config.created}")
    click.echo(f"   Updated:     {config.updated}")
    click.echo()


@click.command()
@click.option("--name", default=None, help="Developer name.")
@click.option("--email", default=None, help="Developer email.")
@click.option("--url", default=None, help="Developer URL (optional).")
@click.option("--force", is_flag=True, help="Overwrite existing config without prompting.")
@click.option("--show", "-s", is_flag=True, help="Display current configuration.")
def configure(
    name: str | None,
    email: str | None,
    url: str | None,
    force: bool,
    show: bool,
) -> None:
    """Configure developer profile and create ~/.devutils."""
    from devutils.core.config.loader import ConfigError, config_path
    from devutils.core.use_cases.configure import configure as save_profile
    from devutils.core.use_cases.configure import current_config

    path = config_path()
    existing = current_config(path)

    if show:
        if existing:
            _show(existing, path)
        else:
            click.secho("⚠️  No configuration found.", fg="yellow")
            click.echo(f"   Run 'dev configure' to create {path}")
        return

    if existing and not force:
        _show(existing, path)
        if not click.confirm("Do you want to update this configuration?", default=False):
            click.echo("Configuration unchanged.")
            return

    if not (name and email):
        click.secho("\n--- Developer Profile Setup ---\n", bold=True)
        defaults = existing.user if existing else None
        name = _ask("Name (required)", name or (defaults.name if defaults else None))
        if not name:
            click.secho("❌ Error: Name is required.", fg="red")
            sys.exit(1)
        email = _ask("Email (required)", email or (defaults.email if defaults else None))
        if not email:
            click.secho("❌ Error: Email is required.", fg="red")
            sys.exit(1)
        url = _ask("URL (optional)", url or (defaults.url if defaults else None)) or None

    try:
        config = save_profile(name, email, url, path)
    except ConfigError as e:
        click.secho(f"❌ Error: {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ Configuration saved to {path}", fg="green")
    _show(config, path)
