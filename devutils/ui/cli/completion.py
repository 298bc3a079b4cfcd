"""
CLI commands for shell tab completion.

Thin wrappers over ``devutils.core.services.completion``.
"""

from __future__ import annotations

import sys

import click


def _report(result: dict, hint: str) -> None:
    if "error" in result:
        click.secho(f"❌ {result['error']}", fg="red")
        sys.exit(1)
    if not result.get("changed"):
        click.echo(result["message"])
        return
    click.secho(f"✅ {result['message']}", fg="green")
    click.echo(hint.format(rc_file=result["rc_file"]))


@click.group()
def completion() -> None:
    """Manage shell tab completion (bash, zsh, fish)."""


@completion.command("install")
def completion_install() -> None:
    """Add tab completion to your shell rc file."""
    from devutils.core.services.completion import install_completion

    _report(install_completion(), "   Restart your shell or run:\n     source {rc_file}")


@completion.command("uninstall")
def completion_uninstall() -> None:
    """Remove tab completion from your shell rc file."""
    from devutils.core.services.completion import uninstall_completion

    _report(uninstall_completion(), "   Restart your shell for changes to take effect.")
