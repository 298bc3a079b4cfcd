"""
CLI commands for the shell-replacement scripts.

Every script is available as ``dev scripts <name>`` and as its own
console script (``s``, ``ll``, ``path``, ...).  Thin wrappers over
``devutils.core.services.scripts``.
"""

from __future__ import annotations

import sys

import click


def _run(name: str, *args, **kwargs) -> None:
    from devutils.core.services.scripts import get_script

    script = get_script(
        name,
        on_output=click.echo,
        on_error=lambda line: click.echo(line, err=True),
        confirm=lambda prompt: click.confirm(prompt, default=False),
    )
    code = script.run(*args, **kwargs)
    if code:
        sys.exit(code)


@click.group()
def scripts() -> None:
    """Shell-replacement scripts (also installed as standalone commands)."""


@scripts.command("path")
def path_cmd() -> None:
    """Print each PATH entry on its own line."""
    _run("path")


@scripts.command("org-by-date")
@click.argument("directory", required=False)
def org_by_date_cmd(directory: str | None) -> None:
    """Move files with YYYY-MM-DD in the name into YYYY/MM/DD folders."""
    _run("org-by-date", directory)


@scripts.command("delete-files")
@click.argument("pattern", required=False)
@click.argument("directory", required=False)
def delete_files_cmd(pattern: str | None, directory: str | None) -> None:
    """Recursively delete files matching PATTERN (default: *.DS_Store)."""
    _run("delete-files", pattern, directory)


@scripts.command("docker-clean")
@click.option("--force", "-f", is_flag=True, help="Skip the confirmation prompt.")
def docker_clean_cmd(force: bool) -> None:
    """Remove all Docker containers, images and volumes."""
    _run("docker-clean", force=force)


@scripts.command("empty-trash")
@click.option("--verbose", "-v", is_flag=True, help="Show each location as it is emptied.")
def empty_trash_cmd(verbose: bool) -> None:
    """Empty the trash / Recycle Bin."""
    _run("empty-trash", verbose=verbose)


@scripts.command("show-hidden-files")
def show_hidden_files_cmd() -> None:
    """Show hidden files in Finder / Explorer / GNOME."""
    _run("show-hidden-files")


@scripts.command("hide-hidden-files")
def hide_hidden_files_cmd() -> None:
    """Hide hidden files in Finder / Explorer / GNOME."""
    _run("hide-hidden-files")


@scripts.command("git-backup")
@click.argument("target_folder", required=False)
@click.argument("repo_url", required=False)
def git_backup_cmd(target_folder: str | None, repo_url: str | None) -> None:
    """Mirror-clone REPO_URL (default: origin) into a dated zip in TARGET_FOLDER."""
    _run("git-backup", target_folder, repo_url)


@scripts.command("ncu-update-all")
@click.argument("directory", required=False)
def ncu_update_all_cmd(directory: str | None) -> None:
    """Run npm-check-updates on every package.json / bower.json."""
    _run("ncu-update-all", directory)


@scripts.command("s")
@click.argument("pattern", nargs=-1)
def search_cmd(pattern: tuple[str, ...]) -> None:
    """Search file contents recursively (case-insensitive)."""
    _run("s", *pattern)


@scripts.command("o")
@click.argument("path", required=False)
def open_cmd(path: str | None) -> None:
    """Open PATH (default: .) with the default application."""
    _run("o", path)


@scripts.command("ll", context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def ll_cmd(args: tuple[str, ...]) -> None:
    """Long directory listing (extra flags go to ls)."""
    _run("ll", *args)


# ── Standalone console scripts ──────────────────────────────────


def _entry(command: click.Command):
    def main() -> None:
        from devutils.core.observability.logging_config import resolve_level, setup_logging

        setup_logging(resolve_level())
        command(prog_name=command.name)

    main.__name__ = f"{command.callback.__name__}_main"
    return main


path_main = _entry(path_cmd)
org_by_date_main = _entry(org_by_date_cmd)
delete_files_main = _entry(delete_files_cmd)
docker_clean_main = _entry(docker_clean_cmd)
empty_trash_main = _entry(empty_trash_cmd)
show_hidden_files_main = _entry(show_hidden_files_cmd)
hide_hidden_files_main = _entry(hide_hidden_files_cmd)
git_backup_main = _entry(git_backup_cmd)
ncu_update_all_main = _entry(ncu_update_all_cmd)
search_main = _entry(search_cmd)
open_main = _entry(open_cmd)
ll_main = _entry(ll_cmd)
