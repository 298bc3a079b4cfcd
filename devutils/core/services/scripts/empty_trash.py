"""
``empty-trash`` — empty the desktop trash.

Linux uses the freedesktop.org layout under ``~/.local/share/Trash``.
macOS also clears mounted volume trashes, ASL logs and the download
quarantine database.  Windows clears the Recycle Bin via PowerShell.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from devutils.core.services.scripts.base import Script

FREEDESKTOP_TRASH = (".local", "share", "Trash")
FREEDESKTOP_SUBDIRS = ("files", "info", "expunged")
VOLUMES_DIR = Path("/Volumes")
ASL_DIR = Path("/private/var/log/asl")
QUARANTINE_PREFIX = "com.apple.LaunchServices.QuarantineEventsV"

CLEAR_RECYCLE_BIN = (
    'powershell.exe -NoProfile -Command "Clear-RecycleBin -Force -ErrorAction SilentlyContinue"'
)
CLEAR_RECYCLE_BIN_COM = (
    'powershell.exe -NoProfile -Command "$shell = New-Object -ComObject Shell.Application; '
    "$shell.NameSpace(10).Items() | ForEach-Object { "
    'Remove-Item $_.Path -Force -Recurse -ErrorAction SilentlyContinue }"'
)


@dataclass
class EmptyResult:
    deleted: int = 0
    errors: list[str] = field(default_factory=list)


def empty_directory(path: Path) -> EmptyResult:
    """Delete everything inside ``path``, keeping ``path`` itself."""
    result = EmptyResult()
    if not path.is_dir():
        return result
    try:
        entries = list(path.iterdir())
    except OSError as e:
        result.errors.append(f"{path}: {e}")
        return result

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            result.deleted += 1
        except OSError as e:
            result.errors.append(f"{entry}: {e}")
    return result


class EmptyTrashScript(Script):
    name = "empty-trash"
    description = "Empty the trash / Recycle Bin"
    usage = "Usage: empty-trash [--verbose|-v]"

    def run_portable(self, verbose: bool = False) -> int:
        trash = self.home.joinpath(*FREEDESKTOP_TRASH)
        deleted = 0
        errors: list[str] = []
        for sub in FREEDESKTOP_SUBDIRS:
            path = trash / sub
            if not path.is_dir():
                continue
            if verbose:
                self.echo(f"Emptying: {path}")
            result = empty_directory(path)
            deleted += result.deleted
            errors.extend(result.errors)

        if deleted:
            self.echo(f"Trash emptied. Removed {deleted} item(s).")
        elif not errors:
            self.echo("Trash is already empty.")

        if errors:
            self.error("Some items could not be removed:")
            for err in errors:
                self.error(f"  {err}")
            return 1
        return 0

    def run_amazon_linux(self, verbose: bool = False) -> int:
        if not self.home.joinpath(*FREEDESKTOP_TRASH, "files").is_dir():
            self.echo("No trash folder found.")
            self.echo("")
            self.echo("On server environments, files deleted with rm are permanently removed.")
            self.echo("A trash folder is only created when using a desktop file manager.")
            return 0
        return self.run_portable(verbose=verbose)

    def run_macos(self, verbose: bool = False) -> int:
        summary: list[str] = []
        self.echo("Emptying trash and clearing system logs...")

        user_trash = self.home / ".Trash"
        if user_trash.is_dir():
            result = empty_directory(user_trash)
            if result.deleted:
                summary.append(f"User trash: {result.deleted} item(s) removed")
            if result.errors:
                self.error("Some files in user trash could not be removed (may need sudo).")

        if VOLUMES_DIR.is_dir():
            for volume in sorted(VOLUMES_DIR.iterdir()):
                trashes = volume / ".Trashes"
                if not trashes.is_dir():
                    continue
                result = empty_directory(trashes)
                if result.deleted:
                    summary.append(f"{volume.name} trash: {result.deleted} item(s) removed")
                elif result.errors and verbose:
                    self.echo(f"Could not empty {trashes} without sudo.")

        if ASL_DIR.is_dir():
            removed = 0
            for log in ASL_DIR.glob("*.asl"):
                try:
                    log.unlink()
                    removed += 1
                except OSError:
                    continue
            if removed:
                summary.append(f"ASL logs: {removed} file(s) cleared")

        preferences = self.home / "Library" / "Preferences"
        if preferences.is_dir() and self.shell.command_exists("sqlite3"):
            for db in sorted(preferences.glob(f"{QUARANTINE_PREFIX}*")):
                result = self.shell.exec(f"sqlite3 \"{db}\" 'delete from LSQuarantineEvent'")
                if result.ok:
                    summary.append("Quarantine database: cleared")
                elif verbose:
                    self.echo(f"Could not clear quarantine database: {db}")

        self.echo("")
        if summary:
            self.echo("Summary:")
            for line in summary:
                self.echo(f"  - {line}")
        else:
            self.echo("Trash is already empty (or requires sudo for remaining items).")
        self.echo("")
        self.echo("Tip: For complete cleanup including system files, run with sudo:")
        self.echo("  sudo rm -rf /Volumes/*/.Trashes ~/.Trash /private/var/log/asl/*.asl")
        return 0

    def run_windows(self, verbose: bool = False) -> int:
        self.echo("Emptying Recycle Bin...")
        result = self.shell.exec(CLEAR_RECYCLE_BIN)
        if not result.ok:
            if verbose:
                self.echo(result.output.strip())
            result = self.shell.exec(CLEAR_RECYCLE_BIN_COM)
        if not result.ok:
            self.error("Error: Could not empty the Recycle Bin.")
            self.error("You may need to run this command as Administrator.")
            return 1
        self.echo("Recycle Bin emptied successfully.")
        return 0
