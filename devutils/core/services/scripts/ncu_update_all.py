"""
``ncu-update-all`` — run npm-check-updates on every package.json and
bower.json below a directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from devutils.core.services.scripts.base import Script, ScriptUsageError

EXCLUDED_DIRECTORIES = frozenset({
    "node_modules",
    "bower_components",
    ".git",
    "dist",
    "build",
    "coverage",
})


def find_files(root: Path, filename: str) -> list[Path]:
    """Every ``filename`` below ``root``, skipping excluded directories."""
    found: list[Path] = []
    for current, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d not in EXCLUDED_DIRECTORIES)
        if filename in files:
            found.append(Path(current) / filename)
    return found


class NcuUpdateAllScript(Script):
    name = "ncu-update-all"
    description = "Update dependencies in every package.json / bower.json with ncu"
    usage = "Usage: ncu-update-all [directory]"

    def update_file(self, path: Path, root: Path, bower: bool) -> bool:
        relative = os.path.relpath(path, root)
        self.echo("")
        self.echo(f"Updating: {relative}")
        self.echo("-" * 50)
        command = f'ncu -a -u --packageFile "{path}"'
        if bower:
            command += " -m bower"
        code = self.shell.run_interactive(command)
        if code != 0:
            self.echo(f"Warning: ncu exited with status {code} for {relative}")
            return False
        return True

    def run_portable(self, directory: str | None = None) -> int:
        if not self.shell.command_exists("ncu"):
            self.error(
                "Error: npm-check-updates (ncu) is required but not installed.\n"
                "\n"
                "To install ncu globally, run:\n"
                "  npm install -g npm-check-updates"
            )
            return 1

        root = self.resolve(directory)
        if not root.is_dir():
            raise ScriptUsageError(f"Error: '{root}' is not a directory.")

        self.echo("npm-check-updates: Update All Dependencies")
        self.echo("=" * 42)
        self.echo(f"Scanning directory: {root}")
        self.echo(f"Excluding: {', '.join(sorted(EXCLUDED_DIRECTORIES))}")

        package_files = find_files(root, "package.json")
        self.echo(f"Found {len(package_files)} package.json file(s)")
        bower_files = find_files(root, "bower.json")
        self.echo(f"Found {len(bower_files)} bower.json file(s)")

        total = len(package_files) + len(bower_files)
        if total == 0:
            self.echo("")
            self.echo("No package.json or bower.json files found in this directory.")
            return 0

        ok = sum(self.update_file(p, root, bower=False) for p in package_files)
        ok += sum(self.update_file(p, root, bower=True) for p in bower_files)
        failed = total - ok

        self.echo("")
        self.echo("Summary")
        self.echo("=" * 42)
        self.echo(f"Total files processed: {total}")
        self.echo(f"Successful updates: {ok}")
        if failed:
            self.echo(f"Failed updates: {failed}")
        self.echo("")
        self.echo("Note: To install the updated dependencies, run:")
        self.echo("  npm install   (for npm projects)")
        self.echo("  bower install (for bower projects)")
        return 1 if failed else 0
