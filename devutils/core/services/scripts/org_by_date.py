"""
``org-by-date`` — file dated names into ``YYYY/MM/DD`` folders.

``2024-01-15-notes.txt`` moves to ``./2024/01/15/2024-01-15-notes.txt``.
Only the top level of the directory is scanned.  Files without a date
stay put, and an existing file at the destination is never replaced.
"""

from __future__ import annotations

import re
import shutil

from devutils.core.services.scripts.base import Script, ScriptUsageError

DATE_IN_NAME = re.compile(r"(?<!\d)(\d{4})-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])(?!\d)")


class OrgByDateScript(Script):
    name = "org-by-date"
    description = "Move files with YYYY-MM-DD in the name into YYYY/MM/DD folders"
    usage = "Usage: org-by-date [directory]"

    def run_portable(self, directory: str | None = None) -> int:
        root = self.resolve(directory)
        if not root.is_dir():
            raise ScriptUsageError(f"Error: '{root}' is not a directory.")

        moved = skipped = 0
        for entry in sorted(root.iterdir()):
            if not entry.is_file():
                continue
            match = DATE_IN_NAME.search(entry.name)
            if not match:
                continue

            year, month, day = match.groups()
            target_dir = root / year / month / day
            target = target_dir / entry.name
            if target.exists():
                self.echo(f"Skipped (already exists): {year}/{month}/{day}/{entry.name}")
                skipped += 1
                continue

            try:
                target_dir.mkdir(parents=True, exist_ok=True)
                shutil.move(str(entry), str(target))
            except OSError as e:
                self.error(f"Could not move {entry.name}: {e}")
                skipped += 1
                continue
            self.echo(f"{entry.name} -> {year}/{month}/{day}/")
            moved += 1

        if moved == 0 and skipped == 0:
            self.echo("No files with a YYYY-MM-DD date in the name were found.")
        else:
            self.echo(f"Organized {moved} file(s), skipped {skipped}.")
        return 0
