"""
``git-backup`` — zip a mirror clone of a repository.

    git-backup <target-folder> [ssh-repo]

Each backup is ``<repo>_<YYYYMMDD-HHMMSS>.zip`` holding a README and
the ``<repo>.git`` mirror.  Before creating a new archive the latest
existing one is extracted and its HEAD compared with the fresh clone;
an unchanged HEAD means no new archive is written.

Archives are built with ``zip`` / ``unzip``, or PowerShell
``Compress-Archive`` / ``Expand-Archive`` on Windows.
"""

from __future__ import annotations

import re
import shlex
import tempfile
from datetime import datetime
from pathlib import Path

from devutils.core.models.platform import WINDOWS_FAMILY
from devutils.core.services.scripts.base import Script, ScriptUsageError

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
_BACKUP_NAME = re.compile(r"^(?P<repo>.+)_(?P<stamp>\d{8}-\d{6})\.zip$")

README_TEMPLATE = """\
# {repo} backup

- Source: {url}
- Created: {created}
- HEAD: {head}

This archive holds a bare mirror clone (`{repo}.git`).

## Restore

    git clone {repo}.git {repo}
"""


def repo_name_from_url(url: str) -> str:
    """``git@github.com:me/tool.git`` → ``tool``."""
    tail = re.split(r"[/:\\]", url.rstrip("/"))[-1]
    return tail[:-4] if tail.endswith(".git") else tail


def latest_backup(target: Path, repo: str) -> Path | None:
    """Newest ``<repo>_<stamp>.zip`` in ``target`` by its timestamp."""
    found = []
    for entry in target.glob(f"{repo}_*.zip"):
        match = _BACKUP_NAME.match(entry.name)
        if match and match.group("repo") == repo:
            found.append((match.group("stamp"), entry))
    return max(found)[1] if found else None


class GitBackupScript(Script):
    name = "git-backup"
    description = "Mirror-clone a repository into a dated zip archive"
    usage = "Usage: git-backup <target-folder> [ssh-repo]"

    @property
    def windows(self) -> bool:
        return self.platform.type in WINDOWS_FAMILY

    def quote(self, value: Path | str) -> str:
        if self.windows:
            return f'"{value}"'
        return shlex.quote(str(value))

    # ── Steps ───────────────────────────────────────────────────

    def origin_url(self) -> str | None:
        return self.shell.exec_sync("git config --get remote.origin.url", cwd=str(self.cwd)) or None

    def head_of(self, git_dir: Path) -> str | None:
        return self.shell.exec_sync(f"git --git-dir={self.quote(git_dir)} rev-parse HEAD") or None

    def extract(self, archive: Path, dest: Path) -> bool:
        if self.windows:
            command = (
                "powershell.exe -NoProfile -Command "
                f"\"Expand-Archive -LiteralPath '{archive}' -DestinationPath '{dest}' -Force\""
            )
        else:
            command = f"unzip -q {self.quote(archive)} -d {self.quote(dest)}"
        return self.shell.exec(command).ok

    def compress(self, staging: Path, archive: Path) -> bool:
        if self.windows:
            command = (
                "powershell.exe -NoProfile -Command "
                f"\"Compress-Archive -Path '{staging}' -DestinationPath '{archive}'\""
            )
            return self.shell.exec(command).ok
        return self.shell.exec(
            f"zip -qr {self.quote(archive)} {self.quote(staging.name)}", cwd=str(staging.parent),
        ).ok

    # ── Entry point ─────────────────────────────────────────────

    def run_portable(self, target_folder: str | None = None, repo_url: str | None = None) -> int:
        if not target_folder:
            raise ScriptUsageError("Error: target folder is required.")
        if not self.shell.command_exists("git"):
            self.error("Error: git is required but not installed.")
            return 1
        if not self.windows and not self.shell.command_exists("zip"):
            self.error("Error: zip is required but not installed.")
            return 1

        url = repo_url or self.origin_url()
        if not url:
            raise ScriptUsageError(
                "Error: no repository given and the current directory has no 'origin' remote."
            )
        repo = repo_name_from_url(url)
        target = self.resolve(target_folder)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.error(f"Error: cannot create {target}: {e}")
            return 1

        with tempfile.TemporaryDirectory(prefix="git-backup-") as tmp:
            work = Path(tmp)
            staging = work / repo
            staging.mkdir()
            mirror = staging / f"{repo}.git"

            self.echo(f"Cloning {url} (mirror)...")
            clone = self.shell.exec(f"git clone --mirror {self.quote(url)} {self.quote(mirror)}")
            if not clone.ok:
                self.error(f"Error: git clone failed:\n{clone.output.strip()}")
                return 1
            head = self.head_of(mirror)

            previous = latest_backup(target, repo)
            if previous and head:
                extracted = work / "previous"
                if self.extract(previous, extracted):
                    old_head = self.head_of(extracted / repo / f"{repo}.git")
                    if old_head == head:
                        self.echo(f"No changes since {previous.name} (HEAD {head[:12]}). Skipping.")
                        return 0
                else:
                    self.echo(f"Warning: could not extract {previous.name}; creating a new backup.")

            created = datetime.now()
            (staging / "README.md").write_text(
                README_TEMPLATE.format(
                    repo=repo, url=url, created=created.isoformat(timespec="seconds"),
                    head=head or "unknown",
                ),
                encoding="utf-8",
            )

            archive = target / f"{repo}_{created.strftime(TIMESTAMP_FORMAT)}.zip"
            self.echo(f"Creating {archive.name}...")
            if not self.compress(staging, archive):
                self.error("Error: failed to create the archive.")
                return 1

        self.echo(f"Backup saved to {archive}")
        return 0
