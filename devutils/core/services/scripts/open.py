"""``o`` — open a file or folder with the desktop's default application."""

from __future__ import annotations

import shlex

from devutils.core.models.platform import PlatformType
from devutils.core.services.scripts.base import Script


class OpenScript(Script):
    name = "o"
    description = "Open a file or folder with the default application"
    usage = "Usage: o [path]"

    def _target(self, path: str | None) -> str | None:
        target = self.resolve(path)
        if not target.exists():
            self.error(f"Error: '{path}' does not exist.")
            return None
        return str(target)

    def _open(self, command: str) -> int:
        result = self.shell.exec(command)
        if not result.ok:
            self.error(f"Error: could not open:\n{result.output.strip()}")
            return 1
        return 0

    def run_macos(self, path: str | None = None) -> int:
        target = self._target(path)
        return self._open(f"open {shlex.quote(target)}") if target else 1

    def run_portable(self, path: str | None = None) -> int:
        target = self._target(path)
        if not target:
            return 1
        if self.platform.type is PlatformType.WSL and self.shell.command_exists("explorer.exe"):
            converted = self.shell.exec_sync(f"wslpath -w {shlex.quote(target)}") or target
            # explorer.exe exits 1 even on success
            self.shell.exec(f'explorer.exe "{converted}"')
            return 0
        if not self.shell.command_exists("xdg-open"):
            self.error("Error: xdg-open is not installed (package xdg-utils).")
            return 1
        return self._open(f"xdg-open {shlex.quote(target)} >/dev/null 2>&1 &")

    def run_windows(self, path: str | None = None) -> int:
        target = self._target(path)
        return self._open(f'start "" "{target}"') if target else 1
