"""``path`` — print each PATH entry on its own line."""

from __future__ import annotations

import os

from devutils.core.services.scripts.base import Script


class PathScript(Script):
    name = "path"
    description = "Print each PATH entry on its own line"

    def run_portable(self) -> int:
        value = self.env.get("PATH") or self.env.get("Path") or ""
        if not value:
            self.echo("PATH environment variable is not set or empty.")
            return 0
        for entry in value.split(os.pathsep):
            if entry:
                self.echo(entry)
        return 0
