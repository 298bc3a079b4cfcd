"""
winget adapter — Windows Package Manager.
"""

from __future__ import annotations

import re

from devutils.adapters.base import PackageManager
from devutils.core.models.result import PackageResult

_AGREEMENTS = "--accept-package-agreements --accept-source-agreements"
_COLUMNS = re.compile(r"\s{2,}")


class Winget(PackageManager):
    name = "winget"
    binary = "winget"

    def _not_available(self) -> PackageResult:
        return PackageResult(success=False, output="winget is not available")

    def install_command(
        self,
        package: str,
        silent: bool = True,
        version: str | None = None,
        source: str | None = None,
        **_,
    ) -> str:
        command = f'winget install "{package}" {_AGREEMENTS}'
        if silent:
            command += " --silent"
        if version:
            command += f' --version "{version}"'
        if source:
            command += f" --source {source}"
        return command

    def uninstall_command(self, package: str, silent: bool = True, **_) -> str:
        command = f'winget uninstall "{package}"'
        if silent:
            command += " --silent"
        return command

    def get_version(self) -> str | None:
        if not self.is_available():
            return None
        result = self.shell.exec("winget --version")
        if not result.ok:
            return None
        return result.stdout.strip().lstrip("v") or None

    def is_package_installed(self, package: str) -> bool:
        if not self.is_available():
            return False
        by_id = self.shell.exec(f'winget list --exact --id "{package}"')
        if by_id.ok and package in by_id.stdout:
            return True
        by_name = self.shell.exec(f'winget list --exact --name "{package}"')
        return by_name.ok and package in by_name.stdout

    def get_package_version(self, package: str) -> str | None:
        if not self.is_available():
            return None
        result = self.shell.exec(f'winget list --exact --id "{package}"')
        if not result.ok:
            return None
        for line in result.stdout.splitlines():
            if package in line:
                parts = _COLUMNS.split(line)
                if len(parts) >= 3:
                    return parts[2].strip()
        return None
