"""
Chocolatey adapter — Windows and Git Bash.

Chocolatey's bin directory is not on PATH in the session that installed
it, so the well-known install location is probed as a fallback.
"""

from __future__ import annotations

import os

from devutils.adapters.base import PackageManager
from devutils.core.models.result import PackageResult

CHOCO_BIN_DIR = r"C:\ProgramData\chocolatey\bin"
CHOCO_EXE = CHOCO_BIN_DIR + r"\choco.exe"


def add_bin_to_path() -> bool:
    """Prepend Chocolatey's bin dir to this process's PATH (idempotent)."""
    current = os.environ.get("PATH", "")
    entries = [p.lower() for p in current.split(";")]
    if CHOCO_BIN_DIR.lower() in entries:
        return False
    os.environ["PATH"] = f"{CHOCO_BIN_DIR};{current}"
    return True


class Choco(PackageManager):
    name = "choco"
    binary = "choco"

    def executable(self) -> str | None:
        found = self.shell.which("choco")
        if found:
            return "choco"
        if self.shell.path_exists(CHOCO_EXE):
            return CHOCO_EXE
        return None

    def is_available(self) -> bool:
        return self.executable() is not None

    def _not_available(self) -> PackageResult:
        return PackageResult(success=False, output="Chocolatey is not installed")

    def install_command(
        self, package: str, force: bool = False, version: str | None = None, **_
    ) -> str:
        command = f'"{self.executable() or "choco"}" install {package} -y'
        if force:
            command += " --force"
        if version:
            command += f" --version={version}"
        return command

    def uninstall_command(self, package: str, **_) -> str:
        return f'"{self.executable() or "choco"}" uninstall {package} -y'

    def update_command(self) -> str:
        return f'"{self.executable() or "choco"}" upgrade chocolatey -y'

    def _run(self, args: str):
        return self.shell.exec(f'"{self.executable()}" {args}')

    def get_version(self) -> str | None:
        if not self.is_available():
            return None
        result = self._run("--version")
        return result.stdout.strip() if result.ok else None

    def is_package_installed(self, package: str) -> bool:
        if not self.is_available():
            return False
        result = self._run(f"list --local-only --exact {package}")
        return result.ok and package.lower() in result.stdout.lower()

    def get_package_version(self, package: str) -> str | None:
        if not self.is_available():
            return None
        result = self._run(f"list --local-only --exact {package}")
        if not result.ok:
            return None
        for line in result.stdout.splitlines():
            parts = line.split()
            if parts and parts[0].lower() == package.lower():
                return parts[1] if len(parts) > 1 else None
        return None

    def upgrade(self, package: str | None = None) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self._run(f"upgrade {package or 'all'} -y"))

    def search(self, query: str) -> list[dict[str, str]]:
        if not self.is_available():
            return []
        result = self._run(f'search "{query}"')
        if not result.ok:
            return []
        found = []
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) >= 2 and not line.startswith("Chocolatey") and "packages found" not in line:
                found.append({"name": parts[0], "version": parts[1]})
        return found

    def list_installed(self) -> list[dict[str, str]]:
        if not self.is_available():
            return []
        result = self._run("list --local-only")
        if not result.ok:
            return []
        installed = []
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) >= 2 and not line.startswith("Chocolatey") and "packages installed" not in line:
                installed.append({"name": parts[0], "version": parts[1]})
        return installed

    def list_outdated(self) -> list[dict[str, str]]:
        """Parse ``choco outdated`` (``name|current|available|pinned``)."""
        if not self.is_available():
            return []
        result = self._run("outdated")
        if not result.ok:
            return []
        outdated = []
        for line in result.stdout.splitlines():
            if "|" not in line:
                continue
            parts = line.split("|")
            if len(parts) >= 3:
                outdated.append({
                    "name": parts[0].strip(),
                    "current": parts[1].strip(),
                    "available": parts[2].strip(),
                })
        return outdated

    def pin(self, package: str) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self._run(f'pin add -n="{package}"'))

    def unpin(self, package: str) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self._run(f'pin remove -n="{package}"'))
