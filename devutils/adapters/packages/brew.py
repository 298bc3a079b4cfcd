"""
Homebrew adapter — formulae and casks on macOS.
"""

from __future__ import annotations

import re

from devutils.adapters.base import PackageManager
from devutils.core.models.result import PackageResult

_VERSION_RE = re.compile(r"Homebrew\s+(\d+\.\d+\.?\d*)")


class Brew(PackageManager):
    name = "brew"
    binary = "brew"

    def _not_available(self) -> PackageResult:
        return PackageResult(success=False, output="Homebrew is not installed")

    def install_command(self, package: str, cask: bool = False, **_) -> str:
        return f"brew install --cask {package}" if cask else f"brew install {package}"

    def uninstall_command(self, package: str, cask: bool = False, **_) -> str:
        return f"brew uninstall --cask {package}" if cask else f"brew uninstall {package}"

    def update_command(self) -> str:
        return "brew update"

    def get_version(self) -> str | None:
        if not self.is_available():
            return None
        result = self.shell.exec("brew --version")
        if not result.ok:
            return None
        match = _VERSION_RE.search(result.stdout)
        return match.group(1) if match else None

    def install_cask(self, cask: str) -> PackageResult:
        return self.install(cask, cask=True)

    def uninstall_cask(self, cask: str) -> PackageResult:
        return self.uninstall(cask, cask=True)

    def is_formula_installed(self, formula: str) -> bool:
        if not self.is_available():
            return False
        return self.shell.exec(f"brew list --formula {formula}").ok

    def is_cask_installed(self, cask: str) -> bool:
        if not self.is_available():
            return False
        return self.shell.exec(f"brew list --cask {cask}").ok

    def upgrade(self, formula: str | None = None) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        command = f"brew upgrade {formula}" if formula else "brew upgrade"
        return PackageResult.from_shell(self.shell.exec(command))

    def tap(self, repository: str) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self.shell.exec(f"brew tap {repository}"))

    def search(self, query: str) -> dict[str, list[str]]:
        """Split ``brew search`` output into formulae and casks."""
        found: dict[str, list[str]] = {"formulas": [], "casks": []}
        if not self.is_available():
            return found
        result = self.shell.exec(f"brew search {query}")
        if not result.ok:
            return found

        section = "formulas"
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            if "==> Formulae" in line:
                section = "formulas"
                continue
            if "==> Casks" in line:
                section = "casks"
                continue
            if line.startswith("==>"):
                continue
            found[section].extend(line.split())
        return found

    def info(self, name: str) -> str | None:
        if not self.is_available():
            return None
        result = self.shell.exec(f"brew info {name}")
        return result.stdout if result.ok else None

    def _list(self, kind: str) -> list[str]:
        if not self.is_available():
            return []
        result = self.shell.exec(f"brew list --{kind}")
        if not result.ok:
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]

    def list_formulas(self) -> list[str]:
        return self._list("formula")

    def list_casks(self) -> list[str]:
        return self._list("cask")
