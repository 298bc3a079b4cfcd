"""
Language package managers — npm and pip, available on every platform.
"""

from __future__ import annotations

from devutils.adapters.base import PackageManager


class Npm(PackageManager):
    name = "npm"
    binary = "npm"

    def install_command(self, package: str, global_: bool = False, **_) -> str:
        flag = "-g " if global_ else ""
        return f"npm install {flag}{package}"

    def uninstall_command(self, package: str, global_: bool = False, **_) -> str:
        flag = "-g " if global_ else ""
        return f"npm uninstall {flag}{package}"


class Pip(PackageManager):
    """pip3 when present, else pip. ``--user`` unless installing globally."""

    name = "pip"

    @property
    def binary(self) -> str:  # type: ignore[override]
        return "pip3" if self.shell.command_exists("pip3") else "pip"

    def install_command(self, package: str, global_: bool = False, **_) -> str:
        flag = "" if global_ else "--user "
        return f"{self.binary} install {flag}{package}"

    def uninstall_command(self, package: str, **_) -> str:
        return f"{self.binary} uninstall -y {package}"
