"""
Snap adapter.
"""

from __future__ import annotations

from devutils.adapters.base import PackageManager


class Snap(PackageManager):
    name = "snap"
    binary = "snap"

    def install_command(self, package: str, classic: bool = False, **_) -> str:
        suffix = " --classic" if classic else ""
        return f"sudo snap install {package}{suffix}"

    def uninstall_command(self, package: str, **_) -> str:
        return f"sudo snap remove {package}"
