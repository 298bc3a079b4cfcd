"""
DNF / YUM adapter — Amazon Linux, RHEL, Fedora.

``check-update`` exits 100 when updates are available; that is a
successful refresh, not a failure.
"""

from __future__ import annotations

from devutils.adapters.base import PackageManager
from devutils.adapters.shell.command import Shell

CHECK_UPDATE_AVAILABLE = 100


class Rpm(PackageManager):
    update_ok_codes = (0, CHECK_UPDATE_AVAILABLE)

    def __init__(self, binary: str = "dnf", shell: Shell | None = None):
        super().__init__(shell)
        self.name = binary
        self.binary = binary

    def install_command(self, package: str, **_) -> str:
        return f"sudo {self.binary} install -y {package}"

    def uninstall_command(self, package: str, **_) -> str:
        return f"sudo {self.binary} remove -y {package}"

    def update_command(self) -> str:
        return f"sudo {self.binary} check-update"

    def is_package_installed(self, package: str) -> bool:
        return self.shell.exec(f"rpm -q {package}").ok
