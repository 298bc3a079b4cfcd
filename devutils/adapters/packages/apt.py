"""
APT adapter — Debian, Ubuntu, Raspbian and WSL.
"""

from __future__ import annotations

import re

from devutils.adapters.base import PackageManager
from devutils.core.models.result import PackageResult

_SEARCH_LINE = re.compile(r"^(\S+)\s+-\s+")


class Apt(PackageManager):
    name = "apt"
    binary = "apt-get"

    def install_command(self, package: str, assume_yes: bool = True, **_) -> str:
        flag = "-y " if assume_yes else ""
        return f"sudo apt-get install {flag}{package}"

    def uninstall_command(self, package: str, purge: bool = False, **_) -> str:
        verb = "purge" if purge else "remove"
        return f"sudo apt-get {verb} -y {package}"

    def update_command(self) -> str:
        return "sudo apt-get update"

    def remove(self, package: str, purge: bool = False) -> PackageResult:
        return self.uninstall(package, purge=purge)

    def upgrade(self, package: str | None = None) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        if package:
            command = f"sudo apt-get install --only-upgrade -y {package}"
        else:
            command = "sudo apt-get upgrade -y"
        return PackageResult.from_shell(self.shell.exec(command))

    def is_package_installed(self, package: str) -> bool:
        return self.shell.exec(f'dpkg -l {package} 2>/dev/null | grep -q "^ii"').ok

    def get_package_version(self, package: str) -> str | None:
        result = self.shell.exec(
            f"dpkg -l {package} 2>/dev/null | grep \"^ii\" | awk '{{print $3}}'"
        )
        version = result.stdout.strip()
        return version if result.ok and version else None

    def add_repository(self, repo: str) -> PackageResult:
        """Add a PPA / source line, installing add-apt-repository first if needed."""
        if not self.shell.command_exists("add-apt-repository"):
            prereq = self.shell.exec("sudo apt-get install -y software-properties-common")
            if not prereq.ok:
                return PackageResult(
                    success=False,
                    output=f"Failed to install software-properties-common: {prereq.output}",
                )
        return PackageResult.from_shell(self.shell.exec(f'sudo add-apt-repository -y "{repo}"'))

    def add_key(
        self, key_url: str, keyring_path: str | None = None, dearmor: bool = True,
    ) -> PackageResult:
        """Import a repository signing key.

        With ``keyring_path`` the key is written there, dearmored unless the
        vendor already publishes a binary keyring (``dearmor=False``).
        """
        if keyring_path and not dearmor:
            command = f'sudo curl -fsSLo "{keyring_path}" "{key_url}"'
        elif keyring_path:
            command = f'curl -fsSL "{key_url}" | sudo gpg --dearmor -o "{keyring_path}"'
        else:
            command = f'curl -fsSL "{key_url}" | sudo apt-key add -'
        return PackageResult.from_shell(self.shell.exec(command))

    def add_source_file(self, url: str, path: str) -> PackageResult:
        """Download a vendor ``.list`` / ``.sources`` file into sources.list.d."""
        return PackageResult.from_shell(self.shell.exec(f'sudo curl -fsSLo "{path}" "{url}"'))

    def search(self, query: str) -> list[str]:
        result = self.shell.exec(f'apt-cache search "{query}"')
        if not result.ok:
            return []
        names = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            match = _SEARCH_LINE.match(line)
            names.append(match.group(1) if match else line.split(" ")[0])
        return names

    def info(self, package: str) -> str | None:
        result = self.shell.exec(f"apt-cache show {package}")
        return result.stdout if result.ok else None

    def list_installed(self) -> list[str]:
        result = self.shell.exec("dpkg --get-selections | grep -v deinstall")
        if not result.ok:
            return []
        return [line.split("\t")[0] for line in result.stdout.splitlines() if line.strip()]

    def clean(self) -> PackageResult:
        return PackageResult.from_shell(
            self.shell.exec("sudo apt-get clean && sudo apt-get autoremove -y")
        )
