"""
Chocolatey installer — Windows and Git Bash (via the Windows host).
"""

from __future__ import annotations

from devutils.adapters.packages.choco import CHOCO_EXE, add_bin_to_path
from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import WINDOWS_FAMILY, PlatformType
from devutils.core.services.installs.base import Installer

CHOCOLATEY_INSTALL_URL = "https://community.chocolatey.org/install.ps1"
INSTALL_SCRIPT = (
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    f"iex ((New-Object System.Net.WebClient).DownloadString('{CHOCOLATEY_INSTALL_URL}'))"
)


class ChocolateyInstaller(Installer):
    name = "chocolatey"
    title = "Chocolatey"
    command = "choco"
    description = "Package manager for Windows"
    platforms = WINDOWS_FAMILY
    handlers = {
        PlatformType.WINDOWS: "install_windows",
        PlatformType.GITBASH: "install_windows",
    }

    def is_installed(self) -> bool:
        return self.choco.is_available()

    def install_windows(self) -> InstallReport:
        if self.is_installed():
            return self.report(
                InstallStatus.ALREADY_INSTALLED,
                "Chocolatey is already installed, skipping...",
                self.choco.get_version(),
            )
        if not self.shell.command_exists("powershell.exe") and not self.shell.command_exists("powershell"):
            return self.report(
                InstallStatus.PREREQUISITE_MISSING,
                "PowerShell is required to install Chocolatey but was not found.",
            )

        self.say("Installing Chocolatey via PowerShell (requires Administrator privileges)...")
        result = self.shell.exec(
            f'powershell.exe -NoProfile -ExecutionPolicy Bypass -Command "{INSTALL_SCRIPT}"'
        )
        if not result.ok:
            return self.failed(
                "PowerShell",
                result.output,
                "Common causes:\n"
                "  1. Not running as Administrator\n"
                "  2. Network/firewall blocking the download\n"
                "  3. PowerShell execution policy restrictions",
            )

        add_bin_to_path()
        report = self.finish(self.shell.path_exists(CHOCO_EXE), "PowerShell", "choco.exe")
        if report.status is InstallStatus.INSTALLED:
            self.say("IMPORTANT: Close and reopen your terminal for PATH changes to take effect.")
        return report
