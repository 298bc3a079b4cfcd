"""
GnuPG installer.

Windows prefers winget's Gpg4win and falls back to Chocolatey.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.services.installs.base import Installer


class GpgInstaller(Installer):
    name = "gpg"
    title = "GnuPG"
    command = "gpg"
    description = "OpenPGP encryption and signing"

    brew_formula = "gnupg"
    apt_packages = ("gnupg",)
    rpm_packages = ("gnupg2",)
    choco_package = "gpg4win"
    winget_id = "GnuPG.Gpg4win"

    def install_macos(self) -> InstallReport:
        report = super().install_macos()
        if report.status is InstallStatus.INSTALLED:
            # GUI passphrase prompts
            self.say("Installing pinentry-mac...")
            self.brew.install("pinentry-mac")
        return report

    def install_windows(self) -> InstallReport:
        if self.winget.is_available():
            report = self._install_winget()
            if report.status is not InstallStatus.INSTALL_FAILED:
                return report
            self.say("Trying Chocolatey...")
        return self._install_choco()

    def _install_winget(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()
        return super()._install_winget()
