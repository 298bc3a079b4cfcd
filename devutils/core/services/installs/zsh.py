"""
Zsh installer.

macOS already has ``/bin/zsh``; the Homebrew formula is installed for
a newer release, so it is probed instead of PATH.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import ALL_PLATFORMS, WINDOWS_FAMILY
from devutils.core.services.installs.base import Installer


class ZshInstaller(Installer):
    name = "zsh"
    title = "Zsh"
    command = "zsh"
    description = "Z shell"
    platforms = ALL_PLATFORMS - WINDOWS_FAMILY

    brew_formula = "zsh"
    brew_probe_formula = True
    apt_packages = ("zsh",)
    rpm_packages = ("zsh",)

    def install_ubuntu(self) -> InstallReport:
        report = super().install_ubuntu()
        if report.status is InstallStatus.INSTALLED:
            self.say("To set Zsh as your default shell, run:\n  chsh -s $(which zsh)")
        return report

    def install_ubuntu_wsl(self) -> InstallReport:
        report = self.install_ubuntu()
        if report.status is InstallStatus.INSTALLED:
            self.say(
                "WSL Tip: If changing the default shell does not work, add this to ~/.bashrc:\n"
                "  if [ -t 1 ] && [ -x /usr/bin/zsh ]; then\n"
                "    exec /usr/bin/zsh\n"
                "  fi"
            )
        return report
