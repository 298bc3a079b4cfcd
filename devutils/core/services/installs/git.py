"""
Git installer.

macOS ships ``/usr/bin/git`` with the Command Line Tools, so the
Homebrew formula is probed instead of PATH there.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.services.installs.base import Installer


class GitInstaller(Installer):
    name = "git"
    title = "Git"
    command = "git"
    description = "Distributed version control"

    brew_formula = "git"
    brew_probe_formula = True
    apt_packages = ("git",)
    rpm_packages = ("git",)
    choco_package = "git"

    def install_gitbash(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed("(bundled with Git for Windows)")
        return self.report(
            InstallStatus.INSTALL_FAILED,
            "Git is not found. It should be bundled with Git for Windows.\n"
            "Please reinstall Git for Windows from https://git-scm.com/download/win",
        )
