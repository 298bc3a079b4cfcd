"""
Bash installer.

macOS ships Bash 3.2, so the Homebrew formula is installed alongside
it.  On Windows, Bash comes with Git for Windows.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.services.installs.base import CHOCOLATEY_MISSING, Installer

GIT_FOR_WINDOWS_PARAMS = '"/GitAndUnixToolsOnPath /NoAutoCrlf /WindowsTerminal"'


class BashInstaller(Installer):
    name = "bash"
    title = "Bash"
    command = "bash"
    description = "GNU Bourne-Again shell"

    brew_formula = "bash"
    brew_probe_formula = True
    apt_packages = ("bash",)
    rpm_packages = ("bash",)

    def install_macos(self) -> InstallReport:
        report = super().install_macos()
        if report.status is InstallStatus.INSTALLED:
            prefix = self.shell.exec_sync("brew --prefix") or "/opt/homebrew"
            path = f"{prefix}/bin/bash"
            self.say(
                f"Homebrew Bash path: {path}\n"
                "To use the new Bash as your default shell, run:\n"
                f'  echo "{path}" | sudo tee -a /etc/shells\n'
                f'  sudo chsh -s "{path}" "$USER"'
            )
        return report

    def install_windows(self) -> InstallReport:
        choco = self.choco
        if not choco.is_available():
            return self.report(InstallStatus.PREREQUISITE_MISSING, CHOCOLATEY_MISSING)
        if choco.is_package_installed("git") and self.is_installed():
            return self.already_installed("via Git for Windows")

        self.say("Installing Git for Windows (includes Git Bash)...")
        result = self.shell.exec(f"choco install git -y --params {GIT_FOR_WINDOWS_PARAMS}")
        if not result.ok:
            return self.failed("Chocolatey", result.output)
        self.say("Please close and reopen your terminal for PATH changes to take effect.")
        return self.finish(choco.is_package_installed("git"), "Chocolatey", "Git for Windows package")

    def install_gitbash(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed("in Git Bash")
        return self.report(
            InstallStatus.INSTALL_FAILED,
            "Git Bash environment detected but bash command not found.\n"
            "Please reinstall Git for Windows to restore Bash functionality.",
        )
