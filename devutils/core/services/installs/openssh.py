"""
OpenSSH installer.

``ssh-keygen`` is the probed binary: it is what ``dev setup`` needs.
Windows installs the OpenSSH optional capabilities through PowerShell.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.services.installs.base import Installer

_PS = 'powershell.exe -NoProfile -Command "{}"'
CLIENT_CAPABILITY = "OpenSSH.Client~~~~0.0.1.0"
SERVER_CAPABILITY = "OpenSSH.Server~~~~0.0.1.0"


class OpensshInstaller(Installer):
    name = "openssh"
    title = "OpenSSH"
    command = "ssh-keygen"
    version_tool = "ssh"
    description = "SSH client, server and key tools"

    brew_formula = "openssh"
    brew_probe_formula = True
    apt_packages = ("openssh-client",)
    rpm_packages = ("openssh-clients",)

    def install_macos(self) -> InstallReport:
        if not self.brew.is_available() and self.is_installed():
            return self.already_installed("(system-provided)")
        return super().install_macos()

    def install_ubuntu_wsl(self) -> InstallReport:
        report = self.install_ubuntu()
        if report.status is InstallStatus.INSTALLED:
            self.say("WSL does not run systemd by default; start the server with: sudo service ssh start")
        return report

    def install_windows(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        self.say("Installing OpenSSH via Windows Capability...")
        client = self.shell.exec(_PS.format(f"Add-WindowsCapability -Online -Name {CLIENT_CAPABILITY}"))
        if not client.ok:
            return self.failed(
                "Windows Capability",
                client.output,
                "Troubleshooting:\n"
                "  1. Run as Administrator\n"
                "  2. Ensure Windows Update is accessible\n"
                "  3. Check Event Viewer for detailed errors",
            )

        server = self.shell.exec(_PS.format(f"Add-WindowsCapability -Online -Name {SERVER_CAPABILITY}"))
        if server.ok:
            self.say("Configuring SSH server...")
            self.shell.exec(_PS.format("Set-Service -Name sshd -StartupType Automatic"))
            self.shell.exec(_PS.format("Start-Service sshd"))
        else:
            self.say(
                "Warning: Failed to install OpenSSH Server. The client is available.\n"
                f"Install it later with: Add-WindowsCapability -Online -Name {SERVER_CAPABILITY}"
            )

        state = self.shell.exec(_PS.format(
            "Get-WindowsCapability -Online | Where-Object Name -like 'OpenSSH.Client*' "
            "| Select-Object -ExpandProperty State"
        ))
        return self.finish(state.stdout.strip() == "Installed", "Windows Capability", "OpenSSH Client")

    def install_gitbash(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed("(bundled with Git for Windows)")
        return self.report(
            InstallStatus.INSTALL_FAILED,
            "SSH client not found in Git Bash.\n"
            "Reinstall Git for Windows from https://git-scm.com/download/win "
            'and select "Use bundled OpenSSH".',
        )
