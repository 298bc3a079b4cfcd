"""
Node.js installer.

Debian-family systems get the current LTS from NodeSource.  Amazon
Linux 2023 (dnf) uses Amazon's namespaced ``nodejsNN`` packages; Amazon
Linux 2 (yum) goes through NodeSource's RPM setup script.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport
from devutils.core.models.platform import PlatformType
from devutils.core.services.installs.base import (
    APT_NONINTERACTIVE,
    Dependency,
    Installer,
    RepositorySetupError,
)

NODESOURCE_LTS_VERSION = "22"
NODESOURCE_DEB_SETUP_URL = f"https://deb.nodesource.com/setup_{NODESOURCE_LTS_VERSION}.x"
NODESOURCE_RPM_SETUP_URL = f"https://rpm.nodesource.com/setup_{NODESOURCE_LTS_VERSION}.x"

_LINUX = frozenset({
    PlatformType.UBUNTU, PlatformType.DEBIAN, PlatformType.RASPBIAN, PlatformType.WSL,
    PlatformType.AMAZON_LINUX, PlatformType.RHEL, PlatformType.FEDORA,
})


class NodeInstaller(Installer):
    name = "node"
    title = "Node.js"
    command = "node"
    description = "JavaScript runtime (LTS) with npm"
    depends_on = (Dependency("curl", priority=1, platforms=_LINUX),)

    brew_formula = "node"
    choco_package = "nodejs-lts"

    # ── NodeSource ──────────────────────────────────────────────

    def setup_nodesource_apt(self) -> None:
        self.say("Setting up NodeSource APT repository for Node.js LTS...")
        self.say("Installing prerequisites (curl, ca-certificates, gnupg)...")
        prereq = self.shell.exec(
            f"{APT_NONINTERACTIVE} update -y && "
            f"{APT_NONINTERACTIVE} install -y curl ca-certificates gnupg"
        )
        if not prereq.ok:
            raise RepositorySetupError(f"Failed to install prerequisites: {prereq.stderr}")

        self.say(f"Adding NodeSource repository for Node.js {NODESOURCE_LTS_VERSION}.x...")
        setup = self.shell.exec(f"curl -fsSL {NODESOURCE_DEB_SETUP_URL} | sudo -E bash -")
        if not setup.ok:
            raise RepositorySetupError(
                "Failed to set up NodeSource repository.\n"
                f"Output: {setup.output}\n\n"
                "Troubleshooting:\n"
                "  1. Check your internet connection\n"
                "  2. Verify ca-certificates is installed: sudo apt-get install -y ca-certificates\n"
                "  3. Try running the command manually:\n"
                f"     curl -fsSL {NODESOURCE_DEB_SETUP_URL} | sudo -E bash -"
            )

    # ── Handlers ────────────────────────────────────────────────

    def install_ubuntu(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        self.setup_nodesource_apt()

        self.say("Installing Node.js via APT...")
        result = self.shell.exec(f"{APT_NONINTERACTIVE} install -y nodejs")
        if not result.ok:
            return self.failed("APT", result.output)
        return self.finish(self.is_installed(), "APT")

    def install_raspbian(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        arch = self.shell.exec_sync("uname -m")
        self.say(f"Detected architecture: {arch}")
        if arch == "armv6l":
            self.say(
                "WARNING: ARMv6 (Raspberry Pi Zero/Pi 1) is detected.\n"
                f"Node.js {NODESOURCE_LTS_VERSION}.x does not provide official ARMv6 builds.\n"
                "Options for ARMv6:\n"
                "  1. Use Node.js 20.x from unofficial builds:\n"
                "     https://unofficial-builds.nodejs.org/download/release/\n"
                "  2. Use the Raspberry Pi OS package: sudo apt-get install -y nodejs\n"
                "Attempting NodeSource installation anyway (may fail on ARMv6)..."
            )
        return self.install_ubuntu()

    def install_amazon_linux(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        if self.rpm_binary() == "dnf":
            packages = f"nodejs{NODESOURCE_LTS_VERSION} nodejs{NODESOURCE_LTS_VERSION}-npm"
            self.say(f"Installing {packages}...")
            result = self.shell.exec(f"sudo dnf install -y {packages}")
            if not result.ok:
                return self.failed(
                    "dnf",
                    result.output,
                    "Troubleshooting:\n"
                    "  1. Update dnf cache: sudo dnf makecache\n"
                    f"  2. Try: sudo dnf install -y {packages}",
                )
            alternatives = self.shell.exec(
                f"sudo alternatives --set node /usr/bin/node-{NODESOURCE_LTS_VERSION}"
            )
            if not alternatives.ok:
                self.say(
                    "Warning: Could not set node alternative. "
                    f"You may need to use the full path: /usr/bin/node-{NODESOURCE_LTS_VERSION}"
                )
            return self.finish(self.is_installed(), "dnf")

        self.say("Installing Node.js via NodeSource (yum)...")
        self.shell.exec("sudo yum install -y curl")
        setup = self.shell.exec(f"curl -fsSL {NODESOURCE_RPM_SETUP_URL} | sudo bash -")
        if not setup.ok:
            raise RepositorySetupError(f"Failed to set up NodeSource repository.\n{setup.output}")
        result = self.shell.exec("sudo yum install -y nodejs")
        if not result.ok:
            return self.failed("yum", result.output)
        return self.finish(self.is_installed(), "yum")
