"""
Brave Browser installer — desktop platforms only.

Debian family and RHEL family add Brave's own package repository
first.  Repository helpers raise ``RepositorySetupError`` with
troubleshooting text; ``Installer.install()`` turns that into a report.
"""

from __future__ import annotations

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import PlatformType
from devutils.core.services.installs.base import (
    Dependency,
    Installer,
    RepositorySetupError,
)

MACOS_APP_PATH = "/Applications/Brave Browser.app"
WINDOWS_PATH_SYSTEM = r"C:\Program Files\BraveSoftware\Brave-Browser\Application\brave.exe"
WINDOWS_PATH_USER = r"%LOCALAPPDATA%\BraveSoftware\Brave-Browser\Application\brave.exe"

APT_KEYRING = "/usr/share/keyrings/brave-browser-archive-keyring.gpg"
APT_SOURCES = "/etc/apt/sources.list.d/brave-browser-release.sources"
GPG_KEYRING_URL = "https://brave-browser-apt-release.s3.brave.com/brave-browser-archive-keyring.gpg"
APT_SOURCES_URL = "https://brave-browser-apt-release.s3.brave.com/brave-browser.sources"
RPM_REPO_URL = "https://brave-browser-rpm-release.s3.brave.com/brave-browser.repo"
RPM_GPG_KEY_URL = "https://brave-browser-rpm-release.s3.brave.com/brave-core.asc"

_APT_PLATFORMS = frozenset({
    PlatformType.UBUNTU, PlatformType.DEBIAN, PlatformType.RASPBIAN, PlatformType.WSL,
})


class BraveBrowserInstaller(Installer):
    name = "brave-browser"
    title = "Brave Browser"
    command = "brave-browser"
    version_tool = "brave"
    description = "Privacy-focused web browser"
    requires_desktop = True
    depends_on = (Dependency("curl", priority=1, platforms=_APT_PLATFORMS),)

    brew_cask = "brave-browser"
    macos_app = MACOS_APP_PATH
    choco_package = "brave"

    def windows_paths(self) -> tuple[str, ...]:
        return (WINDOWS_PATH_SYSTEM, WINDOWS_PATH_USER)

    def is_installed(self) -> bool:
        if self.platform.type in (PlatformType.WINDOWS, PlatformType.GITBASH):
            return any(self.shell.path_exists(p) for p in self.windows_paths())
        return super().is_installed()

    # ── Repository setup ────────────────────────────────────────

    def setup_apt_repository(self) -> None:
        apt = self.apt
        self.say("Setting up Brave APT repository...")
        self.say("Downloading Brave GPG keyring...")
        keyring = apt.add_key(GPG_KEYRING_URL, APT_KEYRING, dearmor=False)
        if not keyring.success:
            raise RepositorySetupError(
                "Failed to download Brave GPG keyring.\n"
                f"Error: {keyring.output}\n\n"
                "Troubleshooting:\n"
                "  1. Check your internet connection\n"
                "  2. Ensure curl is installed: sudo apt-get install -y curl\n"
                f"  3. Try downloading manually: curl -fsSLo /tmp/brave-keyring.gpg {GPG_KEYRING_URL}"
            )

        self.say("Adding Brave repository...")
        sources = apt.add_source_file(APT_SOURCES_URL, APT_SOURCES)
        if not sources.success:
            raise RepositorySetupError(
                "Failed to add Brave repository.\n"
                f"Error: {sources.output}\n\n"
                "Troubleshooting:\n"
                "  1. Verify sudo privileges\n"
                f"  2. Try downloading manually: curl -fsSL {APT_SOURCES_URL}"
            )

        self.say("Updating package cache...")
        update = apt.update()
        if not update.success:
            raise RepositorySetupError(
                "Failed to update package cache.\n"
                f"Error: {update.output}\n\n"
                "Troubleshooting:\n"
                f"  1. Check the repository configuration: cat {APT_SOURCES}\n"
                f"  2. Verify the GPG key exists: ls -la {APT_KEYRING}"
            )

    def setup_rpm_repository(self) -> None:
        self.say("Setting up Brave RPM repository...")
        if self.rpm_binary() == "dnf":
            self.shell.exec("sudo dnf install -y dnf-plugins-core")
            # dnf5 syntax first, then dnf4
            repo = self.shell.exec(f"sudo dnf config-manager addrepo --from-repofile={RPM_REPO_URL}")
            if not repo.ok:
                self.say("Trying legacy dnf syntax...")
                repo = self.shell.exec(f"sudo dnf config-manager --add-repo {RPM_REPO_URL}")
            if not repo.ok:
                raise RepositorySetupError(
                    "Failed to add Brave repository.\n"
                    f"Error: {repo.stderr}\n\n"
                    "Troubleshooting:\n"
                    f"  1. Import GPG key manually: sudo rpm --import {RPM_GPG_KEY_URL}\n"
                    "  2. Download repo file manually: "
                    f"sudo curl -fsSLo /etc/yum.repos.d/brave-browser.repo {RPM_REPO_URL}"
                )
            return

        key = self.shell.exec(f"sudo rpm --import {RPM_GPG_KEY_URL}")
        if not key.ok:
            raise RepositorySetupError(f"Failed to import Brave GPG key: {key.stderr}")
        repo = self.shell.exec(f"sudo curl -fsSLo /etc/yum.repos.d/brave-browser.repo {RPM_REPO_URL}")
        if not repo.ok:
            raise RepositorySetupError(f"Failed to add Brave repository: {repo.stderr}")

    # ── Handlers ────────────────────────────────────────────────

    def install_ubuntu(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        apt = self.apt
        if not self.shell.command_exists("curl"):
            self.say("Installing curl...")
            apt.update()
            if not apt.install("curl").success:
                return self.report(
                    InstallStatus.PREREQUISITE_MISSING,
                    "Failed to install curl. Please install it manually:\n  sudo apt-get install -y curl",
                )

        self.setup_apt_repository()

        self.say("Installing Brave Browser via APT...")
        result = apt.install("brave-browser")
        if not result.success:
            return self.failed(
                "APT", result.output, f"Check the repository configuration: cat {APT_SOURCES}",
            )
        return self.finish(self.is_installed(), "APT")

    def install_amazon_linux(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()

        self.setup_rpm_repository()

        manager = self.rpm_binary()
        self.say(f"Installing Brave Browser via {manager}...")
        result = self.shell.exec(f"sudo {manager} install -y brave-browser")
        if not result.ok:
            return self.failed(
                manager,
                result.output,
                "Troubleshooting:\n"
                "  1. Install common dependencies first:\n"
                f"     sudo {manager} install -y libXcomposite libXdamage libXrandr libgbm "
                "libxkbcommon pango alsa-lib atk at-spi2-atk cups-libs libdrm mesa-libgbm\n"
                "  2. Then retry the installation",
            )
        return self.finish(self.is_installed(), manager)

    def install_gitbash(self) -> InstallReport:
        if self.is_installed():
            return self.already_installed()
        self.say("Attempting installation via Chocolatey...")
        result = self.shell.exec('powershell.exe -NoProfile -Command "choco install brave -y"')
        if not result.ok:
            return self.failed("Chocolatey", result.output)
        return self.finish(self.is_installed(), "Chocolatey", "Brave Browser executable")
