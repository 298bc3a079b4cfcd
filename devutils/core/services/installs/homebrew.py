"""
Homebrew installer — macOS and Linux (Linuxbrew).

A brew directory that exists but is not on PATH is treated as a PATH
problem, not a missing install: the shellenv line is added to the
shell rc file instead of re-running the installer.
"""

from __future__ import annotations

import os
from pathlib import Path

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import DEBIAN_FAMILY, RHEL_FAMILY, PlatformType
from devutils.core.services.installs.base import APT_NONINTERACTIVE, Dependency, Installer
from devutils.core.services.platform_detect import get_arch

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
HOMEBREW_PREFIX_ARM = "/opt/homebrew"
HOMEBREW_PREFIX_INTEL = "/usr/local"
HOMEBREW_PREFIX_LINUX = "/home/linuxbrew/.linuxbrew"
INSTALL_TIMEOUT = 600

DEBIAN_BUILD_DEPENDENCIES = ("build-essential", "procps", "curl", "file", "git")
RHEL_BUILD_DEPENDENCIES = ("procps-ng", "curl", "file", "git")


class HomebrewInstaller(Installer):
    name = "homebrew"
    title = "Homebrew"
    command = "brew"
    description = "Package manager for macOS and Linux"
    platforms = frozenset({PlatformType.MACOS, PlatformType.WSL}) | DEBIAN_FAMILY | RHEL_FAMILY
    handlers = {
        PlatformType.MACOS: "install_macos",
        PlatformType.UBUNTU: "install_ubuntu",
        PlatformType.DEBIAN: "install_ubuntu",
        PlatformType.WSL: "install_ubuntu",
        PlatformType.RASPBIAN: "install_ubuntu",
        PlatformType.AMAZON_LINUX: "install_amazon_linux",
        PlatformType.FEDORA: "install_amazon_linux",
        PlatformType.RHEL: "install_amazon_linux",
    }
    depends_on = (Dependency("xcode-clt", priority=0, platforms=frozenset({PlatformType.MACOS})),)

    def prefix(self) -> str:
        if self.platform.type is PlatformType.MACOS:
            return HOMEBREW_PREFIX_ARM if get_arch(self.ctx) == "arm64" else HOMEBREW_PREFIX_INTEL
        return HOMEBREW_PREFIX_LINUX

    def shellenv_command(self) -> str:
        return f'eval "$({self.prefix()}/bin/brew shellenv)"'

    def shell_rc_file(self) -> Path:
        home = Path(os.environ.get("HOME") or os.environ.get("USERPROFILE") or Path.home())
        if "zsh" in os.environ.get("SHELL", ""):
            return home / ".zshrc"
        if self.platform.type is PlatformType.MACOS:
            return home / ".bash_profile"
        return home / ".bashrc"

    def configure_path(self) -> None:
        """Append the shellenv line once and expose brew to this process."""
        rc_file = self.shell_rc_file()
        content = rc_file.read_text(encoding="utf-8") if rc_file.is_file() else ""
        if "brew shellenv" in content:
            self.say("Homebrew PATH configuration already exists in shell config.")
        else:
            try:
                with rc_file.open("a", encoding="utf-8") as fh:
                    fh.write(f"\n# Homebrew\n{self.shellenv_command()}\n")
                self.say(f"Added Homebrew to {rc_file}")
            except OSError:
                self.say(
                    f"Warning: Could not update {rc_file}\n"
                    f"Please add this line manually: {self.shellenv_command()}"
                )
        os.environ["PATH"] = f"{self.prefix()}/bin{os.pathsep}{os.environ.get('PATH', '')}"

    def _existing_install(self) -> InstallReport | None:
        """Report an existing install, on PATH or only on disk."""
        if self.is_installed():
            return self.already_installed()
        if self.shell.path_exists(f"{self.prefix()}/bin/brew"):
            self.say("Homebrew appears to be installed but not in PATH. Configuring PATH...")
            self.configure_path()
            return self.already_installed()
        return None

    def _run_installer(self) -> InstallReport:
        existing = self._existing_install()
        if existing is not None:
            return existing

        self.say("Downloading and running the Homebrew installer. This may take several minutes...")
        result = self.shell.exec(
            f'NONINTERACTIVE=1 /bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"',
            timeout=INSTALL_TIMEOUT,
        )
        if not result.ok:
            return self.failed(
                "the official installer",
                result.output,
                "Troubleshooting:\n"
                "  1. If the Xcode Command Line Tools install hung, run: xcode-select --install\n"
                "  2. For permission errors, make sure you own the Homebrew prefix\n"
                "  3. Check your internet connection and retry.",
            )

        self.configure_path()
        report = self.finish(
            self.shell.path_exists(f"{self.prefix()}/bin/brew"), "the official installer", "brew",
        )
        self.say(f"To use Homebrew in your current terminal, run:\n  {self.shellenv_command()}")
        return report

    def install_macos(self) -> InstallReport:
        return self._run_installer()

    def install_ubuntu(self) -> InstallReport:
        existing = self._existing_install()
        if existing is not None:
            return existing

        self.say("Installing required build dependencies...")
        if not self.shell.exec(f"{APT_NONINTERACTIVE} update -y").ok:
            self.say("Warning: Failed to update package lists. Continuing with installation...")
        deps = self.shell.exec(
            f"{APT_NONINTERACTIVE} install -y {' '.join(DEBIAN_BUILD_DEPENDENCIES)}"
        )
        if not deps.ok:
            return self.report(
                InstallStatus.PREREQUISITE_MISSING,
                f"Failed to install build dependencies.\n{deps.output}",
            )
        return self._run_installer()

    def install_amazon_linux(self) -> InstallReport:
        existing = self._existing_install()
        if existing is not None:
            return existing

        self.say("Installing required build dependencies...")
        manager = self.rpm_binary()
        deps = self.shell.exec(
            f"sudo {manager} groupinstall -y 'Development Tools' && "
            f"sudo {manager} install -y {' '.join(RHEL_BUILD_DEPENDENCIES)}"
        )
        if not deps.ok:
            return self.report(
                InstallStatus.PREREQUISITE_MISSING,
                f"Failed to install build dependencies.\n{deps.output}",
            )
        return self._run_installer()
