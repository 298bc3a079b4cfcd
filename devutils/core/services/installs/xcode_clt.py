"""
Xcode Command Line Tools installer — macOS only.

Installs headlessly through ``softwareupdate`` rather than the GUI
prompt of ``xcode-select --install``.  The placeholder file makes
``softwareupdate -l`` list the CLT package.
"""

from __future__ import annotations

import re

from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import PlatformType
from devutils.core.services.installs.base import Installer

CLT_INSTALL_PATH = "/Library/Developer/CommandLineTools"
CLT_CLANG = f"{CLT_INSTALL_PATH}/usr/bin/clang"
XCODE_CLANG = (
    "/Applications/Xcode.app/Contents/Developer/Toolchains/"
    "XcodeDefault.xctoolchain/usr/bin/clang"
)
CLT_PLACEHOLDER_FILE = "/tmp/.com.apple.dt.CommandLineTools.installondemand.in-progress"

LIST_TIMEOUT = 120
INSTALL_TIMEOUT = 600

_PACKAGE_PATTERNS = (
    re.compile(r"\*\s+Label:\s+(Command Line Tools for Xcode-[\d.]+)"),
    re.compile(r"^\s*(Command Line Tools for Xcode-[\d.]+)", re.MULTILINE),
    re.compile(r"(Command Line Tools for Xcode-[\d.]+)"),
)
_XCODE_SELECT_VERSION = re.compile(r"version\s+(\d+)")


class XcodeCltInstaller(Installer):
    name = "xcode-clt"
    title = "Xcode Command Line Tools"
    command = "xcode-select"
    description = "Apple compilers, git and build tools"
    platforms = frozenset({PlatformType.MACOS})
    handlers = {PlatformType.MACOS: "install_macos"}

    def is_installed(self) -> bool:
        """xcode-select points at a real directory that contains clang."""
        result = self.shell.exec("xcode-select -p")
        if not result.ok:
            return False
        developer_path = result.stdout.strip()
        if not developer_path or not self.shell.path_exists(developer_path):
            return False
        return self.shell.path_exists(CLT_CLANG) or self.shell.path_exists(XCODE_CLANG)

    def get_version(self) -> str | None:
        result = self.shell.exec("xcode-select --version")
        match = _XCODE_SELECT_VERSION.search(result.stdout) if result.ok else None
        return f"xcode-select version {match.group(1)}" if match else None

    def find_package_name(self) -> str | None:
        """Ask softwareupdate for the CLT label, e.g. ``Command Line Tools for Xcode-16.0``."""
        if not self.shell.exec(f'touch "{CLT_PLACEHOLDER_FILE}"').ok:
            self.say("Warning: Could not create placeholder file. Continuing anyway...")

        self.say("Checking for available Command Line Tools...")
        listing = self.shell.exec("softwareupdate -l 2>&1", timeout=LIST_TIMEOUT)
        if not listing.ok and not listing.stdout:
            self.say(f"Warning: softwareupdate returned an error. Output: {listing.stderr}")
            return None

        output = listing.stdout + "\n" + listing.stderr
        for pattern in _PACKAGE_PATTERNS:
            match = pattern.search(output)
            if match:
                return match.group(1)
        return None

    def cleanup_placeholder(self) -> None:
        self.shell.exec(f'rm -f "{CLT_PLACEHOLDER_FILE}"')

    def install_macos(self) -> InstallReport:
        if self.is_installed():
            return self.report(
                InstallStatus.ALREADY_INSTALLED,
                "Xcode Command Line Tools are already installed, skipping...",
                self.get_version(),
            )

        self.say("Xcode Command Line Tools are not installed. Starting installation...")
        package = self.find_package_name()
        if not package:
            self.cleanup_placeholder()
            return self.report(
                InstallStatus.INSTALL_FAILED,
                "Could not find Command Line Tools in available software updates.\n"
                "Try running manually:\n"
                "  xcode-select --install\n"
                "Or download directly from:\n"
                "  https://developer.apple.com/download/all/",
            )

        self.say(f"Found package: {package}")
        self.say("Installing... You may be prompted for your password (sudo is required).")
        result = self.shell.exec(
            f'sudo softwareupdate -i "{package}" --verbose', timeout=INSTALL_TIMEOUT,
        )
        self.cleanup_placeholder()

        if not result.ok:
            # softwareupdate sometimes exits non-zero after a good install
            if self.is_installed():
                return self.report(
                    InstallStatus.INSTALLED,
                    "Installation encountered an issue, but Command Line Tools "
                    "appear to be installed successfully.",
                    self.get_version(),
                )
            return self.failed(
                "softwareupdate",
                result.output or "No error details available",
                "Troubleshooting steps:\n"
                "  1. Try running: xcode-select --install\n"
                "  2. Ensure you have a stable internet connection\n"
                "  3. Check available disk space (need ~2.5 GB free)\n"
                "  4. Download manually from: https://developer.apple.com/download/all/",
            )

        return self.finish(self.is_installed(), "softwareupdate", "Command Line Tools")
