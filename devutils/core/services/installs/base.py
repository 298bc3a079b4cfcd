"""
Installer base — one subclass per installable tool.

Every installer routes ``install()`` through a dispatch table keyed on
``PlatformType``.  Each ``install_<platform>`` handler runs the same
steps, in order:

    1. idempotency probe          → already_installed
    2. prerequisite check         → prerequisite_missing
    3. repository / keyring setup → repository_setup_failed
    4. install                    → install_failed
    5. verify + read version      → installed | unverified

Handlers never raise.  Repository helpers raise ``RepositorySetupError``,
which ``install()`` maps to a report.  A second run with the tool
present only probes, it issues no install commands.

Simple tools are declarative: set ``brew_formula`` / ``apt_packages`` /
``rpm_packages`` / ``choco_package`` and the generic handlers below do
the rest.  Tools with extra steps override the handler they need.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from devutils.adapters.packages.apt import Apt
from devutils.adapters.packages.brew import Brew
from devutils.adapters.packages.choco import Choco
from devutils.adapters.packages.rpm import Rpm
from devutils.adapters.packages.winget import Winget
from devutils.adapters.shell.command import Shell, get_shell
from devutils.core.models.install import InstallReport, InstallStatus
from devutils.core.models.platform import (
    ALL_PLATFORMS,
    PlatformContext,
    PlatformDescriptor,
    PlatformType,
)
from devutils.core.services.platform_detect import detect, is_desktop_available
from devutils.core.services.tool_version import get_tool_version

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

HOMEBREW_MISSING = (
    "Homebrew is not installed. Please install Homebrew first.\n"
    "Run: dev install homebrew"
)
CHOCOLATEY_MISSING = (
    "Chocolatey is not installed. Please install Chocolatey first.\n"
    "Run: dev install chocolatey"
)
APT_NONINTERACTIVE = "sudo DEBIAN_FRONTEND=noninteractive apt-get"


class RepositorySetupError(Exception):
    """A third-party package repository or signing key could not be configured."""


@dataclass(frozen=True)
class Dependency:
    """Another installer that must run first.

    Lower ``priority`` runs earlier.  ``platforms`` limits the dependency
    to some platforms (None means everywhere).
    """

    name: str
    priority: int = 0
    platforms: frozenset[PlatformType] | None = None

    def applies_to(self, kind: PlatformType) -> bool:
        return self.platforms is None or kind in self.platforms


DEFAULT_HANDLERS: dict[PlatformType, str] = {
    PlatformType.MACOS: "install_macos",
    PlatformType.UBUNTU: "install_ubuntu",
    PlatformType.DEBIAN: "install_ubuntu",
    PlatformType.WSL: "install_ubuntu_wsl",
    PlatformType.RASPBIAN: "install_raspbian",
    PlatformType.AMAZON_LINUX: "install_amazon_linux",
    PlatformType.FEDORA: "install_amazon_linux",
    PlatformType.RHEL: "install_amazon_linux",
    PlatformType.WINDOWS: "install_windows",
    PlatformType.GITBASH: "install_gitbash",
}


class Installer:
    """Base class for tool installers.

    Class attributes describe the tool; instances bind it to a shell, a
    platform context and a progress callback.
    """

    name: str = ""              # registry key, e.g. "brave-browser"
    title: str = ""             # display name, e.g. "Brave Browser"
    command: str = ""           # binary probed on PATH
    description: str = ""
    version_tool: str | None = None
    platforms: frozenset[PlatformType] = ALL_PLATFORMS
    requires_desktop: bool = False
    depends_on: tuple[Dependency, ...] = ()
    handlers: dict[PlatformType, str] = DEFAULT_HANDLERS

    # Declarative package names used by the generic handlers.
    brew_formula: str | None = None
    brew_cask: str | None = None
    macos_app: str | None = None          # app bundle probed for casks
    brew_probe_formula: bool = False      # probe `brew list` instead of PATH
    apt_packages: tuple[str, ...] = ()
    rpm_packages: tuple[str, ...] = ()
    choco_package: str | None = None
    winget_id: str | None = None

    def __init__(
        self,
        shell: Shell | None = None,
        ctx: PlatformContext | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        self.shell = shell or get_shell()
        self.ctx = ctx
        self.on_progress = on_progress or logger.info
        self._platform: PlatformDescriptor | None = None

    # ── Helpers ─────────────────────────────────────────────────

    @property
    def platform(self) -> PlatformDescriptor:
        if self._platform is None:
            self._platform = detect(self.ctx)
        return self._platform

    @property
    def brew(self) -> Brew:
        return Brew(self.shell)

    @property
    def apt(self) -> Apt:
        return Apt(self.shell)

    @property
    def rpm(self) -> Rpm:
        return Rpm(self.rpm_binary(), self.shell)

    @property
    def choco(self) -> Choco:
        return Choco(self.shell)

    @property
    def winget(self) -> Winget:
        return Winget(self.shell)

    def rpm_binary(self) -> str:
        if self.platform.package_manager in ("dnf", "yum"):
            return self.platform.package_manager
        return "dnf" if self.shell.command_exists("dnf") else "yum"

    def say(self, message: str) -> None:
        for line in message.splitlines() or [""]:
            self.on_progress(line)

    def report(
        self,
        status: InstallStatus,
        message: str,
        version: str | None = None,
    ) -> InstallReport:
        self.say(message)
        return InstallReport(
            tool=self.name,
            platform=self.platform.type.value,
            status=status,
            message=message,
            version=version,
        )

    def already_installed(self, how: str = "") -> InstallReport:
        version = self.get_version()
        suffix = f" {how}" if how else ""
        return self.report(
            InstallStatus.ALREADY_INSTALLED,
            f"{self.title} is already installed{suffix}, skipping...",
            version,
        )

    def unsupported(self) -> InstallReport:
        return self.report(
            InstallStatus.UNSUPPORTED,
            f"{self.title} is not available for {self.platform.type.value}.",
        )

    def failed(self, via: str, output: str, hint: str = "") -> InstallReport:
        message = f"Failed to install {self.title} via {via}.\n{output.strip()}"
        if hint:
            message += f"\n\n{hint}"
        return self.report(InstallStatus.INSTALL_FAILED, message)

    def finish(self, verified: bool, via: str, what: str | None = None) -> InstallReport:
        """Post-install verification step shared by every handler."""
        if not verified:
            what = what or f"{self.command} command"
            return self.report(
                InstallStatus.UNVERIFIED,
                f"Installation may have failed: {what} not found after install.",
            )
        return self.report(
            InstallStatus.INSTALLED,
            f"{self.title} installed successfully via {via}.",
            self.get_version(),
        )

    # ── Public API ──────────────────────────────────────────────

    def install(self, ctx: PlatformContext | None = None) -> InstallReport:
        """Dispatch to the handler for the detected platform. Never raises."""
        if ctx is not None:
            self.ctx = ctx
        self._platform = detect(self.ctx)
        handler_name = self.handlers.get(self.platform.type)
        handler = getattr(self, handler_name, None) if handler_name else None
        if handler is None:
            return self.unsupported()

        logger.debug("%s: dispatching to %s", self.name, handler_name)
        try:
            return handler()
        except RepositorySetupError as e:
            return self.report(InstallStatus.REPOSITORY_SETUP_FAILED, str(e))

    def is_installed(self) -> bool:
        """Whether the tool is present on this machine."""
        if self.platform.type is PlatformType.MACOS and self.macos_app:
            return self.shell.path_exists(self.macos_app)
        return bool(self.command) and self.shell.command_exists(self.command)

    def is_eligible(self) -> bool:
        """Supported here, and a desktop is available if the tool needs one."""
        platform = detect(self.ctx)
        if platform.type not in self.platforms:
            return False
        if platform.type not in self.handlers:
            return False
        if self.requires_desktop:
            return is_desktop_available(self.ctx, platform)
        return True

    def get_version(self) -> str | None:
        tool = self.version_tool or self.command
        return get_tool_version(tool, self.shell) if tool else None

    # ── Generic handlers ────────────────────────────────────────

    def install_macos(self) -> InstallReport:
        package = self.brew_cask or self.brew_formula
        if not package:
            return self.unsupported()
        brew = self.brew
        if not brew.is_available():
            return self.report(InstallStatus.PREREQUISITE_MISSING, HOMEBREW_MISSING)

        if self._macos_present(brew, package):
            return self.already_installed("via Homebrew" if self.brew_probe_formula else "")

        self.say(f"Installing {self.title} via Homebrew...")
        if self.brew_cask:
            result = brew.install_cask(package)
        else:
            result = brew.install(package)
        if not result.success:
            return self.failed("Homebrew", result.output)
        what = f"{self.title} formula" if self.brew_probe_formula else None
        if self.brew_cask:
            what = f"{self.title} application"
        return self.finish(self._macos_present(brew, package), "Homebrew", what)

    def _macos_present(self, brew: Brew, package: str) -> bool:
        if self.brew_cask:
            return self.is_installed() or brew.is_cask_installed(package)
        if self.brew_probe_formula:
            return brew.is_formula_installed(package)
        return self.is_installed()

    def install_ubuntu(self) -> InstallReport:
        if not self.apt_packages:
            return self.unsupported()
        if self.is_installed():
            return self.already_installed()

        apt = self.apt
        self.say("Updating package lists...")
        if not apt.update().success:
            self.say("Warning: Failed to update package lists. Continuing with installation...")

        self.say(f"Installing {self.title} via APT...")
        result = apt.install(" ".join(self.apt_packages))
        if not result.success:
            return self.failed("APT", result.output)
        return self.finish(self.is_installed(), "APT")

    def install_ubuntu_wsl(self) -> InstallReport:
        return self.install_ubuntu()

    def install_raspbian(self) -> InstallReport:
        return self.install_ubuntu()

    def install_amazon_linux(self) -> InstallReport:
        if not self.rpm_packages:
            return self.unsupported()
        if self.is_installed():
            return self.already_installed()

        rpm = self.rpm
        self.say(f"Installing {self.title} via {rpm.name}...")
        result = rpm.install(" ".join(self.rpm_packages))
        if not result.success:
            return self.failed(rpm.name, result.output)
        return self.finish(self.is_installed(), rpm.name)

    def install_windows(self) -> InstallReport:
        if self.winget_id and self.winget.is_available():
            return self._install_winget()
        return self._install_choco()

    def _install_choco(self) -> InstallReport:
        if not self.choco_package:
            return self.unsupported()

        choco = self.choco
        if not choco.is_available():
            return self.report(InstallStatus.PREREQUISITE_MISSING, CHOCOLATEY_MISSING)
        if choco.is_package_installed(self.choco_package):
            return self.already_installed("via Chocolatey")

        self.say(f"Installing {self.title} via Chocolatey...")
        result = choco.install(self.choco_package)
        if not result.success:
            return self.failed("Chocolatey", result.output)
        report = self.finish(
            choco.is_package_installed(self.choco_package),
            "Chocolatey",
            f"{self.title} package",
        )
        if report.status is InstallStatus.INSTALLED:
            self.say("Note: Close and reopen your terminal for PATH changes to take effect.")
        return report

    def _install_winget(self) -> InstallReport:
        winget = self.winget
        if winget.is_package_installed(self.winget_id):
            return self.already_installed("via winget")
        self.say(f"Installing {self.title} via winget...")
        result = winget.install(self.winget_id)
        if not result.success:
            return self.failed("winget", result.output)
        return self.finish(
            winget.is_package_installed(self.winget_id), "winget", f"{self.title} package",
        )

    def install_gitbash(self) -> InstallReport:
        """Git Bash reaches Chocolatey on the Windows host through PowerShell."""
        if not self.choco_package:
            return self.unsupported()
        if self.is_installed():
            return self.already_installed()

        self.say(f"Installing {self.title} via Chocolatey (PowerShell)...")
        result = self.shell.exec(
            f'powershell.exe -NoProfile -Command "choco install {self.choco_package} -y"'
        )
        if not result.ok:
            return self.failed("Chocolatey", result.output)
        report = self.finish(self.is_installed(), "Chocolatey")
        if report.status is InstallStatus.UNVERIFIED:
            self.say("Restart Git Bash so the updated PATH is picked up.")
        return report
