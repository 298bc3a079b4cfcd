"""
Package manager base — the contract every package-manager adapter meets.

Adapters build the command line for their tool and run it through a
``Shell``.  They NEVER raise; failures come back in a ``PackageResult``.

To add a package manager:
    1. Subclass PackageManager
    2. Set ``name`` / ``binary``; implement the command builders
    3. Register it in ``devutils.adapters.registry``
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from devutils.adapters.shell.command import Shell, get_shell
from devutils.core.models.result import PackageResult

logger = logging.getLogger(__name__)


class PackageManager(ABC):
    """Abstract base class for package-manager adapters."""

    name: str = ""
    binary: str = ""
    # Exit codes that mean success for ``update``.
    update_ok_codes: tuple[int, ...] = (0,)

    def __init__(self, shell: Shell | None = None):
        self.shell = shell or get_shell()

    def is_available(self) -> bool:
        """Whether the manager's binary is on PATH. Never raises."""
        return self.shell.command_exists(self.binary)

    @abstractmethod
    def install_command(self, package: str, **options) -> str:
        """Command line that installs ``package``."""

    def uninstall_command(self, package: str, **options) -> str | None:
        """Command line that removes ``package`` (None when unsupported)."""
        return None

    def update_command(self) -> str | None:
        """Command line that refreshes package metadata (None when unsupported)."""
        return None

    # ── Operations ──────────────────────────────────────────────

    def _not_available(self) -> PackageResult:
        return PackageResult(success=False, output=f"{self.name} is not installed")

    def install(self, package: str, **options) -> PackageResult:
        if not self.is_available():
            return self._not_available()
        command = self.install_command(package, **options)
        logger.info("Installing %s via %s", package, self.name)
        return PackageResult.from_shell(self.shell.exec(command))

    def uninstall(self, package: str, **options) -> PackageResult:
        command = self.uninstall_command(package, **options)
        if command is None:
            return PackageResult(success=False, output=f"Uninstall not supported for: {self.name}")
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self.shell.exec(command))

    def update(self) -> PackageResult:
        command = self.update_command()
        if command is None:
            return PackageResult(success=False, output=f"Update not supported for: {self.name}")
        if not self.is_available():
            return self._not_available()
        return PackageResult.from_shell(self.shell.exec(command), ok_codes=self.update_ok_codes)
