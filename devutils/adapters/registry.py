"""
Package manager registry — lookup of adapters by name.

``package_ops`` never instantiates adapters directly; it asks the
registry, which binds every adapter to the same ``Shell``.
"""

from __future__ import annotations

import logging

from devutils.adapters.base import PackageManager
from devutils.adapters.packages.apt import Apt
from devutils.adapters.packages.brew import Brew
from devutils.adapters.packages.choco import Choco
from devutils.adapters.packages.language import Npm, Pip
from devutils.adapters.packages.rpm import Rpm
from devutils.adapters.packages.snap import Snap
from devutils.adapters.packages.winget import Winget
from devutils.adapters.shell.command import Shell, get_shell

logger = logging.getLogger(__name__)


class PackageManagerRegistry:
    """Name → adapter map bound to one shell."""

    def __init__(self, shell: Shell | None = None):
        self.shell = shell or get_shell()
        self._managers: dict[str, PackageManager] = {}
        for manager in (
            Brew(self.shell),
            Apt(self.shell),
            Snap(self.shell),
            Rpm("dnf", self.shell),
            Rpm("yum", self.shell),
            Choco(self.shell),
            Winget(self.shell),
            Npm(self.shell),
            Pip(self.shell),
        ):
            self.register(manager)

    def register(self, manager: PackageManager) -> None:
        if manager.name in self._managers:
            logger.warning("Overwriting existing package manager: %s", manager.name)
        self._managers[manager.name] = manager

    def get(self, name: str) -> PackageManager | None:
        """Look up an adapter by name (``pip3`` is an alias of ``pip``)."""
        if name == "pip3":
            name = "pip"
        return self._managers.get(name)
