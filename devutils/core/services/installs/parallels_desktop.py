"""
Parallels Desktop installer — macOS only (Homebrew cask).
"""

from __future__ import annotations

from devutils.core.models.platform import PlatformType
from devutils.core.services.installs.base import Dependency, Installer


class ParallelsDesktopInstaller(Installer):
    name = "parallels-desktop"
    title = "Parallels Desktop"
    command = "prlctl"
    description = "Virtual machines for macOS"
    platforms = frozenset({PlatformType.MACOS})
    handlers = {PlatformType.MACOS: "install_macos"}
    requires_desktop = True
    depends_on = (Dependency("homebrew", priority=0),)

    brew_cask = "parallels"
    macos_app = "/Applications/Parallels Desktop.app"
