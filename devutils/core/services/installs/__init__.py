"""
Installer registry — one ``Installer`` subclass per installable tool.

Usage::

    from devutils.core.services.installs import get_installer
    report = get_installer("jq").install()
"""

from __future__ import annotations

from devutils.core.services.installs.base import (
    Dependency,
    Installer,
    ProgressCallback,
    RepositorySetupError,
)
from devutils.core.services.installs.bash import BashInstaller
from devutils.core.services.installs.brave_browser import BraveBrowserInstaller
from devutils.core.services.installs.chocolatey import ChocolateyInstaller
from devutils.core.services.installs.curl import CurlInstaller
from devutils.core.services.installs.git import GitInstaller
from devutils.core.services.installs.gpg import GpgInstaller
from devutils.core.services.installs.homebrew import HomebrewInstaller
from devutils.core.services.installs.jq import JqInstaller
from devutils.core.services.installs.node import NodeInstaller
from devutils.core.services.installs.openssh import OpensshInstaller
from devutils.core.services.installs.parallels_desktop import ParallelsDesktopInstaller
from devutils.core.services.installs.tmux import TmuxInstaller
from devutils.core.services.installs.xcode_clt import XcodeCltInstaller
from devutils.core.services.installs.zsh import ZshInstaller

INSTALLERS: dict[str, type[Installer]] = {
    cls.name: cls
    for cls in (
        BashInstaller,
        BraveBrowserInstaller,
        ChocolateyInstaller,
        CurlInstaller,
        GitInstaller,
        GpgInstaller,
        HomebrewInstaller,
        JqInstaller,
        NodeInstaller,
        OpensshInstaller,
        ParallelsDesktopInstaller,
        TmuxInstaller,
        XcodeCltInstaller,
        ZshInstaller,
    )
}


def get_installer(name: str, **kwargs) -> Installer | None:
    """Instantiate the installer registered under ``name`` (None if unknown).

    Keyword arguments (``shell``, ``ctx``, ``on_progress``) are passed
    through to the installer.
    """
    cls = INSTALLERS.get(name.strip().lower())
    return cls(**kwargs) if cls else None


def list_installers() -> list[str]:
    """Registered installer names, sorted."""
    return sorted(INSTALLERS)


__all__ = [
    "Dependency",
    "INSTALLERS",
    "Installer",
    "ProgressCallback",
    "RepositorySetupError",
    "get_installer",
    "list_installers",
]
