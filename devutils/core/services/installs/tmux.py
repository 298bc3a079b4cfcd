"""
tmux installer — Unix-like platforms only.
"""

from __future__ import annotations

from devutils.core.models.platform import ALL_PLATFORMS, WINDOWS_FAMILY
from devutils.core.services.installs.base import Installer


class TmuxInstaller(Installer):
    name = "tmux"
    title = "tmux"
    command = "tmux"
    description = "Terminal multiplexer"
    platforms = ALL_PLATFORMS - WINDOWS_FAMILY

    brew_formula = "tmux"
    apt_packages = ("tmux",)
    rpm_packages = ("tmux",)
