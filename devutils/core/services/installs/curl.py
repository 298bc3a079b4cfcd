"""
curl installer.
"""

from __future__ import annotations

from devutils.core.services.installs.base import Installer


class CurlInstaller(Installer):
    name = "curl"
    title = "curl"
    command = "curl"
    description = "Command-line HTTP client"

    brew_formula = "curl"
    brew_probe_formula = True
    apt_packages = ("curl",)
    rpm_packages = ("curl",)
    choco_package = "curl"
