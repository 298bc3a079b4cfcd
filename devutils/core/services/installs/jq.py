"""
jq installer.
"""

from __future__ import annotations

from devutils.core.services.installs.base import Installer


class JqInstaller(Installer):
    name = "jq"
    title = "jq"
    command = "jq"
    description = "Command-line JSON processor"

    brew_formula = "jq"
    apt_packages = ("jq",)
    rpm_packages = ("jq",)
    choco_package = "jq"
