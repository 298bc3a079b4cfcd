"""
Status use case — profile, environment, git and tool overview.
"""

from __future__ import annotations

import os
import platform as _platform
from dataclasses import dataclass, field
from pathlib import Path

from devutils.adapters.shell.command import Shell, get_shell
from devutils.core.config.loader import config_path, load_config
from devutils.core.models.platform import PlatformContext, PlatformDescriptor
from devutils.core.models.profile import DevutilsConfig
from devutils.core.services.platform_detect import detect
from devutils.core.services.version_check import check_for_update

STATUS_TOOLS: tuple[tuple[str, str], ...] = (
    ("git", "Git"),
    ("docker", "Docker"),
    ("code", "VS Code"),
    ("brew", "Homebrew"),
    ("choco", "Chocolatey"),
    ("winget", "winget"),
)


@dataclass
class StatusResult:
    """Aggregated machine status."""

    config_file: Path
    config: DevutilsConfig | None = None
    platform: PlatformDescriptor = field(default_factory=PlatformDescriptor)
    python_version: str = ""
    cwd: str = ""
    git_root: str | None = None
    git_branch: str | None = None
    tools: dict[str, bool] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    update: dict | None = None

    def to_dict(self) -> dict:
        return {
            "config": {
                "file": str(self.config_file),
                "valid": self.config is not None,
                "user": self.config.user.model_dump(mode="json") if self.config else None,
                "created": self.config.created if self.config else None,
                "updated": self.config.updated if self.config else None,
            },
            "environment": {
                "platform": self.platform.to_dict(),
                "python": self.python_version,
                "cwd": self.cwd,
            },
            "git": {"root": self.git_root, "branch": self.git_branch},
            "tools": self.tools,
            "warnings": self.warnings,
            "update": self.update,
        }


def get_status(
    shell: Shell | None = None,
    ctx: PlatformContext | None = None,
    check_updates: bool = True,
) -> StatusResult:
    shell = shell or get_shell()
    result = StatusResult(config_file=config_path())

    result.config = load_config(result.config_file)
    if result.config is None:
        result.warnings.append("Configuration file not found. Run 'dev configure' to create it.")

    result.platform = detect(ctx)
    result.python_version = _platform.python_version()
    result.cwd = os.getcwd()

    result.git_root = shell.exec_sync("git rev-parse --show-toplevel") or None
    if result.git_root:
        result.git_branch = shell.exec_sync("git branch --show-current") or None

    result.tools = {label: shell.command_exists(cmd) for cmd, label in STATUS_TOOLS}

    if check_updates:
        result.update = check_for_update()
        if result.update["update_available"]:
            result.warnings.append(
                f"Update available: {result.update['current']} -> {result.update['latest']}"
            )
    return result
