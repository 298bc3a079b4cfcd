"""
Setup use case — make sure the essential tools are present.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from devutils.adapters.shell.command import Shell, get_shell
from devutils.core.models.install import InstallReport
from devutils.core.models.platform import PlatformContext
from devutils.core.services.installs import ProgressCallback, get_installer


@dataclass(frozen=True)
class EssentialTool:
    name: str
    command: str
    description: str
    installer: str


ESSENTIAL_TOOLS: tuple[EssentialTool, ...] = (
    EssentialTool("git", "git", "Version control system", "git"),
    EssentialTool("ssh-keygen", "ssh-keygen", "SSH key generation", "openssh"),
    EssentialTool("gpg", "gpg", "GPG encryption and signing", "gpg"),
    EssentialTool("curl", "curl", "Data transfer tool", "curl"),
)


@dataclass
class ToolStatus:
    tool: EssentialTool
    installed: bool

    def to_dict(self) -> dict:
        return {
            "name": self.tool.name,
            "command": self.tool.command,
            "description": self.tool.description,
            "installed": self.installed,
        }


@dataclass
class SetupResult:
    reports: list[InstallReport] = field(default_factory=list)

    @property
    def installed(self) -> int:
        return sum(1 for r in self.reports if r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.reports if not r.succeeded)

    @property
    def summary(self) -> str:
        return f"Setup complete: {self.installed} installed, {self.failed} failed."


def tool_statuses(shell: Shell | None = None) -> list[ToolStatus]:
    shell = shell or get_shell()
    return [ToolStatus(tool, shell.command_exists(tool.command)) for tool in ESSENTIAL_TOOLS]


def missing_tools(shell: Shell | None = None) -> list[EssentialTool]:
    return [s.tool for s in tool_statuses(shell) if not s.installed]


def install_missing(
    tools: list[EssentialTool],
    shell: Shell | None = None,
    ctx: PlatformContext | None = None,
    on_progress: ProgressCallback | None = None,
) -> SetupResult:
    """Run the installer behind each tool, in order; never raises."""
    result = SetupResult()
    for tool in tools:
        installer = get_installer(tool.installer, shell=shell, ctx=ctx, on_progress=on_progress)
        result.reports.append(installer.install())
    return result
