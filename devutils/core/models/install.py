"""
Install report — terminal state of one installer invocation.

    NotChecked → AlreadyInstalled
               → PrerequisiteMissing | RepositorySetupFailed | InstallFailed
               → Installed | Unverified
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class InstallStatus(str, Enum):
    ALREADY_INSTALLED = "already_installed"
    INSTALLED = "installed"
    UNVERIFIED = "unverified"
    PREREQUISITE_MISSING = "prerequisite_missing"
    REPOSITORY_SETUP_FAILED = "repository_setup_failed"
    INSTALL_FAILED = "install_failed"
    UNSUPPORTED = "unsupported"


_SUCCESS = frozenset({
    InstallStatus.ALREADY_INSTALLED,
    InstallStatus.INSTALLED,
    InstallStatus.UNVERIFIED,
})


class InstallReport(BaseModel):
    """What happened when an installer ran."""

    tool: str
    platform: str
    status: InstallStatus
    message: str = ""
    version: str | None = None

    @property
    def succeeded(self) -> bool:
        """True for every terminal state that leaves the tool usable (or likely so)."""
        return self.status in _SUCCESS

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
